# scripts/fetch_travaux.py

from __future__ import annotations

import logging
from collections import Counter

from travaux_paris.collectors.opendata_client import OpenDataError, fetch_and_enrich
from travaux_paris.models.record import (
    ARRONDISSEMENT_FIELD,
    CONSTRUCTION_GROUP_FIELD,
    SERVICE_FIELD,
)

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("fetch_travaux")


def _log_breakdown(title: str, counter: Counter) -> None:
    logger.info("=== %s ===", title)
    for label, count in counter.most_common():
        logger.info("%-30s : %d", label if label is not None else "(aucun)", count)


def main() -> None:
    try:
        records = fetch_and_enrich()
    except OpenDataError as exc:
        logger.error("Impossible de récupérer les travaux: %s", exc)
        return

    logger.info("Travaux récupérés et enrichis: %d", len(records))

    _log_breakdown("Catégories", Counter(r[CONSTRUCTION_GROUP_FIELD] for r in records))
    _log_breakdown("Arrondissements", Counter(r[ARRONDISSEMENT_FIELD] for r in records))
    _log_breakdown("Services", Counter(r[SERVICE_FIELD] for r in records))


if __name__ == "__main__":
    main()
