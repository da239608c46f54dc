# src/travaux_paris/services/enrichment.py

from __future__ import annotations

import logging
from typing import Iterable, List

from travaux_paris.models.record import (
    ARRONDISSEMENT_FIELD,
    CONSTRUCTION_GROUP_FIELD,
    SERVICE_FIELD,
    RawRecord,
)
from travaux_paris.services.normalization import (
    get_arrondissement,
    normalize_construction,
    normalize_service,
)

logger = logging.getLogger(__name__)


def enrich_record(record: RawRecord) -> RawRecord:
    """
    Retourne une copie de l'enregistrement avec les champs dérivés :
    _arrondissement, _constructionGroup, _service.

    L'enregistrement d'origine n'est pas modifié. Les champs dérivés sont
    toujours recalculés depuis les champs bruts, donc ré-enrichir un
    enregistrement déjà enrichi donne le même résultat.
    """
    enriched = dict(record)
    enriched[ARRONDISSEMENT_FIELD] = get_arrondissement(record)
    enriched[CONSTRUCTION_GROUP_FIELD] = normalize_construction(record.get("type_construction"))
    enriched[SERVICE_FIELD] = normalize_service(record.get("service"))
    return enriched


def enrich_records(records: Iterable[RawRecord]) -> List[RawRecord]:
    """
    Enrichit une liste d'enregistrements en conservant l'ordre.
    """
    enriched = [enrich_record(r) for r in records]

    without_district = sum(1 for r in enriched if r[ARRONDISSEMENT_FIELD] is None)
    logger.info(
        "Enrichissement terminé : %d enregistrements (%d sans arrondissement)",
        len(enriched),
        without_district,
    )
    return enriched
