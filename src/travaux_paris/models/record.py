# src/travaux_paris/models/record.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Champs dérivés ajoutés par l'enrichissement
ARRONDISSEMENT_FIELD = "_arrondissement"
CONSTRUCTION_GROUP_FIELD = "_constructionGroup"
SERVICE_FIELD = "_service"

DERIVED_FIELDS = (ARRONDISSEMENT_FIELD, CONSTRUCTION_GROUP_FIELD, SERVICE_FIELD)

logger = logging.getLogger(__name__)

RawRecord = Dict[str, Any]


# =======================
# Page de résultats API
# =======================

@dataclass
class PageResult:
    """
    Une page renvoyée par l'endpoint "records" :
    {"total_count": 237, "results": [{...}, {...}]}
    """

    results: List[RawRecord] = field(default_factory=list)
    total_count: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PageResult":
        # 'results' absent ou null -> page vide
        results = data.get("results") or []

        return cls(
            results=list(results),
            total_count=_parse_total_count(data.get("total_count")),
        )

    @property
    def is_empty(self) -> bool:
        return not self.results


def _parse_total_count(value: Any) -> Optional[int]:
    """
    'total_count' absent ou non numérique -> None : la pagination continue
    alors jusqu'à une page vide.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("total_count non numérique ignoré: %r", value)
        return None


# =======================
# Géolocalisation
# =======================

@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float

    @classmethod
    def from_record(cls, record: RawRecord) -> Optional["GeoPoint"]:
        """
        Lit le champ 'geo_point_2d' ({"lat": .., "lon": ..}).

        Retourne None si le champ est absent ou s'il manque une coordonnée.
        """
        geo = record.get("geo_point_2d")
        if not geo:
            return None

        lat = geo.get("lat")
        lon = geo.get("lon")
        if lat is None or lon is None:
            return None

        return cls(lat=lat, lon=lon)
