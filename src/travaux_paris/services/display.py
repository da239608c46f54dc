# src/travaux_paris/services/display.py

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional

from travaux_paris.models.record import GeoPoint, RawRecord

# =========================
# Couleurs par secteur
# =========================

SECTOR_COLORS: Mapping[str, str] = MappingProxyType({
    "Petite Enfance": "#f472b6",
    "Éducation": "#60a5fa",
    "Sports": "#34d399",
    "Patrimoine": "#fbbf24",
    "Logement": "#a78bfa",
    "Propreté": "#fb923c",
    "Environnement": "#4ade80",
    "Culture": "#f87171",
})

DEFAULT_COLOR = "#6366f1"


def get_color(sector: Optional[str]) -> str:
    if not sector:
        return DEFAULT_COLOR
    return SECTOR_COLORS.get(sector, DEFAULT_COLOR)


# =========================
# Image satellite
# =========================

SATELLITE_EXPORT_URL = (
    "https://server.arcgisonline.com/ArcGIS/rest/services/"
    "World_Imagery/MapServer/export"
)
SATELLITE_SIZE = (400, 280)

# Demi-largeur / demi-hauteur de l'emprise autour du point (degrés)
LON_DELTA = 0.001
LAT_DELTA = 0.00075


def get_satellite_url(record: RawRecord) -> Optional[str]:
    """
    Construit l'URL d'une vignette satellite centrée sur 'geo_point_2d'.

    Retourne None si le point est absent ou incomplet.
    """
    point = GeoPoint.from_record(record)
    if point is None:
        return None

    xmin = point.lon - LON_DELTA
    xmax = point.lon + LON_DELTA
    ymin = point.lat - LAT_DELTA
    ymax = point.lat + LAT_DELTA
    width, height = SATELLITE_SIZE

    return (
        f"{SATELLITE_EXPORT_URL}?bbox={xmin},{ymin},{xmax},{ymax}"
        f"&bboxSR=4326&size={width},{height}&f=image"
    )


# =========================
# Budget
# =========================

BUDGET_PLACEHOLDER = "—"
CURRENCY_SUFFIX = " €"

# Séparateur de milliers du format fr-FR (espace fine insécable)
THOUSANDS_SEPARATOR = "\u202f"

_LEADING_INT_RE = re.compile(r"[+-]?[0-9]+")


def format_budget(record: RawRecord) -> str:
    """
    '1 200 000' -> '1 200 000 €' (séparateur fr-FR).

    Seul l'entier en tête est gardé : '1 200 000 €' -> 1200000,
    '1200,50' -> 1200. Budget absent ou sans chiffre en tête -> '—'.
    """
    budget = record.get("budget")
    if budget is None or budget == "":
        return BUDGET_PLACEHOLDER

    compact = "".join(str(budget).split())
    m = _LEADING_INT_RE.match(compact)
    if not m:
        return BUDGET_PLACEHOLDER

    num = int(m.group(0))
    return f"{num:,}".replace(",", THOUSANDS_SEPARATOR) + CURRENCY_SUFFIX
