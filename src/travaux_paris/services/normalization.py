# src/travaux_paris/services/normalization.py

from __future__ import annotations

import logging
import re
import unicodedata
from typing import List, Optional, Tuple

from travaux_paris.models.record import RawRecord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
#   NORMALISATION TEXTE
# ---------------------------------------------------------

_WHITESPACE_RE = re.compile(r"\s+")


def strip_accents(s: str) -> str:
    return "".join(
        c for c in unicodedata.normalize("NFD", s)
        if unicodedata.category(c) != "Mn"
    )


def clean_text(s: str) -> str:
    """ Minuscules, sans accents, espaces fusionnés. """
    s = strip_accents(s.lower())
    return _WHITESPACE_RE.sub(" ", s).strip()


# ---------------------------------------------------------
#   TYPE DE CONSTRUCTION -> CATÉGORIE
# ---------------------------------------------------------

# L'ordre compte : la première règle qui matche gagne.
# Ex: "rénovation pour l'accessibilité" -> Accessibilité.
CONSTRUCTION_RULES: List[Tuple[re.Pattern[str], str]] = [
    (re.compile(r"accessibilit"), "Accessibilité"),
    (
        re.compile(r"performance.?energe|economie.?d.?energie|confort.?d.?ete|energie"),
        "Performance énergétique",
    ),
    (re.compile(r"isol[ea]|insonori|etancheite|phonique"), "Isolation / Étanchéité"),
    (re.compile(r"vegetali"), "Végétalisation"),
    (re.compile(r"restructur|mise aux normes"), "Restructuration"),
    (re.compile(r"renovation|renovacao"), "Rénovation"),
    (re.compile(r"modernisation"), "Modernisation"),
    (re.compile(r"ravalement|facade"), "Ravalement"),
    (re.compile(r"securis|securite"), "Sécurisation"),
    (re.compile(r"embelliss"), "Embellissement"),
    (re.compile(r"amelioration|reamenagement"), "Amélioration fonctionnelle"),
    (re.compile(r"construction|creation|cretion|pavillon"), "Construction neuve"),
    (re.compile(r"couverture"), "Couverture"),
]

DEFAULT_CONSTRUCTION_GROUP = "Autre"


def normalize_construction(raw: Optional[str]) -> Optional[str]:
    """
    Ramène le texte libre 'type_construction' à une catégorie canonique.

    - None / chaîne vide -> None
    - sinon : libellé de la première règle qui matche, ou 'Autre'
    """
    if not raw:
        return None

    s = clean_text(raw)
    for pattern, label in CONSTRUCTION_RULES:
        if pattern.search(s):
            return label

    return DEFAULT_CONSTRUCTION_GROUP


# ---------------------------------------------------------
#   SERVICE (SLA / SE / SAMO / SLT)
# ---------------------------------------------------------

_EXACT_SERVICES = ("SE", "SAMO", "SLT")

# Tirets collés au préfixe ignorés : "SLA-centre", "SLA-5"
_SLA_RE = re.compile(r"^SLA[\s-]*(.+)$", re.IGNORECASE)
_SLASH_SPACES_RE = re.compile(r"\s*/\s*")
_DIGITS_ONLY_RE = re.compile(r"^[0-9]{3,}$")


def _split_district_digits(digits: str) -> str:
    """
    Découpe une suite de chiffres collés en numéros d'arrondissement.

    On lit deux chiffres à la fois : s'ils forment un nombre entre 10 et 20
    on les prend ensemble, sinon on ne prend qu'un chiffre.
    Ex: "715" -> "7/15", "1112" -> "11/12", "345" -> "3/4/5"
    """
    nums: List[int] = []
    i = 0
    while i < len(digits):
        two = int(digits[i:i + 2])
        if i + 1 < len(digits) and 10 <= two <= 20:
            nums.append(two)
            i += 2
        else:
            nums.append(int(digits[i]))
            i += 1
    return "/".join(str(n) for n in nums)


def normalize_service(raw: Optional[str]) -> Optional[str]:
    """
    Normalise le champ 'service'.

    Exemples :
    - "se" -> "SE"
    - "SLA-centre" -> "SLA Centre"
    - "SLA 3 - 4" -> "SLA 3/4"
    - "SLA715" -> "SLA 7/15"
    - tout le reste -> chaîne d'origine sans espaces autour
    """
    if not raw:
        return None

    s = raw.strip()
    for code in _EXACT_SERVICES:
        if s.upper() == code:
            return code

    m = _SLA_RE.match(s)
    if not m:
        return s

    rest = m.group(1).strip().replace("-", "/")
    if rest.lower() == "centre":
        return "SLA Centre"

    rest = _SLASH_SPACES_RE.sub("/", rest)
    if _DIGITS_ONLY_RE.match(rest):
        rest = _split_district_digits(rest)

    return f"SLA {rest}"


# ---------------------------------------------------------
#   CODE POSTAL -> ARRONDISSEMENT
# ---------------------------------------------------------

def get_arrondissement(record: RawRecord) -> Optional[str]:
    """
    '75101' -> '1er', '75115' -> '15e'.

    Les deux derniers caractères du code postal donnent l'arrondissement ;
    hors de [1, 20] ou non numérique -> None.
    """
    cp = record.get("code_postal")
    if not cp:
        return None

    tail = str(cp)[-2:]
    try:
        num = int(tail)
    except ValueError:
        logger.debug("Code postal non exploitable: %r", cp)
        return None

    if num < 1 or num > 20:
        return None

    return "1er" if num == 1 else f"{num}e"
