"""
Pytest configuration and shared fixtures.
"""

from typing import Any, Dict, List

import pytest


class FakePageSource:
    """
    Source de pages en mémoire : renvoie les pages dans l'ordre et garde
    la trace des URLs demandées.
    """

    def __init__(self, pages: List[Dict[str, Any]]):
        self.pages = list(pages)
        self.urls: List[str] = []

    def __call__(self, url: str) -> Dict[str, Any]:
        self.urls.append(url)
        return self.pages.pop(0)


def make_records(count: int, start: int = 0) -> List[Dict[str, Any]]:
    return [{"id": start + i} for i in range(count)]


@pytest.fixture
def page_source_factory():
    """Build a FakePageSource from a list of page bodies."""
    return FakePageSource


@pytest.fixture
def sample_record() -> Dict[str, Any]:
    """A typical raw record from the travaux_equipements_publics dataset."""
    return {
        "nom_equipement": "Ecole maternelle Bidassoa",
        "code_postal": "75020",
        "type_construction": "Rénovation de la toiture et mise en accessibilité",
        "service": "SLA 19-20",
        "secteur": "Éducation",
        "budget": "1 200 000",
        "geo_point_2d": {"lat": 48.8656, "lon": 2.3912},
    }
