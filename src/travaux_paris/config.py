# src/travaux_paris/config.py

from __future__ import annotations

from dataclasses import dataclass

# Endpoint Opendatasoft (Explore v2.1) du jeu "travaux sur équipements publics"
API_BASE = (
    "https://opendata.paris.fr/api/explore/v2.1/"
    "catalog/datasets/travaux_equipements_publics/records"
)

# Taille de page fixe pour la pagination
LIMIT = 100


@dataclass(frozen=True)
class OpenDataConfig:
    """
    Paramètres d'accès à l'API Open Data Paris.

    - base_url : endpoint "records" du jeu de données
    - page_size : nombre d'enregistrements demandés par page (paramètre 'limit')
    - timeout : timeout HTTP en secondes pour le client par défaut
    """
    base_url: str = API_BASE
    page_size: int = LIMIT
    timeout: int = 10
