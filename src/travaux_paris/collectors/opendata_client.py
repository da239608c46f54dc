# src/travaux_paris/collectors/opendata_client.py

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import requests
from requests import Response, Session
from requests.exceptions import RequestException, Timeout

from travaux_paris.config import OpenDataConfig
from travaux_paris.models.record import PageResult, RawRecord
from travaux_paris.services.enrichment import enrich_records

logger = logging.getLogger(__name__)

FetchPage = Callable[[str], Dict[str, Any]]


class OpenDataError(RuntimeError):
    """ Échec réseau, HTTP ou JSON lors d'un appel à l'API Open Data. """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def build_page_url(base_url: str, limit: int, offset: int) -> str:
    """
    Exemple : build_page_url(API_BASE, 100, 200) -> "<API_BASE>?limit=100&offset=200"
    """
    return f"{base_url}?limit={limit}&offset={offset}"


class OpenDataClient:
    """
    Client HTTP minimal pour l'API Open Data Paris (Opendatasoft).

    Aucune relance automatique : une erreur réseau, un statut HTTP en erreur
    ou une réponse non JSON lèvent une OpenDataError.
    """

    def __init__(self, config: Optional[OpenDataConfig] = None) -> None:
        self.config = config or OpenDataConfig()
        self.session: Session = requests.Session()
        self.timeout = self.config.timeout

    def __enter__(self) -> "OpenDataClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def fetch_page(self, url: str) -> Dict[str, Any]:
        """
        GET sur l'URL d'une page, retourne le corps JSON (un objet
        {"total_count": .., "results": [..]}).
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
        except RequestException as exc:
            kind = "Timeout" if isinstance(exc, Timeout) else "Erreur réseau"
            logger.error("%s sur %s: %s", kind, url, exc)
            raise OpenDataError(f"{kind} API Open Data ({url})") from exc

        if not response.ok:
            detail = _error_detail(response)
            logger.error("HTTP %s sur %s: %s", response.status_code, url, detail)
            raise OpenDataError(
                f"Erreur HTTP Open Data {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Corps non JSON sur %s: %s", url, response.text[:200])
            raise OpenDataError(f"Réponse Open Data non JSON ({url})") from exc

        if not isinstance(data, dict):
            logger.error("Corps JSON inattendu sur %s: %s", url, type(data).__name__)
            raise OpenDataError(f"Réponse Open Data non JSON objet ({url})")

        return data


def _error_detail(response: Response) -> str:
    """
    Opendatasoft renvoie ses erreurs sous la forme
    {"error_code": "...", "message": "..."} ; sinon on garde le début du corps.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text[:200]


# =========================
# Pagination
# =========================


def fetch_all_records(
    fetch_page: Optional[FetchPage] = None,
    config: Optional[OpenDataConfig] = None,
) -> List[RawRecord]:
    """
    Parcourt toutes les pages du jeu de données et concatène les 'results'.

    - fetch_page : fonction url -> JSON ; par défaut un OpenDataClient
    - config : endpoint et taille de page

    Arrêt quand une page est vide, ou quand le nombre d'enregistrements
    cumulés atteint le 'total_count' annoncé par la page.
    Les pages sont demandées l'une après l'autre ; une erreur de fetch
    remonte telle quelle à l'appelant (pas de résultat partiel).
    """
    config = config or OpenDataConfig()

    if fetch_page is None:
        with OpenDataClient(config) as client:
            return fetch_all_records(client.fetch_page, config)

    records: List[RawRecord] = []
    offset = 0

    while True:
        url = build_page_url(config.base_url, config.page_size, offset)
        logger.info("Appel API Open Data: offset=%d, limit=%d", offset, config.page_size)

        page = PageResult.from_json(fetch_page(url))
        logger.info("Page reçue: offset=%d, %d enregistrements", offset, len(page.results))
        if page.is_empty:
            logger.info("Plus aucun enregistrement retourné par l'API, arrêt.")
            break

        records.extend(page.results)

        if page.total_count is not None and len(records) >= page.total_count:
            break

        offset += config.page_size

    logger.info("Nombre total d'enregistrements récupérés: %d", len(records))
    return records


def fetch_and_enrich(
    fetch_page: Optional[FetchPage] = None,
    config: Optional[OpenDataConfig] = None,
) -> List[RawRecord]:
    """
    Récupère tout le jeu de données puis ajoute les champs dérivés.
    """
    return enrich_records(fetch_all_records(fetch_page, config))
