"""Minimal client for the Urban Institute Education Data API (IPEDS endpoints)."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional

import httpx

from datadesk.ingest.admissions import admissions_from_rows, directory_from_rows
from datadesk.models import AdmissionsRecord, DirectoryRecord


logger = logging.getLogger(__name__)

_BASE_URL_ENV = "DATADESK_EDUCATION_API_URL"
_TIMEOUT_ENV = "DATADESK_HTTP_TIMEOUT"

DEFAULT_BASE_URL = "https://educationdata.urban.org/api/v1"
DEFAULT_TIMEOUT = 30.0

ADMISSIONS_PATH = "/college-university/ipeds/admissions-enrollment/{year}/"
DIRECTORY_PATH = "/college-university/ipeds/directory/{year}/"


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def default_base_url() -> str:
    return os.getenv(_BASE_URL_ENV) or DEFAULT_BASE_URL


class EducationDataClient:
    """Fetch IPEDS result pages; one request per call, no retries or pagination."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url or default_base_url(),
            timeout=timeout if timeout is not None else _env_float(_TIMEOUT_ENV, DEFAULT_TIMEOUT, clamp_min=1.0),
            transport=transport,
        )

    def __enter__(self) -> "EducationDataClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_results(self, path: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        resp = self._client.get(path, params=dict(params or {}))
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            raise ValueError(f"Unexpected payload from {path}: missing 'results' list")
        if payload.get("next"):
            logger.warning(
                "%s returned %s of %s rows; further pages are not fetched",
                path,
                len(payload["results"]),
                payload.get("count"),
            )
        return payload["results"]

    def fetch_admissions(self, year: int, **params: Any) -> List[AdmissionsRecord]:
        rows = self.fetch_results(ADMISSIONS_PATH.format(year=year), params)
        return admissions_from_rows(rows)

    def fetch_directory(self, year: int, **params: Any) -> List[DirectoryRecord]:
        rows = self.fetch_results(DIRECTORY_PATH.format(year=year), params)
        return directory_from_rows(rows)
