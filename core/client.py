from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

logger = logging.getLogger(__name__)


class DashboardClientError(RuntimeError):
    """Raised when the records API cannot be reached or answers with an error."""


def active_params(state: Mapping[str, object]) -> Dict[str, str]:
    """Drop empty filter values; what is left becomes the query string."""
    out: Dict[str, str] = {}
    for key, value in state.items():
        if value is None:
            continue
        text = str(value).strip()
        if text:
            out[key] = text
    return out


class DashboardClient:
    def __init__(self, base_url: str, *, session: Optional[requests.Session] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise DashboardClientError(f"GET {url} failed: {exc}") from exc

    def fetch_records(self, state: Mapping[str, object]) -> List[Dict[str, Any]]:
        data = self._get(self.base_url, params=active_params(state))
        if not isinstance(data, list):
            raise DashboardClientError(f"expected a list of records, got {type(data).__name__}")
        return data

    def fetch_filter_options(self) -> Dict[str, List[Any]]:
        data = self._get(f"{self.base_url}/filters")
        return data if isinstance(data, dict) else {}
