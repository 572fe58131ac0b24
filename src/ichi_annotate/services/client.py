"""HTTP client for the ichi.moe analysis service."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from ..config import ServiceConfig

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when the analysis service cannot be reached or answers non-200."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class IchiMoeClient:
    """Fetch analysis pages for a piece of Japanese text."""

    def __init__(self, config: ServiceConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or ServiceConfig()
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.config.base_url.rstrip("/") + "/" + self.config.path.lstrip("/")

    def fetch(self, text: str) -> str:
        try:
            response = self._session.get(
                self.url,
                params={"q": text},
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", self.url, exc)
            raise FetchError(f"Failed to fetch analysis from ichi.moe: {exc}") from exc
        if response.status_code != 200:
            logger.error("Non-200 response from %s: %s", self.url, response.status_code)
            raise FetchError(
                f"Failed to fetch analysis from ichi.moe: HTTP {response.status_code}",
                status=response.status_code,
            )
        return response.text


__all__ = ["FetchError", "IchiMoeClient"]
