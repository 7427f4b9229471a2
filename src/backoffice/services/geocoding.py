"""HTTP client for the Google Geocoding API."""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class GeocodingError(RuntimeError):
    pass


class GeocodingClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 10.0,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
    ) -> None:
        self.api_key = api_key or settings.geocoding_api_key
        if not self.api_key:
            raise ValueError("Geocoding API key is not configured.")
        self.base_url = base_url or settings.geocoding_base_url
        self.max_retries = max_retries if max_retries is not None else settings.geocoding_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.geocoding_backoff_seconds
        self.timeout = timeout

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0))

    def geocode(self, address: str) -> Optional[tuple[float, float]]:
        """Return ``(latitude, longitude)`` for ``address`` or ``None`` when unknown."""

        if not address or not address.strip():
            return None

        params = {"address": address.strip(), "key": self.api_key}
        attempt = 0
        with self._get_client() as client:
            while True:
                try:
                    response = client.get(self.base_url, params=params)
                    response.raise_for_status()
                    break
                except httpx.HTTPError as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise GeocodingError(f"Geocoding request failed for '{address}': {exc}") from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Geocoding retry in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)

        try:
            payload = response.json()
        except ValueError as exc:
            raise GeocodingError(f"Geocoding returned a non-JSON body for '{address}'") from exc
        if not isinstance(payload, dict):
            raise GeocodingError(f"Geocoding returned an unexpected body for '{address}'")

        status = payload.get("status")
        if status == "ZERO_RESULTS":
            return None
        if status != "OK":
            raise GeocodingError(f"Geocoding returned status {status!r} for '{address}'")
        results = payload.get("results") or []
        if not results:
            return None
        try:
            location = results[0]["geometry"]["location"]
            return float(location["lat"]), float(location["lng"])
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise GeocodingError(f"Malformed geocoding result for '{address}'") from exc


def geocode_address(address: str) -> Optional[tuple[float, float]]:
    """Best-effort lookup; returns ``None`` when geocoding is off or fails."""

    if not settings.geocoding_api_key:
        return None
    try:
        return GeocodingClient().geocode(address)
    except GeocodingError as exc:
        logger.warning(f"Geocoding failed, leaving coordinates unset: {exc}")
        return None
