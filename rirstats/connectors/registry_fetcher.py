"""
rirstats/connectors/registry_fetcher.py

Downloads delegated-stats files over HTTP with retry and rate limiting.
"""

from __future__ import annotations

import logging
import time

import requests

from rirstats.config import RegistryHTTPSettings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class RegistryFetchError(RuntimeError):
    """
    Raised when a delegated-stats file cannot be downloaded after retries.
    """


class RegistryFetcher:
    """
    Fetches the raw bytes of a published delegated-stats file.
    """

    def __init__(
        self,
        *,
        http_settings: RegistryHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._max_retries = http_settings.max_retries
        self._backoff_initial_seconds = http_settings.backoff_initial_seconds
        self._backoff_multiplier = http_settings.backoff_multiplier
        self._min_request_interval_seconds = (
            1.0 / http_settings.rate_limit_per_second if http_settings.rate_limit_per_second > 0 else 0.0
        )
        self._last_request_monotonic: float = 0.0

    def fetch(self, url: str) -> bytes:
        """
        Download ``url`` and return the response body.
        """

        logger.info("Downloading delegated-stats file url=%s", url)
        response = self._request(url)
        data = response.content
        logger.info("Download complete url=%s bytes=%d", url, len(data))
        return data

    def _request(self, url: str) -> requests.Response:
        """
        GET with rate limiting and exponential backoff on transient failures.
        """

        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            self._apply_rate_limit()
            try:
                response = self._session.get(url, timeout=self._timeout_seconds)
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except requests.HTTPError as exc:
                last_error = exc
                status_code = exc.response.status_code if exc.response is not None else None
                if status_code not in RETRYABLE_STATUS_CODES:
                    logger.error(
                        "Registry download failed status=%s url=%s error=%s",
                        status_code,
                        url,
                        exc,
                    )
                    raise RegistryFetchError(f"Non-retryable download failure for {url}.") from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc

            if attempt >= self._max_retries:
                break

            backoff_seconds = self._backoff_initial_seconds * (self._backoff_multiplier**attempt)
            logger.warning(
                "Registry download retry attempt=%s/%s wait_seconds=%.2f url=%s",
                attempt + 1,
                self._max_retries,
                backoff_seconds,
                url,
            )
            time.sleep(backoff_seconds)

        logger.error("Registry download exhausted retries url=%s error=%s", url, last_error)
        raise RegistryFetchError(f"Download of {url} failed after retries.") from last_error

    def _apply_rate_limit(self) -> None:
        """
        Enforce minimum interval between outbound requests.
        """

        if self._min_request_interval_seconds <= 0:
            return

        now = time.monotonic()
        elapsed = now - self._last_request_monotonic
        remaining = self._min_request_interval_seconds - elapsed
        if remaining > 0:
            time.sleep(remaining)
        self._last_request_monotonic = time.monotonic()
