from __future__ import annotations

from typing import Any, Dict, Optional

import requests
import structlog

from holdermap.adapters.rate_limiter import SimpleRateLimiter, backoff_sleep
from holdermap.config import settings
from holdermap.core.errors import DataSourceError, ProviderNotFoundError, RateLimitError

logger = structlog.get_logger(__name__)


class JsonHttpClient:
    """
    GET-only JSON client shared by the provider adapters: request spacing,
    retries with jittered backoff, and a 404 short-circuit.
    """

    provider_name = "http"

    def __init__(
        self,
        base_url: str,
        requests_per_sec: float,
        timeout_sec: int,
        max_retries: int,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_sec
        self._max_retries = max(1, int(max_retries))
        self._rl = SimpleRateLimiter(requests_per_sec)
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": settings.HTTP_USER_AGENT, "Accept": "application/json"})
        if headers:
            self._session.headers.update(headers)

    def _call(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        last_err: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                self._rl.wait()
                resp = self._session.get(url, params=params, timeout=self._timeout)

                if resp.status_code == 404:
                    raise ProviderNotFoundError(f"{self.provider_name}: not found ({url})")
                if resp.status_code == 429:
                    last_err = RateLimitError(f"{self.provider_name}: rate limited")
                    logger.debug("http_rate_limited", provider=self.provider_name, attempt=attempt)
                    backoff_sleep(attempt)
                    continue

                resp.raise_for_status()
                return resp.json()

            except ProviderNotFoundError:
                raise
            except (requests.RequestException, ValueError) as e:
                last_err = e
                logger.debug("http_retry", provider=self.provider_name, attempt=attempt, error=str(e))
                backoff_sleep(attempt)

        if isinstance(last_err, RateLimitError):
            raise last_err
        raise DataSourceError(f"{self.provider_name} failed after retries: {last_err}")
