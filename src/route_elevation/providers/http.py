from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

import requests
from requests.exceptions import ConnectionError, ReadTimeout

log = logging.getLogger(__name__)


@dataclass
class HTTPClient:
    """
    Thin ``requests`` wrapper for JSON web services.

    Timeouts, dropped connections and the listed HTTP statuses are retried
    with exponential backoff (0.8s, 1.6s, 3.2s... by default); anything else
    raises straight away.
    """

    user_agent: str
    timeout_s: int = 20
    tries: int = 4
    backoff_s: float = 0.8
    retry_statuses: FrozenSet[int] = field(default_factory=lambda: frozenset({429, 500, 502, 503, 504}))

    def __post_init__(self) -> None:
        self.s = requests.Session()
        self.s.headers.update({"User-Agent": self.user_agent, "Accept": "application/json"})

    def _sleep(self, attempt: int) -> None:
        if attempt < self.tries - 1:
            time.sleep(self.backoff_s * (2**attempt))

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout_s: Optional[int] = None,
    ) -> Dict[str, Any]:
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        last_err: Optional[Exception] = None

        for attempt in range(max(1, self.tries)):
            try:
                r = self.s.get(url, params=params, timeout=timeout)
            except (ReadTimeout, ConnectionError) as e:
                log.debug("GET %s attempt %d: %s", url, attempt + 1, e)
                last_err = e
                self._sleep(attempt)
                continue

            if r.status_code in self.retry_statuses:
                log.debug("GET %s attempt %d: HTTP %d", url, attempt + 1, r.status_code)
                last_err = requests.HTTPError(f"{r.status_code} for {url}", response=r)
                self._sleep(attempt)
                continue

            r.raise_for_status()
            return r.json()

        raise last_err if last_err else RuntimeError("HTTP get_json failed")
