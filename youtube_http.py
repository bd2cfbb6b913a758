"""
HTTP fetch of YouTube HTML pages.

The fetcher owns one ``requests.Session`` configured like a desktop Chrome
client with the consent cookie set, so pages render directly instead of
the "Before you continue" wall. Transport errors are retried with
tenacity; 429/5xx statuses are retried by the urllib3 adapter. Anything
that still is not a 200 surfaces as `UpstreamError`.
"""

import time
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter
from urllib3.util.retry import Retry

from error_handler import UpstreamError
from log_events import evt
from logging_setup import get_logger
from scraper_config import ScraperConfig, get_scraper_config

logger = get_logger(__name__)

FETCH_BACKOFF_MIN = 0.5
FETCH_BACKOFF_MAX = 2.0

_TRANSIENT_ERRORS = (requests.exceptions.ConnectionError, requests.exceptions.Timeout)


def _create_session(config: ScraperConfig) -> requests.Session:
    """Create an HTTP session for YouTube page requests."""
    session = requests.Session()
    retry_strategy = Retry(
        total=config.fetch_retries,
        backoff_factor=0.6,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": config.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Cookie": config.consent_cookie,
    })
    return session


def _short_url(url: str) -> str:
    return url.split("?", 1)[0]


class YouTubePageFetcher:
    """Fetches page HTML; one instance per worker thread is recommended."""

    def __init__(self, config: Optional[ScraperConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or get_scraper_config()
        self.session = session or _create_session(self.config)

    def _get(self, url: str, headers: Dict[str, str]) -> requests.Response:
        return self.session.get(url, headers=headers, timeout=self.config.request_timeout)

    def fetch_html(self, url: str, hl: Optional[str] = None) -> str:
        """
        GET ``url`` and return the body as text.

        Raises:
            UpstreamError: on transport failure after retries, or any
                status other than 200.
        """
        hl = hl or self.config.default_hl
        headers = {"Accept-Language": f"{hl},en;q=0.9"}
        retrying = Retrying(
            stop=stop_after_attempt(self.config.fetch_retries + 1),
            wait=wait_exponential_jitter(initial=FETCH_BACKOFF_MIN, max=FETCH_BACKOFF_MAX),
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            before_sleep=lambda s: logger.info(
                f"Request failed, retrying in {s.next_action.sleep:.2f}s...",
                extra={"attempt": s.attempt_number},
            ),
            reraise=True,
        )

        start = time.time()
        try:
            response = retrying(self._get, url, headers)
        except requests.exceptions.RequestException as e:
            evt("page_fetch", outcome="error", url=_short_url(url),
                dur_ms=int((time.time() - start) * 1000), detail=str(e)[:200])
            raise UpstreamError(f"youtube request failed: {e}") from e

        dur_ms = int((time.time() - start) * 1000)
        if response.status_code != 200:
            evt("page_fetch", outcome="bad_status", url=_short_url(url),
                status_code=response.status_code, dur_ms=dur_ms)
            raise UpstreamError(f"youtube returned status {response.status_code}",
                                status_code=response.status_code)

        if not response.encoding:
            response.encoding = "utf-8"
        body = response.text
        evt("page_fetch", outcome="success", url=_short_url(url),
            status_code=response.status_code, dur_ms=dur_ms, bytes=len(body))
        return body

    def close(self) -> None:
        self.session.close()
