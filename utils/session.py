"""
Thin requests.Session wrapper shared by every remote source.

One GET per call, browser-like User-Agent from fake_useragent, no retries.
Transport failures are raised to the caller unchanged.
"""

import logging
from typing import Dict, Optional

import requests
from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

FALLBACK_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class RequestSession:
    """Blocking HTTP session with a randomised desktop User-Agent."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": UserAgent(fallback=FALLBACK_USER_AGENT).random,
            "Accept-Language": "en-US,en;q=0.9",
        })

    def get(self, url: str, params: Optional[Dict] = None) -> requests.Response:
        """
        Issue a single GET request.

        Raises:
            requests.RequestException: on any connection/transport failure
        """
        logger.debug(f"GET {url} params={params}")
        return self.session.get(url, params=params, timeout=self.timeout)

    def close(self) -> None:
        self.session.close()
