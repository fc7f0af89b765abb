"""
HTTP session creation for the README crawler.

Transient 5xx responses are retried by urllib3 with exponential backoff;
every other failure surfaces to the caller on the first attempt.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from readme_crawler.config import (
    MAX_RETRIES,
    RETRY_BACKOFF,
    RETRY_STATUS_CODES,
    USER_AGENT,
)


def build_session(verify_ssl: bool = True, pool_size: int = 20) -> requests.Session:
    """Return a ``requests.Session`` with retry logic and a connection
    pool large enough for *pool_size* concurrent threads."""
    session = requests.Session()
    retry = Retry(
        total=MAX_RETRIES,
        backoff_factor=RETRY_BACKOFF,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(
        max_retries=retry,
        pool_connections=pool_size,
        pool_maxsize=pool_size,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "text/plain,text/markdown,image/*,*/*;q=0.8",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    return session
