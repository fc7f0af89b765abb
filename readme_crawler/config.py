"""
Configuration constants for the README crawler.
"""

import os
import re

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
# The seed can also be supplied via the README_CRAWLER_SEED env var
DEFAULT_SEED = os.environ.get("README_CRAWLER_SEED", "avelino/awesome-go")
DEFAULT_BRANCH = os.environ.get("README_CRAWLER_BRANCH", "main")
DEFAULT_OUTPUT = "downloads"
DEFAULT_MAX_DEPTH = 0          # 0 = unlimited
DEFAULT_IMAGE_CONCURRENCY = 8

# Limits for auto-concurrency calculation
_MIN_WORKERS = 2
_MAX_WORKERS = 32
_RAM_PER_WORKER_MB = 64        # estimated RSS per worker thread


def auto_concurrency() -> int:
    """Calculate the number of concurrent README fetchers from the
    available CPU cores and system RAM.

    Heuristic:
      * Start with ``cpu_count * 2`` (I/O-bound workload).
      * Cap by available RAM (``free_mb / _RAM_PER_WORKER_MB``).
      * Clamp between ``_MIN_WORKERS`` and ``_MAX_WORKERS``.
    """
    cpus = os.cpu_count() or 2
    workers = cpus * 2

    try:
        with open("/proc/meminfo") as f:
            for line in f:
                if line.startswith("MemAvailable:"):
                    mem_kb = int(line.split()[1])
                    ram_cap = max(1, (mem_kb // 1024) // _RAM_PER_WORKER_MB)
                    workers = min(workers, ram_cap)
                    break
    except (OSError, ValueError):
        pass

    return max(_MIN_WORKERS, min(workers, _MAX_WORKERS))


# ---------------------------------------------------------------------------
# Network tuning
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT = 30           # seconds per HTTP request
MAX_RETRIES = 3                # urllib3 retries on 5xx responses only
RETRY_BACKOFF = 0.5
RETRY_STATUS_CODES = [500, 502, 503, 504]
USER_AGENT = "readme-crawler/1.0 (+https://github.com)"

README_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/{owner}/{name}/{branch}/README.md"
)

# ---------------------------------------------------------------------------
# Discovery policy
# ---------------------------------------------------------------------------

# <host>/<owner>/<name> anywhere in a link.  Owner and name stop at the first
# whitespace, "/" or "?" so sub-paths such as /issues are never captured.
GITHUB_REPO_RE = re.compile(
    r"github\.com/([^\s/?]+?)/([^\s/?]+?)(?:[\s/?]|$)",
    re.IGNORECASE,
)

# Substrings marking badge / shield / sponsor images that never make a good
# repository preview.  Matching is case-sensitive.
IMAGE_IGNORE_LIST = (
    "badge.svg",
    "img.shields.io",
    "/badges/",
    "/badge/",
    "/sponsors/",
    "producthunt.com/widgets",
    "status.png",
    "status.svg",
    "circleci.com",
    "awesome.re",
)

# Only these schemes are downloadable image sources
IMAGE_SCHEMES = frozenset({"http", "https"})
