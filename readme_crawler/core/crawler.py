"""
Concurrent BFS crawler over the repository link graph.

Starting from a seed repository the crawler:

* fetches the README and renders it to HTML
* enqueues every linked repository it has not seen before
* downloads one representative image per repository in the background
* keeps going when individual repositories fail (only the seed is fatal)

The visited set, the FIFO frontier, per-repository states and the run
statistics are guarded by a single condition variable.  A repository is
added to the visited set at enqueue time, so it is fetched at most once per
run no matter how many documents link to it.
"""

import threading
import time
from collections import deque
from pathlib import Path

try:
    from tqdm import tqdm as _tqdm
    _TQDM_AVAILABLE = True
except ImportError:
    _TQDM_AVAILABLE = False

from readme_crawler.config import (
    DEFAULT_IMAGE_CONCURRENCY,
    DEFAULT_MAX_DEPTH,
    DEFAULT_OUTPUT,
    auto_concurrency,
)
from readme_crawler.core.storage import ImageStore
from readme_crawler.errors import CrawlError, NotFoundError
from readme_crawler.extraction import extract_document
from readme_crawler.fetcher import ReadmeFetcher
from readme_crawler.models import CrawlResult, NodeState, RepoRef
from readme_crawler.utils.log import log

# seconds between cancellation checks while waiting for an image slot
_SLOT_POLL = 0.1


class Crawler:
    """
    Recursive README crawler.  ``concurrency`` worker threads fetch
    READMEs; at most ``image_concurrency`` image downloads run at once and
    dispatching past that cap blocks the dispatching worker.
    """

    def __init__(
        self,
        seed: RepoRef,
        output_dir: Path | None = None,
        fetcher: ReadmeFetcher | None = None,
        store: ImageStore | None = None,
        concurrency: int = 0,
        image_concurrency: int = DEFAULT_IMAGE_CONCURRENCY,
        max_depth: int = DEFAULT_MAX_DEPTH,
        show_progress: bool = False,
    ) -> None:
        self.seed = seed
        self.fetcher = fetcher or ReadmeFetcher()
        self.store = store or ImageStore(Path(output_dir or DEFAULT_OUTPUT))
        self.concurrency = concurrency if concurrency > 0 else auto_concurrency()
        self.image_concurrency = max(1, image_concurrency)
        self.max_depth = max_depth
        self.show_progress = show_progress and _TQDM_AVAILABLE

        self._cond = threading.Condition()
        self._stop = threading.Event()
        self._image_slots = threading.Semaphore(self.image_concurrency)

        self._visited: set[RepoRef] = set()
        self._queue: deque[tuple[RepoRef, int]] = deque()  # (repo, depth)
        self._states: dict[RepoRef, NodeState] = {}
        self._fetching = 0
        self._images_pending = 0
        self._started = False
        self._workers: list[threading.Thread] = []
        self._bar = None
        self._result = CrawlResult(seed=seed)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> CrawlResult:
        """Crawl until the frontier is exhausted or :meth:`cancel` is called.

        Raises the seed's ``CrawlError`` if the seed README cannot be
        fetched or parsed.  ``KeyboardInterrupt`` cancels the run; in-flight
        work is still drained and the partial result is returned.
        """
        if self._started:
            raise RuntimeError("a Crawler instance can only run once")
        self._started = True

        log.info("Seed repository  : %s", self.seed)
        log.info("Output directory : %s", self.store.output_dir.resolve())
        log.info("Workers          : %d fetch / %d image",
                 self.concurrency, self.image_concurrency)
        if self.max_depth:
            log.info("Max depth        : %d", self.max_depth)

        t0 = time.monotonic()
        if self.show_progress:
            self._bar = _tqdm(desc="Crawling", unit="repo", dynamic_ncols=True)

        try:
            self._enqueue(self.seed, 0)
            try:
                self._crawl_seed()
                self._start_workers()
                self._drain()
            except KeyboardInterrupt:
                log.warning("Interrupted – waiting for in-flight downloads")
                self.cancel()
                self._drain()
        finally:
            if self._bar is not None:
                self._bar.close()
                self._bar = None

        result = self._result
        result.visited = len(self._visited)
        result.cancelled = self._stop.is_set()
        result.elapsed = time.monotonic() - t0
        log.info(
            "[DONE] Crawl %s. visited=%d  extracted=%d  failed=%d  "
            "missing=%d  images=%d  image_err=%d  (%.1f s)",
            "cancelled" if result.cancelled else "complete",
            result.visited,
            len(result.extracted),
            len(result.failed),
            result.missing,
            len(result.images_saved),
            result.image_errors,
            result.elapsed,
        )
        return result

    def cancel(self) -> None:
        """Stop handing out frontier entries.  In-flight fetches and image
        downloads still finish before :meth:`run` returns."""
        self._stop.set()
        with self._cond:
            self._cond.notify_all()

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    def state_of(self, repo: RepoRef) -> NodeState | None:
        with self._cond:
            return self._states.get(repo)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _crawl_seed(self) -> None:
        with self._cond:
            repo, depth = self._queue.popleft()
            self._fetching += 1
            self._states[repo] = NodeState.FETCHING
        try:
            self._process(repo, depth, fatal=True)
        finally:
            with self._cond:
                self._fetching -= 1
                self._cond.notify_all()

    def _start_workers(self) -> None:
        for i in range(self.concurrency):
            t = threading.Thread(target=self._worker, name=f"fetch-{i}", daemon=True)
            self._workers.append(t)
            t.start()

    def _drain(self) -> None:
        """Join the fetch threads, then every image download they started."""
        for t in self._workers:
            t.join()
        self._wait_for_images()

    def _worker(self) -> None:
        while True:
            item = self._next()
            if item is None:
                return
            repo, depth = item
            try:
                self._process(repo, depth)
            finally:
                with self._cond:
                    self._fetching -= 1
                    self._cond.notify_all()

    def _next(self) -> tuple[RepoRef, int] | None:
        """Block until a frontier entry is available.

        Returns ``None`` once the run is cancelled, or when the frontier is
        empty and no other worker is fetching (nothing can be added any more).
        """
        with self._cond:
            while not self._queue and self._fetching and not self._stop.is_set():
                self._cond.wait()
            if self._stop.is_set() or not self._queue:
                self._cond.notify_all()
                return None
            repo, depth = self._queue.popleft()
            self._fetching += 1
            self._states[repo] = NodeState.FETCHING
            return repo, depth

    def _enqueue(self, repo: RepoRef, depth: int) -> bool:
        """Add *repo* to the frontier unless it was ever enqueued before."""
        if self.max_depth and depth > self.max_depth:
            return False
        with self._cond:
            if repo in self._visited:
                return False
            self._visited.add(repo)
            self._queue.append((repo, depth))
            self._states[repo] = NodeState.ENQUEUED
            if self._bar is not None:
                self._bar.total = len(self._visited)
                self._bar.refresh()
            self._cond.notify()
        return True

    def _process(self, repo: RepoRef, depth: int, fatal: bool = False) -> None:
        with self._cond:
            queued = len(self._queue)
        log.info("[REPO] %s  (depth %d, %d queued)", repo, depth, queued)
        try:
            document = self.fetcher.fetch_readme(repo)
            extraction = extract_document(document)
        except NotFoundError as exc:
            log.info("  [MISS] No README for %s", repo)
            self._finish(repo, NodeState.FAILED, exc, missing=True)
            if fatal:
                raise
            return
        except CrawlError as exc:
            log.warning("  [ERR] %s – %s", repo, exc)
            self._finish(repo, NodeState.FAILED, exc)
            if fatal:
                raise
            return
        except Exception as exc:  # pylint: disable=broad-except
            self._finish(repo, NodeState.FAILED, exc)
            if fatal:
                raise
            log.exception("  [ERR] Unexpected error processing %s", repo)
            return

        added = 0
        for child in extraction.repos:
            if self._enqueue(child, depth + 1):
                added += 1
        log.debug("  [QUEUE] %d link(s), +%d new from %s",
                  len(extraction.repos), added, repo)

        self._finish(repo, NodeState.EXTRACTED)

        if extraction.image_url:
            self._dispatch_image(repo, extraction.image_url)

    def _finish(
        self,
        repo: RepoRef,
        state: NodeState,
        exc: Exception | None = None,
        missing: bool = False,
    ) -> None:
        with self._cond:
            self._states[repo] = state
            if state is NodeState.FAILED:
                self._result.failed[repo] = exc
                if missing:
                    self._result.missing += 1
            else:
                self._result.extracted.append(repo)
            if self._bar is not None:
                self._bar.update(1)
                self._bar.set_postfix(
                    queued=len(self._queue),
                    ok=len(self._result.extracted),
                    err=len(self._result.failed),
                )

    # ------------------------------------------------------------------
    # Image downloads
    # ------------------------------------------------------------------

    def _dispatch_image(self, repo: RepoRef, url: str) -> None:
        """Start a detached download of *url*; blocks while
        ``image_concurrency`` downloads are already running."""
        while not self._image_slots.acquire(timeout=_SLOT_POLL):
            if self._stop.is_set():
                log.debug("  [SKIP] Cancelled – not downloading %s", url)
                return
        if self._stop.is_set():
            self._image_slots.release()
            log.debug("  [SKIP] Cancelled – not downloading %s", url)
            return
        with self._cond:
            self._images_pending += 1
        log.debug("  [IMG] %s → %s", repo, url)
        threading.Thread(
            target=self._download_image,
            args=(repo, url),
            name=f"image-{repo}",
            daemon=True,
        ).start()

    def _download_image(self, repo: RepoRef, url: str) -> None:
        try:
            data = self.fetcher.fetch_image(url, repo)
            local = self.store.store(repo, data, url)
        except CrawlError as exc:
            log.warning("  [ERR] Image for %s – %s", repo, exc)
            with self._cond:
                self._result.image_errors += 1
        except Exception:  # pylint: disable=broad-except
            log.exception("  [ERR] Unexpected error downloading %s", url)
            with self._cond:
                self._result.image_errors += 1
        else:
            log.info("  [SAVE] %s", local.name)
            with self._cond:
                self._result.images_saved.append(local)
        finally:
            self._image_slots.release()
            with self._cond:
                self._images_pending -= 1
                self._cond.notify_all()

    def _wait_for_images(self) -> None:
        with self._cond:
            while self._images_pending:
                self._cond.wait()
