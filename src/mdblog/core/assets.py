"""Image asset relocation: copy referenced images next to the generated pages"""

import logging
import shutil
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from mdblog.core.models import AssetRequest


logger = logging.getLogger(__name__)


def resolve_target(ref: str, source_dir: Path, output_dir: Path) -> Optional[tuple[Path, Path]]:
    """Return (source, destination) for a relative image reference.

    The destination mirrors the reference under output_dir so the emitted
    src attribute still resolves. References escaping either root return None.
    """
    rel = Path(ref)
    if rel.is_absolute() or ".." in rel.parts:
        return None
    return source_dir / rel, output_dir / rel


def copy_asset(request: AssetRequest, source_dir: Path, output_dir: Path) -> Optional[Path]:
    """Copy one asset synchronously. Returns the destination, or None if the path is unsafe."""
    target = resolve_target(request.source, source_dir, output_dir)
    if target is None:
        logger.warning("Refusing to copy asset outside the content tree: %s", request.source)
        return None
    src, dest = target
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)
    return dest


class AssetCopier:
    """Fire-and-forget asset copies on a small thread pool.

    submit() never blocks and never raises; failures are logged when the copy
    finishes. Call wait() (or use as a context manager) before exiting.
    """

    def __init__(self, output_dir: Path, max_workers: int = 4):
        self.output_dir = output_dir
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="mdblog-asset")
        self._futures: list[Future] = []
        self.copied = 0

    def submit(self, request: AssetRequest, source_dir: Path, output_dir: Optional[Path] = None) -> Future:
        """Queue a copy into output_dir, defaulting to the copier's root."""
        future = self._pool.submit(copy_asset, request, source_dir, output_dir or self.output_dir)
        future.add_done_callback(lambda f, ref=request.source: self._report(f, ref))
        self._futures.append(future)
        return future

    @staticmethod
    def _report(future: Future, ref: str) -> None:
        if (err := future.exception()) is not None:
            logger.warning("Failed to copy asset %s: %s", ref, err)

    def wait(self) -> int:
        """Block until all submitted copies finish. Returns the number of assets copied."""
        self._pool.shutdown(wait=True)
        self.copied = sum(1 for f in self._futures if f.exception() is None and f.result() is not None)
        return self.copied

    def __enter__(self) -> "AssetCopier":
        return self

    def __exit__(self, *exc) -> None:
        self.wait()
