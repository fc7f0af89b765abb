"""
Content-addressed image storage.

Files are named ``<owner>_<name>_<crc32-hex><ext>``.  The same bytes always
map to the same name, so storing an image twice rewrites identical content
and needs no locking.  Two *different* images of one repository sharing a
CRC-32 would overwrite each other; that collision is accepted and not
checked for.

Each file is written to a hidden temporary sibling first and renamed onto
its digest name, so an interrupted write never leaves a partial file under
a name that claims the CRC-32 of the full bytes.
"""

import os
import tempfile
import zlib
from pathlib import Path

from readme_crawler.errors import StorageError
from readme_crawler.models import RepoRef
from readme_crawler.utils.log import log
from readme_crawler.utils.url import url_extension


def content_hash(data: bytes) -> str:
    """Return the CRC-32 (IEEE) of *data* as unpadded lowercase hex."""
    return format(zlib.crc32(data) & 0xFFFFFFFF, "x")


def image_filename(repo: RepoRef, data: bytes, source_url: str) -> str:
    return f"{repo.owner}_{repo.name}_{content_hash(data)}{url_extension(source_url)}"


class ImageStore:
    """Write downloaded images into *output_dir*, one file per digest."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def path_for(self, repo: RepoRef, data: bytes, source_url: str) -> Path:
        return self.output_dir / image_filename(repo, data, source_url)

    def store(self, repo: RepoRef, data: bytes, source_url: str) -> Path:
        """Persist *data* for *repo* and return the file path.

        Raises ``StorageError`` if the directory cannot be created or the
        file cannot be written.
        """
        local = self.path_for(repo, data, source_url)
        tmp_path = None
        try:
            local.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=local.parent, prefix=f".{local.name}.", suffix=".part",
                delete=False,
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(data)
            os.replace(tmp_path, local)
        except OSError as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(
                f"could not write {local}: {exc}", repo=repo, url=source_url
            ) from exc
        log.debug("Saved → %s (%d bytes)", local, len(data))
        return local
