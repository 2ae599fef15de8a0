from __future__ import annotations
import logging
from pathlib import Path


log = logging.getLogger(__name__)


class LocalObjectStore:
    """
    Uploaded files on local disk, addressed by public references of the form
    ``<url_prefix>/<key>`` (``/uploads/<key>`` by default).
    """

    def __init__(self, base_dir: str | Path, url_prefix: str = "/uploads"):
        self.base = Path(base_dir).resolve()
        self.base.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")

    def put_bytes(self, *, key: str, data: bytes) -> str:
        path = self.base / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return f"{self.url_prefix}/{key}"

    def resolve_path(self, ref: str) -> Path:
        """
        Resolve a stored reference to a local filesystem path.

        Accepts ``/uploads/<key>`` references and bare keys. References that
        would escape the upload directory are refused.
        """
        key = ref
        if key.startswith(self.url_prefix + "/"):
            key = key[len(self.url_prefix) + 1:]
        path = (self.base / key.lstrip("/")).resolve()
        if path != self.base and self.base not in path.parents:
            raise ValueError(f"Reference outside upload directory: {ref}")
        return path

    def exists(self, ref: str) -> bool:
        try:
            return self.resolve_path(ref).is_file()
        except ValueError:
            return False

    def remove(self, ref: str) -> bool:
        # best effort: a file that cannot be removed is logged, never raised
        try:
            path = self.resolve_path(ref)
            path.unlink(missing_ok=True)
            return True
        except (OSError, ValueError):
            log.warning("storage: could not remove %s", ref, exc_info=True)
            return False

    def remove_many(self, refs: list[str]) -> int:
        return sum(1 for ref in refs if self.remove(ref))
