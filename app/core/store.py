from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections import defaultdict
from contextlib import AsyncExitStack, asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

from app.core.errors import StorageError
from app.core.ids import utcnow


log = logging.getLogger(__name__)

Record = dict[str, Any]

LISTINGS = "listings"
USERS = "users"
PAYMENTS = "payments"
TRANSACTIONS = "transactions"


class RecordStore:
    """
    Whole-collection persistence for named lists of JSON-like records.

    A collection is the unit of consistency: callers load all of it, modify
    it in memory and save all of it back. Mutations must run inside
    ``locked(...)`` so concurrent read-modify-write cycles on the same
    collection are serialized. Reads need no lock.

    Subclasses implement ``_read`` / ``_write``; the locks live here so any
    backing store gets the same serialization.
    """

    def __init__(self) -> None:
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @asynccontextmanager
    async def locked(self, *collections: str) -> AsyncIterator[None]:
        # fixed acquisition order so multi-collection writers cannot deadlock
        async with AsyncExitStack() as stack:
            for name in sorted(set(collections)):
                await stack.enter_async_context(self._locks[name])
            yield

    async def load(self, collection: str, *, strict: bool = False) -> list[Record]:
        """
        Read a whole collection. Unreadable collections come back empty unless
        ``strict`` is set; mutations load strictly so a failed read is never
        saved back over the existing records.
        """
        try:
            return await asyncio.to_thread(self._read, collection)
        except Exception as e:
            if strict:
                log.exception("store: failed to read collection %s", collection)
                raise StorageError(f"Could not read collection {collection}") from e
            log.exception("store: failed to read collection %s, using empty", collection)
            return []

    async def save(self, collection: str, records: list[Record]) -> None:
        try:
            await asyncio.to_thread(self._write, collection, records)
        except StorageError:
            raise
        except (OSError, TypeError, ValueError) as e:
            log.exception("store: failed to write collection %s", collection)
            raise StorageError(f"Could not write collection {collection}") from e

    def _read(self, collection: str) -> list[Record]:
        raise NotImplementedError

    def _write(self, collection: str, records: list[Record]) -> None:
        raise NotImplementedError


class JsonFileRecordStore(RecordStore):
    """One pretty-printed JSON array per collection under ``base_dir``."""

    def __init__(self, base_dir: str | Path):
        super().__init__()
        self.base = Path(base_dir)
        self.base.mkdir(parents=True, exist_ok=True)

    def path_for(self, collection: str) -> Path:
        return self.base / f"{collection}.json"

    def _read(self, collection: str) -> list[Record]:
        path = self.path_for(collection)
        if not path.exists():
            self._init_empty(path)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            self._quarantine(path)
            return []

        if not isinstance(data, list):
            log.error("store: collection %s is not a JSON array", collection)
            self._quarantine(path)
            return []
        return data

    def _quarantine(self, path: Path) -> None:
        stamp = utcnow().strftime("%Y%m%dT%H%M%S%f")
        target = path.with_name(f"{path.name}.corrupt-{stamp}")
        log.error("store: %s is unreadable, moving it to %s", path.name, target.name)
        os.replace(path, target)
        self._init_empty(path)

    def _init_empty(self, path: Path) -> None:
        # link() never overwrites, so a collection saved meanwhile is kept
        fd, tmp_name = tempfile.mkstemp(dir=self.base, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write("[]")
            try:
                os.link(tmp_name, path)
                log.info("store: initialized empty collection %s", path.stem)
            except FileExistsError:
                pass
        finally:
            os.unlink(tmp_name)

    def _write(self, collection: str, records: list[Record]) -> None:
        path = self.path_for(collection)
        payload = json.dumps(records, indent=2, ensure_ascii=False)

        fd, tmp_name = tempfile.mkstemp(dir=self.base, prefix=f".{collection}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", errors="backslashreplace") as fh:
                # lone surrogates are written as JSON \u escapes
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
