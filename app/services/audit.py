from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from app.core.errors import StorageError
from app.core.ids import iso_timestamp


log = logging.getLogger(__name__)


# anything that could end a line, plus lone surrogates
_UNSAFE = re.compile(r"[\x00-\x1f\x7f-\x9f\u2028\u2029\ud800-\udfff]")


def _escape(text: str) -> str:
    return _UNSAFE.sub(lambda m: repr(m.group())[1:-1], text)


def format_entry(action: str, details: str = "") -> str:
    # details carry user-supplied text such as listing titles
    return f"{iso_timestamp()} | {_escape(action)} | {_escape(details)}\n"


class AuditLog:
    """
    Append-only text log of admin actions, one line per action:
    ``<ISO timestamp> | <ACTION> | <details>``.

    Write failures are logged at ERROR and swallowed so moderation is never
    blocked by the log, unless ``strict`` is set, in which case they surface
    as StorageError.
    """

    def __init__(self, path: str | Path, *, strict: bool = False):
        self.path = Path(path)
        self.strict = strict
        self._lock = asyncio.Lock()

    def _append(self, line: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line)

    async def audit(self, action: str, details: str = "") -> None:
        line = format_entry(action, details)
        try:
            async with self._lock:
                await asyncio.to_thread(self._append, line)
        except (OSError, ValueError) as e:
            log.exception("audit: failed to record %s (%s)", action, details)
            if self.strict:
                raise StorageError("Could not write audit log") from e
