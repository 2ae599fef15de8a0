from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

import pydantic

from app.core.errors import NotFoundError, StorageError
from app.core.store import RecordStore
from app.models.base import RecordModel

M = TypeVar("M", bound=RecordModel)


def parse_number(raw: Any) -> float | None:
    """Finite float from a form/JSON value, or None when it is not a number."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    return value if math.isfinite(value) else None


def utf8_text(raw: Any) -> str:
    """``raw`` as text that can be stored and sent as UTF-8; lone surrogates become "?"."""
    if raw is None:
        return ""
    return str(raw).encode("utf-8", "replace").decode("utf-8")


def clean(raw: Any) -> str:
    return utf8_text(raw).strip()


class CollectionRepository(Generic[M]):
    collection: str
    model: type[M]
    entity: str

    def __init__(self, store: RecordStore):
        self.store = store

    async def _load(
        self,
        collection: str | None = None,
        model: type[RecordModel] | None = None,
        *,
        strict: bool = False,
    ) -> list:
        collection = collection or self.collection
        model = model or self.model
        records = await self.store.load(collection, strict=strict)
        try:
            return [model.model_validate(r) for r in records]
        except pydantic.ValidationError as e:
            raise StorageError(f"Malformed record in collection {collection}") from e

    async def _save(self, items: list[RecordModel], collection: str | None = None) -> None:
        await self.store.save(collection or self.collection, [i.to_record() for i in items])

    def _find(self, items: list[M], item_id: str) -> M:
        for item in items:
            if item.id == item_id:
                return item
        raise NotFoundError(self.entity, item_id)

    async def list_all(self) -> list[M]:
        return await self._load()

    async def get_by_id(self, item_id: str) -> M:
        return self._find(await self._load(), item_id)

    async def count(self) -> int:
        return len(await self.store.load(self.collection))
