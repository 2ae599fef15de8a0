from __future__ import annotations

import logging

from app.core.errors import FieldError, ValidationError
from app.core.store import USERS
from app.models.user import User
from app.repositories.base import CollectionRepository, clean


log = logging.getLogger(__name__)


class UserRepository(CollectionRepository[User]):
    collection = USERS
    model = User
    entity = "User"

    async def create(self, name: str | None, phone: str | None) -> User:
        errors = []
        if not clean(name):
            errors.append(FieldError("name", "required"))
        if not clean(phone):
            errors.append(FieldError("phone", "required"))
        if errors:
            raise ValidationError(errors)

        user = User(name=clean(name), phone=clean(phone))
        async with self.store.locked(self.collection):
            items = await self._load(strict=True)
            items.append(user)
            await self._save(items)

        log.info("users: created %s", user.id)
        return user

    async def delete(self, user_id: str) -> User:
        # listings and payments referencing the user are left alone
        async with self.store.locked(self.collection):
            items = await self._load(strict=True)
            user = self._find(items, user_id)
            await self._save([item for item in items if item.id != user_id])
        return user
