from __future__ import annotations

import logging

from app.core.errors import FieldError, ValidationError
from app.core.store import LISTINGS, RecordStore
from app.models.base import ModerationStatus
from app.models.listing import MAX_IMAGES, Listing
from app.repositories.base import CollectionRepository, clean, parse_number, utf8_text
from app.schemas.listing import ListingSubmission
from app.services.moderation_state import is_public_status, rejection_reason, should_approve
from app.services.storage import LocalObjectStore


log = logging.getLogger(__name__)


def validate_submission(fields: ListingSubmission) -> list[FieldError]:
    errors: list[FieldError] = []
    if len(clean(fields.title)) < 3:
        errors.append(FieldError("title", "at least 3 characters"))
    price = parse_number(fields.price)
    if price is None:
        errors.append(FieldError("price", "must be a number"))
    elif price < 0:
        errors.append(FieldError("price", "must not be negative"))
    if len(clean(fields.city)) < 2:
        errors.append(FieldError("city", "at least 2 characters"))
    if not clean(fields.commune):
        errors.append(FieldError("commune", "required"))
    if not clean(fields.neighborhood):
        errors.append(FieldError("neighborhood", "required"))
    return errors


class ListingRepository(CollectionRepository[Listing]):
    """
    Listings and their moderation lifecycle.

        pending --validate--> approved
        pending | approved | rejected --reject--> rejected
        any --delete--> (gone, images released)
    """

    collection = LISTINGS
    model = Listing
    entity = "Listing"

    def __init__(self, store: RecordStore, files: LocalObjectStore, *, max_images: int = MAX_IMAGES):
        super().__init__(store)
        self.files = files
        # never above what a Listing record can hold
        self.max_images = min(max_images, MAX_IMAGES)

    async def create(self, fields: ListingSubmission, files: list[str]) -> Listing:
        """
        Validate a submission and persist it as a pending listing.

        ``files`` are references already written by ingestion. They are all
        discarded when the submission is refused or cannot be saved; refs past
        ``max_images`` are discarded on success.
        """
        errors = validate_submission(fields)
        if errors:
            self.files.remove_many(files)
            raise ValidationError(errors)

        images, extra = files[: self.max_images], files[self.max_images:]
        if extra:
            log.info("listings: dropping %d image(s) above the limit of %d", len(extra), self.max_images)
            self.files.remove_many(extra)

        try:
            listing = Listing(
                title=clean(fields.title),
                description=utf8_text(fields.description),
                price=parse_number(fields.price),
                city=clean(fields.city),
                commune=clean(fields.commune),
                neighborhood=clean(fields.neighborhood),
                guarantee=utf8_text(fields.guarantee),
                location=utf8_text(fields.location),
                images=images,
                author=clean(fields.author) or None,
            )
            async with self.store.locked(self.collection):
                items = await self._load(strict=True)
                items.append(listing)
                await self._save(items)
        except Exception:
            self.files.remove_many(images)
            raise

        log.info("listings: created %s (%d image(s))", listing.id, len(images))
        return listing

    async def list_public(self) -> list[Listing]:
        return [item for item in await self._load() if is_public_status(item.status)]

    async def validate(self, listing_id: str) -> Listing:
        async with self.store.locked(self.collection):
            items = await self._load(strict=True)
            listing = self._find(items, listing_id)
            if should_approve(entity=self.entity, entity_id=listing_id, status=listing.status):
                listing.status = ModerationStatus.approved
                await self._save(items)
        return listing

    async def reject(self, listing_id: str, reason: str | None = None) -> Listing:
        async with self.store.locked(self.collection):
            items = await self._load(strict=True)
            listing = self._find(items, listing_id)
            listing.status = ModerationStatus.rejected
            listing.rejection_reason = rejection_reason(utf8_text(reason))
            await self._save(items)
        return listing

    async def delete(self, listing_id: str) -> Listing:
        async with self.store.locked(self.collection):
            items = await self._load(strict=True)
            listing = self._find(items, listing_id)
            await self._save([item for item in items if item.id != listing_id])

        # outside the lock, after the record is gone
        removed = self.files.remove_many(listing.images)
        if removed < len(listing.images):
            log.warning("listings: %s deleted, %d of %d image(s) left behind",
                        listing_id, len(listing.images) - removed, len(listing.images))
        return listing
