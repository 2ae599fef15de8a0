from __future__ import annotations

from app.core.errors import InvalidTransitionError
from app.models.base import ModerationStatus


def is_public_status(status: ModerationStatus) -> bool:
    return status == ModerationStatus.approved


def should_approve(*, entity: str, entity_id: str, status: ModerationStatus) -> bool:
    """
    True when an approve must change the record, False when it is already
    approved (repeated approves are no-ops). Rejected records cannot be
    approved.
    """
    if status == ModerationStatus.approved:
        return False
    if status == ModerationStatus.pending:
        return True
    raise InvalidTransitionError(entity, entity_id, status.value, ModerationStatus.approved.value)


def rejection_reason(reason: str | None) -> str:
    # pending, approved and rejected records may all be rejected; the last reason wins
    return (reason or "").strip()
