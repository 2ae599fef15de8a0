from dataclasses import dataclass

from fastapi import Request

from app.core.config import Settings
from app.core.security import AdminAuthorizer
from app.core.store import JsonFileRecordStore, RecordStore
from app.repositories import ListingRepository, PaymentRepository, UserRepository
from app.services.audit import AuditLog
from app.services.moderation import ModerationService
from app.services.storage import LocalObjectStore


@dataclass(frozen=True)
class Backend:
    settings: Settings
    store: RecordStore
    files: LocalObjectStore
    listings: ListingRepository
    users: UserRepository
    payments: PaymentRepository
    moderation: ModerationService
    authorize: AdminAuthorizer


def build_backend(settings: Settings) -> Backend:
    store = JsonFileRecordStore(settings.data_dir)
    files = LocalObjectStore(settings.upload_dir)

    listings = ListingRepository(store, files, max_images=settings.max_images)
    users = UserRepository(store)
    payments = PaymentRepository(store, receiving_phone=settings.payment_phone)
    audit_log = AuditLog(settings.audit_log_path, strict=settings.audit_strict)

    return Backend(
        settings=settings,
        store=store,
        files=files,
        listings=listings,
        users=users,
        payments=payments,
        moderation=ModerationService(listings=listings, payments=payments, users=users, audit_log=audit_log),
        authorize=AdminAuthorizer(settings.admin_password),
    )


def get_backend(request: Request) -> Backend:
    return request.app.state.backend
