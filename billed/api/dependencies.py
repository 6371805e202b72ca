"""FastAPI dependencies for DI (settings, DB, receipt storage, session, bill store).

This module provides dependency injection helpers so the routes receive a bill store scoped to the connected
user and the controllers stay testable with overridden dependencies.
"""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from billed.core.db import get_db
from billed.core.models import UserType
from billed.core.session import SessionRegistry, UserSession
from billed.core.settings import Settings, get_settings
from billed.services.file_service import FileService
from billed.services.s3_file_service import S3FileService
from billed.services.store import SqlBillStore

session_registry = SessionRegistry()


@lru_cache
def get_file_service() -> FileService:
    """Provide the S3-backed receipt file service, created once."""
    settings = get_settings()
    return FileService(S3FileService(settings), settings.receipts_base_url)


def get_session_registry() -> SessionRegistry:
    """Provide the process-wide session registry."""
    return session_registry


def get_user_session(
    request: Request,
    registry: SessionRegistry = Depends(get_session_registry),
    settings: Settings = Depends(get_settings),
) -> UserSession | None:
    """Provide the session of the connected user, if the request carries one."""
    return registry.get(request.cookies.get(settings.session_cookie_name))


def get_store(
    db: Session = Depends(get_db),
    file_service: FileService = Depends(get_file_service),
    user_session: UserSession | None = Depends(get_user_session),
) -> SqlBillStore:
    """Provide a bill store; employees only see their own bills."""
    owner_email = None
    if user_session and user_session.user and user_session.user.type == UserType.EMPLOYEE:
        owner_email = user_session.email
    return SqlBillStore(db, file_service, owner_email=owner_email)
