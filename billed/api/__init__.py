"""API package: provides FastAPI dependencies and route definitions for the application."""

from .dependencies import get_file_service, get_store, get_user_session  # noqa: F401
from .routes import router  # noqa: F401
