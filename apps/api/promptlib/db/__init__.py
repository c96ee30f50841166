from .session import engine, Base, async_session, async_database_url
from . import models  # noqa: F401

__all__ = ["engine", "Base", "async_session", "async_database_url", "models"]
