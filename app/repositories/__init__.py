"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.canvass import CanvassRepository
from app.repositories.db import (
    close_db,
    get_db,
    init_tables,
    memory_connection,
    reconnect_db,
)

__all__ = [
    # DB
    "get_db",
    "close_db",
    "reconnect_db",
    "init_tables",
    "memory_connection",
    # Base
    "BaseRepository",
    # Canvass
    "CanvassRepository",
]
