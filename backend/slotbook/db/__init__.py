from slotbook.db.base import Base
from slotbook.db.session import create_db_engine, make_session_factory
from slotbook.db.tables import ALL_TABLE_NAMES

__all__ = ["Base", "create_db_engine", "make_session_factory", "ALL_TABLE_NAMES"]
