"""Subject directory rows, written by the identity layer. The calendar only reads them for projections."""
from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from slotbook.core.constants import SUBJECT_ID_MAX_LENGTH
from slotbook.db.base import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(String(SUBJECT_ID_MAX_LENGTH), primary_key=True)
    display_name = Column(String(256), nullable=True)
    contact = Column(String(256), nullable=True)  # e.g. email
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
