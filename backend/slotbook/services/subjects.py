"""
Subject directory: display name and contact for opaque subject ids.

Written by the identity layer; the calendar core only reads it to build projections.
A subject the directory has never seen projects to its id alone.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from slotbook.db.session import storage_transaction
from slotbook.models.subject import Subject
from slotbook.services.types import SubjectProjection

logger = logging.getLogger(__name__)


class SubjectDirectory:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def upsert(self, subject_id: str, display_name: str | None = None, contact: str | None = None) -> SubjectProjection:
        """Add or update a subject's projection fields."""
        with storage_transaction(self._session_factory) as db:
            row = db.get(Subject, subject_id)
            if row:
                row.display_name = display_name
                row.contact = contact
            else:
                db.add(Subject(id=subject_id, display_name=display_name, contact=contact))
        logger.debug("Subject %s upserted", subject_id)
        return SubjectProjection(id=subject_id, display_name=display_name, contact=contact)

    def resolve(self, subject_id: str) -> SubjectProjection:
        return self.resolve_many([subject_id])[subject_id]

    def resolve_many(self, subject_ids: Iterable[str]) -> dict[str, SubjectProjection]:
        ids = set(subject_ids)
        if not ids:
            return {}
        with storage_transaction(self._session_factory) as db:
            rows = db.scalars(select(Subject).where(Subject.id.in_(ids))).all()
            found = {
                r.id: SubjectProjection(id=r.id, display_name=r.display_name, contact=r.contact)
                for r in rows
            }
        return {sid: found.get(sid) or SubjectProjection(id=sid) for sid in ids}
