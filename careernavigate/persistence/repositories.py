"""Data access layer (repositories) for persistence operations.

KeyValueRepository is a small key-value store over the kv_entries table.
Values go in as any JSON-serializable object and come back decoded.
ResumeRepository layers resume records on top of it under ``resume:{id}``.
"""

import json
import logging
from datetime import datetime
from typing import Any, List, NamedTuple, Optional

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careernavigate.domain.models import ResumeRecord
from careernavigate.utils.timestamps import utc_now

from .exceptions import (
    CorruptValueError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)
from .schema import KeyValueModel, _format_datetime

logger = logging.getLogger(__name__)

RESUME_KEY_PREFIX = "resume:"


class KeyValueEntry(NamedTuple):
    """One listed entry. ``value`` is None when values were not requested."""

    key: str
    value: Any
    updated_at: Optional[datetime]


def _pattern_to_like(pattern: str) -> str:
    """Translate a ``*`` glob pattern to a LIKE pattern escaped with ``\\``."""
    escaped = pattern.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "%")


class KeyValueRepository:
    """Repository for key-value entries."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get(self, key: str) -> Any:
        """Return the decoded value stored under ``key``, or None when absent.

        Raises:
            CorruptValueError: If the stored value is not JSON
            PersistenceError: If database error occurs
        """
        try:
            model = self.session.get(KeyValueModel, key)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving key {key}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve key: {e}") from e

        if model is None:
            return None
        return self._decode(model)

    def set(self, key: str, value: Any) -> None:
        """Insert or replace the value stored under ``key``.

        Raises:
            DataIntegrityError: If the key is empty or the value is not JSON-serializable
            PersistenceError: If database error occurs
        """
        if not key:
            raise DataIntegrityError("Key cannot be empty")
        try:
            encoded = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise DataIntegrityError(f"Value for key {key} is not JSON-serializable: {e}") from e

        now = _format_datetime(utc_now())
        try:
            existing = self.session.get(KeyValueModel, key)
            if existing:
                existing.value = encoded
                existing.updated_at = now
            else:
                self.session.add(
                    KeyValueModel(key=key, value=encoded, created_at=now, updated_at=now)
                )
            self.session.flush()

            logger.debug(
                f"Stored key: {key}",
                extra={"event": "persistence.kv.set", "key": key, "size": len(encoded)},
            )

        except SQLAlchemyError as e:
            logger.error(f"Error storing key {key}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to store key: {e}") from e

    def list(self, pattern: str = "*", include_values: bool = False) -> List[KeyValueEntry]:
        """List entries whose key matches a ``*`` glob pattern, newest first.

        Args:
            pattern: Key pattern, e.g. ``resume:*``; without ``*`` it matches one key
            include_values: Decode and return values along with keys

        Returns:
            List of KeyValueEntry (empty list if none match)

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(KeyValueModel)
                .where(KeyValueModel.key.like(_pattern_to_like(pattern), escape="\\"))
                .order_by(KeyValueModel.updated_at.desc(), KeyValueModel.key)
            )
            models = self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing keys for pattern {pattern}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list keys: {e}") from e

        return [
            KeyValueEntry(
                key=model.key,
                value=self._decode(model) if include_values else None,
                updated_at=model.updated,
            )
            for model in models
        ]

    def delete(self, key: str) -> bool:
        """Delete ``key``. Returns False when there was nothing to delete.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            result = self.session.execute(delete(KeyValueModel).where(KeyValueModel.key == key))
            deleted = result.rowcount > 0
            if deleted:
                logger.debug(f"Deleted key: {key}", extra={"event": "persistence.kv.deleted"})
            return deleted
        except SQLAlchemyError as e:
            logger.error(f"Error deleting key {key}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to delete key: {e}") from e

    @staticmethod
    def _decode(model: KeyValueModel) -> Any:
        try:
            return json.loads(model.value)
        except ValueError as e:
            raise CorruptValueError(f"Stored value for key {model.key} is not valid JSON") from e


class ResumeRepository:
    """Repository for resume records stored as ``resume:{id}`` entries."""

    def __init__(self, session: Session):
        self.kv = KeyValueRepository(session)

    @staticmethod
    def key_for(resume_id: str) -> str:
        return f"{RESUME_KEY_PREFIX}{resume_id}"

    def save(self, record: ResumeRecord) -> ResumeRecord:
        self.kv.set(self.key_for(record.id), record.model_dump(mode="json"))
        return record

    def get(self, resume_id: str) -> Optional[ResumeRecord]:
        value = self.kv.get(self.key_for(resume_id))
        if value is None:
            return None
        try:
            return ResumeRecord.model_validate(value)
        except ValidationError as e:
            raise PersistenceError(f"Stored resume {resume_id} is malformed: {e}") from e

    def get_required(self, resume_id: str) -> ResumeRecord:
        """Like get(), but a missing record raises RecordNotFoundError."""
        record = self.get(resume_id)
        if record is None:
            raise RecordNotFoundError(f"Resume not found: {resume_id}")
        return record

    def list_all(self) -> List[ResumeRecord]:
        """Every stored resume record, newest first.

        Entries that are not valid JSON or not shaped like a record are
        skipped with a warning so one bad entry does not hide the rest.
        """
        records = []
        for entry in self._list_entries():
            try:
                records.append(ResumeRecord.model_validate(entry.value))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed resume entry {entry.key}",
                    extra={
                        "event": "persistence.resume.malformed",
                        "key": entry.key,
                        "error_count": e.error_count(),
                    },
                )
        return records

    def delete(self, resume_id: str) -> bool:
        return self.kv.delete(self.key_for(resume_id))

    def _list_entries(self) -> List[KeyValueEntry]:
        entries = []
        for entry in self.kv.list(f"{RESUME_KEY_PREFIX}*", include_values=False):
            try:
                entries.append(entry._replace(value=self.kv.get(entry.key)))
            except CorruptValueError as e:
                logger.warning(
                    f"Skipping unreadable entry {entry.key}: {e}",
                    extra={"event": "persistence.resume.unreadable", "key": entry.key},
                )
        return entries
