"""Persistence layer: key-value records in SQLite and local blob storage.

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None

    # Repository classes
    - KeyValueRepository: get/set/list/delete of JSON values by key
    - ResumeRepository: resume records stored under ``resume:{id}``

    # Blob storage
    - BlobStore, BlobFile, UploadedBlob

    # Exceptions
    - PersistenceError: Base exception for all persistence errors
    - DatabaseConnectionError, RecordNotFoundError, DataIntegrityError,
      CorruptValueError, BlobNotFoundError

Example usage:
    >>> from careernavigate.persistence import init_database, get_session, ResumeRepository
    >>>
    >>> init_database("sqlite:///./data/careernavigate.db")
    >>>
    >>> with get_session() as session:
    ...     records = ResumeRepository(session).list_all()
"""

# Blob storage
from .blobs import BlobFile, BlobStore, UploadedBlob

# Database initialization and session management
from .database import close_database, get_session, init_database

# Exceptions
from .exceptions import (
    BlobNotFoundError,
    CorruptValueError,
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)

# Repository classes
from .repositories import KeyValueEntry, KeyValueRepository, ResumeRepository

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    # Repositories
    "KeyValueEntry",
    "KeyValueRepository",
    "ResumeRepository",
    # Blobs
    "BlobFile",
    "BlobStore",
    "UploadedBlob",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "DataIntegrityError",
    "CorruptValueError",
    "BlobNotFoundError",
]
