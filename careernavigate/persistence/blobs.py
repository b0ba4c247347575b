"""Local blob storage for uploaded resume artifacts.

Files are written under ``{root}/{upload id}/{filename}`` and addressed by
the relative POSIX path ``{upload id}/{filename}``. That path is what gets
stored on ResumeRecord and sent as a FilePart reference.
"""

import base64
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Union
from uuid import uuid4

from careernavigate.logging import get_logger

from .exceptions import BlobNotFoundError, PersistenceError

logger = get_logger(__name__, component="blobs")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class BlobFile:
    """A file to upload."""

    filename: str
    data: bytes
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "BlobFile":
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Cannot read {file_path}: {e}") from e
        return cls(filename=file_path.name, data=data)


@dataclass(frozen=True)
class UploadedBlob:
    """Where an uploaded file ended up."""

    path: str
    filename: str
    size: int
    content_type: str


def _safe_filename(filename: str) -> str:
    name = _UNSAFE_FILENAME_CHARS.sub("_", PurePosixPath(filename.replace("\\", "/")).name)
    return name.strip("._") or "file"


class BlobStore:
    """Blob store rooted in a local directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def upload(self, file: BlobFile) -> UploadedBlob:
        """Store one file and return its blob path.

        Raises:
            PersistenceError: If the file cannot be written
        """
        filename = _safe_filename(file.filename)
        relative = PurePosixPath(uuid4().hex) / filename
        target = self.root.joinpath(*relative.parts)
        content_type = (
            file.content_type
            or mimetypes.guess_type(filename)[0]
            or "application/octet-stream"
        )

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(file.data)
        except OSError as e:
            logger.error(
                f"Failed to store blob {filename}: {e}",
                extra={"event": "blobs.upload.failed", "blob_path": str(relative)},
            )
            raise PersistenceError(f"Failed to store {filename}: {e}") from e

        logger.info(
            "Stored blob",
            extra={
                "event": "blobs.upload.succeeded",
                "blob_path": str(relative),
                "size": len(file.data),
                "content_type": content_type,
            },
        )
        return UploadedBlob(
            path=str(relative),
            filename=filename,
            size=len(file.data),
            content_type=content_type,
        )

    def upload_many(self, files: Iterable[BlobFile]) -> List[UploadedBlob]:
        return [self.upload(file) for file in files]

    def read(self, path: str) -> bytes:
        """Return the bytes stored at a blob path.

        Raises:
            BlobNotFoundError: If the path is unknown or points outside the store
        """
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except FileNotFoundError as e:
            raise BlobNotFoundError(f"Blob not found: {path}") from e
        except OSError as e:
            raise PersistenceError(f"Failed to read blob {path}: {e}") from e

    def exists(self, path: str) -> bool:
        try:
            return self._resolve(path).is_file()
        except BlobNotFoundError:
            return False

    def data_url(self, path: str) -> str:
        """The blob inlined as a ``data:`` URL, for sending files to the chat API."""
        content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
        encoded = base64.b64encode(self.read(path)).decode("ascii")
        return f"data:{content_type};base64,{encoded}"

    def _resolve(self, path: str) -> Path:
        if not path:
            raise BlobNotFoundError("Blob path cannot be empty")
        root = self.root.resolve()
        target = root.joinpath(*PurePosixPath(path).parts).resolve()
        if target == root or root not in target.parents:
            raise BlobNotFoundError(f"Blob path is outside the store: {path}")
        return target
