from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from supabase import StorageException

from ..domain import ErrorKind, Result, UploadedAsset
from .auth import AuthService
from .context import ServiceContext
from .errors import storage_failure, storage_message

logger = logging.getLogger(__name__)

FileSource = Union[str, Path, bytes, bytearray, BinaryIO]


def _read_source(file: FileSource, filename: Optional[str]) -> Tuple[str, bytes]:
    if isinstance(file, (bytes, bytearray)):
        if not filename:
            raise ValueError("A filename is required when uploading raw bytes.")
        return filename, bytes(file)
    if isinstance(file, (str, Path)):
        path = Path(file)
        return filename or path.name, path.read_bytes()
    name = filename or Path(getattr(file, "name", "") or "").name
    if not name:
        raise ValueError("Cannot determine the name of the uploaded file.")
    return name, file.read()


@dataclass(slots=True)
class MediaService:
    context: ServiceContext
    auth: AuthService

    def storage_path(self, filename: str) -> str:
        millis = int(self.context.clock() * 1000)
        return f"{millis}_{filename}"

    async def upload_file_and_get_url(
        self,
        file: FileSource,
        *,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> Result[UploadedAsset]:
        """Upload an image to the posts bucket and resolve its public URL."""

        bucket = self.context.images
        try:
            name, content = _read_source(file, filename)
            path = self.storage_path(name)

            if not await self.auth.get_session():
                logger.warning(
                    "No active Supabase session; uploads to private buckets may be blocked by row-level security."
                )

            try:
                await bucket.upload(path, content, content_type=content_type or mimetypes.guess_type(name)[0])
            except StorageException as exc:
                logger.error("Error uploading file %s: %s", path, storage_message(exc))
                return storage_failure(exc)

            public_url = await bucket.public_url(path)
            if not public_url:
                logger.warning("Upload succeeded but no public URL was returned for %s", path)
                return Result.failure(
                    ErrorKind.MISSING_URL,
                    f"Upload succeeded but no public URL is available for {path}.",
                    details={"path": path},
                )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error during file upload")
            return Result.failure(ErrorKind.UNEXPECTED, str(exc))

        return Result.success(
            UploadedAsset(filename=name, path=path, bucket=bucket.bucket_name, public_url=public_url)
        )
