"""
Attachment Store

Stores the identity document, certificate and photo uploaded for a student
and returns references to them. A reference is a relative path under the
uploads root, e.g. "uploads/1700000000000-3f9a1c2e-passport.pdf", which the
static files mount serves.

File content, type and size are not validated.
"""

import logging
import time
import uuid
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from roster.core.config import settings
from roster.modules.students.models import ATTACHMENT_FIELDS, Student

logger = logging.getLogger(__name__)


class AttachmentStore:
    """Writes uploads to a directory and hands out stable references."""

    def __init__(self, upload_dir: Path, url_prefix: str = "uploads"):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.strip("/")

    def _stored_name(self, filename: str | None) -> str:
        basename = Path(filename or "").name or "file"
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{basename}"

    def _reference(self, stored_name: str) -> str:
        return f"{self.url_prefix}/{stored_name}" if self.url_prefix else stored_name

    async def save(self, upload: UploadFile, previous: str | None = None) -> str:
        """
        Write one upload verbatim and return its reference.

        Args:
            upload: The uploaded file
            previous: Reference currently bound on the record, never reused

        Returns:
            Relative reference to the stored file
        """
        stored_name = self._stored_name(upload.filename)
        while self._reference(stored_name) == previous:
            stored_name = self._stored_name(upload.filename)

        contents = await upload.read()
        await run_in_threadpool(self.upload_dir.mkdir, parents=True, exist_ok=True)
        await run_in_threadpool((self.upload_dir / stored_name).write_bytes, contents)

        reference = self._reference(stored_name)
        logger.info(f"Stored attachment {reference} ({len(contents)} bytes)")
        return reference

    async def discard(self, references: Iterable[str]) -> None:
        """Remove stored files that no record ended up pointing to."""
        for reference in references:
            stored_name = Path(reference).name
            try:
                await run_in_threadpool((self.upload_dir / stored_name).unlink, missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove orphaned attachment {reference}: {e}")
            else:
                logger.info(f"Removed orphaned attachment {reference}")

    async def bind_uploads(
        self,
        existing: Student | None,
        uploads: Mapping[str, UploadFile],
    ) -> dict[str, str]:
        """
        Store uploaded attachments and return the record fields to update.

        Only passport, diplom and image are considered; fields without an
        upload are left out of the result so existing references survive.

        Args:
            existing: The record being updated, or None on creation
            uploads: Uploaded files keyed by field name

        Returns:
            Mapping of field name to new reference
        """
        changes: dict[str, str] = {}
        for field in ATTACHMENT_FIELDS:
            upload = uploads.get(field)
            if upload is None:
                continue
            previous = getattr(existing, field, None) if existing is not None else None
            changes[field] = await self.save(upload, previous=previous)
        return changes


@lru_cache
def get_attachment_store() -> AttachmentStore:
    """FastAPI dependency returning the configured attachment store."""
    return AttachmentStore(settings.upload_dir, settings.uploads_url_prefix)
