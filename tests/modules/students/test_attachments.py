"""
Unit tests for the attachment store.
"""

from io import BytesIO
from types import SimpleNamespace

import pytest
from fastapi import UploadFile

from roster.modules.students.attachments import AttachmentStore


def _upload(filename: str, content: bytes) -> UploadFile:
    return UploadFile(file=BytesIO(content), filename=filename)


class TestAttachmentStore:
    """Tests for AttachmentStore.bind_uploads."""

    @pytest.mark.asyncio
    async def test_stores_each_kind_and_returns_references(self, attachment_store):
        uploads = {
            "passport": _upload("passport.pdf", b"%PDF-passport"),
            "image": _upload("photo.jpg", b"\xff\xd8jpeg"),
        }

        changes = await attachment_store.bind_uploads(None, uploads)

        assert set(changes) == {"passport", "image"}
        assert changes["passport"].startswith("uploads/")
        assert changes["passport"].endswith("-passport.pdf")
        stored = attachment_store.upload_dir / changes["image"].removeprefix("uploads/")
        assert stored.read_bytes() == b"\xff\xd8jpeg"

    @pytest.mark.asyncio
    async def test_no_uploads_changes_nothing(self, attachment_store):
        assert await attachment_store.bind_uploads(None, {}) == {}

    @pytest.mark.asyncio
    async def test_unknown_field_names_are_ignored(self, attachment_store):
        changes = await attachment_store.bind_uploads(None, {"resume": _upload("cv.pdf", b"cv")})

        assert changes == {}

    @pytest.mark.asyncio
    async def test_new_reference_differs_from_existing(self, attachment_store):
        first = await attachment_store.bind_uploads(None, {"diplom": _upload("d.pdf", b"v1")})
        existing = SimpleNamespace(passport=None, diplom=first["diplom"], image=None)

        second = await attachment_store.bind_uploads(
            existing, {"diplom": _upload("d.pdf", b"v2")}
        )

        assert second["diplom"] != first["diplom"]

    @pytest.mark.asyncio
    async def test_directory_components_are_stripped(self, attachment_store):
        changes = await attachment_store.bind_uploads(
            None, {"image": _upload("../../etc/passwd", b"x")}
        )

        assert "/.." not in changes["image"]
        assert changes["image"].endswith("-passwd")

    @pytest.mark.asyncio
    async def test_reference_without_prefix(self, tmp_path):
        store = AttachmentStore(tmp_path, url_prefix="")

        changes = await store.bind_uploads(None, {"image": _upload("a.png", b"png")})

        assert (tmp_path / changes["image"]).exists()

    @pytest.mark.asyncio
    async def test_discard_removes_stored_files(self, attachment_store):
        changes = await attachment_store.bind_uploads(None, {"image": _upload("a.png", b"png")})

        await attachment_store.discard([*changes.values(), "uploads/never-stored.png"])

        assert list(attachment_store.upload_dir.iterdir()) == []
