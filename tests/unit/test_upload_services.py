"""Tests for upload services."""
import os
import tempfile
from pathlib import Path

import pytest

from conftest import TEST_TOKEN, SITE_ID, json_response, text_response
from graphshare.core.exceptions import HttpError, ValidationError
from graphshare.core.upload.models import ChunkInfo, UploadSession, UploadTarget
from graphshare.core.upload.services import (
    AsyncFileReader,
    ChunkUploader,
    FileValidator,
    SimpleUploader
)


class TestSimpleUploader:
    """Test suite for SimpleUploader."""

    @pytest.fixture
    def uploader(self, api):
        return SimpleUploader(api)

    @pytest.mark.asyncio
    async def test_upload_personal(self, uploader, transport, drive_item):
        """Test one PUT to the personal content endpoint."""
        transport.queue(json_response(201, drive_item, "Created"))

        result = await uploader.upload(UploadTarget.personal(), "report.pdf", b"data", "application/pdf")

        assert result.id == "item-123"
        assert len(transport.requests) == 1
        request = transport.requests[0]
        assert request.method == "PUT"
        assert request.url == (
            "https://graph.microsoft.com/v1.0/me/drive/root:/OpenClawShared/report.pdf:/content"
        )
        assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
        assert request.headers["Content-Type"] == "application/pdf"
        assert request.data == b"data"

    @pytest.mark.asyncio
    async def test_upload_site_quotes_filename(self, uploader, transport, drive_item):
        """Test site uploads address the site drive with a quoted name."""
        transport.queue(json_response(200, drive_item))

        await uploader.upload(UploadTarget.site(SITE_ID), "my report.pdf", b"data")

        assert transport.requests[0].url == (
            f"https://graph.microsoft.com/v1.0/sites/{SITE_ID}/drive/root:"
            "/OpenClawShared/my%20report.pdf:/content"
        )

    @pytest.mark.asyncio
    async def test_default_content_type(self, uploader, transport, drive_item):
        transport.queue(json_response(200, drive_item))

        await uploader.upload(UploadTarget.personal(), "blob", b"data")

        assert transport.requests[0].headers["Content-Type"] == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_http_error(self, uploader, transport):
        """Test non-success status raises HttpError with status and body."""
        transport.queue(text_response(507, "quota exceeded", "Insufficient Storage"))

        with pytest.raises(HttpError) as exc_info:
            await uploader.upload(UploadTarget.personal(), "report.pdf", b"data")

        error = exc_info.value
        assert error.status == 507
        assert error.reason == "Insufficient Storage"
        assert error.body == "quota exceeded"
        assert error.phase == "OneDrive upload"
        assert "507" in str(error)

    @pytest.mark.asyncio
    async def test_missing_fields(self, uploader, transport):
        """Test a success without required fields raises ValidationError."""
        transport.queue(json_response(201, {"id": "item-123", "name": "report.pdf"}))

        with pytest.raises(ValidationError) as exc_info:
            await uploader.upload(UploadTarget.personal(), "report.pdf", b"data")

        assert exc_info.value.missing == ("webUrl",)


class TestChunkUploader:
    """Test suite for ChunkUploader."""

    @pytest.fixture
    def uploader(self, api):
        session = UploadSession(upload_url="https://upload.example.com/session/abc", total_size=10)
        return ChunkUploader(api, session)

    def test_upload_url(self, uploader):
        assert uploader.upload_url == "https://upload.example.com/session/abc"

    @pytest.mark.asyncio
    async def test_upload_chunk_headers(self, uploader, transport):
        """Test range framing headers and no bearer token."""
        transport.queue(text_response(202, "", "Accepted"))

        response = await uploader.upload_chunk(ChunkInfo(index=0, start=0, end=4, total=10), b"abcd")

        assert response.status == 202
        request = transport.requests[0]
        assert request.method == "PUT"
        assert request.url == "https://upload.example.com/session/abc"
        assert request.headers["Content-Length"] == "4"
        assert request.headers["Content-Range"] == "bytes 0-3/10"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_upload_empty_chunk_raises(self, uploader, transport):
        """Test uploading empty chunk raises error."""
        with pytest.raises(ValueError, match="empty"):
            await uploader.upload_chunk(ChunkInfo(index=0, start=0, end=0, total=10), b"")
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_upload_mismatched_chunk_raises(self, uploader):
        with pytest.raises(ValueError, match="range"):
            await uploader.upload_chunk(ChunkInfo(index=0, start=0, end=4, total=10), b"abc")


class TestFileValidator:
    """Test suite for FileValidator."""

    @pytest.fixture
    def validator(self):
        return FileValidator()

    @pytest.fixture
    def temp_file(self):
        """Create temporary file for testing."""
        fd, path = tempfile.mkstemp(suffix=".pdf")
        os.write(fd, b"test content")
        os.close(fd)
        yield Path(path)
        os.unlink(path)

    def test_validate_existing_file(self, validator, temp_file):
        path, size = validator.validate(temp_file)

        assert path == temp_file
        assert size == 12

    def test_validate_string_path(self, validator, temp_file):
        path, _ = validator.validate(str(temp_file))

        assert path == temp_file

    def test_validate_nonexistent_file(self, validator):
        with pytest.raises(FileNotFoundError):
            validator.validate(Path("/nonexistent/file.txt"))

    def test_validate_directory(self, validator):
        with pytest.raises(ValueError):
            validator.validate(Path(tempfile.gettempdir()))

    def test_guess_content_type(self, temp_file):
        assert FileValidator.guess_content_type(temp_file) == "application/pdf"
        assert FileValidator.guess_content_type(Path("noext")) == "application/octet-stream"


class TestAsyncFileReader:
    """Test suite for AsyncFileReader."""

    @pytest.mark.asyncio
    async def test_read_file(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"0123456789")

        assert await AsyncFileReader().read_file(path) == b"0123456789"

    @pytest.mark.asyncio
    async def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            await AsyncFileReader().read_file(tmp_path / "missing.bin")
