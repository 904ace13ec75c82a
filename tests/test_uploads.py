#!/usr/bin/env python3
"""
Tests for inline image encoding.
"""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from dental_api.core.errors import ClinicError, ErrorKind
from dental_api.services.uploads import read_image, read_image_or_keep, to_data_uri


def make_upload(payload, filename="scan.png", content_type="image/png"):
    return UploadFile(
        file=io.BytesIO(payload),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.unit
class TestUploads:
    def test_data_uri(self):
        assert to_data_uri("image/png", b"abc") == "data:image/png;base64,YWJj"

    def test_data_uri_without_type(self):
        assert to_data_uri(None, b"abc").startswith("data:application/octet-stream;base64,")

    async def test_no_file(self):
        assert await read_image(None, 100) is None

    async def test_within_limit(self):
        assert await read_image(make_upload(b"abc"), 3) == "data:image/png;base64,YWJj"

    async def test_over_limit(self):
        with pytest.raises(ClinicError) as exc_info:
            await read_image(make_upload(b"abcd"), 3)
        assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT

    async def test_keep_existing_when_no_new_file(self):
        assert await read_image_or_keep(None, "data:image/png;base64,old", 100) == "data:image/png;base64,old"

    async def test_new_file_replaces_existing(self):
        result = await read_image_or_keep(make_upload(b"abc"), "data:image/png;base64,old", 100)
        assert result == "data:image/png;base64,YWJj"
