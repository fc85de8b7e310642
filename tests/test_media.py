"""Tests for Cloudinary media storage."""

import hashlib
from urllib.parse import parse_qs

import httpx
import pytest

from portfolio_api.errors import UploadError, ValidationError
from portfolio_api.integrations.media import (
    CloudinaryMediaStorage,
    check_upload_size,
    MediaRef,
    discard_media,
    sign_params,
)


SVG_URL = "https://res.cloudinary.com/demo/image/upload/v1/PORTFOLIO_SKILL/abc.svg"
RAW_URL = "https://res.cloudinary.com/demo/raw/upload/v1/PORTFOLIO_RESUME/cv.docx"


def _storage(handler) -> CloudinaryMediaStorage:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return CloudinaryMediaStorage("demo", "key123", "secret456", client=client)


class TestSignature:
    def test_sorted_params_with_secret(self):
        expected = hashlib.sha1(b"folder=PORTFOLIO_SKILL&timestamp=1700000000secret456").hexdigest()
        assert sign_params({"timestamp": "1700000000", "folder": "PORTFOLIO_SKILL"}, "secret456") == expected

    def test_empty_values_are_skipped(self):
        assert sign_params({"a": "1", "b": ""}, "s") == sign_params({"a": "1"}, "s")


class TestUploadSize:
    def test_empty_file_rejected(self):
        with pytest.raises(ValidationError, match="Avatar file is empty"):
            check_upload_size(b"", "Avatar")

    def test_oversized_file_rejected(self):
        with pytest.raises(ValidationError, match="too large"):
            check_upload_size(b"x" * (5 * 1024 * 1024 + 1), "Resume")


class TestCloudinaryUpload:
    def test_returns_media_ref(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(
                200,
                json={"public_id": "PORTFOLIO_SKILL/abc", "secure_url": "https://res.cloudinary.com/demo/abc.svg"},
            )

        ref = _storage(handler).upload(b"<svg/>", "PORTFOLIO_SKILL", "icon.svg")

        assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/auto/upload"
        assert ref.public_id == "PORTFOLIO_SKILL/abc"
        assert ref.url == "https://res.cloudinary.com/demo/abc.svg"
        assert ref.resource_type == "image"

    def test_keeps_raw_resource_type(self):
        storage = _storage(
            lambda request: httpx.Response(
                200,
                json={"public_id": "PORTFOLIO_RESUME/cv.docx", "secure_url": RAW_URL, "resource_type": "raw"},
            )
        )

        ref = storage.upload(b"PK", "PORTFOLIO_RESUME", "cv.docx")

        assert ref.resource_type == "raw"

    def test_http_error_becomes_upload_error(self):
        storage = _storage(lambda request: httpx.Response(500, json={"error": {"message": "boom"}}))
        with pytest.raises(UploadError, match="PORTFOLIO_SKILL"):
            storage.upload(b"<svg/>", "PORTFOLIO_SKILL")

    def test_incomplete_body_rejected(self):
        storage = _storage(lambda request: httpx.Response(200, json={"public_id": "x"}))
        with pytest.raises(UploadError):
            storage.upload(b"<svg/>", "PORTFOLIO_SKILL")

    def test_network_error_becomes_upload_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(UploadError):
            _storage(handler).upload(b"<svg/>", "PORTFOLIO_SKILL")

    def test_unconfigured_storage_rejects(self):
        storage = CloudinaryMediaStorage("", "", "")
        assert not storage.configured
        with pytest.raises(UploadError, match="not configured"):
            storage.upload(b"data", "PORTFOLIO_AVATAR")


class TestCloudinaryDelete:
    def test_signed_destroy(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"result": "ok"})

        _storage(handler).delete(MediaRef("PORTFOLIO_SKILL/abc", SVG_URL))

        assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/destroy"
        assert seen["form"]["public_id"] == ["PORTFOLIO_SKILL/abc"]
        assert seen["form"]["api_key"] == ["key123"]
        assert "signature" in seen["form"]

    def test_already_gone_is_success(self):
        storage = _storage(lambda request: httpx.Response(200, json={"result": "not found"}))
        storage.delete(MediaRef("x", SVG_URL))

    def test_failure_raises(self):
        storage = _storage(lambda request: httpx.Response(502))
        with pytest.raises(UploadError):
            storage.delete(MediaRef("x", SVG_URL))

    def test_discard_swallows_failure(self, media):
        media.fail_delete = True
        discard_media(media, MediaRef("PORTFOLIO_SKILL/abc", SVG_URL))
        assert media.deleted == []

    def test_raw_asset_destroyed_under_raw_type(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"result": "ok"})

        _storage(handler).delete(MediaRef("PORTFOLIO_RESUME/cv.docx", RAW_URL, resource_type="raw"))

        assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/raw/destroy"

    def test_unknown_resource_type_rejected(self):
        storage = _storage(lambda request: httpx.Response(200, json={"result": "ok"}))
        with pytest.raises(UploadError, match="Unknown resource type"):
            storage.delete(MediaRef("x", SVG_URL, resource_type="auto"))

    def test_empty_public_id_is_noop(self):
        def handler(request):
            raise AssertionError("no request expected")

        _storage(handler).delete(MediaRef("", ""))


class TestStoredRef:
    def test_resource_type_from_delivery_url(self):
        assert MediaRef.stored("PORTFOLIO_RESUME/cv.docx", RAW_URL).resource_type == "raw"
        assert MediaRef.stored("PORTFOLIO_SKILL/abc", SVG_URL).resource_type == "image"

    def test_unrecognized_url_defaults_to_image(self):
        assert MediaRef.stored("x", "https://cdn.example.com/files/x").resource_type == "image"
        ref = MediaRef.stored(None, None)
        assert ref.public_id == ""
        assert ref.resource_type == "image"
