"""Tests for the image upload gateways.

Run with: pytest tests/test_gateways.py -v
"""

import time

import httpx
import pytest
from django.core.files.storage import storages

from eventbooking.domain import ImageAttachment
from eventbooking.domain.errors import UploadError
from eventbooking.gateways import (
    HttpImageGateway,
    StorageImageGateway,
    get_image_gateway,
)
from tests.helpers import PNG_BYTES, png_upload


def attachment(name: str = "photo.png") -> ImageAttachment:
    upload = png_upload(name)
    return ImageAttachment(name=upload.name, content_type="image/png", size=upload.size, file=upload)


class TestStorageImageGateway:
    def test_upload_saves_and_returns_url(self):
        gateway = StorageImageGateway()

        url = gateway.upload(attachment())

        assert url.startswith("/media/events/")
        assert url.endswith(".png")
        name = url.removeprefix("/media/")
        with storages["default"].open(name) as saved:
            assert saved.read() == PNG_BYTES

    def test_delete_removes_blob(self):
        gateway = StorageImageGateway()
        url = gateway.upload(attachment())

        gateway.delete(url)

        assert not storages["default"].exists(url.removeprefix("/media/"))

    def test_stalled_backend_times_out(self, monkeypatch):
        storage = storages["default"]
        monkeypatch.setattr(storage, "save", lambda *args, **kwargs: time.sleep(0.5))
        gateway = StorageImageGateway(timeout=0.05)

        with pytest.raises(UploadError) as exc_info:
            gateway.upload(attachment())
        assert exc_info.value.kind == "transport"

    def test_backend_io_failure(self, monkeypatch):
        def broken(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(storages["default"], "save", broken)

        with pytest.raises(UploadError) as exc_info:
            StorageImageGateway().upload(attachment())
        assert exc_info.value.kind == "transport"

    def test_backend_specific_failure_is_transport_error(self, monkeypatch):
        def denied(*args, **kwargs):
            raise RuntimeError("ClientError: AccessDenied")

        monkeypatch.setattr(storages["default"], "save", denied)

        with pytest.raises(UploadError) as exc_info:
            StorageImageGateway().upload(attachment())
        assert exc_info.value.kind == "transport"

    def test_delete_failure_is_transport_error(self, monkeypatch):
        def denied(*args, **kwargs):
            raise RuntimeError("ClientError: AccessDenied")

        monkeypatch.setattr(storages["default"], "delete", denied)

        with pytest.raises(UploadError) as exc_info:
            StorageImageGateway().delete("/media/events/photo.png")
        assert exc_info.value.kind == "transport"


def http_gateway(handler) -> HttpImageGateway:
    client = httpx.Client(transport=httpx.MockTransport(handler), base_url="https://blobs.test")
    return HttpImageGateway(base_url="https://blobs.test", client=client)


class TestHttpImageGateway:
    def test_upload_returns_url(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = request.read()
            return httpx.Response(201, json={"url": "https://cdn.test/photo.png"})

        url = http_gateway(handler).upload(attachment())

        assert url == "https://cdn.test/photo.png"
        assert seen["path"] == "/images"
        assert PNG_BYTES in seen["body"]

    @pytest.mark.parametrize("status,kind", [(413, "rejected"), (415, "rejected"), (503, "transport")])
    def test_error_statuses(self, status, kind):
        gateway = http_gateway(lambda request: httpx.Response(status))

        with pytest.raises(UploadError) as exc_info:
            gateway.upload(attachment())
        assert exc_info.value.kind == kind

    def test_timeout_is_transport_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UploadError) as exc_info:
            http_gateway(handler).upload(attachment())
        assert exc_info.value.kind == "transport"

    def test_connection_error_is_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(UploadError) as exc_info:
            http_gateway(handler).upload(attachment())
        assert exc_info.value.kind == "transport"

    def test_response_without_url(self):
        gateway = http_gateway(lambda request: httpx.Response(200, json={"id": "abc"}))

        with pytest.raises(UploadError):
            gateway.upload(attachment())

    def test_delete(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = request.url.params["url"]
            return httpx.Response(204)

        http_gateway(handler).delete("https://cdn.test/photo.png")

        assert seen == {"method": "DELETE", "url": "https://cdn.test/photo.png"}


class TestGetImageGateway:
    def test_defaults_to_storage(self):
        assert isinstance(get_image_gateway(), StorageImageGateway)

    def test_http_gateway_from_settings(self, settings):
        settings.EVENTBOOKING = {
            **settings.EVENTBOOKING,
            "IMAGE_GATEWAY": "http",
            "BLOB_STORE_URL": "https://blobs.test",
        }
        assert isinstance(get_image_gateway(), HttpImageGateway)
