"""Image gateway backed by a Django storage backend."""

import os
import uuid
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import structlog
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.storage import storages

from eventbooking.domain import ImageAttachment
from eventbooking.domain.errors import UploadError
from eventbooking.gateways.interfaces import ImageUploadGateway

logger = structlog.get_logger(__name__)

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="image-upload")


class StorageImageGateway(ImageUploadGateway):
    """Saves images through ``django.core.files.storage.storages``.

    Any backend configured under ``STORAGES`` works: local files, Django's
    in-memory storage, or a django-storages bucket. Saves run on a worker
    thread so a stalled backend fails the request after ``timeout`` seconds.
    """

    def __init__(self, alias: str = "default", timeout: float = 10.0, prefix: str = "events/") -> None:
        self._alias = alias
        self._timeout = timeout
        self._prefix = prefix

    def upload(self, image: ImageAttachment) -> str:
        storage = storages[self._alias]
        _, ext = os.path.splitext(image.name)
        name = f"{self._prefix}{uuid.uuid4().hex}{ext.lower()}"

        if hasattr(image.file, "seek"):
            image.file.seek(0)
        future = _executor.submit(storage.save, name, image.file)
        try:
            saved = future.result(timeout=self._timeout)
        except FutureTimeoutError:
            raise UploadError("transport", f"storage save timed out after {self._timeout}s") from None
        except SuspiciousFileOperation as exc:
            raise UploadError("rejected", str(exc)) from exc
        except Exception as exc:
            # Storage backends raise their own exception types.
            logger.warning("storage_save_failed", error=repr(exc))
            raise UploadError("transport", str(exc)) from exc

        url = storage.url(saved)
        logger.info("image_uploaded", name=saved, size=image.size)
        return url

    def delete(self, url: str) -> None:
        storage = storages[self._alias]
        base = storage.url("")
        name = url[len(base):] if url.startswith(base) else url
        try:
            storage.delete(name)
        except Exception as exc:
            raise UploadError("transport", str(exc)) from exc
