"""Image gateway for an external blob service spoken to over HTTP."""

import httpx
import structlog

from eventbooking.domain import ImageAttachment
from eventbooking.domain.errors import UploadError
from eventbooking.gateways.interfaces import ImageUploadGateway

logger = structlog.get_logger(__name__)


class HttpImageGateway(ImageUploadGateway):
    """Uploads images with ``POST /images`` and expects ``{"url": ...}`` back."""

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout, headers=headers)

    def upload(self, image: ImageAttachment) -> str:
        if hasattr(image.file, "seek"):
            image.file.seek(0)
        files = {"file": (image.name, image.file, image.content_type)}
        response = self._send("POST", "/images", files=files)

        if 400 <= response.status_code < 500:
            raise UploadError("rejected", f"blob store answered {response.status_code}")
        if response.status_code >= 500:
            raise UploadError("transport", f"blob store answered {response.status_code}")

        try:
            url = response.json()["url"]
        except (ValueError, KeyError, TypeError):
            raise UploadError("transport", "blob store response carried no url") from None

        logger.info("image_uploaded", url=url, size=image.size)
        return url

    def delete(self, url: str) -> None:
        response = self._send("DELETE", "/images", params={"url": url})
        if response.status_code >= 400 and response.status_code != 404:
            raise UploadError("transport", f"blob store answered {response.status_code}")

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise UploadError("transport", "blob store timed out") from exc
        except httpx.HTTPError as exc:
            raise UploadError("transport", str(exc)) from exc
