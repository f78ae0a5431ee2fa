from django.conf import settings

from eventbooking.gateways.http_gateway import HttpImageGateway
from eventbooking.gateways.interfaces import ImageUploadGateway
from eventbooking.gateways.storage_gateway import StorageImageGateway

__all__ = [
    "ImageUploadGateway",
    "StorageImageGateway",
    "HttpImageGateway",
    "get_image_gateway",
]


def get_image_gateway() -> ImageUploadGateway:
    """Build the gateway selected by ``settings.EVENTBOOKING["IMAGE_GATEWAY"]``."""
    config = settings.EVENTBOOKING
    timeout = float(config.get("UPLOAD_TIMEOUT_SECONDS", 10))
    if config.get("IMAGE_GATEWAY") == "http":
        return HttpImageGateway(
            base_url=config["BLOB_STORE_URL"],
            token=config.get("BLOB_STORE_TOKEN", ""),
            timeout=timeout,
        )
    return StorageImageGateway(
        alias=config.get("IMAGE_STORAGE_ALIAS", "default"),
        timeout=timeout,
    )
