"""Image upload gateway interface.

The blob store is an external collaborator: uploads return a stable URL
before the owning event is persisted, and ``delete`` is the best-effort
cleanup for uploads whose event never got stored.
"""

from abc import ABC, abstractmethod

from eventbooking.domain import ImageAttachment


class ImageUploadGateway(ABC):
    """Interface for storing event images."""

    @abstractmethod
    def upload(self, image: ImageAttachment) -> str:
        """Store the image and return its URL.

        Raises:
            UploadError: ``transport`` on network failure or timeout,
                ``rejected`` when the blob store refuses the content.
        """
        ...

    @abstractmethod
    def delete(self, url: str) -> None:
        """Remove a previously uploaded image.

        Raises:
            UploadError: If the blob store could not be reached.
        """
        ...
