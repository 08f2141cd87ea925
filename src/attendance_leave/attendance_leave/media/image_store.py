from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass, field
from typing import Protocol

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from ..core.constants import ATTENDANCE_IMAGE_FOLDER
from ..core.exceptions import UploadError, ValidationError

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/[a-zA-Z0-9.+-]+;base64,")


def decode_image(image: str) -> bytes:
    """Decode a base64 image, with or without a ``data:image/...;base64,`` prefix."""
    payload = _DATA_URL_PREFIX.sub("", image.strip())
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Invalid image encoding", details=str(exc)) from exc


class ImageStore(Protocol):
    def upload(self, data: bytes, *, public_id: str) -> str:
        """Store the blob and return its public URL."""
        raise NotImplementedError


@dataclass(frozen=True)
class CloudinaryConfig:
    cloud_name: str
    api_key: str
    api_secret: str = field(repr=False)


class CloudinaryImageStore(ImageStore):
    def __init__(self, config: CloudinaryConfig, *, folder: str = ATTENDANCE_IMAGE_FOLDER):
        self._config = config
        self._folder = folder

    def upload(self, data: bytes, *, public_id: str) -> str:
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(data),
                public_id=public_id,
                folder=self._folder,
                resource_type="image",
                cloud_name=self._config.cloud_name,
                api_key=self._config.api_key,
                api_secret=self._config.api_secret,
            )
        except (CloudinaryError, OSError) as exc:
            logger.error("Error uploading to Cloudinary: %s", exc)
            raise UploadError(f"Failed to upload image to Cloudinary: {exc}") from exc
        url = result.get("secure_url")
        if not url:
            raise UploadError("Failed to upload image to Cloudinary: no URL returned")
        return url
