"""
ImageKit relay for resume profile pictures.

Uploads go straight to the ImageKit upload API with the private key as HTTP
basic auth. A face-centred crop is applied as a pre-transformation, with
optional background removal.
"""

import json
import logging
import os
from dataclasses import dataclass

import requests

from app.core.config import settings

logger = logging.getLogger(__name__)

PROFILE_TRANSFORMATION = "w-300,h-300,fo-face,z-0.75"
BACKGROUND_REMOVAL = "e-bgremove"


class ImageHostError(Exception):
    """Raised when the image host cannot store or delete a file."""


@dataclass
class UploadedImage:
    url: str
    file_id: str


def _auth() -> tuple[str, str]:
    if not settings.IMAGEKIT_PRIVATE_KEY:
        raise ImageHostError("IMAGEKIT_PRIVATE_KEY is not configured")
    return (settings.IMAGEKIT_PRIVATE_KEY, "")


def build_transformation(remove_background: bool = False) -> str:
    """Return the ImageKit pre-transformation string for a profile picture."""
    if remove_background:
        return f"{PROFILE_TRANSFORMATION},{BACKGROUND_REMOVAL}"
    return PROFILE_TRANSFORMATION


def upload_image(path: str, file_name: str, remove_background: bool = False) -> UploadedImage:
    """
    Upload a local image file.

    Args:
        path: Local file to upload
        file_name: Name to store the file under on the host
        remove_background: Apply the background-removal transformation

    Returns:
        The hosted URL and the host's file id

    Raises:
        ImageHostError: On transport errors, non-2xx responses, or a response
            without a URL or file id
    """
    auth = _auth()
    data = {
        "fileName": file_name,
        "folder": settings.IMAGEKIT_FOLDER,
        "useUniqueFileName": "true",
        "transformation": json.dumps({"pre": build_transformation(remove_background)}),
    }

    try:
        with open(path, "rb") as fh:
            response = requests.post(
                settings.IMAGEKIT_UPLOAD_URL,
                auth=auth,
                data=data,
                files={"file": (os.path.basename(path), fh)},
                timeout=settings.REQUEST_TIMEOUT_SECONDS,
            )
        response.raise_for_status()
        payload = response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error("ImageKit upload failed: %s", str(e))
        raise ImageHostError(f"Image upload failed: {e}") from e

    url = payload.get("url") if isinstance(payload, dict) else None
    file_id = payload.get("fileId") if isinstance(payload, dict) else None
    if not url or not file_id:
        logger.error("ImageKit upload returned an incomplete response: %s", payload)
        raise ImageHostError("Image upload returned no URL")

    logger.info("Uploaded %s to ImageKit (file id %s)", file_name, file_id)
    return UploadedImage(url=url, file_id=file_id)


def delete_image(file_id: str) -> None:
    """
    Delete a previously uploaded file.

    Raises:
        ImageHostError: If the host rejects the deletion
    """
    auth = _auth()
    try:
        response = requests.delete(
            f"{settings.IMAGEKIT_FILES_URL}/{file_id}",
            auth=auth,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error("ImageKit delete of %s failed: %s", file_id, str(e))
        raise ImageHostError(f"Image delete failed: {e}") from e

    logger.info("Deleted ImageKit file %s", file_id)
