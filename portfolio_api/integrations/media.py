"""Remote media storage with Protocol pattern for dependency injection.

Provides CloudinaryMediaStorage (signed REST calls over httpx). Every
image-bearing entity stores the returned MediaRef and owns the remote asset.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel

from ..config import settings
from ..errors import UploadError, ValidationError

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudinary.com/v1_1"

AVATAR_FOLDER = "PORTFOLIO_AVATAR"
RESUME_FOLDER = "PORTFOLIO_RESUME"
PROJECT_BANNER_FOLDER = "PORTFOLIO_PROJECT_BANNER"
SKILL_FOLDER = "PORTFOLIO_SKILL"
SOFTWARE_APPLICATION_FOLDER = "PORTFOLIO_SOFTWARE_APPLICATION"

RESOURCE_TYPES = ("image", "video", "raw")


@dataclass(frozen=True)
class MediaRef:
    public_id: str
    url: str
    resource_type: str = "image"

    @classmethod
    def stored(cls, public_id: str | None, url: str | None) -> "MediaRef":
        """Rebuild a reference from its persisted columns.

        Delivery URLs look like ``/<cloud>/<resource_type>/upload/...``, so the
        resource type needed for destroy is recovered from the path.
        """
        parts = urlparse(url or "").path.split("/")
        resource_type = parts[2] if len(parts) > 2 and parts[2] in RESOURCE_TYPES else "image"
        return cls(public_id=public_id or "", url=url or "", resource_type=resource_type)


@dataclass(frozen=True)
class FileUpload:
    """An attachment read from the request, not yet uploaded."""

    data: bytes
    filename: str = ""


class MediaRefOut(BaseModel):
    public_id: str | None = ""
    url: str


class MediaStorage(Protocol):
    """Media storage interface."""

    def upload(self, data: bytes, folder: str, filename: str = "") -> MediaRef: ...
    def delete(self, ref: MediaRef) -> None: ...


def check_upload_size(data: bytes, field: str) -> None:
    """Reject empty or oversized attachments before any remote call."""
    if not data:
        raise ValidationError(f"{field} file is empty")
    if len(data) > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise ValidationError(f"{field} file is too large. Maximum {limit_mb}MB allowed.")


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature: sha1 of sorted key=value pairs + secret."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] != "")
    return hashlib.sha1((to_sign + api_secret).encode()).hexdigest()


class CloudinaryMediaStorage:
    """Cloudinary-backed media storage."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._client = client or httpx.Client(timeout=timeout)

    @property
    def configured(self) -> bool:
        return bool(self._cloud_name and self._api_key and self._api_secret)

    def _signed(self, params: dict[str, str]) -> dict[str, str]:
        params = {**params, "timestamp": str(int(time.time()))}
        return {**params, "api_key": self._api_key, "signature": sign_params(params, self._api_secret)}

    def upload(self, data: bytes, folder: str, filename: str = "") -> MediaRef:
        if not self.configured:
            raise UploadError("Media storage is not configured")

        url = f"{API_BASE}/{self._cloud_name}/auto/upload"
        try:
            response = self._client.post(
                url,
                data=self._signed({"folder": folder}),
                files={"file": (filename or "upload", data)},
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Cloudinary upload to %s failed: HTTP %d", folder, exc.response.status_code)
            raise UploadError(f"Failed to upload file to {folder}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Cloudinary upload to %s failed: %s", folder, exc)
            raise UploadError(f"Failed to upload file to {folder}") from exc

        if body.get("error") or not body.get("public_id") or not body.get("secure_url"):
            logger.error("Cloudinary upload to %s returned an invalid body: %s", folder, body.get("error"))
            raise UploadError(f"Failed to upload file to {folder}")

        resource_type = body.get("resource_type") or "image"
        logger.info("Uploaded %s (%s, %d bytes) to %s", body["public_id"], resource_type, len(data), folder)
        return MediaRef(public_id=body["public_id"], url=body["secure_url"], resource_type=resource_type)

    def delete(self, ref: MediaRef) -> None:
        if not ref.public_id:
            return
        if not self.configured:
            raise UploadError("Media storage is not configured")
        if ref.resource_type not in RESOURCE_TYPES:
            raise UploadError(f"Unknown resource type: {ref.resource_type}")

        # destroy only finds assets under the resource type they were stored as
        url = f"{API_BASE}/{self._cloud_name}/{ref.resource_type}/destroy"
        try:
            response = self._client.post(url, data=self._signed({"public_id": ref.public_id}))
            response.raise_for_status()
            result = response.json().get("result")
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Cloudinary destroy of %s failed: %s", ref.public_id, exc)
            raise UploadError("Failed to delete remote file") from exc

        # "not found" means the asset is already gone
        if result not in ("ok", "not found"):
            raise UploadError("Failed to delete remote file")
        logger.info("Deleted remote %s asset %s (%s)", ref.resource_type, ref.public_id, result)


def upload_checked(media: MediaStorage, upload: FileUpload, folder: str, field: str) -> MediaRef:
    check_upload_size(upload.data, field)
    return media.upload(upload.data, folder, upload.filename)


def discard_media(media: MediaStorage, ref: MediaRef) -> None:
    """Best-effort delete of an asset no longer referenced by any entity."""
    try:
        media.delete(ref)
    except UploadError:
        logger.warning("Orphaned remote asset left behind: %s", ref.public_id)


def create_media_storage() -> MediaStorage:
    """Factory: create the media storage from configuration."""
    storage = CloudinaryMediaStorage(
        settings.cloudinary_cloud_name,
        settings.cloudinary_api_key,
        settings.cloudinary_api_secret,
    )
    if not storage.configured:
        logger.warning("Cloudinary credentials missing: uploads will be rejected")
    return storage
