import logging
import mimetypes
import os
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import unquote, urlparse

import requests

from portfolio.constants import DEFAULT_UPLOAD_EXTENSION, REMOTE_CACHE_CONTROL, StorageBackend
from portfolio.exceptions import UploadException, ValidationException
from portfolio.metrics import track_upload, upload_bytes_total
from portfolio.settings import resolve_storage_backend
from portfolio.utils import mask_secret

logger = logging.getLogger('main')


class UploadedFile:
    """Validated file content pulled out of a multipart request."""

    def __init__(self, data: bytes, filename: str, content_type: Optional[str] = None):
        self.data = data
        self.filename = filename
        self.content_type = content_type

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename)[1].lower()

    @property
    def size(self) -> int:
        return len(self.data)


def read_upload(file_storage, field: str, max_size_mb: int, allowed_extensions: List[str]) -> UploadedFile:
    """Read a werkzeug FileStorage, enforcing size and extension rules."""
    filename = file_storage.filename or ""
    extension = os.path.splitext(filename)[1].lower()
    if extension not in allowed_extensions:
        raise ValidationException(
            f"Invalid file type. Allowed: {', '.join(allowed_extensions)}", field=field
        )

    data = file_storage.read()
    if not data:
        raise ValidationException("Uploaded file is empty", field=field)
    if len(data) > max_size_mb * 1024 * 1024:
        raise ValidationException(f"File size exceeds {max_size_mb}MB limit", field=field)

    return UploadedFile(data, filename, file_storage.mimetype or None)


def unique_filename(suggested_name: str) -> str:
    extension = os.path.splitext(suggested_name or "")[1] or DEFAULT_UPLOAD_EXTENSION
    return f"{uuid.uuid4()}{extension}"


def guess_content_type(filename: str, content_type: Optional[str] = None) -> str:
    if content_type and content_type != "application/octet-stream":
        return content_type
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


class UploadGateway(ABC):
    backend: StorageBackend

    @abstractmethod
    def upload(self, data: bytes, suggested_name: str, folder: str, content_type: Optional[str] = None) -> str:
        """Store the bytes and return a URL for them."""

    @abstractmethod
    def delete(self, url: str) -> bool:
        """Remove the object behind `url`. False when there was nothing to remove."""

    def describe(self) -> dict:
        return {"provider": self.backend.value}


class LocalUploadGateway(UploadGateway):
    backend = StorageBackend.LOCAL

    def __init__(self, base_path: str, public_prefix: str = "/uploads"):
        self.base_path = os.path.abspath(base_path)
        self.public_prefix = "/" + public_prefix.strip("/")
        os.makedirs(self.base_path, exist_ok=True)

    def _path_for(self, relative: str) -> Optional[str]:
        path = os.path.abspath(os.path.join(self.base_path, relative))
        if os.path.commonpath([path, self.base_path]) != self.base_path or path == self.base_path:
            return None
        return path

    @track_upload("upload")
    def upload(self, data, suggested_name, folder, content_type=None):
        filename = unique_filename(suggested_name)
        target_dir = self._path_for(folder)
        if target_dir is None:
            raise UploadException(f"Invalid upload folder: {folder}", backend=self.backend.value)

        try:
            os.makedirs(target_dir, exist_ok=True)
            with open(os.path.join(target_dir, filename), "wb") as f:
                f.write(data)
        except OSError as e:
            raise UploadException(f"Failed to save file: {e}", backend=self.backend.value) from e

        upload_bytes_total.labels(backend=self.backend.value).inc(len(data))
        url = f"{self.public_prefix}/{folder.strip('/')}/{filename}"
        logger.info(f"Stored upload {url} ({len(data)} bytes)")
        return url

    @track_upload("delete")
    def delete(self, url):
        if not url or not url.startswith(self.public_prefix + "/"):
            logger.debug(f"Not a local upload URL, nothing to delete: {url}")
            return False

        path = self._path_for(unquote(url[len(self.public_prefix) + 1:]))
        if path is None:
            logger.warning(f"Refusing to delete outside the upload directory: {url}")
            return False
        if not os.path.isfile(path):
            return False

        try:
            os.remove(path)
        except OSError as e:
            raise UploadException(f"Failed to delete file: {e}", backend=self.backend.value) from e
        logger.info(f"Deleted upload {url}")
        return True

    def describe(self):
        return {"provider": self.backend.value, "path": self.base_path}


class RemoteObjectStoreGateway(UploadGateway):
    """Supabase-compatible storage REST API"""

    backend = StorageBackend.REMOTE

    ERROR_MESSAGES = {
        401: "Unauthorized: check the storage API key",
        403: "Forbidden: the storage API key lacks permission for this bucket",
        404: "Bucket not found",
        413: "File too large for the storage backend",
    }

    def __init__(self, base_url: str, api_key: str, bucket: str = "uploads", timeout: int = 60, session=None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {api_key}", "apikey": api_key})

    @property
    def public_prefix(self) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/"

    def object_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/{self.bucket}/{path}"

    def public_url(self, path: str) -> str:
        return self.public_prefix + path

    def _error(self, response, action: str) -> UploadException:
        message = self.ERROR_MESSAGES.get(response.status_code)
        if message is None:
            message = f"status {response.status_code}: {response.text[:200]}"
        return UploadException(f"Failed to {action} object: {message}", backend=self.backend.value)

    @track_upload("upload")
    def upload(self, data, suggested_name, folder, content_type=None):
        path = f"{folder.strip('/')}/{unique_filename(suggested_name)}"
        content_type = guess_content_type(suggested_name, content_type)
        headers = {
            "Content-Type": content_type,
            "Cache-Control": REMOTE_CACHE_CONTROL,
            "x-upsert": "false",
        }
        if content_type.startswith("image/"):
            headers["Content-Disposition"] = "inline"

        try:
            response = self.session.post(self.object_url(path), data=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise UploadException(f"Storage backend unreachable: {e}", backend=self.backend.value) from e

        if response.status_code not in (200, 201):
            raise self._error(response, "upload")

        upload_bytes_total.labels(backend=self.backend.value).inc(len(data))
        url = self.public_url(path)
        logger.info(f"Uploaded {path} to bucket {self.bucket}")
        return url

    def path_from_url(self, url: str) -> Optional[str]:
        if not url:
            return None
        if url.startswith(self.public_prefix):
            return unquote(url[len(self.public_prefix):]) or None

        marker = f"/{self.bucket}/"
        parsed_path = urlparse(url).path
        if marker in parsed_path:
            return unquote(parsed_path.split(marker, 1)[1]) or None
        return None

    @track_upload("delete")
    def delete(self, url):
        path = self.path_from_url(url)
        if path is None:
            logger.debug(f"URL does not belong to bucket {self.bucket}, nothing to delete: {url}")
            return False

        try:
            response = self.session.delete(self.object_url(path), timeout=self.timeout)
        except requests.RequestException as e:
            raise UploadException(f"Storage backend unreachable: {e}", backend=self.backend.value) from e

        if response.status_code in (200, 204):
            logger.info(f"Deleted {path} from bucket {self.bucket}")
            return True
        if response.status_code == 404:
            return False
        raise self._error(response, "delete")

    def describe(self):
        return {"provider": self.backend.value, "bucket": self.bucket, "url": self.base_url}


def create_upload_gateway(settings) -> UploadGateway:
    """Build the gateway selected by the settings. Called once at startup."""
    backend = resolve_storage_backend(settings)
    uploads = settings["uploads"]

    if backend == StorageBackend.REMOTE:
        remote = uploads["remote"]
        logger.info(
            f"Upload backend: remote object store {remote['url']} "
            f"(bucket={remote['bucket']}, key={mask_secret(remote['api_key'])})"
        )
        return RemoteObjectStoreGateway(
            remote["url"], remote["api_key"], remote.get("bucket") or "uploads", remote.get("timeout", 60)
        )

    logger.info(f"Upload backend: local filesystem at {uploads['path']}")
    return LocalUploadGateway(uploads["path"], uploads.get("public_prefix", "/uploads"))


def discard_upload(gateway: UploadGateway, url: Optional[str], reason: str):
    """Best-effort removal of a stored file. Failures are logged, never raised."""
    if not url:
        return
    try:
        gateway.delete(url)
    except Exception as e:
        logger.warning(f"Failed to delete {url} ({reason}): {e}")
