"""
Image Storage - binary object storage for optional item images

Two backends, selected by STORAGE_MODE:
- local: files under LOCAL_STORAGE_PATH, served from PUBLIC_STORAGE_URL
- s3: any S3-compatible bucket through boto3 (AWS, MinIO, ...)

boto3 is blocking, so calls run in a worker thread.
"""

import asyncio
import time
from functools import lru_cache
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.exceptions import ImageUploadError
from app.core.logging_config import logger

# head_bucket error codes meaning the bucket does not exist
MISSING_BUCKET_CODES = ("404", "NoSuchBucket", "NotFound")


def build_object_key(filename: Optional[str]) -> str:
    """Millisecond timestamp prefix plus the upload's base name"""
    name = Path(filename or "").name.strip() or "image"
    return f"{int(time.time() * 1000)}_{name}"


class ImageStorage:
    """Interface for image backends"""

    async def upload(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Store `data` under `key` and return its public URL"""
        raise NotImplementedError

    def public_url(self, key: str) -> str:
        raise NotImplementedError


class LocalImageStorage(ImageStorage):
    """Stores images on the local filesystem"""

    def __init__(self, base_path: str, public_base_url: str):
        self.base_path = Path(base_path)
        self.public_base_url = public_base_url.rstrip("/")

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def _write(self, key: str, data: bytes) -> None:
        self.base_path.mkdir(parents=True, exist_ok=True)
        (self.base_path / key).write_bytes(data)

    async def upload(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        try:
            await asyncio.to_thread(self._write, key, data)
        except OSError as e:
            logger.error(f"[ImageStorage] Local write failed for {key}: {e}")
            raise ImageUploadError(key, str(e)) from e

        logger.info(f"[ImageStorage] Stored {key} ({len(data)} bytes) locally")
        return self.public_url(key)


class S3ImageStorage(ImageStorage):
    """Stores images in an S3-compatible bucket"""

    def __init__(
        self,
        bucket_name: str,
        endpoint_url: Optional[str] = None,
        region: str = "us-east-1",
        access_key: str = "",
        secret_key: str = "",
        client=None,
    ):
        self.bucket_name = bucket_name
        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None
        self.region = region
        self.client = client or boto3.client(
            's3',
            endpoint_url=self.endpoint_url,
            aws_access_key_id=access_key or None,
            aws_secret_access_key=secret_key or None,
            region_name=region,
        )
        self._bucket_ready = False

    def public_url(self, key: str) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def _ensure_bucket_exists(self) -> None:
        """Create the bucket on first use if it is missing"""
        if self._bucket_ready:
            return
        try:
            self.client.head_bucket(Bucket=self.bucket_name)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") not in MISSING_BUCKET_CODES:
                raise
            logger.info(f"[ImageStorage] Creating bucket {self.bucket_name}")
            if self.endpoint_url or self.region == "us-east-1":
                self.client.create_bucket(Bucket=self.bucket_name)
            else:
                self.client.create_bucket(
                    Bucket=self.bucket_name,
                    CreateBucketConfiguration={'LocationConstraint': self.region}
                )
        self._bucket_ready = True

    def _put(self, key: str, data: bytes, content_type: Optional[str]) -> None:
        self._ensure_bucket_exists()
        extra = {"ContentType": content_type} if content_type else {}
        self.client.put_object(Bucket=self.bucket_name, Key=key, Body=data, **extra)

    async def upload(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        try:
            await asyncio.to_thread(self._put, key, data, content_type)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"[ImageStorage] S3 upload failed for {key}: {e}")
            raise ImageUploadError(key, str(e)) from e

        logger.info(f"[ImageStorage] Uploaded {key} ({len(data)} bytes) to {self.bucket_name}")
        return self.public_url(key)


@lru_cache()
def get_image_storage() -> ImageStorage:
    """Backend for the configured STORAGE_MODE"""
    if settings.STORAGE_MODE == "s3":
        return S3ImageStorage(
            bucket_name=settings.IMAGE_BUCKET,
            endpoint_url=settings.S3_ENDPOINT_URL or None,
            region=settings.AWS_REGION,
            access_key=settings.AWS_ACCESS_KEY_ID,
            secret_key=settings.AWS_SECRET_ACCESS_KEY,
        )
    return LocalImageStorage(settings.LOCAL_STORAGE_PATH, settings.PUBLIC_STORAGE_URL)
