"""
Unit Tests for Image Storage
"""
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from app.core.exceptions import ImageUploadError
from app.services.image_storage import LocalImageStorage, S3ImageStorage, build_object_key


def client_error(code="500", operation="PutObject"):
    return ClientError({"Error": {"Code": code, "Message": "boom"}}, operation)


class TestBuildObjectKey:
    """Object keys are a millisecond timestamp plus the base name"""

    def test_prefix_and_name(self):
        key = build_object_key("screenshot.png")

        prefix, name = key.split("_", 1)
        assert prefix.isdigit()
        assert len(prefix) >= 13
        assert name == "screenshot.png"

    def test_directories_stripped(self):
        assert build_object_key("../../etc/passwd").endswith("_passwd")

    @pytest.mark.parametrize("filename", [None, "", "   "])
    def test_fallback_name(self, filename):
        assert build_object_key(filename).endswith("_image")


class TestLocalImageStorage:
    """Filesystem backend"""

    @pytest.mark.asyncio
    async def test_upload_writes_file(self, tmp_path):
        storage = LocalImageStorage(str(tmp_path / "images"), "http://cdn.test/img/")

        url = await storage.upload("1_shot.png", b"png-bytes", "image/png")

        assert url == "http://cdn.test/img/1_shot.png"
        assert (tmp_path / "images" / "1_shot.png").read_bytes() == b"png-bytes"

    @pytest.mark.asyncio
    async def test_write_failure(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way")
        storage = LocalImageStorage(str(blocker), "http://cdn.test")

        with pytest.raises(ImageUploadError) as exc_info:
            await storage.upload("1_shot.png", b"data")

        assert exc_info.value.details["key"] == "1_shot.png"
        assert exc_info.value.status_code == 502


class TestS3ImageStorage:
    """S3 backend with a mocked boto3 client"""

    @pytest.mark.asyncio
    async def test_upload(self):
        client = MagicMock()
        storage = S3ImageStorage("bug-images", region="eu-west-1", client=client)

        url = await storage.upload("1_shot.png", b"data", "image/png")

        client.put_object.assert_called_once_with(
            Bucket="bug-images", Key="1_shot.png", Body=b"data", ContentType="image/png"
        )
        assert url == "https://bug-images.s3.eu-west-1.amazonaws.com/1_shot.png"

    @pytest.mark.asyncio
    async def test_custom_endpoint_url(self):
        client = MagicMock()
        storage = S3ImageStorage("bug-images", endpoint_url="http://minio:9000/", client=client)

        url = await storage.upload("1_shot.png", b"data")

        assert url == "http://minio:9000/bug-images/1_shot.png"
        assert "ContentType" not in client.put_object.call_args.kwargs

    @pytest.mark.asyncio
    async def test_creates_missing_bucket_once(self):
        client = MagicMock()
        client.head_bucket.side_effect = client_error("404", "HeadBucket")
        storage = S3ImageStorage("bug-images", client=client)

        await storage.upload("1_a.png", b"a")
        await storage.upload("2_b.png", b"b")

        client.create_bucket.assert_called_once_with(Bucket="bug-images")
        assert client.head_bucket.call_count == 1

    @pytest.mark.asyncio
    async def test_forbidden_bucket_not_created(self):
        client = MagicMock()
        client.head_bucket.side_effect = client_error("403", "HeadBucket")
        storage = S3ImageStorage("bug-images", client=client)

        with pytest.raises(ImageUploadError) as exc_info:
            await storage.upload("1_shot.png", b"data")

        assert "(403)" in exc_info.value.message
        client.create_bucket.assert_not_called()
        client.put_object.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_failure(self):
        client = MagicMock()
        client.put_object.side_effect = client_error()
        storage = S3ImageStorage("bug-images", client=client)

        with pytest.raises(ImageUploadError):
            await storage.upload("1_shot.png", b"data")
