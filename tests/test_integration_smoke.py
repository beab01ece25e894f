import os
import uuid

import pytest

from s3presign.client import S3Client


BUCKET = os.environ.get("S3PRESIGN_TEST_BUCKET", "")
ACCESS_KEY = os.environ.get("S3PRESIGN_TEST_ACCESS_KEY", "")
SECRET_KEY = os.environ.get("S3PRESIGN_TEST_SECRET_KEY", "")
REGION = os.environ.get("S3PRESIGN_TEST_REGION", "us-east-1")

pytestmark = pytest.mark.skipif(
    not (BUCKET and ACCESS_KEY and SECRET_KEY),
    reason="live S3 credentials not configured",
)


def _new_key(prefix: str) -> str:
    return f"{prefix}/{uuid.uuid4().hex[:12]}.txt"


@pytest.mark.asyncio
async def test_upload_exists_download_delete_flow(tmp_path):
    client = S3Client()
    key = _new_key("s3presign-smoke")
    creds = dict(access_key=ACCESS_KEY, secret_key=SECRET_KEY, region=REGION)

    try:
        uploaded = await client.upload_file(BUCKET, key, b"python-sdk-test-data", **creds)
        assert uploaded.success, uploaded.message

        exists = await client.object_exists(BUCKET, key, **creds)
        assert exists.success and exists.exists is True, exists.message

        downloaded = await client.download_file(BUCKET, key, **creds)
        assert downloaded.success, downloaded.message
        assert downloaded.content == b"python-sdk-test-data"

        destination = tmp_path / "download.txt"
        to_file = await client.download_to_file(BUCKET, key, destination, **creds)
        assert to_file.success, to_file.message
        assert destination.read_bytes() == b"python-sdk-test-data"
    finally:
        deleted = await client.delete_object(BUCKET, key, **creds)

    assert deleted.success, deleted.message

    gone = await client.object_exists(BUCKET, key, **creds)
    assert gone.success and gone.exists is False, gone.message


@pytest.mark.asyncio
async def test_upload_from_file_with_short_expiry(tmp_path):
    client = S3Client()
    key = _new_key("s3presign-smoke")
    source = tmp_path / "upload.txt"
    source.write_text("one-second-expiry")
    creds = dict(access_key=ACCESS_KEY, secret_key=SECRET_KEY, region=REGION)

    try:
        uploaded = await client.upload_from_file(BUCKET, key, source, expires_in_seconds=1, **creds)
        assert uploaded.success, uploaded.message
    finally:
        await client.delete_object(BUCKET, key, **creds)


@pytest.mark.asyncio
async def test_wrong_secret_is_reported_as_failure():
    client = S3Client()

    result = await client.object_exists(
        BUCKET, _new_key("s3presign-smoke"), ACCESS_KEY, SECRET_KEY + "x", region=REGION
    )

    assert not result.success
    assert result.exists is None
    assert "403" in result.message
