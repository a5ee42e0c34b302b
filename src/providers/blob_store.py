"""Blob storage backends for staged batches and the processed-URL cache."""

import json
import logging
from pathlib import Path
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from common.errors import BlobNotFoundError, IntegrationError

logger = logging.getLogger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class S3BlobStore:
    """JSON blobs in an S3 bucket."""

    def __init__(self, bucket: str, client: Any) -> None:
        if not bucket:
            raise IntegrationError("s3", "S3 bucket name is not set")
        self.bucket = bucket
        self.client = client

    def get_text(self, key: str) -> str:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read().decode("utf-8")
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _MISSING_CODES:
                raise BlobNotFoundError(key) from e
            logger.error("Failed to read s3://%s/%s: %s", self.bucket, key, e)
            raise IntegrationError("s3", f"get_object {key} failed: {e}") from e
        except BotoCoreError as e:
            logger.error("Failed to read s3://%s/%s: %s", self.bucket, key, e)
            raise IntegrationError("s3", f"get_object {key} failed: {e}") from e

    def get_json(self, key: str) -> Any:
        return json.loads(self.get_text(key))

    def put_json(self, key: str, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body.encode("utf-8"),
                ContentType="application/json",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to write s3://%s/%s: %s", self.bucket, key, e)
            raise IntegrationError("s3", f"put_object {key} failed: {e}") from e
        logger.info("Uploaded %d bytes to s3://%s/%s", len(body), self.bucket, key)


class LocalBlobStore:
    """JSON blobs as files under a local directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise ValueError(f"Key escapes storage root: {key}")
        return path

    def get_text(self, key: str) -> str:
        path = self._path(key)
        if not path.exists():
            raise BlobNotFoundError(key)
        return path.read_text(encoding="utf-8")

    def get_json(self, key: str) -> Any:
        return json.loads(self.get_text(key))

    def put_json(self, key: str, data: Any) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        logger.info("Saved blob to %s", path)
