from __future__ import annotations

import logging

import boto3

from kraalhub.config.settings import Settings
from kraalhub.infrastructure.storage.ports import ImageUpload

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 10 * 1024 * 1024


class S3ImageStore:
    def __init__(
        self,
        bucket: str,
        region: str,
        *,
        prefix: str = "",
        public_url_base: str | None = None,
        expires_seconds: int = 600,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.prefix = prefix
        self.public_url_base = public_url_base
        self.expires_seconds = expires_seconds
        self._s3 = boto3.client("s3", region_name=region)

    @classmethod
    def from_settings(cls, settings: Settings) -> S3ImageStore | None:
        if not (settings.s3_bucket and settings.s3_region):
            logger.info("S3 bucket not configured; image uploads disabled")
            return None
        return cls(
            settings.s3_bucket,
            settings.s3_region,
            prefix=settings.s3_prefix,
            public_url_base=settings.s3_public_url_base,
            expires_seconds=settings.s3_signed_url_expires,
        )

    async def presign_upload(self, key: str, content_type: str) -> ImageUpload:
        object_key = f"{self.prefix}{key}"
        post = self._s3.generate_presigned_post(
            Bucket=self.bucket,
            Key=object_key,
            Fields={"Content-Type": content_type},
            Conditions=[
                {"Content-Type": content_type},
                ["content-length-range", 1, MAX_IMAGE_BYTES],
            ],
            ExpiresIn=self.expires_seconds,
        )
        return ImageUpload(upload_url=post["url"], storage_key=key, fields=post["fields"])

    def public_url(self, key: str) -> str:
        object_key = f"{self.prefix}{key}"
        if self.public_url_base:
            return f"{self.public_url_base.rstrip('/')}/{object_key}"
        if self.region == "us-east-1":
            return f"https://{self.bucket}.s3.amazonaws.com/{object_key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{object_key}"
