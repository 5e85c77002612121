import logging
from typing import BinaryIO
import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from app.platform.ports.object_storage import ObjectStoragePort
from app.core.errors import StorageError

log = logging.getLogger("storage.s3")

class S3Storage(ObjectStoragePort):
    def __init__(
        self,
        bucket: str,
        *,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        client=None,
    ):
        self.bucket = bucket
        if client is None:
            session = boto3.session.Session(
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region,
            )
            client = session.client(
                "s3",
                endpoint_url=endpoint_url,
                config=Config(signature_version="s3v4"),
            )
        self.s3 = client

    def put_object(self, key: str, body: BinaryIO, content_type: str) -> None:
        try:
            self.s3.put_object(Bucket=self.bucket, Key=key, Body=body, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Error uploading {key} to s3://{self.bucket}: {e}", stage="upload") from e
        log.debug(f"PUT s3://{self.bucket}/{key} content_type={content_type}")

    def presign_download(self, key: str, expires_seconds: int, bucket: str | None = None) -> str:
        try:
            return self.s3.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket or self.bucket, "Key": key},
                ExpiresIn=expires_seconds,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Unable to generate presigned URL for {key}: {e}", stage="sign") from e

    def delete(self, key: str) -> None:
        try:
            self.s3.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Error deleting {key} from s3://{self.bucket}: {e}", stage="delete") from e
