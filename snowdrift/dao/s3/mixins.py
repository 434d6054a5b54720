"""S3 mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize boto3 S3 client (LocalStack-aware)
    - Healthcheck the target bucket

Classes:
    - S3ClientMixin: Base mixin to inject S3 key management, client setup & healthcheck.
"""

import os
from typing import Optional

import boto3
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from snowdrift.dao.s3.s3_key_schema import S3KeySchema
from snowdrift.dao.exceptions import DataStoreError
from snowdrift.utils.constants import LOCALSTACK_ENDPOINT_ENV


class S3ClientMixin:
    """Mixin S3 client setup and health check for S3-backed DAOs.

    Attributes:
        s3 (BaseClient):
            boto3 S3 client used by subclasses.

        bucket (str):
            Name of the bucket holding all link objects.

        keys (S3KeySchema):
            Helper class for generating namespaced object keys.
    """

    def __init__(
        self,
        bucket: str,
        s3_client: Optional[BaseClient] = None,
        s3_region: Optional[str] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize an S3-based DAO

        Args:
            bucket (str):
                Name of an existing S3 bucket.

            s3_client (Optional[BaseClient]):
                Pre-initialized boto3 S3 client. If None, a new client is created
                (pointed at LocalStack when LOCALSTACK_ENDPOINT is set).

            s3_region (Optional[str]):
                AWS region of the bucket.

            prefix (Optional[str]):
                Namespace prefix for all object keys, e.g. 'app:env'.

        Raises:
            DataStoreError:
                If the bucket healthcheck fails.
        """
        if s3_client is None:
            s3_client = boto3.client(
                's3',
                region_name=s3_region,
                endpoint_url=os.getenv(LOCALSTACK_ENDPOINT_ENV) or None,
            )

        self.s3 = s3_client
        self.bucket = bucket
        self.keys = S3KeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self) -> None:
        """HEAD the bucket, raising DataStoreError if it is unreachable or forbidden"""
        try:
            self.s3.head_bucket(Bucket=self.bucket)
        except (ClientError, BotoCoreError) as e:
            raise DataStoreError(f"Can't access S3 bucket '{self.bucket}'. Check the provided configuration parameters.") from e
