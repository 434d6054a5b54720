import io
import threading

import pytest
from botocore.exceptions import ClientError


def client_error(code: str, operation: str = 'TestOp') -> ClientError:
    return ClientError({'Error': {'Code': code, 'Message': 'test'}}, operation)


class FakeS3Client:
    """Dict-backed stand-in for the handful of boto3 S3 calls LinkS3DAO makes.

    conflict_on(Bucket, Key, winner) makes the next conditional put on Key fail with
    409 ConditionalRequestConflict, as S3 does when another conditional write
    on the same key is in flight. `winner`, if given, is stored as that other
    writer's object.
    """

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.conflicts: dict[tuple[str, str], bytes | None] = {}
        self._lock = threading.Lock()

    def conflict_on(self, Bucket, Key, winner: bytes | None = None):
        self.conflicts[(Bucket, Key)] = winner

    def head_bucket(self, Bucket):
        return {}

    def head_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise client_error('404', 'HeadObject')
        return {'ContentLength': len(self.objects[(Bucket, Key)])}

    def get_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise client_error('NoSuchKey', 'GetObject')
        return {'Body': io.BytesIO(self.objects[(Bucket, Key)])}

    def put_object(self, Bucket, Key, Body, ContentType=None, IfNoneMatch=None):
        with self._lock:
            if IfNoneMatch == '*' and (Bucket, Key) in self.conflicts:
                winner = self.conflicts.pop((Bucket, Key))
                if winner is not None:
                    self.objects[(Bucket, Key)] = winner
                raise client_error('ConditionalRequestConflict', 'PutObject')
            if IfNoneMatch == '*' and (Bucket, Key) in self.objects:
                raise client_error('PreconditionFailed', 'PutObject')
            self.objects[(Bucket, Key)] = Body
        return {}

    def delete_object(self, Bucket, Key):
        self.objects.pop((Bucket, Key), None)
        return {}


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def fake_s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def make_client_error():
    """Provide a factory for botocore ClientError instances."""
    return client_error
