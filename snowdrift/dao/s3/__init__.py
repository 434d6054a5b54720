from snowdrift.dao.s3.s3_key_schema import S3KeySchema
from snowdrift.dao.s3.mixins import S3ClientMixin
from snowdrift.dao.s3.link_s3_dao import LinkS3DAO


__all__ = [
    'S3KeySchema',
    'S3ClientMixin',
    'LinkS3DAO',
]
