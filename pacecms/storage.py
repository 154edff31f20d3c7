# pacecms/storage.py
import re
from datetime import datetime

import boto3
from boto3.s3.transfer import TransferConfig

from pacecms.config import (
    AWS_ACCESS_KEY, AWS_SECRET_KEY, REGION_NAME, BUCKET_NAME,
    S3_ENDPOINT_URL, PRESIGNED_URL_EXPIRES
)

s3_config = TransferConfig(
    multipart_threshold=1024 * 1024 * 25,
    multipart_chunksize=1024 * 1024 * 50,
    max_concurrency=5,
    use_threads=True
)

_s3 = None


def get_s3():
    """S3 클라이언트 (최초 호출 시 생성)"""
    global _s3
    if _s3 is None:
        _s3 = boto3.client(
            's3',
            aws_access_key_id=AWS_ACCESS_KEY,
            aws_secret_access_key=AWS_SECRET_KEY,
            region_name=REGION_NAME,
            endpoint_url=S3_ENDPOINT_URL
        )
    return _s3


def set_s3(client):
    global _s3
    _s3 = client


def build_object_key(prefix, filename, now=None):
    """`prefix/YYYYMMDD_HHMMSS_파일명` 형태의 키 생성"""
    now = now or datetime.now()
    clean_name = re.sub(r'[^a-zA-Z0-9.]', '_', filename or 'file')
    return f"{prefix}/{now.strftime('%Y%m%d_%H%M%S')}_{clean_name}"


def generate_presigned_url(key, expires_in=PRESIGNED_URL_EXPIRES):
    """S3 객체에 대해 presigned URL 생성"""
    return get_s3().generate_presigned_url(
        ClientMethod='get_object',
        Params={'Bucket': BUCKET_NAME, 'Key': key},
        ExpiresIn=expires_in
    )


def upload_to_s3(file_path, key):
    """파일을 S3에 업로드"""
    get_s3().upload_file(str(file_path), BUCKET_NAME, key, Config=s3_config)


def upload_fileobj(fileobj, key, content_type=None):
    """파일 객체(업로드 스트림)를 S3에 업로드"""
    extra_args = {'ContentType': content_type} if content_type else None
    get_s3().upload_fileobj(fileobj, BUCKET_NAME, key, ExtraArgs=extra_args, Config=s3_config)


def check_bucket():
    get_s3().head_bucket(Bucket=BUCKET_NAME)
