"""
s3presign - AWS Signature V4 presigned URLs and object operations for S3-compatible storage
"""

__version__ = "1.0.0"
__author__ = "Kegeo Solutions Ltd"

from .client import S3Client
from ._signer import (
    amz_timestamp,
    canonical_uri,
    canonical_query,
    canonical_request,
    hash_canonical_request,
    string_to_sign,
    derive_signing_key,
    compute_signature,
    presign,
    generate_presigned_url,
)
from .models import (
    Credentials,
    Scope,
    RequestDescriptor,
    PresignedUrlResult,
    OperationResult,
    DownloadResult,
    ExistsResult,
)
from .error import (
    S3PresignException,
    InvalidRequestException,
    InvalidCredentialsException,
    InvalidObjectNameException,
    SigningException,
    TransportException,
    ServerException,
    AccessDeniedException,
)

__all__ = [
    "S3Client",
    "amz_timestamp",
    "canonical_uri",
    "canonical_query",
    "canonical_request",
    "hash_canonical_request",
    "string_to_sign",
    "derive_signing_key",
    "compute_signature",
    "presign",
    "generate_presigned_url",
    "Credentials",
    "Scope",
    "RequestDescriptor",
    "PresignedUrlResult",
    "OperationResult",
    "DownloadResult",
    "ExistsResult",
    "S3PresignException",
    "InvalidRequestException",
    "InvalidCredentialsException",
    "InvalidObjectNameException",
    "SigningException",
    "TransportException",
    "ServerException",
    "AccessDeniedException",
]
