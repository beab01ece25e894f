"""
AWS Signature V4 presigning for s3presign

Every function in this module is a pure function of its arguments. Nothing
is cached between calls, so presigning is safe from any number of threads
or tasks at once.
"""

import hashlib
import hmac
import logging
import re
from datetime import datetime, UTC
from typing import Optional, Union
from urllib.parse import quote

from .error import InvalidCredentialsException, InvalidRequestException, SigningException
from .models import SCOPE_TERMINATOR, Credentials, RequestDescriptor, Scope

ALGORITHM = "AWS4-HMAC-SHA256"
KEY_PREFIX = "AWS4"
SIGNED_HEADERS = "host"
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"

DEFAULT_REGION = "us-east-1"
DEFAULT_ENDPOINT = "s3.amazonaws.com"
DEFAULT_EXPIRES_IN = 3600
MAX_EXPIRES_IN = 604800
SUPPORTED_METHODS = ("GET", "PUT", "DELETE", "HEAD")
BUCKET_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")

logger = logging.getLogger(__name__)


def amz_timestamp(now: Optional[datetime] = None) -> str:
    """
    Format one clock reading as YYYYMMDDTHHMMSSZ.

    Seconds are truncated. Callers derive the scope date by slicing the
    first eight characters of the result, never by reading the clock again.
    """
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is not None:
        now = now.astimezone(UTC)
    return now.strftime(AMZ_DATE_FORMAT)


def _utf8(value: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidRequestException("Request component is not valid UTF-8 text.") from None


def _quote(value: str, safe: str = "") -> str:
    return quote(_utf8(value), safe=safe)


def canonical_uri(key: str) -> str:
    """
    Percent-encode an object key for the canonical request.

    The key is scanned byte by byte; only A-Z a-z 0-9 - _ . ~ and / pass
    through. Existing %XX sequences are not decoded.
    """
    if not key.startswith("/"):
        key = f"/{key}"
    return _quote(key, safe="/")


def canonical_query(query: str) -> str:
    """
    Build the canonical query string from raw name=value pairs joined by &.

    Names and values are encoded independently with no separator exception.
    Pairs are ordered by the raw name compared byte-wise; equal names keep
    their input order.
    """
    if not query:
        return ""

    encoded_pairs = []
    for pair in query.split("&"):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        encoded_pairs.append((_utf8(name), f"{_quote(name)}={_quote(value)}"))

    encoded_pairs.sort(key=lambda item: item[0])
    return "&".join(encoded for _, encoded in encoded_pairs)


def canonical_request(method: str, uri: str, query: str, host: str) -> str:
    """Assemble the canonical request for a host-only, unsigned-payload presign."""
    return "\n".join([
        method,
        uri,
        query,
        f"host:{host}",
        "",
        SIGNED_HEADERS,
        UNSIGNED_PAYLOAD,
    ])


def hash_canonical_request(request: str) -> str:
    try:
        return hashlib.sha256(request.encode("utf-8")).hexdigest()
    except (TypeError, ValueError):
        raise SigningException("SHA-256 of the canonical request failed.") from None


def string_to_sign(timestamp: str, scope: Scope, hashed_request: str) -> str:
    return "\n".join([
        ALGORITHM,
        timestamp,
        scope.credential_scope,
        hashed_request,
    ])


def _hmac_sha256(key: bytes, message: str) -> bytes:
    # Exceptions are not chained: the original would carry key material.
    try:
        return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()
    except (TypeError, ValueError):
        raise SigningException("HMAC-SHA256 computation failed.") from None


def derive_signing_key(
    secret_key: str,
    date: str,
    region: str,
    service: str = "s3",
    terminator: str = SCOPE_TERMINATOR,
) -> bytes:
    """
    Derive the scoped signing key from a secret key.

    Each stage is keyed with the raw digest of the previous stage.
    """
    try:
        seed = f"{KEY_PREFIX}{secret_key}".encode("utf-8")
    except UnicodeEncodeError:
        raise SigningException("Secret key is not valid UTF-8 text.") from None

    k_date = _hmac_sha256(seed, date)
    k_region = _hmac_sha256(k_date, region)
    k_service = _hmac_sha256(k_region, service)
    return _hmac_sha256(k_service, terminator)


def compute_signature(signing_key: bytes, string_to_sign: str) -> str:
    return _hmac_sha256(signing_key, string_to_sign).hex()


def _validate_credentials(credentials: Credentials) -> None:
    if not credentials.access_key:
        raise InvalidCredentialsException("access_key")
    if "&" in credentials.access_key:
        raise InvalidCredentialsException("access_key", "must not contain '&'")
    if not credentials.secret_key:
        raise InvalidCredentialsException("secret_key")


def _validate_request(request: RequestDescriptor, region: str) -> None:
    if request.method not in SUPPORTED_METHODS:
        raise InvalidRequestException(
            f"Unsupported HTTP method '{request.method}'. Expected one of {', '.join(SUPPORTED_METHODS)}."
        )
    if not BUCKET_NAME_PATTERN.match(request.bucket) or ".." in request.bucket:
        raise InvalidRequestException(
            f"Bucket name '{request.bucket}' is not a valid DNS-compatible bucket name."
        )
    if not region:
        raise InvalidRequestException("Region must be a non-empty string.")
    if request.expires_in_seconds < 1 or request.expires_in_seconds > MAX_EXPIRES_IN:
        raise InvalidRequestException(
            "Expiry must be between 1 second and 604800 seconds (7 days) for SigV4 presigned URLs."
        )


def presign(request: RequestDescriptor, credentials: Credentials, region: str = DEFAULT_REGION) -> str:
    """
    Sign a request descriptor and return the presigned URL.

    Query parameters appear in signed (sorted) order with X-Amz-Signature
    appended last, outside the signed set.
    """
    _validate_credentials(credentials)
    _validate_request(request, region)

    scope = Scope.from_timestamp(request.timestamp, region)
    query = "&".join([
        f"X-Amz-Algorithm={ALGORITHM}",
        f"X-Amz-Credential={credentials.access_key}/{scope.credential_scope}",
        f"X-Amz-Date={request.timestamp}",
        f"X-Amz-Expires={request.expires_in_seconds}",
        f"X-Amz-SignedHeaders={SIGNED_HEADERS}",
    ])

    uri = canonical_uri(request.path)
    canonical_querystring = canonical_query(query)
    creq = canonical_request(request.method, uri, canonical_querystring, request.host)
    logger.debug("[S3Presign][Signer] canonical request:\n%s", creq)

    to_sign = string_to_sign(request.timestamp, scope, hash_canonical_request(creq))
    logger.debug("[S3Presign][Signer] string to sign:\n%s", to_sign)

    signing_key = derive_signing_key(
        credentials.secret_key, scope.date, scope.region, scope.service, scope.terminator
    )
    signature = compute_signature(signing_key, to_sign)

    return f"https://{request.host}{uri}?{canonical_querystring}&X-Amz-Signature={signature}"


def generate_presigned_url(
    method: str,
    bucket: str,
    key: str,
    credentials: Credentials,
    region: str = DEFAULT_REGION,
    expires_in_seconds: int = DEFAULT_EXPIRES_IN,
    timestamp: Union[datetime, str, None] = None,
    endpoint: str = DEFAULT_ENDPOINT,
) -> str:
    """
    Generate a presigned URL with AWS Signature V4.

    timestamp may be a datetime, an already formatted YYYYMMDDTHHMMSSZ
    string, or None to read the clock once.
    """
    if isinstance(timestamp, str):
        try:
            if len(timestamp) != 16:
                raise ValueError(timestamp)
            datetime.strptime(timestamp, AMZ_DATE_FORMAT)
        except ValueError:
            raise InvalidRequestException(
                f"Timestamp '{timestamp}' is not in YYYYMMDDTHHMMSSZ format."
            ) from None
        amz_date = timestamp
    else:
        amz_date = amz_timestamp(timestamp)

    request = RequestDescriptor(
        method=method.upper(),
        bucket=bucket,
        key=key,
        expires_in_seconds=expires_in_seconds,
        timestamp=amz_date,
        endpoint=endpoint,
    )
    return presign(request, credentials, region)
