"""
Data models for s3presign
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

SCOPE_TERMINATOR = "aws4_request"


@dataclass(frozen=True)
class Credentials:
    """Access key pair used to sign one request."""
    access_key: str
    secret_key: str = field(repr=False)


@dataclass(frozen=True)
class Scope:
    """
    Credential scope binding a signature to a date, region and service.

    The date must be the first eight characters of the request timestamp;
    use from_timestamp() to keep the two consistent.
    """
    date: str
    region: str
    service: str = "s3"
    terminator: str = SCOPE_TERMINATOR

    @classmethod
    def from_timestamp(cls, timestamp: str, region: str, service: str = "s3") -> "Scope":
        return cls(date=timestamp[:8], region=region, service=service)

    @property
    def credential_scope(self) -> str:
        return f"{self.date}/{self.region}/{self.service}/{self.terminator}"


@dataclass(frozen=True)
class RequestDescriptor:
    """Represents the request a presigned URL authorizes."""
    method: str
    bucket: str
    key: str
    expires_in_seconds: int
    timestamp: str
    endpoint: str = "s3.amazonaws.com"

    @property
    def path(self) -> str:
        """Object key with a leading separator."""
        return self.key if self.key.startswith("/") else f"/{self.key}"

    @property
    def host(self) -> str:
        return f"{self.bucket}.{self.endpoint}"


@dataclass
class PresignedUrlResult:
    """Represents a presigned URL response."""
    url: str
    expires_at: datetime


@dataclass
class OperationResult:
    """Outcome of an upload or delete operation."""
    success: bool
    message: str


@dataclass
class DownloadResult:
    """Outcome of an in-memory download; content is None on failure."""
    success: bool
    content: Optional[bytes]
    message: str


@dataclass
class ExistsResult:
    """Outcome of an existence check; exists is None when the check failed."""
    success: bool
    exists: Optional[bool]
    message: str
