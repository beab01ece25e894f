"""
Exception classes for s3presign
"""


class S3PresignException(Exception):
    """
    Base exception for all s3presign errors.
    """

    def __init__(self, message: str, status_code: int = None, error_code: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class InvalidRequestException(S3PresignException, ValueError):
    """Thrown when a request cannot be signed as given."""

    def __init__(self, message: str):
        super().__init__(message, error_code="InvalidRequest")


class InvalidCredentialsException(InvalidRequestException):
    """Thrown when the access key or secret key is missing or malformed."""

    def __init__(self, field_name: str, reason: str = "must be a non-empty string"):
        super().__init__(f"Credential '{field_name}' {reason}.")
        self.error_code = "InvalidCredentials"


class InvalidObjectNameException(InvalidRequestException):
    """Thrown when an object name is invalid."""

    def __init__(self, object_name: str):
        super().__init__(f"Object name '{object_name}' is invalid.")


class SigningException(S3PresignException):
    """
    Thrown when a hash or HMAC primitive fails while signing.

    The message never carries key material.
    """

    def __init__(self, message: str):
        super().__init__(message, error_code="SigningFailed")


class TransportException(S3PresignException):
    """Thrown when the HTTP request could not be completed."""

    def __init__(self, message: str):
        super().__init__(message, error_code="TransportError")


class ServerException(S3PresignException):
    """Thrown when the server returns an error."""

    def __init__(self, message: str, status_code: int, error_code: str = None):
        super().__init__(message, status_code, error_code)


class AccessDeniedException(ServerException):
    """Thrown when access is denied, including signature mismatches."""

    def __init__(self, message: str, error_code: str = "AccessDenied"):
        super().__init__(message, status_code=403, error_code=error_code)
