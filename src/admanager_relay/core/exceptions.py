"""Custom exceptions for the AdManager revenue relay.

Every error carries an :class:`ErrorKind` so callers can branch on the kind of
failure instead of inspecting message text.
"""

import re
from enum import Enum


class ErrorKind(str, Enum):
    """Error kinds for programmatic error handling."""

    CONFIG_MISSING = "CONFIG_MISSING"
    AUTH_FAILURE = "AUTH_FAILURE"
    TIMEOUT = "TIMEOUT"
    REPORT_FAILED = "REPORT_FAILED"
    CANCELLED = "CANCELLED"
    DOWNLOAD_FAILURE = "DOWNLOAD_FAILURE"
    PARSE_FAILURE = "PARSE_FAILURE"
    API_FAILURE = "API_FAILURE"


class AdManagerRelayError(Exception):
    """Base exception for all relay errors."""

    kind: ErrorKind = ErrorKind.API_FAILURE

    @property
    def requires_setup(self) -> bool:
        """Whether the failure is fixed by supplying configuration."""
        return self.kind is ErrorKind.CONFIG_MISSING

    @property
    def requires_auth(self) -> bool:
        """Whether the failure points at credentials rather than the API."""
        return self.kind in (ErrorKind.CONFIG_MISSING, ErrorKind.AUTH_FAILURE)


class ConfigurationError(AdManagerRelayError):
    """Raised when required configuration is missing."""

    kind = ErrorKind.CONFIG_MISSING


class AuthenticationError(AdManagerRelayError):
    """Raised when the service account cannot authenticate."""

    kind = ErrorKind.AUTH_FAILURE


class APIError(AdManagerRelayError):
    """Raised when an Ad Manager API call fails."""

    kind = ErrorKind.API_FAILURE


class ReportTimeoutError(AdManagerRelayError):
    """Raised when a report job does not complete within its polling limit."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, job_id: int | str, attempts: int):
        self.job_id = job_id
        self.attempts = attempts
        super().__init__(
            f"Timed out waiting for report job {job_id} after {attempts} attempts"
        )


class ReportFailedError(AdManagerRelayError):
    """Raised when Ad Manager reports the job as failed."""

    kind = ErrorKind.REPORT_FAILED

    def __init__(self, job_id: int | str):
        self.job_id = job_id
        super().__init__(f"Report job {job_id} failed")


class ReportCancelledError(AdManagerRelayError):
    """Raised when the caller stops waiting on a report job."""

    kind = ErrorKind.CANCELLED

    def __init__(self, job_id: int | str):
        self.job_id = job_id
        super().__init__(f"Stopped waiting for report job {job_id}")


class DownloadError(AdManagerRelayError):
    """Raised when the report output cannot be downloaded."""

    kind = ErrorKind.DOWNLOAD_FAILURE


class ReportParseError(AdManagerRelayError):
    """Raised when the report output cannot be read."""

    kind = ErrorKind.PARSE_FAILURE


def sanitize_error_message(msg: str) -> str:
    """Remove potential credentials from error messages.

    Examples:
        >>> sanitize_error_message("Token abc123xyz456def789ghi0 failed")
        'Token [REDACTED] failed'
        >>> sanitize_error_message("relay@project.iam.gserviceaccount.com denied")
        '[EMAIL_REDACTED] denied'
    """
    # PEM blocks first so the base64 body is dropped as a whole
    msg = re.sub(
        r"-----BEGIN [A-Z ]+-----.*?(-----END [A-Z ]+-----|$)",
        "[KEY_REDACTED]",
        msg,
        flags=re.DOTALL,
    )

    # Anything that looks like a token (20+ alphanumeric/dash/underscore, with a digit)
    msg = re.sub(r"(?=[A-Za-z_-]*[0-9])[A-Za-z0-9_-]{20,}", "[REDACTED]", msg)

    msg = re.sub(r"\b[\w.-]+@[\w.-]+\.\w+\b", "[EMAIL_REDACTED]", msg)

    msg = re.sub(
        r"(api[_-]?key|token|secret|password|private[_-]?key)[\"']?\s*[:=]\s*[\"']?[^\s\"']+",
        r"\1=[REDACTED]",
        msg,
        flags=re.IGNORECASE,
    )

    return msg
