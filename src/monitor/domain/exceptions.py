"""Custom exceptions for the monitor layer."""


class MonitorException(Exception):
    """Base exception for all monitor errors."""

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize monitor exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ReadingError(MonitorException):
    """Base exception for reading acquisition errors."""

    pass


class ReadingFetchError(ReadingError):
    """Raised when the latest reading cannot be fetched (network, auth or server error)."""

    def __init__(self, device_id: str, reason: str, status_code: int | None = None):
        details = {"device_id": device_id, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            message=f"Failed to fetch latest reading for device '{device_id}': {reason}",
            details=details,
        )


class MalformedReadingError(ReadingError):
    """Raised when a reading payload is structurally incomplete or invalid."""

    def __init__(self, message: str, validation_errors: list[str] | None = None):
        details = {}
        if validation_errors:
            details["validation_errors"] = validation_errors
        super().__init__(message, details)


class ThresholdConfigError(MonitorException):
    """Raised when a threshold configuration cannot be parsed or validated."""

    pass


class ParameterMappingError(MonitorException):
    """Raised when the parameter accessor table does not cover every parameter."""

    def __init__(self, missing: list[str], unknown: list[str] | None = None):
        details = {"missing": missing}
        if unknown:
            details["unknown"] = unknown
        super().__init__(
            message=f"Parameter accessor table is incomplete: missing={missing}",
            details=details,
        )


class PartialSampleError(MonitorException):
    """Raised when a chart sample does not supply exactly the tracked series."""

    def __init__(self, missing: list[str], unexpected: list[str]):
        super().__init__(
            message=f"Sample does not match tracked series (missing={missing}, unexpected={unexpected})",
            details={"missing": missing, "unexpected": unexpected},
        )


class DeviceDirectoryError(MonitorException):
    """Raised when session identity or device listings cannot be retrieved."""

    pass
