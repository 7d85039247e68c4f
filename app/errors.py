"""
Error types for the pending-resume pipeline.

Only the storage errors are ever raised to callers. The remaining classes
name the expected failure outcomes and carry the message that ends up in a
``SaveResult``.
"""


class ResumeDataError(Exception):
    """Base class for resume data failures."""

    message = "Resume data error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class StorageWriteError(ResumeDataError):
    message = "Failed to save resume data"


class StorageReadError(ResumeDataError):
    message = "Failed to read resume data"


class StorageQuotaExceededError(ResumeDataError):
    message = "Storage quota exceeded"


class NoDataError(ResumeDataError):
    message = "No resume data found"


class RemoteRejection(ResumeDataError):
    message = "Failed to save resume"


class TransportFailure(ResumeDataError):
    message = "Network error while saving resume"
