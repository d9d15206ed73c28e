"""
Custom exceptions for the export block store.

Every store operation raises one of these exceptions so callers can
handle failures without inspecting OS errors or subprocess details.
"""


class ExportStoreError(Exception):
    """Base exception for all export block store errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ExportsFileNotFoundError(ExportStoreError):
    """Raised when the target exports file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Exports file not found: {path}", {"path": path})
        self.path = path


class IdentifierNotFoundError(ExportStoreError):
    """Raised when no managed block exists for an identifier."""

    def __init__(self, identifier: str, path: str | None = None):
        details = {"identifier": identifier}
        message = f"Could not find export {identifier}"
        if path:
            details["path"] = path
            message += f" in {path}"
        super().__init__(message, details)
        self.identifier = identifier
        self.path = path


class ValidationFailedError(ExportStoreError):
    """Raised when the validator rejects a candidate exports file."""

    def __init__(self, diagnostics: str, returncode: int | None = None):
        details: dict = {"diagnostics": diagnostics}
        if returncode is not None:
            details["returncode"] = returncode
        super().__init__(f"Export verification failed:\n{diagnostics}", details)
        self.diagnostics = diagnostics
        self.returncode = returncode


class SubprocessFailedError(ExportStoreError):
    """Raised when an external command cannot be launched or exits non-zero."""

    def __init__(
        self,
        command: list[str],
        returncode: int | None = None,
        stderr: str = "",
        cause: Exception | None = None,
    ):
        details: dict = {"command": command}
        if returncode is not None:
            details["returncode"] = returncode
        if stderr:
            details["stderr"] = stderr
        if cause:
            details["cause"] = str(cause)

        message = f"Command failed: {' '.join(command)}"
        if cause:
            message += f": {cause}"
        elif returncode is not None:
            message += f": exit status {returncode}"
        if stderr:
            message += f"\n{stderr}"
        super().__init__(message, details)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.cause = cause


class ExportsIOError(ExportStoreError):
    """Raised when reading or writing an exports file fails."""

    def __init__(self, operation: str, path: str | None = None, cause: Exception | None = None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)
        message = f"Exports I/O error during {operation}"
        if path:
            message += f": {path}"
        super().__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause


class InvalidConfigError(ExportStoreError):
    """Raised when a configuration value cannot be used."""

    def __init__(self, field: str, reason: str, value: str | None = None):
        details = {"field": field, "reason": reason}
        if value is not None:
            details["value"] = value
        super().__init__(f"Invalid configuration for {field}: {reason}", details)
        self.field = field
        self.reason = reason
        self.value = value
