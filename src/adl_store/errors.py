from __future__ import annotations
from typing import Dict, Optional, Type


class StoreError(Exception):
    """Failure of a store operation, with the details the server returned."""

    def __init__(
        self,
        message: str,
        http_status: Optional[int] = None,
        request_id: Optional[str] = None,
        remote_exception_name: Optional[str] = None,
        remote_exception_message: Optional[str] = None,
        last_error: Optional[BaseException] = None,
        num_retries: int = 0,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.request_id = request_id
        self.remote_exception_name = remote_exception_name
        self.remote_exception_message = remote_exception_message
        self.last_error = last_error
        self.num_retries = num_retries


REMOTE_EXCEPTIONS: Dict[str, Type[Exception]] = {
    "FileNotFoundException": FileNotFoundError,
    "FileAlreadyExistsException": FileExistsError,
    "AccessControlException": PermissionError,
    "SecurityException": PermissionError,
    "IllegalArgumentException": ValueError,
    "BadOffsetException": ValueError,
    "UnsupportedOperationException": NotImplementedError,
    "IOException": OSError,
}


def translate_error(
    op: str,
    path: str,
    remote_passthrough: bool,
    http_status: Optional[int] = None,
    request_id: Optional[str] = None,
    remote_exception_name: Optional[str] = None,
    remote_exception_message: Optional[str] = None,
    last_error: Optional[BaseException] = None,
    num_retries: int = 0,
) -> Exception:
    """Build the exception a failed operation should raise."""
    if remote_passthrough and remote_exception_name:
        exc_type = REMOTE_EXCEPTIONS.get(remote_exception_name, OSError)
        return exc_type(remote_exception_message or remote_exception_name)
    if last_error is not None:
        message = f"{op} failed for {path}: {last_error}"
    elif remote_exception_name:
        message = f"{op} failed for {path}: {remote_exception_name} {remote_exception_message or ''}".rstrip()
    else:
        message = f"{op} failed for {path}: HTTP {http_status}"
    return StoreError(
        message,
        http_status=http_status,
        request_id=request_id,
        remote_exception_name=remote_exception_name,
        remote_exception_message=remote_exception_message,
        last_error=last_error,
        num_retries=num_retries,
    )
