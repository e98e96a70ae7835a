from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union


@dataclass
class ErrorInfo:
    """Normalized information about a failure on one input item.

    Stored on failed outcomes and logged, so failures in a batch are easy to
    aggregate and report.
    """

    code: str
    message: str
    stage: str
    path: Optional[str]
    exception_type: str

    def to_details_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "reason": self.message,
            "reason_code": self.code,
            "error_stage": self.stage,
            "exception_type": self.exception_type,
        }


def classify_file_error(
    exc: BaseException,
    stage: str,
    path: Union[str, Path, None] = None,
) -> ErrorInfo:
    """Map a raw exception raised while handling ``path`` to an ErrorInfo.

    ``stage`` is one of ``stat``, ``walk``, ``read`` or ``write``.
    """

    msg = str(exc) or exc.__class__.__name__
    etype = exc.__class__.__name__
    path_str = str(path) if path is not None else getattr(exc, "filename", None)
    if path_str is not None:
        path_str = str(path_str)

    if isinstance(exc, FileNotFoundError):
        return ErrorInfo(
            code="not_found",
            message=f"No such file or directory: {path_str}",
            stage=stage,
            path=path_str,
            exception_type=etype,
        )

    if isinstance(exc, PermissionError):
        return ErrorInfo(
            code="permission_denied",
            message=f"Permission denied: {path_str}",
            stage=stage,
            path=path_str,
            exception_type=etype,
        )

    if isinstance(exc, IsADirectoryError):
        return ErrorInfo(
            code="is_a_directory",
            message=f"Expected a file but found a directory: {path_str}",
            stage=stage,
            path=path_str,
            exception_type=etype,
        )

    if isinstance(exc, NotADirectoryError):
        return ErrorInfo(
            code="not_a_directory",
            message=f"Expected a directory: {path_str}",
            stage=stage,
            path=path_str,
            exception_type=etype,
        )

    if isinstance(exc, UnicodeDecodeError):
        return ErrorInfo(
            code="decode_error",
            message=f"Could not decode {path_str} as {exc.encoding}: {exc.reason}",
            stage=stage,
            path=path_str,
            exception_type=etype,
        )

    if isinstance(exc, UnicodeEncodeError):
        return ErrorInfo(
            code="encode_error",
            message=f"Could not encode output for {path_str} as {exc.encoding}: {exc.reason}",
            stage=stage,
            path=path_str,
            exception_type=etype,
        )

    if isinstance(exc, OSError):
        return ErrorInfo(
            code="io_error",
            message=msg,
            stage=stage,
            path=path_str,
            exception_type=etype,
        )

    # --- Fallback ---
    return ErrorInfo(
        code="unexpected_error",
        message=msg,
        stage=stage,
        path=path_str,
        exception_type=etype,
    )
