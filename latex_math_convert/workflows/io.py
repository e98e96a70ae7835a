import os
import sys
import tempfile
from pathlib import Path
from typing import Optional, TextIO, Union


def read_text(path: Union[str, Path], encoding: str = "utf-8") -> str:
    """Read a whole document, keeping its line endings as they are."""
    with open(path, "r", encoding=encoding, newline="") as f:
        return f.read()


def write_text_atomic(
    path: Union[str, Path], text: str, encoding: str = "utf-8"
) -> Path:
    """Replace the contents of ``path`` with ``text`` in one step.

    The text goes to a temporary file next to the target, which is then moved
    over it with ``os.replace``. Symlinks are written through to their target
    and the target's permission bits are kept. On failure the original file
    is left as it was and the temporary file is removed.
    """

    target = Path(path).resolve()
    existing_mode: Optional[int] = None
    try:
        existing_mode = target.stat().st_mode & 0o777
    except FileNotFoundError:
        existing_mode = None

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            newline="",
            delete=False,
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        if existing_mode is not None:
            os.chmod(tmp_path, existing_mode)
        os.replace(tmp_path, target)
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
    return target


def read_stream(stream: Optional[TextIO] = None) -> str:
    stream = stream if stream is not None else sys.stdin
    return stream.read()


def write_stream(text: str, stream: Optional[TextIO] = None) -> None:
    stream = stream if stream is not None else sys.stdout
    stream.write(text)
    stream.flush()
