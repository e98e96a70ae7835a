import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Union

from loguru import logger

from latex_math_convert.settings import DEFAULT_EXTENSIONS


def is_markdown_file(
    path: Union[str, Path], extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> bool:
    """Case-insensitive suffix match against ``extensions``."""
    name = Path(path).name.lower()
    return any(name.endswith(ext.lower()) for ext in extensions)


def iter_markdown_files(
    root: Union[str, Path],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    on_error: Optional[Callable[[OSError], None]] = None,
) -> Iterator[Path]:
    """Yield Markdown files below ``root``, recursing into subdirectories.

    Entries are visited in sorted order so runs are reproducible. Symlinked
    directories are not followed; symlinked files are yielded like any other
    file. A directory that cannot be listed is reported to ``on_error`` and
    skipped, and the walk carries on with the rest of the tree.
    """

    extensions = tuple(extensions)

    def _onerror(err: OSError) -> None:
        if on_error is not None:
            on_error(err)
        else:
            logger.warning(f"Could not read directory {err.filename}: {err.strerror}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_onerror):
        dirnames.sort()
        for filename in sorted(filenames):
            if is_markdown_file(filename, extensions):
                yield Path(dirpath) / filename
