from __future__ import annotations

import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

from loguru import logger

from latex_math_convert.errors import ErrorInfo, classify_file_error
from latex_math_convert.rewriter.convert import ConversionResult, rewrite_delimiters
from latex_math_convert.rewriter.state import ScanMode
from latex_math_convert.settings import ConverterSettings
from latex_math_convert.workflows.io import (
    read_stream,
    read_text,
    write_stream,
    write_text_atomic,
)
from latex_math_convert.workflows.walker import iter_markdown_files

STATUS_UPDATED = "updated"
STATUS_UNCHANGED = "unchanged"
STATUS_PRINTED = "printed"
STATUS_FAILED = "failed"


@dataclass
class FileOutcome:
    path: Path
    status: str
    result: Optional[ConversionResult] = None
    error: Optional[ErrorInfo] = None


@dataclass
class RunSummary:
    outcomes: List[FileOutcome] = field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def failures(self) -> List[ErrorInfo]:
        return [o.error for o in self.outcomes if o.error is not None]

    @property
    def exit_code(self) -> int:
        return 1 if self.failures else 0


def _describe_unbalanced(result: ConversionResult) -> List[str]:
    problems = []
    if result.final_state.mode is ScanMode.IN_FENCE:
        problems.append(f"unclosed code fence {result.final_state.marker}")
    elif result.final_state.mode is ScanMode.IN_INLINE:
        problems.append(f"unclosed inline code {result.final_state.marker}")
    if result.unclosed_math:
        problems.append(f"{result.unclosed_math} unterminated math span(s)")
    return problems


class ConversionWorkflow:
    """Runs the rewriter over files, directories or a stream.

    Converted documents are either written back in place (``write=True``)
    or printed to ``stdout``. ``force_stdout`` always prints, even when
    ``write`` is set. Every input is handled on its own: a failure is
    recorded on that item's outcome and the remaining inputs still run.
    """

    def __init__(
        self,
        settings: Optional[ConverterSettings] = None,
        write: bool = False,
        force_stdout: bool = False,
        stdout: Optional[TextIO] = None,
    ):
        self.settings = settings or ConverterSettings()
        self.write = write
        self.force_stdout = force_stdout
        self.stdout = stdout

    @property
    def writes_in_place(self) -> bool:
        return self.write and not self.force_stdout

    def _fail(self, exc: BaseException, stage: str, path: Path) -> FileOutcome:
        err = classify_file_error(exc, stage=stage, path=path)
        logger.error(
            f"Failed to convert {path} [{err.code} @ {err.stage}]: {err.message}"
        )
        return FileOutcome(path=path, status=STATUS_FAILED, error=err)

    def process_file(self, path: Union[str, Path]) -> FileOutcome:
        path = Path(path)
        try:
            source = read_text(path, encoding=self.settings.encoding)
        except (OSError, UnicodeError) as e:
            return self._fail(e, "read", path)

        result = rewrite_delimiters(source)
        problems = _describe_unbalanced(result)
        if problems:
            logger.warning(f"{path}: {', '.join(problems)}; converted up to end of file")
        logger.debug(
            f"{path}: {result.inline_count} inline, {result.display_count} display rewrite(s)"
        )

        if self.writes_in_place:
            if result.content == source:
                logger.info(f"unchanged: {path}")
                return FileOutcome(path=path, status=STATUS_UNCHANGED, result=result)
            try:
                write_text_atomic(path, result.content, encoding=self.settings.encoding)
            except (OSError, UnicodeError) as e:
                return self._fail(e, "write", path)
            logger.info(f"updated: {path}")
            return FileOutcome(path=path, status=STATUS_UPDATED, result=result)

        try:
            write_stream(result.content, self.stdout)
        except (OSError, UnicodeError) as e:
            return self._fail(e, "write", path)
        logger.info(f"converted: {path}")
        return FileOutcome(path=path, status=STATUS_PRINTED, result=result)

    def run(self, paths: Iterable[Union[str, Path]]) -> RunSummary:
        summary = RunSummary()

        for raw in paths:
            path = Path(raw)
            try:
                st = path.stat()
            except OSError as e:
                summary.outcomes.append(self._fail(e, "stat", path))
                continue

            if stat.S_ISDIR(st.st_mode):
                logger.debug(f"Walking directory {path}")

                def _walk_error(err: OSError, _root: Path = path) -> None:
                    failed = Path(err.filename) if err.filename else _root
                    summary.outcomes.append(self._fail(err, "walk", failed))

                for md_file in iter_markdown_files(
                    path, self.settings.extensions, on_error=_walk_error
                ):
                    summary.outcomes.append(self.process_file(md_file))
            elif stat.S_ISREG(st.st_mode):
                summary.outcomes.append(self.process_file(path))
            else:
                logger.warning(f"Skipping {path}: not a regular file or directory")

        logger.debug(
            f"Run finished: {summary.count(STATUS_UPDATED)} updated, "
            f"{summary.count(STATUS_UNCHANGED)} unchanged, "
            f"{summary.count(STATUS_PRINTED)} printed, "
            f"{summary.count(STATUS_FAILED)} failed"
        )
        return summary

    def convert_stream(
        self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None
    ) -> ConversionResult:
        """Convert one document read from ``stdin`` and print it."""
        result = rewrite_delimiters(read_stream(stdin))
        problems = _describe_unbalanced(result)
        if problems:
            logger.warning(f"<stdin>: {', '.join(problems)}; converted up to end of input")
        write_stream(result.content, stdout if stdout is not None else self.stdout)
        return result
