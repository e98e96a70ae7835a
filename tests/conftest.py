import io
import sys

import pytest
from loguru import logger

from latex_math_convert.settings import ConverterSettings
from latex_math_convert.workflows.processor import ConversionWorkflow

ENV_VARS = (
    "LATEX_MATH_CONVERT_EXTENSIONS",
    "LATEX_MATH_CONVERT_ENCODING",
    "LATEX_MATH_CONVERT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # The CLI binds a sink to whatever sys.stderr was during the test.
    logger.remove()
    logger.add(sys.__stderr__, level="DEBUG")


@pytest.fixture
def settings():
    return ConverterSettings()


@pytest.fixture
def out_stream():
    return io.StringIO()


@pytest.fixture
def printing_workflow(settings, out_stream):
    return ConversionWorkflow(settings=settings, stdout=out_stream)


@pytest.fixture
def writing_workflow(settings, out_stream):
    return ConversionWorkflow(settings=settings, write=True, stdout=out_stream)


@pytest.fixture
def docs_tree(tmp_path):
    """A small documentation tree with markdown and non-markdown files."""
    root = tmp_path / "docs"
    (root / "guide" / "advanced").mkdir(parents=True)
    (root / "index.md").write_text("Intro \\(a+b\\).\n", encoding="utf-8")
    (root / "notes.txt").write_text("Plain \\(x\\) text.\n", encoding="utf-8")
    (root / "guide" / "setup.MARKDOWN").write_text(
        "Display:\n\\[ E = mc^2 \\]\n", encoding="utf-8"
    )
    (root / "guide" / "advanced" / "code.md").write_text(
        "```\n\\(keep\\)\n```\n", encoding="utf-8"
    )
    return root
