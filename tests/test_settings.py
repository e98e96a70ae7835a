import pytest
from pydantic import ValidationError

from latex_math_convert.settings import ConverterSettings


def test_defaults():
    settings = ConverterSettings()
    assert settings.extensions == (".md", ".markdown")
    assert settings.encoding == "utf-8"
    assert settings.log_level == "INFO"


def test_from_env_without_variables_uses_defaults():
    assert ConverterSettings.from_env() == ConverterSettings()


def test_from_env_reads_and_normalizes(monkeypatch):
    monkeypatch.setenv("LATEX_MATH_CONVERT_EXTENSIONS", "MD, .Txt,md")
    monkeypatch.setenv("LATEX_MATH_CONVERT_ENCODING", "UTF8")
    monkeypatch.setenv("LATEX_MATH_CONVERT_LOG_LEVEL", "debug")

    settings = ConverterSettings.from_env()

    assert settings.extensions == (".md", ".txt")
    assert settings.encoding == "utf-8"
    assert settings.log_level == "DEBUG"


def test_empty_variables_are_ignored(monkeypatch):
    monkeypatch.setenv("LATEX_MATH_CONVERT_LOG_LEVEL", "  ")
    assert ConverterSettings.from_env().log_level == "INFO"


@pytest.mark.parametrize(
    "name, value",
    [
        ("LATEX_MATH_CONVERT_LOG_LEVEL", "loud"),
        ("LATEX_MATH_CONVERT_ENCODING", "no-such-codec"),
        ("LATEX_MATH_CONVERT_EXTENSIONS", " , "),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        ConverterSettings.from_env()
