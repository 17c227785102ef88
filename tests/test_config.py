from __future__ import annotations

from pathlib import Path

import pytest

from cob.cli.run import resolve_run_configuration
from cob.config import FileConfig, load_file_config, parse_tool_table
from cob.errors import ConfigError
from cob.model import RunConfiguration


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "pyproject.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_file_config_missing_file(tmp_path: Path) -> None:
    assert load_file_config(tmp_path / "pyproject.toml") == FileConfig()


def test_load_file_config_without_table(tmp_path: Path) -> None:
    path = _write(tmp_path, '[project]\nname = "x"\n')
    assert load_file_config(path) == FileConfig()


def test_load_file_config_reads_tool_table(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
[tool.cob]
bench = "Encode"
benchtime = "2s"
threshold = 0.2
benchmem = true
only-degression = true
harness = "go1.22"
args = ["-count", "1"]
""",
    )
    assert load_file_config(path) == FileConfig(
        bench="Encode",
        benchtime="2s",
        threshold=0.2,
        benchmem=True,
        only_degression=True,
        harness="go1.22",
        args=("-count", "1"),
    )


def test_integer_threshold_is_accepted() -> None:
    assert parse_tool_table({"threshold": 1}).threshold == 1.0


@pytest.mark.parametrize(
    ("table", "pattern"),
    [
        ({"threshold": "high"}, "threshold must be a number"),
        ({"threshold": True}, "threshold must be a number"),
        ({"benchmem": "yes"}, "benchmem must be a boolean"),
        ({"bench": 3}, "bench must be a string"),
        ({"args": "-count 1"}, "args must be a list of strings"),
        ({"args": ["-count", 1]}, "args must be a list of strings"),
        ({"colour": True}, "unknown key"),
    ],
)
def test_parse_tool_table_rejects_invalid(table: dict[str, object], pattern: str) -> None:
    with pytest.raises(ConfigError, match=pattern):
        parse_tool_table(table)


def test_load_file_config_invalid_toml(tmp_path: Path) -> None:
    path = _write(tmp_path, "[tool.cob\nbench = ")
    with pytest.raises(ConfigError, match="failed to parse"):
        load_file_config(path)


def test_load_file_config_table_must_be_table(tmp_path: Path) -> None:
    path = _write(tmp_path, '[tool]\ncob = "fast"\n')
    with pytest.raises(ConfigError, match="must be a table"):
        load_file_config(path)


def _resolve(file_config: FileConfig, **overrides: object) -> RunConfiguration:
    kwargs: dict[str, object] = {
        "bench": None,
        "benchtime": None,
        "threshold": None,
        "benchmem": None,
        "only_degression": None,
        "harness": None,
        "args": [],
    }
    kwargs.update(overrides)
    return resolve_run_configuration(file_config, **kwargs)  # type: ignore[arg-type]


def test_resolve_defaults() -> None:
    assert _resolve(FileConfig()) == RunConfiguration()


def test_resolve_file_values_over_defaults() -> None:
    config = _resolve(FileConfig(bench="Encode", threshold=0.3, benchmem=True, args=("-count", "2")))
    assert config.bench_pattern == "Encode"
    assert config.threshold == 0.3
    assert config.mem_stats is True
    assert config.extra_args == ("-count", "2")
    assert config.bench_time == "1s"


def test_resolve_cli_values_over_file() -> None:
    config = _resolve(
        FileConfig(bench="Encode", threshold=0.3, harness="go1.21", args=("-count", "2")),
        bench="Decode",
        threshold=0.05,
        harness="go",
        args=["-cpu", "4"],
    )
    assert config.bench_pattern == "Decode"
    assert config.threshold == 0.05
    assert config.harness == "go"
    assert config.extra_args == ("-cpu", "4")


def test_resolve_cli_false_overrides_file_true() -> None:
    config = _resolve(FileConfig(benchmem=True, only_degression=True), benchmem=False, only_degression=False)
    assert config.mem_stats is False
    assert config.only_degression is False


def test_resolve_unset_flags_fall_back_to_file() -> None:
    config = _resolve(FileConfig(benchmem=True, only_degression=True))
    assert config.mem_stats is True
    assert config.only_degression is True


@pytest.mark.parametrize("document", ['tool = "x"\n', "tool = [1, 2]\n"])
def test_load_file_config_tool_must_be_table(tmp_path: Path, document: str) -> None:
    path = _write(tmp_path, document)
    with pytest.raises(ConfigError, match=r"\[tool\] .* must be a table"):
        load_file_config(path)
