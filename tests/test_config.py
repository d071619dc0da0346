import os
from pathlib import Path

from malt import config


def test_defaults(monkeypatch):
    for var in ("MALT_PRELUDE_PATH", "MALT_LOG_LEVEL", "MALT_MAX_ERROR_CONTEXT", "MALT_PROMPT"):
        monkeypatch.delenv(var, raising=False)
    assert config.get_prelude_root() == Path(config.__file__).resolve().parent / "prelude"
    assert (config.get_prelude_root() / "core.malt").is_file()
    assert config.get_log_level() == "WARNING"
    assert config.get_max_error_context() == 8
    assert config.get_prompt() == "user> "


def test_log_level_is_normalised(monkeypatch):
    monkeypatch.setenv("MALT_LOG_LEVEL", "debug")
    assert config.get_log_level() == "DEBUG"


def test_max_error_context(monkeypatch):
    monkeypatch.setenv("MALT_MAX_ERROR_CONTEXT", "3")
    assert config.get_max_error_context() == 3
    monkeypatch.setenv("MALT_MAX_ERROR_CONTEXT", "-1")
    assert config.get_max_error_context() == 0
    monkeypatch.setenv("MALT_MAX_ERROR_CONTEXT", "lots")
    assert config.get_max_error_context() == 8


def test_prelude_path_pointing_at_a_file_uses_its_directory(tmp_path, monkeypatch):
    target = tmp_path / "core.malt"
    target.write_text("", encoding="utf-8")
    monkeypatch.setenv("MALT_PRELUDE_PATH", str(target))
    assert config.get_prelude_root() == tmp_path


def test_paths_from_env(monkeypatch):
    sep = ";" if os.name == "nt" else ":"
    monkeypatch.setenv("MALT_TEST_PATHS", f"/a{sep} /b {sep}{sep}")
    assert config.paths_from_env("MALT_TEST_PATHS", []) == [Path("/a"), Path("/b")]
    monkeypatch.delenv("MALT_TEST_PATHS")
    assert config.paths_from_env("MALT_TEST_PATHS", ["/default"]) == [Path("/default")]
