import sys
from pathlib import Path

from closepairs import paths


def test_development_paths_are_in_project_root():
    root = Path(paths.__file__).resolve().parent.parent
    assert paths.get_app_dir() == root
    assert paths.get_config_path() == root / "config.json"
    assert paths.get_env_path() == root / ".env"


def test_frozen_build_uses_executable_directory(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(tmp_path / "closepairs.exe"))

    assert paths.get_app_dir() == tmp_path
    assert paths.get_config_path() == tmp_path / "config.json"
