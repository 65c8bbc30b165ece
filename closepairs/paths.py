"""
Locations of the visualizer's settings files.

config.json and .env sit in the project root during development. A frozen
(PyInstaller) build looks for them beside its executable instead.
"""

import sys
from pathlib import Path


def get_app_dir() -> Path:
    """Directory holding config.json and .env."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    # closepairs/ lives directly under the project root
    return Path(__file__).resolve().parent.parent


def get_config_path() -> Path:
    return get_app_dir() / "config.json"


def get_env_path() -> Path:
    return get_app_dir() / ".env"
