from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import Optional


def _git_commit(path: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=str(path), stderr=subprocess.DEVNULL,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def get_version() -> str:
    try:
        return importlib.metadata.version("lineedit")
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def get_version_string() -> str:
    """Package version, plus the git commit when running from a checkout."""
    version = get_version()
    if os.environ.get("LINEEDIT_NO_GIT"):
        return version
    commit = _git_commit(Path(__file__).resolve().parent)
    return f"{version} ({commit})" if commit else version
