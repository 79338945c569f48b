from __future__ import annotations

import importlib.metadata
import json
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DIST_NAME = "cellpad"


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode().strip() or None


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None


def _commit_from_git() -> tuple[Optional[str], bool]:
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "HEAD"], here)
    if commit is None:
        return None, False
    status = _run_git(["status", "--porcelain"], here)
    return commit, bool(status)


def _commit_from_direct_url() -> Optional[str]:
    # PEP 610 direct_url.json carries the VCS commit when installed from a repository
    try:
        dist = importlib.metadata.distribution(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None
    text = dist.read_text("direct_url.json")
    if not text:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return (data.get("vcs_info") or {}).get("commit_id")


def get_build_info() -> BuildInfo:
    commit, dirty = _commit_from_git()
    if commit is None:
        commit = _commit_from_direct_url()
    return BuildInfo(version=_installed_version(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    info = get_build_info()
    version = info.version or "unknown"
    if not info.commit:
        return f"cellpad {version}"
    dirty_suffix = "-dirty" if info.dirty else ""
    # Short (7-character) git hashes
    return f"cellpad {version} ({info.commit[:7]}{dirty_suffix})"
