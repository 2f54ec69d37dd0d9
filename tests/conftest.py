"""Shared fixtures: spec trees on disk and throwaway git repositories."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

import pytest
import yaml

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


def render_spec(frontmatter: Optional[Dict[str, Any]], body: str) -> str:
    """Serialize a spec file the way a person would write one."""
    if frontmatter is None:
        return body
    header = yaml.safe_dump(frontmatter, sort_keys=False, default_flow_style=False)
    return f"---\n{header}---\n{body}"


def write_spec(
    specs_dir: Path,
    name: str,
    frontmatter: Optional[Dict[str, Any]] = None,
    body: str = "",
    *,
    file_name: str = "README.md",
) -> Path:
    """Create ``<specs_dir>/<name>/<file_name>`` and return its path."""
    directory = specs_dir / name
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / file_name
    path.write_bytes(render_spec(frontmatter, body).encode("utf-8"))
    return path


@pytest.fixture
def specs_dir(tmp_path):
    """Empty documents root."""
    root = tmp_path / "specs"
    root.mkdir()
    return root


@pytest.fixture
def sample_specs(specs_dir):
    """A small spec tree: a parent, a child with a dependency, an archived spec."""
    write_spec(
        specs_dir,
        "001-platform",
        {"status": "in-progress", "created": "2025-01-01", "priority": "high"},
        "# Platform\n\n## Overview\nCore platform.\n\n## Tasks\n- [ ] write tests\n- [x] draft design\n",
    )
    write_spec(
        specs_dir,
        "002-auth",
        {"status": "planned", "created": "2025-01-05", "parent": "001-platform", "depends_on": ["001-platform"]},
        "# Auth\n\n## Overview\nLogin flows.\n",
    )
    write_spec(
        specs_dir,
        "archived/003-legacy",
        {"status": "archived", "created": "2024-06-01"},
        "# Legacy\n",
    )
    return specs_dir


class GitRepo:
    """Minimal driver for a temporary repository with controlled commit dates."""

    def __init__(self, root: Path):
        self.root = root

    def git(self, *args: str, date: Optional[str] = None) -> str:
        env = dict(os.environ)
        env.update(
            GIT_AUTHOR_NAME="Ada Author",
            GIT_AUTHOR_EMAIL="ada@example.com",
            GIT_COMMITTER_NAME="Ada Author",
            GIT_COMMITTER_EMAIL="ada@example.com",
            GIT_CONFIG_NOSYSTEM="1",
        )
        if date:
            env["GIT_AUTHOR_DATE"] = date
            env["GIT_COMMITTER_DATE"] = date
        result = subprocess.run(
            ["git", "-c", "commit.gpgsign=false", "-c", "init.defaultBranch=main", *args],
            cwd=self.root,
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    def commit_file(self, path: Path, content: str, message: str, date: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        self.git("add", str(path.relative_to(self.root)))
        self.git("commit", "-q", "-m", message, date=date)


@pytest.fixture
def git_repo(tmp_path):
    """An initialised, empty git repository at ``tmp_path / 'repo'``."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    root = (tmp_path / "repo").resolve()
    root.mkdir()
    repo = GitRepo(root)
    repo.git("init", "-q")
    return repo
