"""Read-only git queries with timeout handling."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


@dataclass
class GitResult:
    """Result of a git command."""

    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out


def run_git(args: List[str], cwd: Path, timeout: float = DEFAULT_TIMEOUT) -> GitResult:
    """
    Run a git command with timeout handling.

    Args:
        args: Git command arguments (e.g., ["log", "--format=%H"])
        cwd: Working directory for the command
        timeout: Timeout in seconds

    Returns:
        GitResult; a missing git binary is reported as returncode 127
    """
    cmd = ["git", "-C", str(cwd)] + list(args)
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("git %s timed out after %ss in %s", args[0] if args else "", timeout, cwd)
        return GitResult(
            returncode=-1,
            stdout="",
            stderr=f"Command timed out after {timeout}s",
            timed_out=True,
        )
    except FileNotFoundError:
        return GitResult(returncode=127, stdout="", stderr="git executable not found")

    if result.returncode != 0:
        logger.debug("git %s failed (%d): %s", " ".join(args), result.returncode, result.stderr.strip())
    return GitResult(returncode=result.returncode, stdout=result.stdout, stderr=result.stderr)


def find_git_root(start: Path, timeout: float = DEFAULT_TIMEOUT) -> Optional[Path]:
    """Find the root of the git repository containing ``start``."""
    directory = start if start.is_dir() else start.parent
    if not directory.exists():
        return None
    result = run_git(["rev-parse", "--show-toplevel"], directory, timeout=timeout)
    if not result.success:
        return None
    return Path(result.stdout.strip()).resolve()
