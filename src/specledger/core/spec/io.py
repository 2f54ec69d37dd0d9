"""
Atomic, conflict-aware persistence of spec files.

Every write goes to a uniquely named temporary sibling of the target, is
flushed and fsynced, then renamed over the target with ``os.replace``. A
reader therefore sees either the old content or the new content, never a
mix. The temporary file is removed on every failure path before the error
is raised.

``write_with_expected_fingerprint`` adds optimistic concurrency: it holds a
per-path ``FileLock`` only for the compare-and-rename step, so of two
writers submitting the same expected fingerprint exactly one wins and the
other receives ``ConflictError``.
"""

import hashlib
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Tuple, Union

from filelock import FileLock, Timeout

from specledger.core.errors import (
    ConflictError,
    LockAcquisitionError,
    NotFoundError,
    SchemaError,
    WriteError,
)
from specledger.core.spec.document import compute_fingerprint

logger = logging.getLogger(__name__)

# Default seconds to wait for the per-path write lock
LOCK_ACQUISITION_TIMEOUT = 5.0

# New files get rw-r--r-- unless the target already exists
DEFAULT_FILE_MODE = 0o644

PathLike = Union[str, Path]


def _lock_dir() -> Path:
    path = Path(tempfile.gettempdir()) / "specledger-locks"
    path.mkdir(parents=True, exist_ok=True)
    return path


def lock_path_for(path: PathLike) -> Path:
    """Lock file guarding writes to ``path``, kept outside the spec tree."""
    resolved = str(Path(path).resolve())
    digest = hashlib.sha1(resolved.encode("utf-8")).hexdigest()
    return _lock_dir() / f"{digest}.lock"


def read_document(path: PathLike) -> Tuple[str, str]:
    """
    Read a spec file.

    Returns:
        Tuple of (content, fingerprint)

    Raises:
        NotFoundError: If the file does not exist
        SchemaError: If the file is not valid UTF-8
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
        raise NotFoundError("File", str(file_path)) from None

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaError("File is not valid UTF-8", problems=[str(exc)], identifier=str(file_path)) from exc
    return content, compute_fingerprint(content)


def current_fingerprint(path: PathLike) -> Optional[str]:
    """Fingerprint of the bytes currently on disk, or None if the file is missing."""
    try:
        raw = Path(path).read_bytes()
    except FileNotFoundError:
        return None
    return hashlib.sha256(raw).hexdigest()


def atomic_write(path: PathLike, content: str) -> str:
    """
    Durably replace ``path`` with ``content``.

    Args:
        path: Target file; its parent directory must exist
        content: Full document content, written as UTF-8 without newline translation

    Returns:
        Fingerprint of the written content

    Raises:
        WriteError: If the temp file cannot be created, written or renamed
    """
    target = Path(path)
    data = content.encode("utf-8")

    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except OSError:
        mode = DEFAULT_FILE_MODE

    try:
        fd, temp_path = tempfile.mkstemp(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
        )
    except OSError as exc:
        raise WriteError(str(target), exc) from exc

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(temp_path, mode)
        os.replace(temp_path, target)
    except OSError as exc:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise WriteError(str(target), exc) from exc
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise

    logger.debug("Wrote %d bytes to %s", len(data), target)
    return hashlib.sha256(data).hexdigest()


def write_with_expected_fingerprint(
    path: PathLike,
    content: str,
    expected_fingerprint: str,
    *,
    lock_timeout: float = LOCK_ACQUISITION_TIMEOUT,
) -> str:
    """
    Write ``content`` only if the file still has ``expected_fingerprint``.

    Returns:
        Fingerprint of the written content

    Raises:
        ConflictError: If the on-disk fingerprint differs (file untouched)
        LockAcquisitionError: If another writer holds the lock past ``lock_timeout``
        WriteError: If the write itself fails
    """
    target = Path(path)
    try:
        with FileLock(str(lock_path_for(target)), timeout=lock_timeout):
            actual = current_fingerprint(target)
            if actual != expected_fingerprint:
                logger.warning(
                    "Rejected write to %s: expected fingerprint %s, found %s",
                    target,
                    expected_fingerprint[:12],
                    actual[:12] if actual else "missing",
                )
                raise ConflictError(str(target), expected_fingerprint, actual)
            return atomic_write(target, content)
    except Timeout:
        raise LockAcquisitionError(str(target), lock_timeout) from None


def write_document(
    path: PathLike,
    content: str,
    expected_fingerprint: Optional[str] = None,
    *,
    lock_timeout: float = LOCK_ACQUISITION_TIMEOUT,
) -> str:
    """Unconditional write when ``expected_fingerprint`` is None, checked write otherwise."""
    if expected_fingerprint is None:
        return atomic_write(path, content)
    return write_with_expected_fingerprint(path, content, expected_fingerprint, lock_timeout=lock_timeout)
