"""Idempotent, exclusive file creation."""

import errno
import os
import stat
import tempfile
from contextlib import contextmanager

from slashkit.errors import IOFailure
from slashkit.status import AlreadyExists, Created, Failed
from slashkit.target_resolver import ResolvedTarget, ensure_directory

FILE_MODE = 0o644
EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH

# Filesystems without hard links (FAT, some network and FUSE mounts).
_NO_HARD_LINKS = {errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP, errno.ENOSYS}


@contextmanager
def staged_file(directory, content, mode=FILE_MODE):
    """Write *content* to a temporary file in *directory* and yield its path.

    The staged file is removed on exit whether or not it was placed.
    """
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".slashkit-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        yield tmp_path
    finally:
        if os.path.lexists(tmp_path):
            os.unlink(tmp_path)


def exclusive_write(path, content, mode=FILE_MODE):
    """Create *path* with O_EXCL and write *content* into it.

    Raises FileExistsError if *path* already exists. A failed write removes
    the file it created, so no truncated file is left behind.
    """
    fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, mode)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(path, mode)
    except Exception:
        os.unlink(path)
        raise


def write_new_file(target: ResolvedTarget, content: str, *, executable=False, values=None,
                   extra_dirs=()):
    """Place *content* at *target* unless something is already there.

    Returns Created, AlreadyExists, or Failed(IOFailure). The final path
    is only ever filled by hard-linking a fully written staged file, and
    the link fails if the path appeared in the meantime, so an existing
    file is never overwritten or left truncated. Where hard links are not
    supported the file is created with O_EXCL instead.

    *extra_dirs* are created next to the file before it is placed, so a
    failure there leaves no file and a later run can retry.
    """
    values = values or {}
    path = target.path
    if os.path.lexists(path):
        return AlreadyExists(path=path, scope=target.scope, values=values)

    mode = FILE_MODE | EXECUTABLE_BITS if executable else FILE_MODE
    for directory in (path.parent, *(path.parent / name for name in extra_dirs)):
        try:
            ensure_directory(directory)
        except OSError as exc:
            return _failed(f"Could not create {directory}: {exc.strerror or exc}")

    try:
        with staged_file(path.parent, content, mode) as tmp_path:
            _place(tmp_path, path, content, mode)
    except FileExistsError:
        return _failed(f"{path} was created by another invocation")
    except OSError as exc:
        return _failed(f"Could not write {path}: {exc.strerror or exc}")
    except UnicodeError as exc:
        return _failed(f"Could not encode content for {path}: {exc}")
    return Created(path=path, scope=target.scope, values=values)


def _place(tmp_path, path, content, mode):
    try:
        os.link(tmp_path, path)
    except FileExistsError:
        raise
    except OSError as exc:
        if exc.errno not in _NO_HARD_LINKS:
            raise
        exclusive_write(path, content, mode)


def _failed(reason):
    return Failed(kind=IOFailure.kind, reason=reason)
