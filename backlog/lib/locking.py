"""
Session lock for a backlog database.

The store does whole-document read-modify-write with no locking of its own,
so only one interactive session may work on a database file at a time.
Uses flock on a sidecar <db>.lock file.
"""

import fcntl
import os
import time
from contextlib import contextmanager
from pathlib import Path


class LockTimeout(Exception):
    """Lock acquisition timed out."""


def lock_path_for(db_path: Path) -> Path:
    return db_path.with_name(db_path.name + ".lock")


def is_locked(db_path: Path) -> bool:
    """True if another process holds the database lock."""
    lock_file = lock_path_for(db_path)
    if not lock_file.exists():
        return False

    with open(lock_file, 'r') as fd:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            return True
        fcntl.flock(fd, fcntl.LOCK_UN)
    return False


@contextmanager
def database_lock(db_path: Path, timeout: int = 5, poll_interval: float = 0.2):
    """
    Hold an exclusive lock on db_path for the duration of the block.

    Lock files are never deleted: deleting one lets two processes end up
    holding "exclusive" locks on different inodes with the same path.

    Raises:
        LockTimeout: another process kept the lock for longer than timeout
    """
    lock_file = lock_path_for(Path(db_path))
    lock_file.parent.mkdir(parents=True, exist_ok=True)

    fd = open(lock_file, 'w')
    start = time.time()

    while True:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
            break
        except BlockingIOError:
            if time.time() - start >= timeout:
                fd.close()
                raise LockTimeout(f"Database {db_path} is in use by another session (waited {timeout}s)")
            time.sleep(poll_interval)

    try:
        fd.write(f"{os.getpid()}\n")
        fd.flush()
        yield
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)
        fd.close()
