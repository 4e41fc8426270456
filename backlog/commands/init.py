"""
backlog init - Create an empty database file.
"""

from backlog.db.backends import DocumentIOError, JSONFileBackend
from backlog.lib.config import BacklogConfig
from backlog.lib.locking import is_locked


def cmd_init(args, config: BacklogConfig) -> int:
    """Create config.db_path with an empty document."""
    db_path = config.db_path
    force = getattr(args, "force", False)

    if force and is_locked(db_path):
        print(f"ERROR: {db_path} is open in another session.")
        return 1

    try:
        created = JSONFileBackend(db_path).initialize(force=force)
    except DocumentIOError as e:
        print(f"ERROR: {e}")
        return 1

    if not created:
        print(f"Database already exists: {db_path}")
        print("  Use --force to replace it with an empty one.")
        return 1

    print(f"Created empty backlog: {db_path}")
    print()
    print("Next steps:")
    print(f"  backlog --db {db_path} run")
    return 0
