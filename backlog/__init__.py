"""Personal issue tracker: epics and stories in one JSON document."""

__version__ = "0.1.0"
