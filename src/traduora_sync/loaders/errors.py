class SnapshotError(Exception):
    """Raised when one of the three snapshots cannot be loaded."""
