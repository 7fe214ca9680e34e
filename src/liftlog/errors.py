"""Error types raised by liftlog."""


class LiftLogError(Exception):
    """Base class for liftlog errors."""


class StoreError(LiftLogError):
    """The persistence store failed to read or write."""


class StoreInitError(StoreError):
    """The store could not be created, even after recreating it."""


class NotFoundError(LiftLogError):
    """A requested record does not exist."""

    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} {key!r} not found")
        self.kind = kind
        self.key = key


class ProtectedExerciseError(LiftLogError):
    """Seeded exercises cannot be deleted, only custom ones."""


class SessionFinishedError(LiftLogError):
    """A finished workout session does not accept further changes."""
