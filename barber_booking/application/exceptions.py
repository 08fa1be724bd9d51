
class PersistenceUnavailableError(RuntimeError):
    """Raised when the backing store cannot be reached or read (I/O errors, corrupt data)."""
    pass


class ConstraintViolation(RuntimeError):
    """Raised by a store when a write would break a uniqueness constraint."""

    def __init__(self, constraint: str, message: str | None = None) -> None:
        super().__init__(message or f"Constraint violated: {constraint}")
        self.constraint = constraint
