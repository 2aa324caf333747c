"""Shared type aliases and errors for the pulse runtime."""

ElementId = int
HandleId = int

PENDING = "pending"
ACTIVE = "active"
DONE = "done"

# Monotonic order of effect states.
STATE_ORDER: dict[str, int] = {PENDING: 0, ACTIVE: 1, DONE: 2}


class MissingElementError(KeyError):
    """Raised when operating on an element that is not on the surface."""

    def __init__(self, element_id: int, message: str) -> None:
        self.element_id = element_id
        super().__init__(message)


class StateRegressionError(ValueError):
    """Raised when an element's effect state would move backwards."""
