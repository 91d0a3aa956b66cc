"""Exceptions raised when a caller or level generator breaks a contract."""


class MiniGridError(RuntimeError):
    """
    A precondition of the simulator was violated.

    Raised for invalid action codes, off-grid coordinates, malformed agent
    direction and broken reset invariants. The simulation state is not
    meaningful after one of these; the episode should be discarded.
    """
