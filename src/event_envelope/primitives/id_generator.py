import threading
import uuid
from typing import Protocol, runtime_checkable


@runtime_checkable
class IIDGenerator(Protocol):
    """
    Protocol for resource identity strategies.
    Lets callers plug in deterministic IDs for tests or other
    formats (UUIDv7, Snowflake) in production.
    """

    def next_id(self) -> str:
        """Generates the next unique identifier."""
        ...


class UUID4Generator(IIDGenerator):
    """
    Default ID generator using UUIDv4.
    Zero external dependencies.
    """

    def next_id(self) -> str:
        """Returns a string representation of a random UUIDv4."""
        return str(uuid.uuid4())


class SequentialIDGenerator(IIDGenerator):
    """Deterministic generator yielding ``<prefix>-1``, ``<prefix>-2``, ...

    Handy for tests and replay tooling where stable IDs matter. Safe to
    share between threads.
    """

    def __init__(self, prefix: str = "id") -> None:
        self._prefix = prefix
        self._counter = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            self._counter += 1
            counter = self._counter
        return f"{self._prefix}-{counter}"
