"""
DMA FIFO accessors used by generated bindings.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Type


class FifoSession(ABC):
    """
    Abstract base class for sessions that can move data through DMA FIFOs.

    ``timeout_ms`` of ``None`` waits forever.
    """

    @abstractmethod
    def read_fifo(
        self, ctype: Type[Any], fifo: int, count: int, timeout_ms: Optional[int]
    ) -> List[Any]:
        """Read ``count`` elements from a target to host FIFO."""
        pass

    @abstractmethod
    def write_fifo(
        self, ctype: Type[Any], fifo: int, values: Sequence[Any], timeout_ms: Optional[int]
    ) -> int:
        """Write ``values`` to a host to target FIFO.

        Returns:
            Free space left in the FIFO, in elements.
        """
        pass

    @abstractmethod
    def start_fifo(self, fifo: int) -> None:
        pass

    @abstractmethod
    def stop_fifo(self, fifo: int) -> None:
        pass


@dataclass(frozen=True)
class _Fifo:
    ctype: Type[Any]
    address: int

    def start(self, session: FifoSession) -> None:
        """Start the DMA transfer ahead of the first read or write."""
        session.start_fifo(self.address)

    def stop(self, session: FifoSession) -> None:
        """Stop the transfer and discard buffered data."""
        session.stop_fifo(self.address)


@dataclass(frozen=True)
class ReadFifo(_Fifo):
    """A target to host FIFO."""

    def read(
        self, session: FifoSession, count: int, timeout_ms: Optional[int] = None
    ) -> List[Any]:
        if count < 0:
            raise ValueError(f"Cannot read {count} elements")
        return session.read_fifo(self.ctype, self.address, count, timeout_ms)


@dataclass(frozen=True)
class WriteFifo(_Fifo):
    """A host to target FIFO."""

    def write(
        self, session: FifoSession, values: Sequence[Any], timeout_ms: Optional[int] = None
    ) -> int:
        return session.write_fifo(self.ctype, self.address, values, timeout_ms)
