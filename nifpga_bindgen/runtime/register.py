"""
Register accessors used by generated bindings.

A generated ``NiFpga_<name>.py`` module declares one ``Register`` or
``ArrayRegister`` per control and indicator. They only know the element type
and address; the actual I/O goes through a ``RegisterSession``, which a driver
binding implements.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Sequence, Type

logger = logging.getLogger(__name__)


class SessionIOError(IOError):
    """Raised by session implementations when a driver call fails."""


class RegisterSession(ABC):
    """
    Abstract base class for sessions that can access registers.
    """

    @abstractmethod
    def read_register(self, ctype: Type[Any], address: int) -> Any:
        """Read one element of ``ctype`` at ``address``.

        Raises:
            SessionIOError: If the driver call fails.
        """
        pass

    @abstractmethod
    def write_register(self, ctype: Type[Any], address: int, value: Any) -> None:
        """Write one element of ``ctype`` at ``address``.

        Raises:
            SessionIOError: If the driver call fails.
        """
        pass

    @abstractmethod
    def read_array(self, ctype: Type[Any], address: int, size: int) -> List[Any]:
        """Read ``size`` elements of ``ctype`` starting at ``address``."""
        pass

    @abstractmethod
    def write_array(self, ctype: Type[Any], address: int, values: Sequence[Any]) -> None:
        """Write all ``values`` as ``ctype`` elements starting at ``address``."""
        pass


@dataclass(frozen=True)
class Register:
    """
    A scalar control or indicator.
    """

    ctype: Type[Any]
    address: int

    def read(self, session: RegisterSession) -> Any:
        """Read the current value."""
        return session.read_register(self.ctype, self.address)

    def write(self, session: RegisterSession, value: Any) -> None:
        """Write a new value."""
        session.write_register(self.ctype, self.address, value)


@dataclass(frozen=True)
class ArrayRegister:
    """
    A fixed-size array control or indicator.
    """

    ctype: Type[Any]
    address: int
    size: int

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"Array register at 0x{self.address:X} must have a positive size")

    def read(self, session: RegisterSession) -> List[Any]:
        """Read every element of the array."""
        values = list(session.read_array(self.ctype, self.address, self.size))
        if len(values) != self.size:
            logger.warning(
                "Session returned %d elements for array register 0x%X of size %d",
                len(values),
                self.address,
                self.size,
            )
        return values

    def write(self, session: RegisterSession, values: Sequence[Any]) -> None:
        """Write the whole array.

        Raises:
            ValueError: If ``values`` does not hold exactly ``size`` elements.
        """
        if len(values) != self.size:
            raise ValueError(
                f"Array register at 0x{self.address:X} holds {self.size} elements, "
                f"got {len(values)}"
            )
        session.write_array(self.ctype, self.address, values)
