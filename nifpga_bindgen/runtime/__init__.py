"""
Runtime accessors imported by generated bindings.

This module provides typed register and FIFO handles. The I/O itself is done
by a session object implementing ``RegisterSession`` and ``FifoSession``.
"""

from .context import ContextError, NiFpgaContext
from .fifo import FifoSession, ReadFifo, WriteFifo
from .register import ArrayRegister, Register, RegisterSession, SessionIOError

__all__ = [
    "Register",
    "ArrayRegister",
    "RegisterSession",
    "SessionIOError",
    "ReadFifo",
    "WriteFifo",
    "FifoSession",
    "NiFpgaContext",
    "ContextError",
]
