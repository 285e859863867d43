"""
Guard for the driver library's global initialization.

The driver library must be initialized once before any session opens and
finalized after the last one closes. ``NiFpgaContext`` tracks that state on
an explicit object handed to whoever opens sessions.
"""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ContextError(RuntimeError):
    """Raised when the driver context is acquired twice or released while idle."""


class NiFpgaContext:
    """
    Init-once guard around the driver's initialize/finalize pair.

    Args:
        initialize: Called by ``acquire``.
        finalize: Called by ``release``.

    Usable as a context manager::

        with NiFpgaContext(lib.initialize, lib.finalize):
            ...
    """

    def __init__(
        self,
        initialize: Optional[Callable[[], None]] = None,
        finalize: Optional[Callable[[], None]] = None,
    ):
        self._initialize = initialize
        self._finalize = finalize
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> "NiFpgaContext":
        if self._active:
            raise ContextError("The FPGA context is already active")
        if self._initialize is not None:
            self._initialize()
        self._active = True
        logger.debug("FPGA context acquired")
        return self

    def release(self) -> None:
        if not self._active:
            raise ContextError("The FPGA context is not active")
        try:
            if self._finalize is not None:
                self._finalize()
        finally:
            self._active = False
            logger.debug("FPGA context released")

    def __enter__(self) -> "NiFpgaContext":
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
