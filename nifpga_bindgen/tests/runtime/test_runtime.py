"""
Tests for the runtime accessors with an in-memory session.
"""

import ctypes
import logging
from dataclasses import FrozenInstanceError

import pytest

from nifpga_bindgen.runtime import (
    ArrayRegister,
    ContextError,
    FifoSession,
    NiFpgaContext,
    ReadFifo,
    Register,
    RegisterSession,
    SessionIOError,
    WriteFifo,
)


class MemorySession(RegisterSession, FifoSession):
    """Session backed by dictionaries."""

    def __init__(self):
        self.memory = {}
        self.fifos = {}
        self.started = set()
        self.calls = []

    def read_register(self, ctype, address):
        self.calls.append(("read", ctype, address))
        return self.memory.get(address, 0)

    def write_register(self, ctype, address, value):
        self.calls.append(("write", ctype, address))
        self.memory[address] = value

    def read_array(self, ctype, address, size):
        return list(self.memory.get(address, [0] * size))

    def write_array(self, ctype, address, values):
        self.memory[address] = list(values)

    def read_fifo(self, ctype, fifo, count, timeout_ms):
        data = self.fifos.setdefault(fifo, [])
        taken, self.fifos[fifo] = data[:count], data[count:]
        return taken

    def write_fifo(self, ctype, fifo, values, timeout_ms):
        self.fifos.setdefault(fifo, []).extend(values)
        return 100 - len(self.fifos[fifo])

    def start_fifo(self, fifo):
        self.started.add(fifo)

    def stop_fifo(self, fifo):
        self.started.discard(fifo)


class FailingSession(MemorySession):
    def read_register(self, ctype, address):
        raise SessionIOError("driver status -61046")


class TestRegister:
    def test_read_write_forward_type_and_address(self):
        session = MemorySession()
        reg = Register(ctypes.c_uint8, 0x18002)

        reg.write(session, 7)
        assert reg.read(session) == 7
        assert session.calls == [
            ("write", ctypes.c_uint8, 0x18002),
            ("read", ctypes.c_uint8, 0x18002),
        ]

    def test_frozen(self):
        reg = Register(ctypes.c_uint8, 0x18002)
        with pytest.raises(FrozenInstanceError):
            reg.address = 0

    def test_session_errors_propagate(self):
        with pytest.raises(SessionIOError):
            Register(ctypes.c_uint8, 0x18002).read(FailingSession())

    def test_session_error_is_ioerror(self):
        assert issubclass(SessionIOError, IOError)


class TestArrayRegister:
    def test_roundtrip(self):
        session = MemorySession()
        reg = ArrayRegister(ctypes.c_float, 0x18018, 4)
        reg.write(session, [1.0, 2.0, 3.0, 4.0])
        assert reg.read(session) == [1.0, 2.0, 3.0, 4.0]

    def test_rejects_wrong_length(self):
        session = MemorySession()
        reg = ArrayRegister(ctypes.c_uint8, 0x18014, 4)
        with pytest.raises(ValueError, match="holds 4 elements, got 3"):
            reg.write(session, [1, 2, 3])
        assert session.memory == {}

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            ArrayRegister(ctypes.c_uint8, 0x18014, 0)

    def test_short_read_is_logged(self, caplog):
        session = MemorySession()
        session.memory[0x18014] = [1, 2]
        reg = ArrayRegister(ctypes.c_uint8, 0x18014, 4)
        with caplog.at_level(logging.WARNING):
            assert reg.read(session) == [1, 2]
        assert "2 elements" in caplog.text


class TestFifos:
    def test_write_then_read(self):
        session = MemorySession()
        WriteFifo(ctypes.c_uint32, 0).write(session, [1, 2, 3])
        session.fifos[1] = session.fifos.pop(0)

        fifo = ReadFifo(ctypes.c_uint16, 1)
        assert fifo.read(session, 2, timeout_ms=100) == [1, 2]
        assert fifo.read(session, 5) == [3]

    def test_write_returns_free_space(self):
        assert WriteFifo(ctypes.c_uint32, 0).write(MemorySession(), [1, 2]) == 98

    def test_start_stop(self):
        session = MemorySession()
        fifo = ReadFifo(ctypes.c_uint16, 1)
        fifo.start(session)
        assert session.started == {1}
        fifo.stop(session)
        assert session.started == set()

    def test_negative_count(self):
        with pytest.raises(ValueError):
            ReadFifo(ctypes.c_uint16, 1).read(MemorySession(), -1)

    def test_directions_are_distinct(self):
        assert ReadFifo(ctypes.c_uint16, 1) != WriteFifo(ctypes.c_uint16, 1)
        assert not hasattr(ReadFifo(ctypes.c_uint16, 1), "write")
        assert not hasattr(WriteFifo(ctypes.c_uint16, 1), "read")


class TestNiFpgaContext:
    def test_acquire_release(self):
        events = []
        context = NiFpgaContext(lambda: events.append("init"), lambda: events.append("fini"))

        context.acquire()
        assert context.active
        context.release()
        assert not context.active
        assert events == ["init", "fini"]

    def test_second_acquire_fails(self):
        context = NiFpgaContext()
        context.acquire()
        with pytest.raises(ContextError, match="already active"):
            context.acquire()

    def test_release_when_idle_fails(self):
        with pytest.raises(ContextError, match="not active"):
            NiFpgaContext().release()

    def test_context_manager_and_reacquire(self):
        context = NiFpgaContext()
        with context:
            assert context.active
        assert not context.active
        with context:
            assert context.active

    def test_release_clears_state_when_finalize_fails(self):
        def finalize():
            raise SessionIOError("finalize failed")

        context = NiFpgaContext(finalize=finalize)
        context.acquire()
        with pytest.raises(SessionIOError):
            context.release()
        assert not context.active

    def test_guards_are_independent(self):
        first, second = NiFpgaContext(), NiFpgaContext()
        first.acquire()
        second.acquire()
        assert first.active and second.active
