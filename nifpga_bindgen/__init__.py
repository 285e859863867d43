"""
Python bindings generator for NI FPGA C interfaces.

Reads the ``NiFpga_<name>.h`` header exported for an FPGA bitfile and writes
a Python module of typed register and FIFO accessors.
"""

__version__ = "0.1.0"
