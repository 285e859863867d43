"""
Parsers for FPGA interface definitions.
"""

from .c import InterfaceParser

__all__ = ["InterfaceParser"]
