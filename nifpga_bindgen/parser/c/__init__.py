"""
C header front end built on pycparser.
"""

from .custom_type_visitor import CustomTypeVisitor
from .interface_parser import InterfaceParser, describe

__all__ = ["InterfaceParser", "CustomTypeVisitor", "describe"]
