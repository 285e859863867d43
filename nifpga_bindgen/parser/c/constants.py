"""
Evaluation of literal constants found in the parsed C header.

Headers are machine-generated by the vendor toolchain, so only plain literals
are supported. Anything else raises ``ConstantError`` and fails the build.
"""

import re

from pycparser import c_ast

from nifpga_bindgen.errors import ConstantError

_INTEGER_SUFFIX_RE = re.compile(r"[uUlL]+$")
_NON_INTEGER_TYPES = ("string", "char", "float", "double", "long double")


def parse_integer_literal(text: str) -> int:
    """Convert C integer literal text into its value.

    Handles decimal, hexadecimal (``0x``), octal (leading ``0``) and binary
    (``0b``) notation with optional ``u``/``l`` suffixes.

    Raises:
        ConstantError: If the text is not an integer literal.
    """
    digits = _INTEGER_SUFFIX_RE.sub("", text.strip())
    lowered = digits.lower()
    try:
        if lowered.startswith("0x"):
            return int(digits[2:], 16)
        if lowered.startswith("0b"):
            return int(digits[2:], 2)
        if len(digits) > 1 and digits.startswith("0"):
            return int(digits[1:], 8)
        return int(digits, 10)
    except ValueError:
        raise ConstantError(f"Invalid integer literal '{text}'") from None


def evaluate_integer(node: c_ast.Node) -> int:
    """Return the value of an integer literal expression.

    Raises:
        ConstantError: If the node is not an integer constant.
    """
    if not isinstance(node, c_ast.Constant) or node.type in _NON_INTEGER_TYPES:
        raise ConstantError(f"Expected an integer literal, got {_describe(node)}")
    return parse_integer_literal(node.value)


def evaluate_string(node: c_ast.Node) -> str:
    """Return the contents of a string literal, without its quotes.

    Raises:
        ConstantError: If the node is not a string constant.
    """
    if not isinstance(node, c_ast.Constant) or node.type != "string":
        raise ConstantError(f"Expected a string literal, got {_describe(node)}")
    return node.value.strip('"')


def is_string_literal(node: c_ast.Node) -> bool:
    return isinstance(node, c_ast.Constant) and node.type == "string"


def _describe(node: c_ast.Node) -> str:
    if isinstance(node, c_ast.Constant):
        return f"{node.type} constant {node.value} at {node.coord}"
    return f"{type(node).__name__} at {getattr(node, 'coord', None)}"
