"""Extraction of a named string constant such as the bitfile signature."""

import logging
from typing import Optional

from pycparser import c_ast

from nifpga_bindgen.model.element import interface_prefix

from .constants import evaluate_string, is_string_literal

logger = logging.getLogger(__name__)


class SignatureVisitor(c_ast.NodeVisitor):
    """Find the value of ``NiFpga_<interface>_<suffix>``.

    The first declaration with that name and a string literal initializer
    wins; everything after it is ignored.
    """

    def __init__(self, interface_name: str, suffix: str = "Signature"):
        self.name = interface_prefix(interface_name) + suffix
        self.value: Optional[str] = None

    def visit_Decl(self, node: c_ast.Decl) -> None:
        if self.value is not None:
            return

        if node.name == self.name and node.init is not None:
            if is_string_literal(node.init):
                self.value = evaluate_string(node.init)
                logger.debug("Found %s = %r", self.name, self.value)
            else:
                logger.debug("Ignoring %s: initializer is not a string literal", self.name)
