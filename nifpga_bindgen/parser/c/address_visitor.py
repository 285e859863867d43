"""
Extraction of register and FIFO addresses from typedef'd enumerations.

The vendor header declares one enumeration per element kind and datatype::

    typedef enum
    {
       NiFpga_Main_ControlU8_U8Control = 0x18002,
       NiFpga_Main_ControlU8_U8Sum = 0x18006,
    } NiFpga_Main_ControlU8;

Each enumerator becomes one ``LocationDefinition`` in the ``AddressSet``.
"""

import logging
from typing import Optional

from pycparser import c_ast

from nifpga_bindgen.errors import ConstantError
from nifpga_bindgen.model.address_set import AddressSet
from nifpga_bindgen.model.element import (
    LocationDefinition,
    decode_type_name,
    element_name,
    interface_prefix,
)

from .constants import evaluate_integer

logger = logging.getLogger(__name__)


class AddressDefinitionsVisitor(c_ast.NodeVisitor):
    """Collect the ``AddressSet`` of one interface.

    Args:
        interface_name: Interface part of the header name, e.g. ``Main`` for
            ``NiFpga_Main.h``.
    """

    def __init__(self, interface_name: str):
        self.prefix = interface_prefix(interface_name)
        self.registers = AddressSet()

    def visit_Typedef(self, node: c_ast.Typedef) -> None:
        enum = _typedef_enum(node)
        if enum is None:
            return

        if not node.name.startswith(self.prefix):
            logger.debug("Skipping enum %s: not part of this interface", node.name)
            return

        decoded = decode_type_name(node.name[len(self.prefix) :])
        if decoded is None:
            logger.debug("Skipping enum %s: unknown element kind", node.name)
            return

        kind, datatype = decoded
        for enumerator in enum.values.enumerators:
            if enumerator.value is None:
                raise ConstantError(
                    f"Enumerator {enumerator.name} has no explicit value at {enumerator.coord}"
                )
            definition = LocationDefinition(
                kind=kind, name=element_name(enumerator.name), datatype=datatype
            )
            value = evaluate_integer(enumerator.value)
            logger.debug("Found %s = %#x", definition, value)
            try:
                self.registers[definition] = value
            except ValueError as e:
                raise ConstantError(f"{e} at {enumerator.coord}") from e


def _typedef_enum(node: c_ast.Typedef) -> Optional[c_ast.Enum]:
    """Return the enumeration body behind a typedef, if it has one."""
    type_decl = node.type
    if not isinstance(type_decl, c_ast.TypeDecl):
        return None
    enum = type_decl.type
    if not isinstance(enum, c_ast.Enum) or enum.values is None:
        return None
    return enum
