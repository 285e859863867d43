"""
Python binding generator for FPGA interfaces.

Turns an ``AddressSet`` into a Python module with two namespaces:

- ``registers``: ``Register`` and ``ArrayRegister`` accessors for controls
  and indicators.
- ``fifos``: ``WriteFifo`` (host to target) and ``ReadFifo`` (target to host)
  accessors.

Example output::

    SIGNATURE = "A0613989B20F45FC6E79EB71383493E8"


    class registers:
        U8Control = Register(ctypes.c_uint8, 0x18002)
        U8ControlArray = ArrayRegister(ctypes.c_uint8, 0x18014, 4)


    class fifos:
        NumbersFromFPGA = ReadFifo(ctypes.c_uint16, 0x1)
        NumbersToFPGA = WriteFifo(ctypes.c_uint32, 0x0)
"""

import keyword
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from nifpga_bindgen.errors import (
    ArraySizeNotFoundError,
    DuplicateElementError,
    InvalidIdentifierError,
    UnknownTypeError,
)
from nifpga_bindgen.generator.base_generator import BaseGenerator
from nifpga_bindgen.model.address_set import AddressSet, InterfaceDescription
from nifpga_bindgen.model.element import FILE_PREFIX, ElementKind, LocationDefinition

logger = logging.getLogger(__name__)

# Vendor type tag -> ctypes type name.
TYPE_MAP: Dict[str, str] = {
    "U8": "c_uint8",
    "U16": "c_uint16",
    "U32": "c_uint32",
    "U64": "c_uint64",
    "I8": "c_int8",
    "I16": "c_int16",
    "I32": "c_int32",
    "I64": "c_int64",
    "Sgl": "c_float",
    "Dbl": "c_double",
    "Bool": "c_bool",
}

ACCESSOR_CLASSES: Dict[ElementKind, str] = {
    ElementKind.CONTROL: "Register",
    ElementKind.INDICATOR: "Register",
    ElementKind.CONTROL_ARRAY: "ArrayRegister",
    ElementKind.INDICATOR_ARRAY: "ArrayRegister",
    ElementKind.HOST_TO_TARGET_FIFO: "WriteFifo",
    ElementKind.TARGET_TO_HOST_FIFO: "ReadFifo",
}

# Names the generated class bodies refer to; an element may not shadow them.
RESERVED_NAMES = frozenset(["ctypes", *ACCESSOR_CLASSES.values()])


@dataclass(frozen=True)
class Binding:
    """One generated accessor declaration."""

    name: str
    accessor: str
    ctype: str
    address: int
    size: Optional[int] = None


def ctype_for(datatype: str) -> str:
    """Map a vendor type tag to its ctypes type name.

    Raises:
        UnknownTypeError: If the tag has no mapping.
    """
    try:
        return TYPE_MAP[datatype]
    except KeyError:
        raise UnknownTypeError(datatype) from None


def make_binding(
    definition: LocationDefinition, address: int, size: Optional[int] = None
) -> Binding:
    """Build the accessor declaration for one definition.

    Raises:
        InvalidIdentifierError: If the element name is not usable in Python
            or shadows a name the generated module refers to.
        UnknownTypeError: If the datatype has no mapping.
        ValueError: If called for a size definition.
    """
    accessor = ACCESSOR_CLASSES.get(definition.kind)
    if accessor is None:
        raise ValueError(f"{definition.kind.value} definitions have no accessor")
    if not definition.name.isidentifier() or keyword.iskeyword(definition.name):
        raise InvalidIdentifierError(definition.name)
    if definition.name in RESERVED_NAMES:
        raise InvalidIdentifierError(
            definition.name, "shadows a name used by the generated module"
        )
    return Binding(
        name=definition.name,
        accessor=accessor,
        ctype=ctype_for(definition.datatype),
        address=address,
        size=size,
    )


class BindingGenerator(BaseGenerator):
    """Generates the Python accessor module of an FPGA interface."""

    def __init__(self, template_dir: Optional[str] = None):
        if template_dir is None:
            template_dir = os.path.join(os.path.dirname(__file__), "templates")
        super().__init__(template_dir)

    def register_bindings(self, addresses: AddressSet) -> List[Binding]:
        """Accessors for controls, indicators and their arrays.

        Raises:
            ArraySizeNotFoundError: If an array has no paired size definition.
            DuplicateElementError: If two elements share a name.
        """
        bindings = []
        for definition, address in addresses.of_kind(
            ElementKind.CONTROL,
            ElementKind.INDICATOR,
            ElementKind.CONTROL_ARRAY,
            ElementKind.INDICATOR_ARRAY,
        ):
            size = None
            if definition.kind.is_array:
                size = addresses.size_of(definition)
                if size is None:
                    raise ArraySizeNotFoundError(definition.name, definition.datatype)
            bindings.append(make_binding(definition, address, size))
        return _unique(bindings, "registers")

    def fifo_bindings(self, addresses: AddressSet) -> List[Binding]:
        """Accessors for both FIFO directions."""
        bindings = [
            make_binding(definition, address)
            for definition, address in addresses.of_kind(
                ElementKind.TARGET_TO_HOST_FIFO, ElementKind.HOST_TO_TARGET_FIFO
            )
        ]
        return _unique(bindings, "fifos")

    def generate_registers(self, addresses: AddressSet) -> str:
        """Render the ``registers`` namespace."""
        template = self.env.get_template("registers.py.j2")
        return template.render(bindings=self.register_bindings(addresses))

    def generate_fifos(self, addresses: AddressSet) -> str:
        """Render the ``fifos`` namespace."""
        template = self.env.get_template("fifos.py.j2")
        return template.render(bindings=self.fifo_bindings(addresses))

    def generate_module(self, description: InterfaceDescription, interface_name: str) -> str:
        """
        Render the complete bindings module.

        Args:
            description: Decoded interface description
            interface_name: Interface name, e.g. 'Main'

        Returns:
            Python source text; identical input always gives identical text.
        """
        registers = self.generate_registers(description.registers)
        fifos = self.generate_fifos(description.registers)
        logger.debug("Rendering bindings module for interface %s", interface_name)
        template = self.env.get_template("interface_module.py.j2")
        content = template.render(
            interface_name=interface_name,
            header_name=f"{FILE_PREFIX}_{interface_name}.h",
            signature=description.signature,
            registers=registers,
            fifos=fifos,
        )
        return content.rstrip("\n") + "\n"

    def generate_all(
        self, description: InterfaceDescription, interface_name: str
    ) -> Dict[str, str]:
        return {
            module_filename(interface_name): self.generate_module(description, interface_name)
        }

    def write_module(
        self,
        description: InterfaceDescription,
        interface_name: str,
        output_dir: Union[str, Path],
    ) -> Path:
        """Write ``NiFpga_<name>.py`` into ``output_dir`` and return its path."""
        written = self.write_files(description, interface_name, output_dir)
        return written[module_filename(interface_name)]


def module_filename(interface_name: str) -> str:
    """Name of the generated module, e.g. ``NiFpga_Main.py``."""
    return f"{FILE_PREFIX}_{interface_name}.py"


def _unique(bindings: List[Binding], namespace: str) -> List[Binding]:
    seen = set()
    for binding in bindings:
        if binding.name in seen:
            raise DuplicateElementError(binding.name, namespace)
        seen.add(binding.name)
    return bindings
