"""
Extraction of custom type registers (fixed-point numbers and clusters).

These differ from native registers in being declared as a series of
constants rather than enumerations, one constant per field::

    const NiFpga_FxpTypeInfo NiFpga_Main_IndicatorFxp_FxpResult_TypeInfo = {1, 33, 17};
    const uint32_t NiFpga_Main_IndicatorFxp_FxpResult_Resource = 0x1803C;

Recognised fields:

- ``Resource``: the address.
- ``TypeInfo``: fixed-point layout ``{isSigned, wordLength, integerWordLength}``.
- ``Type``: the cluster type name.
- ``PackedSizeInBytes``: packed size of a cluster.
- ``Size``: element count for arrays.
"""

import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from pycparser import c_ast
from pydantic import ValidationError

from nifpga_bindgen.errors import ConstantError, CustomTypeError
from nifpga_bindgen.model.custom_types import (
    ClusterRegister,
    CustomTypeData,
    FxpRegister,
    FxpTypeInfo,
)
from nifpga_bindgen.model.element import interface_prefix

from .constants import evaluate_integer, evaluate_string, is_string_literal

logger = logging.getLogger(__name__)


class ConstantName(NamedTuple):
    """Decomposed ``<Class>_<Name>_<Field>`` constant name."""

    element_class: str
    name: str
    field: str


def split_constant_name(prefix: str, name: str) -> Optional[ConstantName]:
    """Decompose a constant name into class, element name and field.

    Returns:
        None unless ``name`` carries ``prefix`` followed by exactly three
        underscore-separated parts.
    """
    if not name.startswith(prefix):
        return None
    parts = name[len(prefix) :].split("_")
    if len(parts) != 3 or not all(parts):
        return None
    return ConstantName(*parts)


class CustomTypeVisitor(c_ast.NodeVisitor):
    """Accumulate custom type fields per element name.

    Records are only validated when ``get_registers`` is called.
    """

    def __init__(self, interface_name: str):
        self.prefix = interface_prefix(interface_name)
        self.types: Dict[str, CustomTypeData] = {}

    def visit_Decl(self, node: c_ast.Decl) -> None:
        if "const" not in node.quals or node.name is None:
            return

        constant = split_constant_name(self.prefix, node.name)
        if constant is None:
            return
        logger.debug("Found custom type constant %s", node.name)

        if node.init is None:
            raise CustomTypeError(f"Constant {node.name} has no initializer")

        data = self.types.setdefault(
            constant.name, CustomTypeData(element_class=constant.element_class)
        )
        if data.element_class != constant.element_class:
            raise CustomTypeError(
                f"'{constant.name}' is declared as both {data.element_class} "
                f"and {constant.element_class}"
            )

        if constant.field == "Resource":
            self._set(data, "address", evaluate_integer(node.init), node.name)
        elif constant.field == "TypeInfo":
            self._set(data, "type_info", read_fxp_type_info(node.init), node.name)
        elif constant.field == "Type":
            self._set(data, "cluster_type", _read_type_name(node.init), node.name)
        elif constant.field == "PackedSizeInBytes":
            self._set(data, "packed_size", evaluate_integer(node.init), node.name)
        elif constant.field == "Size":
            self._set(data, "array_size", evaluate_integer(node.init), node.name)
        else:
            logger.debug("Ignoring unknown custom type field %s", constant.field)

    @staticmethod
    def _set(data: CustomTypeData, attribute: str, value, constant_name: str) -> None:
        if getattr(data, attribute) is not None:
            raise CustomTypeError(f"Duplicate definition of {constant_name}")
        setattr(data, attribute, value)

    def get_registers(self) -> Tuple[List[FxpRegister], List[ClusterRegister]]:
        """Validate the collected records and build the register lists.

        Returns:
            Tuple of ``(fxp_registers, cluster_registers)``, each sorted by
            element name.

        Raises:
            CustomTypeError: If a record is missing a required field.
        """
        fxp_registers = []
        cluster_registers = []

        for name in sorted(self.types):
            data = self.types[name]
            if data.address is None:
                raise CustomTypeError(f"Did not find address for {name}")

            if data.type_info is not None:
                fxp_registers.append(
                    FxpRegister(
                        name=name,
                        element_class=data.element_class,
                        type_info=data.type_info,
                        address=data.address,
                        array_size=data.array_size,
                    )
                )
            elif data.cluster_type is not None:
                if data.packed_size is None:
                    raise CustomTypeError(f"Did not find packed size for cluster {name}")
                cluster_registers.append(
                    ClusterRegister(
                        name=name,
                        element_class=data.element_class,
                        cluster_type=data.cluster_type,
                        address=data.address,
                        packed_size=data.packed_size,
                        array_size=data.array_size,
                    )
                )
            else:
                raise CustomTypeError(f"Did not find type information for {name}")

        return fxp_registers, cluster_registers


def read_fxp_type_info(init: c_ast.Node) -> FxpTypeInfo:
    """Read a ``{isSigned, wordLength, integerWordLength}`` initializer list."""
    if not isinstance(init, c_ast.InitList):
        raise CustomTypeError("Initializer for FXP type data is not a list")

    values = []
    for expression in init.exprs:
        if isinstance(expression, c_ast.InitList):
            raise CustomTypeError("Unexpected nesting in FXP type data")
        values.append(_signed_integer(expression))

    if len(values) < 3:
        raise CustomTypeError("Insufficient items in FXP type data initializer")

    try:
        return FxpTypeInfo(
            signed=values[0] != 0,
            word_length=values[1],
            integer_word_length=values[2],
        )
    except ValidationError as e:
        raise CustomTypeError(f"Invalid FXP type data: {e}") from e


def _signed_integer(expression: c_ast.Node) -> int:
    # integerWordLength is an int16_t and may legitimately be negative.
    if isinstance(expression, c_ast.UnaryOp) and expression.op == "-":
        return -evaluate_integer(expression.expr)
    return evaluate_integer(expression)


def _read_type_name(init: c_ast.Node) -> str:
    if is_string_literal(init):
        return evaluate_string(init)
    if isinstance(init, c_ast.ID):
        return init.name
    raise ConstantError(f"Expected a type name, got {type(init).__name__}")
