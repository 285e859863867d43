"""
Pydantic models for decoded FPGA interfaces.

For runtime register access, use nifpga_bindgen.runtime.
"""

from .address_set import AddressSet, InterfaceDescription
from .base import InterfaceBaseModel, StrictModel, ValueModel
from .custom_types import ClusterRegister, CustomTypeData, FxpRegister, FxpTypeInfo
from .element import (
    FILE_PREFIX,
    SIZE_SUFFIX,
    ElementKind,
    LocationDefinition,
    decode_type_name,
    element_name,
    interface_prefix,
    match_kind,
)

__all__ = [
    # Base
    "InterfaceBaseModel",
    "StrictModel",
    "ValueModel",
    # Naming conventions
    "FILE_PREFIX",
    "SIZE_SUFFIX",
    "ElementKind",
    "LocationDefinition",
    "decode_type_name",
    "element_name",
    "interface_prefix",
    "match_kind",
    # Interface
    "AddressSet",
    "InterfaceDescription",
    # Custom types
    "FxpTypeInfo",
    "FxpRegister",
    "ClusterRegister",
    "CustomTypeData",
]
