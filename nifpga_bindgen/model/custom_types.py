"""
Registers of custom types: fixed-point numbers and clusters.

Unlike native registers these are declared as a series of constants, one per
field, e.g. ``NiFpga_Main_ControlFxp_FxpSum_Resource`` and
``NiFpga_Main_ControlFxp_FxpSum_TypeInfo``. ``CustomTypeData`` accumulates
those fields per element name until the records are finalized.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import Field

from .base import ValueModel


class FxpTypeInfo(ValueModel):
    """Layout of a fixed-point number (mirrors ``NiFpga_FxpTypeInfo``)."""

    signed: bool = Field(..., description="True for a signed number")
    word_length: int = Field(..., ge=1, description="Total number of bits")
    integer_word_length: int = Field(..., description="Bits before the binary point")

    @property
    def fraction_length(self) -> int:
        return self.word_length - self.integer_word_length


class FxpRegister(ValueModel):
    """A fixed-point control or indicator."""

    name: str
    element_class: str = Field(..., description="e.g. 'ControlFxp' or 'IndicatorFxp'")
    type_info: FxpTypeInfo
    address: int = Field(..., ge=0)
    array_size: Optional[int] = None


class ClusterRegister(ValueModel):
    """A cluster control or indicator."""

    name: str
    element_class: str
    cluster_type: str
    address: int = Field(..., ge=0)
    packed_size: int = Field(..., description="Packed size in bytes")
    array_size: Optional[int] = None


@dataclass
class CustomTypeData:
    """Fields collected so far for one custom type element."""

    element_class: str
    address: Optional[int] = None
    type_info: Optional[FxpTypeInfo] = None
    cluster_type: Optional[str] = None
    packed_size: Optional[int] = None
    array_size: Optional[int] = None
