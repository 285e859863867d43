"""
Interface element vocabulary and the C naming conventions that identify it.

The vendor C API generator names every enumeration after the kind of element
it holds and the element's datatype, e.g. ``NiFpga_Main_ControlArrayU8`` or
``NiFpga_Main_IndicatorArrayU8Size``. Once the file-level prefix
(``NiFpga_Main_``) is removed the remaining short identifier is decoded here.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import Field

from .base import ValueModel

FILE_PREFIX = "NiFpga"
SIZE_SUFFIX = "Size"


class ElementKind(str, Enum):
    """Category of an interface element.

    Declaration order is significant: it is the primary sort key of
    ``LocationDefinition``.
    """

    CONTROL = "Control"
    INDICATOR = "Indicator"
    CONTROL_ARRAY = "ControlArray"
    INDICATOR_ARRAY = "IndicatorArray"
    CONTROL_ARRAY_SIZE = "ControlArraySize"
    INDICATOR_ARRAY_SIZE = "IndicatorArraySize"
    TARGET_TO_HOST_FIFO = "TargetToHostFifo"
    HOST_TO_TARGET_FIFO = "HostToTargetFifo"

    @property
    def prefix(self) -> str:
        """Naming prefix used in the C interface.

        Size kinds share the prefix of their array kind; they are marked by a
        trailing ``Size`` instead.
        """
        if self in (ElementKind.CONTROL_ARRAY_SIZE, ElementKind.INDICATOR_ARRAY_SIZE):
            return self.value[: -len(SIZE_SUFFIX)]
        return self.value

    @property
    def is_array(self) -> bool:
        return self in (
            ElementKind.CONTROL_ARRAY,
            ElementKind.INDICATOR_ARRAY,
            ElementKind.CONTROL_ARRAY_SIZE,
            ElementKind.INDICATOR_ARRAY_SIZE,
        )

    @property
    def is_size(self) -> bool:
        return self in (ElementKind.CONTROL_ARRAY_SIZE, ElementKind.INDICATOR_ARRAY_SIZE)

    @property
    def is_fifo(self) -> bool:
        return self in (ElementKind.TARGET_TO_HOST_FIFO, ElementKind.HOST_TO_TARGET_FIFO)

    @property
    def order(self) -> int:
        """Position of the kind in declaration order."""
        return _KIND_ORDER[self]

    def with_size(self) -> "ElementKind":
        """Return the size kind for an array kind, otherwise the kind itself."""
        return _SIZE_KINDS.get(self, self)


_KIND_ORDER = {kind: index for index, kind in enumerate(ElementKind)}

_SIZE_KINDS = {
    ElementKind.CONTROL_ARRAY: ElementKind.CONTROL_ARRAY_SIZE,
    ElementKind.INDICATOR_ARRAY: ElementKind.INDICATOR_ARRAY_SIZE,
}

# Array prefixes start with the scalar prefixes, so they must be tried first.
# Size kinds are absent: they are recognised by their suffix.
KIND_MATCH_ORDER: Tuple[ElementKind, ...] = (
    ElementKind.CONTROL_ARRAY,
    ElementKind.INDICATOR_ARRAY,
    ElementKind.CONTROL,
    ElementKind.INDICATOR,
    ElementKind.TARGET_TO_HOST_FIFO,
    ElementKind.HOST_TO_TARGET_FIFO,
)


class LocationDefinition(ValueModel):
    """
    One addressable element of the FPGA interface.

    Equal definitions have equal kind, name and datatype. Instances are frozen
    and totally ordered so they can key a deterministic ``AddressSet``.
    """

    kind: ElementKind = Field(..., description="Element category")
    name: str = Field(..., description="Bare element name, e.g. 'U8Control'")
    datatype: str = Field(..., description="Vendor type tag, e.g. 'U8' or 'Sgl'")

    @property
    def sort_key(self) -> Tuple[int, str, str]:
        return (self.kind.order, self.name, self.datatype)

    def __lt__(self, other: "LocationDefinition") -> bool:
        if not isinstance(other, LocationDefinition):
            return NotImplemented
        return self.sort_key < other.sort_key

    def with_kind(self, kind: ElementKind) -> "LocationDefinition":
        """Return a copy of this definition with a different kind."""
        return LocationDefinition(kind=kind, name=self.name, datatype=self.datatype)

    def __str__(self) -> str:
        return f"{self.kind.value} {self.name} ({self.datatype})"


def match_kind(short_identifier: str) -> Optional[ElementKind]:
    """Find the kind whose prefix starts ``short_identifier``.

    Returns:
        The first matching kind in ``KIND_MATCH_ORDER``, or None when the
        identifier does not name an interface element.
    """
    for kind in KIND_MATCH_ORDER:
        if short_identifier.startswith(kind.prefix):
            return kind
    return None


def decode_type_name(short_identifier: str) -> Optional[Tuple[ElementKind, str]]:
    """Split a short enumeration name into its kind and datatype tag.

    Examples:
        >>> decode_type_name("ControlU8")
        (<ElementKind.CONTROL: 'Control'>, 'U8')
        >>> decode_type_name("IndicatorArraySglSize")
        (<ElementKind.INDICATOR_ARRAY_SIZE: 'IndicatorArraySize'>, 'Sgl')
    """
    kind = match_kind(short_identifier)
    if kind is None:
        return None

    datatype = short_identifier[len(kind.prefix) :]
    if kind.is_array and short_identifier.endswith(SIZE_SUFFIX):
        kind = kind.with_size()
        datatype = datatype[: -len(SIZE_SUFFIX)]

    return kind, datatype


def element_name(identifier: str) -> str:
    """Return the bare element name: the text after the last underscore."""
    return identifier.rpartition("_")[2]


def interface_prefix(interface_name: str) -> str:
    """Prefix shared by every identifier of an interface, e.g. ``NiFpga_Main_``."""
    return f"{FILE_PREFIX}_{interface_name}_"
