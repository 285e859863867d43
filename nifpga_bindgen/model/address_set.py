"""
Decoded schema of one FPGA interface.

``AddressSet`` maps each ``LocationDefinition`` to its 32-bit value: a
register/FIFO address, or an element count for the ``*Size`` kinds.
Iteration is always in key order, whatever the insertion order, so the
generated bindings are byte-identical from run to run.
"""

from collections.abc import MutableMapping
from typing import Dict, Iterable, Iterator, Optional, Tuple

from pydantic import Field

from .base import ValueModel
from .element import ElementKind, LocationDefinition

MAX_U32 = 0xFFFFFFFF


class AddressSet(MutableMapping):
    """Sorted mapping of ``LocationDefinition`` to an unsigned 32-bit value."""

    def __init__(
        self,
        entries: Optional[Iterable[Tuple[LocationDefinition, int]]] = None,
    ):
        self._entries: Dict[LocationDefinition, int] = {}
        if entries is not None:
            for definition, value in entries:
                self[definition] = value

    def __getitem__(self, definition: LocationDefinition) -> int:
        return self._entries[definition]

    def __setitem__(self, definition: LocationDefinition, value: int) -> None:
        if not isinstance(definition, LocationDefinition):
            raise TypeError(
                f"AddressSet keys must be LocationDefinition, got {type(definition).__name__}"
            )
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Value for {definition} must be an int")
        if not 0 <= value <= MAX_U32:
            raise ValueError(
                f"Value {value:#x} for {definition} does not fit in 32 bits"
            )
        self._entries[definition] = value

    def __delitem__(self, definition: LocationDefinition) -> None:
        del self._entries[definition]

    def __iter__(self) -> Iterator[LocationDefinition]:
        return iter(sorted(self._entries, key=lambda d: d.sort_key))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        body = ", ".join(f"{d!s}: {v:#x}" for d, v in self.items())
        return f"AddressSet({{{body}}})"

    def of_kind(self, *kinds: ElementKind) -> Iterator[Tuple[LocationDefinition, int]]:
        """Iterate, in key order, over the entries of the given kinds."""
        for definition, value in self.items():
            if definition.kind in kinds:
                yield definition, value

    def size_of(self, definition: LocationDefinition) -> Optional[int]:
        """Return the element count paired with an array definition.

        Returns:
            The value stored under the matching ``*Size`` definition, or None
            when the header declared no size for it.
        """
        return self._entries.get(definition.with_kind(definition.kind.with_size()))


class InterfaceDescription(ValueModel):
    """Signature plus the full address set of one interface header."""

    signature: str = Field(..., description="Bitfile signature string")
    registers: AddressSet = Field(
        default_factory=AddressSet, description="Decoded interface elements"
    )

    model_config = {
        **ValueModel.model_config,
        "arbitrary_types_allowed": True,
    }
