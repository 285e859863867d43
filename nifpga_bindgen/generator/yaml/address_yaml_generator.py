"""
YAML dump of a decoded interface.

Used by ``inspect`` to show what the parser recovered from a header without
generating code. Elements are grouped by kind, each group sorted by name.
"""

from typing import Any, Dict, Optional

import yaml

from nifpga_bindgen.model.address_set import InterfaceDescription
from nifpga_bindgen.model.element import ElementKind


class AddressYamlGenerator:
    """Renders an ``InterfaceDescription`` as YAML."""

    def to_dict(
        self, description: InterfaceDescription, interface_name: Optional[str] = None
    ) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if interface_name:
            data["interface"] = interface_name
        data["signature"] = description.signature

        elements: Dict[str, Any] = {}
        for kind in ElementKind:
            group = [
                {"name": d.name, "datatype": d.datatype, "address": address}
                for d, address in description.registers.of_kind(kind)
            ]
            if group:
                elements[kind.value] = group
        data["elements"] = elements
        return data

    def generate(
        self, description: InterfaceDescription, interface_name: Optional[str] = None
    ) -> str:
        return yaml.dump(
            self.to_dict(description, interface_name),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
