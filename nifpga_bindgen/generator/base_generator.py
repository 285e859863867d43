"""
Base generator interface for binding generation.

Provides the abstract interface for target-language generators so the build
orchestration can drive any of them the same way.

Current implementations:
- BindingGenerator: Python accessor module (nifpga_bindgen.generator.python.binding_generator)
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from nifpga_bindgen.model.address_set import InterfaceDescription


def hex_address(value: int) -> str:
    """Render an address the way the vendor header writes it (``0x1800A``)."""
    return f"0x{value:X}"


class BaseGenerator(ABC):
    """
    Abstract base class for binding generators.

    Subclasses render everything in ``generate_all``; ``write_files`` only
    touches the file system once every file rendered successfully.
    """

    def __init__(self, template_dir: Optional[str] = None):
        """
        Initialize the generator with a Jinja2 environment.

        Args:
            template_dir: Optional custom template directory.
                Defaults to the 'templates' subdirectory next to this module.
        """
        if template_dir is None:
            template_dir = os.path.join(os.path.dirname(__file__), "templates")

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["hex_address"] = hex_address
        self.env.filters["py_string"] = json.dumps

    @abstractmethod
    def generate_all(
        self, description: InterfaceDescription, interface_name: str
    ) -> Dict[str, str]:
        """
        Generate all files for an interface.

        Args:
            description: Decoded interface description
            interface_name: Interface name, e.g. 'Main'

        Returns:
            Dictionary mapping filename to content
        """
        pass

    def write_files(
        self,
        description: InterfaceDescription,
        interface_name: str,
        output_dir: Union[str, Path],
    ) -> Dict[str, Path]:
        """
        Generate and write all files to the output directory.

        Args:
            description: Decoded interface description
            interface_name: Interface name, e.g. 'Main'
            output_dir: Output directory path

        Returns:
            Dictionary mapping filename to written file path
        """
        return self.write_rendered(self.generate_all(description, interface_name), output_dir)

    @staticmethod
    def write_rendered(files: Dict[str, str], output_dir: Union[str, Path]) -> Dict[str, Path]:
        """Write already rendered files, creating the output directory."""
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        written = {}
        for filename, content in files.items():
            file_path = output_path / filename
            file_path.write_text(content, encoding="utf-8")
            written[filename] = file_path

        return written
