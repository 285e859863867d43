"""
Parser for vendor-generated FPGA interface headers (``NiFpga_<name>.h``).

Runs the header shim, the system C preprocessor and pycparser, then walks the
syntax tree to assemble one ``InterfaceDescription``.
"""

import logging
import os
import re
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from pycparser import c_ast, c_parser, preprocess_file

from nifpga_bindgen.errors import HeaderParseError, SignatureNotFoundError
from nifpga_bindgen.model.address_set import InterfaceDescription

from .address_visitor import AddressDefinitionsVisitor
from .header_shim import write_parse_ready_header
from .signature_visitor import SignatureVisitor

logger = logging.getLogger(__name__)

DEFAULT_CPP_ARGS = ["-E"]

_PARSE_ERROR_LOCATION_RE = re.compile(r"^(?P<file>.*?):(?P<line>\d+):(?:\d+:)?\s*(?P<msg>.*)$")


def default_cpp_path() -> str:
    """Return the C compiler used for preprocessing (``$CC`` or ``cc``)."""
    return os.environ.get("CC") or "cc"


class InterfaceParser:
    """
    Build an ``InterfaceDescription`` from an interface header.

    Args:
        cpp_path: Compiler or preprocessor command line. Defaults to ``$CC``
            or ``cc``. Words after the executable are prepended to
            ``cpp_args``, as for the compile step.
        cpp_args: Arguments that make ``cpp_path`` only preprocess.
    """

    def __init__(self, cpp_path: Optional[str] = None, cpp_args: Optional[List[str]] = None):
        command = shlex.split(cpp_path or default_cpp_path())
        if not command:
            raise ValueError("Empty preprocessor command")
        self.cpp_path = command[0]
        self.cpp_args = command[1:]
        self.cpp_args += list(cpp_args) if cpp_args is not None else DEFAULT_CPP_ARGS

    def parse_header(
        self, interface_name: str, header_path: Union[str, Path]
    ) -> InterfaceDescription:
        """
        Parse the custom header of an interface.

        Args:
            interface_name: Interface name, e.g. ``Main`` for ``NiFpga_Main.h``.
            header_path: Path to the header.

        Returns:
            The decoded interface description.

        Raises:
            HeaderParseError: If preprocessing or parsing fails.
            SignatureNotFoundError: If the header declares no signature.
            OSError: If the header cannot be read or the copy written.
        """
        header_path = Path(header_path)
        with tempfile.TemporaryDirectory(prefix="nifpga_") as temp_dir:
            parse_ready = write_parse_ready_header(header_path, temp_dir)
            text = self._preprocess(parse_ready, header_path)
            ast = self.parse_text(text, filename=str(header_path))
        return describe(interface_name, ast)

    def parse_preprocessed(self, interface_name: str, content: str) -> InterfaceDescription:
        """
        Parse already preprocessed C text (no macros or includes).

        Bypasses the header shim and the preprocessor, which makes it the
        entry point for file-system free tests.
        """
        ast = self.parse_text(content)
        return describe(interface_name, ast)

    def _preprocess(self, path: Path, header_path: Path) -> str:
        logger.debug("Preprocessing %s with %s %s", path, self.cpp_path, self.cpp_args)
        try:
            return preprocess_file(str(path), cpp_path=self.cpp_path, cpp_args=self.cpp_args)
        except RuntimeError as e:
            raise HeaderParseError(f"Unable to run the C preprocessor: {e}", header_path) from e
        except subprocess.CalledProcessError as e:
            raise HeaderParseError(
                f"C preprocessor failed (exit {e.returncode})", header_path
            ) from e

    @staticmethod
    def parse_text(text: str, filename: str = "<preprocessed>") -> c_ast.FileAST:
        """Parse preprocessed C text into a pycparser syntax tree.

        Raises:
            HeaderParseError: If the text is not valid C.
        """
        try:
            return c_parser.CParser().parse(text, filename=filename)
        except c_parser.ParseError as e:
            match = _PARSE_ERROR_LOCATION_RE.match(str(e))
            if match:
                raise HeaderParseError(
                    match.group("msg"), Path(match.group("file")), int(match.group("line"))
                ) from e
            raise HeaderParseError(str(e), Path(filename)) from e


def describe(interface_name: str, ast: c_ast.FileAST) -> InterfaceDescription:
    """Extract the signature and address set from a parsed header."""
    signature_visitor = SignatureVisitor(interface_name)
    address_visitor = AddressDefinitionsVisitor(interface_name)
    signature_visitor.visit(ast)
    address_visitor.visit(ast)

    if signature_visitor.value is None:
        raise SignatureNotFoundError(interface_name)

    logger.info(
        "Interface %s: signature %s, %d elements",
        interface_name,
        signature_visitor.value,
        len(address_visitor.registers),
    )
    return InterfaceDescription(
        signature=signature_visitor.value, registers=address_visitor.registers
    )
