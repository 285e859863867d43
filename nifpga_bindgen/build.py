"""
Build orchestration for an FPGA C interface.

The vendor export of an FPGA project is a folder holding ``NiFpga.c`` (the
common driver shim), ``NiFpga_<name>.h`` (the interface header) and sometimes
``NiFpga_<name>.c``. ``FpgaCInterface`` finds those files from the header,
compiles the C sources into a shared library and generates the Python
bindings module.

Example:
    >>> interface = FpgaCInterface.from_custom_header("fpga/NiFpga_Main.h")
    >>> interface.build("generated")
"""

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import Field, ValidationError

from nifpga_bindgen.errors import ConfigError
from nifpga_bindgen.generator.python.binding_generator import BindingGenerator
from nifpga_bindgen.model.address_set import InterfaceDescription
from nifpga_bindgen.model.base import StrictModel
from nifpga_bindgen.model.element import FILE_PREFIX
from nifpga_bindgen.parser.c.interface_parser import InterfaceParser, default_cpp_path

logger = logging.getLogger(__name__)

COMMON_SOURCE = f"{FILE_PREFIX}.c"
LIBRARY_NAME = "ni_fpga"


class FpgaCInterface(StrictModel):
    """
    The generated C interface of one FPGA project.

    Use ``from_custom_header`` to locate the companion sources next to the
    interface header.
    """

    interface_name: str = Field(..., description="Interface name, e.g. 'Main'")
    custom_h: Path = Field(..., description="Interface header, NiFpga_<name>.h")
    common_c: Path = Field(..., description="Common driver source, NiFpga.c")
    custom_c: Optional[Path] = Field(
        default=None, description="Interface source NiFpga_<name>.c, when exported"
    )
    sysroot: Optional[str] = Field(
        default=None, description="Passed unmodified to the compiler as --sysroot"
    )
    compiler: Optional[str] = Field(default=None, description="C compiler, defaults to $CC")
    cpp: Optional[str] = Field(default=None, description="Preprocessor used for parsing")
    cpp_args: Optional[List[str]] = Field(default=None, description="Preprocessor arguments")
    output_dir: Optional[Path] = Field(default=None, description="Default output folder")

    @classmethod
    def from_custom_header(cls, header: Union[str, Path], **options: Any) -> "FpgaCInterface":
        """
        Construct the interface from its custom header.

        This is the header carrying the project prefix, e.g.
        ``NiFpga_Main.h`` and not ``NiFpga.h``. The other sources are
        expected in the same folder.

        Raises:
            ValueError: If the file name does not start with ``NiFpga_``.
        """
        header = Path(header)
        prefix = f"{FILE_PREFIX}_"
        if not header.stem.startswith(prefix) or len(header.stem) == len(prefix):
            raise ValueError(f"'{header.name}' is not a {prefix}<name>.h interface header")

        interface_name = header.stem[len(prefix):]
        folder = header.parent
        custom_c = folder / f"{prefix}{interface_name}.c"

        return cls(
            interface_name=interface_name,
            custom_h=header,
            common_c=folder / COMMON_SOURCE,
            custom_c=custom_c if custom_c.exists() else None,
            **options,
        )

    @property
    def sources(self) -> List[Path]:
        sources = [self.common_c]
        if self.custom_c is not None:
            sources.append(self.custom_c)
        return sources

    def library_filename(self) -> str:
        return f"lib{LIBRARY_NAME}.so"

    def compile_command(self, output: Union[str, Path]) -> List[str]:
        """Compiler argv that builds the C sources into ``output``."""
        command = shlex.split(self.compiler or default_cpp_path())
        command += ["-shared", "-fPIC"]
        if self.sysroot:
            command.append(f"--sysroot={self.sysroot}")
        command += [str(source) for source in self.sources]
        command += ["-o", str(output)]
        return command

    def create_parser(self) -> InterfaceParser:
        return InterfaceParser(cpp_path=self.cpp, cpp_args=self.cpp_args)

    def describe(self, parser: Optional[InterfaceParser] = None) -> InterfaceDescription:
        """Parse the interface header."""
        parser = parser or self.create_parser()
        return parser.parse_header(self.interface_name, self.custom_h)

    def build_library(self, output_dir: Union[str, Path, None] = None) -> Path:
        """
        Compile the C sources into a shared library.

        Raises:
            subprocess.CalledProcessError: If the compiler fails.
            OSError: If the compiler cannot be started.
        """
        output_path = self._resolve_output_dir(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)
        library = output_path / self.library_filename()
        command = self.compile_command(library)
        logger.info("Compiling %s", library)
        logger.debug("Running %s", " ".join(command))
        subprocess.run(command, check=True)
        return library

    def build_bindings(
        self,
        output_dir: Union[str, Path, None] = None,
        parser: Optional[InterfaceParser] = None,
    ) -> Dict[str, Path]:
        """
        Parse the header and write the bindings module.

        Returns:
            Dictionary mapping filename to written file path
        """
        return self._write_bindings(self.render_bindings(parser), output_dir)

    def render_bindings(self, parser: Optional[InterfaceParser] = None) -> Dict[str, str]:
        """Parse the header and render the bindings module without writing it."""
        return BindingGenerator().generate_all(self.describe(parser), self.interface_name)

    def build(
        self, output_dir: Union[str, Path, None] = None, compile_library: bool = True
    ) -> Dict[str, Path]:
        """
        Build the Python bindings and, optionally, the C library.

        The header is parsed and the bindings rendered before the compiler
        runs. A header that fails to generate leaves no library behind.
        """
        files = self.render_bindings()
        written = {}
        if compile_library:
            library = self.build_library(output_dir)
            written[library.name] = library
        written.update(self._write_bindings(files, output_dir))
        return written

    def _write_bindings(
        self, files: Dict[str, str], output_dir: Union[str, Path, None]
    ) -> Dict[str, Path]:
        written = BindingGenerator.write_rendered(files, self._resolve_output_dir(output_dir))
        for path in written.values():
            logger.info("Wrote %s", path)
        return written

    def _resolve_output_dir(self, output_dir: Union[str, Path, None]) -> Path:
        if output_dir is not None:
            return Path(output_dir)
        if self.output_dir is not None:
            return self.output_dir
        return Path(os.getcwd())


class BuildConfig(StrictModel):
    """Contents of a YAML build file."""

    header: Path
    output_dir: Optional[Path] = None
    sysroot: Optional[str] = None
    compiler: Optional[str] = None
    cpp: Optional[str] = None
    cpp_args: Optional[List[str]] = None


def load_build_config(file_path: Union[str, Path]) -> FpgaCInterface:
    """
    Load an interface build from a YAML file.

    Example file::

        header: fpga/NiFpga_Main.h
        outputDir: generated
        sysroot: /opt/sysroots/core2-64-nilrt-linux

    Relative paths are resolved against the folder of the YAML file.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML or does
            not describe a build.
    """
    file_path = Path(file_path).resolve()
    if not file_path.exists():
        raise ConfigError(f"File not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line_num = mark.line + 1 if mark else None
        raise ConfigError(f"YAML syntax error: {e}", file_path, line_num) from e

    if not isinstance(data, dict):
        raise ConfigError("Root element must be a YAML object/dictionary", file_path)

    try:
        config = BuildConfig.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        raise ConfigError("Validation failed:\n  " + "\n  ".join(errors), file_path) from e

    base = file_path.parent
    header = base / config.header
    output_dir = base / config.output_dir if config.output_dir is not None else None

    try:
        return FpgaCInterface.from_custom_header(
            header,
            sysroot=config.sysroot,
            compiler=config.compiler,
            cpp=config.cpp,
            cpp_args=config.cpp_args,
            output_dir=output_dir,
        )
    except ValueError as e:
        raise ConfigError(str(e), file_path) from e
