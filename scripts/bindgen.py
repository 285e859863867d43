#!/usr/bin/env python3
"""
nifpga-bindgen - Python bindings for NI FPGA C interfaces.

Usage:
    python scripts/bindgen.py generate fpga/NiFpga_Main.h --output ./generated
    python scripts/bindgen.py generate --config fpga_build.yml --build-lib
    python scripts/bindgen.py inspect fpga/NiFpga_Main.h

Subcommands:
    generate    Generate the NiFpga_<name>.py bindings module
    inspect     Print the decoded interface as YAML
"""
import argparse
import json
import logging
import subprocess
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from nifpga_bindgen.build import FpgaCInterface, load_build_config
from nifpga_bindgen.errors import GenerationError
from nifpga_bindgen.generator.yaml.address_yaml_generator import AddressYamlGenerator

logger = logging.getLogger("nifpga_bindgen")

FAILURES = (GenerationError, OSError, ValueError, subprocess.CalledProcessError)


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_interface(args) -> FpgaCInterface:
    """Build the interface from a header or a YAML build file plus CLI overrides."""
    if args.config:
        interface = load_build_config(args.config)
    else:
        interface = FpgaCInterface.from_custom_header(args.input)

    overrides = {}
    if getattr(args, "sysroot", None):
        overrides["sysroot"] = args.sysroot
    if args.cpp:
        overrides["cpp"] = args.cpp
    if overrides:
        interface = interface.model_copy(update=overrides)
    return interface


def report_error(e: Exception, use_json: bool):
    if use_json:
        print(json.dumps({"success": False, "error": str(e)}))
    else:
        print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)


def cmd_generate(args):
    """Generate the bindings module (and optionally the C library)."""
    try:
        interface = load_interface(args)
        output_dir = args.output or interface.output_dir or interface.custom_h.parent
        written = interface.build(output_dir, compile_library=args.build_lib)
    except FAILURES as e:
        logger.debug("Generation failed", exc_info=True)
        report_error(e, args.json)

    if args.json:
        files = {name: str(path) for name, path in written.items()}
        print(json.dumps({"success": True, "files": files, "count": len(files)}))
    else:
        print(f"Generated {len(written)} files to: {output_dir}")
        for name in written:
            print(f"  {name}")


def cmd_inspect(args):
    """Print what the parser recovered from a header."""
    try:
        interface = load_interface(args)
        description = interface.describe()
    except FAILURES as e:
        logger.debug("Inspection failed", exc_info=True)
        report_error(e, False)

    print(AddressYamlGenerator().generate(description, interface.interface_name), end="")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nifpga-bindgen", description="Python bindings for NI FPGA C interfaces"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate subcommand
    gen_parser = subparsers.add_parser("generate", help="Generate NiFpga_<name>.py bindings")
    gen_parser.add_argument("input", nargs="?", help="Interface header NiFpga_<name>.h")
    gen_parser.add_argument("--config", "-c", help="YAML build file instead of a header")
    gen_parser.add_argument(
        "--output", "-o", help="Output directory (default: outputDir or the header folder)"
    )
    gen_parser.add_argument("--sysroot", help="Sysroot passed to the C compiler")
    gen_parser.add_argument("--cpp", help="C preprocessor command (default: $CC or cc)")
    gen_parser.add_argument(
        "--build-lib", action="store_true", help="Also compile the C sources into a library"
    )
    gen_parser.add_argument("--json", action="store_true", help="JSON output")
    gen_parser.set_defaults(func=cmd_generate)

    # inspect subcommand
    inspect_parser = subparsers.add_parser("inspect", help="Print the decoded interface as YAML")
    inspect_parser.add_argument("input", nargs="?", help="Interface header NiFpga_<name>.h")
    inspect_parser.add_argument("--config", "-c", help="YAML build file instead of a header")
    inspect_parser.add_argument("--cpp", help="C preprocessor command (default: $CC or cc)")
    inspect_parser.set_defaults(func=cmd_inspect)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.input and not args.config:
        parser.error(f"{args.command}: either a header or --config is required")

    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
