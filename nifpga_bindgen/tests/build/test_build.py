"""
Tests for FpgaCInterface and YAML build files.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from nifpga_bindgen.build import FpgaCInterface, load_build_config
from nifpga_bindgen.errors import ConfigError, SignatureNotFoundError
from nifpga_bindgen.model import AddressSet, ElementKind, InterfaceDescription, LocationDefinition

SUBPROCESS_RUN = "nifpga_bindgen.build.subprocess.run"


@pytest.fixture
def description(main_signature):
    registers = AddressSet(
        [(LocationDefinition(kind=ElementKind.CONTROL, name="U8Control", datatype="U8"), 0x18002)]
    )
    return InterfaceDescription(signature=main_signature, registers=registers)


@pytest.fixture
def fake_parser(description):
    parser = MagicMock()
    parser.parse_header.return_value = description
    return parser


class TestFromCustomHeader:
    def test_relative_path(self):
        interface = FpgaCInterface.from_custom_header("./NiFpga_fpga.h")
        assert interface.interface_name == "fpga"
        assert interface.common_c == Path("./NiFpga.c")
        assert interface.custom_h == Path("./NiFpga_fpga.h")
        # Does not exist in the test environment.
        assert interface.custom_c is None

    def test_finds_custom_source(self, main_header):
        custom_c = main_header.parent / "NiFpga_Main.c"
        custom_c.write_text("/* custom */")

        interface = FpgaCInterface.from_custom_header(main_header)
        assert interface.interface_name == "Main"
        assert interface.custom_c == custom_c
        assert interface.sources == [main_header.parent / "NiFpga.c", custom_c]

    @pytest.mark.parametrize("name", ["NiFpga.h", "Main.h", "NiFpga_.h"])
    def test_rejects_other_headers(self, name):
        with pytest.raises(ValueError, match="NiFpga_"):
            FpgaCInterface.from_custom_header(name)

    def test_unknown_option_is_rejected(self):
        with pytest.raises(ValueError):
            FpgaCInterface.from_custom_header("NiFpga_Main.h", sysrot="/opt")


class TestCompile:
    def test_compile_command(self, monkeypatch):
        monkeypatch.delenv("CC", raising=False)
        interface = FpgaCInterface.from_custom_header("fpga/NiFpga_Main.h")
        assert interface.compile_command("out/libni_fpga.so") == [
            "cc",
            "-shared",
            "-fPIC",
            str(Path("fpga/NiFpga.c")),
            "-o",
            "out/libni_fpga.so",
        ]

    def test_sysroot_is_passed_unmodified(self):
        interface = FpgaCInterface.from_custom_header(
            "fpga/NiFpga_Main.h",
            sysroot="C:\\build\\2023\\x64\\sysroots\\core2-64-nilrt-linux",
            compiler="x86_64-nilrt-linux-gcc -m64",
        )
        command = interface.compile_command("lib.so")
        assert command[:2] == ["x86_64-nilrt-linux-gcc", "-m64"]
        assert "--sysroot=C:\\build\\2023\\x64\\sysroots\\core2-64-nilrt-linux" in command

    def test_build_library_runs_compiler(self, main_header, tmp_path):
        interface = FpgaCInterface.from_custom_header(main_header)
        out_dir = tmp_path / "out"
        with patch(SUBPROCESS_RUN) as run:
            library = interface.build_library(out_dir)

        assert library == out_dir / "libni_fpga.so"
        assert out_dir.is_dir()
        run.assert_called_once_with(interface.compile_command(library), check=True)


class TestBuild:
    def test_build_bindings(self, main_header, fake_parser, tmp_path):
        interface = FpgaCInterface.from_custom_header(main_header)
        written = interface.build_bindings(tmp_path / "gen", parser=fake_parser)

        fake_parser.parse_header.assert_called_once_with("Main", main_header)
        path = written["NiFpga_Main.py"]
        assert "U8Control = Register(ctypes.c_uint8, 0x18002)" in path.read_text()

    def test_build_generates_and_compiles(self, main_header, description, tmp_path):
        interface = FpgaCInterface.from_custom_header(main_header)
        with patch(SUBPROCESS_RUN) as run, patch(
            "nifpga_bindgen.build.InterfaceParser.parse_header", return_value=description
        ):
            written = interface.build(tmp_path / "gen")

        assert run.called
        assert sorted(written) == ["NiFpga_Main.py", "libni_fpga.so"]

    def test_header_failure_skips_compiler(self, main_header, tmp_path):
        interface = FpgaCInterface.from_custom_header(main_header)
        out_dir = tmp_path / "gen"
        with patch(SUBPROCESS_RUN) as run, patch(
            "nifpga_bindgen.build.InterfaceParser.parse_header",
            side_effect=SignatureNotFoundError("Main"),
        ):
            with pytest.raises(SignatureNotFoundError):
                interface.build(out_dir)

        assert not run.called
        assert not out_dir.exists()

    def test_render_bindings_writes_nothing(self, main_header, fake_parser, tmp_path):
        interface = FpgaCInterface.from_custom_header(main_header, output_dir=tmp_path / "gen")
        files = interface.render_bindings(parser=fake_parser)

        assert list(files) == ["NiFpga_Main.py"]
        assert "U8Control = Register(ctypes.c_uint8, 0x18002)" in files["NiFpga_Main.py"]
        assert not (tmp_path / "gen").exists()

    def test_build_without_library(self, main_header, description, tmp_path):
        interface = FpgaCInterface.from_custom_header(main_header, output_dir=tmp_path / "gen")
        with patch(SUBPROCESS_RUN) as run, patch(
            "nifpga_bindgen.build.InterfaceParser.parse_header", return_value=description
        ):
            written = interface.build(compile_library=False)

        assert not run.called
        assert written["NiFpga_Main.py"] == tmp_path / "gen" / "NiFpga_Main.py"

    def test_parser_uses_configured_preprocessor(self):
        interface = FpgaCInterface.from_custom_header(
            "NiFpga_Main.h", cpp="clang", cpp_args=["-E", "-P"]
        )
        parser = interface.create_parser()
        assert parser.cpp_path == "clang"
        assert parser.cpp_args == ["-E", "-P"]


class TestLoadBuildConfig:
    def test_resolves_paths_against_file(self, tmp_path):
        config = tmp_path / "build.yml"
        config.write_text(
            """
header: fpga/NiFpga_Main.h
outputDir: generated
sysroot: /opt/sysroots/core2-64-nilrt-linux
cpp: clang
cppArgs: ["-E", "-P"]
"""
        )
        interface = load_build_config(config)

        assert interface.interface_name == "Main"
        assert interface.custom_h == tmp_path.resolve() / "fpga" / "NiFpga_Main.h"
        assert interface.output_dir == tmp_path.resolve() / "generated"
        assert interface.sysroot == "/opt/sysroots/core2-64-nilrt-linux"
        assert interface.cpp == "clang"
        assert interface.cpp_args == ["-E", "-P"]

    def test_minimal(self, tmp_path):
        config = tmp_path / "build.yml"
        config.write_text("header: NiFpga_Main.h\n")
        interface = load_build_config(config)
        assert interface.output_dir is None
        assert interface.sysroot is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="File not found"):
            load_build_config(tmp_path / "missing.yml")

    def test_yaml_syntax_error_has_line(self, tmp_path):
        config = tmp_path / "build.yml"
        config.write_text("header: NiFpga_Main.h\nsysroot: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML syntax error") as excinfo:
            load_build_config(config)
        assert excinfo.value.line is not None
        assert excinfo.value.file_path == config.resolve()

    def test_root_must_be_mapping(self, tmp_path):
        config = tmp_path / "build.yml"
        config.write_text("- header\n")
        with pytest.raises(ConfigError, match="Root element"):
            load_build_config(config)

    def test_missing_header(self, tmp_path):
        config = tmp_path / "build.yml"
        config.write_text("sysroot: /opt\n")
        with pytest.raises(ConfigError, match="header"):
            load_build_config(config)

    def test_unknown_key(self, tmp_path):
        config = tmp_path / "build.yml"
        config.write_text("header: NiFpga_Main.h\nsysrot: /opt\n")
        with pytest.raises(ConfigError, match="sysrot"):
            load_build_config(config)

    def test_bad_header_name(self, tmp_path):
        config = tmp_path / "build.yml"
        config.write_text("header: Main.h\n")
        with pytest.raises(ConfigError, match="NiFpga_"):
            load_build_config(config)
