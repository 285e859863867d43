"""
Tests for the parse-ready header copy.
"""

from nifpga_bindgen.parser.c.header_shim import (
    PREAMBLE,
    is_include_line,
    render_parse_ready_header,
    strip_includes,
    write_parse_ready_header,
)
from nifpga_bindgen.parser.c.interface_parser import InterfaceParser


class TestStripIncludes:
    def test_drops_include_lines_only(self):
        text = '#include "NiFpga.h"\n#define A 1\nint x;\n#include <stdint.h>\n'
        assert strip_includes(text) == "#define A 1\nint x;\n"

    def test_indented_include_is_dropped(self):
        assert is_include_line('   #include "NiFpga.h"')

    def test_include_in_comment_is_kept(self):
        assert not is_include_line(' * #include "NiFpga.h" is required')
        assert not is_include_line("#define INCLUDE_ME 1")


def test_preamble_parses():
    ast = InterfaceParser.parse_text(PREAMBLE)
    names = [node.name for node in ast.ext]
    assert "NiFpga_Bool" in names
    assert "NiFpga_FxpTypeInfo" in names


def test_render_prepends_preamble():
    rendered = render_parse_ready_header('#include "NiFpga.h"\nint x;\n')
    assert rendered.startswith(PREAMBLE)
    assert rendered.endswith("int x;\n")
    assert "#include" not in rendered


def test_write_parse_ready_header(main_header, tmp_path):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    copy = write_parse_ready_header(main_header, out_dir)

    assert copy == out_dir / "NiFpga_Main.h"
    text = copy.read_text()
    assert text.startswith(PREAMBLE)
    assert '#include "NiFpga.h"' not in text
    assert "NiFpga_Main_ControlU8_U8Control = 0x18002" in text
    # Source header is left untouched.
    assert '#include "NiFpga.h"' in main_header.read_text()


def test_write_parse_ready_header_overwrites(main_header, tmp_path):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    (out_dir / "NiFpga_Main.h").write_text("stale")
    copy = write_parse_ready_header(main_header, out_dir)
    assert "stale" not in copy.read_text()
