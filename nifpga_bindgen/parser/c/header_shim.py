"""
Parse-ready copy of a vendor interface header.

The interface header includes ``NiFpga.h``, which pulls in platform SDK
headers that are often unavailable and break the C front end. None of the
declarations we read live there, so ``#include`` lines are dropped and a
small preamble supplies the few types the header itself uses.
"""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

# Assumes short is 16 bits and char is 8 bits, true for the Windows and
# Linux targets the vendor toolchain supports.
PREAMBLE = """
typedef unsigned char uint8_t;
typedef short int16_t;
typedef int int32_t;
typedef unsigned int uint32_t;
typedef unsigned long long uint64_t;
typedef long long int64_t;
typedef uint8_t NiFpga_Bool;

typedef struct NiFpga_FxpTypeInfo
{
    NiFpga_Bool isSigned;
    uint8_t wordLength;
    int16_t integerWordLength;
} NiFpga_FxpTypeInfo;

"""


def is_include_line(line: str) -> bool:
    """True when ``#include`` is the first token of the line."""
    return line.lstrip().startswith("#include")


def strip_includes(text: str) -> str:
    """Remove every ``#include`` line, keeping all other lines verbatim."""
    kept = []
    for line in text.splitlines():
        if is_include_line(line):
            logger.debug("Dropping %s", line.strip())
            continue
        kept.append(line)
    return "\n".join(kept) + "\n"


def render_parse_ready_header(text: str) -> str:
    """Return the preamble followed by the header without its includes."""
    return PREAMBLE + strip_includes(text)


def write_parse_ready_header(header: Union[str, Path], directory: Union[str, Path]) -> Path:
    """Write the parse-ready copy of ``header`` into ``directory``.

    The copy keeps the header's file name and overwrites any existing file.

    Returns:
        Path of the written copy.

    Raises:
        OSError: If the header cannot be read or the copy cannot be written.
    """
    header = Path(header)
    destination = Path(directory) / header.name
    text = header.read_text(encoding="utf-8")
    destination.write_text(render_parse_ready_header(text), encoding="utf-8")
    logger.debug("Wrote parse-ready header to %s", destination)
    return destination
