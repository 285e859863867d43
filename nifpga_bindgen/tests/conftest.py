import os
import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so that nifpga_bindgen is importable
# This is needed because of the flat layout structure
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

MAIN_SIGNATURE = "728411ED7A6557687BCF28DB1D70ACF2"

# NiFpga_Main.h as exported by the vendor tool for a small test bitfile.
MAIN_HEADER = """/*
 * Generated with the FPGA Interface C API Generator 19.0
 * for NI-RIO 19.0 or later.
 */
#ifndef __NiFpga_Main_h__
#define __NiFpga_Main_h__

#ifndef NiFpga_Version
   #define NiFpga_Version 190
#endif

#include "NiFpga.h"

#define NiFpga_Main_Bitfile "NiFpga_Main.lvbitx"

static const char* const NiFpga_Main_Signature = "728411ED7A6557687BCF28DB1D70ACF2";

#if NiFpga_Cpp
extern "C"
{
#endif

typedef enum
{
   NiFpga_Main_IndicatorU8_U8Result = 0x1800A,
} NiFpga_Main_IndicatorU8;

typedef enum
{
   NiFpga_Main_ControlU8_U8Control = 0x18002,
   NiFpga_Main_ControlU8_U8Sum = 0x18006,
} NiFpga_Main_ControlU8;


#if NiFpga_Cpp
}
#endif

#endif
"""

# The same interface after preprocessing: no directives left.
MAIN_PREPROCESSED = """
static const char* const NiFpga_Main_Signature = "728411ED7A6557687BCF28DB1D70ACF2";

typedef enum
{
   NiFpga_Main_IndicatorU8_U8Result = 0x1800A,
} NiFpga_Main_IndicatorU8;

typedef enum
{
   NiFpga_Main_ControlU8_U8Control = 0x18002,
   NiFpga_Main_ControlU8_U8Sum = 0x18006,
} NiFpga_Main_ControlU8;
"""


@pytest.fixture
def main_header(tmp_path) -> Path:
    """A vendor export folder holding NiFpga_Main.h."""
    header = tmp_path / "NiFpga_Main.h"
    header.write_text(MAIN_HEADER)
    return header


@pytest.fixture
def main_preprocessed() -> str:
    return MAIN_PREPROCESSED


@pytest.fixture
def main_signature() -> str:
    return MAIN_SIGNATURE
