"""
Output generators for decoded FPGA interfaces.
"""
