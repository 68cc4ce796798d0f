"""
blocklyvm utilities package
"""

from .base import Result, ResultTag
from .io_utils import read_program_file, read_program_lines, split_program

__all__ = ["Result", "ResultTag", "read_program_file", "read_program_lines", "split_program"]
