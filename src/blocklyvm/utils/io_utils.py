"""
Centralized program I/O utilities.

- Single place for encoding and line splitting
- Use Path.read_text() consistently (no raw open/read)
"""

from pathlib import Path
from typing import List, Union

from .config import DEFAULT_FILE_ENCODING


def read_program_file(path: Union[Path, str]) -> str:
    """Read a program file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING)


def split_program(text: str) -> List[str]:
    """Split submitted program text into trimmed, non-empty lines in original order."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def read_program_lines(path: Union[Path, str]) -> List[str]:
    """Read a program file as dispatchable lines."""
    return split_program(read_program_file(path))
