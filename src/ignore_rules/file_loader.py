"""
File loader for reading ignore files into lines
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

from .constants import IGNORE_FILE_ENCODING, COMMENT_CHAR
from .normalizer import normalize_line
from .utils import get_logger

logger = get_logger(__name__)


@dataclass
class IgnoreFileInfo:
    """Information about a loaded ignore file"""
    path: Path
    lines: List[str]
    stats: Dict[str, int] = field(default_factory=dict)


def split_lines(text: str) -> List[str]:
    """
    Split ignore file contents on '\\n', dropping a trailing '\\r' per line

    A final newline yields a trailing empty line, which compiles to nothing.
    """
    return [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]


class IgnoreFileLoader:
    """
    Reads ignore files from disk

    Errors from opening or reading the file are not handled here; the
    OSError reaches the caller unchanged.
    """

    def __init__(self, encoding: str = IGNORE_FILE_ENCODING):
        """
        Initialize loader

        Args:
            encoding: Text encoding of ignore files
        """
        self.encoding = encoding

    def read_lines(self, file_path: Union[str, Path]) -> List[str]:
        """
        Read an ignore file as a list of lines

        Args:
            file_path: Path to the ignore file

        Returns:
            Lines in file order, without line terminators

        Raises:
            OSError: If the file cannot be opened or read
        """
        # newline='' keeps '\r' so split_lines() sees the raw terminators
        with open(file_path, 'r', encoding=self.encoding, errors='replace', newline='') as f:
            text = f.read()

        lines = split_lines(text)
        logger.debug(f"Read {len(lines)} lines from {file_path}")
        return lines

    def load(self, file_path: Union[str, Path]) -> IgnoreFileInfo:
        """
        Read an ignore file and collect line statistics

        Args:
            file_path: Path to the ignore file

        Returns:
            IgnoreFileInfo with lines and counts of empty, comment and
            pattern lines
        """
        lines = self.read_lines(file_path)
        info = IgnoreFileInfo(
            path=Path(file_path),
            lines=lines,
            stats={
                'total_lines': len(lines),
                'empty_lines': 0,
                'comment_lines': 0,
                'pattern_lines': 0,
            }
        )

        for line in lines:
            if normalize_line(line) is not None:
                info.stats['pattern_lines'] += 1
            elif line.startswith(COMMENT_CHAR):
                info.stats['comment_lines'] += 1
            else:
                info.stats['empty_lines'] += 1

        return info
