# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Level sources for the Sokoban puzzle.

A level is plain text, one grid row per line:

    #   wall            $   box             *   box on target
        empty floor     @   actor           +   actor on target
    .   target

Bundled levels live in the screens/ directory of the package as
screen.1, screen.2, ...
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..exceptions import InvalidLevelSource

logger = logging.getLogger(__name__)

SCREENS_DIR = Path(__file__).resolve().parent.parent / "screens"

_SCREEN_NAME = re.compile(r"^screen\.(\d+)$")


@dataclass(frozen=True)
class LevelSource:
    """
    The text description a puzzle is built from.

    Attributes:
        name: Label for logs and state reports (file name or "<string>")
        lines: Grid rows, top row first
        number: Bundled level number, or None for other sources
    """

    name: str
    lines: Tuple[str, ...]
    number: Optional[int] = None

    @classmethod
    def from_lines(cls, lines: Sequence[str], name: str = "<string>",
                   number: Optional[int] = None) -> "LevelSource":
        if lines is None:
            raise InvalidLevelSource("Level source is missing")
        rows = [line.rstrip("\r\n") for line in lines]
        # Trailing blank lines are file padding, not grid rows
        while rows and not rows[-1].strip():
            rows.pop()
        if not rows:
            raise InvalidLevelSource(f"Level {name} is empty")
        return cls(name=name, lines=tuple(rows), number=number)

    @classmethod
    def from_text(cls, text: str, name: str = "<string>") -> "LevelSource":
        if text is None:
            raise InvalidLevelSource("Level source is missing")
        return cls.from_lines(text.splitlines(), name=name)

    @classmethod
    def from_file(cls, path: Union[str, Path], number: Optional[int] = None) -> "LevelSource":
        """
        Read a level file.

        Raises:
            InvalidLevelSource: If the file is missing, unreadable or empty
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidLevelSource(f"Cannot read level file {path}: {e}") from e
        logger.debug(f"Read level file {path}")
        return cls.from_lines(text.splitlines(), name=path.name, number=number)

    @classmethod
    def bundled(cls, number: int) -> "LevelSource":
        """Load bundled level screen.<number>."""
        path = SCREENS_DIR / f"screen.{number}"
        if not path.is_file():
            raise InvalidLevelSource(
                f"No bundled level {number}. Available: {available_levels()}"
            )
        return cls.from_file(path, number=number)


def available_levels() -> List[int]:
    """Numbers of the bundled levels, ascending."""
    if not SCREENS_DIR.is_dir():
        return []
    numbers = []
    for path in SCREENS_DIR.iterdir():
        match = _SCREEN_NAME.match(path.name)
        if match:
            numbers.append(int(match.group(1)))
    return sorted(numbers)


def next_level(source: LevelSource) -> Optional[LevelSource]:
    """
    The bundled level following the given one.

    Returns:
        The next level, or None when the source is not bundled or is the last
    """
    if source.number is None:
        return None
    later = [n for n in available_levels() if n > source.number]
    if not later:
        return None
    return LevelSource.bundled(later[0])


def resolve_level(level: Union[LevelSource, int, str, Path, None]) -> LevelSource:
    """
    Turn a level reference into a LevelSource.

    Accepts a LevelSource, a bundled level number (int or numeric string),
    or a path to a level file. None selects the first bundled level.
    """
    if isinstance(level, LevelSource):
        return level
    if level is None:
        levels = available_levels()
        if not levels:
            raise InvalidLevelSource("No bundled levels available")
        return LevelSource.bundled(levels[0])
    if isinstance(level, int):
        return LevelSource.bundled(level)
    if isinstance(level, str) and level.strip().isdigit():
        return LevelSource.bundled(int(level))
    return LevelSource.from_file(level)


def resolve_bundled(level: Union[LevelSource, int, str]) -> LevelSource:
    """
    Turn a client-supplied level reference into a LevelSource.

    Only bundled level numbers (int or numeric string) and ready-made
    LevelSource objects are accepted; file paths are not.

    Raises:
        InvalidLevelSource: For any other reference, or an unknown number
    """
    if isinstance(level, LevelSource):
        return level
    if isinstance(level, str) and level.strip().isdigit():
        return LevelSource.bundled(int(level))
    if isinstance(level, int) and not isinstance(level, bool):
        return LevelSource.bundled(level)
    raise InvalidLevelSource(f"Level must be a bundled level number, got {level!r}")
