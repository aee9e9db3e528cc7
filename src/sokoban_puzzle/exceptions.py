# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Custom exceptions for the Sokoban puzzle engine."""

from typing import Optional


class SokobanError(Exception):
    """Base exception for all Sokoban errors."""

    pass


class OutOfBounds(SokobanError, IndexError):
    """Raised when a position lies outside the grid."""

    def __init__(self, row: int, col: int, num_rows: int, num_cols: int):
        self.row = row
        self.col = col
        super().__init__(
            f"Position ({row}, {col}) is outside the {num_rows}x{num_cols} grid"
        )


class InvalidLevelSource(SokobanError, ValueError):
    """Raised when a level description is missing, unreadable or malformed."""

    pass


class NothingToUndo(SokobanError):
    """Raised when undo is requested with an empty move log."""

    def __init__(self, message: str = "Nothing to undo"):
        super().__init__(message)


class IOFailure(SokobanError):
    """
    Raised when a save file cannot be read or written.

    Save and load catch this and report a status string instead.
    """

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"Cannot access save file: {path}")


class MalformedEntry(SokobanError, ValueError):
    """Raised by strict loading when a save-file token is not a direction name."""

    def __init__(self, token: str, line_number: int):
        self.token = token
        self.line_number = line_number
        super().__init__(
            f"Line {line_number}: {token!r} is not one of NORTH, SOUTH, EAST, WEST"
        )
