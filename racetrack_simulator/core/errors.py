from typing import Literal

FormatErrorKind = Literal[
    "empty_file",
    "inconsistent_line_length",
    "no_cars",
    "too_many_cars",
    "duplicate_car_id",
    "invalid_waypoint_format",
    "invalid_move_format",
]

DEFAULT_MESSAGES: dict[FormatErrorKind, str] = {
    "empty_file": "File contains no valid track data",
    "inconsistent_line_length": "Track lines have inconsistent lengths",
    "no_cars": "No cars found in track file",
    "too_many_cars": "Too many cars in track file",
    "duplicate_car_id": "Duplicate car ID found in track file",
    "invalid_waypoint_format": "Invalid waypoint format in file",
    "invalid_move_format": "Invalid move format in file",
}


class InvalidFileFormatError(ValueError):
    """A track, move list or waypoint file failed validation."""

    def __init__(self, kind: FormatErrorKind, message: str | None = None) -> None:
        super().__init__(message or DEFAULT_MESSAGES[kind])
        self.kind: FormatErrorKind = kind


class InvalidTurnError(ValueError):
    """A turn request was rejected before touching race state."""
