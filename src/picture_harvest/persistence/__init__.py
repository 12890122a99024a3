# ABOUTME: Output layer for harvest results
# ABOUTME: Exports the JSON writer and its error type

from .writer import DEFAULT_OUTPUT_PATH, OutputWriteError, write_pictures

__all__ = [
    "DEFAULT_OUTPUT_PATH",
    "OutputWriteError",
    "write_pictures",
]
