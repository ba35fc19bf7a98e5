"""LC-3 Instruction-Set Simulator Core Package."""

from .cpu import CPU
from .memory import Memory
from .loader import ProgramImage, parse_image, image_from_words, load_image, read_image_file
from .runner import run_image, run_program, RunOptions, RunResult
from .errors import LC3Error, ImageFormatError, LC3RuntimeError, UnimplementedTrap, StepLimitExceeded

__all__ = [
    "CPU",
    "Memory",
    "ProgramImage",
    "parse_image",
    "image_from_words",
    "load_image",
    "read_image_file",
    "run_image",
    "run_program",
    "RunOptions",
    "RunResult",
    "LC3Error",
    "ImageFormatError",
    "LC3RuntimeError",
    "UnimplementedTrap",
    "StepLimitExceeded",
]
