"""Program image loading for the LC-3 simulator.

An image is a sequence of big-endian 16-bit words. The first word is the
origin; the remaining words are placed at consecutive addresses from there.
"""

import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .bits import WORD_MASK
from .cpu import CPU
from .errors import ImageFormatError
from .isa import MEMORY_SIZE
from .memory import Memory

logger = logging.getLogger(__name__)


@dataclass
class ProgramImage:
    """Origin address plus the words loaded from it."""
    origin: int
    words: list[int] = field(default_factory=list)

    def __post_init__(self):
        if not 0 <= self.origin <= WORD_MASK:
            raise ImageFormatError(f"Origin out of range: {self.origin}")
        if len(self.words) > MEMORY_SIZE - self.origin:
            raise ImageFormatError(
                f"Image of {len(self.words)} words does not fit at origin x{self.origin:04X}",
                addr=self.origin,
            )


def parse_image(data: bytes) -> ProgramImage:
    """Parse raw image bytes."""
    if not data:
        raise ImageFormatError("Program image is empty")
    if len(data) % 2:
        raise ImageFormatError(f"Program image has odd length: {len(data)} bytes")

    words = list(struct.unpack(f">{len(data) // 2}H", data))
    return ProgramImage(origin=words[0], words=words[1:])


def image_from_words(words: list[int]) -> ProgramImage:
    """Build an image from [origin, word, word, ...]."""
    if not words:
        raise ImageFormatError("Program image is empty")
    for word in words:
        if not 0 <= word <= WORD_MASK:
            raise ImageFormatError(f"Word out of range: {word}")
    return ProgramImage(origin=words[0], words=list(words[1:]))


def read_image_file(path: Union[str, Path]) -> ProgramImage:
    """Read and parse an image file."""
    return parse_image(Path(path).read_bytes())


def load_image(image: ProgramImage, memory: Memory, cpu: Optional[CPU] = None) -> None:
    """Write the image into memory and point the CPU at its origin."""
    memory.load(image.origin, image.words)
    if cpu is not None:
        cpu.pc = image.origin
    logger.debug("Loaded %d words at x%04X", len(image.words), image.origin)
