from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Callable, Protocol, Tuple

from PIL import Image

FixOrientationFunction = Callable[[Image.Image], Image.Image]


@dataclass(frozen=True)
class ImageConfig:
	"""
	Dimensions and color model of an encoded image.

	Attributes:
		width, height: pixel dimensions as stored in the file.
		mode: Pillow color model ("RGB", "L", "CMYK", ...).
	"""
	width: int
	height: int
	mode: str


class ImageDecoder(Protocol):
	def decode(self, stream: BinaryIO) -> Tuple[Image.Image, str]:
		...

	def decode_config(self, stream: BinaryIO) -> Tuple[ImageConfig, str]:
		...
