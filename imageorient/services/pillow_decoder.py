from __future__ import annotations

from typing import BinaryIO, Tuple

from PIL import Image

from imageorient.services.types import ImageConfig


class PillowDecoder:
	"""Default image decoder. Pillow errors propagate as raised."""

	def decode(self, stream: BinaryIO) -> Tuple[Image.Image, str]:
		img = Image.open(stream)
		img.load()
		return img, img.format or ""

	def decode_config(self, stream: BinaryIO) -> Tuple[ImageConfig, str]:
		# Image.open only parses the header
		img = Image.open(stream)
		cfg = ImageConfig(width=img.width, height=img.height, mode=img.mode)
		return cfg, img.format or ""
