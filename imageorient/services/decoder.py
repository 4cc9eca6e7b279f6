from __future__ import annotations

import logging
from types import MappingProxyType
from typing import BinaryIO, Mapping, Optional, Tuple

from PIL import Image

from imageorient.scan.orientation import ROTATED_ORIENTATIONS
from imageorient.scan.replay import MAX_BUF_LEN, ReplayStream, get_orientation
from imageorient.services.errors import MissingOrientationFixError
from imageorient.services.image_utils import default_fix_orientation_functions, oriented_size
from imageorient.services.pillow_decoder import PillowDecoder
from imageorient.services.types import FixOrientationFunction, ImageConfig, ImageDecoder

logger = logging.getLogger(__name__)


class OrientedDecoder:
	"""
	Decodes images through `image_decoder`, correcting for the EXIF
	orientation tag when one is present.

	`fix_orientation_functions` maps orientation codes 2..8 to transforms. It
	may be partial: a missing code only fails when an image carrying it is
	decoded.
	"""

	def __init__(
		self,
		fix_orientation_functions: Mapping[int, FixOrientationFunction],
		image_decoder: Optional[ImageDecoder] = None,
		max_buf_len: int = MAX_BUF_LEN,
	):
		if max_buf_len <= 0:
			raise ValueError(f"max_buf_len must be positive, got {max_buf_len}")
		self.fix_orientation_functions = MappingProxyType(dict(fix_orientation_functions))
		self.image_decoder = image_decoder if image_decoder is not None else PillowDecoder()
		self.max_buf_len = max_buf_len

	def decode_orientation(self, stream: BinaryIO) -> Tuple[int, ReplayStream]:
		return get_orientation(stream, self.max_buf_len)

	def decode(self, stream: BinaryIO) -> Tuple[Image.Image, str]:
		"""Decode an image and change its orientation according to the EXIF tag."""
		orientation, replay = self.decode_orientation(stream)
		img, fmt = self.image_decoder.decode(replay)
		if orientation > 1:
			img = self._fix_orientation(img, orientation)
		return img, fmt

	def decode_config(self, stream: BinaryIO) -> Tuple[ImageConfig, str]:
		"""
		Decode the color model and dimensions of an image with respect to the
		EXIF orientation tag.

		Note that the color model reported here may differ from the one of the
		image returned by decode() once a fix function has been applied.
		"""
		orientation, replay = self.decode_orientation(stream)
		cfg, fmt = self.image_decoder.decode_config(replay)
		if orientation in ROTATED_ORIENTATIONS:
			width, height = oriented_size(cfg.width, cfg.height, orientation)
			cfg = ImageConfig(width=width, height=height, mode=cfg.mode)
		return cfg, fmt

	def _fix_orientation(self, img: Image.Image, orientation: int) -> Image.Image:
		fix = self.fix_orientation_functions.get(orientation)
		if fix is None:
			raise MissingOrientationFixError(orientation)
		logger.debug("applying fix for orientation %d", orientation)
		return fix(img)


def new_decoder(fix_orientation_functions: Mapping[int, FixOrientationFunction]) -> OrientedDecoder:
	return OrientedDecoder(fix_orientation_functions)


_default_decoder = OrientedDecoder(default_fix_orientation_functions())


def decode(stream: BinaryIO) -> Tuple[Image.Image, str]:
	return _default_decoder.decode(stream)


def decode_config(stream: BinaryIO) -> Tuple[ImageConfig, str]:
	return _default_decoder.decode_config(stream)
