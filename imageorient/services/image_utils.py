from __future__ import annotations

from typing import Dict, Tuple

from PIL import Image

from imageorient.scan.orientation import ROTATED_ORIENTATIONS, Orientation
from imageorient.services.types import FixOrientationFunction


def _transpose(method: Image.Transpose) -> FixOrientationFunction:
	def fix(img: Image.Image) -> Image.Image:
		return img.transpose(method)
	return fix


FIX_ORIENTATION_FUNCTIONS: Dict[int, FixOrientationFunction] = {
	Orientation.TOP_RIGHT: _transpose(Image.Transpose.FLIP_LEFT_RIGHT),
	Orientation.BOTTOM_RIGHT: _transpose(Image.Transpose.ROTATE_180),
	Orientation.BOTTOM_LEFT: _transpose(Image.Transpose.FLIP_TOP_BOTTOM),
	Orientation.LEFT_TOP: _transpose(Image.Transpose.TRANSPOSE),
	Orientation.RIGHT_TOP: _transpose(Image.Transpose.ROTATE_270),
	Orientation.RIGHT_BOTTOM: _transpose(Image.Transpose.TRANSVERSE),
	Orientation.LEFT_BOTTOM: _transpose(Image.Transpose.ROTATE_90),
}


def default_fix_orientation_functions() -> Dict[int, FixOrientationFunction]:
	return {int(o): fn for o, fn in FIX_ORIENTATION_FUNCTIONS.items()}


def oriented_size(width: int, height: int, orientation: int) -> Tuple[int, int]:
	if orientation in ROTATED_ORIENTATIONS:
		return (height, width)
	return (width, height)
