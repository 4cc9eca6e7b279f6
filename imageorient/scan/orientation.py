from __future__ import annotations

import logging
from enum import IntEnum
from typing import BinaryIO

from imageorient.scan.field_reader import FieldReader, ShortReadError
from imageorient.scan.markers import find_app1
from imageorient.scan.tiff_directory import read_orientation_tag

logger = logging.getLogger(__name__)


class Orientation(IntEnum):
	# Val  0th row  0th col
	TOP_LEFT = 1  # top      left
	TOP_RIGHT = 2  # top      right
	BOTTOM_RIGHT = 3  # bottom   right
	BOTTOM_LEFT = 4  # bottom   left
	LEFT_TOP = 5  # left     top
	RIGHT_TOP = 6  # right    top
	RIGHT_BOTTOM = 7  # right    bottom
	LEFT_BOTTOM = 8  # left     bottom


UNKNOWN_ORIENTATION = 0
ROTATED_ORIENTATIONS = frozenset({
	Orientation.LEFT_TOP,
	Orientation.RIGHT_TOP,
	Orientation.RIGHT_BOTTOM,
	Orientation.LEFT_BOTTOM,
})


def read_orientation(stream: BinaryIO) -> int:
	"""Return the EXIF orientation of a JPEG stream, or 0 if missing or invalid.

	Malformed and truncated input is never an error here.
	"""
	reader = FieldReader(stream)
	try:
		if not find_app1(reader):
			return UNKNOWN_ORIENTATION
		return read_orientation_tag(reader)
	except ShortReadError as e:
		logger.debug("stream ended while scanning for orientation: %s", e)
		return UNKNOWN_ORIENTATION
