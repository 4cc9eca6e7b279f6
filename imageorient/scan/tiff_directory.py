from __future__ import annotations

import logging
from typing import Optional

from imageorient.scan.field_reader import BIG_ENDIAN, LITTLE_ENDIAN, FieldReader

EXIF_HEADER = 0x45786966  # "Exif"
BYTE_ORDER_BE = 0x4D4D  # "MM"
BYTE_ORDER_LE = 0x4949  # "II"
ORIENTATION_TAG = 0x0112

# IFD offsets are relative to the byte order field; we are 8 bytes past it
# once the offset itself has been read.
TIFF_HEADER_SIZE = 8
IFD_ENTRY_SIZE = 12

logger = logging.getLogger(__name__)


def byte_order(indicator: int) -> Optional[str]:
	if indicator == BYTE_ORDER_BE:
		return BIG_ENDIAN
	if indicator == BYTE_ORDER_LE:
		return LITTLE_ENDIAN
	return None


def read_orientation_tag(reader: FieldReader) -> int:
	"""Read the IFD0 orientation value from an APP1 payload, or 0."""
	header = reader.read_u32()
	if header != EXIF_HEADER:
		logger.debug("APP1 segment is not EXIF (header 0x%08x)", header)
		return 0
	reader.skip(2)

	indicator = reader.read_u16()
	order = byte_order(indicator)
	if order is None:
		logger.debug("invalid byte order flag 0x%04x", indicator)
		return 0
	reader.skip(2)

	offset = reader.read_u32(order)
	if offset < TIFF_HEADER_SIZE:
		logger.debug("invalid IFD offset %d", offset)
		return 0
	reader.skip(offset - TIFF_HEADER_SIZE)

	num_tags = reader.read_u16(order)
	for _ in range(num_tags):
		tag = reader.read_u16(order)
		if tag != ORIENTATION_TAG:
			reader.skip(IFD_ENTRY_SIZE - 2)
			continue
		# type (2) + count (4)
		reader.skip(6)
		val = reader.read_u16(order)
		if val < 1 or val > 8:
			logger.debug("invalid orientation value %d", val)
			return 0
		return val

	logger.debug("orientation tag not found in %d IFD entries", num_tags)
	return 0
