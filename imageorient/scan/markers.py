from __future__ import annotations

import logging

from imageorient.scan.field_reader import FieldReader

MARKER_SOI = 0xFFD8
MARKER_APP1 = 0xFFE1
MARKER_PREFIX = 0xFF

logger = logging.getLogger(__name__)


def find_app1(reader: FieldReader) -> bool:
	"""Advance `reader` to the start of the first APP1 payload.

	Segment framing is always big-endian. Returns False when the stream is not
	a JPEG or has no APP1 segment; ShortReadError is left to the caller.
	"""
	soi = reader.read_u16()
	if soi != MARKER_SOI:
		logger.debug("missing JPEG SOI marker (got 0x%04x)", soi)
		return False

	while True:
		marker = reader.read_u16()
		size = reader.read_u16()
		if marker >> 8 != MARKER_PREFIX:
			logger.debug("invalid JPEG marker 0x%04x", marker)
			return False
		if marker == MARKER_APP1:
			return True
		if size < 2:
			logger.debug("invalid segment size %d for marker 0x%04x", size, marker)
			return False
		logger.debug("skipping segment 0x%04x (%d bytes)", marker, size)
		reader.skip(size - 2)
