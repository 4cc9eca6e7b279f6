"""
Builders for JPEG/EXIF byte strings used across the test suite.
"""

from __future__ import annotations

import io
import struct
from typing import List, Optional

import numpy as np
import piexif
from PIL import Image

SOI = b"\xff\xd8"
APP0 = 0xFFE0
APP1 = 0xFFE1
ORIENTATION_TAG = 0x0112
SHORT = 3


def ifd_entry(tag: int, value: int, order: str = "<") -> bytes:
	# tag, type, count, value (SHORT, left-justified in the 4-byte field)
	return struct.pack(order + "HHIHH", tag, SHORT, 1, value, 0)


def exif_payload(entries: List[bytes], order: str = "<", gap: bytes = b"", offset: Optional[int] = None) -> bytes:
	indicator = b"II" if order == "<" else b"MM"
	if offset is None:
		offset = 8 + len(gap)
	tiff = indicator + struct.pack(order + "HI", 42, offset) + gap
	tiff += struct.pack(order + "H", len(entries)) + b"".join(entries) + struct.pack(order + "I", 0)
	return b"Exif\x00\x00" + tiff


def orientation_payload(orientation: int, order: str = "<", entries_before: int = 0, gap: bytes = b"") -> bytes:
	entries = [ifd_entry(0x0100 + i, 7, order) for i in range(entries_before)]
	entries.append(ifd_entry(ORIENTATION_TAG, orientation, order))
	return exif_payload(entries, order=order, gap=gap)


def segment(marker: int, payload: bytes) -> bytes:
	return struct.pack(">HH", marker, len(payload) + 2) + payload


def jfif_segment() -> bytes:
	return segment(APP0, b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00")


def pattern_image(width: int, height: int) -> Image.Image:
	ys, xs = np.mgrid[0:height, 0:width]
	arr = np.stack([
		(xs * 255 // max(width - 1, 1)),
		(ys * 255 // max(height - 1, 1)),
		((xs + ys) % 2) * 255,
	], axis=-1).astype(np.uint8)
	return Image.fromarray(arr)


def make_jpeg(width: int = 32, height: int = 16, orientation: Optional[int] = None) -> bytes:
	"""Encode a test JPEG; `orientation` is written with piexif (big-endian IFD)."""
	buf = io.BytesIO()
	img = pattern_image(width, height)
	if orientation is None:
		img.save(buf, format="JPEG", quality=95)
	else:
		exif_bytes = piexif.dump({"0th": {piexif.ImageIFD.Orientation: orientation}})
		img.save(buf, format="JPEG", quality=95, exif=exif_bytes)
	return buf.getvalue()


def with_app1(jpeg: bytes, payload: bytes) -> bytes:
	"""Insert an APP1 segment right after SOI of an EXIF-less JPEG."""
	assert jpeg[:2] == SOI
	return jpeg[:2] + segment(APP1, payload) + jpeg[2:]


class TrickleReader:
	"""Non-seekable source that returns at most `chunk` bytes per read."""

	def __init__(self, data: bytes, chunk: int = 3):
		self._buf = io.BytesIO(data)
		self.chunk = chunk
		self.closed = False

	def read(self, n: int = -1) -> bytes:
		if n is None or n < 0:
			return self._buf.read()
		return self._buf.read(min(n, self.chunk))

	def close(self) -> None:
		self.closed = True


def drain(stream, chunk: int = 7) -> bytes:
	out = bytearray()
	while True:
		data = stream.read(chunk)
		if not data:
			return bytes(out)
		out += data


def apply_default_fix(img: Image.Image, orientation: int) -> Image.Image:
	"""Reference correction: the stock Pillow fix for 2..8, identity otherwise."""
	from imageorient.services.image_utils import FIX_ORIENTATION_FUNCTIONS

	fix = FIX_ORIENTATION_FUNCTIONS.get(orientation)
	return img if fix is None else fix(img)
