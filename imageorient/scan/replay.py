from __future__ import annotations

import io
import logging
from typing import BinaryIO, Optional, Tuple, Union

from imageorient.scan.orientation import read_orientation

# EXIF lives in the APP1 block right after SOI, so 1 MiB is plenty.
MAX_BUF_LEN = 1 << 20

logger = logging.getLogger(__name__)


class TeeReader:
	"""Reads at most `limit` bytes from `source`, keeping a copy of each one."""

	def __init__(self, source: BinaryIO, limit: int):
		self.source = source
		self.remaining = limit
		self.buffer = bytearray()

	def read(self, n: int = -1) -> bytes:
		if self.remaining <= 0:
			return b""
		if n is None or n < 0 or n > self.remaining:
			n = self.remaining
		data = self.source.read(n)
		if not data:
			return b""
		self.remaining -= len(data)
		self.buffer += data
		return data


class ReplayStream(io.RawIOBase):
	"""Serves the captured prefix once, then the rest of the source."""

	def __init__(self, prefix: Union[bytes, bytearray], source: BinaryIO):
		super().__init__()
		self._prefix: Optional[memoryview] = memoryview(prefix) if prefix else None
		self._source = source

	def readable(self) -> bool:
		return True

	def readinto(self, b) -> int:
		if self.closed:
			raise ValueError("I/O operation on closed stream")
		out = memoryview(b).cast("B")
		if not len(out):
			return 0
		if self._prefix is not None:
			n = min(len(out), len(self._prefix))
			out[:n] = self._prefix[:n]
			self._prefix = self._prefix[n:] if n < len(self._prefix) else None
			return n
		data = self._source.read(len(out))
		if not data:
			return 0
		n = len(data)
		out[:n] = data
		return n

	def close(self) -> None:
		# the source stays open; it belongs to whoever opened it
		self._prefix = None
		super().close()


def get_orientation(stream: BinaryIO, max_buf_len: int = MAX_BUF_LEN) -> Tuple[int, ReplayStream]:
	if max_buf_len <= 0:
		raise ValueError(f"max_buf_len must be positive, got {max_buf_len}")
	tee = TeeReader(stream, max_buf_len)
	orientation = read_orientation(tee)
	logger.debug("scanned %d bytes, orientation=%d", len(tee.buffer), orientation)
	return orientation, ReplayStream(tee.buffer, stream)
