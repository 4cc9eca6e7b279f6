from __future__ import annotations

import struct
from typing import BinaryIO

BIG_ENDIAN = ">"
LITTLE_ENDIAN = "<"


class ShortReadError(EOFError):
	pass


class FieldReader:
	"""Fixed-width field reads over a forward-only stream."""

	def __init__(self, stream: BinaryIO):
		self.stream = stream

	def read_exact(self, n: int) -> bytes:
		chunks = []
		remaining = n
		while remaining > 0:
			chunk = self.stream.read(remaining)
			if not chunk:
				raise ShortReadError(f"wanted {n} bytes, got {n - remaining}")
			chunks.append(chunk)
			remaining -= len(chunk)
		return b"".join(chunks)

	def read_u16(self, order: str = BIG_ENDIAN) -> int:
		return struct.unpack(order + "H", self.read_exact(2))[0]

	def read_u32(self, order: str = BIG_ENDIAN) -> int:
		return struct.unpack(order + "I", self.read_exact(4))[0]

	def skip(self, n: int) -> None:
		# forward-only: discard in bounded chunks
		while n > 0:
			step = min(n, 64 * 1024)
			self.read_exact(step)
			n -= step
