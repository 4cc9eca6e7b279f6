"""
Exception classes for imageorient.

Metadata scanning never raises; these cover the decoding side only.
"""


class ImageOrientError(Exception):
	"""Base exception for all imageorient errors."""

	def __init__(self, message: str = ""):
		self.message = message
		super().__init__(message)


class MissingOrientationFixError(ImageOrientError):
	"""
	Raised when an image carries an orientation that needs correcting but the
	decoder has no fix function registered for it.
	"""

	def __init__(self, orientation: int):
		self.orientation = orientation
		super().__init__(f"orientation {orientation} not found in fix orientation functions")
