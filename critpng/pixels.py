import enum
from typing import List, NamedTuple, Tuple

from PIL import Image as PILImage

from .errors import Unimplemented

TRUECOLOR = 2
TRUECOLOR_ALPHA = 6


class PixelType(enum.Enum):
	RGB = TRUECOLOR
	RGBA = TRUECOLOR_ALPHA

	@classmethod
	def from_colour_type(cls, colour_type):
		# grayscale (0), indexed (3) and grayscale+alpha (4) are not decoded
		try:
			return cls(colour_type)
		except ValueError:
			raise Unimplemented(f"unsupported colour type {colour_type}") from None

	@property
	def bytes_per_pixel(self):
		return 3 if self is PixelType.RGB else 4

	@property
	def mode(self):
		return self.name


Pixel = Tuple[int, ...]


class Image(NamedTuple):
	width: int
	height: int
	pixel_type: PixelType
	pixels: List[List[Pixel]]

	def raw(self):
		"""Pack the pixel grid into a flat RGB or RGBA byte string."""
		return b"".join(bytes(pixel) for row in self.pixels for pixel in row)

	def to_pil(self):
		return PILImage.frombytes(self.pixel_type.mode, (self.width, self.height), self.raw())


def assemble_pixels(recon, width, height, pixel_type):
	bpp = pixel_type.bytes_per_pixel
	stride = width * bpp
	return [
		[tuple(recon[y*stride + x*bpp:y*stride + (x+1)*bpp]) for x in range(width)]
		for y in range(height)
	]
