import enum
import io
import logging
import pathlib
import zlib
from collections import deque

from .chunks import CompressedData, Header, Palette, iter_chunks, read_signature
from .errors import (
	DecodeError,
	InvalidStartingChunk,
	StreamError,
	Unimplemented,
	UnsupportedCompressionMethod,
)
from .filters import defilter
from .pixels import Image, PixelType, assemble_pixels

logger = logging.getLogger(__name__)

ZLIB_COMPRESSION_METHOD = 0
MAX_DEFLATE_RATIO = 1032 # upper bound on how far deflate can expand its input


class DecodeState(enum.Enum):
	AWAITING_SIGNATURE = "awaiting signature"
	READING_CHUNKS = "reading chunks"
	ASSEMBLING = "assembling"
	DONE = "done"
	FAILED = "failed"


def check_supported(header):
	# these are limitations of this decoder, not of the format
	if header.width == 0 or header.height == 0:
		raise Unimplemented(f"zero-sized image {header.width}x{header.height}")
	if header.bit_depth != 8:
		raise Unimplemented(f"unsupported bit depth {header.bit_depth}")
	if header.filter_method != 0:
		raise Unimplemented(f"unsupported filter method {header.filter_method}")
	if header.interlace_method != 0:
		raise Unimplemented(f"unsupported interlace method {header.interlace_method}")


def aggregate_compressed(chunks):
	return b"".join(chunk.data for chunk in chunks if isinstance(chunk, CompressedData))


def decompress(header, compressed, bytes_per_pixel):
	if header.compression_method != ZLIB_COMPRESSION_METHOD:
		raise UnsupportedCompressionMethod(f"unsupported compression method {header.compression_method}")

	# only a hint; a short result is caught when the scanlines are read
	expected = header.height * (1 + header.width * bytes_per_pixel)
	bufsize = max(1, min(expected, len(compressed) * MAX_DEFLATE_RATIO))
	try:
		return zlib.decompress(compressed, zlib.MAX_WBITS, bufsize)
	except zlib.error as e:
		raise StreamError(f"failed to decompress image data: {e}") from e


def image_from_chunks(chunks):
	chunks = deque(chunks)
	header = chunks.popleft() if chunks else None
	if not isinstance(header, Header):
		raise InvalidStartingChunk(f"first chunk is {type(header).__name__}, expected IHDR")

	if chunks and isinstance(chunks[0], Palette):
		palette = chunks.popleft()
		# legal but unused for truecolour images
		logger.debug("discarding %d-entry palette", len(palette.entries))

	pixel_type = PixelType.from_colour_type(header.colour_type)
	check_supported(header)
	bpp = pixel_type.bytes_per_pixel

	idat = decompress(header, aggregate_compressed(chunks), bpp)
	recon = defilter(idat, header.width, header.height, bpp)

	return Image(
		width=header.width,
		height=header.height,
		pixel_type=pixel_type,
		pixels=assemble_pixels(recon, header.width, header.height, pixel_type),
	)


class PngDecoder:
	"""
	Decodes a single PNG stream.

	The decoder walks AWAITING_SIGNATURE -> READING_CHUNKS -> ASSEMBLING -> DONE.
	The first DecodeError moves it to FAILED, is kept in `error`, and is re-raised.
	"""

	def __init__(self, stream):
		self.stream = stream
		self.state = DecodeState.AWAITING_SIGNATURE
		self.error = None

	def decode(self):
		if self.state is not DecodeState.AWAITING_SIGNATURE:
			raise RuntimeError(f"decoder already used (state: {self.state.value})")
		try:
			read_signature(self.stream)
			self.state = DecodeState.READING_CHUNKS
			chunks = list(iter_chunks(self.stream))
			self.state = DecodeState.ASSEMBLING
			image = image_from_chunks(chunks)
		except DecodeError as e:
			self.state = DecodeState.FAILED
			self.error = e
			raise
		self.state = DecodeState.DONE
		return image


def decode(stream):
	return PngDecoder(stream).decode()


def read_png(file):
	"""
	Decode a PNG from a path, a bytes buffer, or anything with a read() method.
	"""
	if isinstance(file, (str, pathlib.Path)):
		with open(file, "rb") as fh:
			return decode(fh)
	elif isinstance(file, (bytes, bytearray, memoryview)):
		return decode(io.BytesIO(file))
	elif hasattr(file, "read"):
		return decode(file)
	else:
		raise TypeError(f"cannot read a PNG from {file!r}")
