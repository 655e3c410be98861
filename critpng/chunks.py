import logging
import struct
import zlib
from typing import NamedTuple, Tuple

from .errors import (
	InvalidIHDRLength,
	InvalidPLTESize,
	InvalidSignature,
	MismatchedCrc,
	StreamError,
	Unimplemented,
)

logger = logging.getLogger(__name__)

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"

IHDR = b"IHDR"
PLTE = b"PLTE"
IDAT = b"IDAT"
IEND = b"IEND"

IHDR_LENGTH = 13
MAX_PALETTE_ENTRIES = 256

READ_PIECE_SIZE = 1 << 16 # chunk lengths are untrusted, payloads are read in bounded pieces


class Header(NamedTuple):
	width: int
	height: int
	bit_depth: int
	colour_type: int
	compression_method: int
	filter_method: int
	interlace_method: int

	@classmethod
	def from_bytes(cls, data):
		if len(data) != IHDR_LENGTH:
			raise InvalidIHDRLength(f"IHDR payload is {len(data)} bytes, expected {IHDR_LENGTH}")
		return cls(*struct.unpack(">IIBBBBB", data))

	@property
	def dimensions(self) -> Tuple[int, int]:
		return self.width, self.height


class Palette(NamedTuple):
	entries: tuple

	@classmethod
	def from_bytes(cls, data):
		entry_count = len(data) // 3
		if len(data) % 3 != 0 or not 1 <= entry_count <= MAX_PALETTE_ENTRIES:
			raise InvalidPLTESize(f"PLTE payload of {len(data)} bytes is not 1-256 RGB entries")
		return cls(tuple(tuple(data[i:i+3]) for i in range(0, len(data), 3)))


class CompressedData(NamedTuple):
	data: bytes


class Terminator(NamedTuple):
	pass


CHUNK_PARSERS = {
	IHDR: Header.from_bytes,
	PLTE: Palette.from_bytes,
	IDAT: CompressedData,
	IEND: lambda body: Terminator(),
}


def read_upto(stream, n):
	buf = bytearray()
	while len(buf) < n:
		try:
			piece = stream.read(min(n - len(buf), READ_PIECE_SIZE))
		except OSError as e:
			raise StreamError(f"read failed: {e}") from e
		if not piece:
			break
		buf += piece
	return bytes(buf)


def read_exact(stream, n):
	data = read_upto(stream, n)
	if len(data) != n:
		raise StreamError(f"unexpected end of stream: wanted {n} bytes, got {len(data)}")
	return data


def read_signature(stream):
	magic = read_upto(stream, len(PNG_MAGIC))
	if magic != PNG_MAGIC:
		raise InvalidSignature(f"bad PNG signature {magic!r}")


def chunk_crc(chunk_type, body):
	return zlib.crc32(body, zlib.crc32(chunk_type)) # zlib.crc32(type+body) without the copy


def is_ancillary(chunk_type):
	return ord("a") <= chunk_type[0] <= ord("z")


def parse_chunk(chunk_type, body):
	"""Turn a verified chunk into its variant, or None for a skipped ancillary chunk."""
	parser = CHUNK_PARSERS.get(chunk_type)
	if parser is not None:
		return parser(body)
	if is_ancillary(chunk_type):
		logger.debug("skipping over unrecognised chunk %r", chunk_type)
		return None
	raise Unimplemented(f"unsupported critical chunk {chunk_type!r}")


def read_chunk(stream):
	chunk_len = int.from_bytes(read_exact(stream, 4), "big")
	chunk_type = read_exact(stream, 4)
	body = read_exact(stream, chunk_len)
	crc = int.from_bytes(read_exact(stream, 4), "big")
	if crc != chunk_crc(chunk_type, body):
		raise MismatchedCrc(f"CRC mismatch in {chunk_type!r} chunk")
	logger.debug("read %r chunk, %d bytes", chunk_type, chunk_len)
	return parse_chunk(chunk_type, body)


def iter_chunks(stream):
	"""Yield chunks up to and including the terminating IEND."""
	while True:
		chunk = read_chunk(stream)
		if chunk is None:
			continue
		yield chunk
		if isinstance(chunk, Terminator):
			return
