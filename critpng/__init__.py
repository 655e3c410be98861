"""
Decoder for baseline PNG: 8-bit truecolour and truecolour+alpha, not interlaced.

Only the critical chunks are understood; anything else that matters is refused.
"""

from .decode import DecodeState, PngDecoder, decode, read_png
from .errors import (
	DecodeError,
	InvalidFilterType,
	InvalidIHDRLength,
	InvalidPLTESize,
	InvalidSignature,
	InvalidStartingChunk,
	MismatchedCrc,
	StreamError,
	TruncatedData,
	Unimplemented,
	UnsupportedCompressionMethod,
)
from .pixels import Image, PixelType

__all__ = [
	"DecodeError",
	"DecodeState",
	"Image",
	"InvalidFilterType",
	"InvalidIHDRLength",
	"InvalidPLTESize",
	"InvalidSignature",
	"InvalidStartingChunk",
	"MismatchedCrc",
	"PixelType",
	"PngDecoder",
	"StreamError",
	"TruncatedData",
	"Unimplemented",
	"UnsupportedCompressionMethod",
	"decode",
	"read_png",
]
