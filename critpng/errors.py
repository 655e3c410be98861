class DecodeError(Exception):
	pass


class StreamError(DecodeError):
	pass


class TruncatedData(StreamError):
	pass


class InvalidSignature(DecodeError):
	pass


class InvalidStartingChunk(DecodeError):
	pass


class Unimplemented(DecodeError):
	pass


class InvalidIHDRLength(DecodeError):
	pass


class InvalidPLTESize(DecodeError):
	pass


class UnsupportedCompressionMethod(DecodeError):
	pass


class InvalidFilterType(DecodeError):
	pass


class MismatchedCrc(DecodeError):
	pass
