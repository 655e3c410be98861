from .errors import InvalidFilterType, TruncatedData

FILTER_NONE = 0
FILTER_SUB = 1
FILTER_UP = 2
FILTER_AVG = 3
FILTER_PAETH = 4


def paeth_predictor(a, b, c):
	p = a + b - c
	pa = abs(p - a)
	pb = abs(p - b)
	pc = abs(p - c)
	if pa <= pb and pa <= pc:
		return a
	elif pb <= pc:
		return b
	else:
		return c


PREDICTORS = {
	FILTER_NONE: lambda a, b, c: 0,
	FILTER_SUB: lambda a, b, c: a,
	FILTER_UP: lambda a, b, c: b,
	FILTER_AVG: lambda a, b, c: (a + b) // 2,
	FILTER_PAETH: paeth_predictor,
}


def defilter_row(filter_type, scanline, prior, bytes_per_pixel):
	"""
	Reconstruct one scanline.

	`prior` is the reconstructed row above, or None for the first row, in which
	case every byte above (and above-left) counts as zero. Bytes to the left of
	the first pixel count as zero as well.
	"""
	predictor = PREDICTORS.get(filter_type)
	if predictor is None:
		raise InvalidFilterType(f"invalid filter type {filter_type}")

	if filter_type == FILTER_NONE:
		return bytearray(scanline)

	row = bytearray(len(scanline))
	for c, x in enumerate(scanline):
		a = row[c - bytes_per_pixel] if c >= bytes_per_pixel else 0
		b = prior[c] if prior is not None else 0
		d = prior[c - bytes_per_pixel] if prior is not None and c >= bytes_per_pixel else 0
		row[c] = (x + predictor(a, b, d)) & 0xFF
	return row


def defilter(data, width, height, bytes_per_pixel):
	stride = width * bytes_per_pixel
	recon = bytearray()
	prior = None
	i = 0
	for r in range(height):
		end = i + 1 + stride
		if end > len(data):
			raise TruncatedData(f"image data ends inside scanline {r} ({len(data)} bytes)")
		row = defilter_row(data[i], data[i+1:end], prior, bytes_per_pixel)
		recon += row
		prior = row
		i = end
	return recon
