import pytest

from critpng.errors import InvalidFilterType, TruncatedData
from critpng.filters import defilter, defilter_row, paeth_predictor

from pngwriter import filter_scanline


def test_none_passes_through():
	assert defilter_row(0, b"\x01\x02\x03", None, 3) == bytearray(b"\x01\x02\x03")


def test_sub_first_row():
	# the first pixel has no left neighbour
	assert list(defilter_row(1, bytes([1, 2, 3, 4, 5, 6]), None, 3)) == [1, 2, 3, 5, 7, 9]


def test_sub_wraps():
	assert list(defilter_row(1, bytes([200, 100]), None, 1)) == [200, 44]


def test_up_first_row_uses_zero():
	assert list(defilter_row(2, bytes([7, 8, 9]), None, 3)) == [7, 8, 9]


def test_up_adds_row_above():
	prior = bytes([10, 20, 30, 40, 50, 250])
	assert list(defilter_row(2, bytes([1, 1, 1, 1, 1, 10]), prior, 3)) == [11, 21, 31, 41, 51, 4]


def test_average_first_row():
	assert list(defilter_row(3, bytes([10, 20, 30, 4, 6, 8]), None, 3)) == [10, 20, 30, 9, 16, 23]


def test_average_uses_wide_sum():
	# (126 + 255) // 2 == 190; an 8-bit sum would give 62
	assert list(defilter_row(3, bytes([255, 0]), bytes([255, 255]), 1)) == [126, 190]


def test_paeth_first_row_behaves_like_sub():
	assert list(defilter_row(4, bytes([1, 2, 3, 4, 5, 6]), None, 3)) == [1, 2, 3, 5, 7, 9]


def test_paeth_with_row_above():
	prior = bytes([10, 20, 30, 40, 50, 60])
	assert list(defilter_row(4, bytes([1] * 6), prior, 3)) == [11, 21, 31, 41, 51, 61]


@pytest.mark.parametrize("a, b, c, expected", [
	(20, 10, 15, 15), # c is closest
	(10, 20, 0, 20), # b is closest
	(3, 0, 1, 3), # a and c tie, a wins
	(0, 3, 1, 3), # b and c tie, b wins
	(7, 7, 7, 7),
	(250, 10, 0, 250), # p = 260, no wraparound
])
def test_paeth_predictor(a, b, c, expected):
	assert paeth_predictor(a, b, c) == expected


@pytest.mark.parametrize("filter_type", [5, 6, 255])
def test_invalid_filter_type(filter_type):
	with pytest.raises(InvalidFilterType):
		defilter_row(filter_type, b"\x00\x00\x00", None, 3)


def test_invalid_filter_type_in_later_row():
	data = b"\x00" + bytes(3) + b"\x09" + bytes(3)
	with pytest.raises(InvalidFilterType):
		defilter(data, 1, 2, 3)


def test_defilter_matches_independent_filter():
	rows = [
		bytes([12, 200, 3, 255, 0, 17, 90, 91, 92]),
		bytes([250, 1, 77, 128, 129, 130, 5, 250, 33]),
		bytes([0, 0, 0, 255, 255, 255, 128, 64, 32]),
		bytes([33, 44, 55, 66, 77, 88, 99, 110, 121]),
		bytes([1, 254, 2, 253, 3, 252, 4, 251, 5]),
	]
	data = b""
	prior = None
	for filter_type, row in enumerate(rows):
		data += filter_scanline(filter_type, row, prior, 3)
		prior = row
	assert defilter(data, 3, len(rows), 3) == bytearray(b"".join(rows))


def test_defilter_rgba_stride():
	rows = [bytes(range(8)), bytes(range(100, 108))]
	data = filter_scanline(1, rows[0], None, 4) + filter_scanline(4, rows[1], rows[0], 4)
	assert defilter(data, 2, 2, 4) == bytearray(rows[0] + rows[1])


def test_extra_data_is_ignored():
	assert defilter(b"\x00\x01\x02\x03" + b"spare", 1, 1, 3) == bytearray(b"\x01\x02\x03")


@pytest.mark.parametrize("length", [0, 1, 4, 7])
def test_truncated_data(length):
	data = (b"\x00\x01\x02\x03" * 2)[:length]
	with pytest.raises(TruncatedData):
		defilter(data, 1, 2, 3)
