import random

import numpy
import pytest

import thermal_page_editor.grayscale as grayscale


#============================================
def random_values(seed: int, width: int, height: int) -> numpy.ndarray:
	rng = random.Random(seed)
	values = [rng.randint(0, 255) for _ in range(width * height)]
	return numpy.array(values, dtype=numpy.uint8).reshape(height, width)


#============================================
def direct_sum(values: numpy.ndarray, x1: int, y1: int, x2: int, y2: int, power: int = 1) -> int:
	"""
	Brute-force inclusive region sum.
	"""
	total = 0
	for y in range(y1, y2 + 1):
		for x in range(x1, x2 + 1):
			total += int(values[y, x]) ** power
	return total


#============================================
def test_luminance_weights() -> None:
	"""
	Luminance uses the 0.299 / 0.587 / 0.114 weights.
	"""
	assert grayscale.to_grayscale(0, 0, 0) == 0.0
	assert grayscale.to_grayscale(100, 0, 0) == pytest.approx(29.9)
	assert grayscale.to_grayscale(0, 100, 0) == pytest.approx(58.7)
	assert grayscale.to_grayscale(0, 0, 100) == pytest.approx(11.4)


#============================================
def test_grayscale_values_truncate() -> None:
	"""
	Per-pixel luminance is truncated toward zero; the float is kept for luminance().
	"""
	data = bytes([10, 20, 30, 255, 0, 0, 0, 0, 50, 100, 200, 128])
	rgba = numpy.frombuffer(data, dtype=numpy.uint8).reshape(1, 3, 4)
	gray = grayscale.grayscale_values(rgba)
	assert gray.dtype == numpy.uint8
	assert gray.tolist() == [[18, 0, 96]]
	assert grayscale.luminance(rgba)[0, 2] == pytest.approx(96.45)


#============================================
@pytest.mark.parametrize("seed,width,height", [(1, 7, 5), (2, 1, 9), (3, 16, 16), (4, 13, 1)])
def test_integral_total_matches_direct_sum(seed: int, width: int, height: int) -> None:
	"""
	The full-image region sum equals plain summation.
	"""
	values = random_values(seed, width, height)
	expected = int(values.astype(numpy.int64).sum())
	expected_sq = int((values.astype(numpy.int64) ** 2).sum())
	integral = grayscale.IntegralImage(values, squares=True)
	assert integral.total() == expected
	assert integral.region_sum(0, 0, width - 1, height - 1) == expected
	assert integral.region_sum_sq(0, 0, width - 1, height - 1) == expected_sq


#============================================
def test_integral_region_sums_match_brute_force() -> None:
	"""
	Every sub-rectangle of a small image matches brute force.
	"""
	width = 6
	height = 5
	values = random_values(11, width, height)
	integral = grayscale.IntegralImage(values, squares=True)
	for y1 in range(height):
		for y2 in range(y1, height):
			for x1 in range(width):
				for x2 in range(x1, width):
					assert integral.region_sum(x1, y1, x2, y2) == direct_sum(values, x1, y1, x2, y2)
					assert integral.region_sum_sq(x1, y1, x2, y2) == direct_sum(values, x1, y1, x2, y2, 2)


#============================================
def test_window_sums_match_clamped_windows() -> None:
	"""
	Per-pixel window sums and areas shrink along the borders.
	"""
	width = 7
	height = 6
	half = 2
	values = random_values(12, width, height)
	integral = grayscale.IntegralImage(values, squares=True)
	sums = integral.window_sums(half)
	sums_sq = integral.window_sums_sq(half)
	areas = integral.window_areas(half)
	for y in range(height):
		for x in range(width):
			x1 = max(x - half, 0)
			y1 = max(y - half, 0)
			x2 = min(x + half, width - 1)
			y2 = min(y + half, height - 1)
			assert sums[y, x] == direct_sum(values, x1, y1, x2, y2)
			assert sums_sq[y, x] == direct_sum(values, x1, y1, x2, y2, 2)
			assert areas[y, x] == (x2 - x1 + 1) * (y2 - y1 + 1)
	assert areas[0, 0] == 9
	assert areas[3, 3] == 25


#============================================
def test_region_sum_sq_requires_squares() -> None:
	"""
	Squared sums are only available when requested.
	"""
	integral = grayscale.IntegralImage(numpy.array([[1, 2], [3, 4]]))
	assert integral.region_sum(1, 0, 1, 1) == 6
	with pytest.raises(ValueError):
		integral.region_sum_sq(0, 0, 1, 1)
	with pytest.raises(ValueError):
		integral.window_sums_sq(1)


#============================================
def test_window_edges_clamp_to_image() -> None:
	"""
	Windows shrink at the image borders.
	"""
	start, stop = grayscale.window_edges(10, 2)
	assert start.tolist() == [0, 0, 0, 1, 2, 3, 4, 5, 6, 7]
	assert stop.tolist() == [3, 4, 5, 6, 7, 8, 9, 10, 10, 10]
