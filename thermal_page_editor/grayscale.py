"""
Luminance conversion and integral images.
"""

# PIP3 modules
import numpy


#============================================
def to_grayscale(red, green, blue):
	"""
	Convert RGB values to luminance.

	Works on scalars and on numpy arrays alike.
	"""
	return 0.299 * red + 0.587 * green + 0.114 * blue


#============================================
def luminance(rgba: numpy.ndarray) -> numpy.ndarray:
	"""
	Unrounded luminance of an RGBA array.

	Args:
		rgba: Array of shape (height, width, 4).

	Returns:
		float64 array of shape (height, width).
	"""
	rgb = rgba[..., :3].astype(numpy.float64)
	return to_grayscale(rgb[..., 0], rgb[..., 1], rgb[..., 2])


#============================================
def grayscale_values(rgba: numpy.ndarray) -> numpy.ndarray:
	"""
	Per-pixel luminance truncated to an 8-bit grayscale image.

	Args:
		rgba: Array of shape (height, width, 4).

	Returns:
		uint8 array of shape (height, width).
	"""
	return luminance(rgba).astype(numpy.uint8)


#============================================
def summed_area_table(values: numpy.ndarray) -> numpy.ndarray:
	"""
	Prefix sums with a zero first row and column.
	"""
	padded = numpy.pad(values.astype(numpy.int64), ((1, 0), (1, 0)), mode="constant")
	return padded.cumsum(axis=0).cumsum(axis=1)


#============================================
def window_edges(size: int, half: int) -> tuple[numpy.ndarray, numpy.ndarray]:
	"""
	Start and stop (exclusive) of a centered window clamped to [0, size).

	Args:
		size: Image extent along one axis.
		half: Half the window side.

	Returns:
		Tuple of (start, stop) index arrays, one entry per position.
	"""
	index = numpy.arange(size)
	start = numpy.clip(index - half, 0, size)
	stop = numpy.clip(index + half + 1, 0, size)
	return (start, stop)


class IntegralImage:
	"""
	Prefix sums of luminance and, optionally, squared luminance.

	Tables are (height + 1) x (width + 1) int64 arrays, so sums stay exact
	and region sums need no bounds checks.
	"""

	def __init__(self, values: numpy.ndarray, squares: bool = False):
		values = numpy.asarray(values, dtype=numpy.int64)
		self.height, self.width = values.shape
		self.sums = summed_area_table(values)
		self.squares = summed_area_table(values * values) if squares else None

	@staticmethod
	def _region(table: numpy.ndarray, x1: int, y1: int, x2: int, y2: int) -> int:
		return int(table[y2 + 1, x2 + 1] - table[y2 + 1, x1] - table[y1, x2 + 1] + table[y1, x1])

	def region_sum(self, x1: int, y1: int, x2: int, y2: int) -> int:
		"""
		Sum of luminance over the inclusive region [x1..x2] x [y1..y2].
		"""
		return self._region(self.sums, x1, y1, x2, y2)

	def region_sum_sq(self, x1: int, y1: int, x2: int, y2: int) -> int:
		"""
		Sum of squared luminance over the inclusive region.
		"""
		if self.squares is None:
			raise ValueError("Integral image was built without squared sums")
		return self._region(self.squares, x1, y1, x2, y2)

	def total(self) -> int:
		return int(self.sums[-1, -1])

	def _windows(self, table: numpy.ndarray, half: int) -> numpy.ndarray:
		y0, y1 = window_edges(self.height, half)
		x0, x1 = window_edges(self.width, half)
		top, left = numpy.meshgrid(y0, x0, indexing="ij")
		bottom, right = numpy.meshgrid(y1, x1, indexing="ij")
		return table[bottom, right] - table[top, right] - table[bottom, left] + table[top, left]

	def window_sums(self, half: int) -> numpy.ndarray:
		"""
		Sum over the clamped window centered on every pixel.

		Args:
			half: Half the window side.

		Returns:
			int64 array of shape (height, width).
		"""
		return self._windows(self.sums, half)

	def window_sums_sq(self, half: int) -> numpy.ndarray:
		"""
		Sum of squares over the clamped window centered on every pixel.
		"""
		if self.squares is None:
			raise ValueError("Integral image was built without squared sums")
		return self._windows(self.squares, half)

	def window_areas(self, half: int) -> numpy.ndarray:
		"""
		Pixel count of every clamped window; smaller along the borders.
		"""
		y0, y1 = window_edges(self.height, half)
		x0, x1 = window_edges(self.width, half)
		return numpy.outer(y1 - y0, x1 - x0)
