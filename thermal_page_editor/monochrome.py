"""
Binarization of RGBA pixel buffers for 1-bit printing.

Every method overwrites R, G and B of each pixel with 0 or 255 in place
and leaves alpha untouched. Output depends only on the input pixels and
the parameters.
"""

# Standard Library
import dataclasses
import enum

# PIP3 modules
import numpy

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.config
import thermal_page_editor.grayscale
import thermal_page_editor.pixels


PixelBuffer = tpe.pixels.PixelBuffer
IntegralImage = tpe.grayscale.IntegralImage

BLOCK_SIZES = tpe.config.BLOCK_SIZES
DEFAULT_BLOCK_SIZE = tpe.config.DEFAULT_BLOCK_SIZE
DEFAULT_MONOCHROME_METHOD = tpe.config.DEFAULT_MONOCHROME_METHOD

LEVELS = numpy.arange(256, dtype=numpy.int64)


class ThresholdMethod(enum.Enum):
	SIMPLE = "Simple"
	ADAPTIVE_MEAN = "Adaptive"
	ADAPTIVE_STD_DEV = "Adaptive StdDev"
	OTSU_LOCAL = "Adaptive Otsu Local"
	OTSU_GLOBAL = "Adaptive Otsu Global"


@dataclasses.dataclass(frozen=True)
class ThresholdScale:
	min: float
	max: float
	step: float
	default: float


@dataclasses.dataclass(frozen=True)
class MethodDescriptor:
	threshold: ThresholdScale | None = None
	block_sizes: tuple[int, ...] | None = None


METHOD_DESCRIPTORS = {
	ThresholdMethod.SIMPLE: MethodDescriptor(
		threshold=ThresholdScale(min=0, max=255, step=1, default=180),
	),
	ThresholdMethod.ADAPTIVE_MEAN: MethodDescriptor(
		threshold=ThresholdScale(min=1, max=80, step=1, default=1),
		block_sizes=BLOCK_SIZES,
	),
	ThresholdMethod.ADAPTIVE_STD_DEV: MethodDescriptor(
		threshold=ThresholdScale(min=0, max=1, step=0.05, default=0),
		block_sizes=BLOCK_SIZES,
	),
	ThresholdMethod.OTSU_LOCAL: MethodDescriptor(block_sizes=BLOCK_SIZES),
	ThresholdMethod.OTSU_GLOBAL: MethodDescriptor(),
}


#============================================
def method_names() -> list[str]:
	return [method.value for method in ThresholdMethod]


#============================================
def resolve_method(name: str | ThresholdMethod) -> ThresholdMethod:
	"""
	Resolve a method display name, falling back to the default method.

	Args:
		name: Display name such as "Adaptive StdDev", or a ThresholdMethod.

	Returns:
		ThresholdMethod.
	"""
	if isinstance(name, ThresholdMethod):
		return name
	for method in ThresholdMethod:
		if method.value == name:
			return method
	print(f"Unknown monochrome method '{name}', using '{DEFAULT_MONOCHROME_METHOD}'")
	return ThresholdMethod(DEFAULT_MONOCHROME_METHOD)


#============================================
def resolve_parameters(
	method: ThresholdMethod,
	threshold: float | None,
	block_size: int | None,
) -> tuple[float | None, int | None]:
	"""
	Fit configured parameters to a method's descriptor.

	Thresholds are clamped into the descriptor scale and block sizes
	outside the offered choices fall back to DEFAULT_BLOCK_SIZE.
	Parameters the method does not take come back as None.

	Args:
		method: Resolved method.
		threshold: Configured threshold or None.
		block_size: Configured block size or None.

	Returns:
		Tuple of (threshold, block_size).
	"""
	descriptor = METHOD_DESCRIPTORS[method]
	if descriptor.threshold is None:
		threshold = None
	elif threshold is None:
		threshold = descriptor.threshold.default
	else:
		scale = descriptor.threshold
		threshold = tpe.config.clamp(scale.min, scale.max, threshold)

	if descriptor.block_sizes is None:
		block_size = None
	elif block_size not in descriptor.block_sizes:
		if block_size is not None:
			print(f"Unsupported block size {block_size}, using {DEFAULT_BLOCK_SIZE}")
		block_size = DEFAULT_BLOCK_SIZE
	return (threshold, block_size)


#============================================
def simple_mask(gray: numpy.ndarray, threshold: float) -> numpy.ndarray:
	"""
	Global threshold on unrounded luminance: white if gray >= threshold.
	"""
	return gray >= threshold


#============================================
def adaptive_mean_mask(gray: numpy.ndarray, c: float, block_size: int) -> numpy.ndarray:
	"""
	Local mean threshold: white if gray > mean - c.

	Args:
		gray: 8-bit grayscale image.
		c: Offset subtracted from the local mean.
		block_size: Window side, clamped at the image edges.

	Returns:
		Boolean array, True for white.
	"""
	half = block_size // 2
	integral = IntegralImage(gray)
	mean = integral.window_sums(half) / integral.window_areas(half)
	return gray > mean - c


#============================================
def adaptive_std_dev_mask(gray: numpy.ndarray, k: float, block_size: int) -> numpy.ndarray:
	"""
	Local mean/deviation threshold: white if gray >= mean - k * stddev.

	Args:
		gray: 8-bit grayscale image.
		k: Deviation weight.
		block_size: Window side, clamped at the image edges.

	Returns:
		Boolean array, True for white.
	"""
	half = block_size // 2
	integral = IntegralImage(gray, squares=True)
	area = integral.window_areas(half)
	mean = integral.window_sums(half) / area
	variance = integral.window_sums_sq(half) / area - mean * mean
	# rounding can push a flat window slightly below zero
	std_dev = numpy.sqrt(numpy.maximum(variance, 0.0))
	return gray >= mean - k * std_dev


#============================================
def otsu_thresholds(histograms: numpy.ndarray, totals: numpy.ndarray) -> numpy.ndarray:
	"""
	Otsu split for each row of a stack of 256-bin histograms.

	The first t reaching the maximum between-class variance wins. Rows
	whose variance never rises above zero (a single populated bin) get 0.

	Args:
		histograms: Array of shape (n, 256) with bin counts.
		totals: Array of shape (n,) with the sample count of each row.

	Returns:
		int array of shape (n,); pixels with gray > t are white.
	"""
	histograms = numpy.asarray(histograms, dtype=numpy.int64)
	totals = numpy.asarray(totals, dtype=numpy.int64).reshape(-1, 1)
	weight_b = histograms.cumsum(axis=1)
	sum_b = (histograms * LEVELS).cumsum(axis=1)
	weight_f = totals - weight_b
	weighted_sum = sum_b[:, -1:]

	valid = (weight_b > 0) & (weight_f > 0)
	mean_b = sum_b / numpy.where(valid, weight_b, 1)
	mean_f = (weighted_sum - sum_b) / numpy.where(valid, weight_f, 1)
	diff = mean_b - mean_f
	variance = numpy.where(valid, (weight_b * weight_f) * diff * diff, 0.0)

	# argmax keeps the first maximum
	best = variance.argmax(axis=1)
	peak = numpy.take_along_axis(variance, best[:, numpy.newaxis], axis=1)[:, 0]
	return numpy.where(peak > 0.0, best, 0)


#============================================
def otsu_threshold(histogram, total: int) -> int:
	"""
	Otsu split of a single 256-bin histogram.

	Args:
		histogram: 256 bin counts.
		total: Number of samples in the histogram.

	Returns:
		Threshold t; pixels with gray > t are white.
	"""
	histograms = numpy.asarray(histogram, dtype=numpy.int64).reshape(1, 256)
	return int(otsu_thresholds(histograms, numpy.array([total]))[0])


#============================================
def otsu_local_mask(gray: numpy.ndarray, block_size: int) -> numpy.ndarray:
	"""
	Per-pixel Otsu threshold over a local window.

	Every pixel gets the full histogram of its own window, including the
	shrunken windows along the image border. A row of pixels shares one
	band of rows, so its window histograms are differences of running
	per-column histograms.

	Args:
		gray: 8-bit grayscale image.
		block_size: Window side, clamped at the image edges.

	Returns:
		Boolean array, True for white.
	"""
	height, width = gray.shape
	half = block_size // 2
	y0, y1 = tpe.grayscale.window_edges(height, half)
	x0, x1 = tpe.grayscale.window_edges(width, half)
	column_bins = numpy.arange(width, dtype=numpy.int64)[numpy.newaxis, :] * 256
	white = numpy.zeros((height, width), dtype=bool)
	for y in range(height):
		band = gray[y0[y]:y1[y]]
		keys = (column_bins + band).ravel()
		column_hist = numpy.bincount(keys, minlength=width * 256).reshape(width, 256)
		running = numpy.zeros((width + 1, 256), dtype=numpy.int64)
		running[1:] = column_hist.cumsum(axis=0)
		histograms = running[x1] - running[x0]
		totals = (y1[y] - y0[y]) * (x1 - x0)
		thresholds = otsu_thresholds(histograms, totals)
		white[y] = gray[y] > thresholds
	return white


#============================================
def otsu_global_threshold(gray: numpy.ndarray) -> int:
	"""
	Single Otsu threshold over the whole image.

	Args:
		gray: 8-bit grayscale image.

	Returns:
		Threshold t; pixels with gray > t are white.
	"""
	histogram = numpy.bincount(gray.ravel(), minlength=256)
	return otsu_threshold(histogram, gray.size)


#============================================
def binarize(
	buffer: PixelBuffer,
	method: ThresholdMethod | str,
	threshold: float | None = None,
	block_size: int | None = None,
) -> None:
	"""
	Binarize a pixel buffer in place with the selected method.

	Parameters go through resolve_parameters first, so out-of-range
	thresholds are clamped and unsupported block sizes fall back to
	DEFAULT_BLOCK_SIZE.

	Args:
		buffer: RGBA pixel buffer.
		method: ThresholdMethod or its display name.
		threshold: Scalar parameter; the descriptor default when None.
			Ignored by the Otsu methods.
		block_size: Window side for local methods; DEFAULT_BLOCK_SIZE
			when None.
	"""
	method = resolve_method(method)
	threshold, block_size = resolve_parameters(method, threshold, block_size)
	rgba = buffer.array()

	if method is ThresholdMethod.SIMPLE:
		white = simple_mask(tpe.grayscale.luminance(rgba), threshold)
	else:
		gray = tpe.grayscale.grayscale_values(rgba)
		if method is ThresholdMethod.ADAPTIVE_MEAN:
			white = adaptive_mean_mask(gray, threshold, block_size)
		elif method is ThresholdMethod.ADAPTIVE_STD_DEV:
			white = adaptive_std_dev_mask(gray, threshold, block_size)
		elif method is ThresholdMethod.OTSU_LOCAL:
			white = otsu_local_mask(gray, block_size)
		else:
			white = gray > otsu_global_threshold(gray)
	buffer.write_mask(white)


#============================================
def invert(buffer: PixelBuffer) -> None:
	"""
	Swap black and white in a binarized buffer, leaving alpha as is.
	"""
	rgba = buffer.array()
	rgba[..., :3] = 255 - rgba[..., :3]
