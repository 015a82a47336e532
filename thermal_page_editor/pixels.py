"""
RGBA pixel buffers backed by a bytearray.
"""

# Standard Library
import dataclasses

# PIP3 modules
import numpy
import PIL.Image


@dataclasses.dataclass
class PixelBuffer:
	width: int
	height: int
	data: bytearray

	def __post_init__(self) -> None:
		expected = self.width * self.height * 4
		if len(self.data) != expected:
			raise ValueError(
				f"RGBA buffer holds {len(self.data)} bytes, expected {expected} "
				f"for {self.width}x{self.height}"
			)

	def array(self) -> numpy.ndarray:
		"""
		Writable (height, width, 4) uint8 view over the buffer bytes.
		"""
		return numpy.frombuffer(self.data, dtype=numpy.uint8).reshape(self.height, self.width, 4)

	def write_mask(self, white: numpy.ndarray) -> None:
		"""
		Set R, G and B to 255 where `white` holds and to 0 elsewhere.

		Alpha is left as is.

		Args:
			white: Boolean array of shape (height, width).
		"""
		levels = numpy.where(white, 255, 0).astype(numpy.uint8)
		self.array()[..., :3] = levels[..., numpy.newaxis]


#============================================
def from_image(image: PIL.Image.Image) -> PixelBuffer:
	"""
	Copy a Pillow image into an RGBA pixel buffer.

	Args:
		image: Source image, converted to RGBA when needed.

	Returns:
		PixelBuffer.
	"""
	if image.mode != "RGBA":
		image = image.convert("RGBA")
	return PixelBuffer(image.width, image.height, bytearray(image.tobytes()))


#============================================
def write_to_image(buffer: PixelBuffer, image: PIL.Image.Image) -> None:
	"""
	Copy buffer pixels back into an RGBA Pillow image in place.

	Args:
		buffer: Source pixel buffer.
		image: Destination RGBA image of the same size.
	"""
	if image.mode != "RGBA" or image.size != (buffer.width, buffer.height):
		raise ValueError("Destination image must be RGBA and match the buffer size")
	image.frombytes(bytes(buffer.data))
