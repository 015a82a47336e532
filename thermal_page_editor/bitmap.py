"""
Monochrome bitmap export: printer rows, PNG and PDF proof sheets.
"""

# Standard Library
import pathlib

# PIP3 modules
import numpy
import PIL.Image
import reportlab.lib.pagesizes
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.config
import thermal_page_editor.pixels


PixelBuffer = tpe.pixels.PixelBuffer

POINTS_PER_INCH = 72.0
PROOF_DPI = tpe.config.PROOF_DPI
PROOF_MARGIN = 36.0


#============================================
def pack_rows(buffer: PixelBuffer) -> list[bytes]:
	"""
	Pack a binarized buffer into 1-bit printer rows.

	Bits are MSB first; a set bit is a black pixel (red channel 0).

	Args:
		buffer: Binarized RGBA buffer.

	Returns:
		One bytes object of width / 8 bytes per pixel row.
	"""
	if buffer.width % 8 != 0:
		raise ValueError(f"Image width must be a multiple of 8, got {buffer.width}")
	black = buffer.array()[..., 0] == 0
	packed = numpy.packbits(black, axis=1, bitorder="big")
	return [row.tobytes() for row in packed]


#============================================
def write_rows(rows: list[bytes], path: pathlib.Path) -> None:
	"""
	Write packed rows back to back as a raw bitmap file.
	"""
	path.write_bytes(b"".join(rows))


#============================================
def to_monochrome_image(buffer: PixelBuffer) -> PIL.Image.Image:
	"""
	Build a 1-bit Pillow image from the red channel of a buffer.
	"""
	gray = PIL.Image.frombytes("L", (buffer.width, buffer.height), bytes(buffer.data[0::4]))
	return gray.convert("1", dither=PIL.Image.Dither.NONE)


#============================================
def write_png(buffer: PixelBuffer, path: pathlib.Path) -> None:
	"""
	Save a binarized buffer as a 1-bit PNG.
	"""
	to_monochrome_image(buffer).save(str(path), format="PNG")


#============================================
def write_pdf_proof(image: PIL.Image.Image, path: pathlib.Path, dpi: int = PROOF_DPI) -> int:
	"""
	Write the page at print size onto letter pages.

	Pages taller than one sheet are continued on following sheets.

	Args:
		image: Rendered page image.
		path: Output PDF path.
		dpi: Printer resolution used to size the page.

	Returns:
		Number of PDF pages written.
	"""
	page_width, page_height = reportlab.lib.pagesizes.letter
	scale = POINTS_PER_INCH / dpi
	available = page_height - 2.0 * PROOF_MARGIN
	rows_per_page = max(1, int(available / scale))

	pdf = reportlab.pdfgen.canvas.Canvas(str(path), pagesize=(page_width, page_height))
	pages = 0
	top = 0
	while top < image.height or pages == 0:
		bottom = min(image.height, top + rows_per_page)
		if bottom > top:
			piece = image.crop((0, top, image.width, bottom)).convert("RGB")
			draw_width = image.width * scale
			draw_height = (bottom - top) * scale
			pdf.drawImage(
				reportlab.lib.utils.ImageReader(piece),
				PROOF_MARGIN,
				page_height - PROOF_MARGIN - draw_height,
				width=draw_width,
				height=draw_height,
				mask=None,
				preserveAspectRatio=False,
				anchor="sw",
			)
		pdf.showPage()
		pages += 1
		top = bottom
	pdf.save()
	return pages
