"""
Drawing laid-out text blocks onto a Pillow surface.
"""

# PIP3 modules
import PIL.Image
import PIL.ImageDraw

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.blocks
import thermal_page_editor.config
import thermal_page_editor.geometry
import thermal_page_editor.measure


TextBlock = tpe.blocks.TextBlock
Rect = tpe.geometry.Rect
FontSpec = tpe.measure.FontSpec
PilTextMeasurer = tpe.measure.PilTextMeasurer

BORDER_DASH = tpe.config.BORDER_DASH
DEBUG_RECT_COLOR = tpe.config.DEBUG_RECT_COLOR

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


#============================================
def content_height(blocks: list[TextBlock]) -> int:
	"""
	Bottom edge of the lowest block.
	"""
	height = 0
	for block in blocks:
		height = max(height, block.rect.y2 + 1)
	return height


#============================================
def page_height(content: int, canvas_height: int, preview: bool) -> int:
	"""
	Pick the surface height for a page.

	A preview is cropped to its content; the editor view keeps at least
	the default canvas height and grows when the content is taller.
	"""
	if preview:
		return max(content, 1)
	return max(canvas_height, content)


#============================================
def new_surface(width: int, height: int) -> PIL.Image.Image:
	return PIL.Image.new("RGBA", (width, height), WHITE)


#============================================
def draw_dotted_rect(draw: PIL.ImageDraw.ImageDraw, rect: Rect) -> None:
	"""
	Outline a rectangle with a sparse dotted line.
	"""
	on_length, off_length = BORDER_DASH
	period = on_length + off_length
	points = []
	for x in range(rect.x, rect.x2 + 1):
		if (x - rect.x) % period < on_length:
			points.append((x, rect.y))
			points.append((x, rect.y2))
	for y in range(rect.y, rect.y2 + 1):
		if (y - rect.y) % period < on_length:
			points.append((rect.x, y))
			points.append((rect.x2, y))
	if points:
		draw.point(points, fill=BLACK)


#============================================
def draw_block_text(
	draw: PIL.ImageDraw.ImageDraw,
	block: TextBlock,
	measurer: PilTextMeasurer,
	font: FontSpec,
) -> None:
	"""
	Draw the lines of one block at its laid-out position.

	Args:
		draw: Pillow drawing context.
		block: Measured and laid-out block.
		measurer: Measurer providing the loaded Pillow font.
		font: Page font.
	"""
	loaded = measurer.load(tpe.measure.font_for_block(font, block))
	rect = block.rect
	for line, line_rect in zip(block.lines, block.line_rects):
		if block.format.center:
			x = rect.x + (rect.width - line_rect.width) // 2
		else:
			x = rect.x + line_rect.x
		y = rect.y + line_rect.y
		draw.text((x, y), line, fill=BLACK, font=loaded)
		if block.format.bold:
			draw.text((x + 1, y), line, fill=BLACK, font=loaded)


#============================================
def draw_page(
	image: PIL.Image.Image,
	blocks: list[TextBlock],
	measurer: PilTextMeasurer,
	font: FontSpec,
	borders: bool,
	debug_rects: list[Rect] | None = None,
) -> None:
	"""
	Paint a white page with every block, borders and debug rects.

	Args:
		image: RGBA surface, painted in place.
		blocks: Measured and laid-out blocks.
		measurer: Measurer providing loaded fonts.
		font: Page font.
		borders: Draw dotted block borders.
		debug_rects: Free rectangles to outline in red, or None.
	"""
	draw = PIL.ImageDraw.Draw(image)
	draw.rectangle([0, 0, image.width - 1, image.height - 1], fill=WHITE)
	for block in blocks:
		draw_block_text(draw, block, measurer, font)
	if borders:
		for block in blocks:
			draw_dotted_rect(draw, block.rect)
	if debug_rects:
		for rect in debug_rects:
			if rect.width <= 0 or rect.height <= 0 or rect.y >= image.height:
				continue
			bottom = min(rect.y2, image.height - 1)
			draw.rectangle([rect.x, rect.y, rect.x2, bottom], outline=DEBUG_RECT_COLOR)
