"""
Text measurement for text blocks.
"""

# Standard Library
import dataclasses
import typing

# PIP3 modules
import PIL.ImageFont

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.blocks
import thermal_page_editor.geometry


TextBlock = tpe.blocks.TextBlock
Rect = tpe.geometry.Rect


@dataclasses.dataclass(frozen=True)
class FontSpec:
	path: str | None
	size: int
	line_height: int | None = None


@dataclasses.dataclass
class TextMetrics:
	width: float
	ascent: float
	descent: float


class TextMeasurer(typing.Protocol):
	def measure(self, text: str, font: FontSpec) -> TextMetrics:
		...


class PilTextMeasurer:
	"""
	Measure text with Pillow fonts.

	A FontSpec without a path uses Pillow's bundled default font at the
	requested size. Loaded fonts are cached per (path, size).
	"""

	def __init__(self):
		self._fonts: dict[tuple[str | None, int], PIL.ImageFont.FreeTypeFont] = {}

	def load(self, font: FontSpec) -> PIL.ImageFont.FreeTypeFont:
		key = (font.path, font.size)
		if key not in self._fonts:
			if font.path is None:
				self._fonts[key] = PIL.ImageFont.load_default(size=font.size)
			else:
				self._fonts[key] = PIL.ImageFont.truetype(font.path, font.size)
		return self._fonts[key]

	def measure(self, text: str, font: FontSpec) -> TextMetrics:
		loaded = self.load(font)
		ascent, descent = loaded.getmetrics()
		return TextMetrics(width=loaded.getlength(text), ascent=ascent, descent=descent)


#============================================
def font_for_block(font: FontSpec, block: TextBlock) -> FontSpec:
	"""
	Apply a block's font size override to the page font.
	"""
	if block.format.font_size is None or block.format.font_size == font.size:
		return font
	return dataclasses.replace(font, size=block.format.font_size)


#============================================
def measure_block(
	block: TextBlock,
	measurer: TextMeasurer,
	font: FontSpec,
	padding_h: int,
	padding_v: int,
) -> None:
	"""
	Set a block's width/height and per-line rectangles.

	Line rectangles are relative to the block's top-left corner. The
	block is one pixel wider than its padded text so that dotted borders
	never touch glyphs.

	Args:
		block: Text block, modified in place.
		measurer: Text measurement capability.
		font: Page font.
		padding_h: Horizontal padding in pixels.
		padding_v: Vertical padding in pixels.
	"""
	block_font = font_for_block(font, block)
	block.line_rects = []
	y = padding_v
	width = 0
	height = 0
	for line in block.lines:
		metrics = measurer.measure(line, block_font)
		line_width = round(metrics.width)
		line_height = block_font.line_height
		if line_height is None:
			line_height = round(metrics.ascent + metrics.descent)
		block.line_rects.append(Rect(padding_h, y, line_width, line_height))
		width = max(width, line_width)
		height += line_height
		y += line_height
	block.rect.width = width + 2 * padding_h + 1
	block.rect.height = height + 2 * padding_v
