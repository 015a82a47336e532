"""
Page rendering pipeline: measure, layout, draw, binarize.
"""

# Standard Library
import time

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.blocks
import thermal_page_editor.config
import thermal_page_editor.draw
import thermal_page_editor.layout
import thermal_page_editor.measure
import thermal_page_editor.monochrome
import thermal_page_editor.pixels


TextBlock = tpe.blocks.TextBlock
RenderConfig = tpe.config.RenderConfig
RenderResult = tpe.config.RenderResult
FontSpec = tpe.measure.FontSpec
PilTextMeasurer = tpe.measure.PilTextMeasurer


class StageTimer:
	"""
	Accumulate wall-clock milliseconds per named stage.
	"""

	def __init__(self):
		self.metrics: dict[str, float] = {}
		self._name: str | None = None
		self._start = 0.0

	def start(self, name: str) -> None:
		self._name = name
		self._start = time.perf_counter()

	def stop(self) -> None:
		elapsed = (time.perf_counter() - self._start) * 1000.0
		self.metrics[self._name] = self.metrics.get(self._name, 0.0) + elapsed
		self._name = None


#============================================
def format_metrics(metrics: dict[str, float]) -> list[str]:
	return [f"{name}: {value:.1f} ms." for name, value in metrics.items()]


#============================================
def page_font(config: RenderConfig) -> FontSpec:
	return FontSpec(path=config.font_path, size=config.font_size, line_height=config.line_height)


#============================================
def render_page(
	blocks: list[TextBlock],
	config: RenderConfig,
	measurer: PilTextMeasurer | None = None,
) -> RenderResult:
	"""
	Render text blocks to an RGBA page image.

	In preview mode the page is cropped to its content and binarized
	with the configured monochrome method; otherwise it is drawn as the
	editor view, with the packer's free rectangles when debug is on.

	Args:
		blocks: Text blocks to render; measured and laid out in place.
		config: Render configuration.
		measurer: Text measurer; a PilTextMeasurer when None.

	Returns:
		RenderResult.
	"""
	if measurer is None:
		measurer = PilTextMeasurer()
	font = page_font(config)
	block_layout = tpe.layout.resolve_layout(config.layout)
	method = None
	if config.preview:
		method = tpe.monochrome.resolve_method(config.monochrome.method)
	timer = StageTimer()

	timer.start("measure_text")
	for block in blocks:
		tpe.measure.measure_block(block, measurer, font, config.padding_h, config.padding_v)
	timer.stop()

	timer.start("layout")
	layout_result = block_layout.apply(blocks, config.canvas_width)
	timer.stop()

	timer.start("draw_text")
	content = tpe.draw.content_height(blocks)
	height = tpe.draw.page_height(content, config.canvas_height, config.preview)
	image = tpe.draw.new_surface(config.canvas_width, height)
	debug_rects = None
	if config.debug and not config.preview:
		debug_rects = layout_result.free_rects
	tpe.draw.draw_page(image, blocks, measurer, font, config.borders, debug_rects)
	timer.stop()

	if method is not None:
		timer.start("monochrome")
		buffer = tpe.pixels.from_image(image)
		tpe.monochrome.binarize(
			buffer,
			method,
			threshold=config.monochrome.threshold,
			block_size=config.monochrome.block_size,
		)
		if config.negative:
			tpe.monochrome.invert(buffer)
		tpe.pixels.write_to_image(buffer, image)
		timer.stop()

	return RenderResult(
		image=image,
		height=layout_result.height,
		layout=block_layout.name,
		method=method.value if method is not None else None,
		metrics=timer.metrics,
		free_rects=layout_result.free_rects,
	)
