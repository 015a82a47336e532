"""
CLI entry points for rendering thermal printer pages.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.bitmap
import thermal_page_editor.blocks
import thermal_page_editor.config
import thermal_page_editor.layout
import thermal_page_editor.monochrome
import thermal_page_editor.pixels
import thermal_page_editor.render


RenderConfig = tpe.config.RenderConfig


#============================================
def build_config(args: argparse.Namespace) -> RenderConfig:
	"""
	Build render config from a config file and CLI overrides.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderConfig.
	"""
	config = RenderConfig()
	if args.config_path:
		config = tpe.config.load_config(pathlib.Path(args.config_path))

	overrides = {
		"layout": args.layout,
		"font_path": args.font_path,
		"font_size": args.font_size,
		"line_height": args.line_height,
		"padding_h": args.padding_h,
		"padding_v": args.padding_v,
		"borders": args.borders,
		"debug": args.debug,
		"preview": args.preview,
		"negative": args.negative,
	}
	for key, value in overrides.items():
		if value is not None:
			setattr(config, key, value)
	if args.method is not None:
		config.monochrome.method = args.method
	if args.threshold is not None:
		config.monochrome.threshold = args.threshold
	if args.block_size is not None:
		config.monochrome.block_size = args.block_size
	return config


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render text blocks into a thermal printer page.")
	parser.add_argument("input_path", help="Block document JSON.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PNG path.")
	output_group.add_argument("-r", "--rows", dest="rows_path", default=None, help="Output packed 1-bit rows path.")
	output_group.add_argument("-f", "--proof", dest="proof_path", default=None, help="Output PDF proof path.")
	output_group.add_argument("-c", "--config", dest="config_path", default=None, help="Config JSON path.")
	output_group.add_argument("-s", "--save-config", dest="save_config", action="store_true", help="Write the effective config back to --config.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-l", "--layout", dest="layout", default=None, choices=tpe.layout.layout_names(), help="Block layout.")
	layout_group.add_argument("--font", dest="font_path", default=None, help="TrueType font path.")
	layout_group.add_argument("--font-size", dest="font_size", type=int, default=None, help="Font size in pixels.")
	layout_group.add_argument("--line-height", dest="line_height", type=int, default=None, help="Fixed line height in pixels.")
	layout_group.add_argument("--padding-h", dest="padding_h", type=int, default=None, help="Horizontal block padding.")
	layout_group.add_argument("--padding-v", dest="padding_v", type=int, default=None, help="Vertical block padding.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-b", "--borders", dest="borders", action="store_true", help="Draw block borders.")
	behavior_group.add_argument("-B", "--no-borders", dest="borders", action="store_false", help="Disable block borders.")
	behavior_group.add_argument("-d", "--debug", dest="debug", action="store_true", help="Outline free rectangles (editor view only).")
	behavior_group.add_argument("-p", "--preview", dest="preview", action="store_true", help="Crop and binarize the page.")
	behavior_group.add_argument("-P", "--no-preview", dest="preview", action="store_false", help="Render the editor view.")
	behavior_group.add_argument("-n", "--negative", dest="negative", action="store_true", help="Invert the monochrome page.")

	mono_group = parser.add_argument_group("Monochrome")
	mono_group.add_argument("-m", "--method", dest="method", default=None, choices=tpe.monochrome.method_names(), help="Binarization method.")
	mono_group.add_argument("-t", "--threshold", dest="threshold", type=float, default=None, help="Method threshold parameter.")
	mono_group.add_argument("-k", "--block-size", dest="block_size", type=int, default=None, help="Local window size.")

	parser.set_defaults(
		borders=None,
		debug=None,
		preview=None,
		negative=None,
	)

	args = parser.parse_args()
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the full pipeline from block document to bitmap outputs.

	Args:
		args: Parsed argparse namespace.
	"""
	config = build_config(args)
	print("Thermal page pipeline")
	print(f"Output PNG: {args.output_path}")
	print(f"Layout: {config.layout}")
	print(f"Preview: {config.preview}")
	if config.preview:
		print(f"Monochrome: {config.monochrome.method}")

	start_time = time.perf_counter()
	blocks = tpe.blocks.load_block_document(pathlib.Path(args.input_path))
	print(f"Blocks loaded: {len(blocks)}")

	result = tpe.render.render_page(blocks, config)
	print(f"Content height: {result.height} px")
	print(f"Page size: {result.image.width}x{result.image.height}")
	for line in tpe.render.format_metrics(result.metrics):
		print(line)

	output_path = pathlib.Path(args.output_path)
	buffer = None
	if config.preview:
		buffer = tpe.pixels.from_image(result.image)
		tpe.bitmap.write_png(buffer, output_path)
	else:
		result.image.save(str(output_path), format="PNG")
	print(f"PNG written: {output_path}")

	if args.rows_path:
		if buffer is None:
			print("Packed rows need a binarized page; enable --preview")
		else:
			rows = tpe.bitmap.pack_rows(buffer)
			tpe.bitmap.write_rows(rows, pathlib.Path(args.rows_path))
			print(f"Rows written: {len(rows)} to {args.rows_path}")

	if args.proof_path:
		pages = tpe.bitmap.write_pdf_proof(result.image, pathlib.Path(args.proof_path))
		print(f"Proof pages written: {pages}")

	if args.save_config and args.config_path:
		tpe.config.save_config(config, pathlib.Path(args.config_path))
		print(f"Config written: {args.config_path}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
