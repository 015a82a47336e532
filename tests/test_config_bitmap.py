import pathlib

import PIL.Image
import pytest

import thermal_page_editor.bitmap as bitmap
import thermal_page_editor.config as config

from conftest import gray_buffer


#============================================
def test_config_round_trip(tmp_path: pathlib.Path) -> None:
	"""
	Saved settings load back unchanged.
	"""
	original = config.RenderConfig(layout="two-columns", padding_h=2, negative=True)
	original.monochrome.method = "Simple"
	original.monochrome.threshold = 140
	path = tmp_path / config.CONFIG_FILE_NAME
	config.save_config(original, path)
	loaded = config.load_config(path)
	assert loaded == original


#============================================
def test_config_from_dict_ignores_unknown_keys() -> None:
	"""
	Unknown keys are ignored and missing keys keep defaults.
	"""
	loaded = config.config_from_dict({"layout": "vertical", "fixedWidth": True, "monochrome": {"blockSize": 3, "block_size": 7}})
	assert loaded.layout == "vertical"
	assert loaded.monochrome.block_size == 7
	assert loaded.monochrome.method == config.DEFAULT_MONOCHROME_METHOD
	assert loaded.canvas_width == config.CANVAS_WIDTH


#============================================
def test_config_from_dict_rejects_wrong_types(capsys: pytest.CaptureFixture) -> None:
	"""
	Values of the wrong type keep their defaults with a diagnostic.
	"""
	loaded = config.config_from_dict({
		"padding_h": "8",
		"borders": 1,
		"font_size": 18.0,
		"line_height": None,
		"monochrome": {"threshold": "dark", "block_size": 5, "method": 3},
	})
	assert loaded.padding_h == config.DEFAULT_PADDING_H
	assert loaded.borders is True
	assert loaded.font_size == 18
	assert isinstance(loaded.font_size, int)
	assert loaded.line_height is None
	assert loaded.monochrome.threshold is None
	assert loaded.monochrome.block_size == 5
	assert loaded.monochrome.method == config.DEFAULT_MONOCHROME_METHOD
	output = capsys.readouterr().out
	assert "Ignoring config value: padding_h" in output
	assert "Ignoring config value: threshold" in output


#============================================
def test_config_from_dict_accepts_integer_threshold() -> None:
	"""
	Integer thresholds load as floats.
	"""
	loaded = config.config_from_dict({"monochrome": {"threshold": 140}})
	assert loaded.monochrome.threshold == 140.0
	assert isinstance(loaded.monochrome.threshold, float)


#============================================
def test_load_config_malformed_keeps_defaults(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:
	"""
	Broken JSON falls back to defaults with a diagnostic.
	"""
	path = tmp_path / "broken.json"
	path.write_text("{not json", encoding="utf-8")
	assert config.load_config(path) == config.RenderConfig()
	assert "Failed to load config" in capsys.readouterr().out
	assert config.load_config(tmp_path / "missing.json") == config.RenderConfig()


#============================================
def test_pack_rows_msb_first() -> None:
	"""
	Black pixels set bits, most significant bit first.
	"""
	values = [0, 255, 255, 255, 255, 255, 255, 0] + [255] * 7 + [0]
	values += [0] * 8 + [255] * 8
	buffer = gray_buffer(values, 16, 2)
	rows = bitmap.pack_rows(buffer)
	assert rows == [bytes([0x81, 0x01]), bytes([0xFF, 0x00])]


#============================================
def test_pack_rows_requires_width_multiple_of_eight() -> None:
	"""
	Printer rows must be whole bytes.
	"""
	with pytest.raises(ValueError):
		bitmap.pack_rows(gray_buffer([255] * 10, 10, 1))


#============================================
def test_write_rows(tmp_path: pathlib.Path) -> None:
	"""
	Rows are written back to back.
	"""
	path = tmp_path / "page.bin"
	bitmap.write_rows([b"\x01\x02", b"\x03\x04"], path)
	assert path.read_bytes() == b"\x01\x02\x03\x04"


#============================================
def test_write_png_is_one_bit(tmp_path: pathlib.Path) -> None:
	"""
	PNG export keeps black and white pixels in a 1-bit image.
	"""
	buffer = gray_buffer([0, 255, 255, 0] * 4, 8, 2)
	path = tmp_path / "page.png"
	bitmap.write_png(buffer, path)
	with PIL.Image.open(path) as image:
		assert image.mode == "1"
		assert image.size == (8, 2)
		assert image.getpixel((0, 0)) == 0
		assert image.getpixel((1, 0)) == 255


#============================================
def test_write_pdf_proof_paginates(tmp_path: pathlib.Path) -> None:
	"""
	Tall pages continue on extra letter sheets.
	"""
	short_path = tmp_path / "short.pdf"
	pages = bitmap.write_pdf_proof(PIL.Image.new("RGBA", (384, 600), (255, 255, 255, 255)), short_path)
	assert pages == 1
	assert short_path.read_bytes().startswith(b"%PDF")

	tall_path = tmp_path / "tall.pdf"
	pages = bitmap.write_pdf_proof(PIL.Image.new("RGBA", (384, 5000), (255, 255, 255, 255)), tall_path)
	assert pages == 3
	assert tall_path.stat().st_size > 0
