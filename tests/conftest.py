"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

# local repo modules
import thermal_page_editor.measure  # noqa: E402
import thermal_page_editor.pixels  # noqa: E402


class FakeMeasurer:
	"""
	Font-independent measurer: half an em per character, one em per line.
	"""

	def measure(self, text: str, font: thermal_page_editor.measure.FontSpec) -> thermal_page_editor.measure.TextMetrics:
		return thermal_page_editor.measure.TextMetrics(
			width=len(text) * font.size / 2.0,
			ascent=font.size * 0.75,
			descent=font.size * 0.25,
		)


#============================================
def gray_buffer(
	values: list[int],
	width: int,
	height: int,
	alpha: int = 255,
) -> thermal_page_editor.pixels.PixelBuffer:
	"""
	Build an RGBA buffer with R = G = B = value per pixel.
	"""
	data = bytearray()
	for value in values:
		data.extend((value, value, value, alpha))
	return thermal_page_editor.pixels.PixelBuffer(width, height, data)


@pytest.fixture
def fake_measurer() -> FakeMeasurer:
	return FakeMeasurer()
