"""
Text block model and block document loading.
"""

# Standard Library
import dataclasses
import json
import pathlib

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.config
import thermal_page_editor.geometry


Rect = tpe.geometry.Rect

MAX_BLOCK_REPEAT = tpe.config.MAX_BLOCK_REPEAT


@dataclasses.dataclass
class TextBlockFormat:
	center: bool = False
	bold: bool = False
	repeat: int = 1
	font_size: int | None = None


@dataclasses.dataclass
class TextBlock:
	lines: list[str]
	format: TextBlockFormat = dataclasses.field(default_factory=TextBlockFormat)
	rect: Rect = dataclasses.field(default_factory=lambda: Rect(0, 0, 0, 0))
	line_rects: list[Rect] = dataclasses.field(default_factory=list)


#============================================
def sized_block(width: int, height: int) -> TextBlock:
	"""
	Build an empty block with pre-measured dimensions.

	Args:
		width: Block width in pixels.
		height: Block height in pixels.

	Returns:
		TextBlock with no lines.
	"""
	return TextBlock(lines=[], rect=Rect(0, 0, width, height))


#============================================
def clean_lines(lines: list[str]) -> list[str]:
	"""
	Strip lines and drop empty ones.
	"""
	cleaned = []
	for line in lines:
		stripped = str(line).strip()
		if stripped:
			cleaned.append(stripped)
	return cleaned


#============================================
def parse_block_entry(entry: dict) -> list[TextBlock]:
	"""
	Expand one block document entry into text blocks.

	Args:
		entry: Dict with "lines" and optional "center", "bold",
			"repeat" and "font_size" keys.

	Returns:
		One block per repeat, or an empty list for blocks with no text.
	"""
	lines = entry.get("lines", [])
	if isinstance(lines, str):
		lines = lines.splitlines()
	lines = clean_lines(lines)
	if not lines:
		print("Skipping empty text block (format declared without text?)")
		return []

	repeat = int(tpe.config.clamp(1, MAX_BLOCK_REPEAT, int(entry.get("repeat", 1))))
	font_size = entry.get("font_size")
	block_format = TextBlockFormat(
		center=bool(entry.get("center", False)),
		bold=bool(entry.get("bold", False)),
		repeat=repeat,
		font_size=int(font_size) if font_size is not None else None,
	)
	blocks = []
	for _ in range(repeat):
		blocks.append(TextBlock(lines=list(lines), format=block_format))
	return blocks


#============================================
def parse_block_document(data: dict | list) -> list[TextBlock]:
	"""
	Build text blocks from a parsed block document.

	Args:
		data: A list of block entries, or a dict with a "blocks" list.

	Returns:
		List of TextBlock entries in document order.
	"""
	entries = data
	if isinstance(data, dict):
		entries = data.get("blocks", [])
	if not isinstance(entries, list):
		raise ValueError("Block document must hold a list of blocks")
	blocks: list[TextBlock] = []
	for entry in entries:
		if isinstance(entry, str):
			entry = {"lines": entry.splitlines()}
		blocks.extend(parse_block_entry(entry))
	return blocks


#============================================
def load_block_document(path: pathlib.Path) -> list[TextBlock]:
	"""
	Load text blocks from a JSON block document.

	Args:
		path: JSON file path.

	Returns:
		List of TextBlock entries.
	"""
	data = json.loads(path.read_text(encoding="utf-8"))
	return parse_block_document(data)
