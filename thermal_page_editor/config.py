"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import json
import pathlib
import typing

# PIP3 modules
import PIL.Image


CANVAS_WIDTH = 384
CANVAS_HEIGHT = 600
FREE_RECT_SENTINEL_HEIGHT = 100_000

DEFAULT_FONT_PATH = None
DEFAULT_FONT_SIZE = 16
DEFAULT_PADDING_H = 6
DEFAULT_PADDING_V = 3
DEFAULT_LAYOUT = "compact"
DEFAULT_MONOCHROME_METHOD = "Adaptive StdDev"
DEFAULT_BLOCK_SIZE = 15
BLOCK_SIZES = (3, 5, 7, 9, 11, 13, 15)
MAX_BLOCK_REPEAT = 100

BORDER_DASH = (1, 7)
DEBUG_RECT_COLOR = (255, 0, 0, 255)
PROOF_DPI = 203

CONFIG_FILE_NAME = "thermal_page_editor.json"


@dataclasses.dataclass
class MonochromeConfig:
	method: str = DEFAULT_MONOCHROME_METHOD
	threshold: float | None = None
	block_size: int = DEFAULT_BLOCK_SIZE


@dataclasses.dataclass
class RenderConfig:
	canvas_width: int = CANVAS_WIDTH
	canvas_height: int = CANVAS_HEIGHT
	font_path: str | None = DEFAULT_FONT_PATH
	font_size: int = DEFAULT_FONT_SIZE
	line_height: int | None = None
	padding_h: int = DEFAULT_PADDING_H
	padding_v: int = DEFAULT_PADDING_V
	layout: str = DEFAULT_LAYOUT
	borders: bool = True
	debug: bool = False
	preview: bool = True
	negative: bool = False
	monochrome: MonochromeConfig = dataclasses.field(default_factory=MonochromeConfig)


@dataclasses.dataclass
class RenderResult:
	image: PIL.Image.Image
	height: int
	layout: str
	method: str | None
	metrics: dict[str, float]
	free_rects: list


#============================================
def config_to_dict(config: RenderConfig) -> dict:
	"""
	Convert a render config into a JSON-friendly dict.

	Args:
		config: Render configuration.

	Returns:
		Plain dict.
	"""
	return dataclasses.asdict(config)


#============================================
def field_kind(field: dataclasses.Field) -> tuple[type, bool]:
	"""
	Base type of a config field and whether it accepts None.
	"""
	args = typing.get_args(field.type)
	if not args:
		return (field.type, False)
	kinds = [arg for arg in args if arg is not type(None)]
	return (kinds[0], len(kinds) != len(args))


#============================================
def coerce_value(name: str, value, kind: type, nullable: bool):
	"""
	Check a JSON value against a config field type.

	Integers are accepted for float fields and integral floats for int
	fields. Booleans only match bool fields.

	Args:
		name: Field name, for the error message.
		value: Parsed JSON value.
		kind: Expected base type.
		nullable: Whether None is allowed.

	Returns:
		The value converted to the field type.

	Raises:
		TypeError: The value does not fit the field.
	"""
	if value is None and nullable:
		return None
	if kind is bool:
		if isinstance(value, bool):
			return value
	elif kind is int:
		if isinstance(value, int) and not isinstance(value, bool):
			return value
		if isinstance(value, float) and value.is_integer():
			return int(value)
	elif kind is float:
		if isinstance(value, (int, float)) and not isinstance(value, bool):
			return float(value)
	elif isinstance(value, kind):
		return value
	raise TypeError(f"{name} expects {kind.__name__}, got {value!r}")


#============================================
def apply_fields(target, data: dict) -> None:
	"""
	Copy known, well-typed keys from data onto a config dataclass.

	Bad values keep the default and print a diagnostic.
	"""
	for field in dataclasses.fields(target):
		if field.name not in data or dataclasses.is_dataclass(field.type):
			continue
		kind, nullable = field_kind(field)
		try:
			value = coerce_value(field.name, data[field.name], kind, nullable)
		except TypeError as error:
			print(f"Ignoring config value: {error}")
			continue
		setattr(target, field.name, value)


#============================================
def config_from_dict(data: dict) -> RenderConfig:
	"""
	Build a render config from a dict, ignoring unknown keys.

	Missing keys keep their defaults, and so do values of the wrong type.
	Names of layouts and monochrome methods are stored as given and
	resolved by the renderer.

	Args:
		data: Parsed JSON data.

	Returns:
		RenderConfig.
	"""
	config = RenderConfig()
	apply_fields(config, data)
	monochrome_data = data.get("monochrome")
	if isinstance(monochrome_data, dict):
		apply_fields(config.monochrome, monochrome_data)
	return config


#============================================
def load_config(path: pathlib.Path) -> RenderConfig:
	"""
	Load a render config from JSON.

	A missing or malformed file yields the defaults and a diagnostic.

	Args:
		path: JSON file path.

	Returns:
		RenderConfig.
	"""
	if not path.exists():
		return RenderConfig()
	try:
		data = json.loads(path.read_text(encoding="utf-8"))
	except (OSError, json.JSONDecodeError) as error:
		print(f"Failed to load config {path}: {error}")
		return RenderConfig()
	if not isinstance(data, dict):
		print(f"Failed to load config {path}: expected a JSON object")
		return RenderConfig()
	return config_from_dict(data)


#============================================
def save_config(config: RenderConfig, path: pathlib.Path) -> None:
	"""
	Write a render config as JSON.

	Args:
		config: Render configuration.
		path: Output JSON path.
	"""
	path.write_text(json.dumps(config_to_dict(config), indent=2) + "\n", encoding="utf-8")


#============================================
def clamp(low: float, high: float, value: float) -> float:
	"""
	Clamp a value into [low, high].
	"""
	return max(low, min(high, value))
