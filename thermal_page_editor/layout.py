"""
Block layout policies on a fixed-width page.
"""

# Standard Library
import dataclasses
import typing

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.blocks
import thermal_page_editor.config
import thermal_page_editor.geometry
import thermal_page_editor.packer


TextBlock = tpe.blocks.TextBlock
Rect = tpe.geometry.Rect
FreeRectPacker = tpe.packer.FreeRectPacker

DEFAULT_LAYOUT = tpe.config.DEFAULT_LAYOUT


@dataclasses.dataclass
class LayoutResult:
	height: int
	free_rects: list[Rect]


@dataclasses.dataclass(frozen=True)
class BlockLayout:
	name: str
	apply: typing.Callable[[list[TextBlock], int], LayoutResult]


#============================================
def vertical_layout(blocks: list[TextBlock], max_width: int) -> LayoutResult:
	"""
	Stack blocks top to bottom in input order.

	Args:
		blocks: Measured blocks.
		max_width: Page width (unused).

	Returns:
		LayoutResult with the summed block height.
	"""
	y = 0
	for block in blocks:
		block.rect.x = 0
		block.rect.y = y
		y += block.rect.height
	return LayoutResult(height=y, free_rects=[])


#============================================
def free_rect_layout(
	blocks: list[TextBlock],
	max_width: int,
	policy: tpe.packer.PlacementPolicy,
) -> LayoutResult:
	"""
	Place blocks largest-first with the free-rectangle packer.

	Args:
		blocks: Measured blocks. Their order is not changed.
		max_width: Page width.
		policy: Placement policy for the packer.

	Returns:
		LayoutResult with the packed height and leftover free rects.
	"""
	packer = FreeRectPacker(max_width)
	ordered = sorted(blocks, key=lambda block: -block.rect.width * block.rect.height)
	for block in ordered:
		pos = packer.place(block.rect.width, block.rect.height, policy)
		block.rect.x = pos.x
		block.rect.y = pos.y
	return LayoutResult(height=packer.height, free_rects=packer.free_rects)


#============================================
def two_columns_layout(blocks: list[TextBlock], max_width: int) -> LayoutResult:
	return free_rect_layout(blocks, max_width, tpe.packer.two_columns_position)


#============================================
def compact_layout(blocks: list[TextBlock], max_width: int) -> LayoutResult:
	return free_rect_layout(blocks, max_width, tpe.packer.compact_position)


BLOCK_LAYOUTS = (
	BlockLayout("vertical", vertical_layout),
	BlockLayout("two-columns", two_columns_layout),
	BlockLayout("compact", compact_layout),
)


#============================================
def layout_names() -> list[str]:
	return [item.name for item in BLOCK_LAYOUTS]


#============================================
def resolve_layout(name: str) -> BlockLayout:
	"""
	Resolve a layout name, falling back to the default layout.

	Args:
		name: Layout name.

	Returns:
		BlockLayout.
	"""
	default = None
	for item in BLOCK_LAYOUTS:
		if item.name == name:
			return item
		if item.name == DEFAULT_LAYOUT:
			default = item
	print(f"Unknown layout '{name}', using '{DEFAULT_LAYOUT}'")
	return default


#============================================
def layout(blocks: list[TextBlock], max_width: int, policy: BlockLayout | str) -> int:
	"""
	Assign x/y to every block and return the total content height.

	Args:
		blocks: Blocks with width/height already measured.
		max_width: Page width in pixels.
		policy: BlockLayout or layout name.

	Returns:
		Total content height in pixels.
	"""
	if isinstance(policy, str):
		policy = resolve_layout(policy)
	result = policy.apply(blocks, max_width)
	return result.height
