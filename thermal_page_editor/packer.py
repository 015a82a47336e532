"""
Free-rectangle packing on a fixed-width strip.
"""

# Standard Library
import typing

# local repo modules
import thermal_page_editor as tpe
import thermal_page_editor.config
import thermal_page_editor.geometry


Pos = tpe.geometry.Pos
Rect = tpe.geometry.Rect

FREE_RECT_SENTINEL_HEIGHT = tpe.config.FREE_RECT_SENTINEL_HEIGHT

# (width, height, free rect, strip width) -> proposed position or None
PlacementPolicy = typing.Callable[[int, int, Rect, int], Pos | None]


#============================================
def compact_position(width: int, height: int, free: Rect, max_width: int) -> Pos | None:
	"""
	Propose the free rectangle's own top-left corner.
	"""
	return free.pos


#============================================
def two_columns_position(width: int, height: int, free: Rect, max_width: int) -> Pos | None:
	"""
	Propose a position flush to the left or right strip edge.

	Args:
		width: Requested width.
		height: Requested height.
		free: Candidate free rectangle.
		max_width: Strip width.

	Returns:
		Position anchored to the edge the free rectangle touches, or None.
	"""
	if free.x == 0:
		return Pos(0, free.y)
	if free.x + free.width == max_width:
		return Pos(max_width - width, free.y)
	return None


class FreeRectPacker:
	"""
	Allocate rectangles inside a strip of fixed width and unbounded height.

	The packer keeps the unused area as a list of non-overlapping free
	rectangles in row-major order, plus every allocated rectangle for the
	overlap re-check. height is the running bottom edge of the content.
	"""

	def __init__(self, max_width: int, sentinel_height: int = FREE_RECT_SENTINEL_HEIGHT):
		self.max_width = max_width
		self.free_rects: list[Rect] = [Rect(0, 0, max_width, sentinel_height)]
		self.allocated: list[Rect] = []
		self.height = 0

	def collides(self, rect: Rect) -> bool:
		for other in self.allocated:
			if other.overlaps(rect):
				return True
		return False

	def find_position(self, width: int, height: int, policy: PlacementPolicy) -> Pos:
		"""
		Find the first acceptable position in row-major free-rect order.

		Args:
			width: Requested width.
			height: Requested height.
			policy: Placement policy proposing a position per free rect.

		Returns:
			Accepted position, or (0, height) when nothing fits.
		"""
		for free in self.free_rects:
			if free.width < width:
				continue
			proposal = policy(width, height, free, self.max_width)
			if proposal is None:
				continue
			if not self.collides(Rect(proposal.x, proposal.y, width, height)):
				return proposal
		return Pos(0, self.height)

	def place(self, width: int, height: int, policy: PlacementPolicy) -> Pos:
		"""
		Allocate a rectangle and update the free list.

		Args:
			width: Requested width, may exceed the strip width.
			height: Requested height.
			policy: Placement policy.

		Returns:
			Top-left position of the allocated rectangle.
		"""
		pos = self.find_position(width, height, policy)
		rect = Rect(pos.x, pos.y, width, height)
		self.free_rects = tpe.geometry.subtract_from_all(self.free_rects, rect)
		tpe.geometry.sort_rects_by_position(self.free_rects)
		self.height = max(self.height, rect.y2 + 1)
		self.allocated.append(rect)
		return pos

	def verify(self) -> None:
		"""
		Pairwise check that no allocations overlap.
		"""
		tpe.geometry.assert_no_overlaps(self.allocated)
