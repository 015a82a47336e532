"""
Integer rectangle geometry for block layout.
"""

# Standard Library
import dataclasses


class GeometryInvariantViolation(AssertionError):
	"""
	Raised when allocated rectangles overlap.
	"""


@dataclasses.dataclass
class Pos:
	x: int
	y: int


@dataclasses.dataclass
class Rect:
	x: int
	y: int
	width: int
	height: int

	@property
	def x2(self) -> int:
		return self.x + self.width - 1

	@property
	def y2(self) -> int:
		return self.y + self.height - 1

	@property
	def pos(self) -> Pos:
		return Pos(self.x, self.y)

	@property
	def area(self) -> int:
		return self.width * self.height

	def contains(self, point: Pos) -> bool:
		return self.x <= point.x <= self.x2 and self.y <= point.y <= self.y2

	def overlaps(self, other: "Rect") -> bool:
		"""
		Check whether two rectangles share at least one pixel.

		Bounds are inclusive, so a zero-width or zero-height rectangle
		never overlaps anything.
		"""
		return (
			max(self.x, other.x) <= min(self.x2, other.x2)
			and max(self.y, other.y) <= min(self.y2, other.y2)
		)

	def __str__(self) -> str:
		return f"{self.x},{self.y}-{self.width}x{self.height}"


#============================================
def split_rect(rect: Rect, by: Rect) -> list[Rect]:
	"""
	Subtract one rectangle from another.

	The remainder is returned as up to four pieces: a full-width top strip,
	a full-width bottom strip, and left/right strips covering the band
	between them.

	Args:
		rect: Rectangle to cut.
		by: Rectangle to remove.

	Returns:
		Remaining pieces, or [rect] when the two do not overlap.
	"""
	if not rect.overlaps(by):
		return [rect]

	cx1 = max(rect.x, by.x)
	cx2 = min(rect.x2, by.x2)
	cy1 = max(rect.y, by.y)
	cy2 = min(rect.y2, by.y2)

	pieces: list[Rect] = []
	from_y = rect.y
	to_y = rect.y2
	if cy1 > rect.y:
		pieces.append(Rect(rect.x, rect.y, rect.width, cy1 - rect.y))
		from_y = cy1
	if cy2 < rect.y2:
		pieces.append(Rect(rect.x, cy2 + 1, rect.width, rect.y2 - cy2))
		to_y = cy2
	if cx1 > rect.x:
		pieces.append(Rect(rect.x, from_y, cx1 - rect.x, to_y - from_y + 1))
	if cx2 < rect.x2:
		pieces.append(Rect(cx2 + 1, from_y, rect.x2 - cx2, to_y - from_y + 1))
	return pieces


#============================================
def subtract_from_all(rects: list[Rect], by: Rect) -> list[Rect]:
	"""
	Build a new list with one rectangle cut out of every entry.

	Args:
		rects: Source rectangles, left unmodified.
		by: Rectangle to remove.

	Returns:
		New list of remaining pieces in source order.
	"""
	result: list[Rect] = []
	for rect in rects:
		result.extend(split_rect(rect, by))
	return result


#============================================
def sort_rects_by_position(rects: list[Rect]) -> None:
	"""
	Sort rectangles in place, top-to-bottom then left-to-right.
	"""
	rects.sort(key=lambda rect: (rect.y, rect.x))


#============================================
def find_overlaps(rects: list[Rect]) -> list[tuple[int, int]]:
	"""
	Find every overlapping pair with a full pairwise check.

	Args:
		rects: Rectangles to compare.

	Returns:
		List of (i, j) index pairs with i < j.
	"""
	pairs: list[tuple[int, int]] = []
	for i in range(len(rects)):
		for j in range(i + 1, len(rects)):
			if rects[i].overlaps(rects[j]):
				pairs.append((i, j))
	return pairs


#============================================
def assert_no_overlaps(rects: list[Rect]) -> None:
	"""
	Raise GeometryInvariantViolation if any two rectangles overlap.

	Args:
		rects: Allocated rectangles.
	"""
	pairs = find_overlaps(rects)
	if pairs:
		details = ", ".join(f"{rects[i]} / {rects[j]}" for i, j in pairs[:10])
		raise GeometryInvariantViolation(f"Overlapping rectangles: {details}")
