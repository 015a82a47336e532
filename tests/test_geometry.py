import pytest

import thermal_page_editor.geometry as geometry


Rect = geometry.Rect


#============================================
def test_derived_bounds_are_inclusive() -> None:
	"""
	x2/y2 are the last covered pixel.
	"""
	rect = Rect(3, 4, 10, 2)
	assert rect.x2 == 12
	assert rect.y2 == 5
	assert rect.area == 20
	assert rect.contains(geometry.Pos(12, 5))
	assert not rect.contains(geometry.Pos(13, 5))


#============================================
def test_overlaps_shares_edge_pixel() -> None:
	"""
	Rectangles sharing a single pixel overlap; adjacent ones do not.
	"""
	base = Rect(0, 0, 10, 10)
	assert base.overlaps(Rect(9, 9, 5, 5))
	assert not base.overlaps(Rect(10, 0, 5, 5))
	assert not base.overlaps(Rect(0, 10, 5, 5))
	assert not base.overlaps(Rect(4, 4, 0, 3))


#============================================
def test_split_rect_without_overlap_keeps_rect() -> None:
	"""
	A non-overlapping cut leaves the rectangle whole.
	"""
	rect = Rect(0, 0, 10, 10)
	assert geometry.split_rect(rect, Rect(20, 20, 5, 5)) == [rect]


#============================================
def test_split_rect_center_cut_gives_four_pieces() -> None:
	"""
	Cutting the middle leaves top, bottom, left and right pieces.
	"""
	pieces = geometry.split_rect(Rect(0, 0, 10, 10), Rect(3, 3, 4, 4))
	assert pieces == [
		Rect(0, 0, 10, 3),
		Rect(0, 7, 10, 3),
		Rect(0, 3, 3, 4),
		Rect(7, 3, 3, 4),
	]
	assert sum(piece.area for piece in pieces) == 100 - 16
	geometry.assert_no_overlaps(pieces)


#============================================
def test_split_rect_top_left_corner() -> None:
	"""
	A cut at the top-left corner leaves a bottom strip and a right strip.
	"""
	pieces = geometry.split_rect(Rect(0, 0, 100, 1000), Rect(0, 0, 40, 30))
	assert pieces == [Rect(0, 30, 100, 970), Rect(40, 0, 60, 30)]


#============================================
def test_split_rect_fully_covered() -> None:
	"""
	A cut covering the whole rectangle leaves nothing.
	"""
	assert geometry.split_rect(Rect(5, 5, 4, 4), Rect(0, 0, 20, 20)) == []


#============================================
def test_subtract_from_all_builds_new_list() -> None:
	"""
	The source list is not modified.
	"""
	rects = [Rect(0, 0, 10, 10), Rect(20, 0, 10, 10)]
	result = geometry.subtract_from_all(rects, Rect(0, 0, 10, 5))
	assert rects == [Rect(0, 0, 10, 10), Rect(20, 0, 10, 10)]
	assert result == [Rect(0, 5, 10, 5), Rect(20, 0, 10, 10)]


#============================================
def test_sort_rects_by_position_is_row_major() -> None:
	"""
	Sort by y first, then x.
	"""
	rects = [Rect(50, 10, 1, 1), Rect(0, 20, 1, 1), Rect(10, 10, 1, 1), Rect(99, 0, 1, 1)]
	geometry.sort_rects_by_position(rects)
	assert [(rect.x, rect.y) for rect in rects] == [(99, 0), (10, 10), (50, 10), (0, 20)]


#============================================
def test_assert_no_overlaps_raises() -> None:
	"""
	Overlapping allocations raise the invariant violation.
	"""
	rects = [Rect(0, 0, 10, 10), Rect(20, 0, 5, 5), Rect(5, 5, 10, 10)]
	assert geometry.find_overlaps(rects) == [(0, 2)]
	with pytest.raises(geometry.GeometryInvariantViolation):
		geometry.assert_no_overlaps(rects)
	with pytest.raises(AssertionError):
		geometry.assert_no_overlaps(rects)
