"""
Geometry queries over collections of ink strokes.

All functions here are pure: they read strokes and return new lists,
never mutating the inputs. Several of them are order-dependent on
purpose. Clustering is a first-fit pass and near-point lookup returns
the first hit, so reordering the input can change the output.
"""

# Standard Library
import logging

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.ink
import paper_pen_toolkit.units


Ink = ppt.ink.Ink
InkStroke = ppt.ink.InkStroke
Rect = ppt.units.Rect

logger = logging.getLogger(__name__)


class Cluster(Ink):
	"""
	Ink whose bounds are the running union of margin-expanded strokes.

	The bounds only grow as strokes are added, so a cluster never splits.
	"""

	def __init__(self, margin: float, name: str = "") -> None:
		super().__init__(name=name)
		self.margin = margin
		self.expanded_bounds: Rect | None = None

	def matches(self, stroke: InkStroke) -> bool:
		if self.expanded_bounds is None:
			return False
		return stroke.bounds.expand(self.margin).intersects(self.expanded_bounds)

	def add_stroke(self, stroke: InkStroke) -> None:
		super().add_stroke(stroke)
		stroke_bounds = stroke.bounds.expand(self.margin)
		if self.expanded_bounds is None:
			self.expanded_bounds = stroke_bounds
		else:
			self.expanded_bounds = self.expanded_bounds.union(stroke_bounds)


#============================================
def iter_strokes(ink_well: list[Ink]):
	"""
	Yield every stroke of every ink, in list order.
	"""
	for ink in ink_well:
		for stroke in ink.get_strokes():
			yield stroke


#============================================
def find_all_strokes_contained_within(
	ink_well: list[Ink],
	container: InkStroke,
) -> list[InkStroke]:
	"""
	Find strokes that lie completely inside another stroke's bounds.

	The container itself is never returned, even when another stroke
	has identical bounds.

	Args:
		ink_well: Inks to search.
		container: The containing stroke.

	Returns:
		Strokes fully inside the container bounds.
	"""
	bounds = container.bounds
	return [
		stroke for stroke in iter_strokes(ink_well)
		if stroke is not container and bounds.contains_rect(stroke.bounds)
	]


#============================================
def find_all_strokes_outside(
	ink_well: list[Ink],
	container: InkStroke,
) -> list[InkStroke]:
	"""
	Find strokes whose bounds do not touch the container bounds at all.

	Args:
		ink_well: Inks to search.
		container: The containing stroke.

	Returns:
		Strokes with no overlap.
	"""
	bounds = container.bounds
	return [
		stroke for stroke in iter_strokes(ink_well)
		if not bounds.intersects(stroke.bounds)
	]


#============================================
def find_all_strokes_partly_outside(
	ink_well: list[Ink],
	container: InkStroke,
) -> list[InkStroke]:
	"""
	Find strokes that overlap the container but are not inside it.

	Args:
		ink_well: Inks to search.
		container: The containing stroke.

	Returns:
		Strokes that straddle the container bounds.
	"""
	bounds = container.bounds
	matching: list[InkStroke] = []
	for stroke in iter_strokes(ink_well):
		stroke_bounds = stroke.bounds
		if bounds.intersects(stroke_bounds) and not bounds.contains_rect(stroke_bounds):
			matching.append(stroke)
	return matching


#============================================
def cluster_strokes(strokes: list[InkStroke], margin: float) -> list[Cluster]:
	"""
	Group strokes whose margin-expanded bounds overlap.

	Single pass, first fit: each stroke joins the first existing cluster
	(in creation order) whose bounds it touches, otherwise it starts a new
	cluster. Strokes are never moved between clusters afterwards, so the
	result depends on the input order.

	Args:
		strokes: Strokes to group, in order.
		margin: Fraction of each stroke's size added before comparing;
			1.0 doubles the width and height of each box.

	Returns:
		Clusters in creation order.
	"""
	clusters: list[Cluster] = []
	for stroke in strokes:
		found = None
		for cluster in clusters:
			if cluster.matches(stroke):
				found = cluster
				break
		if found is None:
			found = Cluster(margin, name=f"cluster_{len(clusters) + 1}")
			clusters.append(found)
		found.add_stroke(stroke)
	logger.debug("Clustered %d strokes into %d clusters", len(strokes), len(clusters))
	return clusters


#============================================
def find_ink_near_point(
	ink_well: list[Ink],
	point: tuple[float, float],
	search_range: float,
) -> Ink | None:
	"""
	Find the first ink with a stroke near a point.

	This is not a nearest-neighbor search. Inks are scanned in list order
	and the first one whose stroke bounds intersect the square window
	around the point wins.

	Args:
		ink_well: Inks (usually clusters) to search.
		point: Query point (x, y).
		search_range: Half-width of the square window.

	Returns:
		Matching Ink or None.
	"""
	window = Rect.around_point(point[0], point[1], search_range)
	for ink in ink_well:
		for stroke in ink.get_strokes():
			if window.intersects(stroke.bounds):
				return ink
	return None


#============================================
def find_stroke_with_largest_area(ink_well: list[Ink]) -> InkStroke | None:
	"""
	Find the stroke with the largest bounding-box area.

	Ties keep the first stroke encountered.

	Args:
		ink_well: Inks to search.

	Returns:
		Largest stroke, or None when there are no strokes.
	"""
	biggest = None
	max_area = 0.0
	for stroke in iter_strokes(ink_well):
		area = stroke.area
		if biggest is None or area > max_area:
			biggest = stroke
			max_area = area
	if biggest is not None:
		logger.debug("Largest stroke area: %.3f", max_area)
	return biggest
