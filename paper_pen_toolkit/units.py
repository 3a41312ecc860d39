"""
Physical length values and plain rectangle geometry.
"""

# Standard Library
import dataclasses

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config


POINTS_PER_UNIT = ppt.config.POINTS_PER_UNIT
UNITS_EPSILON = ppt.config.UNITS_EPSILON
UNIT_INCH = ppt.config.UNIT_INCH


#============================================
def convert(value: float, from_unit: str, to_unit: str) -> float:
	"""
	Convert a length between unit kinds.

	Args:
		value: Length in from_unit.
		from_unit: Source unit kind.
		to_unit: Target unit kind.

	Returns:
		Length in to_unit.
	"""
	if from_unit not in POINTS_PER_UNIT:
		raise ValueError(f"Unknown unit: {from_unit}")
	if to_unit not in POINTS_PER_UNIT:
		raise ValueError(f"Unknown unit: {to_unit}")
	if from_unit == to_unit:
		return value
	return value * POINTS_PER_UNIT[from_unit] / POINTS_PER_UNIT[to_unit]


@dataclasses.dataclass(frozen=True, eq=False)
class Units:
	value: float
	unit: str = UNIT_INCH

	def __post_init__(self) -> None:
		if self.unit not in POINTS_PER_UNIT:
			raise ValueError(f"Unknown unit: {self.unit}")

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Units):
			return NotImplemented
		if self.unit != other.unit:
			return False
		return abs(self.value - other.value) < UNITS_EPSILON

	def __hash__(self) -> int:
		# equal values may differ by epsilon, so only the kind is hashed
		return hash(self.unit)

	def value_in(self, unit: str) -> float:
		return convert(self.value, self.unit, unit)

	def to(self, unit: str) -> "Units":
		return Units(self.value_in(unit), unit)

	def same_type_with_value(self, value: float) -> "Units":
		return Units(value, self.unit)

	def __str__(self) -> str:
		return f"{self.value:g} {self.unit}"


@dataclasses.dataclass(frozen=True)
class Coordinates:
	x: Units
	y: Units

	def value_in(self, unit: str) -> tuple[float, float]:
		return (self.x.value_in(unit), self.y.value_in(unit))


@dataclasses.dataclass(frozen=True)
class Rect:
	"""
	Axis-aligned rectangle with its origin at the minimum corner.

	Containment and intersection follow Java2D rules: an empty rectangle
	contains nothing and intersects nothing, and rectangles that only
	share an edge do not intersect.
	"""
	x: float
	y: float
	width: float
	height: float

	@classmethod
	def from_corners(cls, x0: float, y0: float, x1: float, y1: float) -> "Rect":
		min_x = min(x0, x1)
		min_y = min(y0, y1)
		return cls(min_x, min_y, max(x0, x1) - min_x, max(y0, y1) - min_y)

	@classmethod
	def around_point(cls, x: float, y: float, half_size: float) -> "Rect":
		return cls(x - half_size, y - half_size, half_size * 2.0, half_size * 2.0)

	@property
	def max_x(self) -> float:
		return self.x + self.width

	@property
	def max_y(self) -> float:
		return self.y + self.height

	@property
	def area(self) -> float:
		return self.width * self.height

	def is_empty(self) -> bool:
		return self.width <= 0.0 or self.height <= 0.0

	def contains_point(self, x: float, y: float, tolerance: float = 0.0) -> bool:
		"""
		Inclusive point test, edges count as inside.
		"""
		return (
			self.x - tolerance <= x <= self.max_x + tolerance
			and self.y - tolerance <= y <= self.max_y + tolerance
		)

	def contains_rect(self, other: "Rect") -> bool:
		if self.is_empty() or other.is_empty():
			return False
		return (
			other.x >= self.x
			and other.y >= self.y
			and other.max_x <= self.max_x
			and other.max_y <= self.max_y
		)

	def intersects(self, other: "Rect") -> bool:
		if self.is_empty() or other.is_empty():
			return False
		return (
			other.max_x > self.x
			and other.max_y > self.y
			and other.x < self.max_x
			and other.y < self.max_y
		)

	def intersection(self, other: "Rect") -> "Rect | None":
		"""
		Overlapping part of two rectangles, or None when they do not overlap.
		"""
		if not self.intersects(other):
			return None
		return Rect.from_corners(
			max(self.x, other.x),
			max(self.y, other.y),
			min(self.max_x, other.max_x),
			min(self.max_y, other.max_y),
		)

	def union(self, other: "Rect") -> "Rect":
		return Rect.from_corners(
			min(self.x, other.x),
			min(self.y, other.y),
			max(self.max_x, other.max_x),
			max(self.max_y, other.max_y),
		)

	def expand(self, margin: float) -> "Rect":
		"""
		Grow the rectangle by a fraction of its own size.

		A margin of 1.0 doubles the width and height, keeping the center.

		Args:
			margin: Fraction of width and height added in total.

		Returns:
			Expanded Rect.
		"""
		dx = self.width * margin / 2.0
		dy = self.height * margin / 2.0
		return Rect(self.x - dx, self.y - dy, self.width + dx * 2.0, self.height + dy * 2.0)

	def as_tuple(self) -> tuple[float, float, float, float]:
		return (self.x, self.y, self.width, self.height)
