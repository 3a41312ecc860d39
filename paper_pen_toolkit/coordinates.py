"""
Bidirectional mapping between a region's local box and pattern tiles.

Logical coordinates are local to a region: (0, 0) is the region origin
and the box extends to the region's scaled width and height, in the
region's unit. Physical coordinates are pattern-space coordinates as
reported by a streaming pen. A region whose pattern spans more than one
printed tile keeps one TileMapping per tile.
"""

# Standard Library
import dataclasses

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config
import paper_pen_toolkit.units


Rect = ppt.units.Rect

GEOMETRY_EPSILON = ppt.config.GEOMETRY_EPSILON
UNIT_INCH = ppt.config.UNIT_INCH


@dataclasses.dataclass(frozen=True)
class TileMapping:
	"""
	Affine map from a logical sub-rectangle onto one pattern tile.

	physical = tile_origin + (logical - logical_rect origin) * scale
	"""
	tile_id: int
	origin_x: float
	origin_y: float
	logical_rect: Rect
	scale_x: float
	scale_y: float

	def __post_init__(self) -> None:
		if self.scale_x <= 0.0 or self.scale_y <= 0.0:
			raise ValueError(f"Tile {self.tile_id} needs positive scale factors")

	@property
	def physical_rect(self) -> Rect:
		return Rect(
			self.origin_x,
			self.origin_y,
			self.logical_rect.width * self.scale_x,
			self.logical_rect.height * self.scale_y,
		)

	def to_physical(self, x: float, y: float) -> tuple[float, float]:
		return (
			self.origin_x + (x - self.logical_rect.x) * self.scale_x,
			self.origin_y + (y - self.logical_rect.y) * self.scale_y,
		)

	def to_logical(self, x: float, y: float) -> tuple[float, float]:
		return (
			self.logical_rect.x + (x - self.origin_x) / self.scale_x,
			self.logical_rect.y + (y - self.origin_y) / self.scale_y,
		)


@dataclasses.dataclass(frozen=True)
class TiledPatternCoordinateConverter:
	"""
	Pattern coordinates for one region, possibly spread over many tiles.

	Converters are values: two converters with the same fields compare
	equal and can be swapped freely. A converter with no tiles is the
	unset entry a mapping starts with.
	"""
	region_name: str
	logical_width: float
	logical_height: float
	unit: str = UNIT_INCH
	tiles: tuple[TileMapping, ...] = ()

	def __post_init__(self) -> None:
		# accept any iterable of tiles but store a tuple
		object.__setattr__(self, "tiles", tuple(self.tiles))

	@property
	def is_set(self) -> bool:
		return bool(self.tiles)

	@property
	def logical_bounds(self) -> Rect:
		return Rect(0.0, 0.0, self.logical_width, self.logical_height)

	@property
	def tile_ids(self) -> list[int]:
		ids: list[int] = []
		for tile in self.tiles:
			if tile.tile_id not in ids:
				ids.append(tile.tile_id)
		return ids

	def physical_bounds(self, tile_id: int) -> Rect | None:
		"""
		Union of the physical rectangles stored for one tile id.
		"""
		bounds = None
		for tile in self.tiles:
			if tile.tile_id != tile_id:
				continue
			rect = tile.physical_rect
			bounds = rect if bounds is None else bounds.union(rect)
		return bounds

	def find_tile(self, x: float, y: float) -> int | None:
		"""
		Find the tile holding a physical point.

		Args:
			x: Physical X.
			y: Physical Y.

		Returns:
			Lowest matching tile id, or None when outside every tile.
		"""
		matches = [
			tile.tile_id for tile in self.tiles
			if tile.physical_rect.contains_point(x, y, GEOMETRY_EPSILON)
		]
		if not matches:
			return None
		return min(matches)

	def contains_physical(self, x: float, y: float) -> bool:
		return self.find_tile(x, y) is not None

	def map_physical_to_logical(
		self,
		tile_id: int,
		point: tuple[float, float],
	) -> tuple[float, float] | None:
		"""
		Map a physical sample on a tile into the region's local space.

		Args:
			tile_id: Tile the sample was read from.
			point: Physical (x, y).

		Returns:
			Logical (x, y), or None when the point is outside the region.
		"""
		x, y = point
		for tile in self.tiles:
			if tile.tile_id != tile_id:
				continue
			if tile.physical_rect.contains_point(x, y, GEOMETRY_EPSILON):
				return tile.to_logical(x, y)
		return None

	def map_logical_to_physical(self, point: tuple[float, float]) -> tuple[int, tuple[float, float]]:
		"""
		Map a local point onto its pattern tile.

		Points on a boundary shared by two tiles go to the lower tile id.

		Args:
			point: Logical (x, y) inside the region box.

		Returns:
			Tuple of (tile_id, physical (x, y)).

		Raises:
			ValueError: The point is outside the region or not covered by pattern.
		"""
		x, y = point
		if not self.logical_bounds.contains_point(x, y, GEOMETRY_EPSILON):
			raise ValueError(
				f"Point ({x}, {y}) is outside region {self.region_name} "
				f"({self.logical_width} x {self.logical_height} {self.unit})"
			)
		best = None
		for tile in self.tiles:
			if not tile.logical_rect.contains_point(x, y, GEOMETRY_EPSILON):
				continue
			if best is None or tile.tile_id < best.tile_id:
				best = tile
		if best is None:
			raise ValueError(f"Region {self.region_name} has no pattern at ({x}, {y})")
		return (best.tile_id, best.to_physical(x, y))

	def describe(self) -> str:
		if not self.is_set:
			return f"{self.region_name}: unset"
		parts = []
		for tile in self.tiles:
			rect = tile.physical_rect
			parts.append(
				f"tile {tile.tile_id} @ ({rect.x:.2f}, {rect.y:.2f}) "
				f"{rect.width:.2f} x {rect.height:.2f}"
			)
		return f"{self.region_name}: " + "; ".join(parts)


#============================================
def unset_converter(
	region_name: str,
	width: float = 0.0,
	height: float = 0.0,
	unit: str = UNIT_INCH,
) -> TiledPatternCoordinateConverter:
	"""
	Build the empty converter a mapping holds before pattern is assigned.

	Args:
		region_name: Region name.
		width: Logical width.
		height: Logical height.
		unit: Logical unit.

	Returns:
		Converter with no tiles.
	"""
	return TiledPatternCoordinateConverter(region_name, width, height, unit, ())
