"""
Bind active regions to printed pattern tiles.

A sheet is cut into page-sized tiles in row-major order. Each tile gets
its own block of pattern space, laid out left to right. A region that
straddles a tile boundary ends up with one TileMapping per tile it
touches.
"""

# Standard Library
import dataclasses
import logging
import math

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config
import paper_pen_toolkit.coordinates
import paper_pen_toolkit.mapping
import paper_pen_toolkit.region
import paper_pen_toolkit.units


PatternConfig = ppt.config.PatternConfig
Rect = ppt.units.Rect
Region = ppt.region.Region
Sheet = ppt.region.Sheet
TileMapping = ppt.coordinates.TileMapping
TiledPatternCoordinateConverter = ppt.coordinates.TiledPatternCoordinateConverter
PatternToSheetMapping = ppt.mapping.PatternToSheetMapping
convert = ppt.units.convert

UNIT_INCH = ppt.config.UNIT_INCH
UNIT_POINT = ppt.config.UNIT_POINT
POINTS_PER_INCH = ppt.config.POINTS_PER_INCH

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PatternTile:
	tile_id: int
	sheet_rect: Rect
	pattern_x: float
	pattern_y: float


#============================================
def pattern_units_per_point(config: PatternConfig) -> float:
	"""
	Pattern units covered by one point of paper.

	Args:
		config: Pattern configuration.

	Returns:
		Scale factor.
	"""
	return config.dots_per_inch / POINTS_PER_INCH


#============================================
def compute_tile_grid(sheet: Sheet, config: PatternConfig) -> list[PatternTile]:
	"""
	Cut a sheet into pattern tiles.

	Args:
		sheet: Sheet to cover.
		config: Pattern configuration.

	Returns:
		Tiles in row-major order, sheet rects in points.
	"""
	if config.tile_width <= 0.0 or config.tile_height <= 0.0:
		raise ValueError("Tile size must be positive")
	sheet_width, sheet_height = sheet.get_size_in(UNIT_POINT)
	columns = max(1, math.ceil(sheet_width / config.tile_width - 1e-9))
	rows = max(1, math.ceil(sheet_height / config.tile_height - 1e-9))
	scale = pattern_units_per_point(config)
	stride = config.tile_width * scale + config.tile_gap

	tiles: list[PatternTile] = []
	for row in range(rows):
		for col in range(columns):
			index = row * columns + col
			tile_x = col * config.tile_width
			tile_y = row * config.tile_height
			tiles.append(
				PatternTile(
					tile_id=config.first_tile_id + index,
					sheet_rect=Rect(
						tile_x,
						tile_y,
						min(config.tile_width, sheet_width - tile_x),
						min(config.tile_height, sheet_height - tile_y),
					),
					pattern_x=index * stride,
					pattern_y=0.0,
				)
			)
	return tiles


#============================================
def build_region_converter(
	region: Region,
	tiles: list[PatternTile],
	config: PatternConfig,
) -> TiledPatternCoordinateConverter:
	"""
	Build the converter for one region over a tile grid.

	Args:
		region: Region to bind.
		tiles: Tile grid from compute_tile_grid.
		config: Pattern configuration.

	Returns:
		Converter with one TileMapping per overlapped tile.
	"""
	bounds = region.get_bounds()
	bounds_points = region.get_bounds_in(UNIT_POINT)
	per_point = pattern_units_per_point(config)
	# pattern units per logical (region) unit
	scale = convert(1.0, region.unit, UNIT_POINT) * per_point

	mappings: list[TileMapping] = []
	for tile in tiles:
		overlap = tile.sheet_rect.intersection(bounds_points)
		if overlap is None:
			continue
		logical_rect = Rect(
			convert(overlap.x - bounds_points.x, UNIT_POINT, region.unit),
			convert(overlap.y - bounds_points.y, UNIT_POINT, region.unit),
			convert(overlap.width, UNIT_POINT, region.unit),
			convert(overlap.height, UNIT_POINT, region.unit),
		)
		mappings.append(
			TileMapping(
				tile_id=tile.tile_id,
				origin_x=tile.pattern_x + (overlap.x - tile.sheet_rect.x) * per_point,
				origin_y=tile.pattern_y + (overlap.y - tile.sheet_rect.y) * per_point,
				logical_rect=logical_rect,
				scale_x=scale,
				scale_y=scale,
			)
		)
	return TiledPatternCoordinateConverter(
		region_name=region.name,
		logical_width=bounds.width,
		logical_height=bounds.height,
		unit=region.unit,
		tiles=tuple(mappings),
	)


#============================================
def assign_pattern(mapping: PatternToSheetMapping, config: PatternConfig | None = None) -> int:
	"""
	Give every active region of a mapping's sheet its pattern coordinates.

	Static regions are skipped since no pattern is printed over them.

	Args:
		mapping: Mapping to populate.
		config: Pattern configuration, defaults to letter-sized tiles.

	Returns:
		Number of regions assigned.
	"""
	if config is None:
		config = PatternConfig()
	tiles = compute_tile_grid(mapping.sheet, config)
	assigned = 0
	for region in mapping.regions():
		if not region.active:
			continue
		converter = build_region_converter(region, tiles, config)
		if not converter.is_set:
			logger.warning("Region %s lies outside the sheet; no pattern assigned", region.name)
			continue
		if mapping.set_converter(region, converter):
			assigned += 1
	logger.info("Assigned pattern to %d regions over %d tiles", assigned, len(tiles))
	return assigned
