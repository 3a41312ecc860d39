import pytest

import paper_pen_toolkit.config
import paper_pen_toolkit.mapping
import paper_pen_toolkit.region
import paper_pen_toolkit.tiling


PatternConfig = paper_pen_toolkit.config.PatternConfig
Region = paper_pen_toolkit.region.Region
Sheet = paper_pen_toolkit.region.Sheet
PatternToSheetMapping = paper_pen_toolkit.mapping.PatternToSheetMapping
tiling = paper_pen_toolkit.tiling


#============================================
def build_tabloid_mapping() -> tuple[PatternToSheetMapping, Region, Region]:
	"""
	Build a 17 x 11 inch sheet with an active region across the tile seam.

	Returns:
		Tuple of (mapping, straddling region, static region).
	"""
	sheet = Sheet(17.0, 11.0)
	straddle = Region("straddle", 8.0, 1.0, 1.0, 1.0)
	straddle.add_event_handler(lambda event: None)
	static = Region("static", 1.0, 5.0, 2.0, 2.0)
	sheet.add_regions([straddle, static])
	mapping = PatternToSheetMapping(sheet)
	return (mapping, straddle, static)


#============================================
def test_tile_grid_counts() -> None:
	"""
	Letter sheets fit one letter tile; tabloid sheets need two.
	"""
	config = PatternConfig()
	assert len(tiling.compute_tile_grid(Sheet(8.5, 11.0), config)) == 1
	tiles = tiling.compute_tile_grid(Sheet(17.0, 11.0), config)
	assert [tile.tile_id for tile in tiles] == [0, 1]
	assert tiles[1].sheet_rect.x == pytest.approx(612.0)
	assert tiles[1].pattern_x == pytest.approx(612.0 * tiling.pattern_units_per_point(config))


#============================================
def test_tile_grid_rejects_bad_tile_size() -> None:
	with pytest.raises(ValueError):
		tiling.compute_tile_grid(Sheet(), PatternConfig(tile_width=0.0))


#============================================
def test_straddling_region_gets_two_mappings() -> None:
	mapping, straddle, static = build_tabloid_mapping()
	assert tiling.assign_pattern(mapping) == 1
	converter = mapping.get_converter(straddle)
	assert converter.tile_ids == [0, 1]
	assert converter.tiles[0].logical_rect.as_tuple() == pytest.approx((0.0, 0.0, 0.5, 1.0))
	assert converter.tiles[1].logical_rect.as_tuple() == pytest.approx((0.5, 0.0, 0.5, 1.0))
	assert not mapping.get_converter(static).is_set


#============================================
def test_locate_then_resolve_round_trip() -> None:
	"""
	A located pattern point resolves back to the same region and spot.
	"""
	mapping, straddle, _static = build_tabloid_mapping()
	tiling.assign_pattern(mapping)
	for logical_point, expected_tile in (((0.25, 0.5), 0), ((0.75, 0.5), 1)):
		tile_id, physical = mapping.locate(straddle, logical_point)
		assert tile_id == expected_tile
		location = mapping.resolve(physical)
		assert location.region is straddle
		assert location.tile_id == expected_tile
		assert location.logical_point == pytest.approx(logical_point)


#============================================
def test_scaled_region_uses_scaled_size() -> None:
	sheet = Sheet()
	region = Region("wide", 1.0, 1.0, 1.0, 1.0)
	region.add_event_handler(lambda event: None)
	region.scale_region(2.0, 1.0)
	sheet.add_region(region)
	mapping = PatternToSheetMapping(sheet)
	tiling.assign_pattern(mapping)
	converter = mapping.get_converter(region)
	assert converter.logical_width == pytest.approx(2.0)
	tile_id, _physical = mapping.locate(region, (1.9, 0.5))
	assert tile_id == 0
