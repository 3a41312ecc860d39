import pytest

import paper_pen_toolkit.config
import paper_pen_toolkit.region


Region = paper_pen_toolkit.region.Region
RegionID = paper_pen_toolkit.region.RegionID
Sheet = paper_pen_toolkit.region.Sheet


#============================================
def test_scaling_is_lazy_and_multiplicative() -> None:
	"""
	Scale factors multiply and only affect bounds read back.
	"""
	region = Region("box", 1.0, 2.0, 3.0, 4.0)
	region.scale_region(2.0, 0.5)
	region.scale_region_uniformly(2.0)
	assert (region.scale_x, region.scale_y) == (4.0, 1.0)
	assert region.get_unscaled_bounds().as_tuple() == (1.0, 2.0, 3.0, 4.0)
	assert region.get_bounds().as_tuple() == (1.0, 2.0, 12.0, 4.0)
	assert region.get_origin().value_in("point") == pytest.approx((72.0, 144.0))
	region.reset_scale()
	assert region.get_bounds().as_tuple() == (1.0, 2.0, 3.0, 4.0)


#============================================
def test_region_becomes_active_on_attachment() -> None:
	"""
	Handlers and filters make a region active for good.
	"""
	region = Region("box", 0.0, 0.0, 1.0, 1.0)
	assert not region.active
	region.add_content_filter(lambda event: None)
	assert region.active

	other = Region("other", 0.0, 0.0, 1.0, 1.0)
	other.add_event_handler(lambda event: None)
	other.event_handlers.clear()
	assert other.active


#============================================
def test_region_id_is_structural() -> None:
	"""
	Same name and geometry give equal keys regardless of unit.
	"""
	in_inches = Region("field", 1.0, 2.0, 3.0, 0.5, "inch")
	in_points = Region("field", 72.0, 144.0, 216.0, 36.0, "point")
	assert in_inches != in_points
	assert RegionID.from_region(in_inches) == RegionID.from_region(in_points)
	assert hash(RegionID.from_region(in_inches)) == hash(RegionID.from_region(in_points))

	renamed = Region("other", 1.0, 2.0, 3.0, 0.5)
	assert RegionID.from_region(renamed) != RegionID.from_region(in_inches)

	scaled = Region("field", 1.0, 2.0, 3.0, 0.5)
	scaled.scale_region_uniformly(2.0)
	assert RegionID.from_region(scaled) != RegionID.from_region(in_inches)


#============================================
def test_sheet_owns_its_regions() -> None:
	"""
	A region can belong to only one sheet at a time.
	"""
	first = Sheet()
	second = Sheet()
	region = Region("box", 0.0, 0.0, 1.0, 1.0)
	first.add_region(region)
	first.add_region(region)
	assert len(first) == 1
	with pytest.raises(ValueError):
		second.add_region(region)

	assert first.remove_region(region)
	assert not first.contains_region(region)
	assert not first.remove_region(region)
	second.add_region(region)
	assert second.contains_region(region)


#============================================
def test_sheet_configuration_paths(tmp_path) -> None:
	"""
	Configuration paths are kept once each, in order.
	"""
	sheet = Sheet(8.5, 11.0)
	sheet.register_configuration_path(tmp_path)
	sheet.register_configuration_path(str(tmp_path))
	assert sheet.configuration_paths == [tmp_path]
	assert sheet.get_size_in("point") == pytest.approx((612.0, 792.0))


#============================================
def test_region_id_rounds_instead_of_epsilon_compare() -> None:
	"""
	Keys agree on one side of a rounding boundary and split across it.
	"""
	base = RegionID.from_values("edge", 0.00004, 0.0, 1.0, 1.0)
	assert RegionID.from_values("edge", 0.0000400001, 0.0, 1.0, 1.0) == base
	below = RegionID.from_values("edge", 0.00004999, 0.0, 1.0, 1.0)
	above = RegionID.from_values("edge", 0.00005001, 0.0, 1.0, 1.0)
	assert abs(0.00005001 - 0.00004999) < paper_pen_toolkit.config.UNITS_EPSILON
	assert below.origin_x == 0.0
	assert above.origin_x == pytest.approx(0.0001)
	assert below != above
