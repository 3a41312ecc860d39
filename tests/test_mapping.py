import pytest

import conftest
import paper_pen_toolkit.mapping
import paper_pen_toolkit.pattern_info
import paper_pen_toolkit.region
import paper_pen_toolkit.tiling


PatternToSheetMapping = paper_pen_toolkit.mapping.PatternToSheetMapping
PatternInfoError = paper_pen_toolkit.pattern_info.PatternInfoError
Region = paper_pen_toolkit.region.Region


#============================================
def test_new_mapping_starts_unset(button_sheet) -> None:
	sheet, button, caption = button_sheet
	mapping = PatternToSheetMapping(sheet)
	assert len(mapping) == 2
	assert mapping.regions() == [button, caption]
	assert not mapping.get_converter(button).is_set
	assert mapping.get_converter(button).logical_width == pytest.approx(1.0)
	assert mapping.locate(button, (0.5, 0.5)) is None
	assert mapping.resolve((0.0, 0.0)) is None


#============================================
def test_set_converter_needs_sheet_membership(button_sheet) -> None:
	"""
	Foreign regions are refused; regions added to the sheet later are accepted.
	"""
	sheet, button, _caption = button_sheet
	mapping = PatternToSheetMapping(sheet)
	stranger = Region("stranger", 5.0, 5.0, 1.0, 1.0)
	converter = paper_pen_toolkit.mapping.build_unset_converter(stranger)

	assert not mapping.set_converter(stranger, converter)
	assert stranger not in mapping
	assert len(mapping) == 2

	sheet.add_region(stranger)
	assert mapping.set_converter(stranger, converter)
	assert mapping.get_converter(stranger) == converter
	assert mapping.get_converter(Region("ghost", 0.0, 0.0, 1.0, 1.0)) is None


#============================================
def test_save_then_load_restores_active_regions(tmp_path) -> None:
	"""
	Only active regions are saved, and a fresh sheet picks them up by identity.
	"""
	sheet, button, _caption = conftest.build_button_sheet()
	mapping = PatternToSheetMapping(sheet)
	paper_pen_toolkit.tiling.assign_pattern(mapping)
	path = tmp_path / "buttons.patternInfo.xml"
	assert mapping.save(path) == 1

	fresh_sheet, fresh_button, fresh_caption = conftest.build_button_sheet()
	fresh = PatternToSheetMapping(fresh_sheet, autoload=False)
	assert fresh.load(path) == 1
	assert fresh.get_converter(fresh_button) == mapping.get_converter(button)
	assert not fresh.get_converter(fresh_caption).is_set

	tile_id, physical = mapping.locate(button, (0.5, 0.5))
	location = fresh.resolve(physical)
	assert location.region is fresh_button
	assert location.tile_id == tile_id
	assert location.logical_point == pytest.approx((0.5, 0.5))


#============================================
def test_autoload_from_configuration_path(tmp_path) -> None:
	sheet, button, _caption = conftest.build_button_sheet()
	mapping = PatternToSheetMapping(sheet)
	paper_pen_toolkit.tiling.assign_pattern(mapping)
	mapping.save(tmp_path / "buttons.patternInfo.xml")
	(tmp_path / "broken.patternInfo.xml").write_text("<patternInfo", encoding="utf-8")
	(tmp_path / "notes.xml").write_text("<notes/>", encoding="utf-8")

	loaded_sheet, loaded_button, _loaded_caption = conftest.build_button_sheet()
	loaded_sheet.register_configuration_path(tmp_path)
	loaded = PatternToSheetMapping(loaded_sheet)
	assert loaded.get_converter(loaded_button) == mapping.get_converter(button)
	assert loaded.load_configuration_paths() == 1


#============================================
def test_load_skips_regions_with_other_geometry(tmp_path) -> None:
	sheet, _button, _caption = conftest.build_button_sheet()
	mapping = PatternToSheetMapping(sheet)
	paper_pen_toolkit.tiling.assign_pattern(mapping)
	path = tmp_path / "buttons.patternInfo.xml"
	mapping.save(path)

	other_sheet, other_button, _other_caption = conftest.build_button_sheet()
	other_button.scale_region_uniformly(2.0)
	other = PatternToSheetMapping(other_sheet, autoload=False)
	assert other.load(path) == 0
	assert not other.get_converter(other_button).is_set


#============================================
def test_failed_load_leaves_mapping_unchanged(tmp_path) -> None:
	"""
	A malformed or missing file raises and keeps every entry as it was.
	"""
	sheet, button, caption = conftest.build_button_sheet()
	mapping = PatternToSheetMapping(sheet)
	paper_pen_toolkit.tiling.assign_pattern(mapping)
	before = {region: mapping.get_converter(region) for region in (button, caption)}

	path = tmp_path / "bad.patternInfo.xml"
	path.write_text("<patternInfo><region name='button'>", encoding="utf-8")
	with pytest.raises(PatternInfoError):
		mapping.load(path)
	with pytest.raises(PatternInfoError):
		mapping.load(tmp_path / "missing.patternInfo.xml")
	assert {region: mapping.get_converter(region) for region in (button, caption)} == before


#============================================
def test_sync_with_sheet(button_sheet) -> None:
	sheet, _button, caption = button_sheet
	mapping = PatternToSheetMapping(sheet)
	late = Region("late", 4.0, 4.0, 1.0, 1.0)
	sheet.add_region(late)
	sheet.remove_region(caption)
	assert mapping.sync_with_sheet() == (1, 1)
	assert late in mapping
	assert caption not in mapping
	assert mapping.sync_with_sheet() == (0, 0)
	assert len(mapping.describe()) == 2
