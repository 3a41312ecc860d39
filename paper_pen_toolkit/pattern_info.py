"""
Pattern info persistence: region keys and their converters as XML.
"""

# Standard Library
import pathlib
import xml.etree.ElementTree as StdElementTree

# PIP3 modules
import defusedxml
import defusedxml.ElementTree as ElementTree

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config
import paper_pen_toolkit.coordinates
import paper_pen_toolkit.region
import paper_pen_toolkit.units


Rect = ppt.units.Rect
RegionID = ppt.region.RegionID
TileMapping = ppt.coordinates.TileMapping
TiledPatternCoordinateConverter = ppt.coordinates.TiledPatternCoordinateConverter

PATTERN_INFO_SUFFIX = ppt.config.PATTERN_INFO_SUFFIX
PATTERN_INFO_VERSION = "1"


class PatternInfoError(Exception):
	"""
	Raised when pattern info cannot be read or written.
	"""


#============================================
def format_float(value: float) -> str:
	"""
	Format a float so it parses back to the same value.

	Args:
		value: Float value.

	Returns:
		String representation.
	"""
	return repr(float(value))


#============================================
def parse_float_attribute(element: StdElementTree.Element, name: str) -> float:
	"""
	Read a required float attribute.

	Args:
		element: XML element.
		name: Attribute name.

	Returns:
		Parsed float.
	"""
	value = element.attrib.get(name)
	if value is None:
		raise PatternInfoError(f"<{element.tag}> is missing attribute {name}")
	try:
		return float(value)
	except ValueError as error:
		raise PatternInfoError(f"<{element.tag}> has bad {name}: {value!r}") from error


#============================================
def build_converter_element(
	parent: StdElementTree.Element,
	converter: TiledPatternCoordinateConverter,
) -> StdElementTree.Element:
	"""
	Append a converter element to a parent element.

	Args:
		parent: Parent XML element.
		converter: Converter to serialize.

	Returns:
		The new converter element.
	"""
	element = StdElementTree.SubElement(
		parent,
		"converter",
		{
			"regionName": converter.region_name,
			"logicalWidth": format_float(converter.logical_width),
			"logicalHeight": format_float(converter.logical_height),
			"unit": converter.unit,
		},
	)
	for tile in converter.tiles:
		rect = tile.logical_rect
		StdElementTree.SubElement(
			element,
			"tile",
			{
				"id": str(tile.tile_id),
				"originX": format_float(tile.origin_x),
				"originY": format_float(tile.origin_y),
				"scaleX": format_float(tile.scale_x),
				"scaleY": format_float(tile.scale_y),
				"x": format_float(rect.x),
				"y": format_float(rect.y),
				"width": format_float(rect.width),
				"height": format_float(rect.height),
			},
		)
	return element


#============================================
def parse_converter_element(element: StdElementTree.Element) -> TiledPatternCoordinateConverter:
	"""
	Parse a converter element.

	Args:
		element: <converter> element.

	Returns:
		TiledPatternCoordinateConverter.
	"""
	tiles: list[TileMapping] = []
	for tile_element in element.findall("tile"):
		tile_id_text = tile_element.attrib.get("id", "")
		if not tile_id_text.lstrip("-").isdigit():
			raise PatternInfoError(f"<tile> has bad id: {tile_id_text!r}")
		logical_rect = Rect(
			parse_float_attribute(tile_element, "x"),
			parse_float_attribute(tile_element, "y"),
			parse_float_attribute(tile_element, "width"),
			parse_float_attribute(tile_element, "height"),
		)
		try:
			tile = TileMapping(
				tile_id=int(tile_id_text),
				origin_x=parse_float_attribute(tile_element, "originX"),
				origin_y=parse_float_attribute(tile_element, "originY"),
				logical_rect=logical_rect,
				scale_x=parse_float_attribute(tile_element, "scaleX"),
				scale_y=parse_float_attribute(tile_element, "scaleY"),
			)
		except ValueError as error:
			raise PatternInfoError(str(error)) from error
		tiles.append(tile)
	return TiledPatternCoordinateConverter(
		region_name=element.attrib.get("regionName", ""),
		logical_width=parse_float_attribute(element, "logicalWidth"),
		logical_height=parse_float_attribute(element, "logicalHeight"),
		unit=element.attrib.get("unit", ppt.config.UNIT_INCH),
		tiles=tuple(tiles),
	)


#============================================
def write_pattern_info(
	entries: dict[RegionID, TiledPatternCoordinateConverter],
	path: pathlib.Path,
) -> None:
	"""
	Write region keys and converters to an XML file.

	Args:
		entries: Converters keyed by region identity.
		path: Output path.

	Raises:
		PatternInfoError: The file could not be written.
	"""
	root = StdElementTree.Element("patternInfo", {"version": PATTERN_INFO_VERSION})
	for region_id, converter in entries.items():
		region_element = StdElementTree.SubElement(
			root,
			"region",
			{
				"name": region_id.name,
				"originX": format_float(region_id.origin_x),
				"originY": format_float(region_id.origin_y),
				"width": format_float(region_id.width),
				"height": format_float(region_id.height),
			},
		)
		build_converter_element(region_element, converter)
	tree = StdElementTree.ElementTree(root)
	StdElementTree.indent(tree)
	try:
		tree.write(str(path), encoding="utf-8", xml_declaration=True)
	except OSError as error:
		raise PatternInfoError(f"Cannot write pattern info {path}: {error}") from error


#============================================
def read_pattern_info(path: pathlib.Path) -> dict[RegionID, TiledPatternCoordinateConverter]:
	"""
	Read region keys and converters from an XML file.

	The whole file is parsed before anything is returned, so a caller
	merging the result never sees a partial read.

	Args:
		path: Pattern info XML path.

	Returns:
		Converters keyed by region identity.

	Raises:
		PatternInfoError: The file is missing, unreadable, or malformed.
	"""
	try:
		tree = ElementTree.parse(str(path))
	except OSError as error:
		raise PatternInfoError(f"Cannot read pattern info {path}: {error}") from error
	except (StdElementTree.ParseError, defusedxml.DefusedXmlException) as error:
		raise PatternInfoError(f"Malformed pattern info {path}: {error}") from error

	root = tree.getroot()
	if root.tag != "patternInfo":
		raise PatternInfoError(f"{path} is not a pattern info file (root <{root.tag}>)")

	entries: dict[RegionID, TiledPatternCoordinateConverter] = {}
	for region_element in root.findall("region"):
		region_id = RegionID.from_values(
			region_element.attrib.get("name", ""),
			parse_float_attribute(region_element, "originX"),
			parse_float_attribute(region_element, "originY"),
			parse_float_attribute(region_element, "width"),
			parse_float_attribute(region_element, "height"),
		)
		converter_element = region_element.find("converter")
		if converter_element is None:
			raise PatternInfoError(f"Region {region_id.name} in {path} has no converter")
		entries[region_id] = parse_converter_element(converter_element)
	return entries


#============================================
def find_pattern_info_files(paths: list[pathlib.Path]) -> list[pathlib.Path]:
	"""
	List visible pattern info files in configuration directories.

	Missing directories are skipped.

	Args:
		paths: Configuration directories.

	Returns:
		Sorted pattern info file paths, directory by directory.
	"""
	found: list[pathlib.Path] = []
	for entry in paths:
		path = pathlib.Path(entry).expanduser()
		if not path.is_dir():
			continue
		files = [
			item for item in path.iterdir()
			if item.is_file()
			and not item.name.startswith(".")
			and item.name.endswith(PATTERN_INFO_SUFFIX)
		]
		found.extend(sorted(files, key=lambda item: item.name))
	return found
