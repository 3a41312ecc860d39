"""
Pattern-to-sheet mapping: one coordinate converter per region of a sheet.

The mapping works both ways. Given a location on the sheet it finds the
pattern coordinate, and given a pattern coordinate it finds the region
and the location inside it.
"""

# Standard Library
import dataclasses
import logging
import pathlib
import threading

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.coordinates
import paper_pen_toolkit.pattern_info
import paper_pen_toolkit.region


Region = ppt.region.Region
RegionID = ppt.region.RegionID
Sheet = ppt.region.Sheet
TiledPatternCoordinateConverter = ppt.coordinates.TiledPatternCoordinateConverter
PatternInfoError = ppt.pattern_info.PatternInfoError
unset_converter = ppt.coordinates.unset_converter

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RegionLocation:
	region: Region
	tile_id: int
	logical_point: tuple[float, float]


#============================================
def build_unset_converter(region: Region) -> TiledPatternCoordinateConverter:
	"""
	Build the empty converter for a region, sized to its current bounds.

	Args:
		region: Region to size against.

	Returns:
		Converter with no tiles.
	"""
	bounds = region.get_bounds()
	return unset_converter(region.name, bounds.width, bounds.height, region.unit)


class PatternToSheetMapping:
	"""
	Binds each region of one sheet to its pattern coordinates.

	Build this after all regions have been added to the sheet. Regions
	added later can be picked up with sync_with_sheet or set_converter.
	Every read and write goes through one lock, so readers never see a
	half-applied load.
	"""

	def __init__(self, sheet: Sheet, autoload: bool = True) -> None:
		self.sheet = sheet
		self._lock = threading.RLock()
		self._converters: dict[Region, TiledPatternCoordinateConverter] = {}
		for region in sheet.get_regions():
			self._converters[region] = build_unset_converter(region)
		if autoload:
			self.load_configuration_paths()

	def load_configuration_paths(self) -> int:
		"""
		Merge every pattern info file found under the sheet's configuration paths.

		Unreadable files are logged and skipped; a missing configuration is
		not an error.

		Returns:
			Number of files merged.
		"""
		files = ppt.pattern_info.find_pattern_info_files(self.sheet.configuration_paths)
		loaded = 0
		for path in files:
			try:
				self.load(path)
			except PatternInfoError as error:
				logger.warning("Skipping pattern info %s: %s", path, error)
				continue
			loaded += 1
		return loaded

	def get_converter(self, region: Region) -> TiledPatternCoordinateConverter | None:
		with self._lock:
			return self._converters.get(region)

	def set_converter(self, region: Region, converter: TiledPatternCoordinateConverter) -> bool:
		"""
		Bind a converter to a region.

		Succeeds for regions that already have an entry or that belong to
		the sheet (added after this mapping was built).

		Args:
			region: Region to update.
			converter: New converter.

		Returns:
			True when stored, False when the region is unknown.
		"""
		with self._lock:
			if region in self._converters or self.sheet.contains_region(region):
				self._converters[region] = converter
				return True
		logger.warning(
			"Region %s is unknown; add it to the sheet before updating this mapping",
			region.name,
		)
		return False

	def regions(self) -> list[Region]:
		with self._lock:
			return list(self._converters.keys())

	def sync_with_sheet(self) -> tuple[int, int]:
		"""
		Add unset entries for new sheet regions and drop entries for removed ones.

		Returns:
			Tuple of (added, pruned) counts.
		"""
		with self._lock:
			current = self.sheet.get_regions()
			added = 0
			for region in current:
				if region not in self._converters:
					self._converters[region] = build_unset_converter(region)
					added += 1
			stale = [
				region for region in self._converters
				if not self.sheet.contains_region(region)
			]
			for region in stale:
				del self._converters[region]
		if added or stale:
			logger.debug("Mapping sync: %d added, %d pruned", added, len(stale))
		return (added, len(stale))

	def resolve(self, point: tuple[float, float]) -> RegionLocation | None:
		"""
		Find the region under a physical pattern sample.

		Regions are checked in sheet order; the first whose converter
		covers the point wins.

		Args:
			point: Physical (x, y).

		Returns:
			RegionLocation, or None when no region covers the point.
		"""
		with self._lock:
			items = list(self._converters.items())
		for region, converter in self._ordered(items):
			if not converter.is_set:
				continue
			tile_id = converter.find_tile(point[0], point[1])
			if tile_id is None:
				continue
			logical = converter.map_physical_to_logical(tile_id, point)
			if logical is None:
				continue
			return RegionLocation(region, tile_id, logical)
		return None

	def locate(
		self,
		region: Region,
		logical_point: tuple[float, float],
	) -> tuple[int, tuple[float, float]] | None:
		"""
		Map a point inside a region to its pattern tile and coordinate.

		Args:
			region: Region holding the point.
			logical_point: Local (x, y).

		Returns:
			Tuple of (tile_id, physical point), or None for unknown or unset regions.

		Raises:
			ValueError: The point is outside the region.
		"""
		converter = self.get_converter(region)
		if converter is None or not converter.is_set:
			return None
		return converter.map_logical_to_physical(logical_point)

	def save(self, path: pathlib.Path) -> int:
		"""
		Save active regions' converters keyed by region identity.

		Static regions get no pattern, so they are never saved.

		Args:
			path: Output XML path.

		Returns:
			Number of regions written.
		"""
		with self._lock:
			entries = {
				RegionID.from_region(region): converter
				for region, converter in self._converters.items()
				if region.active
			}
		ppt.pattern_info.write_pattern_info(entries, path)
		logger.info("Saved pattern info for %d regions to %s", len(entries), path)
		return len(entries)

	def load(self, path: pathlib.Path) -> int:
		"""
		Merge converters from a pattern info file.

		Each region in the map whose identity key appears in the file gets
		the stored converter; other regions keep what they had. On a read
		error nothing is changed.

		Args:
			path: Pattern info XML path.

		Returns:
			Number of regions updated.

		Raises:
			PatternInfoError: The file could not be read.
		"""
		loaded = ppt.pattern_info.read_pattern_info(path)
		updated = 0
		with self._lock:
			for region in list(self._converters.keys()):
				key = RegionID.from_region(region)
				if key in loaded:
					self._converters[region] = loaded[key]
					updated += 1
		logger.info("Loaded pattern info for %d regions from %s", updated, path)
		return updated

	def describe(self) -> list[str]:
		with self._lock:
			items = list(self._converters.items())
		return [
			f"{region.name} --> {converter.describe()}"
			for region, converter in self._ordered(items)
		]

	def _ordered(
		self,
		items: list[tuple[Region, TiledPatternCoordinateConverter]],
	) -> list[tuple[Region, TiledPatternCoordinateConverter]]:
		order = {id(region): index for index, region in enumerate(self.sheet.get_regions())}
		return sorted(items, key=lambda item: order.get(id(item[0]), len(order)))

	def __len__(self) -> int:
		with self._lock:
			return len(self._converters)

	def __contains__(self, region: Region) -> bool:
		with self._lock:
			return region in self._converters
