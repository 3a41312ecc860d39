"""
Sheets and the regions laid out on them.
"""

# Standard Library
import dataclasses
import logging
import pathlib
import typing

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config
import paper_pen_toolkit.units


Rect = ppt.units.Rect
Units = ppt.units.Units
convert = ppt.units.convert

UNIT_INCH = ppt.config.UNIT_INCH
UNIT_POINT = ppt.config.UNIT_POINT
REGION_ID_DECIMALS = ppt.config.REGION_ID_DECIMALS

logger = logging.getLogger(__name__)


@dataclasses.dataclass(eq=False)
class Region:
	"""
	A named rectangle on a sheet, interpreted in a reference unit.

	The stored rectangle is never scaled; scale factors are applied
	when bounds are read, so repeated scaling does not accumulate error
	in the shape itself. Equality and hashing are object identity.
	"""
	name: str
	x: float
	y: float
	width: float
	height: float
	unit: str = UNIT_INCH
	scale_x: float = 1.0
	scale_y: float = 1.0
	active: bool = False
	visible: bool = True
	event_handlers: list[typing.Callable] = dataclasses.field(default_factory=list)
	content_filters: list[typing.Callable] = dataclasses.field(default_factory=list)
	sheet: "Sheet | None" = dataclasses.field(default=None, init=False, repr=False)

	def __post_init__(self) -> None:
		if self.unit not in ppt.config.POINTS_PER_UNIT:
			raise ValueError(f"Unknown unit: {self.unit}")
		if self.width < 0.0 or self.height < 0.0:
			raise ValueError(f"Region {self.name} has negative size")

	def add_event_handler(self, handler: typing.Callable) -> None:
		self.event_handlers.append(handler)
		self.active = True

	def add_content_filter(self, content_filter: typing.Callable) -> None:
		self.content_filters.append(content_filter)
		self.active = True

	def scale_region(self, scale_x: float, scale_y: float) -> None:
		self.scale_x *= scale_x
		self.scale_y *= scale_y

	def scale_region_uniformly(self, scale: float) -> None:
		self.scale_region(scale, scale)

	def set_scale(self, scale_x: float, scale_y: float) -> None:
		self.scale_x = scale_x
		self.scale_y = scale_y

	def reset_scale(self) -> None:
		self.set_scale(1.0, 1.0)

	def get_unscaled_bounds(self) -> Rect:
		return Rect(self.x, self.y, self.width, self.height)

	def get_bounds(self) -> Rect:
		"""
		Bounds with the current scale applied to the size, origin unchanged.
		"""
		return Rect(self.x, self.y, self.width * self.scale_x, self.height * self.scale_y)

	def get_bounds_in(self, unit: str) -> Rect:
		bounds = self.get_bounds()
		return Rect(
			convert(bounds.x, self.unit, unit),
			convert(bounds.y, self.unit, unit),
			convert(bounds.width, self.unit, unit),
			convert(bounds.height, self.unit, unit),
		)

	def get_origin_x(self) -> Units:
		return Units(self.x, self.unit)

	def get_origin_y(self) -> Units:
		return Units(self.y, self.unit)

	def get_origin(self) -> ppt.units.Coordinates:
		return ppt.units.Coordinates(self.get_origin_x(), self.get_origin_y())

	def get_width(self) -> Units:
		return Units(self.width * self.scale_x, self.unit)

	def get_height(self) -> Units:
		return Units(self.height * self.scale_y, self.unit)

	def status_string(self) -> str:
		return "ACTIVE" if self.active else "STATIC"

	def __str__(self) -> str:
		bounds = self.get_bounds()
		return (
			f"{self.name}: ({bounds.x:g}, {bounds.y:g}, {bounds.width:g}, {bounds.height:g})"
			f" in {self.unit} [{self.status_string()}]"
		)


@dataclasses.dataclass(frozen=True)
class RegionID:
	"""
	Value key that identifies a region across save and load cycles.

	Lengths are stored in points rounded to REGION_ID_DECIMALS, so two
	regions with the same name and geometry produce equal keys no matter
	which unit they were authored in. Rounding is not epsilon equality:
	lengths a hair apart on either side of a rounding boundary give
	different keys.
	"""
	name: str
	origin_x: float
	origin_y: float
	width: float
	height: float

	@classmethod
	def from_region(cls, region: Region) -> "RegionID":
		return cls.from_values(
			region.name,
			region.get_origin_x().value_in(UNIT_POINT),
			region.get_origin_y().value_in(UNIT_POINT),
			region.get_width().value_in(UNIT_POINT),
			region.get_height().value_in(UNIT_POINT),
		)

	@classmethod
	def from_values(
		cls,
		name: str,
		origin_x: float,
		origin_y: float,
		width: float,
		height: float,
	) -> "RegionID":
		"""
		Build a key from point values, normalizing the rounding.

		Args:
			name: Region name.
			origin_x: Origin X in points.
			origin_y: Origin Y in points.
			width: Scaled width in points.
			height: Scaled height in points.

		Returns:
			RegionID.
		"""
		values = [
			round(value, REGION_ID_DECIMALS) + 0.0
			for value in (origin_x, origin_y, width, height)
		]
		return cls(name, values[0], values[1], values[2], values[3])


class Sheet:
	"""
	An ordered collection of regions plus configuration search paths.
	"""

	def __init__(self, width: float = 8.5, height: float = 11.0, unit: str = UNIT_INCH) -> None:
		self.width = Units(width, unit)
		self.height = Units(height, unit)
		self._regions: list[Region] = []
		self._configuration_paths: list[pathlib.Path] = []

	def add_region(self, region: Region) -> None:
		if region.sheet is not None and region.sheet is not self:
			raise ValueError(f"Region {region.name} already belongs to another sheet")
		if self.contains_region(region):
			return
		region.sheet = self
		self._regions.append(region)

	def add_regions(self, regions: list[Region]) -> None:
		for region in regions:
			self.add_region(region)

	def remove_region(self, region: Region) -> bool:
		for index, item in enumerate(self._regions):
			if item is region:
				del self._regions[index]
				region.sheet = None
				return True
		logger.warning("Region %s is not on this sheet", region.name)
		return False

	def contains_region(self, region: Region) -> bool:
		return any(item is region for item in self._regions)

	def get_regions(self) -> list[Region]:
		return list(self._regions)

	def register_configuration_path(self, path: str | pathlib.Path) -> None:
		path = pathlib.Path(path)
		if path not in self._configuration_paths:
			self._configuration_paths.append(path)

	@property
	def configuration_paths(self) -> list[pathlib.Path]:
		return list(self._configuration_paths)

	def get_size_in(self, unit: str) -> tuple[float, float]:
		return (self.width.value_in(unit), self.height.value_in(unit))

	def __len__(self) -> int:
		return len(self._regions)
