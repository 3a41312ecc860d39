"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes
import reportlab.lib.units


UNIT_POINT = "point"
UNIT_INCH = "inch"
UNIT_CENTIMETER = "centimeter"
UNIT_MILLIMETER = "millimeter"
UNIT_PICA = "pica"
UNIT_FOOT = "foot"

# Size of one unit expressed in points.
POINTS_PER_UNIT = {
	UNIT_POINT: 1.0,
	UNIT_INCH: reportlab.lib.units.inch,
	UNIT_CENTIMETER: reportlab.lib.units.cm,
	UNIT_MILLIMETER: reportlab.lib.units.mm,
	UNIT_PICA: reportlab.lib.units.pica,
	UNIT_FOOT: reportlab.lib.units.inch * 12.0,
}
POINTS_PER_INCH = reportlab.lib.units.inch

UNITS_EPSILON = 1e-6
# RegionID keys round point lengths to this many decimals. Lengths within
# UNITS_EPSILON of each other can still land on different keys when they
# straddle a rounding boundary.
REGION_ID_DECIMALS = 4
GEOMETRY_EPSILON = 1e-6

# Anoto-style pattern: one dot every 0.3 mm.
DEFAULT_DOTS_PER_INCH = 25.4 / 0.3
DEFAULT_TILE_WIDTH, DEFAULT_TILE_HEIGHT = reportlab.lib.pagesizes.letter
DEFAULT_TILE_GAP = 0.0
DEFAULT_FIRST_TILE_ID = 0

DEFAULT_CLICK_MAX_DISTANCE = 10.0
DEFAULT_CLICK_MAX_DURATION_MS = None
DEFAULT_CLUSTER_MARGIN = 0.5
DEFAULT_NEAR_POINT_RANGE = 20.0
DEFAULT_LARGE_STROKE_DISTANCE = 75.0

PATTERN_INFO_SUFFIX = ".patternInfo.xml"

EVENT_DOWN = "down"
EVENT_UP = "up"
EVENT_MOVE = "move"
EVENT_CLICK = "click"
EVENT_DRAG = "drag"
EVENT_ENTER = "enter"
EVENT_EXIT = "exit"
EVENT_TYPES = (
	EVENT_DOWN,
	EVENT_UP,
	EVENT_MOVE,
	EVENT_CLICK,
	EVENT_DRAG,
	EVENT_ENTER,
	EVENT_EXIT,
)

RENDER_SPLINE = "spline"
RENDER_POLYLINE = "polyline"


@dataclasses.dataclass
class EngineConfig:
	click_max_distance: float = DEFAULT_CLICK_MAX_DISTANCE
	click_max_duration_ms: float | None = DEFAULT_CLICK_MAX_DURATION_MS
	emit_move_events: bool = False


@dataclasses.dataclass
class PatternConfig:
	tile_width: float = DEFAULT_TILE_WIDTH
	tile_height: float = DEFAULT_TILE_HEIGHT
	dots_per_inch: float = DEFAULT_DOTS_PER_INCH
	tile_gap: float = DEFAULT_TILE_GAP
	first_tile_id: int = DEFAULT_FIRST_TILE_ID


@dataclasses.dataclass
class InkConfig:
	cluster_margin: float = DEFAULT_CLUSTER_MARGIN
	near_point_range: float = DEFAULT_NEAR_POINT_RANGE
	large_stroke_distance: float = DEFAULT_LARGE_STROKE_DISTANCE
