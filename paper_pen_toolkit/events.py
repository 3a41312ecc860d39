"""
Pen events delivered to region handlers.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config
import paper_pen_toolkit.ink
import paper_pen_toolkit.region


PenSample = ppt.ink.PenSample
Region = ppt.region.Region

EVENT_DOWN = ppt.config.EVENT_DOWN
EVENT_UP = ppt.config.EVENT_UP
EVENT_MOVE = ppt.config.EVENT_MOVE
EVENT_CLICK = ppt.config.EVENT_CLICK
EVENT_DRAG = ppt.config.EVENT_DRAG
EVENT_ENTER = ppt.config.EVENT_ENTER
EVENT_EXIT = ppt.config.EVENT_EXIT
EVENT_TYPES = ppt.config.EVENT_TYPES


@dataclasses.dataclass(frozen=True)
class PenEvent:
	"""
	One interaction event produced from a pen's sample stream.

	region is the region the event is scoped to: for click and drag it is
	the region where the pen went down, and end_region is where it came
	up. region is None for samples that fall outside every region.
	"""
	event_type: str
	pen_name: str
	sample: PenSample
	region: Region | None = None
	logical_point: tuple[float, float] | None = None
	tile_id: int | None = None
	start_sample: PenSample | None = None
	end_region: Region | None = None

	def __post_init__(self) -> None:
		if self.event_type not in EVENT_TYPES:
			raise ValueError(f"Unknown event type: {self.event_type}")

	@property
	def region_name(self) -> str | None:
		if self.region is None:
			return None
		return self.region.name

	@property
	def displacement(self) -> float:
		if self.start_sample is None:
			return 0.0
		return sample_distance(self.start_sample, self.sample)

	@property
	def duration(self) -> float:
		if self.start_sample is None:
			return 0.0
		return self.sample.timestamp - self.start_sample.timestamp


#============================================
def sample_distance(first: PenSample, second: PenSample) -> float:
	"""
	Euclidean distance between two samples in pattern units.
	"""
	return math.hypot(second.x - first.x, second.y - first.y)
