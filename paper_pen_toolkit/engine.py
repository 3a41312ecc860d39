"""
Event engine: turns live pen samples into region-scoped events.

Every registered pen gets exactly one engine listener. The listener
resolves each sample against the pattern mappings and reduces the
down/sample/up stream into click, drag, enter, and exit events. Pens are
independent; events from different pens are not ordered against each
other.
"""

# Standard Library
import dataclasses
import logging
import threading
import typing

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config
import paper_pen_toolkit.events
import paper_pen_toolkit.ink
import paper_pen_toolkit.mapping
import paper_pen_toolkit.pen


EngineConfig = ppt.config.EngineConfig
PenEvent = ppt.events.PenEvent
PenSample = ppt.ink.PenSample
Pen = ppt.pen.Pen
PenListener = ppt.pen.PenListener
PatternToSheetMapping = ppt.mapping.PatternToSheetMapping
RegionLocation = ppt.mapping.RegionLocation
sample_distance = ppt.events.sample_distance

EVENT_DOWN = ppt.config.EVENT_DOWN
EVENT_UP = ppt.config.EVENT_UP
EVENT_MOVE = ppt.config.EVENT_MOVE
EVENT_CLICK = ppt.config.EVENT_CLICK
EVENT_DRAG = ppt.config.EVENT_DRAG
EVENT_ENTER = ppt.config.EVENT_ENTER
EVENT_EXIT = ppt.config.EVENT_EXIT

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PenRegistration:
	listener: PenListener
	count: int


class PenRegistry:
	"""
	Reference-counted listener bookkeeping, one entry per pen.

	A pen has an entry exactly when its count is above zero, and then it
	has exactly one attached listener. Each transition runs under one
	lock so concurrent register and unregister calls see it as atomic.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._entries: dict[Pen, PenRegistration] = {}

	def register(self, pen: Pen, listener_factory: typing.Callable[[Pen], PenListener]) -> int:
		"""
		Attach a fresh listener and bump the count, replacing any old listener.

		Args:
			pen: Pen to register.
			listener_factory: Builds the new listener for the pen.

		Returns:
			Registration count after the increment.
		"""
		with self._lock:
			count = 0
			entry = self._entries.get(pen)
			if entry is not None:
				pen.remove_listener(entry.listener)
				count = entry.count
			listener = listener_factory(pen)
			pen.add_listener(listener)
			self._entries[pen] = PenRegistration(listener, count + 1)
			return count + 1

	def unregister(self, pen: Pen, listener: PenListener | None = None) -> int:
		"""
		Drop one registration; detach and forget the pen at zero.

		Args:
			pen: Pen to unregister.
			listener: When given, only unregister if this is the attached listener.

		Returns:
			Registration count after the decrement, 0 for unknown pens,
			the unchanged count for a stale listener.
		"""
		with self._lock:
			entry = self._entries.get(pen)
			if entry is None:
				logger.warning("No registration record for %r; cannot decrement", pen)
				return 0
			if listener is not None and entry.listener is not listener:
				logger.warning(
					"Stale listener for %r; pen stays registered with count %d",
					pen,
					entry.count,
				)
				return entry.count
			if entry.count <= 1:
				del self._entries[pen]
				pen.remove_listener(entry.listener)
				return 0
			self._entries[pen] = PenRegistration(entry.listener, entry.count - 1)
			return entry.count - 1

	def count(self, pen: Pen) -> int:
		with self._lock:
			entry = self._entries.get(pen)
			return 0 if entry is None else entry.count

	def listener(self, pen: Pen) -> PenListener | None:
		with self._lock:
			entry = self._entries.get(pen)
			return None if entry is None else entry.listener

	def pens(self) -> list[Pen]:
		with self._lock:
			return list(self._entries.keys())


class StrokeReducer(PenListener):
	"""
	Per-pen listener that reduces a sample stream into events.

	State covers one stroke at a time: where the pen went down, where it
	is now, the largest distance from the down point, and whether the
	pen crossed into another region.
	"""

	def __init__(self, engine: "EventEngine", pen: Pen) -> None:
		self.engine = engine
		self.pen = pen
		self._finished = False
		self._reset()

	def _reset(self) -> None:
		self.down_sample: PenSample | None = None
		self.start_location: RegionLocation | None = None
		self.current_location: RegionLocation | None = None
		self.max_displacement = 0.0
		self.region_changed = False

	def _emit(
		self,
		event_type: str,
		sample: PenSample,
		location: RegionLocation | None,
		**extra,
	) -> None:
		event = PenEvent(
			event_type=event_type,
			pen_name=self.pen.name,
			sample=sample,
			region=None if location is None else location.region,
			logical_point=None if location is None else location.logical_point,
			tile_id=None if location is None else location.tile_id,
			**extra,
		)
		self.engine.dispatch(event)

	def _track(self, sample: PenSample) -> RegionLocation | None:
		location = self.engine.resolve((sample.x, sample.y))
		self.max_displacement = max(
			self.max_displacement,
			sample_distance(self.down_sample, sample),
		)
		old_region = None if self.current_location is None else self.current_location.region
		new_region = None if location is None else location.region
		if new_region is not old_region:
			self.region_changed = True
			if old_region is not None:
				self._emit(EVENT_EXIT, sample, self.current_location)
			if new_region is not None:
				self._emit(EVENT_ENTER, sample, location)
		self.current_location = location
		return location

	def pen_down(self, sample: PenSample) -> None:
		self._reset()
		self.down_sample = sample
		location = self.engine.resolve((sample.x, sample.y))
		self.start_location = location
		self.current_location = location
		self._emit(EVENT_DOWN, sample, location)

	def sample(self, sample: PenSample) -> None:
		if self.down_sample is None:
			# a sample without a down marker opens the stroke
			self.pen_down(sample)
			return
		location = self._track(sample)
		if self.engine.config.emit_move_events:
			self._emit(EVENT_MOVE, sample, location, start_sample=self.down_sample)

	def pen_up(self, sample: PenSample) -> None:
		if self.down_sample is None:
			logger.debug("Pen up without pen down on %s; ignored", self.pen.name)
			return
		location = self._track(sample)
		self._emit(EVENT_UP, sample, location, start_sample=self.down_sample)
		event_type = EVENT_DRAG
		if self.is_click(sample):
			event_type = EVENT_CLICK
		self._emit(
			event_type,
			sample,
			self.start_location,
			start_sample=self.down_sample,
			end_region=None if location is None else location.region,
		)
		self._reset()

	def is_click(self, up_sample: PenSample) -> bool:
		"""
		Decide whether the finished stroke is a click rather than a drag.

		Args:
			up_sample: Sample at pen up.

		Returns:
			True when the pen stayed in one region and moved little.
		"""
		config = self.engine.config
		if self.region_changed:
			return False
		if self.max_displacement > config.click_max_distance:
			return False
		if config.click_max_duration_ms is not None:
			duration = up_sample.timestamp - self.down_sample.timestamp
			if duration > config.click_max_duration_ms:
				return False
		return True

	def end_of_stream(self) -> None:
		if self._finished:
			return
		self._finished = True
		self.engine.handle_end_of_stream(self.pen, self)


class EventEngine:
	"""
	Multiplexes any number of pens onto region event handlers.
	"""

	def __init__(
		self,
		mappings: list[PatternToSheetMapping] | None = None,
		config: EngineConfig | None = None,
	) -> None:
		self.config = config if config is not None else EngineConfig()
		self.registry = PenRegistry()
		self._mappings: list[PatternToSheetMapping] = list(mappings or [])
		self._observers: list[typing.Callable[[PenEvent], None]] = []
		self._lock = threading.Lock()

	def add_mapping(self, mapping: PatternToSheetMapping) -> None:
		with self._lock:
			self._mappings.append(mapping)

	def add_event_listener(self, callback: typing.Callable[[PenEvent], None]) -> None:
		with self._lock:
			self._observers.append(callback)

	def register(self, pen: Pen) -> int:
		"""
		Register a pen, replacing its engine listener if it already has one.

		Only one engine listener is attached to a pen at any time, so a pen
		registered twice does not fire every event twice.

		Args:
			pen: Pen to register.

		Returns:
			Registration count after the call.
		"""
		count = self.registry.register(pen, self._create_listener)
		logger.debug("Registered %r, count is at %d", pen, count)
		return count

	def unregister(self, pen: Pen) -> int:
		"""
		Drop one registration of a pen.

		Args:
			pen: Pen to unregister.

		Returns:
			Registration count after the call.
		"""
		count = self.registry.unregister(pen)
		if count == 0:
			logger.debug("Count for %r is at zero; listener removed", pen)
		return count

	def handle_end_of_stream(self, pen: Pen, listener: PenListener) -> int:
		logger.info("End of stream from %r", pen)
		return self.registry.unregister(pen, listener)

	def registration_count(self, pen: Pen) -> int:
		return self.registry.count(pen)

	def listener_for(self, pen: Pen) -> PenListener | None:
		return self.registry.listener(pen)

	def registered_pens(self) -> list[Pen]:
		return self.registry.pens()

	def resolve(self, point: tuple[float, float]) -> RegionLocation | None:
		"""
		Find the region under a physical sample across all mappings.

		Args:
			point: Physical (x, y).

		Returns:
			First RegionLocation found, or None.
		"""
		with self._lock:
			mappings = list(self._mappings)
		for mapping in mappings:
			location = mapping.resolve(point)
			if location is not None:
				return location
		return None

	def dispatch(self, event: PenEvent) -> None:
		"""
		Deliver an event to its region's filters and handlers, then to observers.

		Args:
			event: Event to deliver.
		"""
		if event.region is not None:
			for content_filter in list(event.region.content_filters):
				content_filter(event)
			for handler in list(event.region.event_handlers):
				handler(event)
		with self._lock:
			observers = list(self._observers)
		for observer in observers:
			observer(event)

	def _create_listener(self, pen: Pen) -> StrokeReducer:
		return StrokeReducer(self, pen)
