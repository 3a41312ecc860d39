"""
In-process pen source and the listener interface it notifies.
"""

# Standard Library
import logging
import threading

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.ink


PenSample = ppt.ink.PenSample
InkStroke = ppt.ink.InkStroke

logger = logging.getLogger(__name__)


class PenListener:
	"""
	Receives a pen's notifications in timestamp order.
	"""

	def pen_down(self, sample: PenSample) -> None:
		pass

	def sample(self, sample: PenSample) -> None:
		pass

	def pen_up(self, sample: PenSample) -> None:
		pass

	def end_of_stream(self) -> None:
		pass


class Pen:
	"""
	A pen source that replays strokes to its listeners.

	Listeners are notified outside the listener lock, so a listener may
	detach itself (or be detached) while handling a notification.
	"""

	def __init__(self, name: str = "Pen") -> None:
		self.name = name
		self._listeners: list[PenListener] = []
		self._lock = threading.Lock()
		self.closed = False

	def add_listener(self, listener: PenListener) -> None:
		with self._lock:
			self._listeners.append(listener)

	def remove_listener(self, listener: PenListener) -> bool:
		with self._lock:
			for index, item in enumerate(self._listeners):
				if item is listener:
					del self._listeners[index]
					return True
		logger.debug("Listener not attached to %s", self.name)
		return False

	def listeners(self) -> list[PenListener]:
		with self._lock:
			return list(self._listeners)

	def play_stroke(self, samples: list[PenSample]) -> None:
		"""
		Send one stroke: down on the first sample, the rest as samples, up on the last.

		Args:
			samples: Stroke samples in timestamp order.
		"""
		if not samples:
			return
		for listener in self.listeners():
			listener.pen_down(samples[0])
		for item in samples[1:]:
			for listener in self.listeners():
				listener.sample(item)
		for listener in self.listeners():
			listener.pen_up(samples[-1])

	def play(self, strokes: list[InkStroke | list[PenSample]]) -> int:
		"""
		Replay strokes in order.

		Args:
			strokes: InkStroke entries or plain sample lists.

		Returns:
			Number of strokes played.
		"""
		count = 0
		for stroke in strokes:
			samples = stroke.samples if isinstance(stroke, InkStroke) else list(stroke)
			self.play_stroke(samples)
			count += 1
		return count

	def close(self) -> None:
		"""
		Signal end of stream to every listener, once.
		"""
		with self._lock:
			if self.closed:
				return
			self.closed = True
		for listener in self.listeners():
			listener.end_of_stream()

	def __repr__(self) -> str:
		return f"Pen({self.name!r})"
