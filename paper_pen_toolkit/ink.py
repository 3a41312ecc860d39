"""
Pen samples, strokes, and named ink collections.
"""

# Standard Library
import dataclasses
import json
import math
import pathlib

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config
import paper_pen_toolkit.units


Rect = ppt.units.Rect

RENDER_SPLINE = ppt.config.RENDER_SPLINE
RENDER_POLYLINE = ppt.config.RENDER_POLYLINE
DEFAULT_LARGE_STROKE_DISTANCE = ppt.config.DEFAULT_LARGE_STROKE_DISTANCE


@dataclasses.dataclass(frozen=True)
class PenSample:
	x: float
	y: float
	timestamp: float
	force: int = 0
	pen_up: bool = False


@dataclasses.dataclass(eq=False)
class InkStroke:
	"""
	One continuous pen-down to pen-up run of samples.

	Equality is object identity, so two strokes with identical samples
	are still different strokes.
	"""
	samples: list[PenSample]

	def __post_init__(self) -> None:
		if not self.samples:
			raise ValueError("A stroke needs at least one sample")

	@property
	def bounds(self) -> Rect:
		x_values = self.x_samples
		y_values = self.y_samples
		return Rect.from_corners(min(x_values), min(y_values), max(x_values), max(y_values))

	@property
	def width(self) -> float:
		return self.bounds.width

	@property
	def height(self) -> float:
		return self.bounds.height

	@property
	def area(self) -> float:
		return self.bounds.area

	@property
	def duration(self) -> float:
		return self.samples[-1].timestamp - self.samples[0].timestamp

	@property
	def first_timestamp(self) -> float:
		return self.samples[0].timestamp

	@property
	def x_samples(self) -> list[float]:
		return [sample.x for sample in self.samples]

	@property
	def y_samples(self) -> list[float]:
		return [sample.y for sample in self.samples]

	def __len__(self) -> int:
		return len(self.samples)

	def max_distance_between_samples(self) -> float:
		"""
		Largest gap between two consecutive samples.

		Returns:
			Distance in sample units, 0.0 for single-sample strokes.
		"""
		max_distance = 0.0
		for previous, current in zip(self.samples, self.samples[1:]):
			distance = math.hypot(current.x - previous.x, current.y - previous.y)
			max_distance = max(max_distance, distance)
		return max_distance


class Ink:
	"""
	A named, mutable collection of strokes.
	"""

	def __init__(self, strokes: list[InkStroke] | None = None, name: str = "") -> None:
		self.name = name
		self._strokes: list[InkStroke] = list(strokes or [])

	def add_stroke(self, stroke: InkStroke) -> None:
		self._strokes.append(stroke)

	def get_strokes(self) -> list[InkStroke]:
		return list(self._strokes)

	@property
	def bounds(self) -> Rect | None:
		bounds = None
		for stroke in self._strokes:
			bounds = stroke.bounds if bounds is None else bounds.union(stroke.bounds)
		return bounds

	def __len__(self) -> int:
		return len(self._strokes)

	def __iter__(self):
		return iter(self._strokes)

	def __repr__(self) -> str:
		return f"Ink(name={self.name!r}, strokes={len(self._strokes)})"


#============================================
def choose_rendering_technique(
	stroke: InkStroke,
	large_stroke_distance: float = DEFAULT_LARGE_STROKE_DISTANCE,
) -> str:
	"""
	Pick spline or polyline rendering for a stroke.

	Sparse strokes (large gaps between samples) look better as a spline
	through the samples; dense strokes are drawn as a polyline.

	Args:
		stroke: Stroke to inspect.
		large_stroke_distance: Gap above which the stroke counts as sparse.

	Returns:
		RENDER_SPLINE or RENDER_POLYLINE.
	"""
	if stroke.max_distance_between_samples() > large_stroke_distance:
		return RENDER_SPLINE
	return RENDER_POLYLINE


#============================================
def load_ink_json(path: pathlib.Path) -> list[Ink]:
	"""
	Load batched ink from a JSON file.

	The file holds {"inks": [{"name": ..., "strokes": [[[x, y, t], ...], ...]}]}.

	Args:
		path: JSON path.

	Returns:
		List of Ink entries.
	"""
	text = pathlib.Path(path).read_text(encoding="utf-8")
	data = json.loads(text)
	inks: list[Ink] = []
	for ink_data in data.get("inks", []):
		ink = Ink(name=ink_data.get("name", ""))
		for stroke_data in ink_data.get("strokes", []):
			samples = [
				PenSample(x=float(item[0]), y=float(item[1]), timestamp=float(item[2]))
				for item in stroke_data
			]
			if samples:
				ink.add_stroke(InkStroke(samples))
		inks.append(ink)
	return inks


#============================================
def save_ink_json(inks: list[Ink], path: pathlib.Path) -> None:
	"""
	Write ink to a JSON file readable by load_ink_json.

	Args:
		inks: Ink entries to write.
		path: Output path.
	"""
	data = {
		"inks": [
			{
				"name": ink.name,
				"strokes": [
					[[sample.x, sample.y, sample.timestamp] for sample in stroke.samples]
					for stroke in ink.get_strokes()
				],
			}
			for ink in inks
		],
	}
	with pathlib.Path(path).open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
