"""
CLI entry points for offline ink and pattern info inspection.
"""

# Standard Library
import argparse
import logging
import pathlib
import time

# local repo modules
import paper_pen_toolkit as ppt
import paper_pen_toolkit.config
import paper_pen_toolkit.ink
import paper_pen_toolkit.ink_utils
import paper_pen_toolkit.logging_config
import paper_pen_toolkit.pattern_info
import paper_pen_toolkit.units


InkConfig = ppt.config.InkConfig

DEFAULT_CLUSTER_MARGIN = ppt.config.DEFAULT_CLUSTER_MARGIN
DEFAULT_LARGE_STROKE_DISTANCE = ppt.config.DEFAULT_LARGE_STROKE_DISTANCE


#============================================
def build_ink_config(args: argparse.Namespace) -> InkConfig:
	"""
	Build ink config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		InkConfig.
	"""
	return InkConfig(
		cluster_margin=getattr(args, "margin", DEFAULT_CLUSTER_MARGIN),
		large_stroke_distance=getattr(args, "large_stroke_distance", DEFAULT_LARGE_STROKE_DISTANCE),
	)


#============================================
def format_bounds(bounds: ppt.units.Rect | None) -> str:
	"""
	Format a rectangle for display.

	Args:
		bounds: Rect or None.

	Returns:
		Display string.
	"""
	if bounds is None:
		return "(empty)"
	return f"x={bounds.x:.2f} y={bounds.y:.2f} w={bounds.width:.2f} h={bounds.height:.2f}"


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Inspect batched pen ink and pattern info files.")
	parser.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Debug logging.")
	parser.add_argument("--log-file", dest="log_file", default=None, help="Also write logs to this file.")
	subparsers = parser.add_subparsers(dest="command", required=True)

	cluster_parser = subparsers.add_parser("cluster", help="Cluster strokes by bounding box overlap.")
	cluster_parser.add_argument("ink_path", help="Ink JSON file.")
	cluster_parser.add_argument(
		"-m", "--margin", dest="margin", type=float, default=DEFAULT_CLUSTER_MARGIN,
		help="Fraction of stroke size added before comparing boxes.",
	)
	cluster_parser.add_argument(
		"-l", "--large-stroke-distance", dest="large_stroke_distance", type=float,
		default=DEFAULT_LARGE_STROKE_DISTANCE,
		help="Sample gap above which a stroke renders as a spline.",
	)

	largest_parser = subparsers.add_parser("largest", help="Report the stroke with the largest area.")
	largest_parser.add_argument("ink_path", help="Ink JSON file.")

	inspect_parser = subparsers.add_parser("inspect", help="List regions in a pattern info file.")
	inspect_parser.add_argument("pattern_info_path", help="Pattern info XML file.")

	parser.set_defaults(verbose=False)
	args = parser.parse_args(argv)
	return args


#============================================
def run_cluster(args: argparse.Namespace) -> int:
	"""
	Cluster all strokes of an ink file and print the clusters.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Number of clusters.
	"""
	config = build_ink_config(args)
	inks = ppt.ink.load_ink_json(pathlib.Path(args.ink_path))
	strokes = [stroke for ink in inks for stroke in ink.get_strokes()]
	print(f"Strokes loaded: {len(strokes)}")
	print(f"Cluster margin: {config.cluster_margin}")
	start_time = time.perf_counter()
	clusters = ppt.ink_utils.cluster_strokes(strokes, config.cluster_margin)
	elapsed = time.perf_counter() - start_time
	for cluster in clusters:
		techniques = [
			ppt.ink.choose_rendering_technique(stroke, config.large_stroke_distance)
			for stroke in cluster.get_strokes()
		]
		splines = techniques.count(ppt.config.RENDER_SPLINE)
		print(
			f"{cluster.name}: {len(cluster)} strokes, {splines} spline, "
			f"{format_bounds(cluster.bounds)}"
		)
	print(f"Clusters: {len(clusters)}")
	print(f"Timing: cluster={elapsed:.3f}s")
	return len(clusters)


#============================================
def run_largest(args: argparse.Namespace) -> int:
	"""
	Print the stroke with the largest bounding-box area.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Number of strokes reported (0 or 1).
	"""
	inks = ppt.ink.load_ink_json(pathlib.Path(args.ink_path))
	stroke = ppt.ink_utils.find_stroke_with_largest_area(inks)
	if stroke is None:
		print("No strokes found.")
		return 0
	print(
		f"Largest stroke: {len(stroke)} samples, area={stroke.area:.2f}, "
		f"duration={stroke.duration:.0f}, {format_bounds(stroke.bounds)}"
	)
	return 1


#============================================
def run_inspect(args: argparse.Namespace) -> int:
	"""
	Print each region key and its tiles from a pattern info file.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Number of regions listed.
	"""
	entries = ppt.pattern_info.read_pattern_info(pathlib.Path(args.pattern_info_path))
	for region_id, converter in entries.items():
		print(
			f"{region_id.name} @ ({region_id.origin_x:g}, {region_id.origin_y:g}) "
			f"{region_id.width:g} x {region_id.height:g} pt"
		)
		print(f"  {converter.describe()}")
	print(f"Regions: {len(entries)}")
	return len(entries)


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.

	Args:
		argv: Optional argument list.

	Returns:
		Process exit code.
	"""
	args = parse_args(argv)
	level = logging.DEBUG if args.verbose else logging.WARNING
	ppt.logging_config.setup_logging(level, args.log_file)
	commands = {
		"cluster": run_cluster,
		"largest": run_largest,
		"inspect": run_inspect,
	}
	try:
		commands[args.command](args)
	except (ppt.pattern_info.PatternInfoError, OSError, ValueError) as error:
		print(f"Error: {error}")
		return 1
	return 0
