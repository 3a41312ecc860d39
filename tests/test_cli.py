import json
import logging

import conftest
import paper_pen_toolkit.cli
import paper_pen_toolkit.logging_config
import paper_pen_toolkit.mapping
import paper_pen_toolkit.tiling


#============================================
def write_ink_file(path) -> None:
	data = {
		"inks": [
			{
				"name": "page_1",
				"strokes": [
					[[0, 0, 0], [10, 10, 20]],
					[[8, 0, 30], [18, 10, 50]],
					[[200, 200, 60], [400, 210, 90]],
				],
			},
		],
	}
	path.write_text(json.dumps(data), encoding="utf-8")


#============================================
def test_cluster_command(tmp_path, capsys) -> None:
	ink_path = tmp_path / "ink.json"
	write_ink_file(ink_path)
	assert paper_pen_toolkit.cli.main(["cluster", str(ink_path), "--margin", "0"]) == 0
	output = capsys.readouterr().out
	assert "Strokes loaded: 3" in output
	assert "Clusters: 2" in output
	assert "cluster_2: 1 strokes, 1 spline" in output


#============================================
def test_largest_command(tmp_path, capsys) -> None:
	ink_path = tmp_path / "ink.json"
	write_ink_file(ink_path)
	assert paper_pen_toolkit.cli.main(["largest", str(ink_path)]) == 0
	output = capsys.readouterr().out
	assert "area=2000.00" in output

	empty_path = tmp_path / "empty.json"
	empty_path.write_text('{"inks": []}', encoding="utf-8")
	assert paper_pen_toolkit.cli.main(["largest", str(empty_path)]) == 0
	assert "No strokes found." in capsys.readouterr().out


#============================================
def test_inspect_command(tmp_path, capsys) -> None:
	sheet, _button, _caption = conftest.build_button_sheet()
	mapping = paper_pen_toolkit.mapping.PatternToSheetMapping(sheet)
	paper_pen_toolkit.tiling.assign_pattern(mapping)
	path = tmp_path / "buttons.patternInfo.xml"
	mapping.save(path)

	assert paper_pen_toolkit.cli.main(["inspect", str(path)]) == 0
	output = capsys.readouterr().out
	assert "button @ (72, 72) 72 x 72 pt" in output
	assert "Regions: 1" in output


#============================================
def test_errors_return_nonzero(tmp_path, capsys) -> None:
	assert paper_pen_toolkit.cli.main(["inspect", str(tmp_path / "missing.xml")]) == 1
	assert "Error:" in capsys.readouterr().out
	assert paper_pen_toolkit.cli.main(["largest", str(tmp_path / "missing.json")]) == 1


#============================================
def test_setup_logging_writes_log_file(tmp_path) -> None:
	log_path = tmp_path / "run.log"
	logger = paper_pen_toolkit.logging_config.setup_logging(logging.DEBUG, str(log_path))
	paper_pen_toolkit.logging_config.setup_logging(logging.DEBUG, str(log_path))
	assert len(logger.handlers) == 2
	logging.getLogger("paper_pen_toolkit.mapping").warning("seam check")
	for handler in logger.handlers:
		handler.flush()
	assert "seam check" in log_path.read_text(encoding="utf-8")
	for handler in list(logger.handlers):
		handler.close()
		logger.removeHandler(handler)
