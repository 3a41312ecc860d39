"""
Pytest configuration for local imports and shared sheet fixtures.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()
import paper_pen_toolkit.region


#============================================
def build_button_sheet() -> tuple[
	paper_pen_toolkit.region.Sheet,
	paper_pen_toolkit.region.Region,
	paper_pen_toolkit.region.Region,
]:
	"""
	Build a letter sheet with one active button and one static caption.

	Returns:
		Tuple of (sheet, button, caption).
	"""
	sheet = paper_pen_toolkit.region.Sheet(8.5, 11.0)
	button = paper_pen_toolkit.region.Region("button", 1.0, 1.0, 1.0, 1.0)
	button.add_event_handler(lambda event: None)
	caption = paper_pen_toolkit.region.Region("caption", 1.0, 3.0, 4.0, 0.5)
	sheet.add_regions([button, caption])
	return (sheet, button, caption)


@pytest.fixture
def button_sheet():
	return build_button_sheet()
