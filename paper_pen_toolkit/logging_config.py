"""
Logging setup for the paper_pen_toolkit package logger.
"""

# Standard Library
import logging
import sys


PACKAGE_LOGGER = "paper_pen_toolkit"


#============================================
def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
	"""
	Configure the package logger.

	Existing handlers are cleared first so repeated calls do not
	duplicate output.

	Args:
		level: Logging level (e.g. logging.DEBUG).
		log_file: Optional path to also write logs to.

	Returns:
		The package logger.
	"""
	logger = logging.getLogger(PACKAGE_LOGGER)
	logger.setLevel(level)
	if logger.hasHandlers():
		logger.handlers.clear()

	formatter = logging.Formatter(
		"%(asctime)s - %(name)s - %(levelname)s - %(message)s",
		datefmt="%H:%M:%S",
	)
	console_handler = logging.StreamHandler(sys.stderr)
	console_handler.setLevel(level)
	console_handler.setFormatter(formatter)
	logger.addHandler(console_handler)

	if log_file:
		file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
		file_handler.setLevel(level)
		file_handler.setFormatter(formatter)
		logger.addHandler(file_handler)

	logger.debug("Logging initialized.")
	return logger
