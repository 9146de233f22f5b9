import logging
import os
import sys


PACKAGE = "alpops"
LOG_LEVEL_ENV = "ALPOPS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _level(value: str) -> int:
	return getattr(logging, str(value).upper(), logging.INFO)


def _package_logger() -> logging.Logger:
	"""The ``alpops`` logger owns the only handler; module loggers propagate to it."""
	root = logging.getLogger(PACKAGE)
	if not root.handlers:
		handler = logging.StreamHandler(stream=sys.stdout)
		handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
		root.addHandler(handler)
		root.setLevel(_level(os.environ.get(LOG_LEVEL_ENV, "INFO")))
		root.propagate = False
	return root


def get_logger(name: str) -> logging.Logger:
	_package_logger()
	if name != PACKAGE and not name.startswith(PACKAGE + "."):
		name = f"{PACKAGE}.{name}"
	return logging.getLogger(name)


def set_level(level: str) -> None:
	_package_logger().setLevel(_level(level))
