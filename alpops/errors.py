class AlpOpsError(Exception):
	"""Base class for errors raised by alpops."""


class ModelBuildError(AlpOpsError):
	"""The instance cannot be turned into a model: empty window, bad matrix, no runways."""


class SolverUnavailable(AlpOpsError):
	"""The MILP backend cannot be run in this environment."""


class InstanceFormatError(AlpOpsError, ValueError):
	"""Malformed instance text."""
