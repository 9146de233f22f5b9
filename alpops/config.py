from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
	# Exact solver budget
	time_limit_seconds: int = 60
	relative_gap: float = 0.05
	solver_threads: Optional[int] = None
	solver_msg: bool = False

	# Big-M for the separation and lateness linearizations (derived per instance when None)
	big_m: Optional[int] = None

	# Strategy selection: instances with aircraft * runways^2 above this go straight to the heuristic
	exact_size_threshold: int = 1000
	force_heuristic: bool = False

	# Seed for the runway transfer time generator
	transfer_seed: int = 42

	# Tolerance when comparing objective values
	objective_tolerance: float = 1e-6
