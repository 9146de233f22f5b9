from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

import pandas as pd


class ObjectiveVariant(Enum):
	WEIGHTED_EARLINESS_TARDINESS = "wet"
	MAKESPAN = "makespan"
	LATENESS_WITH_TRANSFER = "lateness"

	@property
	def label(self) -> str:
		return _LABELS[self]

	@classmethod
	def parse(cls, value: "str | ObjectiveVariant") -> "ObjectiveVariant":
		if isinstance(value, ObjectiveVariant):
			return value
		key = str(value).strip().lower()
		for variant in cls:
			if key in (variant.value, variant.name.lower()):
				return variant
		raise ValueError(f"Unknown objective variant: {value!r} (expected one of {[v.value for v in cls]})")


_LABELS = {
	ObjectiveVariant.WEIGHTED_EARLINESS_TARDINESS: "Minimizing weighted earliness/tardiness",
	ObjectiveVariant.MAKESPAN: "Minimizing makespan",
	ObjectiveVariant.LATENESS_WITH_TRANSFER: "Minimizing total lateness with transfer",
}


@dataclass(frozen=True)
class Schedule:
	landing_times: Tuple[int, ...]
	runways: Tuple[int, ...]

	def __post_init__(self) -> None:
		if len(self.landing_times) != len(self.runways):
			raise ValueError("landing_times and runways must have the same length")
		object.__setattr__(self, "landing_times", tuple(int(t) for t in self.landing_times))
		object.__setattr__(self, "runways", tuple(int(r) for r in self.runways))

	@classmethod
	def from_lists(cls, landing_times: Sequence[int], runways: Sequence[int]) -> "Schedule":
		return cls(tuple(landing_times), tuple(runways))

	def __len__(self) -> int:
		return len(self.landing_times)

	def landing_time(self, i: int) -> int:
		return self.landing_times[i]

	def runway(self, i: int) -> int:
		return self.runways[i]

	def landing_order(self, runway: int) -> Tuple[int, ...]:
		"""Aircraft indices on ``runway`` in realized landing order (ties by index)."""
		on_runway = [i for i, r in enumerate(self.runways) if r == runway]
		return tuple(sorted(on_runway, key=lambda i: (self.landing_times[i], i)))

	def to_frame(self) -> pd.DataFrame:
		return pd.DataFrame(
			{
				"aircraft": list(range(len(self))),
				"runway": list(self.runways),
				"landing_time": list(self.landing_times),
			}
		)


@dataclass(frozen=True)
class Violation:
	kind: str  # time_window | separation | runway
	aircraft: int
	runway: int
	required: float
	actual: float
	other: Optional[int] = None  # the aircraft landing first, for separation violations

	@property
	def shortfall(self) -> float:
		if self.kind == "time_window" and self.actual > self.required:
			return self.actual - self.required
		return max(0.0, self.required - self.actual)

	def describe(self) -> str:
		if self.kind == "separation":
			return (
				f"aircraft {self.other} -> {self.aircraft} on runway {self.runway}: gap {self.actual:g} "
				f"< required {self.required:g} (short by {self.shortfall:g})"
			)
		if self.kind == "runway":
			return f"aircraft {self.aircraft} assigned to unknown runway {self.runway}"
		return f"aircraft {self.aircraft} lands at {self.actual:g} outside its window (bound {self.required:g})"


@dataclass(frozen=True)
class ValidationReport:
	feasible: bool
	violations: Tuple[Violation, ...]
	objective: float

	def violations_frame(self) -> pd.DataFrame:
		rows = [
			{
				"kind": v.kind,
				"first": v.other,
				"aircraft": v.aircraft,
				"runway": v.runway,
				"required": v.required,
				"actual": v.actual,
				"shortfall": v.shortfall,
			}
			for v in self.violations
		]
		return pd.DataFrame(rows, columns=["kind", "first", "aircraft", "runway", "required", "actual", "shortfall"])


@dataclass(frozen=True)
class SolveResult:
	schedule: Schedule
	objective_value: float
	solve_seconds: float
	variant: ObjectiveVariant
	strategy: str  # exact | heuristic
	status: str
	feasible: bool
	violations: Tuple[Violation, ...] = ()
	solver_objective: Optional[float] = None
	instance_name: str = ""

	def to_dict(self) -> Dict[str, Any]:
		return {
			"instance": self.instance_name,
			"variant": self.variant.value,
			"strategy": self.strategy,
			"status": self.status,
			"feasible": self.feasible,
			"objective": self.objective_value,
			"solver_objective": self.solver_objective,
			"solve_seconds": self.solve_seconds,
			"landing_times": list(self.schedule.landing_times),
			"runways": list(self.schedule.runways),
			"violations": [v.describe() for v in self.violations],
		}
