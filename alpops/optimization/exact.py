from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import pulp

from alpops.errors import SolverUnavailable
from alpops.model.solution import Schedule
from alpops.optimization.formulation import Formulation
from alpops.utils.logging import get_logger


logger = get_logger(__name__)


class ExactStatus(Enum):
	OPTIMAL_OR_BOUNDED = "optimal_or_bounded"
	TIMED_OUT_WITH_INCUMBENT = "timed_out_with_incumbent"
	INFEASIBLE = "infeasible"
	SOLVER_ERROR = "solver_error"

	@property
	def has_assignment(self) -> bool:
		return self in (ExactStatus.OPTIMAL_OR_BOUNDED, ExactStatus.TIMED_OUT_WITH_INCUMBENT)


@dataclass
class ExactOutcome:
	status: ExactStatus
	solver_status: str  # pulp's own status text
	schedule: Optional[Schedule] = None
	objective_value: Optional[float] = None
	message: str = ""


class ExactOptimizationAdapter:
	"""Runs a built formulation through CBC (via pulp) and reads the answer back.

	All branch-and-bound work happens inside CBC; this class only sets the
	budget, maps pulp's status codes and decodes the variable values.
	"""

	def __init__(self, time_limit_seconds: int = 60, relative_gap: float = 0.05, threads: Optional[int] = None, msg: bool = False) -> None:
		self.time_limit_seconds = time_limit_seconds
		self.relative_gap = relative_gap
		self.threads = threads
		self.msg = msg

	def _solver(self) -> pulp.LpSolver:
		solver = pulp.PULP_CBC_CMD(
			msg=self.msg,
			timeLimit=self.time_limit_seconds,
			gapRel=self.relative_gap,
			threads=self.threads,
		)
		if not solver.available():
			raise SolverUnavailable("CBC solver is not available to pulp")
		return solver

	def solve(self, formulation: Formulation) -> ExactOutcome:
		solver = self._solver()
		prob = formulation.problem
		try:
			prob.solve(solver)
		except pulp.PulpSolverError as exc:
			logger.warning("CBC failed on %s: %s", prob.name, exc)
			return ExactOutcome(ExactStatus.SOLVER_ERROR, "Error", message=str(exc))

		status_str = pulp.LpStatus.get(prob.status, "Undefined")
		sol_status = prob.sol_status
		if prob.status == pulp.LpStatusInfeasible or sol_status == pulp.LpSolutionInfeasible:
			return ExactOutcome(ExactStatus.INFEASIBLE, status_str, message="model is infeasible")
		if sol_status == pulp.LpSolutionOptimal:
			status = ExactStatus.OPTIMAL_OR_BOUNDED
		elif sol_status == pulp.LpSolutionIntegerFeasible:
			status = ExactStatus.TIMED_OUT_WITH_INCUMBENT
		else:
			return ExactOutcome(ExactStatus.SOLVER_ERROR, status_str, message=f"no usable solution (solution status {sol_status})")

		schedule = self.extract_schedule(formulation)
		if schedule is None:
			return ExactOutcome(ExactStatus.SOLVER_ERROR, status_str, message="solver returned no variable values")
		return ExactOutcome(status, status_str, schedule=schedule, objective_value=pulp.value(prob.objective))

	@staticmethod
	def extract_schedule(formulation: Formulation) -> Optional[Schedule]:
		"""Round landing times and read each runway off its z indicator."""
		landing: List[int] = []
		runways: List[int] = []
		m = formulation.num_runways
		for i in range(formulation.num_aircraft):
			value = formulation.landing[i].varValue
			if value is None:
				return None
			landing.append(int(round(value)))
			indicators = [formulation.runway[(i, r)].varValue or 0.0 for r in range(m)]
			chosen = next((r for r, v in enumerate(indicators) if round(v) == 1), None)
			if chosen is None:
				chosen = max(range(m), key=lambda r: indicators[r])
			runways.append(chosen)
		return Schedule.from_lists(landing, runways)
