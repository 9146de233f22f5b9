from __future__ import annotations

import time
from typing import Dict, Iterable, Optional

from alpops.config import Config
from alpops.errors import SolverUnavailable
from alpops.model.instance import Instance
from alpops.model.solution import ObjectiveVariant, Schedule, SolveResult
from alpops.optimization.exact import ExactOptimizationAdapter, ExactStatus
from alpops.optimization.formulation import FormulationBuilder
from alpops.optimization.heuristic import HeuristicConstructor
from alpops.utils.logging import get_logger
from alpops.validation.validator import validate


logger = get_logger(__name__)

HEURISTIC_STATUS = "Heuristic"


class LandingPipeline:
	"""Chooses a strategy, runs it, validates the schedule and packages a SolveResult.

	Every call to :meth:`solve` is independent: the model is rebuilt from scratch
	and nothing is kept between calls, so one pipeline can serve concurrent solves.
	"""

	def __init__(self, config: Optional[Config] = None) -> None:
		self.config = config or Config()
		self.builder = FormulationBuilder(big_m=self.config.big_m)
		self.exact = ExactOptimizationAdapter(
			time_limit_seconds=self.config.time_limit_seconds,
			relative_gap=self.config.relative_gap,
			threads=self.config.solver_threads,
			msg=self.config.solver_msg,
		)
		self.heuristic = HeuristicConstructor()

	def use_exact(self, instance: Instance) -> bool:
		if instance.num_aircraft == 0 or self.config.force_heuristic:
			return False
		return instance.size <= self.config.exact_size_threshold

	def solve(self, instance: Instance, variant: "ObjectiveVariant | str") -> SolveResult:
		variant = ObjectiveVariant.parse(variant)
		instance.check(need_transfer_times=variant is ObjectiveVariant.LATENESS_WITH_TRANSFER)
		logger.info(
			"Solving %s (%d aircraft, %d runways) for %s",
			instance.name, instance.num_aircraft, instance.num_runways, variant.value,
		)

		schedule: Optional[Schedule] = None
		strategy = "heuristic"
		status = HEURISTIC_STATUS
		solver_objective: Optional[float] = None
		elapsed = 0.0

		if not self.use_exact(instance):
			logger.info(
				"Using heuristic for %s (size %d, threshold %d, forced=%s)",
				instance.name, instance.size, self.config.exact_size_threshold, self.config.force_heuristic,
			)
		else:
			formulation = self.builder.build(instance, variant)
			start = time.perf_counter()
			try:
				outcome = self.exact.solve(formulation)
			except SolverUnavailable as exc:
				logger.warning("Exact solver unavailable (%s), falling back to heuristic", exc)
			else:
				elapsed = time.perf_counter() - start
				if outcome.status.has_assignment:
					schedule = outcome.schedule
					strategy = "exact"
					status = outcome.solver_status
					solver_objective = outcome.objective_value
					if outcome.status is ExactStatus.TIMED_OUT_WITH_INCUMBENT:
						logger.info("Time limit reached, keeping incumbent for %s", instance.name)
				else:
					logger.warning(
						"Exact solve of %s ended %s (%s), falling back to heuristic",
						instance.name, outcome.status.value, outcome.message or outcome.solver_status,
					)

		if schedule is None:
			start = time.perf_counter()
			built = self.heuristic.build(instance, variant)
			elapsed = time.perf_counter() - start
			schedule = built.schedule

		report = validate(instance, schedule, variant)
		if not report.feasible:
			logger.warning("Schedule for %s violates %d constraint(s)", instance.name, len(report.violations))
		if solver_objective is not None and abs(solver_objective - report.objective) > self.config.objective_tolerance * max(1.0, abs(report.objective)):
			logger.warning(
				"Solver objective %.4f differs from recomputed %.4f after rounding", solver_objective, report.objective,
			)
		logger.info(
			"%s | %s | strategy=%s | status=%s | objective=%.2f | feasible=%s | %.3fs",
			instance.name, variant.value, strategy, status, report.objective, report.feasible, elapsed,
		)
		return SolveResult(
			schedule=schedule,
			objective_value=report.objective,
			solve_seconds=elapsed,
			variant=variant,
			strategy=strategy,
			status=status,
			feasible=report.feasible,
			violations=report.violations,
			solver_objective=solver_objective,
			instance_name=instance.name,
		)

	def solve_all_variants(self, instance: Instance, variants: Optional[Iterable[ObjectiveVariant]] = None) -> Dict[ObjectiveVariant, SolveResult]:
		chosen = list(variants) if variants is not None else list(ObjectiveVariant)
		return {ObjectiveVariant.parse(v): self.solve(instance, v) for v in chosen}
