from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from alpops.config import Config
from alpops.model.instance import Instance
from alpops.model.solution import ObjectiveVariant, SolveResult
from alpops.orchestrator.pipeline import LandingPipeline
from alpops.utils.logging import get_logger


logger = get_logger(__name__)

COLUMNS = ["instance", "aircraft", "runways", "variant", "strategy", "status", "feasible", "objective", "violations", "solve_seconds"]


def _row(instance: Instance, result: SolveResult) -> dict:
	return {
		"instance": instance.name,
		"aircraft": instance.num_aircraft,
		"runways": instance.num_runways,
		"variant": result.variant.value,
		"strategy": result.strategy,
		"status": result.status,
		"feasible": result.feasible,
		"objective": result.objective_value,
		"violations": len(result.violations),
		"solve_seconds": result.solve_seconds,
	}


def run_benchmark(
	instances: Iterable[Instance],
	runway_counts: Iterable[int] = (1, 2, 3),
	variants: Optional[Iterable[ObjectiveVariant]] = None,
	config: Optional[Config] = None,
	max_workers: Optional[int] = None,
) -> pd.DataFrame:
	"""Solve every instance x runway count x variant and tabulate the results.

	Combinations share no state, so with ``max_workers > 1`` they are solved on a
	thread pool (CBC runs as a separate process). Row order follows the input order.
	"""
	pipeline = LandingPipeline(config)
	chosen = [ObjectiveVariant.parse(v) for v in variants] if variants is not None else list(ObjectiveVariant)
	tasks: List[Tuple[Instance, ObjectiveVariant]] = [
		(inst.with_runways(m), v) for inst in instances for m in runway_counts for v in chosen
	]
	logger.info("Running %d benchmark solves", len(tasks))

	def _solve(task: Tuple[Instance, ObjectiveVariant]) -> dict:
		inst, variant = task
		return _row(inst, pipeline.solve(inst, variant))

	if max_workers is None or max_workers <= 1 or len(tasks) <= 1:
		rows = [_solve(t) for t in tasks]
	else:
		with ThreadPoolExecutor(max_workers=max_workers) as executor:
			rows = list(executor.map(_solve, tasks))
	return pd.DataFrame(rows, columns=COLUMNS)
