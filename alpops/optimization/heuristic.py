from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from alpops.model.instance import Instance
from alpops.model.solution import ObjectiveVariant, Schedule
from alpops.validation.validator import combine, objective_term


@dataclass
class HeuristicResult:
	schedule: Schedule
	objective_value: float
	order: Tuple[int, ...]  # aircraft indices in the order they were placed


class HeuristicConstructor:
	"""Greedy runway-balancing constructor.

	Aircraft are taken by target time (ties by id). Each one goes to the runway
	that frees up first and lands at its target time, or later if the runway is
	still busy or earlier traffic on it needs more separation. Landing times are
	clamped to the latest time, which can leave a violation in place; the
	validator is expected to report it.
	"""

	def build(self, instance: Instance, variant: ObjectiveVariant) -> HeuristicResult:
		variant = ObjectiveVariant.parse(variant)
		n = instance.num_aircraft
		m = instance.num_runways
		planes = instance.aircraft

		order = sorted(range(n), key=lambda i: (planes[i].target, planes[i].id, i))
		next_available = [0] * m
		landing = [0] * n
		runway = [0] * n
		placed: List[List[int]] = [[] for _ in range(m)]  # per runway, in placement order
		objective = 0.0

		for idx in order:
			a = planes[idx]
			best = min(range(m), key=lambda r: (next_available[r], r))
			t = max(a.earliest, a.target, next_available[best])
			# t only grows, so an ascending sweep reaches every aircraft that ends up ahead
			for other in sorted(placed[best], key=lambda o: (landing[o], o)):
				if landing[other] <= t:
					t = max(t, landing[other] + instance.separation_time(other, idx))
			t = min(t, a.latest)

			landing[idx] = t
			runway[idx] = best
			placed[best].append(idx)
			next_available[best] = t
			objective = combine(objective, objective_term(a, t, best, variant), variant)

		return HeuristicResult(schedule=Schedule.from_lists(landing, runway), objective_value=objective, order=tuple(order))
