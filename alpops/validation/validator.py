from __future__ import annotations

from typing import List

from alpops.model.instance import Aircraft, Instance
from alpops.model.solution import ObjectiveVariant, Schedule, ValidationReport, Violation


def earliness_tardiness_cost(aircraft: Aircraft, landing: int) -> float:
	if landing < aircraft.target:
		return aircraft.early_penalty * (aircraft.target - landing)
	if landing > aircraft.target:
		return aircraft.late_penalty * (landing - aircraft.target)
	return 0.0


def parking_lateness(aircraft: Aircraft, landing: int, runway: int) -> float:
	# the target landing time doubles as the target parking arrival
	return float(max(0, landing + aircraft.transfer_time(runway) - aircraft.target))


def objective_term(aircraft: Aircraft, landing: int, runway: int, variant: ObjectiveVariant) -> float:
	"""Contribution of one aircraft. Makespan terms are combined with max, the others with sum."""
	if variant is ObjectiveVariant.WEIGHTED_EARLINESS_TARDINESS:
		return earliness_tardiness_cost(aircraft, landing)
	if variant is ObjectiveVariant.MAKESPAN:
		return float(landing)
	return parking_lateness(aircraft, landing, runway)


def combine(total: float, term: float, variant: ObjectiveVariant) -> float:
	if variant is ObjectiveVariant.MAKESPAN:
		return max(total, term)
	return total + term


def evaluate_objective(instance: Instance, schedule: Schedule, variant: ObjectiveVariant) -> float:
	total = 0.0
	for i, a in enumerate(instance.aircraft):
		total = combine(total, objective_term(a, schedule.landing_time(i), schedule.runway(i), variant), variant)
	return total


def find_violations(instance: Instance, schedule: Schedule) -> List[Violation]:
	violations: List[Violation] = []
	for i, a in enumerate(instance.aircraft):
		t = schedule.landing_time(i)
		r = schedule.runway(i)
		if t < a.earliest:
			violations.append(Violation("time_window", i, r, required=a.earliest, actual=t))
		elif t > a.latest:
			violations.append(Violation("time_window", i, r, required=a.latest, actual=t))
		if not 0 <= r < instance.num_runways:
			violations.append(Violation("runway", i, r, required=instance.num_runways - 1, actual=r))

	# Separation is checked in the order actually realized on each runway, for every pair
	for r in range(instance.num_runways):
		order = schedule.landing_order(r)
		for pos, first in enumerate(order):
			for second in order[pos + 1:]:
				gap = schedule.landing_time(second) - schedule.landing_time(first)
				required = instance.separation_time(first, second)
				if gap < required:
					violations.append(Violation("separation", second, r, required=required, actual=gap, other=first))
	return violations


def validate(instance: Instance, schedule: Schedule, variant: ObjectiveVariant) -> ValidationReport:
	"""Check windows, runway indices and realized separation; recompute the objective.

	Works on any schedule regardless of where it came from. Aircraft assigned
	to an unknown runway are reported and scored without transfer time.
	"""
	if len(schedule) != instance.num_aircraft:
		raise ValueError(f"Schedule covers {len(schedule)} aircraft, instance {instance.name} has {instance.num_aircraft}")
	violations = find_violations(instance, schedule)
	if any(v.kind == "runway" for v in violations) and variant is ObjectiveVariant.LATENESS_WITH_TRANSFER:
		objective = 0.0
		for i, a in enumerate(instance.aircraft):
			r = schedule.runway(i)
			transfer = a.transfer_time(r) if 0 <= r < len(a.transfer_times) else 0
			objective += max(0, schedule.landing_time(i) + transfer - a.target)
	else:
		objective = evaluate_objective(instance, schedule, variant)
	return ValidationReport(feasible=not violations, violations=tuple(violations), objective=float(objective))
