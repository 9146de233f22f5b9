from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import pulp

from alpops.errors import ModelBuildError
from alpops.model.instance import Instance
from alpops.model.solution import ObjectiveVariant
from alpops.utils.logging import get_logger


logger = get_logger(__name__)


@dataclass
class Formulation:
	problem: pulp.LpProblem
	variant: ObjectiveVariant
	big_m: int
	landing: Dict[int, pulp.LpVariable]                 # x_i
	precedence: Dict[Tuple[int, int], pulp.LpVariable]  # y_ij, i lands before j
	runway: Dict[Tuple[int, int], pulp.LpVariable]      # z_ir, i uses runway r
	auxiliary: Dict[str, Dict] = field(default_factory=dict)

	@property
	def num_aircraft(self) -> int:
		return len(self.landing)

	@property
	def num_runways(self) -> int:
		return 1 + max(r for _, r in self.runway) if self.runway else 0


def default_big_m(instance: Instance) -> int:
	"""Smallest convenient M that switches off every separation and lateness row.

	A relaxed separation row needs x_j - x_i >= S_ij - M, and x_j - x_i is never
	below min(E) - max(L). A relaxed lateness row needs M >= L_i + t_ir - T_i.
	"""
	earliest = min(a.earliest for a in instance.aircraft)
	latest = max(a.latest for a in instance.aircraft)
	max_transfer = max((max(a.transfer_times) for a in instance.aircraft if a.transfer_times), default=0)
	return (latest - earliest) + max(instance.separation.max_gap(), max_transfer) + 1


class FormulationBuilder:
	def __init__(self, big_m: Optional[int] = None) -> None:
		self.big_m = big_m

	def build(self, instance: Instance, variant: ObjectiveVariant) -> Formulation:
		variant = ObjectiveVariant.parse(variant)
		instance.check(need_transfer_times=variant is ObjectiveVariant.LATENESS_WITH_TRANSFER)
		if instance.num_aircraft == 0:
			raise ModelBuildError(f"Instance {instance.name} has no aircraft")

		n = instance.num_aircraft
		m = instance.num_runways
		big_m = self.big_m if self.big_m is not None else default_big_m(instance)
		planes = instance.aircraft

		prob = pulp.LpProblem(f"ALP_{variant.value}_{_safe_name(instance.name)}", pulp.LpMinimize)

		# Variables
		x = {
			i: pulp.LpVariable(f"x_{i}", lowBound=planes[i].earliest, upBound=planes[i].latest, cat=pulp.LpInteger)
			for i in range(n)
		}
		y = pulp.LpVariable.dicts("y", ((i, j) for i in range(n) for j in range(n) if i != j), 0, 1, pulp.LpBinary)
		z = pulp.LpVariable.dicts("z", ((i, r) for i in range(n) for r in range(m)), 0, 1, pulp.LpBinary)
		formulation = Formulation(problem=prob, variant=variant, big_m=big_m, landing=x, precedence=y, runway=z)

		# Objective and its defining rows
		if variant is ObjectiveVariant.WEIGHTED_EARLINESS_TARDINESS:
			self._add_earliness_tardiness(formulation, instance)
		elif variant is ObjectiveVariant.MAKESPAN:
			self._add_makespan(formulation, instance)
		else:
			self._add_lateness(formulation, instance)

		# Each aircraft uses exactly one runway
		for i in range(n):
			prob += pulp.lpSum(z[(i, r)] for r in range(m)) == 1, f"one_runway_{i}"

		# Every pair is ordered one way or the other
		for i in range(n):
			for j in range(i + 1, n):
				prob += y[(i, j)] + y[(j, i)] == 1, f"order_{i}_{j}"

		# Separation, active only when i precedes j and both share runway r
		for i in range(n):
			for j in range(n):
				if i == j:
					continue
				sep = instance.separation_time(i, j)
				for r in range(m):
					prob += (
						x[j] >= x[i] + sep
						- big_m * (1 - y[(i, j)])
						- big_m * (1 - z[(i, r)])
						- big_m * (1 - z[(j, r)])
					), f"sep_{i}_{j}_{r}"

		logger.debug(
			"Built %s model for %s: %d variables, %d constraints, M=%d",
			variant.value, instance.name, len(prob.variables()), len(prob.constraints), big_m,
		)
		return formulation

	def _add_earliness_tardiness(self, f: Formulation, instance: Instance) -> None:
		alpha = pulp.LpVariable.dicts("alpha", range(instance.num_aircraft), lowBound=0)
		beta = pulp.LpVariable.dicts("beta", range(instance.num_aircraft), lowBound=0)
		f.problem += pulp.lpSum(
			a.early_penalty * alpha[i] + a.late_penalty * beta[i] for i, a in enumerate(instance.aircraft)
		), "weighted_earliness_tardiness"
		for i, a in enumerate(instance.aircraft):
			f.problem += alpha[i] >= a.target - f.landing[i], f"early_{i}"
			f.problem += beta[i] >= f.landing[i] - a.target, f"late_{i}"
		f.auxiliary["alpha"] = alpha
		f.auxiliary["beta"] = beta

	def _add_makespan(self, f: Formulation, instance: Instance) -> None:
		makespan = pulp.LpVariable("makespan", lowBound=0)
		f.problem += makespan, "min_makespan"
		for i in range(instance.num_aircraft):
			f.problem += makespan >= f.landing[i], f"makespan_{i}"
		f.auxiliary["makespan"] = {0: makespan}

	def _add_lateness(self, f: Formulation, instance: Instance) -> None:
		lateness = pulp.LpVariable.dicts("lateness", range(instance.num_aircraft), lowBound=0)
		f.problem += pulp.lpSum(lateness[i] for i in range(instance.num_aircraft)), "total_lateness"
		for i, a in enumerate(instance.aircraft):
			for r in range(instance.num_runways):
				f.problem += (
					lateness[i] >= f.landing[i] + a.transfer_time(r) - a.target - f.big_m * (1 - f.runway[(i, r)])
				), f"lateness_{i}_{r}"
		f.auxiliary["lateness"] = lateness


def _safe_name(name: str) -> str:
	return "".join(ch if ch.isalnum() else "_" for ch in name) or "instance"
