import pytest

from alpops.ingestion.generator import GeneratorSettings, generate_instance
from alpops.model.instance import SeparationMatrix
from alpops.model.solution import ObjectiveVariant
from alpops.optimization.heuristic import HeuristicConstructor
from alpops.validation.validator import validate


WET = ObjectiveVariant.WEIGHTED_EARLINESS_TARDINESS


def test_scenario_a(scenario_a):
	res = HeuristicConstructor().build(scenario_a, WET)
	assert res.schedule.landing_times == (10, 15)
	assert res.schedule.runways == (0, 0)
	assert res.objective_value == pytest.approx(3.0)


@pytest.mark.parametrize("variant", list(ObjectiveVariant))
def test_scenario_b_lands_on_target(scenario_b, variant):
	res = HeuristicConstructor().build(scenario_b, variant)
	assert res.schedule.landing_times == (10,)
	assert res.schedule.runways == (0,)
	assert res.objective_value == pytest.approx(validate(scenario_b, res.schedule, variant).objective)


def test_scenario_b_objectives(scenario_b):
	h = HeuristicConstructor()
	assert h.build(scenario_b, WET).objective_value == 0
	assert h.build(scenario_b, ObjectiveVariant.MAKESPAN).objective_value == 10
	transfer = scenario_b.aircraft[0].transfer_time(0)
	assert h.build(scenario_b, ObjectiveVariant.LATENESS_WITH_TRANSFER).objective_value == transfer


def test_scenario_c_spacing(scenario_c):
	res = HeuristicConstructor().build(scenario_c, ObjectiveVariant.MAKESPAN)
	times = sorted(res.schedule.landing_times)
	assert all(b - a >= 5 for a, b in zip(times, times[1:]))
	assert res.objective_value == 50 + 2 * 5


def test_ties_broken_by_id(scenario_c):
	res = HeuristicConstructor().build(scenario_c, WET)
	assert res.order == (0, 1, 2)
	assert res.schedule.landing_times == (50, 55, 60)


def test_balances_runways(build):
	inst = build([(0, 100)] * 4, [10, 10, 11, 11], SeparationMatrix.uniform(4, 8), runways=2)
	res = HeuristicConstructor().build(inst, WET)
	assert sorted(res.schedule.runways) == [0, 0, 1, 1]
	assert validate(inst, res.schedule, WET).feasible


def test_clamping_leaves_violation_for_validator(impossible):
	res = HeuristicConstructor().build(impossible, WET)
	assert res.schedule.landing_times == (0, 5)
	report = validate(impossible, res.schedule, WET)
	assert not report.feasible
	assert report.violations[0].shortfall >= 90


@pytest.mark.parametrize("variant", list(ObjectiveVariant))
def test_idempotent_and_consistent(variant):
	inst = generate_instance(GeneratorSettings(num_aircraft=25, num_runways=2, seed=7))
	h = HeuristicConstructor()
	first = h.build(inst, variant)
	second = h.build(inst, variant)
	assert first.schedule == second.schedule
	assert first.objective_value == pytest.approx(validate(inst, first.schedule, variant).objective)


def test_push_covers_aircraft_landing_later_on_runway(build):
	# aircraft 2 is clamped ahead of aircraft 1, then aircraft 3 must clear both
	sep = [[0] * 4 for _ in range(4)]
	sep[0][1] = 150
	sep[1][3] = 50
	sep[2][3] = 120
	inst = build([(0, 0), (0, 200), (0, 40), (0, 500)], [0, 5, 6, 7], sep)
	res = HeuristicConstructor().build(inst, WET)
	assert res.schedule.landing_times == (0, 150, 40, 200)
	assert validate(inst, res.schedule, WET).feasible
