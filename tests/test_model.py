import numpy as np
import pytest

from alpops.errors import ModelBuildError
from alpops.model.instance import Aircraft, Instance, SeparationMatrix, derive_transfer_times
from alpops.model.solution import ObjectiveVariant, Schedule


def test_transfer_times_are_seeded_and_bounded(build):
	inst = build([(0, 100), (20, 80), (30, 30)], [40, 25, 30], SeparationMatrix.uniform(3, 3), runways=3)
	again = build([(0, 100), (20, 80), (30, 30)], [40, 25, 30], SeparationMatrix.uniform(3, 3), runways=3)
	assert [a.transfer_times for a in inst.aircraft] == [a.transfer_times for a in again.aircraft]
	for a in inst.aircraft:
		assert len(a.transfer_times) == 3
		spread = max(1, a.target - a.earliest)
		assert all(1 <= t <= spread for t in a.transfer_times)
	# zero spread still gives a positive transfer time
	assert inst.aircraft[2].transfer_times == (1, 1, 1)


def test_transfer_seed_changes_values():
	planes = [Aircraft(i, 0, 500, 900, 1.0, 1.0) for i in range(5)]
	a = derive_transfer_times(planes, 2, seed=1)
	b = derive_transfer_times(planes, 2, seed=2)
	assert [p.transfer_times for p in a] != [p.transfer_times for p in b]


def test_with_runways_rederives_transfer_times(scenario_a):
	wider = scenario_a.with_runways(3)
	assert wider.num_runways == 3
	assert all(len(a.transfer_times) == 3 for a in wider.aircraft)
	assert wider.separation == scenario_a.separation
	assert wider.size == 2 * 9


def test_separation_matrix_is_read_only():
	S = SeparationMatrix([[0, 4], [6, 0]])
	assert S[0, 1] == 4 and S[1, 0] == 6
	with pytest.raises(ValueError):
		S.values[0, 1] = 1
	assert S.max_gap() == 6
	assert S == SeparationMatrix(np.array([[0, 4], [6, 0]]))


def test_check_rejects_zero_runways(build):
	inst = build([(0, 10)], [5], [[0]], runways=0)
	with pytest.raises(ModelBuildError):
		inst.check()


def test_check_rejects_empty_window(build):
	inst = build([(10, 5)], [7], [[0]])
	with pytest.raises(ModelBuildError):
		inst.check()


def test_check_rejects_matrix_mismatch(build):
	inst = build([(0, 10), (0, 10)], [5, 6], [[0]])
	with pytest.raises(ModelBuildError):
		inst.check()


def test_check_requires_transfer_times_when_asked():
	inst = Instance((Aircraft(0, 0, 5, 10, 1.0, 1.0),), SeparationMatrix([[0]]), 2)
	inst.check()
	with pytest.raises(ModelBuildError):
		inst.check(need_transfer_times=True)


def test_objective_variant_parse():
	assert ObjectiveVariant.parse("wet") is ObjectiveVariant.WEIGHTED_EARLINESS_TARDINESS
	assert ObjectiveVariant.parse("MAKESPAN") is ObjectiveVariant.MAKESPAN
	assert ObjectiveVariant.parse("lateness_with_transfer") is ObjectiveVariant.LATENESS_WITH_TRANSFER
	with pytest.raises(ValueError):
		ObjectiveVariant.parse("fastest")


def test_schedule_landing_order_uses_realized_times():
	s = Schedule.from_lists([30, 10, 20, 5], [0, 0, 0, 1])
	assert s.landing_order(0) == (1, 2, 0)
	assert s.landing_order(1) == (3,)
	frame = s.to_frame()
	assert list(frame.columns) == ["aircraft", "runway", "landing_time"]
	assert frame["landing_time"].tolist() == [30, 10, 20, 5]
