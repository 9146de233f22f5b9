import pytest

from alpops.model.instance import Aircraft, Instance, SeparationMatrix


def make_instance(windows, targets, separation, runways=1, penalties=(1.0, 1.0), name="test"):
	aircraft = [
		Aircraft(i, w[0], t, w[1], penalties[0], penalties[1])
		for i, (w, t) in enumerate(zip(windows, targets))
	]
	return Instance.create(aircraft, separation, runways, name=name)


@pytest.fixture
def scenario_a():
	# two aircraft, one runway, overlapping targets
	return make_instance([(0, 100), (0, 100)], [10, 12], [[0, 5], [5, 0]], name="scenario_a")


@pytest.fixture
def scenario_b():
	return make_instance([(5, 20)], [10], [[0]], name="scenario_b")


@pytest.fixture
def scenario_c():
	return make_instance([(50, 150)] * 3, [50] * 3, SeparationMatrix.uniform(3, 5), name="scenario_c")


@pytest.fixture
def impossible():
	return make_instance([(0, 5), (0, 5)], [0, 0], [[0, 100], [100, 0]], name="impossible")


@pytest.fixture
def build():
	return make_instance
