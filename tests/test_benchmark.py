from alpops.config import Config
from alpops.ingestion.generator import GeneratorSettings, generate_instance
from alpops.model.solution import ObjectiveVariant
from alpops.orchestrator.benchmark import COLUMNS, run_benchmark


def test_every_combination_is_solved():
	inst = generate_instance(GeneratorSettings(num_aircraft=8, seed=4))
	df = run_benchmark([inst], runway_counts=(1, 2), config=Config(force_heuristic=True))
	assert list(df.columns) == COLUMNS
	assert len(df) == 2 * len(ObjectiveVariant)
	assert df["runways"].tolist() == [1, 1, 1, 2, 2, 2]
	assert set(df["strategy"]) == {"heuristic"}


def test_thread_pool_matches_sequential():
	instances = [generate_instance(GeneratorSettings(num_aircraft=10, seed=s)) for s in (1, 2)]
	cfg = Config(force_heuristic=True)
	seq = run_benchmark(instances, runway_counts=(1, 3), variants=["wet", "makespan"], config=cfg)
	par = run_benchmark(instances, runway_counts=(1, 3), variants=["wet", "makespan"], config=cfg, max_workers=4)
	cols = ["instance", "runways", "variant", "objective", "feasible"]
	assert seq[cols].equals(par[cols])


def test_exact_runs_in_benchmark():
	inst = generate_instance(GeneratorSettings(num_aircraft=4, seed=2))
	df = run_benchmark([inst], runway_counts=(1,), variants=[ObjectiveVariant.MAKESPAN], config=Config(time_limit_seconds=20))
	assert df.loc[0, "strategy"] == "exact"
	assert bool(df.loc[0, "feasible"])
