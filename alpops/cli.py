import json
from typing import Optional

import click

from alpops.analysis.report import analyze, format_report
from alpops.config import Config
from alpops.ingestion.generator import GeneratorSettings, generate_instance
from alpops.ingestion.reader import format_instance, read_instance
from alpops.model.instance import Instance
from alpops.model.solution import ObjectiveVariant
from alpops.orchestrator.benchmark import run_benchmark
from alpops.orchestrator.pipeline import LandingPipeline
from alpops.utils.logging import set_level


VARIANT_CHOICES = [v.value for v in ObjectiveVariant]


def _load(instance_path: Optional[str], aircraft: int, runways: int, seed: int, max_aircraft: Optional[int]) -> Instance:
	if instance_path:
		return read_instance(instance_path, runways, max_aircraft=max_aircraft)
	return generate_instance(GeneratorSettings(num_aircraft=aircraft, num_runways=runways, seed=seed))


@click.group()
@click.option("--log-level", default="INFO", show_default=True, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def main(log_level: str) -> None:
	"""Aircraft landing scheduler CLI."""
	set_level(log_level)


@main.command()
@click.option("--instance", "instance_path", type=click.Path(exists=True, dir_okay=False), default=None, help="OR-Library airland file; a random instance is generated when omitted.")
@click.option("--aircraft", type=int, default=10, show_default=True, help="Aircraft in the generated instance.")
@click.option("--max-aircraft", type=int, default=None, help="Keep only the first N aircraft of the file.")
@click.option("--runways", type=int, default=1, show_default=True)
@click.option("--variant", type=click.Choice(VARIANT_CHOICES), default="wet", show_default=True)
@click.option("--seed", type=int, default=42, show_default=True)
@click.option("--time-limit", type=int, default=60, show_default=True)
@click.option("--gap", type=float, default=0.05, show_default=True)
@click.option("--heuristic", is_flag=True, help="Skip the exact solver.")
@click.option("--report", is_flag=True, help="Print the solution analysis instead of JSON.")
def solve(instance_path, aircraft: int, max_aircraft, runways: int, variant: str, seed: int, time_limit: int, gap: float, heuristic: bool, report: bool) -> None:
	"""Solve one instance for one objective variant."""
	cfg = Config(time_limit_seconds=time_limit, relative_gap=gap, force_heuristic=heuristic)
	inst = _load(instance_path, aircraft, runways, seed, max_aircraft)
	result = LandingPipeline(cfg).solve(inst, variant)
	if report:
		click.echo(format_report(analyze(inst, result)))
	else:
		click.echo(json.dumps(result.to_dict(), indent=2))


@main.command()
@click.option("--instance", "instance_paths", multiple=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--aircraft", type=int, default=10, show_default=True)
@click.option("--max-aircraft", type=int, default=None)
@click.option("--runways", "runway_counts", type=int, multiple=True, default=(1, 2, 3), show_default=True)
@click.option("--variant", "variants", type=click.Choice(VARIANT_CHOICES), multiple=True)
@click.option("--time-limit", type=int, default=60, show_default=True)
@click.option("--workers", type=int, default=1, show_default=True)
@click.option("--heuristic", is_flag=True)
def benchmark(instance_paths, aircraft: int, max_aircraft, runway_counts, variants, time_limit: int, workers: int, heuristic: bool) -> None:
	"""Solve every instance for every runway count and variant."""
	cfg = Config(time_limit_seconds=time_limit, force_heuristic=heuristic)
	if instance_paths:
		instances = [read_instance(p, 1, max_aircraft=max_aircraft) for p in instance_paths]
	else:
		instances = [generate_instance(GeneratorSettings(num_aircraft=aircraft))]
	df = run_benchmark(instances, runway_counts=runway_counts, variants=variants or None, config=cfg, max_workers=workers)
	click.echo(df.to_json(orient="records", indent=2))


@main.command()
@click.option("--aircraft", type=int, default=10, show_default=True)
@click.option("--seed", type=int, default=42, show_default=True)
def generate(aircraft: int, seed: int) -> None:
	"""Print a random instance in airland format."""
	inst = generate_instance(GeneratorSettings(num_aircraft=aircraft, seed=seed))
	click.echo(format_instance(inst), nl=False)
