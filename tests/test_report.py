import pytest

from alpops.analysis.report import analyze, format_report
from alpops.config import Config
from alpops.orchestrator.pipeline import LandingPipeline


def test_report_for_scenario_a(scenario_a):
	result = LandingPipeline(Config(force_heuristic=True)).solve(scenario_a, "wet")
	report = analyze(scenario_a, result)
	s = report.summary
	assert s["makespan"] == 15
	assert (s["early"], s["on_time"], s["late"]) == (0, 1, 1)
	assert s["total_penalty"] == pytest.approx(result.objective_value)
	assert report.runways["aircraft"].tolist() == [2]
	assert report.runways["share"].tolist() == [1.0]
	assert report.aircraft["status"].tolist() == ["on_time", "late"]
	assert report.violations.empty
	text = format_report(report)
	assert "Runway 1: 2 aircraft (100.0%)" in text
	assert "All separation times and windows are respected." in text


def test_report_lateness_matches_objective(scenario_a):
	two = scenario_a.with_runways(2)
	result = LandingPipeline(Config(force_heuristic=True)).solve(two, "lateness")
	report = analyze(two, result)
	assert report.summary["total_lateness"] == pytest.approx(result.objective_value)
	assert report.runways["runway"].tolist() == [0, 1]
	assert "Total lateness" in format_report(report)


def test_report_lists_violations(impossible):
	result = LandingPipeline(Config(force_heuristic=True)).solve(impossible, "wet")
	report = analyze(impossible, result)
	assert len(report.violations) == 1
	assert "Violations: 1" in format_report(report)
