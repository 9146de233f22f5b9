from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import pandas as pd

from alpops.model.instance import Instance
from alpops.model.solution import ObjectiveVariant, SolveResult


@dataclass
class SolutionReport:
	summary: Dict[str, Any]
	runways: pd.DataFrame   # columns: runway, aircraft, share, last_landing
	aircraft: pd.DataFrame  # one row per aircraft: times, deviation, penalty, parking lateness
	violations: pd.DataFrame


def analyze(instance: Instance, result: SolveResult) -> SolutionReport:
	sched = result.schedule.to_frame()
	planes = instance.to_frame().rename(columns={"aircraft_id": "id"})
	df = pd.concat([sched, planes.drop(columns=["transfer_times"])], axis=1)

	df["deviation"] = df["landing_time"] - df["target"]
	df["status"] = "on_time"
	df.loc[df["deviation"] < 0, "status"] = "early"
	df.loc[df["deviation"] > 0, "status"] = "late"
	df["penalty"] = (
		(-df["deviation"]).clip(lower=0) * df["early_penalty"]
		+ df["deviation"].clip(lower=0) * df["late_penalty"]
	)
	transfer = [
		a.transfer_time(r) if 0 <= r < len(a.transfer_times) else 0
		for a, r in zip(instance.aircraft, result.schedule.runways)
	]
	df["transfer_time"] = transfer
	df["parking_arrival"] = df["landing_time"] + df["transfer_time"]
	df["lateness"] = (df["parking_arrival"] - df["target"]).clip(lower=0)

	n = max(1, len(df))
	runways = (
		df.groupby("runway")
		.agg(aircraft=("aircraft", "count"), last_landing=("landing_time", "max"))
		.reindex(range(instance.num_runways), fill_value=0)
		.rename_axis("runway")
		.reset_index()
	)
	runways["share"] = runways["aircraft"] / n

	counts = df["status"].value_counts()
	summary = {
		"instance": instance.name,
		"variant": result.variant.value,
		"problem": result.variant.label,
		"strategy": result.strategy,
		"aircraft": instance.num_aircraft,
		"runways": instance.num_runways,
		"objective": result.objective_value,
		"solve_seconds": result.solve_seconds,
		"feasible": result.feasible,
		"makespan": int(df["landing_time"].max()) if len(df) else 0,
		"early": int(counts.get("early", 0)),
		"on_time": int(counts.get("on_time", 0)),
		"late": int(counts.get("late", 0)),
		"early_penalty": float(((-df["deviation"]).clip(lower=0) * df["early_penalty"]).sum()),
		"late_penalty": float((df["deviation"].clip(lower=0) * df["late_penalty"]).sum()),
		"total_lateness": float(df["lateness"].sum()),
	}
	summary["total_penalty"] = summary["early_penalty"] + summary["late_penalty"]

	violations = pd.DataFrame(
		[
			{"kind": v.kind, "first": v.other, "aircraft": v.aircraft, "runway": v.runway, "shortfall": v.shortfall}
			for v in result.violations
		],
		columns=["kind", "first", "aircraft", "runway", "shortfall"],
	)
	return SolutionReport(summary=summary, runways=runways, aircraft=df, violations=violations)


def format_report(report: SolutionReport) -> str:
	s = report.summary
	lines = [
		"=== Solution Analysis ===",
		f"Problem: {s['problem']} ({s['strategy']})",
		f"Instance: {s['instance']}  aircraft={s['aircraft']}  runways={s['runways']}",
		f"Objective value: {s['objective']:.2f}  solve time: {s['solve_seconds']:.3f}s  feasible: {s['feasible']}",
		"",
		"Runway utilization:",
	]
	for _, row in report.runways.iterrows():
		lines.append(f"  Runway {int(row['runway']) + 1}: {int(row['aircraft'])} aircraft ({100.0 * row['share']:.1f}%)")
	lines += [
		"",
		f"Makespan: {s['makespan']}",
		f"Early: {s['early']}  On time: {s['on_time']}  Late: {s['late']}",
		f"Total penalty: {s['total_penalty']:.2f} (early {s['early_penalty']:.2f}, late {s['late_penalty']:.2f})",
	]
	if s["variant"] == ObjectiveVariant.LATENESS_WITH_TRANSFER.value:
		lines.append(f"Total lateness: {s['total_lateness']:.2f}")
	if report.violations.empty:
		lines.append("All separation times and windows are respected.")
	else:
		lines.append(f"Violations: {len(report.violations)}")
	return "\n".join(lines)
