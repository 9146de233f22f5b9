from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from alpops.model.instance import TRANSFER_SEED, Aircraft, Instance


@dataclass
class GeneratorSettings:
	num_aircraft: int = 10
	num_runways: int = 1
	seed: int = 42

	# Target landing times are spread over this horizon
	horizon: int = 600
	# Window slack before/after the target
	early_slack: tuple = (30, 120)
	late_slack: tuple = (200, 600)

	# Penalty ranges per unit of time
	early_penalty: tuple = (1.0, 3.0)
	late_penalty: tuple = (1.0, 4.0)

	# Aircraft classes drive the separation matrix (heavy, medium, light)
	class_probs: tuple = (0.2, 0.5, 0.3)


# Leader class (row) x follower class (column)
_CLASS_SEPARATION = np.array([
	[3, 4, 5],
	[3, 3, 4],
	[3, 3, 3],
]) * 5


def generate_instance(settings: Optional[GeneratorSettings] = None, name: str = "") -> Instance:
	"""Random but reproducible instance in the style of the OR-Library sets."""
	settings = settings or GeneratorSettings()
	rng = np.random.default_rng(settings.seed)
	n = settings.num_aircraft

	targets = np.sort(rng.integers(settings.early_slack[1], settings.horizon + settings.early_slack[1], size=n))
	before = rng.integers(settings.early_slack[0], settings.early_slack[1] + 1, size=n)
	after = rng.integers(settings.late_slack[0], settings.late_slack[1] + 1, size=n)
	early = rng.uniform(*settings.early_penalty, size=n).round(2)
	late = rng.uniform(*settings.late_penalty, size=n).round(2)
	classes = rng.choice(len(settings.class_probs), size=n, p=list(settings.class_probs))

	aircraft = [
		Aircraft(
			id=i,
			earliest=int(max(0, targets[i] - before[i])),
			target=int(targets[i]),
			latest=int(targets[i] + after[i]),
			early_penalty=float(early[i]),
			late_penalty=float(late[i]),
		)
		for i in range(n)
	]
	separation = _CLASS_SEPARATION[classes][:, classes]
	np.fill_diagonal(separation, 0)
	label = name or f"gen_n{n}_s{settings.seed}"
	return Instance.create(aircraft, separation, settings.num_runways, name=label, seed=TRANSFER_SEED)
