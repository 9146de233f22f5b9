from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from alpops.errors import ModelBuildError


TRANSFER_SEED = 42


@dataclass(frozen=True)
class Aircraft:
	id: int
	earliest: int
	target: int
	latest: int
	early_penalty: float
	late_penalty: float
	transfer_times: Tuple[int, ...] = ()  # one entry per runway

	def transfer_time(self, runway: int) -> int:
		return self.transfer_times[runway]

	@property
	def window_is_empty(self) -> bool:
		return self.latest < self.earliest


@dataclass(frozen=True, eq=False)
class SeparationMatrix:
	"""Minimum landing gaps: ``S[i, j]`` applies when ``i`` lands before ``j`` on the same runway."""

	values: np.ndarray

	def __post_init__(self) -> None:
		arr = np.array(self.values, dtype=np.int64, copy=True)
		if arr.ndim == 1 and arr.size == 0:
			arr = arr.reshape(0, 0)
		arr.flags.writeable = False
		object.__setattr__(self, "values", arr)

	@classmethod
	def uniform(cls, size: int, gap: int) -> "SeparationMatrix":
		arr = np.full((size, size), gap, dtype=np.int64)
		np.fill_diagonal(arr, 0)
		return cls(arr)

	@property
	def shape(self) -> Tuple[int, ...]:
		return tuple(self.values.shape)

	@property
	def is_square(self) -> bool:
		return self.values.ndim == 2 and self.values.shape[0] == self.values.shape[1]

	def __len__(self) -> int:
		return int(self.values.shape[0])

	def __getitem__(self, key: Tuple[int, int]) -> int:
		i, j = key
		return int(self.values[i, j])

	def max_gap(self) -> int:
		"""Largest off-diagonal gap."""
		if self.values.size == 0 or not self.is_square:
			return int(self.values.max()) if self.values.size else 0
		off = self.values[~np.eye(len(self), dtype=bool)]
		return int(off.max()) if off.size else 0

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, SeparationMatrix):
			return NotImplemented
		return self.values.shape == other.values.shape and bool(np.array_equal(self.values, other.values))

	def __hash__(self) -> int:
		return hash((self.values.shape, self.values.tobytes()))


def derive_transfer_times(aircraft: Sequence[Aircraft], num_runways: int, seed: int = TRANSFER_SEED) -> List[Aircraft]:
	"""Attach runway-to-parking transfer times drawn from a seeded generator.

	A single generator is consumed aircraft by aircraft, runway by runway, so the
	result only depends on the aircraft order, their windows and the seed. Each
	value lies in ``[1, max(1, target - earliest)]``.
	"""
	rng = np.random.default_rng(seed)
	out: List[Aircraft] = []
	for a in aircraft:
		spread = max(1, a.target - a.earliest)
		times = tuple(1 + int(rng.integers(0, spread)) for _ in range(max(0, num_runways)))
		out.append(replace(a, transfer_times=times))
	return out


@dataclass(frozen=True)
class Instance:
	aircraft: Tuple[Aircraft, ...]
	separation: SeparationMatrix
	num_runways: int
	name: str = "instance"
	transfer_seed: int = field(default=TRANSFER_SEED, compare=False)

	@classmethod
	def create(
		cls,
		aircraft: Iterable[Aircraft],
		separation,
		num_runways: int,
		name: str = "instance",
		seed: int = TRANSFER_SEED,
	) -> "Instance":
		"""Build an instance and derive its transfer times for ``num_runways`` runways."""
		if not isinstance(separation, SeparationMatrix):
			separation = SeparationMatrix(separation)
		planes = tuple(derive_transfer_times(list(aircraft), num_runways, seed))
		return cls(aircraft=planes, separation=separation, num_runways=num_runways, name=name, transfer_seed=seed)

	@property
	def num_aircraft(self) -> int:
		return len(self.aircraft)

	@property
	def size(self) -> int:
		# used for the exact/heuristic routing decision
		return self.num_aircraft * self.num_runways ** 2

	def separation_time(self, i: int, j: int) -> int:
		return self.separation[i, j]

	def with_runways(self, num_runways: int) -> "Instance":
		return Instance.create(self.aircraft, self.separation, num_runways, name=self.name, seed=self.transfer_seed)

	def check(self, need_transfer_times: bool = False) -> None:
		"""Raise ModelBuildError unless the instance can be turned into a model."""
		if self.num_runways < 1:
			raise ModelBuildError(f"Instance {self.name}: runway count must be at least 1, got {self.num_runways}")
		if not self.separation.is_square or len(self.separation) != self.num_aircraft:
			raise ModelBuildError(
				f"Instance {self.name}: separation matrix shape {self.separation.shape} does not match {self.num_aircraft} aircraft"
			)
		for idx, a in enumerate(self.aircraft):
			if a.window_is_empty:
				raise ModelBuildError(f"Instance {self.name}: aircraft {idx} has an empty window [{a.earliest}, {a.latest}]")
			if need_transfer_times and len(a.transfer_times) < self.num_runways:
				raise ModelBuildError(
					f"Instance {self.name}: aircraft {idx} has {len(a.transfer_times)} transfer times for {self.num_runways} runways"
				)

	def to_frame(self) -> pd.DataFrame:
		rows = []
		for a in self.aircraft:
			rows.append({
				"aircraft_id": a.id,
				"earliest": a.earliest,
				"target": a.target,
				"latest": a.latest,
				"early_penalty": a.early_penalty,
				"late_penalty": a.late_penalty,
				"transfer_times": list(a.transfer_times),
			})
		return pd.DataFrame(rows, columns=["aircraft_id", "earliest", "target", "latest", "early_penalty", "late_penalty", "transfer_times"])
