from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional

import numpy as np

from alpops.errors import InstanceFormatError
from alpops.model.instance import TRANSFER_SEED, Aircraft, Instance
from alpops.utils.logging import get_logger


logger = get_logger(__name__)


class _Tokens:
	"""Whitespace token stream; records may wrap over any number of lines."""

	def __init__(self, text: str) -> None:
		self._it: Iterator[str] = iter(text.split())
		self.consumed = 0

	def next(self, what: str) -> str:
		try:
			tok = next(self._it)
		except StopIteration:
			raise InstanceFormatError(f"Unexpected end of data while reading {what}") from None
		self.consumed += 1
		return tok

	def int(self, what: str) -> int:
		tok = self.next(what)
		try:
			return int(tok)
		except ValueError:
			# airland files occasionally write integral values as "123.0"
			try:
				value = float(tok)
			except ValueError:
				raise InstanceFormatError(f"Invalid integer {tok!r} for {what}") from None
			if not value.is_integer():
				raise InstanceFormatError(f"Invalid integer {tok!r} for {what}")
			return int(value)

	def float(self, what: str) -> float:
		tok = self.next(what)
		try:
			return float(tok)
		except ValueError:
			raise InstanceFormatError(f"Invalid number {tok!r} for {what}") from None


def read_instance_text(
	text: str,
	num_runways: int,
	name: str = "instance",
	max_aircraft: Optional[int] = None,
	seed: int = TRANSFER_SEED,
) -> Instance:
	"""Parse an OR-Library ``airland`` record.

	Layout: ``n freeze_time``, then for each aircraft ``appearance earliest target
	latest early_penalty late_penalty`` followed by its ``n`` separation times.
	With ``max_aircraft`` only the first aircraft (and the matching block of the
	separation matrix) are kept. Windows are not repaired here.
	"""
	tokens = _Tokens(text)
	total = tokens.int("aircraft count")
	tokens.int("freeze time")
	if total < 0:
		raise InstanceFormatError(f"Negative aircraft count {total}")
	keep = total if max_aircraft is None else max(0, min(total, max_aircraft))

	aircraft: List[Aircraft] = []
	separation = np.zeros((keep, keep), dtype=np.int64)
	for i in range(total):
		what = f"aircraft {i + 1}"
		tokens.int(f"{what} appearance time")
		earliest = tokens.int(f"{what} earliest time")
		target = tokens.int(f"{what} target time")
		latest = tokens.int(f"{what} latest time")
		early = tokens.float(f"{what} early penalty")
		late = tokens.float(f"{what} late penalty")
		row = [tokens.int(f"{what} separation {j + 1}") for j in range(total)]
		if i >= keep:
			continue
		if latest < earliest:
			logger.warning("%s: latest %d < earliest %d for %s", name, latest, earliest, what)
		aircraft.append(Aircraft(i, earliest, target, latest, early, late))
		separation[i, :] = row[:keep]

	# airland files put a large sentinel on the diagonal
	np.fill_diagonal(separation, 0)
	if keep < total:
		logger.info("%s: kept %d of %d aircraft", name, keep, total)
	logger.info("Loaded instance %s: %d aircraft, %d runways", name, keep, num_runways)
	return Instance.create(aircraft, separation, num_runways, name=name, seed=seed)


def read_instance(path, num_runways: int, max_aircraft: Optional[int] = None, seed: int = TRANSFER_SEED) -> Instance:
	p = Path(path)
	return read_instance_text(p.read_text(), num_runways, name=p.stem, max_aircraft=max_aircraft, seed=seed)


def format_instance(instance: Instance, freeze_time: int = 0, per_line: int = 10) -> str:
	"""Write an instance back in ``airland`` layout (appearance time is set to 0)."""
	lines = [f" {instance.num_aircraft} {freeze_time}"]
	for i, a in enumerate(instance.aircraft):
		lines.append(f" 0 {a.earliest} {a.target} {a.latest} {a.early_penalty:.2f} {a.late_penalty:.2f}")
		row = [str(instance.separation_time(i, j)) for j in range(instance.num_aircraft)]
		for k in range(0, len(row), per_line):
			lines.append(" " + " ".join(row[k:k + per_line]))
	return "\n".join(lines) + "\n"
