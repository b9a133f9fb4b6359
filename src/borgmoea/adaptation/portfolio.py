"""
Operator portfolio primitives.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence


@dataclass(frozen=True)
class OperatorArm:
    """
    A single variation operator in the portfolio.
    """

    op_id: str
    name: str


class OperatorPortfolio:
    """
    Ordered set of operator arms; the arm position is the operator tag.
    """

    def __init__(self, arms: Sequence[OperatorArm]):
        if not arms:
            raise ValueError("OperatorPortfolio requires at least one arm.")
        self._arms = list(arms)
        self._index: dict[str, int] = {}
        for idx, arm in enumerate(self._arms):
            if not arm.op_id:
                raise ValueError("OperatorArm.op_id must be non-empty.")
            if arm.op_id in self._index:
                raise ValueError(f"Duplicate operator id '{arm.op_id}'.")
            self._index[arm.op_id] = idx

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> "OperatorPortfolio":
        """Build arms from display labels, suffixing repeats (``sbx``, ``sbx#2``)."""
        seen: dict[str, int] = {}
        arms = []
        for label in labels:
            seen[label] = seen.get(label, 0) + 1
            op_id = label if seen[label] == 1 else f"{label}#{seen[label]}"
            arms.append(OperatorArm(op_id=op_id, name=label))
        return cls(arms)

    def by_id(self, op_id: str) -> OperatorArm:
        return self._arms[self._index[op_id]]

    def index_of(self, op_id: str) -> int:
        return self._index[op_id]

    def ids(self) -> list[str]:
        return [arm.op_id for arm in self._arms]

    def names(self) -> list[str]:
        return [arm.name for arm in self._arms]

    def __len__(self) -> int:
        return len(self._arms)

    def __iter__(self) -> Iterator[OperatorArm]:
        return iter(self._arms)

    def __getitem__(self, index: int) -> OperatorArm:
        return self._arms[index]


__all__ = ["OperatorArm", "OperatorPortfolio"]
