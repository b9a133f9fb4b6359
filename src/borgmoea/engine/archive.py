"""
Epsilon-box dominance archive.

The archive keeps at most one member per epsilon box and never holds two
members where one dominates the other. Box coordinates are kept in a
contiguous integer matrix so the full-archive dominance sweep done for a
genuinely new box is a single vectorized comparison; collisions with an
occupied box are resolved through a dict lookup against the incumbent.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence

import numpy as np

from borgmoea.foundation.exceptions import ArchiveInvariantError
from borgmoea.foundation.fitness import EpsBoxFitnessScheme, IndexedFitness


class ArchiveOutcome(Enum):
    ADDED = "added"
    REPLACED = "replaced"
    REJECTED = "rejected"

    @property
    def improved(self) -> bool:
        return self is not ArchiveOutcome.REJECTED


@dataclass(frozen=True)
class ArchivedMember:
    """
    A single archive entry.

    Attributes:
        params: Read-only copy of the decision vector.
        fitness: Indexed fitness of ``params``.
        tag: Index of the variation operator that produced it, ``None`` for
            initial and restart-injected solutions.
        timestamp: Value of the archive's insertion counter when it was stored.
    """

    params: np.ndarray
    fitness: IndexedFitness
    tag: int | None
    timestamp: int

    @property
    def box(self) -> tuple[int, ...]:
        return self.fitness.index


class EpsBoxArchive:
    """
    Non-dominated archive with epsilon-box deduplication.

    Args:
        scheme: Fitness scheme providing epsilon widths and comparisons.
        initial_capacity: Initial number of rows of the box-coordinate matrix;
            it doubles on demand.

    Examples:
        >>> scheme = EpsBoxFitnessScheme(2, 0.1)
        >>> archive = EpsBoxArchive(scheme)
        >>> archive.insert(np.zeros(3), (1.0, 2.0))
        <ArchiveOutcome.ADDED: 'added'>
    """

    def __init__(self, scheme: EpsBoxFitnessScheme, *, initial_capacity: int = 64) -> None:
        self.scheme = scheme
        self._members: list[ArchivedMember] = []
        self._positions: dict[tuple[int, ...], int] = {}
        self._boxes = np.empty((max(1, int(initial_capacity)), scheme.n_obj), dtype=np.int64)
        self._tag_counts: dict[int, int] = {}
        self._without_progress = 0
        self._n_candidates = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[ArchivedMember]:
        return iter(list(self._members))

    def __getitem__(self, index: int) -> ArchivedMember:
        return self._members[index]

    def __repr__(self) -> str:
        return f"EpsBoxArchive(size={len(self)}, epsilon={self.scheme.epsilon.tolist()})"

    def size(self) -> int:
        return len(self._members)

    @property
    def n_obj(self) -> int:
        return self.scheme.n_obj

    @property
    def candidates_without_progress(self) -> int:
        """Consecutive insertions that neither added nor replaced a member."""
        return self._without_progress

    @property
    def n_candidates(self) -> int:
        """Total number of insertion attempts."""
        return self._n_candidates

    def occupant(self, box: Sequence[int]) -> ArchivedMember | None:
        pos = self._positions.get(tuple(int(b) for b in box))
        return None if pos is None else self._members[pos]

    def tagcounts(self) -> dict[int, int]:
        """Number of current members produced by each operator tag."""
        return dict(self._tag_counts)

    def best_member(self) -> ArchivedMember | None:
        if not self._members:
            return None
        aggs = [m.fitness.agg for m in self._members]
        return self._members[int(np.argmin(aggs))]

    def best_fitness(self) -> IndexedFitness | None:
        best = self.best_member()
        return None if best is None else best.fitness

    def best_candidate(self) -> np.ndarray | None:
        best = self.best_member()
        return None if best is None else best.params.copy()

    def frontier(self) -> list[ArchivedMember]:
        """Snapshot of all members; entries are immutable."""
        return list(self._members)

    def contents(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(X, F)`` copies of the archived decision vectors and objectives."""
        if not self._members:
            return np.empty((0, 0)), np.empty((0, self.n_obj))
        X = np.vstack([m.params for m in self._members])
        F = np.asarray([m.fitness.values for m in self._members], dtype=float)
        return X, F

    def sample(self, rng: np.random.Generator) -> ArchivedMember:
        if not self._members:
            raise IndexError("Cannot sample from an empty archive.")
        return self._members[int(rng.integers(len(self._members)))]

    # ------------------------------------------------------------------
    # Mutation points
    # ------------------------------------------------------------------

    def insert(
        self,
        params: np.ndarray,
        fitness: IndexedFitness | Sequence[float],
        tag: int | None = None,
    ) -> ArchiveOutcome:
        """
        Offer a solution to the archive.

        Returns ``ADDED`` when it lands in an unoccupied box that no member's box
        dominates (evicting every member whose box it dominates), ``REPLACED``
        when it beats the incumbent of its own box, and ``REJECTED`` otherwise.
        """
        if not isinstance(fitness, IndexedFitness):
            fitness = self.scheme.make(fitness)
        if fitness.n_obj != self.n_obj:
            raise ValueError(f"Fitness has {fitness.n_obj} objectives, archive expects {self.n_obj}.")
        self._n_candidates += 1
        box = np.asarray(fitness.index, dtype=np.int64)
        pos = self._positions.get(fitness.index)
        if pos is None:
            outcome = self._insert_new_box(params, fitness, tag, box)
        else:
            outcome = self._challenge_incumbent(pos, params, fitness, tag, box)
        if outcome.improved:
            self._without_progress = 0
        else:
            self._without_progress += 1
        return outcome

    def reset_progress(self) -> None:
        """Zero the stagnation counter (done by the optimizer on restart)."""
        self._without_progress = 0

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _insert_new_box(
        self,
        params: np.ndarray,
        fitness: IndexedFitness,
        tag: int | None,
        box: np.ndarray,
    ) -> ArchiveOutcome:
        boxes = self._boxes[: len(self._members)]
        if boxes.shape[0]:
            member_dominates = np.all(boxes <= box, axis=1) & np.any(boxes < box, axis=1)
            if np.any(member_dominates):
                return ArchiveOutcome.REJECTED
            evicted = np.flatnonzero(np.all(box <= boxes, axis=1) & np.any(box < boxes, axis=1))
            for pos in sorted(evicted.tolist(), reverse=True):
                self._remove_at(pos)
        self._append(self._make_member(params, fitness, tag), box)
        return ArchiveOutcome.ADDED

    def _challenge_incumbent(
        self,
        pos: int,
        params: np.ndarray,
        fitness: IndexedFitness,
        tag: int | None,
        box: np.ndarray,
    ) -> ArchiveOutcome:
        incumbent = self._members[pos]
        comp, _ = self.scheme.hat_compare(fitness, incumbent.fitness)
        if comp >= 0:
            # equal keys keep the incumbent
            return ArchiveOutcome.REJECTED
        boxes = self._boxes[: len(self._members)]
        if np.any(np.all(box <= boxes, axis=1) & np.any(box < boxes, axis=1)):
            raise ArchiveInvariantError(
                "Occupied box dominates another archived box; archive is not non-dominated.",
                box=fitness.index,
            )
        self._untag(incumbent.tag)
        self._members[pos] = self._make_member(params, fitness, tag)
        self._retag(tag)
        return ArchiveOutcome.REPLACED

    def _make_member(self, params: np.ndarray, fitness: IndexedFitness, tag: int | None) -> ArchivedMember:
        stored = np.array(params, dtype=float)
        stored.setflags(write=False)
        return ArchivedMember(params=stored, fitness=fitness, tag=tag, timestamp=self._n_candidates)

    def _append(self, member: ArchivedMember, box: np.ndarray) -> None:
        n = len(self._members)
        if n == self._boxes.shape[0]:
            grown = np.empty((2 * n, self.n_obj), dtype=np.int64)
            grown[:n] = self._boxes
            self._boxes = grown
        self._boxes[n] = box
        self._positions[member.box] = n
        self._members.append(member)
        self._retag(member.tag)

    def _remove_at(self, pos: int) -> None:
        last = len(self._members) - 1
        member = self._members[pos]
        del self._positions[member.box]
        self._untag(member.tag)
        if pos != last:
            moved = self._members[last]
            self._members[pos] = moved
            self._boxes[pos] = self._boxes[last]
            self._positions[moved.box] = pos
        self._members.pop()

    def _retag(self, tag: int | None) -> None:
        if tag is not None:
            self._tag_counts[tag] = self._tag_counts.get(tag, 0) + 1

    def _untag(self, tag: int | None) -> None:
        if tag is None:
            return
        remaining = self._tag_counts[tag] - 1
        if remaining:
            self._tag_counts[tag] = remaining
        else:
            del self._tag_counts[tag]


__all__ = ["ArchiveOutcome", "ArchivedMember", "EpsBoxArchive"]
