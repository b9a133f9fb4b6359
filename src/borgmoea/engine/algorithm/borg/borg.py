"""Borg MOEA core algorithm implementation.

Borg is a steady-state, auto-adaptive multi-objective evolutionary algorithm.
Each step recombines tournament-selected parents and one archive member with
an operator drawn from a self-adapting distribution, offers the offspring to
an epsilon-box dominance archive, and inserts it into the population. The
population is periodically resized and reseeded from the archive when it
drifts from the target population-to-archive ratio or the archive stagnates.

References:
    D. Hadka and P. Reed, "Borg: An Auto-Adaptive Many-Objective Evolutionary
    Computing Framework," Evolutionary Computation, vol. 21, no. 2, 2013.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from borgmoea.adaptation.logging import WeightsTraceRow
from borgmoea.engine.algorithm.config.borg import BorgConfigData
from borgmoea.engine.archive import EpsBoxArchive
from borgmoea.engine.population import Candidate, Population
from borgmoea.engine.selection import TournamentSelection, initial_tournament_size, restart_tournament_size
from borgmoea.foundation.fitness import IndexedFitness

from .helpers import Acceptance, ratio_drifted, restart_pop_size, scan_population
from .initialization import build_borg_components
from .state import BorgState

if TYPE_CHECKING:
    from borgmoea.foundation.problem.types import ProblemProtocol


__all__ = ["BorgMOEA"]


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class BorgMOEA:
    """Borg auto-adaptive multi-objective evolutionary algorithm.

    Parameters
    ----------
    problem : ProblemProtocol
        Problem exposing ``n_var``, ``n_obj``, bounds and ``evaluate(x)``
        returning a tuple of ``n_obj`` objective values.
    config : BorgConfigData, optional
        Algorithm settings; ``BorgConfigData()`` defaults when omitted.
    seed : int, optional
        Seed for the internal ``numpy`` generator. Ignored when ``rng`` is given.
    rng : np.random.Generator, optional
        Generator to draw all randomness from.

    Raises
    ------
    ConfigurationError
        If the problem has no objective tuple, the operator list is empty or a
        parameter is out of range. Nothing is validated lazily at step time.

    Examples
    --------
    >>> from borgmoea import BorgMOEA, BorgConfig, ZDT1Problem
    >>> algo = BorgMOEA(ZDT1Problem(10), BorgConfig().pop_size(50).epsilon(0.01).fixed(), seed=1)
    >>> for _ in range(1000):
    ...     algo.step()
    >>> X, F = algo.archive.contents()
    """

    def __init__(
        self,
        problem: "ProblemProtocol",
        config: BorgConfigData | None = None,
        *,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.cfg = config if config is not None else BorgConfigData()
        self.problem = problem
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        parts = build_borg_components(problem, self.cfg, self.rng)
        self.space = parts.space
        self.scheme = parts.scheme
        self.archive: EpsBoxArchive = parts.archive
        self.evaluator = parts.evaluator
        self.population: Population = parts.population
        self.operators = parts.operators
        self.portfolio = parts.portfolio
        self.weights = parts.weights
        self.mutation = parts.mutation
        self.embedding = parts.embedding
        self.selector = TournamentSelection(
            initial_tournament_size(self.cfg.tau, self.population.pop_size),
            self._compare_slots,
            self.rng,
        )
        self.state = BorgState()
        self.weights_trace: list[WeightsTraceRow] = []

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def n_steps(self) -> int:
        return self.state.n_steps

    @property
    def n_restarts(self) -> int:
        return self.state.n_restarts

    @property
    def n_evals(self) -> int:
        return self.evaluator.n_evals

    @property
    def pop_size(self) -> int:
        return self.population.pop_size

    @property
    def tournament_size(self) -> int:
        return self.selector.tournament_size

    def _compare_slots(self, a: int, b: int) -> int:
        fa = self.population.fitness(a)
        fb = self.population.fitness(b)
        return self.scheme.compare(fa, fb)

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def initialize(self) -> None:
        """
        Evaluate every unevaluated population slot (each one is offered to the archive).

        Called lazily by ``step()``. If the problem raises part way through, the
        slots evaluated so far are kept and the next call resumes from the
        first slot still missing a fitness.
        """
        if self.state.initialized:
            return
        pop = self.population
        for i in range(pop.pop_size):
            if pop.fitness(i) is not None:
                continue
            candidate = pop.acquire_candidate()
            candidate.params[:] = pop.params(i)
            candidate.index = i
            try:
                self.evaluator.update_fitness(candidate)
            except BaseException:
                pop.release(candidate)
                raise
            pop.accept(candidate)
        st = self.state
        st.initialized = True
        if st.refill_pending:
            self.archive.reset_progress()
            st.refill_pending = False
        _logger().debug("Population evaluated: pop.size=%d arch.size=%d", pop.pop_size, len(self.archive))

    def step(self) -> "BorgMOEA":
        """Take one Borg step: maybe restart, maybe adapt weights, produce offspring."""
        if not self.state.initialized:
            self.initialize()
        st = self.state
        cfg = self.cfg
        st.n_steps += 1

        if st.n_steps >= st.last_restart_check + cfg.restart_check_period:
            st.last_restart_check = st.n_steps
            if self.should_restart():
                self.restart()
        if st.n_steps >= st.last_weights_update + cfg.operators_update_period:
            self.update_weights()

        op_index = self.weights.sample(self.rng)
        operator = self.operators[op_index]
        parent_indices = self._select_parents(operator.n_parents)
        parents = np.vstack([self.population.params(i) for i in parent_indices])
        reference = parents[0].copy()
        children = operator(parents, self.rng)
        for child in children:
            candidate = self.population.acquire_candidate()
            candidate.params[:] = child
            self._process_candidate(candidate, op_index, reference)
        return self

    def _select_parents(self, n_parents: int) -> list[int]:
        pop = self.population
        if len(self.archive) == 0:
            return self.selector(pop.pop_size, n_parents)
        indices = self.selector(pop.pop_size, n_parents - 1)
        arch_ix = pop.transient_range()[0]
        member = self.archive.sample(self.rng)
        pop.set_member(arch_ix, member.params, member.fitness, member.tag)
        indices.append(arch_ix)
        return indices

    def _process_candidate(self, candidate: Candidate, op_index: int, reference: np.ndarray) -> Acceptance:
        candidate.tag = op_index
        try:
            self.embedding(candidate.params, reference, self.rng)
            fitness = self.evaluator.update_fitness(candidate)
            decision, slot = self.accept_offspring(fitness)
        except BaseException:
            self.population.release(candidate)
            raise
        st = self.state
        if decision is Acceptance.REJECT:
            self.population.release(candidate)
            st.n_rejected += 1
        else:
            self.population.accept(candidate, slot)
            if decision is Acceptance.REPLACE_DOMINATED:
                st.n_replaced_dominated += 1
            else:
                st.n_replaced_random += 1
        return decision

    def accept_offspring(self, fitness: IndexedFitness) -> tuple[Acceptance, int]:
        """
        Decide where an evaluated offspring goes.

        Population slots are visited in random order; the first incumbent that
        dominates the offspring rejects it and the first one it dominates is
        replaced. If no relation is found a uniformly random slot is replaced.
        """
        pop = self.population
        st = self.state
        if st.rand_check_order.shape[0] != pop.pop_size:
            st.rand_check_order = self.rng.permutation(pop.pop_size)
        return scan_population(
            st.rand_check_order,
            lambda ix: self.scheme.compare(fitness, pop.fitness(ix)),
            self.rng,
        )

    # -------------------------------------------------------------------------
    # Restarts and adaptation
    # -------------------------------------------------------------------------

    def should_restart(self) -> bool:
        archive_size = len(self.archive)
        if ratio_drifted(self.population.pop_size, archive_size, self.cfg.gamma, self.cfg.gamma_delta):
            return True
        return self.archive.candidates_without_progress >= self.cfg.max_steps_without_progress

    def restart(self) -> None:
        """
        Resize the population to ``max(pop_size, ceil(gamma * |A|))`` and refill it.

        The first ``min(|A|, new_size)`` slots receive archive members verbatim;
        the rest are mutated copies of random archive members, embedded against
        another random member. The new members are evaluated through
        ``initialize()``, so a failed evaluation leaves the refill to be resumed
        by the next ``step()``.
        """
        cfg = self.cfg
        pop = self.population
        members = self.archive.frontier()
        n_archived = len(members)
        new_size = restart_pop_size(cfg.pop_size, cfg.gamma, n_archived)
        pop.resize(new_size)

        n_copied = min(n_archived, new_size)
        for i in range(n_copied):
            pop.set_member(i, members[i].params, members[i].fitness, members[i].tag)
        for i in range(n_copied, new_size):
            if members:
                params = members[int(self.rng.integers(n_archived))].params.copy()
                self.mutation.mutate(params, self.rng)
                reference = members[int(self.rng.integers(n_archived))].params
                self.embedding(params, reference, self.rng)
            else:
                params = self.space.sample(1, self.rng)[0]
            pop.set_member(i, params, None, None)

        self.selector.tournament_size = restart_tournament_size(cfg.tau, new_size)
        st = self.state
        st.last_restart_check = st.n_steps
        st.n_restarts += 1
        _logger().debug(
            "Restart #%d at step %d: pop.size=%d (copied=%d, mutated=%d) tournament=%d",
            st.n_restarts,
            st.n_steps,
            new_size,
            n_copied,
            new_size - n_copied,
            self.selector.tournament_size,
        )
        st.initialized = False
        st.refill_pending = True
        self.initialize()

    def update_weights(self) -> list[float]:
        """Recompute operator weights from the archive's per-operator member counts."""
        counts = self.archive.tagcounts()
        probs = self.weights.update(counts)
        st = self.state
        st.last_weights_update = st.n_steps
        for idx, arm in enumerate(self.portfolio):
            self.weights_trace.append(
                WeightsTraceRow(
                    step=st.n_steps,
                    op_id=arm.op_id,
                    op_name=arm.name,
                    archive_count=counts.get(idx, 0),
                    weight=probs[idx],
                )
            )
        _logger().debug("Operator weights at step %d: %s", st.n_steps, self.weights)
        return probs

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def trace_state(self) -> str:
        """One-line summary of population, archive, operator weights and restarts."""
        weights = ", ".join(f"{arm.op_id}={p:.3f}" for arm, p in zip(self.portfolio, self.weights.probs()))
        return (
            f"pop.size={self.population.pop_size} arch.size={len(self.archive)} "
            f"weights=[{weights}] n_restarts={self.state.n_restarts}"
        )
