"""Tests for the grid archive.

This module tests:
- Archive insertion policy: rejection, replacement, pruning
- Antichain and capacity invariants under random insertion sequences
- Read access: cells, summary, coverage, snapshots
- Global front extraction
"""

import logging

import numpy as np
import pytest

from mome import Archive, InsertOutcome, Individual, dominates, dominates_matrix


def _assert_invariants(archive: Archive) -> None:
    for _, members in archive.items():
        assert len(members) <= archive.max_per_cell
        for a in members:
            for b in members:
                assert not dominates(a.objectives, b.objectives)


# =============================================================================
# TestArchiveConstruction
# =============================================================================


class TestArchiveConstruction:
    """Tests for Archive construction."""

    def test_starts_empty(self, archive: Archive) -> None:
        """A new archive holds nothing."""
        assert archive.is_empty
        assert len(archive) == 0
        assert archive.cells() == []

    def test_max_per_cell_coerced(self, caplog: pytest.LogCaptureFixture) -> None:
        """Capacity below 1 becomes 1 with a warning."""
        with caplog.at_level(logging.WARNING, logger="mome.archive"):
            archive = Archive(bins_per_dim=2, bounds=(0.0, 1.0), max_per_cell=0)
        assert archive.max_per_cell == 1
        assert "coerced to 1" in caplog.text

    def test_rejects_zero_bins(self) -> None:
        """At least one bin per axis is required."""
        with pytest.raises(ValueError, match="bins_per_dim must be at least 1"):
            Archive(bins_per_dim=0, bounds=(0.0, 1.0), max_per_cell=2)

    def test_rejects_inverted_bounds(self) -> None:
        """Bounds must be ordered."""
        with pytest.raises(ValueError, match="lower < upper"):
            Archive(bins_per_dim=2, bounds=(1.0, 0.0), max_per_cell=2)

    def test_unknown_pruning_strategy(self) -> None:
        """Unknown pruning names raise KeyError listing alternatives."""
        with pytest.raises(KeyError, match="crowding"):
            Archive(bins_per_dim=2, bounds=(0.0, 1.0), max_per_cell=2, prune="nope")


# =============================================================================
# TestInsert
# =============================================================================


class TestInsert:
    """Tests for the insertion policy."""

    def test_insert_into_empty_cell(self, archive: Archive, make_individual) -> None:
        """First individual of a cell is added."""
        outcome = archive.insert(make_individual([0.1, 0.1], [1.0, 1.0]))
        assert outcome is InsertOutcome.ADDED
        assert archive.cells() == [(0, 0)]
        assert len(archive) == 1

    def test_cell_routing(self, archive: Archive, make_individual) -> None:
        """Individuals are routed by their first two variables."""
        archive.insert(make_individual([0.9, 0.1], [1.0, 1.0]))
        archive.insert(make_individual([0.1, 0.9], [1.0, 1.0]))
        assert archive.cells() == [(0, 1), (1, 0)]

    def test_dominated_candidate_rejected(self, archive: Archive, make_individual) -> None:
        """A candidate dominated by a cell member is discarded."""
        best = make_individual([0.1, 0.1], [1.0, 1.0])
        archive.insert(best)
        outcome = archive.insert(make_individual([0.2, 0.2], [2.0, 2.0]))
        assert outcome is InsertOutcome.REJECTED
        assert archive.cell((0, 0)) == [best]

    def test_equal_candidate_is_kept(self, archive: Archive, make_individual) -> None:
        """Equal objective vectors do not dominate each other."""
        archive.insert(make_individual([0.1, 0.1], [1.0, 1.0]))
        outcome = archive.insert(make_individual([0.2, 0.2], [1.0, 1.0]))
        assert outcome is InsertOutcome.ADDED
        assert len(archive.cell((0, 0))) == 2

    def test_dominating_candidate_replaces_members(self, archive: Archive, make_individual) -> None:
        """Members dominated by the candidate are removed."""
        archive.insert(make_individual([0.1, 0.1], [2.0, 3.0]))
        archive.insert(make_individual([0.2, 0.2], [3.0, 2.0]))
        best = make_individual([0.3, 0.3], [1.0, 1.0])

        outcome = archive.insert(best)

        assert outcome is InsertOutcome.ADDED
        assert archive.cell((0, 0)) == [best]

    def test_partial_replacement(self, archive: Archive, make_individual) -> None:
        """Only the dominated members are removed; others stay in order."""
        a = make_individual([0.1, 0.1], [1.0, 4.0])
        b = make_individual([0.2, 0.2], [3.0, 3.0])
        archive.insert(a)
        archive.insert(b)
        c = make_individual([0.3, 0.3], [2.0, 2.0])

        archive.insert(c)

        assert archive.cell((0, 0)) == [a, c]

    def test_rejection_leaves_other_cells(self, archive: Archive, make_individual) -> None:
        """Insertion only touches the target cell."""
        other = make_individual([0.9, 0.9], [5.0, 5.0])
        archive.insert(other)
        archive.insert(make_individual([0.1, 0.1], [0.0, 0.0]))
        assert archive.cell((1, 1)) == [other]

    def test_rejected_insert_does_not_create_cell(self, make_individual) -> None:
        """A rejected candidate leaves no empty cell behind."""
        archive = Archive(bins_per_dim=2, bounds=(0.0, 1.0), max_per_cell=1)
        archive.insert(make_individual([0.1, 0.1], [0.0, 0.0]))
        archive.insert(make_individual([0.2, 0.2], [1.0, 1.0]))
        assert archive.cells() == [(0, 0)]

    def test_idempotent_rejection(self, archive: Archive, make_individual) -> None:
        """Offering the same dominated individual twice changes nothing."""
        archive.insert(make_individual([0.1, 0.1], [1.0, 1.0]))
        dominated = make_individual([0.2, 0.2], [2.0, 2.0])

        first = archive.insert(dominated)
        snapshot = archive.to_population()
        second = archive.insert(dominated)

        assert first is second is InsertOutcome.REJECTED
        after = archive.to_population()
        np.testing.assert_array_equal(after.x, snapshot.x)
        np.testing.assert_array_equal(after.objectives, snapshot.objectives)

    def test_over_capacity_prunes_crowded_member(self, archive: Archive, make_individual) -> None:
        """The most crowded member goes when a cell overflows."""
        archive.insert(make_individual([0.1, 0.1], [0.0, 1.0]))
        crowded = make_individual([0.1, 0.2], [0.4, 0.6])
        archive.insert(crowded)
        archive.insert(make_individual([0.1, 0.3], [1.0, 0.0]))

        outcome = archive.insert(make_individual([0.1, 0.4], [0.5, 0.5]))

        assert outcome is InsertOutcome.PRUNED
        members = archive.cell((0, 0))
        assert len(members) == 3
        assert crowded not in members

    def test_candidate_can_be_pruned_itself(self, archive: Archive, make_individual) -> None:
        """A non-dominated but crowded candidate is discarded."""
        archive.insert(make_individual([0.1, 0.1], [0.0, 1.0]))
        archive.insert(make_individual([0.1, 0.2], [0.5, 0.5]))
        archive.insert(make_individual([0.1, 0.3], [1.0, 0.0]))
        before = archive.cell((0, 0))

        outcome = archive.insert(make_individual([0.1, 0.4], [0.45, 0.55]))

        assert outcome is InsertOutcome.DISCARDED
        assert archive.cell((0, 0)) == before

    def test_capacity_one_keeps_newest_tradeoff(self, make_individual) -> None:
        """With capacity 1 a non-dominated newcomer replaces the incumbent."""
        archive = Archive(bins_per_dim=1, bounds=(0.0, 1.0), max_per_cell=1)
        archive.insert(make_individual([0.5], [0.0, 1.0]))
        newcomer = make_individual([0.6], [1.0, 0.0])
        outcome = archive.insert(newcomer)
        assert outcome is InsertOutcome.PRUNED
        assert archive.cell((0, 0)) == [newcomer]

    def test_rejects_unevaluated(self, archive: Archive) -> None:
        """Unevaluated individuals cannot enter the archive."""
        with pytest.raises(ValueError, match="evaluated"):
            archive.insert(Individual.unevaluated(np.array([0.1, 0.1]), n_obj=2))

    def test_accepts_infinite_objectives(self, archive: Archive, make_individual) -> None:
        """An evaluated +inf objective is stored and compared by dominance."""
        worst = make_individual([0.1, 0.1], [0.5, np.inf])
        assert archive.insert(worst) is InsertOutcome.ADDED
        better = make_individual([0.2, 0.2], [0.5, 1.0])
        assert archive.insert(better) is InsertOutcome.ADDED
        assert archive.cell((0, 0)) == [better]

    def test_rejects_nan_objectives(self, archive: Archive, make_individual) -> None:
        """NaN objectives cannot be ordered and are refused."""
        with pytest.raises(ValueError, match="NaN"):
            archive.insert(make_individual([0.1, 0.1], [np.nan, 1.0]))
        assert archive.is_empty

    def test_rejects_shape_change(self, archive: Archive, make_individual) -> None:
        """Every individual must have the same number of objectives."""
        archive.insert(make_individual([0.1, 0.1], [1.0, 1.0]))
        with pytest.raises(ValueError, match="archive holds"):
            archive.insert(make_individual([0.1, 0.1], [1.0, 1.0, 1.0]))

    def test_custom_pruner_is_used(self, make_individual) -> None:
        """A CellPruner callable can replace the default strategy."""

        def keep_first(objectives: np.ndarray, capacity: int) -> np.ndarray:
            return np.arange(capacity)

        archive = Archive(bins_per_dim=1, bounds=(0.0, 1.0), max_per_cell=1, prune=keep_first)
        first = make_individual([0.5], [0.0, 1.0])
        archive.insert(first)
        assert archive.insert(make_individual([0.6], [1.0, 0.0])) is InsertOutcome.DISCARDED
        assert archive.cell((0, 0)) == [first]

    def test_bad_pruner_output_raises(self, make_individual) -> None:
        """A pruner returning the wrong number of indices is an error."""

        def keep_none(objectives: np.ndarray, capacity: int) -> np.ndarray:
            return np.array([], dtype=int)

        archive = Archive(bins_per_dim=1, bounds=(0.0, 1.0), max_per_cell=1, prune=keep_none)
        archive.insert(make_individual([0.5], [0.0, 1.0]))
        with pytest.raises(ValueError, match="pruner must return 1 distinct indices"):
            archive.insert(make_individual([0.6], [1.0, 0.0]))


# =============================================================================
# TestInvariants
# =============================================================================


class TestInvariants:
    """Property-style tests over random insertion sequences."""

    @pytest.mark.parametrize("max_per_cell", [1, 2, 5])
    @pytest.mark.parametrize("prune", ["crowding", "crowding_static"])
    def test_antichain_and_capacity(self, rng: np.random.Generator, max_per_cell: int, prune: str) -> None:
        """Cells stay non-dominated and bounded after every insertion."""
        archive = Archive(bins_per_dim=3, bounds=(0.0, 1.0), max_per_cell=max_per_cell, prune=prune)
        for _ in range(300):
            x = rng.random(3)
            objectives = rng.random(2)
            archive.insert(Individual(x=x, objectives=objectives))
            _assert_invariants(archive)

    def test_three_objectives(self, rng: np.random.Generator) -> None:
        """Invariants hold with more than two objectives."""
        archive = Archive(bins_per_dim=2, bounds=(0.0, 1.0), max_per_cell=4)
        for _ in range(300):
            archive.insert(Individual(x=rng.random(2), objectives=rng.random(3)))
        _assert_invariants(archive)

    def test_memory_bound(self, rng: np.random.Generator) -> None:
        """Size never exceeds occupied cells times capacity."""
        archive = Archive(bins_per_dim=2, bounds=(0.0, 1.0), max_per_cell=3)
        for _ in range(500):
            archive.insert(Individual(x=rng.random(2), objectives=rng.random(2)))
            assert len(archive) <= archive.n_cells * archive.max_per_cell


# =============================================================================
# TestReadAccess
# =============================================================================


class TestReadAccess:
    """Tests for archive read access."""

    def test_absent_cell_is_empty(self, archive: Archive) -> None:
        """Absent cells look empty."""
        assert archive.cell((1, 1)) == []
        assert (1, 1) not in archive

    def test_cell_returns_copy(self, archive: Archive, make_individual) -> None:
        """Modifying the returned list does not change the archive."""
        archive.insert(make_individual([0.1, 0.1], [1.0, 1.0]))
        archive.cell((0, 0)).clear()
        assert len(archive.cell((0, 0))) == 1

    def test_contains(self, archive: Archive, make_individual) -> None:
        """Occupied cells are members."""
        archive.insert(make_individual([0.6, 0.1], [1.0, 1.0]))
        assert (1, 0) in archive

    def test_individuals_grouped_by_cell(self, archive: Archive, make_individual) -> None:
        """individuals() lists members cell by cell."""
        a = make_individual([0.9, 0.9], [1.0, 1.0])
        b = make_individual([0.1, 0.1], [1.0, 1.0])
        archive.insert(a)
        archive.insert(b)
        assert archive.individuals() == [b, a]

    def test_summary(self, archive: Archive, make_individual) -> None:
        """Summary reports cell count, mean and max set size."""
        archive.insert(make_individual([0.1, 0.1], [0.0, 1.0]))
        archive.insert(make_individual([0.2, 0.2], [1.0, 0.0]))
        archive.insert(make_individual([0.9, 0.9], [1.0, 1.0]))

        summary = archive.summary()

        assert summary.n_cells == 2
        assert summary.n_individuals == 3
        assert summary.mean_cell_size == pytest.approx(1.5)
        assert summary.max_cell_size == 2
        assert summary.coverage == pytest.approx(0.5)
        assert "Filled cells: 2" in str(summary)
        assert "(max: 2)" in str(summary)

    def test_summary_of_empty_archive(self, archive: Archive) -> None:
        """Empty archive summary has zeros."""
        summary = archive.summary()
        assert summary.n_cells == 0
        assert summary.mean_cell_size == 0.0
        assert summary.max_cell_size == 0

    def test_describe_lists_cells_and_members(self, archive: Archive, make_individual) -> None:
        """describe() prints each cell in sorted order, then its members."""
        archive.insert(make_individual([0.75, 0.75], [1.0, 1.0]))
        archive.insert(make_individual([0.25, 0.25], [0.0, 2.0]))
        archive.insert(make_individual([0.125, 0.25], [2.0, 0.0]))

        assert archive.describe().splitlines() == [
            "=== MOME archive (detailed) ===",
            "Cell (0, 0), count=2",
            "  x=[0.25, 0.25] objectives=[0.0, 2.0]",
            "  x=[0.125, 0.25] objectives=[2.0, 0.0]",
            "Cell (1, 1), count=1",
            "  x=[0.75, 0.75] objectives=[1.0, 1.0]",
        ]
        assert str(archive) == archive.describe()

    def test_describe_empty_archive(self, archive: Archive) -> None:
        """An empty archive prints only the header."""
        assert archive.describe() == "=== MOME archive (detailed) ==="

    def test_to_population_of_empty_archive(self, archive: Archive) -> None:
        """An empty archive yields an empty population."""
        assert len(archive.to_population()) == 0


# =============================================================================
# TestGlobalFront
# =============================================================================


class TestGlobalFront:
    """Tests for global front extraction."""

    def test_front_crosses_cells(self, archive: Archive, make_individual) -> None:
        """Members of one cell can be dominated by members of another."""
        archive.insert(make_individual([0.1, 0.1], [0.0, 1.0]))
        archive.insert(make_individual([0.9, 0.1], [1.0, 0.0]))
        archive.insert(make_individual([0.9, 0.9], [2.0, 2.0]))

        front = archive.global_front()

        assert len(front) == 2
        assert {tuple(row) for row in front.objectives} == {(0.0, 1.0), (1.0, 0.0)}

    def test_front_is_non_dominated(self, rng: np.random.Generator) -> None:
        """No two points of the global front dominate each other."""
        archive = Archive(bins_per_dim=4, bounds=(0.0, 1.0), max_per_cell=3)
        for _ in range(400):
            archive.insert(Individual(x=rng.random(2), objectives=rng.random(2)))
        front = archive.global_front()
        assert len(front) > 0
        assert not np.any(dominates_matrix(front.objectives))

    def test_front_is_snapshot(self, archive: Archive, make_individual) -> None:
        """Later insertions do not change a previously extracted front."""
        archive.insert(make_individual([0.1, 0.1], [1.0, 1.0]))
        front = archive.global_front()
        archive.insert(make_individual([0.9, 0.9], [0.0, 0.0]))
        np.testing.assert_array_equal(front.objectives, [[1.0, 1.0]])

    def test_empty_archive_front(self, archive: Archive) -> None:
        """An empty archive has an empty front."""
        assert len(archive.global_front()) == 0
