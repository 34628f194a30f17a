"""Per-phase diagnostics for the blocking-flow matching solver.

Each phase of the solver augments along shortest paths of a single length.
Recording that length together with the work done per phase makes the
classic guarantees checkable after the fact: the source-to-sink distance
strictly increases from phase to phase, and the number of phases is bounded
by the size of the left partition.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PhaseStats:
    """Work performed during one phase.

    Attributes:
        phase: 1-based phase number.
        distance: Source-to-sink distance of the level graph.
        augmentations: Augmenting paths applied.
        retreats: Dead-end nodes removed from the level graph.
        advances: Forward DFS steps taken.
    """

    phase: int
    distance: int
    augmentations: int
    retreats: int
    advances: int


@dataclass
class PhaseHistory:
    """Ordered record of PhaseStats for a single solve.

    Examples:
        >>> history = PhaseHistory()
        >>> history.record_phase(PhaseStats(1, 3, 2, 1, 7))
        >>> history.record_phase(PhaseStats(2, 5, 1, 0, 5))
        >>> history.is_distance_increasing()
        True
        >>> history.within_phase_bound(left_count=2)
        True
    """

    phases: list[PhaseStats] = field(default_factory=list)

    def record_phase(self, stats: PhaseStats) -> None:
        self.phases.append(stats)

    def __len__(self) -> int:
        return len(self.phases)

    @property
    def distances(self) -> list[int]:
        return [stats.distance for stats in self.phases]

    @property
    def total_augmentations(self) -> int:
        return sum(stats.augmentations for stats in self.phases)

    @property
    def total_retreats(self) -> int:
        return sum(stats.retreats for stats in self.phases)

    def is_distance_increasing(self) -> bool:
        """True if every phase used strictly longer augmenting paths than the last."""
        distances = self.distances
        return all(earlier < later for earlier, later in zip(distances, distances[1:]))

    def within_phase_bound(self, left_count: int) -> bool:
        """True if the phase count respects the left-partition bound.

        ``left_count + 1`` level-graph builds are allowed including the final
        one that finds no path, so at most ``left_count`` phases augment.
        """
        return len(self.phases) <= left_count

    def summary(self) -> dict[str, object]:
        return {
            "phases": len(self.phases),
            "distances": self.distances,
            "augmentations": self.total_augmentations,
            "retreats": self.total_retreats,
        }
