"""
Rotation Solver
===============

Stage 5 of the pipeline: order the combat rooms of a raid into a rotation.

Problem: every constraint (A, B) requires boss A to be fought before boss B
whenever both are present.

Strategy:
1. One graph node per combat room (keyed by traversal index)
2. One edge A -> B for every applicable constraint
3. Lexicographic topological sort, smallest traversal index first, so rooms
   the constraints leave unordered keep grid order (floor, then slot)

A cycle means the constraint set contradicts itself for this raid. It is
reported on the solution (or raised in strict mode) and the order falls back
to traversal order.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import networkx as nx

from raidscout.core.definitions import DEFAULT_ROTATION_CONSTRAINTS, Boss, RoomType
from raidscout.core.models import Room

logger = logging.getLogger(__name__)

Constraint = Tuple[Boss, Boss]


@dataclass(frozen=True)
class RotationSolution:
    """Result of solving a rotation."""
    order: Tuple[Room, ...]
    cycle: Optional[Tuple[Constraint, ...]] = None  # set when constraints contradict

    @property
    def consistent(self) -> bool:
        return self.cycle is None

    @property
    def bosses(self) -> Tuple[Boss, ...]:
        return tuple(room.boss for room in self.order)


class RotationSolver:
    """Orders combat rooms under pairwise before/after constraints."""

    def __init__(self, constraints: Iterable[Constraint] = DEFAULT_ROTATION_CONSTRAINTS):
        self.constraints: Tuple[Constraint, ...] = tuple(constraints)
        for before, after in self.constraints:
            if before is after:
                raise ValueError(f"Constraint orders {before.display_name} against itself")

    def build_graph(self, rooms: Sequence[Room]) -> nx.DiGraph:
        """Constraint graph over the given rooms (nodes are traversal indices)."""
        G = nx.DiGraph()
        for room in rooms:
            G.add_node(room.index, room=room)

        for before, after in self.constraints:
            for a in rooms:
                if a.boss is not before:
                    continue
                for b in rooms:
                    if b.boss is after:
                        G.add_edge(a.index, b.index, constraint=(before, after))
        return G

    def solve(self, combat_rooms: Iterable[Room], strict: bool = False) -> RotationSolution:
        """
        Compute the encounter order.

        Args:
            combat_rooms: Combat rooms of one raid (any order)
            strict: Raise instead of falling back when constraints form a cycle

        Returns:
            RotationSolution; `cycle` lists the offending constraints if any

        Raises:
            ValueError: for non-combat rooms, or a cycle in strict mode
        """
        rooms = sorted(combat_rooms, key=lambda r: r.index)
        for room in rooms:
            if room.type is not RoomType.COMBAT:
                raise ValueError(f"Rotation rooms must be COMBAT, got {room.type.name} at slot {room.index}")

        G = self.build_graph(rooms)
        try:
            order = list(nx.lexicographical_topological_sort(G))
        except nx.NetworkXUnfeasible:
            cycle = tuple(G.edges[u, v]['constraint'] for u, v in nx.find_cycle(G))
            description = ' -> '.join(f"{a.display_name} before {b.display_name}" for a, b in cycle)
            if strict:
                raise ValueError(f"Contradictory rotation constraints: {description}")
            logger.error(f"Contradictory rotation constraints ({description}); using grid order")
            return RotationSolution(order=tuple(rooms), cycle=cycle)

        return RotationSolution(order=tuple(G.nodes[n]['room'] for n in order))


def solve_rotation(combat_rooms: Iterable[Room],
                   constraints: Iterable[Constraint] = DEFAULT_ROTATION_CONSTRAINTS) -> Tuple[Room, ...]:
    """Shortcut: encounter order for the rooms under the given constraints."""
    return RotationSolver(constraints).solve(combat_rooms).order
