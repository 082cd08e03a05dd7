"""
Solver Module
=============

Rotation solving for combat rooms.

Classes:
    RotationSolver: Constraint-ordered rotation (networkx topological sort)
    RotationSolution: Solver result
"""

from .rotation_solver import RotationSolver, RotationSolution, solve_rotation

__all__ = [
    'RotationSolver',
    'RotationSolution',
    'solve_rotation',
]
