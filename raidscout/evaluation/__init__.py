"""
Evaluation Module
=================

Scoring of reconstructed raids against user preferences.
"""

from .rotation_filter import (
    count_rotation_matches,
    rotation_matches,
    split_segments,
    MIN_SEGMENT_MATCHES,
)

__all__ = [
    'count_rotation_matches',
    'rotation_matches',
    'split_segments',
    'MIN_SEGMENT_MATCHES',
]
