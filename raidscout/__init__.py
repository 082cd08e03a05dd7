"""
Raidscout - Raid Layout Reconstruction
======================================

Reconstructs the room grid of a procedurally assembled raid instance from a
tile snapshot, classifies every chamber, matches the result against a catalog
of known layouts and orders the combat rooms into a rotation.

Submodules:
- core: Definitions, template table, result data classes
- data: Tile snapshots, grid scanner, room classifier
- layout: Layout code encoder, catalog and matcher
- solver: Rotation solver
- evaluation: Rotation whitelist filter
- pipeline: End-to-end pipeline and raid tracker
- utils: Configuration

Pipeline:
    Stage 1: GridScanner     - Anchor search and slot enumeration
    Stage 2: RoomClassifier  - Template -> room classification
    Stage 3: encode_layout   - Room grid -> canonical code
    Stage 4: LayoutMatcher   - Code -> catalog layout
    Stage 5: RotationSolver  - Combat rooms -> encounter order
"""

__version__ = "1.0.0"

__all__ = ['core', 'data', 'layout', 'solver', 'evaluation', 'pipeline', 'utils']
