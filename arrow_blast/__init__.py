# Arrow Blast Source Package
"""
Arrow Blast - puzzle rules engine and level generator.

Modules:
- game: Grid state, escape checks, slot queue, gravity, win/loss and the engine
- generator: Procedural level generation and solvability analysis
- levels: JSON level persistence and level sequencing
- core: Abstract interfaces for game adapters and environments
- utils: Configuration and logging setup
"""

__version__ = "1.0.0"
