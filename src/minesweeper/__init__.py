"""
Minesweeper board engine and game state controller.

Subpackages:
- engine: difficulty tiers, board construction, reveal propagation and
  win/loss rules
- controller: game sessions, transitions, dispatcher and automation env
- scoring: run submission contract for the scoring backend
"""

__version__ = "1.0.0"
