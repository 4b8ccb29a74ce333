"""
Skirmish - Turn-Based Grid Tactics Engine

A rules engine for a two-player tactics game on a square grid.
The engine provides:
- Unit deployment with per-player credits
- Move and attack range calculation
- Combat resolution
- Turn rotation and win detection
"""

__version__ = "0.1.0"
