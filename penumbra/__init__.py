"""Roguelike game rules: commit and calendar data, entities, combat, AI, field of view and persistence."""

__version__ = "0.1.0"