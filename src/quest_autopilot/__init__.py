"""Passive daily quest automation (egg hatching and underground mining quests)."""

__version__ = "0.1.0"
