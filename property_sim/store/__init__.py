"""Stateful game store."""

from property_sim.store.game import GameStore

__all__ = ["GameStore"]
