"""Scenarios for building game states."""

from property_sim.scenarios.new_game import NewGameScenario

__all__ = ["NewGameScenario"]
