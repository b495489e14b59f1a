"""Simulation engine: pure calculations and the day-advance orchestrator."""
