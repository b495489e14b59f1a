"""Generators for areas, listings and staff."""

from property_sim.generators.area import AreaGenerator
from property_sim.generators.listing import ListingGenerator
from property_sim.generators.staff import StaffGenerator

__all__ = [
    "AreaGenerator",
    "ListingGenerator",
    "StaffGenerator",
]
