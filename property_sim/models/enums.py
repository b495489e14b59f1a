"""Enumeration types for simulation entities."""

from enum import Enum


class PropertyType(str, Enum):
    FLAT = "FLAT"
    TERRACED = "TERRACED"
    SEMI_DETACHED = "SEMI_DETACHED"
    DETACHED = "DETACHED"


class District(str, Enum):
    INNER_CITY = "INNER_CITY"
    SUBURBS = "SUBURBS"
    OUTSKIRTS = "OUTSKIRTS"


class MortgageType(str, Enum):
    STANDARD = "STANDARD"
    BTL = "BTL"  # buy-to-let, interest-only


class EconomicPhase(str, Enum):
    RECESSION = "RECESSION"
    RECOVERY = "RECOVERY"
    EXPANSION = "EXPANSION"
    PEAK = "PEAK"


class StaffType(str, Enum):
    ESTATE_AGENT = "ESTATE_AGENT"
    CARETAKER = "CARETAKER"


class ListingPool(str, Enum):
    MARKET = "MARKET"
    AUCTION = "AUCTION"
