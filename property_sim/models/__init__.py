"""Domain models for the property simulation."""

from property_sim.models.balance_sheet import OverallBalanceSheet, PropertyBalanceSheet
from property_sim.models.base import GameDate
from property_sim.models.economy import Economy
from property_sim.models.enums import (
    District,
    EconomicPhase,
    ListingPool,
    MortgageType,
    PropertyType,
    StaffType,
)
from property_sim.models.mortgage import Mortgage
from property_sim.models.property import (
    Area,
    MarketProperty,
    Property,
    PropertyFeatures,
    PropertySale,
    SaleInfo,
    Tenancy,
    VacantSettings,
)
from property_sim.models.staff import CaretakerRole, EstateAgentRole, StaffMember, StaffRole
from property_sim.models.state import (
    CURRENT_VERSION,
    TIME_SPEED_SECONDS,
    ForeclosureWarning,
    GameOver,
    GameState,
    GameTime,
    GameWin,
    Markets,
    Player,
    Prestige,
    Settings,
    StaffRoster,
    Tracking,
)

__all__ = [
    "CURRENT_VERSION",
    "TIME_SPEED_SECONDS",
    "Area",
    "CaretakerRole",
    "District",
    "EconomicPhase",
    "Economy",
    "EstateAgentRole",
    "ForeclosureWarning",
    "GameDate",
    "GameOver",
    "GameState",
    "GameTime",
    "GameWin",
    "ListingPool",
    "MarketProperty",
    "Markets",
    "Mortgage",
    "MortgageType",
    "OverallBalanceSheet",
    "Player",
    "Prestige",
    "Property",
    "PropertyBalanceSheet",
    "PropertyFeatures",
    "PropertySale",
    "PropertyType",
    "SaleInfo",
    "Settings",
    "StaffMember",
    "StaffRole",
    "StaffRoster",
    "StaffType",
    "Tenancy",
    "Tracking",
    "VacantSettings",
]
