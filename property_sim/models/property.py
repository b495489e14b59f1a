"""Property, tenancy and listing models."""

from dataclasses import dataclass

from property_sim.models.base import GameDate
from property_sim.models.enums import District, PropertyType


@dataclass
class PropertyFeatures:
    """Physical features fixed at generation."""

    property_type: PropertyType
    bedrooms: int  # 1-5
    has_garden: bool
    has_parking: bool


@dataclass
class Area:
    """City zone with 1-5 ratings that drift monthly."""

    name: str
    district: District
    crime: int
    schools: int
    transport: int
    economy: int

    @property
    def average_rating(self) -> float:
        return (self.crime + self.schools + self.transport + self.economy) / 4


@dataclass
class VacantSettings:
    """Terms offered when the property is next let."""

    rent_markup: int  # annual rent as % of market value, 1-10
    period_months: int  # 6, 12, 18 or 24


@dataclass
class Tenancy:
    """Active lease.

    ``market_value_at_start`` and ``base_rate_at_start`` are frozen at signing
    so the agreed rent is immune to later inflation and rate changes.
    """

    rent_markup: int
    period_months: int
    start_date: GameDate
    end_date: GameDate
    market_value_at_start: float
    base_rate_at_start: float


@dataclass
class SaleInfo:
    """Active for-sale listing."""

    asking_percentage: float
    asking_price: float
    listed_date: GameDate


@dataclass
class Property:
    """Real estate unit owned by the player."""

    property_id: str
    name: str
    base_value: float  # before maintenance discount, inflates with the economy
    purchase_base_value: float
    purchase_price: float
    purchase_date: GameDate
    features: PropertyFeatures
    area: str  # Area.name
    district: District
    district_modifier: float
    vacant_settings: VacantSettings
    maintenance: float = 100.0  # 0-100
    total_maintenance_paid: float = 0.0
    total_income_earned: float = 0.0
    is_under_maintenance: bool = False
    maintenance_start_date: GameDate | None = None
    maintenance_started_by: str | None = None  # caretaker id, None when ordered by the player
    tenancy: Tenancy | None = None
    sale_info: SaleInfo | None = None
    assigned_estate_agent: str | None = None
    assigned_caretaker: str | None = None
    listed_date: GameDate | None = None  # set while listed for rent


@dataclass
class MarketProperty:
    """Listing in the market or auction pool, not yet owned."""

    listing_id: str
    name: str
    base_value: float
    features: PropertyFeatures
    area: str
    district: District
    district_modifier: float
    maintenance: float
    days_on_market: int = 0
    days_until_removal: int = 30


@dataclass
class PropertySale:
    """History record of a sold property."""

    property_id: str
    name: str
    purchase_price: float
    purchase_date: GameDate
    sale_price: float
    sale_date: GameDate
    total_rent_income: float
    total_maintenance_paid: float
    total_mortgage_interest: float
