"""Root game state aggregate."""

from dataclasses import dataclass, field

from property_sim.models.balance_sheet import OverallBalanceSheet
from property_sim.models.base import GameDate
from property_sim.models.economy import Economy
from property_sim.models.mortgage import Mortgage
from property_sim.models.property import Area, MarketProperty, Property, PropertySale
from property_sim.models.staff import StaffMember

CURRENT_VERSION = 5

# Scheduler mapping: simulated day length in wall-clock seconds per speed
TIME_SPEED_SECONDS: dict[float, float] = {
    0.5: 10.0,
    1: 2.0,
    5: 0.5,
}


@dataclass
class Player:
    """Player finances and holdings."""

    cash: float
    savings_baseline: float  # what the starting cash would be worth in a savings account
    accrued_interest: float = 0.0
    total_interest_earned: float = 0.0
    total_staff_costs: float = 0.0
    total_mortgage_interest_paid: float = 0.0  # lifetime, survives payoff and remortgage
    total_mortgage_principal_paid: float = 0.0  # lifetime, monthly billing only
    properties: list[Property] = field(default_factory=list)
    mortgages: list[Mortgage] = field(default_factory=list)
    property_sales: list[PropertySale] = field(default_factory=list)


@dataclass
class Settings:
    """Player-wide defaults."""

    default_rent_markup: int = 5
    default_period_months: int = 12


@dataclass
class Markets:
    """Listing pools not yet owned by the player."""

    market: list[MarketProperty] = field(default_factory=list)
    auction: list[MarketProperty] = field(default_factory=list)


@dataclass
class StaffRoster:
    estate_agents: list[StaffMember] = field(default_factory=list)
    caretakers: list[StaffMember] = field(default_factory=list)


@dataclass
class GameTime:
    current_date: GameDate
    speed: float = 1
    is_paused: bool = False


@dataclass
class ForeclosureWarning:
    """Active grace countdown before game over."""

    start_date: GameDate
    days_remaining: int
    debt: float
    equity: float


@dataclass
class GameOver:
    """Terminal record with lifetime statistics."""

    date: GameDate
    reason: str
    days_played: int
    final_cash: float
    final_debt: float
    final_equity: float
    peak_net_worth: float
    peak_property_count: int
    properties_owned: int
    properties_sold: int
    total_rent_income: float
    total_interest_earned: float


@dataclass
class GameWin:
    date: GameDate
    net_worth: float
    days_played: int
    properties_owned: int
    prestige_level: int


@dataclass
class Prestige:
    level: int = 0
    total_wins: int = 0


@dataclass
class Tracking:
    peak_net_worth: float = 0.0
    peak_property_count: int = 0
    days_played: int = 0


@dataclass
class GameState:
    """Whole-game aggregate, replaced atomically by every command."""

    player: Player
    areas: list[Area]
    economy: Economy
    game_time: GameTime
    settings: Settings = field(default_factory=Settings)
    markets: Markets = field(default_factory=Markets)
    staff: StaffRoster = field(default_factory=StaffRoster)
    balance_sheet_history: list[OverallBalanceSheet] = field(default_factory=list)
    balance_sheets_taken: int = 0
    show_balance_sheet_modal: bool = False
    show_game_win_modal: bool = False
    show_prestige_modal: bool = False
    foreclosure_warning: ForeclosureWarning | None = None
    game_over: GameOver | None = None
    game_win: GameWin | None = None
    prestige: Prestige = field(default_factory=Prestige)
    tracking: Tracking = field(default_factory=Tracking)
    version: int = CURRENT_VERSION

    def find_property(self, property_id: str) -> Property | None:
        for prop in self.player.properties:
            if prop.property_id == property_id:
                return prop
        return None

    def find_area(self, name: str) -> Area | None:
        for area in self.areas:
            if area.name == name:
                return area
        return None

    def all_staff(self) -> list[StaffMember]:
        return [*self.staff.estate_agents, *self.staff.caretakers]
