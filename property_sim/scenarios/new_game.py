"""New game scenario: the starting city, economy, markets and starter home."""

from __future__ import annotations

import logging

from property_sim.config import SimConfig
from property_sim.engine.balance_sheet import calculate_net_worth
from property_sim.engine.economy import create_initial_economy
from property_sim.engine.market import INITIAL_POOL_SIZES, calculate_market_value, compute_base_value
from property_sim.generators import AreaGenerator, ListingGenerator, StaffGenerator
from property_sim.models.base import GameDate
from property_sim.models.enums import District, ListingPool, PropertyType
from property_sim.models.property import Area, Property, PropertyFeatures, VacantSettings
from property_sim.models.state import (
    GameState,
    GameTime,
    Markets,
    Player,
    Prestige,
    Settings,
    Tracking,
)
from property_sim.random_source import RandomSource, seeded

logger = logging.getLogger(__name__)

STARTER_PROPERTY_ID = "starter-home"
STARTER_PROPERTY_NAME = "Starter Home"
STARTER_DISTRICT = District.OUTSKIRTS
STARTER_DISTRICT_MODIFIER = 50.0
PRESTIGE_CASH_BONUS = 0.10


class NewGameScenario:
    """Build a fresh GameState.

    A new game has the nine city areas, a fresh economy, populated market
    and auction pools, and one starter flat in the outskirts owned outright.
    The scenario also owns the generators the running game keeps using for
    new listings and hires.
    """

    def __init__(
        self,
        starting_cash: float = 50000.0,
        start_date: GameDate = GameDate(2025, 1, 1),
        seed: int | None = None,
        *,
        rand: RandomSource | None = None,
        locale: str = "en_GB",
        config: SimConfig | None = None,
    ) -> None:
        """Initialize the new game scenario.

        Parameters
        ----------
        starting_cash : float
            Cash at prestige level 0.
        start_date : GameDate
            First day of the game.
        seed : int | None
            Seed for Faker and, when ``rand`` is omitted, the random source.
        rand : RandomSource | None
            Uniform random source shared with the generators.
        locale : str
            Faker locale for names.
        config : SimConfig | None
            Optional configuration. If provided, overrides starting_cash,
            start_date, seed and locale.
        """
        if config is not None:
            starting_cash = config.starting_cash
            start_date = config.start_date
            seed = config.seed
            locale = config.locale

        self.starting_cash = starting_cash
        self.start_date = start_date
        self.seed = seed
        self.rand = rand or seeded(seed)

        self.area_generator = AreaGenerator(rand=self.rand, seed=seed, locale=locale)
        self.listing_generator = ListingGenerator(rand=self.rand, seed=seed, locale=locale)
        self.staff_generator = StaffGenerator(rand=self.rand, seed=seed, locale=locale)

    def starting_cash_for(self, prestige_level: int) -> float:
        return self.starting_cash * (1 + PRESTIGE_CASH_BONUS * prestige_level)

    def generate(self, prestige: Prestige | None = None) -> GameState:
        """Generate a new game.

        Parameters
        ----------
        prestige : Prestige | None
            Prestige counters carried into the new game.

        Returns
        -------
        GameState
            Unpaused state on the start date.
        """
        prestige = prestige or Prestige()
        cash = self.starting_cash_for(prestige.level)
        areas = self.area_generator.generate_all()

        markets = Markets()
        for _ in range(INITIAL_POOL_SIZES[ListingPool.MARKET]):
            markets.market.append(self.listing_generator.generate(areas, ListingPool.MARKET))
        for _ in range(INITIAL_POOL_SIZES[ListingPool.AUCTION]):
            markets.auction.append(self.listing_generator.generate(areas, ListingPool.AUCTION))

        settings = Settings()
        state = GameState(
            player=Player(
                cash=cash,
                savings_baseline=cash,
                properties=[self._starter_home(areas, settings)],
            ),
            areas=areas,
            economy=create_initial_economy(),
            game_time=GameTime(current_date=self.start_date),
            settings=settings,
            markets=markets,
            prestige=Prestige(level=prestige.level, total_wins=prestige.total_wins),
        )
        state.tracking = Tracking(
            peak_net_worth=calculate_net_worth(state),
            peak_property_count=len(state.player.properties),
        )

        logger.info(
            "New game on %s: cash %.2f, prestige level %d, %d market and %d auction listings",
            self.start_date,
            cash,
            prestige.level,
            len(markets.market),
            len(markets.auction),
        )
        return state

    def _starter_home(self, areas: list[Area], settings: Settings) -> Property:
        area = next(a for a in areas if a.district == STARTER_DISTRICT)
        features = PropertyFeatures(
            property_type=PropertyType.FLAT,
            bedrooms=1,
            has_garden=False,
            has_parking=False,
        )
        base_value = compute_base_value(features, area, STARTER_DISTRICT_MODIFIER)
        prop = Property(
            property_id=STARTER_PROPERTY_ID,
            name=STARTER_PROPERTY_NAME,
            base_value=base_value,
            purchase_base_value=base_value,
            purchase_price=0.0,
            purchase_date=self.start_date,
            features=features,
            area=area.name,
            district=area.district,
            district_modifier=STARTER_DISTRICT_MODIFIER,
            vacant_settings=VacantSettings(
                rent_markup=settings.default_rent_markup,
                period_months=settings.default_period_months,
            ),
        )
        prop.purchase_price = calculate_market_value(prop)
        return prop
