"""Pytest configuration and fixtures."""

from typing import Callable

import pytest

from property_sim.engine.economy import create_initial_economy
from property_sim.generators.listing import ListingGenerator
from property_sim.models import (
    Area,
    District,
    GameDate,
    GameState,
    GameTime,
    MarketProperty,
    Player,
    Property,
    PropertyFeatures,
    PropertyType,
    VacantSettings,
)
from property_sim.random_source import RandomSource


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def always() -> RandomSource:
    """Random source under which every roll succeeds."""
    return lambda: 0.0


@pytest.fixture
def never() -> RandomSource:
    """Random source under which every roll fails."""
    return lambda: 0.999999


@pytest.fixture
def today() -> GameDate:
    return GameDate(2025, 1, 15)


@pytest.fixture
def sample_area() -> Area:
    """Average area: every rating 3, quality modifier 1.0."""
    return Area(
        name="Millbrook",
        district=District.OUTSKIRTS,
        crime=3,
        schools=3,
        transport=3,
        economy=3,
    )


@pytest.fixture
def make_property(sample_area: Area, today: GameDate) -> Callable[..., Property]:
    """Factory for owned properties in the sample area."""

    def _make(
        property_id: str = "prop-001",
        base_value: float = 10000.0,
        maintenance: float = 100.0,
        **overrides: object,
    ) -> Property:
        prop = Property(
            property_id=property_id,
            name=f"{property_id} Test Street",
            base_value=base_value,
            purchase_base_value=base_value,
            purchase_price=base_value * (0.5 + maintenance / 200),
            purchase_date=today,
            features=PropertyFeatures(
                property_type=PropertyType.TERRACED,
                bedrooms=2,
                has_garden=False,
                has_parking=False,
            ),
            area=sample_area.name,
            district=sample_area.district,
            district_modifier=10.0,
            vacant_settings=VacantSettings(rent_markup=5, period_months=12),
            maintenance=maintenance,
        )
        for name, value in overrides.items():
            setattr(prop, name, value)
        return prop

    return _make


@pytest.fixture
def make_listing(sample_area: Area) -> Callable[..., MarketProperty]:
    """Factory for market or auction listings in the sample area."""

    def _make(
        listing_id: str = "listing-001",
        base_value: float = 20000.0,
        maintenance: float = 100.0,
        **overrides: object,
    ) -> MarketProperty:
        listing = MarketProperty(
            listing_id=listing_id,
            name=f"{listing_id} Market Road",
            base_value=base_value,
            features=PropertyFeatures(
                property_type=PropertyType.FLAT,
                bedrooms=1,
                has_garden=False,
                has_parking=False,
            ),
            area=sample_area.name,
            district=sample_area.district,
            district_modifier=10.0,
            maintenance=maintenance,
        )
        for name, value in overrides.items():
            setattr(listing, name, value)
        return listing

    return _make


@pytest.fixture
def state(sample_area: Area, today: GameDate) -> GameState:
    """Minimal state: 50000 cash, one area, no properties or listings."""
    return GameState(
        player=Player(cash=50000.0, savings_baseline=50000.0),
        areas=[sample_area],
        economy=create_initial_economy(),
        game_time=GameTime(current_date=today),
    )


@pytest.fixture
def listing_generator(seed: int) -> ListingGenerator:
    return ListingGenerator(seed=seed)
