"""Market and auction listing generator."""

from property_sim.engine.market import compute_base_value
from property_sim.generators.base import BaseGenerator
from property_sim.models.enums import ListingPool, PropertyType
from property_sim.models.property import Area, MarketProperty, PropertyFeatures
from property_sim.random_source import choice, chance, randint, uniform


class ListingGenerator(BaseGenerator):
    """Generate properties for sale in the market and auction pools."""

    PROPERTY_TYPES = list(PropertyType)

    # Starting condition (maintenance %) by pool
    MAINTENANCE_RANGES = {
        ListingPool.MARKET: (75, 100),
        ListingPool.AUCTION: (0, 49),
    }

    MARKET_LIFETIME_DAYS = (30, 730)
    AUCTION_LIFETIME_DAYS = 30

    GARDEN_CHANCE = 0.5
    PARKING_CHANCE = 0.4

    def generate_features(self) -> PropertyFeatures:
        return PropertyFeatures(
            property_type=choice(self.rand, self.PROPERTY_TYPES),
            bedrooms=randint(self.rand, 1, 5),
            has_garden=chance(self.rand, self.GARDEN_CHANCE),
            has_parking=chance(self.rand, self.PARKING_CHANCE),
        )

    def generate_district_modifier(self) -> float:
        """Heavy-tailed valuation factor: cube of a uniform draw in [1, 10]."""
        return uniform(self.rand, 1, 10) ** 3

    def generate(self, areas: list[Area], pool: ListingPool = ListingPool.MARKET) -> MarketProperty:
        """Generate a listing in a random area.

        Parameters
        ----------
        areas : list[Area]
            Candidate areas; one is picked uniformly.
        pool : ListingPool
            Pool the listing is destined for; drives condition and lifetime.

        Returns
        -------
        MarketProperty
            Generated listing.
        """
        features = self.generate_features()
        area = choice(self.rand, areas)
        district_modifier = self.generate_district_modifier()
        low, high = self.MAINTENANCE_RANGES[pool]

        if pool == ListingPool.AUCTION:
            lifetime = self.AUCTION_LIFETIME_DAYS
        else:
            lifetime = randint(self.rand, *self.MARKET_LIFETIME_DAYS)

        return MarketProperty(
            listing_id=self.new_id(),
            name=f"{self.fake.building_number()} {self.fake.street_name()}",
            base_value=compute_base_value(features, area, district_modifier),
            features=features,
            area=area.name,
            district=area.district,
            district_modifier=district_modifier,
            maintenance=float(randint(self.rand, low, high)),
            days_until_removal=lifetime,
        )
