"""Base generator class for all game-content generators."""

from __future__ import annotations

from abc import ABC

from faker import Faker

from property_sim.random_source import RandomSource, seeded


class BaseGenerator(ABC):
    """Base class for all generators.

    Faker supplies cosmetic values (names, street names, ids). Every value
    that affects the simulation (features, ratings, maintenance, lifetimes)
    is drawn from ``rand`` so outcomes stay reproducible under an injected
    random source.

    Parameters
    ----------
    rand : RandomSource | None
        Uniform random source for simulation-relevant draws.
    seed : int | None
        Seed for Faker and, when ``rand`` is omitted, for the random source.
    locale : str
        Faker locale (default ``en_GB``).
    """

    def __init__(
        self,
        rand: RandomSource | None = None,
        seed: int | None = None,
        locale: str = "en_GB",
    ) -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
        self.rand = rand or seeded(seed)

    def new_id(self) -> str:
        """Return a unique identifier."""
        return self.fake.uuid4()
