"""City area generator."""

from property_sim.generators.base import BaseGenerator
from property_sim.models.enums import District
from property_sim.models.property import Area
from property_sim.random_source import randint

AREA_NAMES: dict[District, list[str]] = {
    District.INNER_CITY: ["Old Town", "Riverside", "Market Quarter"],
    District.SUBURBS: ["Greenfield", "Oakwood", "Hillcrest"],
    District.OUTSKIRTS: ["Millbrook", "Fenmoor", "Ashby Vale"],
}


class AreaGenerator(BaseGenerator):
    """Generate the fixed set of city areas with random starting ratings."""

    def generate_all(self) -> list[Area]:
        """Generate one Area per configured name.

        Returns
        -------
        list[Area]
            Areas ordered by district, then name.
        """
        return [
            Area(
                name=name,
                district=district,
                crime=randint(self.rand, 1, 5),
                schools=randint(self.rand, 1, 5),
                transport=randint(self.rand, 1, 5),
                economy=randint(self.rand, 1, 5),
            )
            for district, names in AREA_NAMES.items()
            for name in names
        ]
