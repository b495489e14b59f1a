"""Staff generator."""

from property_sim.generators.base import BaseGenerator
from property_sim.models.base import GameDate
from property_sim.models.enums import District, StaffType
from property_sim.models.staff import CaretakerRole, EstateAgentRole, StaffMember, StaffRole


class StaffGenerator(BaseGenerator):
    """Generate newly hired staff members."""

    def generate(
        self,
        staff_type: StaffType,
        district: District,
        salary: float,
        hired_date: GameDate,
        inflation_index: float = 1.0,
    ) -> StaffMember:
        """Generate a level-1 staff member with no experience.

        Parameters
        ----------
        staff_type : StaffType
            Estate agent or caretaker.
        district : District
            District the member works in.
        salary : float
            Monthly starting salary.
        hired_date : GameDate
            Date of hire.
        inflation_index : float
            Current economy inflation index, the starting point of the wage ratchet.

        Returns
        -------
        StaffMember
            Generated staff member.
        """
        role: StaffRole
        if staff_type == StaffType.ESTATE_AGENT:
            role = EstateAgentRole(last_adjustment_check=hired_date)
        else:
            role = CaretakerRole()

        return StaffMember(
            staff_id=self.new_id(),
            name=self.fake.name(),
            district=district,
            base_salary=salary,
            current_salary=salary,
            hired_date=hired_date,
            role=role,
            highest_inflation_index=inflation_index,
        )
