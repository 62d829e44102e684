"""Round (service route) records and membership."""

from __future__ import annotations

from ...schemas.customers import CustomerModel
from ...schemas.rounds import RoundModel
from ..base import ResourceService
from ..customers import CustomerService
from ..geospatial import within_radius_km


class RoundService(ResourceService[RoundModel]):
    collection = "rounds"
    label = "Round"
    record_model = RoundModel

    def members(self, round_id: str) -> list[CustomerModel]:
        """Customers listed on the round plus verified customers inside its area.

        Results follow customer collection order. Unverified customers sit at
        the (0, 0) placeholder and are never matched by area.
        """
        round_record = self.get(round_id)
        listed = set(round_record.customers or ())
        area = round_record.area

        members: list[CustomerModel] = []
        for customer in CustomerService(self.store).list():
            if customer.id in listed:
                members.append(customer)
                continue
            if area is None or area.radius is None or not customer.verified:
                continue
            if within_radius_km(
                customer.latitude,
                customer.longitude,
                area.center.latitude,
                area.center.longitude,
                area.radius,
            ):
                members.append(customer)
        return members
