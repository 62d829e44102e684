"""Customer records and address verification."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...models.domain import AddressVerification
from ...schemas.customers import CustomerModel
from ..base import ResourceService

if TYPE_CHECKING:
    from ..geocoding.service import GeocodingService

logger = logging.getLogger(__name__)


class CustomerService(ResourceService[CustomerModel]):
    collection = "customers"
    label = "Customer"
    record_model = CustomerModel

    def exists(self, customer_id: str) -> bool:
        return any(raw.get("id") == customer_id for raw in self._load())

    def verify_address(
        self, customer_id: str, geocoder: "GeocodingService"
    ) -> tuple[CustomerModel, AddressVerification]:
        """Geocode the stored address and record the outcome on the customer.

        A verified match replaces the address with the canonical place name
        and stores its coordinates. Anything else only clears ``verified``.
        If the address is edited while the geocoder is answering, the result
        is discarded with a ``ValidationError`` so the edit is kept.
        """
        customer = self.get(customer_id)
        result = geocoder.verify(customer.address)
        if result.verified:
            changes = {
                "address": result.address or customer.address,
                "latitude": result.latitude,
                "longitude": result.longitude,
                "verified": True,
            }
        else:
            changes = {"verified": False}
            logger.info("Address for customer %s not verified: %s", customer_id, result.message)
        return self.apply_changes(customer_id, changes, expected={"address": customer.address}), result
