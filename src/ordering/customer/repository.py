"""Repository for the Customer aggregate."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering


def walkin_alias() -> str:
    """The reserved customer identifier that stands for anonymous walk-in traffic."""
    custom = current_domain.config.get("custom", {}) or {}
    return custom.get("WALKIN_CUSTOMER_ALIAS", "walkin")


@ordering.repository(part_of=Customer)
class CustomerRepository:
    def find_walkin(self) -> Customer:
        """Return the account that absorbs anonymous walk-in sales."""
        results = self._dao.query.filter(is_walkin=True).all().items
        if not results:
            raise ObjectNotFoundError("Walk-in customer account is not registered")
        return results[0]

    def resolve(self, customer_id) -> Customer:
        """Look up a customer, honouring the walk-in alias."""
        if str(customer_id) == walkin_alias():
            return self.find_walkin()
        return self.get(customer_id)
