"""Customer account management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering


@ordering.command(part_of="Customer")
class RegisterCustomer:
    name = String(required=True, max_length=255)
    phone = String(max_length=50)
    house_no = String(max_length=100)
    street_no = String(max_length=100)
    area = String(max_length=255)
    city = String(max_length=100)
    is_walkin = Boolean(default=False)


@ordering.command(part_of="Customer")
class DeactivateCustomer:
    customer_id = Identifier(required=True)


@ordering.command(part_of="Customer")
class ReactivateCustomer:
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=Customer)
class ManageCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        customer = Customer.register(
            name=command.name,
            phone=command.phone,
            house_no=command.house_no,
            street_no=command.street_no,
            area=command.area,
            city=command.city,
            is_walkin=bool(command.is_walkin),
        )
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)

    @handle(DeactivateCustomer)
    def deactivate_customer(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.deactivate()
        repo.add(customer)

    @handle(ReactivateCustomer)
    def reactivate_customer(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.reactivate()
        repo.add(customer)
