"""Rider management: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.rider.rider import Rider


@ordering.command(part_of="Rider")
class RegisterRider:
    name = String(required=True, max_length=255)
    phone = String(max_length=50)
    user_id = Identifier()


@ordering.command(part_of="Rider")
class DeactivateRider:
    rider_id = Identifier(required=True)


@ordering.command_handler(part_of=Rider)
class ManageRiderHandler:
    @handle(RegisterRider)
    def register_rider(self, command):
        rider = Rider.register(name=command.name, phone=command.phone, user_id=command.user_id)
        current_domain.repository_for(Rider).add(rider)
        return str(rider.id)

    @handle(DeactivateRider)
    def deactivate_rider(self, command):
        repo = current_domain.repository_for(Rider)
        rider = repo.get(command.rider_id)
        rider.deactivate()
        repo.add(rider)
