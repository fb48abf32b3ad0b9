"""Staff directory commands + handler: register and deactivate staff members."""

from notifications.domain import notifications
from notifications.staff.staff import StaffMember
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle


@notifications.command(part_of="StaffMember")
class RegisterStaffMember:
    user_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    role: String(required=True, max_length=20)


@notifications.command(part_of="StaffMember")
class DeactivateStaffMember:
    user_id: Identifier(required=True)


@notifications.command_handler(part_of=StaffMember)
class ManageStaffHandler:
    @handle(RegisterStaffMember)
    def register_staff_member(self, command: RegisterStaffMember):
        repo = current_domain.repository_for(StaffMember)
        if repo.find_by_user(command.user_id) is not None:
            raise ValidationError({"user_id": [f"User {command.user_id} is already registered as staff"]})

        member = StaffMember.register(
            user_id=command.user_id,
            name=command.name,
            role=str(command.role).upper(),
        )
        repo.add(member)
        return str(member.id)

    @handle(DeactivateStaffMember)
    def deactivate_staff_member(self, command: DeactivateStaffMember):
        repo = current_domain.repository_for(StaffMember)
        member = repo.find_by_user(command.user_id)
        if member is None:
            raise ObjectNotFoundError(f"No staff member for user {command.user_id}")
        member.deactivate()
        repo.add(member)
