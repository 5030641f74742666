"""
User Repository

Read access to club members, used to address tournament notifications.
"""

from ..domain.entities import Member
from ..models import UserModel
from .base import SqlRepository


class UserRepository(SqlRepository[UserModel, Member]):
    """Member store backing the /api/users endpoints; emails are unique."""

    model = UserModel
    entity_type = Member
    kind = "user"

    async def email_directory(self) -> dict[str, str]:
        """Map every member email to the member's first name."""
        return {member.email: member.first_name for member in await self.find_all()}
