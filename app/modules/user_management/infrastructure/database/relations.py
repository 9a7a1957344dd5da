"""
Relationship expansion maps for user management documents.
"""

from app.shared.infrastructure.database.populate import Relation

from .models import RoleModel, UserModel

ROLE_BRIEF = ("id", "name", "slug")
USER_BRIEF = ("id", "name", "username")
USER_CONTACT = ("id", "name", "username", "email")

USER_RELATIONS = {
    "roleId": Relation(RoleModel, ROLE_BRIEF),
}


def user_reference(fields=USER_CONTACT) -> Relation:
    """Relation used by other modules pointing at a user."""
    return Relation(UserModel, fields)
