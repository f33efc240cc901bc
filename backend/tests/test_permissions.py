import pytest
from sqlmodel import Session

from ringside.models.permission import Permission
from ringside.models.role import Role
from ringside.models.user import User
from ringside.services.permissions import assign_role, give_permission_to, has_permission, has_role


@pytest.fixture
def user(session: Session) -> User:
    user = User(name="Booker", email="booker@example.com")
    session.add(user)
    session.flush()
    return user


@pytest.fixture
def role(session: Session) -> Role:
    role = Role(name="Administrator", slug="administrator")
    session.add(role)
    session.flush()
    return role


def test_a_user_can_be_assigned_a_role(session: Session, user: User, role: Role):
    assign_role(session, user, role)

    assert has_role(user, role)
    assert has_role(user, "administrator")
    assert not has_role(user, "editor")


def test_assigning_a_role_twice_keeps_one_link(session: Session, user: User, role: Role):
    assign_role(session, user, role)
    assign_role(session, user, role)

    assert len(user.roles) == 1


def test_a_user_with_a_role_has_a_given_permission(session: Session, user: User, role: Role):
    permission = Permission(name="Create Match", slug="create-match")
    session.add(permission)
    session.flush()

    assign_role(session, user, role)
    give_permission_to(session, role, permission)

    assert has_permission(session, user, "create-match")
    assert not has_permission(session, user, "delete-event")


def test_a_user_without_roles_has_no_permissions(session: Session, user: User):
    assert not has_permission(session, user, "create-match")
