"""Project Member Routes — membership listing and management.

Invariants:
    - Listing requires membership, admins included
    - Writes need admin or project owner/manager
    - Owners removable by admins only (400 otherwise)
"""

from uuid import uuid4

import pytest
from sqlalchemy import select

from app.models.project import ProjectMember
from tests.services.factories import as_user, make_project, make_user


@pytest.fixture
async def team(test_db):
    admin = await make_user(test_db, role="admin")
    owner = await make_user(test_db, first_name="Olga")
    manager = await make_user(test_db)
    member = await make_user(test_db)
    newcomer = await make_user(test_db)
    project = await make_project(test_db, members=(
        (owner, "owner"), (manager, "manager"), (member, "member"),
    ))
    return {
        "admin": admin, "owner": owner, "manager": manager,
        "member": member, "newcomer": newcomer, "project": project,
    }


def _url(team) -> str:
    return f"/api/v1/projects/{team['project'].id}/members"


async def _role_of(read_db, project, user):
    async with read_db() as db:
        return (await db.execute(
            select(ProjectMember.role)
            .where(ProjectMember.project_id == project.id)
            .where(ProjectMember.user_id == user.id),
        )).scalar_one_or_none()


# ─── List ────────────────────────────────────────────────────────

async def test_member_lists_members_with_users(client, team):
    res = await client.get(_url(team), headers=as_user(team["member"]))
    assert res.status_code == 200
    members = res.json()
    assert {m["role"] for m in members} == {"owner", "manager", "member"}
    owner = next(m for m in members if m["role"] == "owner")
    assert owner["user"]["email"] == team["owner"].email
    assert owner["user"]["first_name"] == "Olga"


async def test_non_member_cannot_list(client, team):
    res = await client.get(_url(team), headers=as_user(team["newcomer"]))
    assert res.status_code == 403


async def test_admin_without_membership_cannot_list(client, team):
    res = await client.get(_url(team), headers=as_user(team["admin"]))
    assert res.status_code == 403


async def test_unknown_project_returns_404(client, team):
    res = await client.get(
        f"/api/v1/projects/{uuid4()}/members", headers=as_user(team["admin"]),
    )
    assert res.status_code == 404


# ─── Add ─────────────────────────────────────────────────────────

async def test_owner_adds_member(client, team, read_db):
    res = await client.post(
        _url(team), json={"userId": str(team["newcomer"].id), "role": "manager"},
        headers=as_user(team["owner"]),
    )
    assert res.status_code == 201
    assert res.json()["role"] == "manager"
    assert res.json()["user"]["id"] == str(team["newcomer"].id)
    assert await _role_of(read_db, team["project"], team["newcomer"]) == "manager"


async def test_unknown_role_stored_as_member(client, team, read_db):
    res = await client.post(
        _url(team), json={"userId": str(team["newcomer"].id), "role": "viewer"},
        headers=as_user(team["admin"]),
    )
    assert res.status_code == 201
    assert await _role_of(read_db, team["project"], team["newcomer"]) == "member"


async def test_adding_existing_member_returns_409(client, team):
    res = await client.post(
        _url(team), json={"userId": str(team["member"].id)},
        headers=as_user(team["owner"]),
    )
    assert res.status_code == 409


async def test_adding_unknown_user_returns_404(client, team):
    res = await client.post(
        _url(team), json={"userId": str(uuid4())}, headers=as_user(team["owner"]),
    )
    assert res.status_code == 404


async def test_plain_member_cannot_add(client, team):
    res = await client.post(
        _url(team), json={"userId": str(team["newcomer"].id)},
        headers=as_user(team["member"]),
    )
    assert res.status_code == 403


async def test_invalid_user_id_returns_400(client, team):
    res = await client.post(
        _url(team), json={"userId": "nope"}, headers=as_user(team["owner"]),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── Change role ─────────────────────────────────────────────────

async def test_manager_changes_role(client, team, read_db):
    res = await client.patch(
        _url(team), json={"userId": str(team["member"].id), "role": "manager"},
        headers=as_user(team["manager"]),
    )
    assert res.status_code == 200
    assert res.json()["role"] == "manager"
    assert await _role_of(read_db, team["project"], team["member"]) == "manager"


async def test_change_role_of_non_member_returns_404(client, team):
    res = await client.patch(
        _url(team), json={"userId": str(team["newcomer"].id), "role": "manager"},
        headers=as_user(team["owner"]),
    )
    assert res.status_code == 404


# ─── Remove ──────────────────────────────────────────────────────

async def test_owner_removes_member(client, team, read_db):
    res = await client.request(
        "DELETE", _url(team), json={"userId": str(team["member"].id)},
        headers=as_user(team["owner"]),
    )
    assert res.status_code == 204
    assert await _role_of(read_db, team["project"], team["member"]) is None


async def test_manager_cannot_remove_owner(client, team, read_db):
    res = await client.request(
        "DELETE", _url(team), json={"userId": str(team["owner"].id)},
        headers=as_user(team["manager"]),
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Cannot remove owner"
    assert await _role_of(read_db, team["project"], team["owner"]) == "owner"


async def test_admin_removes_owner(client, team, read_db):
    res = await client.request(
        "DELETE", _url(team), json={"userId": str(team["owner"].id)},
        headers=as_user(team["admin"]),
    )
    assert res.status_code == 204
    assert await _role_of(read_db, team["project"], team["owner"]) is None
