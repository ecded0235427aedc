"""Task Assignee Routes — assignee replacement and assignment notifications.

Invariants:
    - Newly added assignees get exactly one task_assigned notification
    - The actor and already-assigned users are never notified
    - Absent assigneeIds clears the assignee set
"""

from uuid import uuid4

import pytest
from sqlalchemy import select

from app.models.notification import Notification
from app.models.task import TaskAssignee
from tests.services.factories import as_user, make_project, make_task, make_user


@pytest.fixture
async def board(test_db):
    manager = await make_user(test_db, role="manager", first_name="Anna", last_name="Rossi")
    member = await make_user(test_db)
    u1 = await make_user(test_db)
    u2 = await make_user(test_db)
    u3 = await make_user(test_db)
    project = await make_project(test_db, name="Bilancio", members=((member, "member"),))
    task = await make_task(test_db, project, title="Preparare report")
    return {
        "manager": manager, "member": member,
        "u1": u1, "u2": u2, "u3": u3, "task": task,
    }


def _url(board) -> str:
    return f"/api/v1/tasks/{board['task'].id}/assignees"


async def _assignees(read_db, task) -> set[str]:
    async with read_db() as db:
        rows = (await db.execute(
            select(TaskAssignee.user_id).where(TaskAssignee.task_id == task.id),
        )).scalars().all()
    return {str(uid) for uid in rows}


async def _notifications(read_db) -> list[Notification]:
    async with read_db() as db:
        return list((await db.execute(select(Notification))).scalars().all())


async def test_new_assignees_notified_except_actor(client, board, read_db):
    ids = [str(board["u1"].id), str(board["u2"].id), str(board["manager"].id)]
    res = await client.put(
        _url(board), json={"assigneeIds": ids}, headers=as_user(board["manager"]),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["assignee_ids"] == ids
    assert body["notified_user_ids"] == ids[:2]

    notifications = await _notifications(read_db)
    assert {str(n.user_id) for n in notifications} == set(ids[:2])
    sample = notifications[0]
    assert sample.type == "task_assigned"
    assert sample.title == "Sei stato assegnato a una task"
    assert sample.message == "Anna Rossi ti ha assegnato: Preparare report (Bilancio)"
    assert sample.link == f"/tasks?taskId={board['task'].id}"
    assert sample.is_read is False


async def test_only_newcomers_notified_on_update(client, board, read_db):
    headers = as_user(board["manager"])
    await client.put(_url(board), json={"assigneeIds": [str(board["u1"].id), str(board["u2"].id)]}, headers=headers)
    res = await client.put(
        _url(board), json={"assigneeIds": [str(board["u2"].id), str(board["u3"].id)]},
        headers=headers,
    )
    assert res.json()["notified_user_ids"] == [str(board["u3"].id)]
    assert await _assignees(read_db, board["task"]) == {str(board["u2"].id), str(board["u3"].id)}
    assert len(await _notifications(read_db)) == 3


async def test_absent_assignee_ids_clears_assignees(client, board, read_db):
    headers = as_user(board["manager"])
    await client.put(_url(board), json={"assigneeIds": [str(board["u1"].id)]}, headers=headers)
    res = await client.put(_url(board), json={}, headers=headers)
    assert res.status_code == 200
    assert res.json()["assignee_ids"] == []
    assert await _assignees(read_db, board["task"]) == set()


async def test_duplicate_and_blank_ids_collapse(client, board, read_db):
    uid = str(board["u1"].id)
    res = await client.put(
        _url(board), json={"assigneeIds": [uid, f" {uid} ", "", uid.upper()]},
        headers=as_user(board["manager"]),
    )
    assert res.status_code == 200
    assert res.json()["assignee_ids"] == [uid]
    assert len(await _notifications(read_db)) == 1


async def test_non_list_assignee_ids_returns_400(client, board):
    res = await client.put(
        _url(board), json={"assigneeIds": "abc"}, headers=as_user(board["manager"]),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_unknown_user_returns_400_and_writes_nothing(client, board, read_db):
    res = await client.put(
        _url(board), json={"assigneeIds": [str(board["u1"].id), str(uuid4())]},
        headers=as_user(board["manager"]),
    )
    assert res.status_code == 400
    assert await _assignees(read_db, board["task"]) == set()
    assert await _notifications(read_db) == []


async def test_malformed_user_id_returns_400(client, board):
    res = await client.put(
        _url(board), json={"assigneeIds": ["not-a-uuid"]}, headers=as_user(board["manager"]),
    )
    assert res.status_code == 400


async def test_plain_member_forbidden(client, board):
    res = await client.put(
        _url(board), json={"assigneeIds": []}, headers=as_user(board["member"]),
    )
    assert res.status_code == 403


async def test_unknown_task_returns_404(client, board):
    res = await client.put(
        f"/api/v1/tasks/{uuid4()}/assignees", json={"assigneeIds": []},
        headers=as_user(board["manager"]),
    )
    assert res.status_code == 404
