"""Recipient Queries — the SQL recipient set matches the in-memory rule.

Invariants:
    - RecipientQueries and select_absence_request_recipients agree for every
      requester in a mixed population
"""

import pytest

from app.core.absence_notifications import recipient_ids, select_absence_request_recipients
from app.services.recipient_queries import RecipientQueries
from tests.services.factories import make_user


@pytest.fixture
async def population(test_db):
    users = [
        await make_user(test_db, role="admin"),
        await make_user(test_db, role="admin", department="IT"),
        await make_user(test_db, role="manager", department="Sales"),
        await make_user(test_db, role="manager", department="IT"),
        await make_user(test_db, role="manager"),
        await make_user(test_db, department="Sales"),
        await make_user(test_db, department="IT"),
        await make_user(test_db),
    ]
    return users


async def test_sql_and_core_agree_for_every_requester(test_db, population):
    queries = RecipientQueries(test_db)
    for requester in population:
        from_sql = await queries.find_absence_request_recipient_ids(
            str(requester.id), requester.department,
        )
        from_core = recipient_ids(select_absence_request_recipients(
            population,
            requester_user_id=str(requester.id),
            requester_department=requester.department,
        ))
        assert sorted(from_sql) == sorted(str(uid) for uid in from_core)


async def test_projection_carries_email(test_db, population):
    recipients = await RecipientQueries(test_db).find_absence_request_recipients(
        str(population[5].id), "Sales",
    )
    emails = {r.email for r in recipients}
    assert emails == {population[0].email, population[1].email, population[2].email}
