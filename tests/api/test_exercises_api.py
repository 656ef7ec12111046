"""Exercises & Logs API — recording exercises and reading filtered logs over HTTP.

Invariants:
    - POST /api/users/{_id}/exercises echoes the entry with a display date
    - Bad or missing dates fall back to today; never an error
    - GET /api/users/{_id}/logs applies from/to/limit; count matches the returned log
    - Unknown ids → 404 USER_NOT_FOUND; bad query params → 400 INVALID_QUERY_PARAMETER
    - Bodies may be JSON or form-encoded; fractional durations truncate
"""

from datetime import date
from uuid import uuid4

import pytest

from exercise_tracker.core.calendar_dates import format_display_date


def _today_display() -> set[str]:
    # Tolerate a midnight rollover between request and assertion
    today = date.today()
    return {format_display_date(today), format_display_date(date.fromordinal(today.toordinal() - 1))}


async def _log(client, user_id, description, duration, raw_date=None):
    body = {"description": description, "duration": duration}
    if raw_date is not None:
        body["date"] = raw_date
    return await client.post(f"/api/users/{user_id}/exercises", json=body)


@pytest.fixture
async def seeded(client, alice):
    for desc, raw in (("run", "2024-01-01"), ("swim", "2024-01-10"), ("bike", "2024-01-20")):
        res = await _log(client, alice["_id"], desc, 30, raw)
        assert res.status_code == 201
    return alice


# --- POST /exercises ----------------------------------------------------------

async def test_log_exercise_response_shape(client, alice):
    res = await _log(client, alice["_id"], "run", "30", "2024-01-01")
    assert res.status_code == 201
    assert res.json() == {
        "_id": alice["_id"],
        "username": "alice",
        "date": "Mon Jan 01 2024",
        "duration": 30,
        "description": "run",
    }


async def test_missing_date_uses_today(client, alice):
    res = await _log(client, alice["_id"], "run", 30)
    assert res.json()["date"] in _today_display()


async def test_unparseable_date_uses_today(client, alice):
    res = await _log(client, alice["_id"], "run", 30, "not-a-date")
    assert res.status_code == 201
    assert res.json()["date"] in _today_display()


async def test_nonsensical_date_rolls_over(client, alice):
    res = await _log(client, alice["_id"], "run", 30, "2024-02-30")
    assert res.json()["date"] == "Fri Mar 01 2024"


async def test_negative_duration_accepted(client, alice):
    res = await _log(client, alice["_id"], "stretch", -5)
    assert res.status_code == 201
    assert res.json()["duration"] == -5


async def test_non_numeric_duration_is_validation_error(client, alice):
    res = await _log(client, alice["_id"], "run", "thirty")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_numeric_json_date_uses_today(client, alice):
    res = await _log(client, alice["_id"], "run", 30, 20240101)
    assert res.status_code == 201
    assert res.json()["date"] in _today_display()


@pytest.mark.parametrize("raw", [True, {"year": 2024}])
async def test_non_string_json_date_uses_today(client, alice, raw):
    res = await _log(client, alice["_id"], "run", 30, raw)
    assert res.status_code == 201
    assert res.json()["date"] in _today_display()


@pytest.mark.parametrize("duration", ["30.5", 30.5])
async def test_fractional_duration_truncated(client, alice, duration):
    res = await _log(client, alice["_id"], "run", duration)
    assert res.status_code == 201
    assert res.json()["duration"] == 30


async def test_log_exercise_from_form_post(client, alice):
    res = await client.post(
        f"/api/users/{alice['_id']}/exercises",
        data={"description": "row", "duration": "25", "date": "2024-01-05"},
    )
    assert res.status_code == 201
    assert res.json()["date"] == "Fri Jan 05 2024"
    assert res.json()["duration"] == 25

    log = (await client.get(f"/api/users/{alice['_id']}/logs")).json()
    assert log["log"] == [
        {"description": "row", "duration": 25, "date": "Fri Jan 05 2024"},
    ]


async def test_form_post_with_empty_date_uses_today(client, alice):
    res = await client.post(
        f"/api/users/{alice['_id']}/exercises",
        data={"description": "row", "duration": "25", "date": ""},
    )
    assert res.status_code == 201
    assert res.json()["date"] in _today_display()


@pytest.mark.parametrize("user_id", [str(uuid4()), "not-a-uuid"])
async def test_log_exercise_unknown_user_returns_404(client, user_id):
    res = await _log(client, user_id, "run", 30)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "USER_NOT_FOUND"


# --- GET /logs ----------------------------------------------------------------

async def test_full_log(client, seeded):
    res = await client.get(f"/api/users/{seeded['_id']}/logs")
    assert res.status_code == 200
    body = res.json()
    assert body["_id"] == seeded["_id"]
    assert body["username"] == "alice"
    assert body["count"] == 3
    assert body["log"] == [
        {"description": "run", "duration": 30, "date": "Mon Jan 01 2024"},
        {"description": "swim", "duration": 30, "date": "Wed Jan 10 2024"},
        {"description": "bike", "duration": 30, "date": "Sat Jan 20 2024"},
    ]


@pytest.mark.parametrize("params, expected", [
    ({"from": "2024-01-05"}, ["swim", "bike"]),
    ({"to": "2024-01-10"}, ["run", "swim"]),
    ({"limit": "1"}, ["run"]),
    ({"from": "2024-01-05", "limit": "1"}, ["swim"]),
    ({"from": "2024-01-01", "to": "2024-01-20"}, ["run", "swim", "bike"]),
])
async def test_filtered_log(client, seeded, params, expected):
    res = await client.get(f"/api/users/{seeded['_id']}/logs", params=params)
    body = res.json()
    assert [e["description"] for e in body["log"]] == expected
    assert body["count"] == len(expected)


async def test_log_preserves_submission_order(client, alice):
    for desc, raw in (("late", "2024-03-01"), ("early", "2024-01-01")):
        await _log(client, alice["_id"], desc, 10, raw)
    body = (await client.get(f"/api/users/{alice['_id']}/logs")).json()
    assert [e["description"] for e in body["log"]] == ["late", "early"]


async def test_user_without_exercises_gets_empty_log(client, alice):
    res = await client.get(f"/api/users/{alice['_id']}/logs")
    assert res.status_code == 200
    assert res.json()["count"] == 0
    assert res.json()["log"] == []


@pytest.mark.parametrize("params", [
    {"limit": "0"}, {"limit": "-1"}, {"limit": "abc"},
    {"from": "nope"}, {"to": "2024-13-40"},
])
async def test_invalid_query_parameter_returns_400(client, seeded, params):
    res = await client.get(f"/api/users/{seeded['_id']}/logs", params=params)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_QUERY_PARAMETER"


@pytest.mark.parametrize("params", [{}, {"from": "2024-01-01"}, {"limit": "2"}])
async def test_logs_unknown_user_returns_404(client, params):
    res = await client.get(f"/api/users/{uuid4()}/logs", params=params)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "USER_NOT_FOUND"
