"""HTTP routes: users, exercises, logs, landing page and health."""

from bson import ObjectId

from utils.helpers import format_date, utc_now


async def add(client, user_id, **body):
    return await client.post(f"/api/users/{user_id}/exercises", data=body)


# ─── Users ──────────────────────────────────────────────────────

async def test_create_user_returns_id_and_username(client):
    res = await client.post("/api/users", data={"username": "alice"})

    assert res.status_code == 200
    body = res.json()
    assert body["username"] == "alice"
    assert ObjectId.is_valid(body["_id"])


async def test_created_user_appears_in_listing(client):
    created = (await client.post("/api/users", json={"username": "bob"})).json()

    res = await client.get("/api/users")
    assert res.status_code == 200
    assert {"_id": created["_id"], "username": "bob", "exercises": []} in res.json()


async def test_create_user_without_username_is_internal_error(client):
    res = await client.post("/api/users", data={})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to create user"}
    assert (await client.get("/api/users")).json() == []


async def test_create_user_with_invalid_username_is_internal_error(client):
    res = await client.post("/api/users", json={"username": {"nested": True}})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to create user"}


# ─── Exercises ──────────────────────────────────────────────────

async def test_add_exercise_returns_user_and_exercise(client, user):
    res = await add(client, user["_id"], description="run", duration="30", date="2024-01-15")

    assert res.status_code == 200
    assert res.json() == {
        "_id": user["_id"],
        "username": user["username"],
        "date": "Mon Jan 15 2024",
        "duration": 30,
        "description": "run",
    }


async def test_add_exercise_accepts_json(client, user):
    res = await client.post(
        f"/api/users/{user['_id']}/exercises",
        json={"description": "swim", "duration": 12.5, "date": "2024-02-01"},
    )

    assert res.status_code == 200
    assert res.json()["duration"] == 12.5
    assert res.json()["date"] == "Thu Feb 01 2024"


async def test_add_exercise_is_linked_from_user(client, user):
    await add(client, user["_id"], description="run", duration="30")

    users = (await client.get("/api/users")).json()
    assert len(users[0]["exercises"]) == 1


async def test_add_exercise_without_date_uses_today(client, user):
    res = await add(client, user["_id"], description="walk", duration="20")

    assert res.status_code == 200
    assert res.json()["date"] == format_date(utc_now())


async def test_add_exercise_to_unknown_user_is_not_found(client):
    res = await add(client, str(ObjectId()), description="run", duration="30")

    assert res.status_code == 404
    assert res.json() == {"error": "User not found"}


async def test_add_exercise_to_malformed_id_is_not_found(client):
    res = await add(client, "nope", description="run", duration="30")

    assert res.status_code == 404


async def test_add_exercise_with_non_numeric_duration_is_rejected(client, user):
    res = await add(client, user["_id"], description="run", duration="abc")

    assert res.status_code == 400
    assert 'Cast to Number failed for value "abc" (type string) at path "duration"' in res.json()["error"]


async def test_add_exercise_without_description_is_rejected(client, user):
    res = await add(client, user["_id"], duration="10")

    assert res.status_code == 400
    assert "Description is required" in res.json()["error"]


async def test_add_exercise_with_bad_date_is_rejected(client, user):
    res = await add(client, user["_id"], description="run", duration="10", date="someday")

    assert res.status_code == 400
    assert 'Cast to date failed for value "someday"' in res.json()["error"]


async def test_rejected_exercise_is_not_stored(client, user):
    await add(client, user["_id"], description="run", duration="abc")

    res = await client.get(f"/api/users/{user['_id']}/logs")
    assert res.json()["count"] == 0


# ─── Logs ───────────────────────────────────────────────────────

async def seed_three(client, user):
    for day in ("2024-01-01", "2024-01-02", "2024-01-03"):
        res = await add(client, user["_id"], description=f"on {day}", duration="10", date=day)
        assert res.status_code == 200


async def test_logs_return_all_exercises(client, user):
    await seed_three(client, user)

    res = await client.get(f"/api/users/{user['_id']}/logs")

    assert res.status_code == 200
    body = res.json()
    assert body["_id"] == user["_id"]
    assert body["username"] == user["username"]
    assert body["count"] == 3
    assert body["log"][0] == {"description": "on 2024-01-01", "duration": 10, "date": "Mon Jan 01 2024"}


async def test_logs_from_bound_is_inclusive(client, user):
    await seed_three(client, user)

    body = (await client.get(f"/api/users/{user['_id']}/logs", params={"from": "2024-01-02"})).json()

    assert body["count"] == 2
    assert len(body["log"]) == 2
    assert [entry["date"] for entry in body["log"]] == ["Tue Jan 02 2024", "Wed Jan 03 2024"]


async def test_logs_to_bound_is_inclusive(client, user):
    await seed_three(client, user)

    body = (await client.get(
        f"/api/users/{user['_id']}/logs", params={"from": "2024-01-01", "to": "2024-01-02"}
    )).json()

    assert body["count"] == 2
    assert [entry["description"] for entry in body["log"]] == ["on 2024-01-01", "on 2024-01-02"]


async def test_logs_limit_caps_results(client, user):
    await seed_three(client, user)

    body = (await client.get(f"/api/users/{user['_id']}/logs", params={"limit": "1"})).json()

    assert body["count"] == 1
    assert len(body["log"]) == 1


async def test_logs_ignore_unparseable_bounds(client, user):
    await seed_three(client, user)

    res = await client.get(
        f"/api/users/{user['_id']}/logs", params={"from": "garbage", "to": "2024-01-02"}
    )

    assert res.status_code == 200
    assert res.json()["count"] == 2


async def test_logs_only_include_own_exercises(client, user):
    other = (await client.post("/api/users", data={"username": "other"})).json()
    await add(client, other["_id"], description="theirs", duration="5")
    await add(client, user["_id"], description="mine", duration="5")

    body = (await client.get(f"/api/users/{user['_id']}/logs")).json()
    assert [entry["description"] for entry in body["log"]] == ["mine"]


async def test_logs_for_unknown_user_are_not_found(client):
    res = await client.get(f"/api/users/{ObjectId()}/logs")

    assert res.status_code == 404
    assert res.json() == {"error": "User not found"}


async def test_exercise_date_round_trips_through_logs(client, user):
    created = (await add(client, user["_id"], description="row", duration="15", date="2023-12-31T22:15:00Z")).json()

    log = (await client.get(f"/api/users/{user['_id']}/logs")).json()["log"]
    assert log[0]["date"] == created["date"] == "Sun Dec 31 2023"


# ─── Landing page & health ──────────────────────────────────────

async def test_landing_page_is_served(client):
    res = await client.get("/")

    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]
    assert "Exercise tracker" in res.text


async def test_static_assets_are_served(client):
    res = await client.get("/public/style.css")

    assert res.status_code == 200


async def test_health_check(client):
    res = await client.get("/health")

    assert res.json()["status"] == "healthy"


# ─── Edge inputs ────────────────────────────────────────────────

async def test_add_exercise_with_duration_too_large_for_a_double_is_rejected(client, user):
    res = await client.post(
        f"/api/users/{user['_id']}/exercises",
        json={"description": "run", "duration": 10 ** 400},
    )

    assert res.status_code == 400
    assert "Cast to Number failed" in res.json()["error"]


async def test_add_exercise_stores_huge_integer_duration_as_double(client, user):
    res = await client.post(
        f"/api/users/{user['_id']}/exercises",
        json={"description": "run", "duration": 2 ** 64},
    )

    assert res.status_code == 200
    assert res.json()["duration"] == float(2 ** 64)


async def test_add_exercise_with_underscored_duration_is_rejected(client, user):
    res = await add(client, user["_id"], description="run", duration="1_000")

    assert res.status_code == 400
    assert 'Cast to Number failed for value "1_000"' in res.json()["error"]


async def test_add_exercise_with_empty_object_date_is_rejected(client, user):
    res = await client.post(
        f"/api/users/{user['_id']}/exercises",
        json={"description": "run", "duration": 10, "date": {}},
    )

    assert res.status_code == 400
    assert "Cast to date failed" in res.json()["error"]


async def test_add_exercise_with_malformed_json_is_rejected(client, user):
    res = await client.post(
        f"/api/users/{user['_id']}/exercises",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert res.status_code == 400
    assert res.json()["error"].startswith("Invalid JSON body")


async def test_logs_negative_limit_caps_at_absolute_value(client, user):
    await seed_three(client, user)

    body = (await client.get(f"/api/users/{user['_id']}/logs", params={"limit": "-2"})).json()

    assert body["count"] == 2
    assert len(body["log"]) == 2


# ─── Store failures ─────────────────────────────────────────────

async def fail(*args, **kwargs):
    raise RuntimeError("database unavailable")


async def test_create_user_store_failure_is_generic_internal_error(client, store, monkeypatch):
    monkeypatch.setattr(store, "create_user", fail)

    res = await client.post("/api/users", data={"username": "alice"})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to create user"}


async def test_list_users_store_failure_is_internal_error(client, store, monkeypatch):
    monkeypatch.setattr(store, "list_users", fail)

    res = await client.get("/api/users")

    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}


async def test_add_exercise_store_failure_reports_detail(client, store, user, monkeypatch):
    monkeypatch.setattr(store, "add_exercise", fail)

    res = await add(client, user["_id"], description="run", duration="30")

    assert res.status_code == 500
    assert res.json() == {"error": "database unavailable"}


async def test_logs_store_failure_reports_detail(client, store, user, monkeypatch):
    monkeypatch.setattr(store, "find_exercises", fail)

    res = await client.get(f"/api/users/{user['_id']}/logs")

    assert res.status_code == 500
    assert res.json() == {"error": "database unavailable"}
