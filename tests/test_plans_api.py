from __future__ import annotations

from app.models import Plan

PLANS = "/api/v1/plans/"


def test_requires_token(client):
    assert client.get(PLANS).status_code == 401


def test_non_admin_cannot_create_plan(client, db_session, make_user, auth_headers):
    user = make_user("mail@mail.com")

    resp = client.post(PLANS, json={"name": "plan 1", "price": 34}, headers=auth_headers(user.id))

    assert resp.status_code == 403
    assert resp.json() == {
        "success": False,
        "code": "forbidden",
        "detail": "User is not authorized to create a plan",
    }
    assert db_session.query(Plan).count() == 0


def test_non_admin_cannot_update_plan(client, db_session, make_user, auth_headers):
    user = make_user("mail@mail.com")
    plan = Plan(name="plan 2", price=34)
    db_session.add(plan)
    db_session.commit()

    resp = client.put(
        f"{PLANS}{plan.id}", json={"name": "hacked", "price": 0}, headers=auth_headers(user.id)
    )

    assert resp.status_code == 403
    db_session.refresh(plan)
    assert (plan.name, plan.price) == ("plan 2", 34)


def test_unknown_user_token_is_forbidden_for_mutation(client, auth_headers):
    resp = client.post(PLANS, json={"name": "plan", "price": 1}, headers=auth_headers(9999))

    assert resp.status_code == 403


def test_admin_plan_lifecycle(client, make_user, auth_headers):
    admin = make_user("adminmail@mail.com", name="admintest", is_admin=True)
    user = make_user("mail@mail.com")
    admin_headers = auth_headers(admin.id)
    user_headers = auth_headers(user.id)

    created = client.post(PLANS, json={"name": "plan 2", "price": 34}, headers=admin_headers)
    assert created.status_code == 200
    assert created.json()["success"] is True
    plan_id = created.json()["id"]

    fetched = client.get(f"{PLANS}{plan_id}", headers=user_headers)
    assert fetched.json() == {"id": plan_id, "name": "plan 2", "price": 34}

    updated = client.put(
        f"{PLANS}{plan_id}", json={"id": plan_id, "name": "plan 3", "price": 34}, headers=admin_headers
    )
    assert updated.json()["success"] is True

    listed = client.get(PLANS, headers=user_headers)
    assert listed.status_code == 200
    assert listed.json()[0]["name"] == "plan 3"

    plan4 = client.post(PLANS, json={"name": "plan 4", "price": 30}, headers=admin_headers).json()
    quote = client.get(
        f"{PLANS}prorated-upgrade-price",
        params={"currentPlanId": plan_id, "newPlanId": plan4["id"], "remainingDays": 15},
        headers=user_headers,
    )
    assert quote.status_code == 200
    assert quote.json() == {"proratedPrice": -2}


def test_update_leaves_other_rows_alone(client, db_session, make_user, auth_headers):
    admin = make_user("adminmail@mail.com", is_admin=True)
    first = Plan(name="first", price=100)
    second = Plan(name="second", price=200)
    db_session.add_all([first, second])
    db_session.commit()

    resp = client.put(
        f"{PLANS}{first.id}", json={"name": "first v2", "price": 150}, headers=auth_headers(admin.id)
    )

    assert resp.status_code == 200
    db_session.refresh(first)
    db_session.refresh(second)
    assert (first.name, first.price) == ("first v2", 150)
    assert (second.name, second.price) == ("second", 200)


def test_update_body_id_must_match_path(client, db_session, make_user, auth_headers):
    admin = make_user("adminmail@mail.com", is_admin=True)
    plan = Plan(name="plan", price=1)
    db_session.add(plan)
    db_session.commit()

    resp = client.put(
        f"{PLANS}{plan.id}",
        json={"id": plan.id + 1, "name": "plan", "price": 2},
        headers=auth_headers(admin.id),
    )

    assert resp.status_code == 422


def test_negative_price_is_rejected(client, db_session, make_user, auth_headers):
    admin = make_user("adminmail@mail.com", is_admin=True)

    resp = client.post(PLANS, json={"name": "plan", "price": -5}, headers=auth_headers(admin.id))

    assert resp.status_code == 422
    assert db_session.query(Plan).count() == 0


def test_get_missing_plan_is_404(client, make_user, auth_headers):
    user = make_user("mail@mail.com")

    resp = client.get(f"{PLANS}12345", headers=auth_headers(user.id))

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Plan not found"


def test_empty_catalog_lists_nothing(client, make_user, auth_headers):
    user = make_user("mail@mail.com")

    resp = client.get(PLANS, headers=auth_headers(user.id))

    assert resp.status_code == 200
    assert resp.json() == []


def test_prorated_price_with_unknown_plan_is_404(client, db_session, make_user, auth_headers):
    user = make_user("mail@mail.com")
    plan = Plan(name="plan", price=10)
    db_session.add(plan)
    db_session.commit()

    resp = client.get(
        f"{PLANS}prorated-upgrade-price",
        params={"currentPlanId": plan.id, "newPlanId": 999, "remainingDays": 3},
        headers=auth_headers(user.id),
    )

    assert resp.status_code == 404


def test_prorated_price_rejects_days_beyond_cycle(client, db_session, make_user, auth_headers):
    user = make_user("mail@mail.com")
    a = Plan(name="a", price=10)
    b = Plan(name="b", price=20)
    db_session.add_all([a, b])
    db_session.commit()

    resp = client.get(
        f"{PLANS}prorated-upgrade-price",
        params={"currentPlanId": a.id, "newPlanId": b.id, "remainingDays": 45},
        headers=auth_headers(user.id),
    )

    assert resp.status_code == 422
    assert resp.json()["code"] == "validation_error"


def test_me_returns_profile(client, make_user, auth_headers):
    admin = make_user("adminmail@mail.com", name="admintest", is_admin=True)

    resp = client.get("/api/v1/users/me", headers=auth_headers(admin.id))

    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == "adminmail@mail.com"
    assert body["is_admin"] is True
    assert body["timezone"] == "Asia/Riyadh"


def test_garbage_token_is_rejected(client):
    resp = client.get(PLANS, headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401


def test_non_admin_with_invalid_body_is_still_forbidden(client, db_session, make_user, auth_headers):
    user = make_user("mail@mail.com")
    plan = Plan(name="plan 2", price=34)
    db_session.add(plan)
    db_session.commit()
    headers = auth_headers(user.id)

    created = client.post(PLANS, json={"name": "plan", "price": -5}, headers=headers)
    updated = client.put(f"{PLANS}{plan.id}", json={"name": "", "price": -1}, headers=headers)

    assert created.status_code == 403
    assert created.json()["code"] == "forbidden"
    assert updated.status_code == 403
    assert updated.json()["detail"] == "User is not authorized to update a plan"
    db_session.refresh(plan)
    assert db_session.query(Plan).count() == 1
    assert (plan.name, plan.price) == ("plan 2", 34)


def test_body_validation_errors_use_error_envelope(client, make_user, auth_headers):
    admin = make_user("adminmail@mail.com", is_admin=True)

    resp = client.post(PLANS, json={"name": "plan", "price": -5}, headers=auth_headers(admin.id))

    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["code"] == "validation_error"
    assert "price" in body["detail"]


def test_unknown_plans_win_over_out_of_range_days(client, make_user, auth_headers):
    user = make_user("mail@mail.com")

    resp = client.get(
        f"{PLANS}prorated-upgrade-price",
        params={"currentPlanId": 1, "newPlanId": 2, "remainingDays": 45},
        headers=auth_headers(user.id),
    )

    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


def test_health_reports_database(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_health_degraded_when_database_down(client, monkeypatch):
    from app.api.routes import health

    monkeypatch.setattr(health, "database_health", lambda: {"ok": False, "error": "down"})

    resp = client.get("/api/v1/health")

    assert resp.status_code == 503
    assert resp.json()["status"] == "degraded"
