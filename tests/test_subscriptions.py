from app.modules.subscriptions.domain.services.user_subscription_service import UserSubscriptionService
from conftest import API

START = "2025-02-01T00:00:00Z"


def test_admin_creates_plan(client, admin, make_plan, notifier):
    plan = make_plan(name="Gold Tier", duration=6)
    assert plan["slug"] == "gold-tier"
    assert plan["duration"] == 6
    assert plan["maxBusiness"] == 3
    assert plan["analysisType"] == "advanced"
    assert plan["feature"] == ["Unlimited items", "Priority support"]
    assert notifier.names()[-1] == "subscriptionPlanCreated"


def test_plan_writes_are_admin_only(client, user):
    response = client.post(f"{API}/subscription-plans", json={
        "name": "Mine", "price": 1, "duration": 1, "feature": [],
        "maxBusiness": 1, "maxCategory": 1, "maxItem": 1, "analysisType": "basic",
    }, headers=user.headers)
    assert response.status_code == 403


def test_plan_validation(client, admin):
    response = client.post(f"{API}/subscription-plans", json={
        "name": "Broken", "price": 1, "duration": 0, "feature": [],
        "maxBusiness": 1, "maxCategory": 1, "maxItem": 1, "analysisType": "psychic",
    }, headers=admin.headers)
    assert response.status_code == 400
    fields = {problem["field"] for problem in response.json()["error"]}
    assert {"duration", "analysisType"} <= fields


def test_plan_name_conflict(client, admin, make_plan):
    make_plan(name="Premium")
    response = client.post(f"{API}/subscription-plans", json={
        "name": "premium", "price": 1, "duration": 1, "feature": [],
        "maxBusiness": 1, "maxCategory": 1, "maxItem": 1, "analysisType": "basic",
    }, headers=admin.headers)
    assert response.status_code == 409
    assert response.json()["message"] == "Subscription plan name already exists"


def test_plans_are_public_and_filterable(client, make_plan):
    make_plan(name="Basic", analysisType="basic")
    make_plan(name="Pro")

    everything = client.get(f"{API}/subscription-plans").json()["data"]
    assert everything["total"] == 2

    basic = client.get(f"{API}/subscription-plans", params={"analysisType": "basic"}).json()["data"]
    assert [p["name"] for p in basic["data"]] == ["Basic"]


def test_subscription_end_date_is_derived(client, user, make_plan, notifier):
    plan = make_plan(duration=3)

    response = client.post(
        f"{API}/user-subscription-plans",
        json={"subscriptionPlanId": plan["id"], "startDate": START},
        headers=user.headers,
    )
    assert response.status_code == 201
    subscription = response.json()["data"]
    assert subscription["startDate"].startswith("2025-02-01")
    assert subscription["endDate"].startswith("2025-05-01")
    assert subscription["status"] == "active"
    assert subscription["userId"]["id"] == user.id
    assert subscription["subscriptionPlanId"]["id"] == plan["id"]
    assert notifier.names()[-1] == "userSubscriptionPlanCreated"


def test_second_active_subscription_conflicts(client, user, make_plan):
    plan = make_plan()
    first = client.post(f"{API}/user-subscription-plans", json={"subscriptionPlanId": plan["id"]}, headers=user.headers)
    assert first.status_code == 201

    second = client.post(f"{API}/user-subscription-plans", json={"subscriptionPlanId": plan["id"]}, headers=user.headers)
    assert second.status_code == 409
    assert second.json()["message"] == "User already has an active subscription plan"


def test_reactivating_while_another_is_active_conflicts(client, user, make_plan):
    plan = make_plan()
    old = client.post(
        f"{API}/user-subscription-plans",
        json={"subscriptionPlanId": plan["id"], "status": "expired"},
        headers=user.headers,
    ).json()["data"]
    client.post(f"{API}/user-subscription-plans", json={"subscriptionPlanId": plan["id"]}, headers=user.headers)

    response = client.patch(
        f"{API}/user-subscription-plans/{old['id']}", json={"status": "active"}, headers=user.headers
    )
    assert response.status_code == 409


def test_changing_plan_rederives_end_date(client, user, make_plan):
    quarterly = make_plan(name="Quarterly", duration=3)
    yearly = make_plan(name="Yearly", duration=12)
    subscription = client.post(
        f"{API}/user-subscription-plans",
        json={"subscriptionPlanId": quarterly["id"], "startDate": START},
        headers=user.headers,
    ).json()["data"]

    response = client.patch(
        f"{API}/user-subscription-plans/{subscription['id']}",
        json={"subscriptionPlanId": yearly["id"]},
        headers=user.headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["endDate"].startswith("2026-02-01")


def test_subscriptions_are_private(client, admin, user, other_user, make_plan):
    plan = make_plan()
    subscription = client.post(
        f"{API}/user-subscription-plans", json={"subscriptionPlanId": plan["id"]}, headers=user.headers
    ).json()["data"]

    assert client.get(
        f"{API}/user-subscription-plans/{subscription['id']}", headers=other_user.headers
    ).status_code == 403
    assert client.get(f"{API}/user-subscription-plans", headers=other_user.headers).json()["data"]["total"] == 0

    denied = client.post(
        f"{API}/user-subscription-plans",
        json={"userId": user.id, "subscriptionPlanId": plan["id"]},
        headers=other_user.headers,
    )
    assert denied.status_code == 403

    everything = client.get(f"{API}/user-subscription-plans", headers=admin.headers).json()["data"]
    assert everything["total"] == 1


def test_assigned_plan_cannot_be_deleted(client, admin, user, make_plan):
    plan = make_plan()
    subscription = client.post(
        f"{API}/user-subscription-plans", json={"subscriptionPlanId": plan["id"]}, headers=user.headers
    ).json()["data"]

    blocked = client.delete(f"{API}/subscription-plans/{plan['id']}", headers=admin.headers)
    assert blocked.status_code == 409
    assert blocked.json()["message"] == "Subscription plan is assigned to existing subscriptions"

    assert client.delete(
        f"{API}/user-subscription-plans/{subscription['id']}", headers=user.headers
    ).status_code == 200
    assert client.delete(f"{API}/subscription-plans/{plan['id']}", headers=admin.headers).status_code == 200


def test_store_index_rejects_a_second_active_subscription(client, user, make_plan, monkeypatch):
    async def skip_check(self, user_id, exclude_id=None):
        return None

    # Simulates a concurrent write that passed the pre-check before the first one committed
    monkeypatch.setattr(UserSubscriptionService, "_ensure_no_other_active", skip_check)

    plan = make_plan()
    first = client.post(f"{API}/user-subscription-plans", json={"subscriptionPlanId": plan["id"]}, headers=user.headers)
    assert first.status_code == 201

    second = client.post(f"{API}/user-subscription-plans", json={"subscriptionPlanId": plan["id"]}, headers=user.headers)
    assert second.status_code == 409
    assert second.json()["success"] is False
    assert second.json()["message"] == "User already has an active subscription plan"

    listed = client.get(f"{API}/user-subscription-plans", headers=user.headers).json()["data"]
    assert listed["total"] == 1
