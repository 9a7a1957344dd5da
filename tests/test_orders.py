from conftest import API

BUYER = {"name": "Walk-in", "phone": "+15550001111", "address": "Table 4"}


def _shop(owner, make_business, make_category, make_item, name="Corner Cafe"):
    business = make_business(owner, name=name)
    category = make_category(owner, business["id"])
    coffee = make_item(owner, category["id"], name="Coffee", price=10)
    cookie = make_item(owner, category["id"], name="Cookie", price=5)
    return business, coffee, cookie


def test_order_total_is_sum_of_lines(client, user, make_business, make_category, make_item, notifier):
    business, coffee, cookie = _shop(user, make_business, make_category, make_item)

    response = client.post(f"{API}/orders", json={
        **BUYER,
        "businessId": business["id"],
        "items": [
            {"itemId": coffee["id"], "quantity": 2},
            {"itemId": cookie["id"], "quantity": 3},
        ],
    }, headers=user.headers)

    assert response.status_code == 201
    order = response.json()["data"]
    assert order["total"] == 35
    assert order["status"] == "pending"
    assert order["note"] == ""
    assert order["business"]["id"] == business["id"]
    assert [line["total"] for line in order["items"]] == [20, 15]
    assert order["items"][0]["itemId"]["name"] == "Coffee"
    assert notifier.names()[-1] == "orderCreated"


def test_unit_price_override_and_default_quantity(client, user, make_business, make_category, make_item):
    business, coffee, _ = _shop(user, make_business, make_category, make_item)

    order = client.post(f"{API}/orders", json={
        **BUYER,
        "businessId": business["id"],
        "items": [{"itemId": coffee["id"], "unitPrice": 7.25}],
    }, headers=user.headers).json()["data"]

    assert order["items"][0]["quantity"] == 1
    assert order["total"] == 7.25


def test_empty_order_is_rejected(client, user, make_business):
    business = make_business(user)
    response = client.post(
        f"{API}/orders", json={**BUYER, "businessId": business["id"], "items": []}, headers=user.headers
    )
    assert response.status_code == 400


def test_items_must_belong_to_the_business(client, user, make_business, make_category, make_item):
    business, _, _ = _shop(user, make_business, make_category, make_item)
    _, foreign_coffee, _ = _shop(user, make_business, make_category, make_item, name="Other Shop")

    response = client.post(f"{API}/orders", json={
        **BUYER,
        "businessId": business["id"],
        "items": [{"itemId": foreign_coffee["id"]}],
    }, headers=user.headers)
    assert response.status_code == 400
    assert response.json()["message"] == f"Item {foreign_coffee['id']} does not belong to this business"


def test_unknown_item(client, user, make_business):
    business = make_business(user)
    missing = "00000000-0000-0000-0000-000000000000"
    response = client.post(
        f"{API}/orders",
        json={**BUYER, "businessId": business["id"], "items": [{"itemId": missing}]},
        headers=user.headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == f"Item not found: {missing}"


def test_only_the_business_owner_records_orders(client, user, other_user, make_business, make_category, make_item):
    business, coffee, _ = _shop(user, make_business, make_category, make_item)
    response = client.post(f"{API}/orders", json={
        **BUYER, "businessId": business["id"], "items": [{"itemId": coffee["id"]}],
    }, headers=other_user.headers)
    assert response.status_code == 403


def test_list_is_scoped_to_own_businesses(
    client, admin, user, other_user, make_business, make_category, make_item
):
    mine, coffee, _ = _shop(user, make_business, make_category, make_item)
    theirs, their_coffee, _ = _shop(other_user, make_business, make_category, make_item)
    client.post(f"{API}/orders", json={
        **BUYER, "businessId": mine["id"], "items": [{"itemId": coffee["id"]}],
    }, headers=user.headers)
    client.post(f"{API}/orders", json={
        **BUYER, "businessId": theirs["id"], "items": [{"itemId": their_coffee["id"]}],
    }, headers=other_user.headers)

    assert client.get(f"{API}/orders", headers=user.headers).json()["data"]["total"] == 1
    foreign = client.get(f"{API}/orders", params={"businessId": theirs["id"]}, headers=user.headers)
    assert foreign.json()["data"]["total"] == 0
    assert client.get(f"{API}/orders", headers=admin.headers).json()["data"]["total"] == 2


def test_update_status_and_delete(client, user, other_user, make_business, make_category, make_item, notifier):
    business, coffee, _ = _shop(user, make_business, make_category, make_item)
    order = client.post(f"{API}/orders", json={
        **BUYER, "businessId": business["id"], "items": [{"itemId": coffee["id"]}],
    }, headers=user.headers).json()["data"]
    path = f"{API}/orders/{order['id']}"

    assert client.patch(path, json={"status": "shipped"}, headers=other_user.headers).status_code == 403
    assert client.patch(path, json={"status": "lost"}, headers=user.headers).status_code == 400

    updated = client.patch(path, json={"status": "completed", "note": "Paid in cash"}, headers=user.headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["status"] == "completed"
    assert updated.json()["data"]["note"] == "Paid in cash"
    assert notifier.names()[-1] == "orderUpdated"

    assert client.get(path, headers=user.headers).json()["data"]["total"] == 10
    assert client.delete(path, headers=user.headers).status_code == 200
    assert notifier.names()[-1] == "orderDeleted"
    assert client.get(path, headers=user.headers).status_code == 404
