from conftest import API


def _seed(owner, client, make_business, make_category, make_item, name):
    business = make_business(owner, name=name)
    category = make_category(owner, business["id"])
    item = make_item(owner, category["id"])
    client.post(f"{API}/orders", json={
        "businessId": business["id"],
        "name": "Buyer",
        "phone": "+1555",
        "address": "Somewhere",
        "items": [{"itemId": item["id"]}],
    }, headers=owner.headers)
    return business


def test_admin_sees_global_counts(client, admin, user, other_user, make_business, make_category, make_item):
    _seed(user, client, make_business, make_category, make_item, "One")
    _seed(other_user, client, make_business, make_category, make_item, "Two")

    response = client.get(f"{API}/dashboard/stats", headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Dashboard stats fetched successfully"
    assert response.json()["data"] == {
        "totalUsers": 3,
        "totalBusinesses": 2,
        "totalCategories": 2,
        "totalItems": 2,
        "totalOrders": 2,
    }


def test_users_are_scoped_to_themselves(client, user, other_user, make_business, make_category, make_item):
    _seed(user, client, make_business, make_category, make_item, "One")
    _seed(user, client, make_business, make_category, make_item, "Two")
    _seed(other_user, client, make_business, make_category, make_item, "Three")

    stats = client.get(f"{API}/dashboard/stats", headers=user.headers).json()["data"]
    assert stats == {
        "totalUsers": 1,
        "totalBusinesses": 2,
        "totalCategories": 2,
        "totalItems": 2,
        "totalOrders": 2,
    }

    denied = client.get(f"{API}/dashboard/stats", params={"userId": other_user.id}, headers=user.headers)
    assert denied.status_code == 403


def test_business_filter(client, admin, user, other_user, make_business, make_category, make_item):
    first = _seed(user, client, make_business, make_category, make_item, "One")
    _seed(user, client, make_business, make_category, make_item, "Two")
    foreign = _seed(other_user, client, make_business, make_category, make_item, "Three")

    stats = client.get(f"{API}/dashboard/stats", params={"businessId": first["id"]}, headers=user.headers)
    assert stats.json()["data"]["totalBusinesses"] == 1
    assert stats.json()["data"]["totalOrders"] == 1

    missing = client.get(f"{API}/dashboard/stats", params={"businessId": foreign["id"]}, headers=user.headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "No business found for given userId and businessId"

    scoped_admin = client.get(
        f"{API}/dashboard/stats", params={"userId": other_user.id}, headers=admin.headers
    ).json()["data"]
    assert scoped_admin["totalUsers"] == 1
    assert scoped_admin["totalBusinesses"] == 1


def test_dashboard_requires_authentication(client):
    assert client.get(f"{API}/dashboard/stats").status_code == 401
