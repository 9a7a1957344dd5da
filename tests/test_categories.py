from conftest import API


def test_create_category_derives_slug(client, user, make_business, make_category, notifier):
    business = make_business(user)
    category = make_category(user, business["id"], name="Home & Garden")

    assert category["slug"] == "home-&-garden"
    assert category["businessId"]["id"] == business["id"]
    assert category["businessId"]["name"] == "Corner Cafe"
    assert notifier.names()[-1] == "categoryCreated"


def test_names_are_unique_per_business(client, user, other_user, make_business, make_category):
    business = make_business(user)
    make_category(user, business["id"], name="Electronics")

    duplicate = client.post(
        f"{API}/categories", json={"businessId": business["id"], "name": "ELECTRONICS"}, headers=user.headers
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["message"] == "Category name already exists for this business"

    # Same name in another business is fine
    other_business = make_business(other_user)
    assert make_category(other_user, other_business["id"], name="Electronics")["slug"] == "electronics"


def test_slug_collision_conflicts(client, user, make_business, make_category):
    business = make_business(user)
    make_category(user, business["id"], name="Hot Drinks")

    response = client.post(
        f"{API}/categories", json={"businessId": business["id"], "name": "Hot  Drinks"}, headers=user.headers
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Category slug already exists"


def test_only_the_business_owner_adds_categories(client, user, other_user, make_business):
    business = make_business(user)
    response = client.post(
        f"{API}/categories", json={"businessId": business["id"], "name": "Intruder"}, headers=other_user.headers
    )
    assert response.status_code == 403


def test_unknown_business(client, user):
    response = client.post(
        f"{API}/categories",
        json={"businessId": "00000000-0000-0000-0000-000000000000", "name": "Orphan"},
        headers=user.headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Business not found"


def test_public_list_filters_by_business(client, user, other_user, make_business, make_category):
    first = make_business(user)
    second = make_business(other_user)
    make_category(user, first["id"], name="Drinks")
    make_category(user, first["id"], name="Desserts", status="inactive")
    make_category(other_user, second["id"], name="Mains")

    everything = client.get(f"{API}/categories").json()["data"]
    assert everything["total"] == 3

    scoped = client.get(f"{API}/categories", params={"businessId": first["id"]}).json()["data"]
    assert {c["name"] for c in scoped["data"]} == {"Drinks", "Desserts"}

    active = client.get(f"{API}/categories", params={"businessId": first["id"], "status": "active"}).json()["data"]
    assert [c["name"] for c in active["data"]] == ["Drinks"]


def test_nested_expansion_depth_two(client, user, make_business, make_category):
    business = make_business(user)
    category = make_category(user, business["id"])

    response = client.get(f"{API}/categories/{category['id']}", params={"depth": 2})
    assert response.status_code == 200
    assert response.json()["data"]["businessId"]["userId"]["id"] == user.id


def test_rename_reslugs(client, user, make_business, make_category, notifier):
    business = make_business(user)
    category = make_category(user, business["id"], name="Drinks")

    response = client.patch(
        f"{API}/categories/{category['id']}", json={"name": "Cold Drinks"}, headers=user.headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["slug"] == "cold-drinks"
    assert notifier.names()[-1] == "categoryUpdated"


def test_delete_category_removes_its_items(client, user, make_business, make_category, make_item):
    business = make_business(user)
    category = make_category(user, business["id"])
    item = make_item(user, category["id"])

    response = client.delete(f"{API}/categories/{category['id']}", headers=user.headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Category deleted successfully"
    assert client.get(f"{API}/items/{item['id']}").status_code == 404
