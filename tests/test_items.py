from conftest import API


def _menu(user, make_business, make_category):
    business = make_business(user)
    category = make_category(user, business["id"])
    return business, category


def test_item_inherits_business_from_category(client, user, make_business, make_category, make_item, notifier):
    business, category = _menu(user, make_business, make_category)
    item = make_item(user, category["id"], name="Latte", price=4.5, tags=["hot", "milk"], meta={"size": "L"})

    assert item["price"] == 4.5
    assert item["tags"] == ["hot", "milk"]
    assert item["meta"] == {"size": "L"}
    assert item["categoryId"]["id"] == category["id"]
    assert item["businessId"]["id"] == business["id"]
    assert notifier.names()[-1] == "itemCreated"


def test_negative_price_is_rejected(client, user, make_business, make_category):
    _, category = _menu(user, make_business, make_category)
    response = client.post(f"{API}/items", json={
        "categoryId": category["id"], "name": "Free money", "price": -1, "image": "x.png",
    }, headers=user.headers)
    assert response.status_code == 400


def test_only_the_owner_adds_items(client, user, other_user, make_business, make_category):
    _, category = _menu(user, make_business, make_category)
    response = client.post(f"{API}/items", json={
        "categoryId": category["id"], "name": "Intruder", "price": 1, "image": "x.png",
    }, headers=other_user.headers)
    assert response.status_code == 403


def test_public_list_filters(client, user, make_business, make_category, make_item):
    business, drinks = _menu(user, make_business, make_category)
    food = client.post(
        f"{API}/categories", json={"businessId": business["id"], "name": "Food"}, headers=user.headers
    ).json()["data"]

    make_item(user, drinks["id"], name="Espresso", tags=["hot", "coffee"])
    make_item(user, drinks["id"], name="Iced Tea", tags=["cold"])
    make_item(user, food["id"], name="Bagel", tags=["vegan"], status="inactive")

    by_category = client.get(f"{API}/items", params={"categoryId": drinks["id"]}).json()["data"]
    assert by_category["total"] == 2

    by_tag = client.get(f"{API}/items", params={"tag": "hot"}).json()["data"]
    assert [i["name"] for i in by_tag["data"]] == ["Espresso"]

    active = client.get(f"{API}/items", params={"businessId": business["id"], "status": "active"}).json()["data"]
    assert active["total"] == 2

    search = client.get(f"{API}/items", params={"search": "TEA"}).json()["data"]
    assert [i["name"] for i in search["data"]] == ["Iced Tea"]


def test_sort_by_price(client, user, make_business, make_category, make_item):
    _, category = _menu(user, make_business, make_category)
    make_item(user, category["id"], name="Mid", price=5)
    make_item(user, category["id"], name="Cheap", price=1)
    make_item(user, category["id"], name="Dear", price=9)

    page = client.get(f"{API}/items", params={"sort": "price", "order": "asc"}).json()["data"]
    assert [i["name"] for i in page["data"]] == ["Cheap", "Mid", "Dear"]


def test_moving_to_another_business_requires_owning_it(
    client, user, other_user, make_business, make_category, make_item
):
    _, category = _menu(user, make_business, make_category)
    item = make_item(user, category["id"])

    foreign_business = make_business(other_user)
    foreign_category = make_category(other_user, foreign_business["id"], name="Theirs")

    response = client.patch(
        f"{API}/items/{item['id']}", json={"categoryId": foreign_category["id"]}, headers=user.headers
    )
    assert response.status_code == 403


def test_moving_between_own_businesses(client, user, make_business, make_category, make_item):
    _, category = _menu(user, make_business, make_category)
    item = make_item(user, category["id"])

    second_business = make_business(user, name="Second Shop")
    second_category = make_category(user, second_business["id"], name="Snacks")

    response = client.patch(
        f"{API}/items/{item['id']}", json={"categoryId": second_category["id"], "price": 12.5}, headers=user.headers
    )
    assert response.status_code == 200
    moved = response.json()["data"]
    assert moved["businessId"]["id"] == second_business["id"]
    assert moved["price"] == 12.5


def test_delete_item(client, user, other_user, make_business, make_category, make_item, notifier):
    _, category = _menu(user, make_business, make_category)
    item = make_item(user, category["id"])

    assert client.delete(f"{API}/items/{item['id']}", headers=other_user.headers).status_code == 403
    assert client.delete(f"{API}/items/{item['id']}", headers=user.headers).status_code == 200
    assert notifier.names()[-1] == "itemDeleted"
    missing = client.get(f"{API}/items/{item['id']}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Item not found"


def test_tag_filter_matches_non_ascii_and_quoted_tags(client, user, make_business, make_category, make_item):
    _, category = _menu(user, make_business, make_category)
    make_item(user, category["id"], name="Cortado", tags=["café"])
    make_item(user, category["id"], name="Chai", tags=['say "chai"', "hot"])
    make_item(user, category["id"], name="Mocha", tags=["hot"])

    accented = client.get(f"{API}/items", params={"tag": "café"}).json()["data"]
    assert [i["name"] for i in accented["data"]] == ["Cortado"]
    assert accented["data"][0]["tags"] == ["café"]

    quoted = client.get(f"{API}/items", params={"tag": 'say "chai"'}).json()["data"]
    assert [i["name"] for i in quoted["data"]] == ["Chai"]

    assert client.get(f"{API}/items", params={"tag": "hot"}).json()["data"]["total"] == 2
    assert client.get(f"{API}/items", params={"tag": "caf"}).json()["data"]["total"] == 0
