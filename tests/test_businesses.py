from conftest import API


def test_create_business_expands_owner_and_contact(client, user, make_business, notifier):
    business = make_business(user, name="Corner Cafe")

    assert business["name"] == "Corner Cafe"
    assert business["status"] == "active"
    assert business["userId"]["id"] == user.id
    assert business["userId"]["email"] == "alice@example.com"
    assert set(business["messagingContactId"]) == {"id", "name", "username", "phoneNumber"}
    assert notifier.names()[-1] == "businessCreated"


def test_required_fields(client, user, make_contact):
    contact = make_contact(user)
    response = client.post(
        f"{API}/businesses", json={"messagingContactId": contact["id"], "name": "Half"}, headers=user.headers
    )
    assert response.status_code == 400
    fields = {problem["field"] for problem in response.json()["error"]}
    assert {"description", "location", "logo", "image"} <= fields


def test_contact_must_belong_to_owner(client, user, other_user, make_contact, make_business):
    foreign_contact = make_contact(other_user)

    response = client.post(f"{API}/businesses", json={
        "messagingContactId": foreign_contact["id"],
        "name": "Borrowed",
        "description": "d",
        "location": "l",
        "logo": "logo.png",
        "image": "image.png",
    }, headers=user.headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Messaging contact does not belong to this user"


def test_unknown_contact_is_not_found(client, user):
    response = client.post(f"{API}/businesses", json={
        "messagingContactId": "00000000-0000-0000-0000-000000000000",
        "name": "Ghost",
        "description": "d",
        "location": "l",
        "logo": "logo.png",
        "image": "image.png",
    }, headers=user.headers)
    assert response.status_code == 404


def test_business_detail_is_public_with_depth(client, user, make_business):
    business = make_business(user)

    expanded = client.get(f"{API}/businesses/{business['id']}")
    assert expanded.status_code == 200
    assert expanded.json()["data"]["userId"]["id"] == user.id

    flat = client.get(f"{API}/businesses/{business['id']}", params={"depth": 0})
    assert flat.json()["data"]["userId"] == user.id


def test_list_is_scoped_and_searchable(client, admin, user, other_user, make_business):
    make_business(user, name="Sushi Bar")
    make_business(user, name="Taco Stand", location="Harbour")
    make_business(other_user, name="Sushi Palace")

    mine = client.get(f"{API}/businesses", headers=user.headers).json()["data"]
    assert mine["total"] == 2

    sushi = client.get(f"{API}/businesses", params={"search": "sushi"}, headers=admin.headers).json()["data"]
    assert sushi["total"] == 2

    by_owner = client.get(f"{API}/businesses", params={"userId": other_user.id}, headers=admin.headers).json()
    assert [b["name"] for b in by_owner["data"]["data"]] == ["Sushi Palace"]


def test_list_sorting(client, user, make_business):
    for name in ("Bravo", "Alpha", "Charlie"):
        make_business(user, name=name)

    page = client.get(f"{API}/businesses", params={"sort": "name", "order": "asc"}, headers=user.headers)
    assert [b["name"] for b in page.json()["data"]["data"]] == ["Alpha", "Bravo", "Charlie"]


def test_update_and_delete_are_owner_or_admin(client, admin, user, other_user, make_business, notifier):
    business = make_business(user)
    path = f"{API}/businesses/{business['id']}"

    assert client.patch(path, json={"name": "Hijacked"}, headers=other_user.headers).status_code == 403
    assert client.delete(path, headers=other_user.headers).status_code == 403

    updated = client.patch(path, json={"name": "Renamed Cafe"}, headers=admin.headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["name"] == "Renamed Cafe"
    assert notifier.names()[-1] == "businessUpdated"

    assert client.delete(path, headers=user.headers).status_code == 200
    assert notifier.names()[-1] == "businessDeleted"
    assert client.get(path).status_code == 404


def test_malformed_business_id(client):
    response = client.get(f"{API}/businesses/12345")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid business ID format"
