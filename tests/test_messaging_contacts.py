from conftest import API


def test_create_contact_is_owned_by_caller(client, user, make_contact, notifier):
    contact = make_contact(user, phoneNumber="+15559990000")
    assert contact["phoneNumber"] == "+15559990000"
    assert contact["userId"]["id"] == user.id
    assert notifier.names()[-1] == "messagingContactCreated"


def test_phone_number_is_required(client, user):
    response = client.post(f"{API}/messaging-contacts", json={"name": "No phone"}, headers=user.headers)
    assert response.status_code == 400
    assert response.json()["error"][0]["field"] == "phoneNumber"


def test_non_admin_cannot_create_for_someone_else(client, user, other_user):
    response = client.post(
        f"{API}/messaging-contacts",
        json={"userId": other_user.id, "phoneNumber": "+1555"},
        headers=user.headers,
    )
    assert response.status_code == 403


def test_admin_creates_for_a_user(client, admin, user):
    response = client.post(
        f"{API}/messaging-contacts",
        json={"userId": user.id, "phoneNumber": "+1555"},
        headers=admin.headers,
    )
    assert response.status_code == 201
    assert response.json()["data"]["userId"]["id"] == user.id


def test_list_is_scoped_to_caller(client, admin, user, other_user, make_contact):
    make_contact(user)
    make_contact(user, phoneNumber="+1555000002")
    make_contact(other_user)

    mine = client.get(f"{API}/messaging-contacts", headers=user.headers).json()["data"]
    assert mine["total"] == 2

    foreign = client.get(f"{API}/messaging-contacts", params={"userId": other_user.id}, headers=user.headers)
    assert foreign.status_code == 403
    assert foreign.json()["message"] == "You can only access your own records"

    everything = client.get(f"{API}/messaging-contacts", headers=admin.headers).json()["data"]
    assert everything["total"] == 3


def test_contacts_require_authentication(client):
    assert client.get(f"{API}/messaging-contacts").status_code == 401


def test_owner_updates_and_others_are_denied(client, user, other_user, make_contact):
    contact = make_contact(user)

    denied = client.patch(f"{API}/messaging-contacts/{contact['id']}", json={"name": "X"}, headers=other_user.headers)
    assert denied.status_code == 403

    updated = client.patch(
        f"{API}/messaging-contacts/{contact['id']}", json={"status": "inactive"}, headers=user.headers
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["status"] == "inactive"


def test_contact_in_use_cannot_be_deleted(client, user, make_contact, make_business):
    contact = make_contact(user)
    make_business(user, contact_id=contact["id"])

    response = client.delete(f"{API}/messaging-contacts/{contact['id']}", headers=user.headers)
    assert response.status_code == 409
    assert response.json()["message"] == "Messaging contact is linked to existing businesses"


def test_unused_contact_is_deleted(client, user, make_contact, notifier):
    contact = make_contact(user)
    response = client.delete(f"{API}/messaging-contacts/{contact['id']}", headers=user.headers)
    assert response.status_code == 200
    assert notifier.names()[-1] == "messagingContactDeleted"
    missing = client.get(f"{API}/messaging-contacts/{contact['id']}", headers=user.headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Messaging contact not found"
