from conftest import API


def test_user_list_is_admin_only(client, admin, user):
    assert client.get(f"{API}/users", headers=user.headers).status_code == 403

    response = client.get(f"{API}/users", headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["data"]["total"] == 2


def test_user_search_matches_name_username_email(client, admin, signup):
    signup("john", name="John Smith")
    signup("jane", name="Jane Roe", email="johnny.fan@example.com")
    signup("mark", name="Mark Twain")

    page = client.get(f"{API}/users", params={"search": "john"}, headers=admin.headers).json()["data"]
    assert page["total"] == 2
    assert {u["username"] for u in page["data"]} == {"john", "jane"}


def test_user_pagination_arithmetic(client, admin, signup):
    for index in range(14):
        signup(f"user{index}")

    # 14 sign-ups plus the bootstrapped admin
    page = client.get(f"{API}/users", params={"page": 2, "limit": 10}, headers=admin.headers).json()["data"]
    assert page["total"] == 15
    assert page["page"] == 2
    assert page["limit"] == 10
    assert len(page["data"]) == 5


def test_owner_reads_and_updates_self(client, user, notifier):
    response = client.get(f"{API}/users/{user.id}", headers=user.headers)
    assert response.status_code == 200
    assert response.json()["message"] == "User details fetched successfully"

    updated = client.patch(f"{API}/users/{user.id}", json={"name": "Alice Liddell"}, headers=user.headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["name"] == "Alice Liddell"
    assert notifier.names()[-1] == "userUpdated"


def test_users_cannot_touch_each_other(client, user, other_user):
    assert client.get(f"{API}/users/{other_user.id}", headers=user.headers).status_code == 403
    assert client.patch(f"{API}/users/{other_user.id}", json={"name": "X"}, headers=user.headers).status_code == 403
    assert client.delete(f"{API}/users/{other_user.id}", headers=user.headers).status_code == 403


def test_only_admins_change_roles(client, admin, user):
    admin_role_id = admin.data["roleId"]["id"]

    denied = client.patch(f"{API}/users/{user.id}", json={"roleId": admin_role_id}, headers=user.headers)
    assert denied.status_code == 403

    promoted = client.patch(f"{API}/users/{user.id}", json={"roleId": admin_role_id}, headers=admin.headers)
    assert promoted.status_code == 200
    assert promoted.json()["data"]["roleId"]["slug"] == "admin"


def test_username_taken_by_someone_else_conflicts(client, user, other_user):
    response = client.patch(f"{API}/users/{user.id}", json={"username": "bob"}, headers=user.headers)
    assert response.status_code == 409


def test_deleting_a_user_removes_their_businesses(client, admin, user, make_business):
    business = make_business(user)

    response = client.delete(f"{API}/users/{user.id}", headers=admin.headers)
    assert response.status_code == 200
    assert client.get(f"{API}/users/{user.id}", headers=admin.headers).status_code == 404
    assert client.get(f"{API}/businesses/{business['id']}").status_code == 404
