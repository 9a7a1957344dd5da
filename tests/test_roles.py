from conftest import API


def test_admin_creates_role_with_derived_slug(client, admin, notifier):
    response = client.post(f"{API}/roles", json={"name": "Store Manager"}, headers=admin.headers)
    assert response.status_code == 201
    role = response.json()["data"]
    assert role["slug"] == "store-manager"
    assert role["status"] == "active"
    assert notifier.names()[-1] == "roleCreated"


def test_non_admin_cannot_create_roles(client, user):
    response = client.post(f"{API}/roles", json={"name": "Sneaky"}, headers=user.headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Access denied. Admin role required."


def test_role_names_are_unique_case_insensitively(client, admin):
    client.post(f"{API}/roles", json={"name": "Editor"}, headers=admin.headers)
    response = client.post(f"{API}/roles", json={"name": "EDITOR"}, headers=admin.headers)
    assert response.status_code == 409
    assert response.json()["message"] == "Role name already exists"


def test_roles_are_publicly_listed(client):
    response = client.get(f"{API}/roles")
    assert response.status_code == 200
    page = response.json()["data"]
    assert page["total"] == 2
    assert {role["slug"] for role in page["data"]} == {"admin", "user"}


def test_update_renames_and_reslugs(client, admin):
    role = client.post(f"{API}/roles", json={"name": "Editor"}, headers=admin.headers).json()["data"]
    response = client.patch(
        f"{API}/roles/{role['id']}", json={"name": "Chief Editor", "status": "inactive"}, headers=admin.headers
    )
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["slug"] == "chief-editor"
    assert updated["status"] == "inactive"

    inactive = client.get(f"{API}/roles", params={"status": "inactive"}).json()["data"]
    assert [r["id"] for r in inactive["data"]] == [role["id"]]


def test_role_lookup_errors(client):
    assert client.get(f"{API}/roles/not-a-uuid").status_code == 400
    missing = client.get(f"{API}/roles/00000000-0000-0000-0000-000000000000")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Role not found"


def test_assigned_role_cannot_be_deleted(client, admin, user):
    user_role_id = user.data["roleId"]["id"]
    response = client.delete(f"{API}/roles/{user_role_id}", headers=admin.headers)
    assert response.status_code == 409
    assert response.json()["message"] == "Role is assigned to existing users"


def test_unassigned_role_is_deleted(client, admin, notifier):
    role = client.post(f"{API}/roles", json={"name": "Temp"}, headers=admin.headers).json()["data"]
    response = client.delete(f"{API}/roles/{role['id']}", headers=admin.headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Role deleted successfully"
    assert client.get(f"{API}/roles/{role['id']}").status_code == 404
    assert notifier.names()[-1] == "roleDeleted"


def test_default_roles_keep_their_slug(client, admin):
    admin_role_id = admin.data["roleId"]["id"]

    renamed = client.patch(f"{API}/roles/{admin_role_id}", json={"name": "Superuser"}, headers=admin.headers)
    assert renamed.status_code == 400
    assert renamed.json()["message"] == "Default roles cannot be renamed to a different slug"

    recased = client.patch(f"{API}/roles/{admin_role_id}", json={"name": "ADMIN"}, headers=admin.headers)
    assert recased.status_code == 200
    assert recased.json()["data"]["slug"] == "admin"

    # Admin rights survive and signup still finds the user role
    assert client.get(f"{API}/users", headers=admin.headers).status_code == 200
    signup = client.post(f"{API}/auth/signup", json={
        "name": "Carol", "username": "carol", "email": "carol@example.com", "password": "Secret123!",
    })
    assert signup.status_code == 201
