import pytest


def test_list_users_hides_password_hashes(client, make_user, admin_headers):
    make_user("rider")

    users = client.get("/api/admin/users", headers=admin_headers).get_json()

    assert {u["username"] for u in users} == {"boss", "rider"}
    for user in users:
        assert "password" not in user and "password_hash" not in user
        assert set(user) >= {"id", "username", "role", "isActive", "lastLogin", "createdAt"}


def test_list_users_newest_first(client, make_user, admin_headers):
    make_user("older")
    make_user("newer")

    usernames = [u["username"] for u in client.get("/api/admin/users", headers=admin_headers).get_json()]
    assert usernames.index("newer") < usernames.index("older")


def test_stats(client, make_user, make_ride, admin_headers):
    make_user("rider")
    make_ride(500, cost=100, save=10)
    make_ride(300, cost=50)

    stats = client.get("/api/admin/stats", headers=admin_headers).get_json()

    assert stats == {
        "totalCustomers": 2,
        "totalUsers": 2,
        "totalAmount": 800,
        "totalCost": 150,
        "totalSave": 10,
        "netProfit": 650,
        "averagePerCustomer": 400,
    }


def test_stats_without_rides(client, admin_headers):
    stats = client.get("/api/admin/stats", headers=admin_headers).get_json()
    assert stats["totalCustomers"] == 0
    assert stats["netProfit"] == 0
    assert stats["averagePerCustomer"] == 0


def test_deactivated_user_cannot_log_in(client, make_user, admin_headers):
    user_id = make_user("rider", password="secret123")

    response = client.patch(f"/api/admin/users/{user_id}/status", json={"active": False}, headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()["user"]["isActive"] is False
    assert client.post("/api/auth/login", json={"username": "rider", "password": "secret123"}).status_code == 401

    client.patch(f"/api/admin/users/{user_id}/status", json={"active": True}, headers=admin_headers)
    assert client.post("/api/auth/login", json={"username": "rider", "password": "secret123"}).status_code == 200


@pytest.mark.parametrize("body", [{}, {"active": "no"}, {"active": 0}])
def test_user_status_needs_boolean(client, make_user, admin_headers, body):
    user_id = make_user("rider")
    assert client.patch(f"/api/admin/users/{user_id}/status", json=body, headers=admin_headers).status_code == 400


def test_user_status_unknown_user(client, admin_headers):
    assert client.patch("/api/admin/users/9999/status", json={"active": False}, headers=admin_headers).status_code == 404


def test_admin_cannot_deactivate_themselves(app, client, make_user, auth_headers):
    admin_id = make_user("chief", role="admin")
    response = client.patch(f"/api/admin/users/{admin_id}/status", json={"active": False},
                            headers=auth_headers(admin_id))
    assert response.status_code == 400


def test_user_status_is_admin_only(client, make_user, customer_headers):
    user_id = make_user("other")
    response = client.patch(f"/api/admin/users/{user_id}/status", json={"active": False}, headers=customer_headers)
    assert response.status_code == 403
