import pytest

from utils.permissions import ANY_ROLE, POLICY, authorize


@pytest.mark.parametrize("caller, required, allowed", [
    ("admin", "admin", True),
    ("customer", "admin", False),
    ("customer", ANY_ROLE, True),
    ("admin", ANY_ROLE, True),
])
def test_authorize(caller, required, allowed):
    assert authorize(caller, required) is allowed


def test_admin_endpoints_are_admin_only():
    assert {endpoint for endpoint, role in POLICY.items() if role == "admin"} == {
        "admin.list_users", "admin.update_user_status", "admin.stats",
    }


def test_every_policy_entry_names_a_real_endpoint(app):
    assert set(POLICY) <= set(app.view_functions)


@pytest.mark.parametrize("path", ["/api/admin/users", "/api/admin/stats"])
def test_admin_endpoint_without_token_is_unauthenticated(client, path):
    response = client.get(path)
    assert response.status_code == 401
    assert response.get_json()["message"] == "Access token required"


@pytest.mark.parametrize("path", ["/api/admin/users", "/api/admin/stats"])
def test_admin_endpoint_with_customer_token_is_forbidden(client, customer_headers, path):
    response = client.get(path, headers=customer_headers)
    assert response.status_code == 403
    assert response.get_json()["message"] == "Admin access required"


def test_admin_endpoint_with_bad_token(client):
    response = client.get("/api/admin/users", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_admin_endpoint_with_admin_token(client, admin_headers):
    assert client.get("/api/admin/users", headers=admin_headers).status_code == 200


def test_public_endpoints_need_no_token(client):
    assert client.get("/api/customer").status_code == 200
    assert client.get("/api/customers/totals").status_code == 200


def test_preflight_is_not_gated(client):
    response = client.options("/api/admin/users", headers={
        "Origin": "http://localhost:3000",
        "Access-Control-Request-Method": "GET",
    })
    assert response.status_code == 200
