import pytest

from models.log import Log
from models.users import User

ADMIN_ROUTES = [
    ("get", "/users/search/a"),
    ("get", "/users/role/user"),
    ("patch", "/users/admin/target@example.com"),
    ("patch", "/users/remove-admin/target@example.com"),
    ("get", "/riders/pending"),
    ("get", "/riders/active"),
    ("patch", "/riders/approve/abc"),
    ("patch", "/riders/deactivate/abc"),
    ("delete", "/riders/cancel/abc"),
    ("patch", "/riders/sync-roles"),
    ("get", "/logs"),
]


@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
def test_admin_routes_require_a_header(client, method, path):
    res = getattr(client, method)(path)
    assert res.status_code == 401
    assert res.json()["detail"] == "Unauthorized access: No authorization header"


@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
def test_admin_routes_reject_non_admins(client, make_user, auth_headers, method, path):
    make_user("plain@example.com")
    res = getattr(client, method)(path, headers=auth_headers("plain@example.com"))
    assert res.status_code == 403


def test_header_without_token(client):
    res = client.get("/users/role/user", headers={"Authorization": "Bearer"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Unauthorized access: No token found"


def test_invalid_token_is_forbidden(client):
    res = client.get("/users/role/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 403
    assert res.json()["detail"] == "Forbidden access: Invalid token"


def test_token_for_unknown_user(client, auth_headers):
    res = client.get("/users/role/user", headers=auth_headers("stranger@example.com"))
    assert res.status_code == 404
    assert res.json()["detail"] == "User not found"


def test_rejected_admin_call_has_no_side_effects(client, make_user, auth_headers, fetch):
    make_user("plain@example.com")
    make_user("target@example.com")

    res = client.patch("/users/admin/target@example.com", headers=auth_headers("plain@example.com"))
    assert res.status_code == 403
    assert fetch(User, email="target@example.com")[0].role == "user"
    assert fetch(Log) == []
