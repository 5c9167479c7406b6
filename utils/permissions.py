from flask import g, request

from utils.auth import bearer_token, verify_token
from utils.errors import AuthError, ForbiddenError

ANY_ROLE = "*"

# endpoint -> role needed to call it. Endpoints not listed are public.
POLICY = {
    "auth.change_password": ANY_ROLE,
    "auth.profile": ANY_ROLE,
    "admin.list_users": "admin",
    "admin.update_user_status": "admin",
    "admin.stats": "admin",
}


def authorize(caller_role, required_role):
    return required_role == ANY_ROLE or caller_role == required_role


def current_identity():
    """Identity from the request's bearer token, or None when the caller is anonymous.

    A missing, expired or malformed token all count as anonymous here; routes
    that require a login go through ``enforce_policy`` instead.
    """
    token = bearer_token(request.headers.get("Authorization"))
    if token is None:
        return None
    try:
        return verify_token(token)
    except AuthError:
        return None


def enforce_policy():
    required_role = POLICY.get(request.endpoint)
    if required_role is None or request.method == "OPTIONS":
        return None

    identity = verify_token(bearer_token(request.headers.get("Authorization")))
    if not authorize(identity["role"], required_role):
        raise ForbiddenError(f"{required_role.capitalize()} access required")
    g.identity = identity
    return None
