import pytest
from starlette.requests import Request

from backend.jobboard.utils.dependencies import (
    AuthContext,
    is_public_route,
    require_auth,
    resolve_auth_context,
    role_for,
)
from backend.jobboard.utils.error_handlers import AuthenticationError
from backend.jobboard.utils.jwt import create_access_token, create_user_token


def _request(method: str, path: str, token: str | None = None) -> Request:
    headers = []
    if token is not None:
        headers.append((b"authorization", f"Bearer {token}".encode("latin-1")))
    return Request({"type": "http", "method": method, "path": path, "headers": headers, "query_string": b""})


@pytest.mark.parametrize(
    "method, path",
    [
        ("POST", "/api/auth/login"),
        ("POST", "/api/auth/register"),
        ("GET", "/docs"),
        ("GET", "/openapi.json"),
        ("GET", "/health"),
        ("GET", "/api/v1/job"),
        ("GET", "/api/v1/job/3/detail"),
    ],
)
def test_public_routes(method, path):
    assert is_public_route(method, path) is True


@pytest.mark.parametrize(
    "method, path",
    [
        ("POST", "/api/v1/job"),
        ("PUT", "/api/v1/job/3"),
        ("DELETE", "/api/v1/job/3"),
        ("GET", "/api/v1/jobs-archive"),
        ("GET", "/api/v1/users"),
        ("GET", "/api/v1/resumes/user/1"),
    ],
)
def test_protected_routes(method, path):
    assert is_public_route(method, path) is False


def test_role_label():
    assert role_for("employer") == "ROLE_EMPLOYER"
    assert role_for(None) == "ROLE_USER"


def test_decode_stage_builds_context():
    token = create_user_token("ada@example.com", 5, "candidate")
    context = resolve_auth_context(_request("GET", "/api/v1/users", token))
    assert context == AuthContext(subject="ada@example.com", user_id=5, user_type="candidate", role="ROLE_CANDIDATE")


def test_decode_stage_without_user_type():
    token = create_access_token("api")
    context = resolve_auth_context(_request("GET", "/api/v1/users", token))
    assert context.subject == "api"
    assert context.user_id is None
    assert context.role == "ROLE_USER"


@pytest.mark.parametrize("token", [None, "", "garbage"])
def test_decode_stage_never_raises(token):
    assert resolve_auth_context(_request("GET", "/api/v1/users", token)) is None


def test_decode_stage_skips_public_routes():
    token = create_user_token("ada@example.com", 5, "candidate")
    assert resolve_auth_context(_request("GET", "/api/v1/job", token)) is None


def test_context_is_immutable():
    context = AuthContext(subject="a", user_id=1, user_type=None, role="ROLE_USER")
    with pytest.raises(AttributeError):
        context.user_id = 2


def test_guard_rejects_missing_identity():
    with pytest.raises(AuthenticationError) as exc:
        require_auth(None)
    assert exc.value.status_code == 401


def test_guard_passes_identity_through():
    context = AuthContext(subject="a", user_id=1, user_type="admin", role="ROLE_ADMIN")
    assert require_auth(context) is context
