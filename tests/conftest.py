"""
测试用的内存版 Management API

通过 httpx.MockTransport 接入 ManagementClient，实现：
- PATCH 只修改请求中出现的字段
- PUT 整体替换
- 资源不存在时返回 Auth0 格式的 404
"""

import json
from typing import Callable

import httpx
import pytest

from auth0_management import ManagementClient

DOMAIN = "tenant.example.auth0.com"
TOKEN = "test-token"
TIMESTAMP = "2024-05-01T10:00:00.000Z"

FACTOR_NAMES = [
    "sms",
    "phone",
    "push-notification",
    "email",
    "duo",
    "otp",
    "webauthn-roaming",
    "webauthn-platform",
    "recovery-code",
]


def _json(status: int, data=None) -> httpx.Response:
    if data is None:
        return httpx.Response(status)
    return httpx.Response(status, json=data)


def _error(status: int, error: str, message: str, code: str = "") -> httpx.Response:
    body = {"statusCode": status, "error": error, "message": message}
    if code:
        body["errorCode"] = code
    return _json(status, body)


def _not_found(message: str, code: str = "") -> httpx.Response:
    return _error(404, "Not Found", message, code)


class FakeManagementAPI:
    """内存版 Auth0 Management API (只覆盖本库用到的路径)"""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.profiles: dict[str, dict] = {}
        self.profile_texts: dict[tuple[str, str, str], dict] = {}
        self.revoked_tickets: list[tuple[str, str]] = []
        self.factors = {
            name: {"name": name, "enabled": False, "trial_expired": False}
            for name in FACTOR_NAMES
        }
        self.policies: list[str] = []
        self.factor_settings: dict[str, dict] = {}
        self.prompt = {"universal_login_experience": "classic", "identifier_first": False}
        self.prompt_texts: dict[tuple[str, str], dict] = {}
        self.prompt_partials: dict[str, dict] = {}
        self.tenant = {
            "friendly_name": "Example",
            "support_email": "support@example.com",
            "session_lifetime": 168,
            "idle_session_lifetime": 72,
            "flags": {"enable_client_connections": True},
        }
        self._next_id = 1
        # 下一个请求直接返回的响应 (用于模拟错误)
        self.next_response: httpx.Response | None = None

    # ============ 工具 ============

    def _new_id(self, prefix: str) -> str:
        value = f"{prefix}_{self._next_id:04d}"
        self._next_id += 1
        return value

    @staticmethod
    def _body(request: httpx.Request):
        if not request.content:
            return None
        return json.loads(request.content)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self):
        return self._body(self.last_request)

    # ============ 分发 ============

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.next_response is not None:
            resp, self.next_response = self.next_response, None
            return resp

        if request.headers.get("Authorization") != f"Bearer {TOKEN}":
            return _error(401, "Unauthorized", "Invalid token")

        path = request.url.path.removeprefix("/api/v2/")
        parts = path.split("/")
        method = request.method

        if parts[0] == "self-service-profiles":
            return self._self_service_profiles(method, parts[1:], request)
        if parts[:2] == ["guardian", "factors"]:
            return self._factors(method, parts[2:], request)
        if parts[:2] == ["guardian", "policies"]:
            return self._policies(method, request)
        if parts[:2] == ["guardian", "enrollments"]:
            return self._enrollments(method, parts[2:], request)
        if parts[0] == "prompts":
            return self._prompts(method, parts[1:], request)
        if parts == ["tenants", "settings"]:
            return self._tenant(method, request)
        return _not_found(f"Path not found: {path}")

    # ============ self-service-profiles ============

    def _self_service_profiles(self, method: str, parts: list[str], request: httpx.Request):
        if not parts:
            if method == "GET":
                return self._list_profiles(request)
            if method == "POST":
                body = self._body(request) or {}
                for key in ("id", "created_at", "updated_at"):
                    if key in body:
                        return _error(400, "Bad Request", f"Additional properties not allowed: {key}")
                profile = dict(body)
                profile["id"] = self._new_id("ssp")
                profile["created_at"] = TIMESTAMP
                profile["updated_at"] = TIMESTAMP
                self.profiles[profile["id"]] = profile
                return _json(201, profile)

        profile_id = parts[0]
        profile = self.profiles.get(profile_id)
        if profile is None:
            return _not_found(
                "The self-service profile does not exist", "inexistent_self_service_profile"
            )

        rest = parts[1:]
        if not rest:
            if method == "GET":
                return _json(200, profile)
            if method == "PATCH":
                body = self._body(request) or {}
                for key in ("id", "created_at", "updated_at"):
                    if key in body:
                        return _error(400, "Bad Request", f"Additional properties not allowed: {key}")
                profile.update(body)
                return _json(200, profile)
            if method == "DELETE":
                del self.profiles[profile_id]
                return _json(204)
        if rest[0] == "custom-text" and len(rest) == 3:
            key = (profile_id, rest[1], rest[2])
            if method == "GET":
                return _json(200, self.profile_texts.get(key, {}))
            if method == "PUT":
                self.profile_texts[key] = self._body(request) or {}
                return _json(200, self.profile_texts[key])
        if rest == ["sso-ticket"] and method == "POST":
            return _json(201, {"ticket": f"https://{DOMAIN}/self-service/connections-flow?ticket=tkt"})
        if len(rest) == 3 and rest[0] == "sso-ticket" and rest[2] == "revoke" and method == "POST":
            self.revoked_tickets.append((profile_id, rest[1]))
            return _json(202)
        return _error(405, "Method Not Allowed", f"{method} not allowed")

    def _list_profiles(self, request: httpx.Request):
        params = request.url.params
        per_page = int(params.get("per_page", 50))
        page = int(params.get("page", 0))
        items = list(self.profiles.values())
        start = page * per_page
        chunk = items[start:start + per_page]
        if params.get("include_totals") == "true":
            return _json(200, {
                "self_service_profiles": chunk,
                "start": start,
                "limit": per_page,
                "total": len(items),
            })
        return _json(200, chunk)

    # ============ guardian ============

    def _factors(self, method: str, parts: list[str], request: httpx.Request):
        if not parts:
            if method == "GET":
                return _json(200, list(self.factors.values()))
            return _error(405, "Method Not Allowed", f"{method} not allowed")

        name = parts[0]
        if name not in self.factors:
            return _not_found(f"Factor {name} does not exist")
        if len(parts) == 1 and method == "PUT":
            body = self._body(request) or {}
            if "enabled" not in body:
                return _error(400, "Bad Request", "Missing required property: enabled")
            self.factors[name]["enabled"] = body["enabled"]
            return _json(200, {"enabled": body["enabled"]})

        key = "/".join(parts)
        if method == "GET":
            return _json(200, self.factor_settings.get(key, {}))
        if method == "PUT":
            self.factor_settings[key] = self._body(request) or {}
            return _json(200, self.factor_settings[key])
        if method == "PATCH":
            self.factor_settings.setdefault(key, {}).update(self._body(request) or {})
            return _json(200, self.factor_settings[key])
        return _error(405, "Method Not Allowed", f"{method} not allowed")

    def _policies(self, method: str, request: httpx.Request):
        if method == "GET":
            return _json(200, self.policies)
        if method == "PUT":
            body = self._body(request)
            if not isinstance(body, list):
                return _error(400, "Bad Request", "Payload must be an array")
            self.policies = body
            return _json(200, self.policies)
        return _error(405, "Method Not Allowed", f"{method} not allowed")

    def _enrollments(self, method: str, parts: list[str], request: httpx.Request):
        if parts == ["ticket"] and method == "POST":
            body = self._body(request) or {}
            if not body.get("user_id"):
                return _error(400, "Bad Request", "Missing required property: user_id")
            ticket_id = self._new_id("tkt")
            return _json(200, {
                "ticket_id": ticket_id,
                "ticket_url": f"https://{DOMAIN}/guardian/enroll?ticket={ticket_id}",
            })
        return _not_found("Enrollment not found", "enrollment_not_found")

    # ============ prompts ============

    def _prompts(self, method: str, parts: list[str], request: httpx.Request):
        if not parts:
            if method == "GET":
                return _json(200, self.prompt)
            if method == "PATCH":
                self.prompt.update(self._body(request) or {})
                return _json(200, self.prompt)
        elif len(parts) == 3 and parts[1] == "custom-text":
            key = (parts[0], parts[2])
            if method == "GET":
                return _json(200, self.prompt_texts.get(key, {}))
            if method == "PUT":
                self.prompt_texts[key] = self._body(request) or {}
                return _json(200, self.prompt_texts[key])
        elif len(parts) == 2 and parts[1] == "partials":
            if method == "GET":
                return _json(200, self.prompt_partials.get(parts[0], {}))
            if method == "PUT":
                self.prompt_partials[parts[0]] = self._body(request) or {}
                return _json(200, self.prompt_partials[parts[0]])
        return _error(405, "Method Not Allowed", f"{method} not allowed")

    # ============ tenant ============

    def _tenant(self, method: str, request: httpx.Request):
        if method == "GET":
            return _json(200, self.tenant)
        if method == "PATCH":
            body = self._body(request) or {}
            for key in ("session_lifetime", "idle_session_lifetime"):
                minutes = body.pop(f"{key}_in_minutes", None)
                if minutes is not None:
                    body[key] = minutes / 60
            flags = body.pop("flags", None)
            if flags:
                self.tenant.setdefault("flags", {}).update(flags)
            self.tenant.update(body)
            return _json(200, self.tenant)
        return _error(405, "Method Not Allowed", f"{method} not allowed")


@pytest.fixture
def api() -> FakeManagementAPI:
    return FakeManagementAPI()


@pytest.fixture
def client(api):
    with ManagementClient(DOMAIN, TOKEN, transport=httpx.MockTransport(api)) as c:
        yield c


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], ManagementClient]:
    """用任意 handler 构造客户端 (模拟网络错误等)"""
    clients: list[ManagementClient] = []

    def _make(handler):
        c = ManagementClient(DOMAIN, TOKEN, transport=httpx.MockTransport(handler))
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.close()
