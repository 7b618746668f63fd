"""
Unit tests for the role gate.
"""
import uuid

import pytest

from accounts.application.role_gate import require_role, requires_role
from core.domain.exceptions import ForbiddenError, UnauthenticatedError
from core.domain.value_objects import Caller, Role


def _caller(role: str) -> Caller:
    return Caller(id=uuid.uuid4(), email=f"{role}@example.com", role=role)


class TestRequireRole:
    def test_allowed_role_passes_through(self):
        caller = _caller("superadmin")
        assert require_role(caller, [Role.SUPERADMIN]) is caller

    def test_missing_caller(self):
        with pytest.raises(UnauthenticatedError):
            require_role(None, [Role.ADMIN])

    @pytest.mark.parametrize(
        "role,allowed,message",
        [
            ("admin", [Role.SUPERADMIN], "SuperAdmin access required"),
            ("superadmin", [Role.ADMIN], "Admin access required"),
            ("user", [Role.ADMIN, Role.SUPERADMIN], "Admin or SuperAdmin access required"),
        ],
    )
    def test_denied_roles(self, role, allowed, message):
        with pytest.raises(ForbiddenError, match=message):
            require_role(_caller(role), allowed)


@pytest.mark.asyncio
class TestRequiresRoleDecorator:
    class Command:
        def __init__(self, caller):
            self.caller = caller

    class Handler:
        def __init__(self):
            self.calls = 0

        @requires_role(Role.ADMIN, Role.SUPERADMIN)
        async def handle(self, command):
            self.calls += 1
            return "done"

    async def test_runs_handler_for_allowed_caller(self):
        handler = self.Handler()
        assert await handler.handle(self.Command(_caller("admin"))) == "done"
        assert handler.calls == 1

    async def test_rejects_before_running_handler(self):
        handler = self.Handler()
        with pytest.raises(ForbiddenError):
            await handler.handle(self.Command(_caller("user")))
        assert handler.calls == 0

    async def test_exposes_allowed_roles(self):
        assert self.Handler.handle.allowed_roles == frozenset({Role.ADMIN, Role.SUPERADMIN})
