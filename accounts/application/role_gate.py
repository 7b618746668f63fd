"""
Role gate for administrative operations.

Every administrative handler declares the roles it accepts with
``requires_role``; the check runs before the handler touches a store.
"""

import functools
import logging
from typing import Iterable, Optional

from core.domain.exceptions import ForbiddenError, UnauthenticatedError
from core.domain.value_objects import Caller, Role

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGES = {
    frozenset({Role.SUPERADMIN}): "SuperAdmin access required",
    frozenset({Role.ADMIN}): "Admin access required",
    frozenset({Role.ADMIN, Role.SUPERADMIN}): "Admin or SuperAdmin access required",
}


def require_role(caller: Optional[Caller], allowed_roles: Iterable[Role]) -> Caller:
    """
    Ensure the caller holds one of the allowed roles.

    Args:
        caller: Authenticated caller or None
        allowed_roles: Roles allowed to proceed

    Returns:
        The caller, for chaining

    Raises:
        UnauthenticatedError: If there is no caller
        ForbiddenError: If the caller's role is not allowed
    """
    allowed = frozenset(allowed_roles)
    if caller is None:
        raise UnauthenticatedError()
    if not caller.has_role(*allowed):
        logger.warning(
            f"Role {caller.role!r} denied, requires one of {sorted(r.value for r in allowed)}",
            extra={"caller_id": str(caller.id)},
        )
        raise ForbiddenError(FORBIDDEN_MESSAGES.get(allowed, "Access denied"))
    return caller


def requires_role(*roles: Role):
    """
    Decorate an async ``handle(self, command)`` method with a role check.

    The command must expose the authenticated caller as ``caller``.
    """

    def decorator(handle):
        @functools.wraps(handle)
        async def wrapper(self, command, *args, **kwargs):
            require_role(getattr(command, "caller", None), roles)
            return await handle(self, command, *args, **kwargs)

        wrapper.allowed_roles = frozenset(roles)
        return wrapper

    return decorator
