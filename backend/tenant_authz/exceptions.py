from __future__ import annotations
"""Error types raised by the authorization engine.

Only PermissionDenied and SystemRoleProtected are meant to reach callers during
normal operation; the gate itself never lets other errors escape a check.
"""
from typing import Optional


class AuthzError(Exception):
    """Base class for engine errors."""


class PermissionDenied(AuthzError):
    def __init__(self, user_id: str, business_type: str, resource_name: str, action: str):
        self.user_id = user_id
        self.business_type = business_type
        self.resource_name = resource_name
        self.action = action
        super().__init__(
            f"User {user_id} does not have permission to {action} {resource_name} in {business_type} business"
        )

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'business_type': self.business_type,
            'resource_name': self.resource_name,
            'action': self.action,
        }


class SystemRoleProtected(AuthzError):
    def __init__(self, role_name: str, operation: str = 'delete'):
        self.role_name = role_name
        self.operation = operation
        super().__init__(f"Cannot {operation} system role '{role_name}'")


class InvalidRoleError(AuthzError, ValueError):
    pass


class ShardLookupError(AuthzError):
    def __init__(self, business_id: str, location_id: Optional[str], reason: str = ''):
        self.business_id = business_id
        self.location_id = location_id
        detail = f"Unable to determine shard for business {business_id!r} location {location_id!r}"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)


__all__ = ['AuthzError', 'PermissionDenied', 'SystemRoleProtected', 'InvalidRoleError', 'ShardLookupError']
