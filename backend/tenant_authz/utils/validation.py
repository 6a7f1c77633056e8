from __future__ import annotations
"""Request validation helpers for the HTTP surface.

They translate engine answers (False / missing fields) into consistent 400/404 aborts.
"""
from typing import Any, Iterable
from flask import abort

from tenant_authz.constants.permissions import ACTIONS


def validate_choice(value: str, allowed: Iterable[str], field_name: str) -> str:
    """Validate that value is inside allowed.

    Returns the value (to enable inline usage) or aborts with 400.
    """
    if value not in allowed:
        abort(400, description=f"{field_name} invalid")
    return value


def validate_action(action: str) -> str:
    return validate_choice(action, ACTIONS, 'action')


def validate_resource_name(resolver, business_type: str, resource_name: str) -> str:
    if not resolver.is_valid_resource(business_type, resource_name):
        abort(404, description=f"Unknown resource '{resource_name}' for {business_type}")
    return resource_name


def validate_resource_payload(validator, business_type: str, resource_name: str, payload: Any):
    if not isinstance(payload, dict):
        abort(400, description='JSON object body required')
    missing = validator.missing_fields(business_type, resource_name, payload)
    if missing:
        abort(400, description=f"Missing required fields: {', '.join(missing)}")
    return payload

__all__ = ['validate_choice', 'validate_action', 'validate_resource_name', 'validate_resource_payload']
