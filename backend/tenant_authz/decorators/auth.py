from functools import wraps
from typing import Optional
from flask import abort, g
from flask_jwt_extended import verify_jwt_in_request, get_jwt, get_jwt_identity
from tenant_authz import get_gate
from tenant_authz.models.roles import UserContext


def current_user_context() -> UserContext:
    """Build the caller's UserContext from verified JWT claims (roles, business_id, location_id)."""
    claims = get_jwt()
    business_id = claims.get('business_id')
    if not business_id:
        abort(403, description='Token has no business context')
    return UserContext.build(
        user_id=get_jwt_identity(),
        roles=claims.get('roles') or [],
        business_id=business_id,
        location_id=claims.get('location_id'),
    )


def require_resource_permission(resource_name: str, action: str, resource_id_arg: Optional[str] = None):
    """Guard a view with gate.check_permission for the caller's own tenant.

    The vertical is resolved from the token's business_id. When resource_id_arg names a
    view argument, its value is passed on so resource-specific overrides apply.
    The resolved context is left on flask.g for the view.
    """
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = current_user_context()
            gate = get_gate()
            business_type = gate.resolve_business_type(user)
            resource_id = kwargs.get(resource_id_arg) if resource_id_arg else None
            if not gate.check_permission(user, business_type, resource_name, action, resource_id):
                abort(403, description='Missing permission')
            g.user_context = user
            g.business_type = business_type
            return fn(*args, **kwargs)
        return wrapper
    return outer
