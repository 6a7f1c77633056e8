from flask import Blueprint, request, abort, g
from flask_jwt_extended import jwt_required
from tenant_authz import get_gate
from tenant_authz.decorators.audit import audit_log
from tenant_authz.decorators.auth import require_resource_permission, current_user_context
from tenant_authz.models.roles import RoleData
from tenant_authz.utils.validation import validate_action

authz_bp = Blueprint('authz', __name__)


def _caller():
    user = current_user_context()
    return user, get_gate().resolve_business_type(user)


@authz_bp.get('/business-types')
@jwt_required()
def list_business_types():
    gate = get_gate()
    return {
        'data': [
            {'business_type': bt, 'resources': gate.resource_names(bt)}
            for bt in gate.supported_business_types()
        ]
    }


@authz_bp.get('/roles')
@require_resource_permission('roles', 'list')
def list_roles():
    user = g.user_context
    roles = get_gate().get_all_roles(user.business_id, user.location_id, g.business_type)
    return {'business_type': g.business_type, 'data': [r.to_dict() for r in roles]}


@authz_bp.get('/roles/hierarchy')
@require_resource_permission('roles', 'read')
def role_hierarchy():
    user = g.user_context
    return get_gate().get_role_hierarchy(user.business_id, user.location_id, g.business_type)


@authz_bp.get('/roles/<name>')
@require_resource_permission('roles', 'read')
def get_role(name: str):
    user = g.user_context
    role = get_gate().role_catalog.get_role(user.business_id, user.location_id, g.business_type, name)
    if role is None:
        abort(404)
    return role.to_dict()


@authz_bp.put('/roles/<name>')
@jwt_required()
@audit_log('ROLE.SAVE', entity='Role', entity_id_key='name', meta_keys=['hierarchy', 'business_type'])
def save_role(name: str):
    data = request.json or {}
    if not isinstance(data, dict):
        abort(400, description='JSON object body required')
    user, business_type = _caller()
    try:
        role = RoleData.from_dict({**data, 'name': name})
    except (TypeError, ValueError) as e:
        abort(400, description=str(e))
    saved = get_gate().save_role(user, business_type, role)
    body = saved.to_dict()
    body['business_type'] = business_type
    return body, 200


@authz_bp.delete('/roles/<name>')
@jwt_required()
@audit_log('ROLE.DELETE', entity='Role', entity_id_arg='name')
def delete_role(name: str):
    user, business_type = _caller()
    if not get_gate().delete_role(user, business_type, name):
        abort(404)
    return {'name': name, 'deleted': True}


@authz_bp.delete('/cache')
@require_resource_permission('roles', 'update')
def clear_cache():
    user = g.user_context
    get_gate().clear_role_cache(user.business_id, user.location_id, g.business_type)
    return '', 204


@authz_bp.get('/me/permissions')
@jwt_required()
def my_permissions():
    user, business_type = _caller()
    gate = get_gate()
    role = gate.get_highest_role(user, business_type)
    return {
        'business_type': business_type,
        'role': role.name if role else None,
        'permissions': gate.get_user_permissions(user, business_type),
    }


@authz_bp.get('/me/actions/<resource_name>')
@jwt_required()
def my_actions(resource_name: str):
    user, business_type = _caller()
    return {
        'resource': resource_name,
        'actions': get_gate().get_available_actions(user, business_type, resource_name),
    }


@authz_bp.post('/check')
@jwt_required()
def check():
    data = request.json or {}
    if not isinstance(data, dict):
        abort(400, description='JSON object body required')
    resource_name = data.get('resource')
    if not resource_name:
        abort(400, description='resource required')
    action = validate_action(data.get('action'))
    resource_id = data.get('resource_id')
    user, business_type = _caller()
    allowed = get_gate().check_permission(user, business_type, resource_name, action,
                                          str(resource_id) if resource_id is not None else None)
    return {'allowed': allowed, 'business_type': business_type, 'resource': resource_name, 'action': action}
