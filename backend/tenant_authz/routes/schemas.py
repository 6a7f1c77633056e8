from flask import Blueprint, request
from flask_jwt_extended import jwt_required
from tenant_authz import get_gate, get_schema_validator, get_business_type_resolver
from tenant_authz.decorators.auth import current_user_context
from tenant_authz.utils.validation import validate_resource_name, validate_resource_payload

schemas_bp = Blueprint('schemas', __name__)


@schemas_bp.get('/<resource_name>')
@jwt_required()
def resource_schema(resource_name: str):
    user = current_user_context()
    resolver = get_business_type_resolver()
    business_type = resolver.resolve(user.business_id)
    validate_resource_name(resolver, business_type, resource_name)
    validator = get_schema_validator()
    return {
        'business_type': business_type,
        'resource': resource_name,
        'required_fields': validator.required_fields(business_type, resource_name),
        'template': validator.default_template(business_type, resource_name),
    }


@schemas_bp.post('/<resource_name>/validate')
@jwt_required()
def validate_payload(resource_name: str):
    """Dry-run of a write: caller must be allowed to create the resource and the body must have the required shape."""
    user = current_user_context()
    resolver = get_business_type_resolver()
    business_type = resolver.resolve(user.business_id)
    validate_resource_name(resolver, business_type, resource_name)
    get_gate().validate_permission(user, business_type, resource_name, 'create')
    payload = request.get_json(silent=True)
    validate_resource_payload(get_schema_validator(), business_type, resource_name, payload)
    return {'valid': True, 'business_type': business_type, 'resource': resource_name}
