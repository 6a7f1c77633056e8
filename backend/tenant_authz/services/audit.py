from __future__ import annotations
import logging
from typing import Any, Dict, Optional
from flask_jwt_extended import get_jwt_identity, get_jwt
from tenant_authz import get_db
from tenant_authz.models.audit import AuditLog

logger = logging.getLogger(__name__)


def add_audit(action: str, entity: Optional[str] = None, entity_id: Optional[str] = None, meta: Optional[Dict[str, Any]] = None):
    """Persist an audit log entry within the current DB session.

    Parameters:
      action: short action code e.g. ROLE.SAVE, ROLE.DELETE
      entity: optional entity name (Role, ...)
      entity_id: optional identifier (role name for roles)
      meta: additional JSON-safe dictionary (will be shallow copied)
    """
    session = get_db()
    claims = {}
    try:
        claims = get_jwt() or {}
    except RuntimeError:
        pass  # no JWT context (e.g. CLI or unit tests) – keep empty
    actor = None
    try:
        ident = get_jwt_identity()
        actor = str(ident) if ident is not None else None
    except RuntimeError:
        actor = None
    log = AuditLog(
        actor_user_id=actor or 'anonymous',
        business_id=claims.get('business_id'),
        action=action,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        roles_snapshot={'roles': list(claims.get('roles', []))},
        meta=dict(meta or {}),
    )
    session.add(log)
    logger.debug('audit %s %s:%s by %s', action, entity, entity_id, log.actor_user_id)
    # No commit here; caller's transaction boundary controls durability.
    return log
