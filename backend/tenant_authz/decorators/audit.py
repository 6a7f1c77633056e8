from __future__ import annotations
"""Audit logging decorator for role-management route handlers.

Usage examples:

@audit_log('ROLE.SAVE', entity='Role', entity_id_key='name', meta_keys=['hierarchy'])
def save_role(name): ...

@audit_log('ROLE.DELETE', entity='Role', entity_id_arg='name',
           meta_builder=lambda data, rv, args, kwargs: {'deleted': data.get('deleted')})
def delete_role(name): ...

Parameters:
  action: required audit action code (e.g. ROLE.SAVE)
  entity: optional entity label (Role)
  entity_id_key: key in the returned JSON object whose value becomes entity_id.
  entity_id_arg: name of the path parameter to use for entity_id (fallback if entity_id_key absent).
  meta_keys: list of keys to project from returned JSON into meta dict (shallow copy).
  meta_builder: callable returning a meta dict; receives (data, original_return_value, args, kwargs). Overrides meta_keys.

Only successful responses (status < 400) are audited. The first element of a
(dict, status[, headers]) tuple is inspected; the original return value is preserved.
"""

import logging
from functools import wraps
from typing import Any, Callable, Iterable, Optional

from tenant_authz.services.audit import add_audit
from tenant_authz import get_db

logger = logging.getLogger(__name__)


def _extract_payload(rv: Any):
    """Return (data, status) where data is the JSON-able dict for inspection."""
    if isinstance(rv, tuple) and rv:
        status = rv[1] if len(rv) > 1 and isinstance(rv[1], int) else 200
        return rv[0], status
    return rv, 200


def audit_log(
    action: str,
    *,
    entity: Optional[str] = None,
    entity_id_key: Optional[str] = None,
    entity_id_arg: Optional[str] = None,
    meta_keys: Optional[Iterable[str]] = None,
    meta_builder: Optional[Callable[[dict, Any, tuple, dict], dict]] = None,
    commit: bool = True,
):
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            rv = fn(*args, **kwargs)
            try:
                data, status = _extract_payload(rv)
                if status >= 400:
                    return rv
                if not isinstance(data, dict):  # nothing to inspect
                    add_audit(action, entity, kwargs.get(entity_id_arg) if entity_id_arg else None, None)
                else:
                    entity_id = None
                    if entity_id_key and entity_id_key in data:
                        entity_id = data.get(entity_id_key)
                    elif entity_id_arg and entity_id_arg in kwargs:
                        entity_id = kwargs.get(entity_id_arg)
                    meta = None
                    if meta_builder:
                        meta = meta_builder(data, rv, args, kwargs)
                    elif meta_keys:
                        meta = {k: data.get(k) for k in meta_keys if k in data}
                    add_audit(action, entity, entity_id, meta)
                if commit:
                    get_db().commit()
            except Exception:
                # audit must not turn a completed mutation into an error response
                logger.exception('Audit logging failed for %s', action)
                get_db().rollback()
            return rv
        return wrapper
    return outer
