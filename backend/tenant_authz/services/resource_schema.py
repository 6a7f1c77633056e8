from __future__ import annotations
import copy
import logging
from typing import Any, Dict, List, Mapping, Optional

from tenant_authz.constants.resource_schemas import REQUIRED_FIELDS, DEFAULT_TEMPLATES

logger = logging.getLogger(__name__)


class ResourceSchemaValidator:
    """Shape gate for write paths: required fields must be present and not None.

    Unknown (vertical, resource) pairs have no required fields, so any object payload passes.
    """

    def __init__(self, required_fields: Optional[Dict[str, Dict[str, List[str]]]] = None,
                 templates: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self._required = required_fields if required_fields is not None else REQUIRED_FIELDS
        self._templates = templates if templates is not None else DEFAULT_TEMPLATES

    def required_fields(self, business_type: str, resource_name: str) -> List[str]:
        return list(self._required.get(business_type, {}).get(resource_name, []))

    def missing_fields(self, business_type: str, resource_name: str, payload: Any) -> List[str]:
        required = self.required_fields(business_type, resource_name)
        if not isinstance(payload, Mapping):
            return required
        return [f for f in required if payload.get(f) is None]

    def validate(self, business_type: str, resource_name: str, payload: Any) -> bool:
        if not isinstance(payload, Mapping):
            logger.debug('Rejecting non-object payload for %s/%s', business_type, resource_name)
            return False
        return not self.missing_fields(business_type, resource_name, payload)

    def default_template(self, business_type: str, resource_name: str) -> Dict[str, Any]:
        template = self._templates.get(business_type, {}).get(resource_name)
        return copy.deepcopy(template) if template else {}


__all__ = ['ResourceSchemaValidator']
