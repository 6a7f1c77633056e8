"""Required fields & placeholder templates per (vertical, resource type).

Only presence is enforced; value types are the write path's concern.
"""
from __future__ import annotations
from typing import Any, Dict, List

_STAFF_FIELDS = ['name', 'email', 'phone', 'dutyDays']
_TIMELINE_FIELDS = ['startTime', 'endTime', 'duration']

REQUIRED_FIELDS: Dict[str, Dict[str, List[str]]] = {
    'dental': {
        'clients': ['firstName', 'lastName', 'email', 'phone', 'status'],
        'services': ['name', 'description', 'duration', 'cost', 'category', 'active'],
        'staff': _STAFF_FIELDS,
        'timeline': _TIMELINE_FIELDS,
    },
    'gym': {
        'members': ['firstName', 'lastName', 'email', 'phone', 'membershipType', 'status'],
        'packages': ['name', 'description', 'duration', 'price', 'active'],
        'classes': ['name', 'instructorId', 'date', 'duration', 'maxCapacity', 'category'],
        'equipment': ['name', 'category', 'manufacturer', 'model', 'status'],
        'staff': _STAFF_FIELDS,
        'timeline': _TIMELINE_FIELDS,
    },
    'hotel': {
        'clients': ['firstName', 'lastName', 'email', 'phone', 'idDocument', 'status'],
        'rooms': ['roomNumber', 'roomType', 'floor', 'capacity', 'bedType', 'status'],
        'services': ['name', 'description', 'category', 'active'],
        'staff': _STAFF_FIELDS,
        'timeline': _TIMELINE_FIELDS,
    },
}

_STAFF_TEMPLATE = {'name': '', 'email': '', 'phone': '', 'dutyDays': []}
_TIMELINE_TEMPLATE = {'startTime': '', 'endTime': '', 'duration': 0}

DEFAULT_TEMPLATES: Dict[str, Dict[str, Dict[str, Any]]] = {
    'dental': {
        'clients': {'firstName': '', 'lastName': '', 'email': '', 'phone': '', 'status': 'active'},
        'services': {'name': '', 'description': '', 'duration': 0, 'cost': 0, 'category': '', 'active': True},
        'staff': _STAFF_TEMPLATE,
        'timeline': _TIMELINE_TEMPLATE,
    },
    'gym': {
        'members': {'firstName': '', 'lastName': '', 'email': '', 'phone': '', 'membershipType': '', 'status': 'active'},
        'packages': {'name': '', 'description': '', 'duration': 0, 'price': 0, 'active': True},
        'classes': {'name': '', 'instructorId': '', 'date': '', 'duration': 0, 'maxCapacity': 0, 'category': ''},
        'equipment': {'name': '', 'category': '', 'manufacturer': '', 'model': '', 'status': 'active'},
        'staff': _STAFF_TEMPLATE,
        'timeline': _TIMELINE_TEMPLATE,
    },
    'hotel': {
        'clients': {'firstName': '', 'lastName': '', 'email': '', 'phone': '', 'idDocument': {}, 'status': 'active'},
        'rooms': {'roomNumber': '', 'roomType': 'standard', 'floor': 0, 'capacity': 0, 'bedType': '', 'status': 'available'},
        'services': {'name': '', 'description': '', 'category': '', 'active': True},
        'staff': _STAFF_TEMPLATE,
        'timeline': _TIMELINE_TEMPLATE,
    },
}
