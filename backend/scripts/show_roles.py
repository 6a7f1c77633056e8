#!/usr/bin/env python
"""Inspect the built-in role catalog a tenant would receive.

Usage:
    python backend/scripts/show_roles.py dental-clinic-7                 # hierarchy table
    python backend/scripts/show_roles.py gym-north --export-json          # role -> matrix JSON on stdout
    python backend/scripts/show_roles.py any --business-type hotel --export-json roles.json
    python backend/scripts/show_roles.py gym-north --fail-if-changed <sha256>

Custom (stored) roles are not included; the catalog is built without a database.
"""
from __future__ import annotations
import os, sys, argparse, textwrap, json, hashlib

# Allow running from repo root
sys.path.append(os.path.abspath('backend'))
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tenant_authz.constants.permissions import BUSINESS_TYPES  # noqa: E402
from tenant_authz.services.business_types import SubstringBusinessTypeResolver  # noqa: E402
from tenant_authz.services.role_catalog import RoleCatalogService  # noqa: E402


def build_role_permission_map(roles):
    return {r.name: {res: sorted(acts) for res, acts in sorted(r.permissions.items())} for r in roles}


def roles_checksum(role_perm_map) -> str:
    canonical = json.dumps(role_perm_map, sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()


def print_role_summary(roles, out=None):
    out = out or sys.stdout
    if not roles:
        print("[INFO] No roles present.", file=out)
        return
    name_w = max(len(r.name) for r in roles)
    print(f"{'Role'.ljust(name_w)} | Hier. | Resources | System", file=out)
    print('-' * (name_w + 32), file=out)
    for r in sorted(roles, key=lambda x: -x.hierarchy):
        print(f"{r.name.ljust(name_w)} | {str(r.hierarchy).rjust(5)} | {str(len(r.permissions)).rjust(9)} | {'yes' if r.is_system_role else 'no'}", file=out)


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Show the role catalog for a business",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  show_roles.py dental-clinic-7\n  show_roles.py gym-north --export-json\n""")
    )
    p.add_argument('business_id', help='Tenant business id (vertical inferred unless --business-type given)')
    p.add_argument('--location-id', default='', help='Tenant location id')
    p.add_argument('--business-type', choices=BUSINESS_TYPES, help='Override vertical inference')
    p.add_argument('--export-json', nargs='?', const='-', metavar='FILE', help='Export role->permissions JSON (to FILE or stdout if omitted)')
    p.add_argument('--fail-if-changed', metavar='CHECKSUM', help='Exit 4 if computed roles checksum differs from provided value')
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    business_type = args.business_type or SubstringBusinessTypeResolver().resolve(args.business_id)
    catalog = RoleCatalogService()
    roles = catalog.get_roles(args.business_id, args.location_id, business_type)
    role_perm_map = build_role_permission_map(roles)
    checksum = roles_checksum(role_perm_map)

    if args.fail_if_changed and checksum != args.fail_if_changed:
        print(f"[CHECKSUM] MISMATCH: expected {args.fail_if_changed} got {checksum}")
        return 4

    if args.export_json is not None:
        payload = {
            'business_type': business_type,
            'roles': role_perm_map,
            'hierarchy': {r.name: r.hierarchy for r in roles},
            'meta': {
                'roles_checksum_sha256': checksum,
                'role_names_sorted': sorted(role_perm_map.keys()),
            }
        }
        if args.export_json == '-':
            print(json.dumps(payload, indent=2, sort_keys=True))
        else:
            with open(args.export_json, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, sort_keys=True)
            print(f"[INFO] Exported JSON to {args.export_json}")
        return 0

    print(f"[INFO] {args.business_id} -> {business_type}")
    print_role_summary(roles)
    if args.fail_if_changed:
        print(f"[CHECKSUM] OK: {checksum}")
    return 0

if __name__ == '__main__':
    sys.exit(main())
