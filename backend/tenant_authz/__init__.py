from flask import Flask
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from typing import Optional, Dict, Any
import os

load_dotenv()

db_engine = None
SessionLocal = None
jwt = JWTManager()

# Engine singletons (wired in create_app)
business_type_resolver = None
schema_validator = None
role_catalog = None
gate = None


def create_app(config: Optional[Dict[str, Any]] = None):
    global db_engine, SessionLocal, business_type_resolver, schema_validator, role_catalog, gate
    app = Flask(__name__)

    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL', 'sqlite:///dev.db')
    app.config['ROLE_CACHE_TTL_SECONDS'] = os.getenv('ROLE_CACHE_TTL_SECONDS')
    app.config['DEFAULT_SHARD_ID'] = os.getenv('DEFAULT_SHARD_ID', 'shard-0')
    app.config['TENANT_BUSINESS_TYPES'] = os.getenv('TENANT_BUSINESS_TYPES', '')

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    # Database
    db_url = app.config['DATABASE_URL']
    if db_url.endswith(':memory:'):
        # Ensure a single shared in-memory SQLite database across all sessions
        db_engine = create_engine(
            db_url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        db_engine = create_engine(db_url, echo=False, future=True)
    SessionLocal = scoped_session(sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False))

    jwt.init_app(app)

    # Authorization engine
    from .config.cache import normalize_ttl
    from .services.business_types import MappingBusinessTypeResolver, SubstringBusinessTypeResolver, parse_business_type_mapping
    from .services.cache import PermissionCache
    from .services.matrix import RolePermissionMatrixBuilder
    from .services.policy import AuthorizationGate
    from .services.resource_schema import ResourceSchemaValidator
    from .services.role_catalog import RoleCatalogService
    from .services.role_store import SqlRoleStore
    from .services.shards import StaticShardResolver

    mapping = parse_business_type_mapping(app.config['TENANT_BUSINESS_TYPES'])
    business_type_resolver = MappingBusinessTypeResolver(mapping) if mapping else SubstringBusinessTypeResolver()
    ttl = normalize_ttl(app.config['ROLE_CACHE_TTL_SECONDS'])
    schema_validator = ResourceSchemaValidator()
    role_catalog = RoleCatalogService(
        matrix_builder=RolePermissionMatrixBuilder(business_type_resolver),
        shard_resolver=StaticShardResolver(app.config['DEFAULT_SHARD_ID']),
        role_store=SqlRoleStore(get_db),
        cache=PermissionCache(default_ttl=ttl),
        cache_ttl=ttl,
    )
    gate = AuthorizationGate(role_catalog=role_catalog, business_types=business_type_resolver)

    from .routes.authz import authz_bp
    from .routes.schemas import schemas_bp
    app.register_blueprint(authz_bp, url_prefix='/authz')
    app.register_blueprint(schemas_bp, url_prefix='/schemas')

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    from .exceptions import PermissionDenied, SystemRoleProtected, InvalidRoleError

    @app.errorhandler(PermissionDenied)
    def handle_denied(e):  # type: ignore
        return {
            'error': {
                'status': 403,
                'title': 'Forbidden',
                'detail': str(e),
                'context': e.to_dict(),
            }
        }, 403

    @app.errorhandler(SystemRoleProtected)
    @app.errorhandler(InvalidRoleError)
    def handle_role_errors(e):  # type: ignore
        return {'error': {'status': 400, 'title': 'Bad Request', 'detail': str(e)}}, 400

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    return app


def get_db():
    return SessionLocal()


def get_gate():
    return gate


def get_role_catalog():
    return role_catalog


def get_schema_validator():
    return schema_validator


def get_business_type_resolver():
    return business_type_resolver
