"""
Employee management API backed by JSON document stores.

Subpackages:
- core: settings, security helpers, logging, exceptions and request dependencies
- db: record stores, store configuration, entity models and seeding
- repositories: typed CRUD over a record store
- services: authentication and employee orchestration
- api: FastAPI application and routers
"""

__version__ = "1.0.0"
