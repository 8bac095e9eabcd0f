"""
BurningFury API - Player Records Service

A CRUD backend for raid roster player records.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: Credential validation (bearer tokens and API keys)
- middleware: Anonymous-aware authentication gate
- players: Player persistence and pagination/search
- feedback: Feedback forwarding and rate limiting
- storage: Redis connection management
- api: REST API routes, models and error responses
"""

__version__ = "1.0.0"
