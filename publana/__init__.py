"""
Publana - Bearer-token API gateway for a content host

Creates posts on a content-management host (WordPress) on behalf of API
clients holding a bearer token issued from the admin console.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- storage: Option persistence (Redis or in-memory)
- tokens: Token store, generator and admin console operations
- auth: Bearer token and admin key authentication
- posts: Payload sanitization and the content host adapters
- api: Route tables and request/response models
"""

__version__ = "1.7.0"
