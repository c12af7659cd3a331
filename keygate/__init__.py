"""
Keygate - Dashboard Login Service

Exchanges a dashboard API key for a signed, time-limited bearer token and
guards the dashboard routes with it.

Architecture:
- Each module is self-contained with clear interfaces
- Configuration is read once at startup and injected
- No module knows the internals of another

Modules:
- auth: Credential verification and token issuance
- storage: Credential store backends (Redis, PostgREST)
- middleware: Bearer token extraction for protected routes
- api: Request and response models
"""

__version__ = "1.0.0"
