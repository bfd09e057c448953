# blog/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Failure types and the boundary error translator
- limiter: Rate limiting for the auth endpoints
- responses: Success envelope
- security: Password hashing and JWT tokens
- validation: Value validators (username policy)
"""
