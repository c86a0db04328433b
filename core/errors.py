from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for store/repository operations"""
    pass


class NotFoundError(RepositoryError):
    """Raised when an update targets an id or sku that does not exist"""
    pass


class DuplicateKeyError(RepositoryError):
    """Raised when a natural key (item sku) is already taken"""
    pass


class ValidationError(ValueError):
    """Raised by the input checks the screens run before calling the core"""
    pass


class AuthError(Exception):
    """Raised when a username/password pair is not recognised"""
    pass
