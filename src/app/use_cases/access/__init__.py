"""Access resolution use cases"""
from .resolve_principal import ResolvePrincipal
from .authorize_access import AuthorizeAccess, Requirement

__all__ = [
    "ResolvePrincipal",
    "AuthorizeAccess",
    "Requirement",
]
