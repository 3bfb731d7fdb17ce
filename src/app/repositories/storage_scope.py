"""Storage capability scopes

Every repository that can bypass row visibility is constructed with an
explicit scope. Callers pick the scope; nothing escalates implicitly.
"""

from enum import Enum


class StorageScope(str, Enum):
    SCOPED = "scoped"          # rows visible to the caller's organization only
    PRIVILEGED = "privileged"  # no row filter, server-side use only
