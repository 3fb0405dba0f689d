"""
Routers package initialization.
"""
from pwd_registry.routers import users
from pwd_registry.routers import genders
from pwd_registry.routers import communities
from pwd_registry.routers import disability_categories
from pwd_registry.routers import disability_types
from pwd_registry.routers import assistance_types
from pwd_registry.routers import pwd_records
from pwd_registry.routers import pwd_satellites
from pwd_registry.routers import assistance_requests
from pwd_registry.routers import statistics
from pwd_registry.routers import activity_logs

__all__ = [
    "users",
    "genders",
    "communities",
    "disability_categories",
    "disability_types",
    "assistance_types",
    "pwd_records",
    "pwd_satellites",
    "assistance_requests",
    "statistics",
    "activity_logs",
]
