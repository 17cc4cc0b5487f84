"""
modrinthpy package initializer.

This file exposes the high-level public API for the package:
 - Modrinth (main client) and create_client (convenience factory)
 - Search (paginated search cursor) and Facet (search filters)
 - the typed resource models
 - exceptions (module with custom exceptions)

Implementation notes:
 - Avoid heavy work at import time; no request is made until a method is called.
"""

__all__ = [
    "Modrinth", "create_client", "ModrinthConfig", "Transport", "RateLimit",
    "Search", "SearchIndex", "EXHAUSTED", "Facet", "FacetType", "TagCache",
    "Project", "SearchResult", "User", "TeamMember", "TeamPermission", "License", "Loader",
    "GameVersion", "Category", "DonationPlatform", "ModeratorMessage", "GalleryImage",
    "Version", "VersionFile", "Dependency",
    "fingerprint_from_file", "exceptions", "__version__",
]

# package version (update as you release)
__version__ = "0.1.0"

from . import exceptions
from .exceptions import *  # noqa: F401,F403

from .client import Modrinth, create_client
from .config import ModrinthConfig
from .facet import Facet, FacetType
from .models import (
    Category,
    DonationPlatform,
    GalleryImage,
    GameVersion,
    License,
    Loader,
    ModeratorMessage,
    Project,
    SearchResult,
    TeamMember,
    TeamPermission,
    User,
)
from .net import RateLimit, Transport
from .search import EXHAUSTED, Search, SearchIndex
from .tags import TagCache
from .utils import fingerprint_from_file
from .version import Dependency, Version, VersionFile
