"""
Client-side cache for the tag lists (categories, loaders, game versions,
licenses, donation platforms, report types).

Tag lists change rarely, so each one is fetched at most once per TagCache and
memoized until invalidate() or refresh() is called. A failed fetch returns an
empty list and is not memoized, so the next call retries.
"""

from __future__ import annotations

import logging
import threading
from typing import *

from .models import Category, DonationPlatform, GameVersion, License, Loader
from .routes import MODRINTHAPIURLS

if TYPE_CHECKING:
    from .net import Transport

logger = logging.getLogger(__name__)

# name -> (endpoint, decoder); report types are plain strings
_TAGS: Dict[str, Tuple[str, Optional[Callable[[Dict[str, Any]], Any]]]] = {
    "categories": (MODRINTHAPIURLS.TAG_CATEGORY, Category.from_json),
    "loaders": (MODRINTHAPIURLS.TAG_LOADER, Loader.from_json),
    "game_versions": (MODRINTHAPIURLS.TAG_GAME_VERSION, GameVersion.from_json),
    "licenses": (MODRINTHAPIURLS.TAG_LICENSE, License.from_json),
    "donation_platforms": (MODRINTHAPIURLS.TAG_DONATION, DonationPlatform.from_json),
    "report_types": (MODRINTHAPIURLS.TAG_REPORT_TYPE, None),
}


class TagCache:
    """
    Memoized tag lists owned by one client.

    Parameters
    ----------
    transport : Transport
        Transport used to fetch the lists.
    """

    NAMES = tuple(_TAGS)

    def __init__(self, transport: "Transport"):
        self.transport = transport
        self._cache: Dict[str, List[Any]] = {}
        self._lock = threading.Lock()

    def categories(self) -> List[Category]:
        return self._get("categories")

    def loaders(self) -> List[Loader]:
        return self._get("loaders")

    def game_versions(self) -> List[GameVersion]:
        return self._get("game_versions")

    def licenses(self) -> List[License]:
        return self._get("licenses")

    def donation_platforms(self) -> List[DonationPlatform]:
        return self._get("donation_platforms")

    def report_types(self) -> List[str]:
        return self._get("report_types")

    def loader(self, name: str) -> Optional[Loader]:
        """Find a loader by name, case-insensitively."""
        if not isinstance(name, str):
            return None
        return next((l for l in self.loaders() if l.name.casefold() == name.casefold()), None)

    def game_version(self, name: str) -> Optional[GameVersion]:
        """Find a game version by its version string, case-insensitively."""
        if not isinstance(name, str):
            return None
        return next((gv for gv in self.game_versions() if gv.version.casefold() == name.casefold()), None)

    def license(self, id_or_name: str) -> Optional[License]:
        """Find a license by id or display name."""
        return next((l for l in self.licenses() if id_or_name in (l.id, l.name)), None)

    def is_cached(self, name: str) -> bool:
        return name in self._cache

    def invalidate(self, name: Optional[str] = None) -> None:
        """Drop one memoized list, or all of them when `name` is None."""
        with self._lock:
            if name is None:
                self._cache.clear()
            else:
                self._check_name(name)
                self._cache.pop(name, None)

    def refresh(self, name: str) -> List[Any]:
        """Re-fetch one list, replacing the memoized copy."""
        self.invalidate(name)
        return self._get(name)

    def _check_name(self, name: str) -> None:
        if name not in _TAGS:
            raise KeyError(f"Unknown tag list: {name!r}. Available: {', '.join(self.NAMES)}")

    def _get(self, name: str) -> List[Any]:
        self._check_name(name)
        with self._lock:
            if name in self._cache:
                return self._cache[name]
            endpoint, decoder = _TAGS[name]
            payload = self.transport.get(endpoint)
            if not isinstance(payload, list):
                logger.warning("Could not fetch tag list %s", name)
                return []
            items = [decoder(item) for item in payload] if decoder else [str(item) for item in payload]
            self._cache[name] = items
            logger.debug("Cached %d %s", len(items), name)
            return items
