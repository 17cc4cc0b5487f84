"""
client.py - High-level Modrinth client.

Provides the Modrinth class, the primary entrypoint for library users. It owns
one Transport (session, credentials, rate-limit counters) and one TagCache,
and exposes typed helpers for search, projects, versions, users and teams.

Resource lookups are fail-soft: when the transport reports a failure (network
error, 404, ...) they return None (or an empty list) instead of raising.
Malformed payloads still raise InvalidFormatError.

Usage example:
    from modrinthpy import Modrinth, Facet
    mr = Modrinth()
    search = mr.search("sodium", 20, facets=[Facet.categories("fabric")])
    for result in search.each():
        print(result.title, result.downloads)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import *

import requests

from .config import ModrinthConfig
from .models import Project, TeamMember, User
from .net import RateLimit, Transport
from .routes import MODRINTHAPIURLS
from .search import Search
from .tags import TagCache
from .version import Version

logger = logging.getLogger(__name__)


class Modrinth:
    """
    High-level client for the Modrinth REST API.

    Parameters
    ----------
    config : Optional[ModrinthConfig]
        Token, user agent, base URL and timeout. Defaults to ModrinthConfig.from_env().
    session : Optional[requests.Session]
        Optional session to use (e.g. a mocked one in tests).
    transport : Optional[Transport]
        Use an existing transport instead of building one from `config`/`session`.

    Examples
    --------
    >>> mr = Modrinth()
    >>> project = mr.project("sodium")
    >>> mr.rate_limit.remaining
    """

    def __init__(
        self,
        config: Optional[ModrinthConfig] = None,
        session: Optional[requests.Session] = None,
        *,
        transport: Optional[Transport] = None,
    ):
        self.transport = transport or Transport(config, session)
        self.tags = TagCache(self.transport)

    @property
    def config(self) -> ModrinthConfig:
        return self.transport.config

    @property
    def rate_limit(self) -> RateLimit:
        """Rate-limit counters from the most recent response."""
        return self.transport.rate_limit

    def search(self, query: Optional[str] = None, page_size: int = 10, **options) -> Search:
        """
        Create a search cursor bound to this client. No request is made until a page is read.

        Parameters
        ----------
        query : Optional[str]
            The query string to search for.
        page_size : int
            Results per page, clamped to [1, 100].
        options :
            facets, filters, index (or sort); see Search.

        Raises
        ------
        InvalidArgumentError
            On an unknown sort index or unparseable facet.
        """
        return Search(query, page_size, transport=self.transport, lookup=self.project, **options)

    def project(self, id_or_slug: str) -> Optional[Project]:
        """
        Retrieve a project by id or slug.

        Returns
        -------
        Optional[Project]
            The project, or None if it was not found or the request failed.
        """
        payload = self.transport.get(MODRINTHAPIURLS.PROJECT, id=id_or_slug)
        return Project.from_json(payload) if isinstance(payload, dict) else None

    def projects(self, ids: Iterable[str]) -> List[Project]:
        """Retrieve several projects in one request; unknown ids are simply missing from the result."""
        ids = list(ids)
        if not ids:
            return []
        payload = self.transport.get(MODRINTHAPIURLS.PROJECTS, params={"ids": ids})
        if not isinstance(payload, list):
            return []
        return [Project.from_json(item) for item in payload]

    def project_versions(
        self,
        id_or_slug: str,
        *,
        loaders: Optional[Iterable[str]] = None,
        game_versions: Optional[Iterable[str]] = None,
        featured: Optional[bool] = None,
    ) -> List[Version]:
        """
        List the versions of a project, optionally filtered by loader, game version or featured flag.
        """
        params: Dict[str, Any] = {
            "loaders": list(loaders) if loaders is not None else None,
            "game_versions": list(game_versions) if game_versions is not None else None,
            "featured": featured,
        }
        payload = self.transport.get(MODRINTHAPIURLS.PROJECT_VERSIONS, params=params, id=id_or_slug)
        if not isinstance(payload, list):
            return []
        return [Version.from_json(item) for item in payload]

    def project_team(self, id_or_slug: str) -> Optional[List[TeamMember]]:
        """Team members of a project, or None if the request failed."""
        payload = self.transport.get(MODRINTHAPIURLS.PROJECT_TEAM, id=id_or_slug)
        if not isinstance(payload, list):
            return None
        return [TeamMember.from_json(item) for item in payload]

    def version(self, version_id: str) -> Optional[Version]:
        payload = self.transport.get(MODRINTHAPIURLS.VERSION, id=version_id)
        return Version.from_json(payload) if isinstance(payload, dict) else None

    def version_from_hash(self, file_hash: str, algorithm: str = "sha1") -> Optional[Version]:
        """Find the version that owns the file with the given hash."""
        payload = self.transport.get(MODRINTHAPIURLS.VERSION_FILE, params={"algorithm": algorithm}, hash=file_hash)
        return Version.from_json(payload) if isinstance(payload, dict) else None

    def versions_from_hashes(self, hashes: Iterable[str], algorithm: str = "sha1") -> Dict[str, Version]:
        """
        Find the versions owning several files at once.

        Returns
        -------
        Dict[str, Version]
            Mapping of file hash to its version; hashes unknown to Modrinth are omitted.
        """
        hashes = list(hashes)
        if not hashes:
            return {}
        payload = self.transport.post(MODRINTHAPIURLS.VERSION_FILES, {"hashes": hashes, "algorithm": algorithm})
        if not isinstance(payload, dict):
            return {}
        return {file_hash: Version.from_json(item) for file_hash, item in payload.items()}

    def user(self, id_or_username: str) -> Optional[User]:
        """Retrieve a user by id or username, or None if not found."""
        payload = self.transport.get(MODRINTHAPIURLS.USER, id=id_or_username)
        return User.from_json(payload) if isinstance(payload, dict) else None

    def user_projects(self, id_or_username: str) -> List[Project]:
        payload = self.transport.get(MODRINTHAPIURLS.USER_PROJECTS, id=id_or_username)
        if not isinstance(payload, list):
            return []
        return [Project.from_json(item) for item in payload]

    def team(self, team_id: str) -> Optional[List[TeamMember]]:
        """Members of a team, or None unless the API answered with an array."""
        payload = self.transport.get(MODRINTHAPIURLS.TEAM, id=team_id)
        if not isinstance(payload, list):
            return None
        return [TeamMember.from_json(item) for item in payload]

    def download_version(self, version: Version, directory: Union[str, Path] = ".", primary_only: bool = False) -> int:
        """
        Download the files of `version` into `directory` using this client's session.

        Returns the number of files written; files failing their checksum are skipped.
        """
        return version.download(directory, primary_only=primary_only, session=self.transport.session)


def create_client(token: Optional[str] = None, user_agent: Optional[str] = None, **kwargs) -> Modrinth:
    """
    Convenience factory: build a Modrinth client from the environment, with
    explicit `token`/`user_agent`/config fields overriding it.
    """
    config = ModrinthConfig.from_env()
    updates = dict(kwargs)
    if token is not None:
        updates["token"] = token
    if user_agent is not None:
        updates["user_agent"] = user_agent
    if updates:
        config = config.model_copy(update=updates)
    return Modrinth(config)
