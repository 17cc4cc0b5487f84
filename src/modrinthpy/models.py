"""
models.py

Typed dataclasses for the JSON entities returned by the Modrinth API.

Purpose
-------
- Provide typed, documented containers for projects, search results, users,
  team members and the tag lists (categories, loaders, game versions,
  licenses, donation platforms).
- Supply `from_json()` factories that decode a raw payload field by field,
  coercing symbolic fields into enums and timestamps into datetimes.
- Keep the original raw payload available in `.data` for debugging/forward-compatibility.

Notes
-----
- Symbolic project fields fall back to a default when the server sends an
  unknown value (status -> unknown, client/server support -> unsupported,
  project type -> mod). Other enumerated fields are strict and raise
  InvalidFormatError.
- Project, SearchResult, License and DonationPlatform compare by id.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum, IntFlag
from functools import cached_property
from typing import *

from .exceptions import InvalidFormatError
from .utils import parse_datetime

E = TypeVar("E", bound=Enum)


# Enums
class ProjectType(str, Enum):
    mod = "mod"
    modpack = "modpack"
    resourcepack = "resourcepack"
    shader = "shader"
    plugin = "plugin"
    datapack = "datapack"


class SupportLevel(str, Enum):
    """Client/server side support of a project."""
    required = "required"
    optional = "optional"
    unsupported = "unsupported"
    unknown = "unknown"


class ProjectStatus(str, Enum):
    approved = "approved"
    archived = "archived"
    rejected = "rejected"
    draft = "draft"
    unlisted = "unlisted"
    processing = "processing"
    withheld = "withheld"
    scheduled = "scheduled"
    private = "private"
    unknown = "unknown"


class UserRole(str, Enum):
    admin = "admin"
    moderator = "moderator"
    developer = "developer"


class GameVersionType(str, Enum):
    release = "release"
    snapshot = "snapshot"
    alpha = "alpha"
    beta = "beta"


class TeamPermission(IntFlag):
    """Permission bits of a team member."""
    NONE = 0x00
    UPLOAD_VERSION = 0x01
    DELETE_VERSION = 0x02
    EDIT_DETAILS = 0x04
    EDIT_BODY = 0x08
    MANAGE_INVITES = 0x10
    REMOVE_MEMBER = 0x20
    EDIT_MEMBER = 0x40
    DELETE_PROJECT = 0x80
    ALL = 0xFF


def coerce_enum(enum_cls: Type[E], value: Any, default: Optional[E] = None, *, field_name: str = "") -> E:
    """
    Convert a raw payload value into `enum_cls`.

    When `default` is given, missing or unknown values fall back to it;
    otherwise InvalidFormatError is raised.
    """
    if isinstance(value, enum_cls):
        return value
    if value is not None:
        try:
            return enum_cls(value)
        except ValueError:
            pass
    if default is not None:
        return default
    raise InvalidFormatError(f"invalid {enum_cls.__name__} value {value!r} for field {field_name!r}")


def require_mapping(payload: Any, model: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise InvalidFormatError(f"{model} payload must be a JSON object, got {type(payload).__name__}")
    return payload


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, IntFlag):
        return int(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class Model:
    """Shared serialization for the dataclass models."""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible dict; enums become their values and datetimes ISO-8601 strings."""
        result = {}
        for f in fields(self):
            if f.name == "data" or f.name.startswith("_"):
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = _plain(value)
        return result


# Tags
@dataclass
class Category(Model):
    """
    A category tag.

    Attributes
    ----------
    icon : Optional[str]
        SVG icon of the category.
    name : str
        Category name, also the value used in `categories` facets.
    project_type : Optional[str]
        Project type the category applies to.
    header : Optional[str]
        Header under which the category is displayed (e.g. "categories", "resolutions").
    """
    name: str
    icon: Optional[str] = None
    project_type: Optional[str] = None
    header: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "Category":
        d = require_mapping(payload, "Category")
        return cls(
            name=d.get("name"),
            icon=d.get("icon"),
            project_type=d.get("project_type"),
            header=d.get("header"),
            data=d,
        )

    def __str__(self) -> str:
        return self.name or ""


@dataclass
class Loader(Model):
    """A mod loader tag (fabric, forge, quilt, ...)."""
    name: str
    icon: Optional[str] = None
    supported_project_types: List[str] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "Loader":
        d = require_mapping(payload, "Loader")
        return cls(
            name=str(d.get("name") or ""),
            icon=d.get("icon"),
            supported_project_types=list(d.get("supported_project_types") or []),
            data=d,
        )

    def __str__(self) -> str:
        return self.name


@dataclass
class GameVersion(Model):
    """A game version tag, e.g. `1.19.2 (Release)`."""
    version: str
    version_type: GameVersionType
    date: datetime
    major: bool = False
    data: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "GameVersion":
        d = require_mapping(payload, "GameVersion")
        return cls(
            version=str(d.get("version") or ""),
            version_type=coerce_enum(GameVersionType, d.get("version_type"), field_name="version_type"),
            date=parse_datetime(d.get("date"), field_name="date"),
            major=bool(d.get("major")),
            data=d,
        )

    def __str__(self) -> str:
        return f"{self.version} ({self.version_type.value.capitalize()})"


@dataclass(eq=False)
class License(Model):
    """A license, identified by its SPDX-like id. Equality is by id only."""
    id: str
    name: Optional[str] = None
    url: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "License":
        d = require_mapping(payload, "License")
        return cls(
            id=str(d.get("id") or d.get("short") or ""),
            name=d.get("name"),
            url=d.get("url"),
            data=d,
        )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, License) and other.id == self.id

    def __hash__(self) -> int:
        return hash(("License", self.id))

    def __str__(self) -> str:
        return self.name or self.id


@dataclass(eq=False)
class DonationPlatform(Model):
    """
    A donation platform, optionally with a project-specific link.

    Two instances are equal when both the platform id and the URL match.
    """
    id: str
    name: Optional[str] = None
    url: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "DonationPlatform":
        d = require_mapping(payload, "DonationPlatform")
        return cls(
            id=str(d.get("id") or d.get("short") or ""),
            name=d.get("name") or d.get("platform"),
            url=d.get("url"),
            data=d,
        )

    @classmethod
    def patreon(cls, url: str) -> "DonationPlatform":
        return cls("patreon", "Patreon", url)

    @classmethod
    def bmac(cls, url: str) -> "DonationPlatform":
        return cls("bmac", "Buy Me a Coffee", url)

    @classmethod
    def paypal(cls, url: str) -> "DonationPlatform":
        return cls("paypal", "PayPal", url)

    @classmethod
    def github(cls, url: str) -> "DonationPlatform":
        return cls("github", "GitHub Sponsors", url)

    @classmethod
    def kofi(cls, url: str) -> "DonationPlatform":
        return cls("ko-fi", "Ko-fi", url)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DonationPlatform) and other.id == self.id and other.url == self.url

    def __hash__(self) -> int:
        return hash(("DonationPlatform", self.id, self.url))

    def __str__(self) -> str:
        return f"{self.name} ({self.url})" if self.url else (self.name or self.id)


@dataclass
class ModeratorMessage(Model):
    """A message left by the moderators on a project."""
    message: str
    body: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "ModeratorMessage":
        d = require_mapping(payload, "ModeratorMessage")
        if not d.get("message"):
            raise InvalidFormatError("moderator message requires a 'message' field")
        return cls(message=d["message"], body=d.get("body"))

    def __str__(self) -> str:
        return self.message


# Users and teams
@dataclass
class User(Model):
    """
    A Modrinth user.

    Attributes
    ----------
    id : str
        Base62 user id.
    username : str
        Unique username.
    name : Optional[str]
        Display name.
    email : Optional[str]
        Only present when the token belongs to this user.
    bio : Optional[str]
    avatar_url : Optional[str]
    github_id : Optional[int]
    created : datetime
        Account creation time.
    role : UserRole
    """
    id: str
    username: str
    created: datetime
    role: UserRole
    name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    github_id: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "User":
        d = require_mapping(payload, "User")
        return cls(
            id=d.get("id"),
            username=d.get("username"),
            created=parse_datetime(d.get("created"), field_name="created"),
            role=coerce_enum(UserRole, d.get("role"), field_name="role"),
            name=d.get("name"),
            email=d.get("email"),
            bio=d.get("bio"),
            avatar_url=d.get("avatar_url"),
            github_id=d.get("github_id"),
            data=d,
        )

    def __str__(self) -> str:
        return self.username or self.id


@dataclass
class TeamMember(Model):
    """A user's membership in a project team, with its role and permission bits."""
    team_id: str
    user: User
    role: str
    permissions: TeamPermission = TeamPermission.NONE
    accepted: bool = False
    payouts_split: Optional[float] = None
    ordering: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "TeamMember":
        d = require_mapping(payload, "TeamMember")
        if not isinstance(d.get("user"), dict):
            raise InvalidFormatError("team member payload requires a 'user' object")
        return cls(
            team_id=d.get("team_id"),
            user=User.from_json(d["user"]),
            role=d.get("role") or "",
            permissions=TeamPermission(int(d.get("permissions") or 0) & TeamPermission.ALL),
            accepted=bool(d.get("accepted")),
            payouts_split=d.get("payouts_split"),
            ordering=d.get("ordering"),
            data=d,
        )

    def has_permission(self, flag: TeamPermission) -> bool:
        return (self.permissions & flag) == flag


# Projects
@dataclass
class GalleryImage(Model):
    """An image uploaded to a project's gallery."""
    url: str
    created: datetime
    featured: bool = False
    title: Optional[str] = None
    description: Optional[str] = None
    ordering: Optional[int] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "GalleryImage":
        d = require_mapping(payload, "GalleryImage")
        return cls(
            url=d.get("url"),
            created=parse_datetime(d.get("created"), field_name="created"),
            featured=bool(d.get("featured")),
            title=d.get("title"),
            description=d.get("description"),
            ordering=d.get("ordering"),
        )


@dataclass(eq=False)
class Project(Model):
    """
    Typed representation of a project (mod, modpack, resource pack, ...).

    Equality is by project id.
    """
    SLUG_PATTERN: ClassVar[re.Pattern] = re.compile(r"^[\w!@$()`.+,\"\-']{3,64}$")

    id: str
    slug: str
    title: str
    description: str
    published: datetime
    updated: datetime
    body: Optional[str] = None
    project_type: ProjectType = ProjectType.mod
    client_side: SupportLevel = SupportLevel.unsupported
    server_side: SupportLevel = SupportLevel.unsupported
    status: ProjectStatus = ProjectStatus.unknown
    categories: List[str] = field(default_factory=list)
    additional_categories: List[str] = field(default_factory=list)
    downloads: int = 0
    followers: int = 0
    icon_url: Optional[str] = None
    color: Optional[int] = None
    team: Optional[str] = None
    approved: Optional[datetime] = None
    queued: Optional[datetime] = None
    versions: List[str] = field(default_factory=list)
    game_versions: List[str] = field(default_factory=list)
    loaders: List[str] = field(default_factory=list)
    license: Optional[License] = None
    issues_url: Optional[str] = None
    source_url: Optional[str] = None
    wiki_url: Optional[str] = None
    discord_url: Optional[str] = None
    donation_urls: List[DonationPlatform] = field(default_factory=list)
    moderator_message: Optional[ModeratorMessage] = None
    gallery: List[GalleryImage] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "Project":
        d = require_mapping(payload, "Project")
        license_payload = d.get("license")
        moderator = d.get("moderator_message")
        return cls(
            id=d.get("id"),
            slug=d.get("slug"),
            title=d.get("title"),
            description=d.get("description"),
            published=parse_datetime(d.get("published"), field_name="published"),
            updated=parse_datetime(d.get("updated"), field_name="updated"),
            body=d.get("body"),
            project_type=coerce_enum(ProjectType, d.get("project_type"), ProjectType.mod),
            client_side=coerce_enum(SupportLevel, d.get("client_side"), SupportLevel.unsupported),
            server_side=coerce_enum(SupportLevel, d.get("server_side"), SupportLevel.unsupported),
            status=coerce_enum(ProjectStatus, d.get("status"), ProjectStatus.unknown),
            categories=list(d.get("categories") or []),
            additional_categories=list(d.get("additional_categories") or []),
            downloads=d.get("downloads") or 0,
            followers=d.get("followers") or 0,
            icon_url=d.get("icon_url"),
            color=d.get("color"),
            team=d.get("team"),
            approved=parse_datetime(d.get("approved"), required=False),
            queued=parse_datetime(d.get("queued"), required=False),
            versions=list(d.get("versions") or []),
            game_versions=list(d.get("game_versions") or []),
            loaders=list(d.get("loaders") or []),
            license=License.from_json(license_payload) if isinstance(license_payload, dict) else None,
            issues_url=d.get("issues_url"),
            source_url=d.get("source_url"),
            wiki_url=d.get("wiki_url"),
            discord_url=d.get("discord_url"),
            donation_urls=[DonationPlatform.from_json(x) for x in (d.get("donation_urls") or [])],
            moderator_message=ModeratorMessage.from_json(moderator) if isinstance(moderator, dict) else None,
            gallery=[GalleryImage.from_json(x) for x in (d.get("gallery") or [])],
            data=d,
        )

    @classmethod
    def is_valid_slug(cls, slug: str) -> bool:
        return isinstance(slug, str) and cls.SLUG_PATTERN.match(slug) is not None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Project) and other.id == self.id

    def __hash__(self) -> int:
        return hash(("Project", self.id))

    def __repr__(self) -> str:
        return f"<Project id={self.id!r} slug={self.slug!r} type={self.project_type.value}>"


ProjectLookup = Callable[[str], Optional[Project]]


@dataclass(frozen=True, eq=False)
class SearchResult(Model):
    """
    Immutable snapshot of a project as indexed by the search engine.

    Equality is by `project_id` only. The full Project is resolved on demand
    through `project`, which performs one lookup and caches the result.
    """
    project_id: str
    slug: str
    title: str
    description: str
    date_created: datetime
    date_modified: datetime
    author: Optional[str] = None
    project_type: ProjectType = ProjectType.mod
    client_side: SupportLevel = SupportLevel.unsupported
    server_side: SupportLevel = SupportLevel.unsupported
    categories: Tuple[str, ...] = ()
    display_categories: Tuple[str, ...] = ()
    versions: Tuple[str, ...] = ()
    downloads: int = 0
    follows: int = 0
    icon_url: Optional[str] = None
    color: Optional[int] = None
    latest_version: Optional[str] = None
    license: Optional[str] = None
    gallery: Tuple[str, ...] = ()
    featured_gallery: Optional[str] = None
    _lookup: Optional[ProjectLookup] = field(default=None, repr=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any], lookup: Optional[ProjectLookup] = None) -> "SearchResult":
        d = require_mapping(payload, "SearchResult")
        return cls(
            project_id=d.get("project_id"),
            slug=d.get("slug"),
            title=d.get("title"),
            description=d.get("description"),
            date_created=parse_datetime(d.get("date_created"), field_name="date_created"),
            date_modified=parse_datetime(d.get("date_modified"), field_name="date_modified"),
            author=d.get("author"),
            project_type=coerce_enum(ProjectType, d.get("project_type"), ProjectType.mod),
            client_side=coerce_enum(SupportLevel, d.get("client_side"), SupportLevel.unsupported),
            server_side=coerce_enum(SupportLevel, d.get("server_side"), SupportLevel.unsupported),
            categories=tuple(d.get("categories") or ()),
            display_categories=tuple(d.get("display_categories") or ()),
            versions=tuple(d.get("versions") or ()),
            downloads=d.get("downloads") or 0,
            follows=d.get("follows") or 0,
            icon_url=d.get("icon_url"),
            color=d.get("color"),
            latest_version=d.get("latest_version"),
            license=d.get("license"),
            gallery=tuple(d.get("gallery") or ()),
            featured_gallery=d.get("featured_gallery"),
            _lookup=lookup,
        )

    @cached_property
    def project(self) -> Optional[Project]:
        """The full Project this result refers to (one lookup, then cached). None without a lookup."""
        if self._lookup is None:
            return None
        return self._lookup(self.project_id)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SearchResult) and other.project_id == self.project_id

    def __hash__(self) -> int:
        return hash(("SearchResult", self.project_id))

    def __str__(self) -> str:
        return self.title or self.project_id


__all__ = [
    "ProjectType", "SupportLevel", "ProjectStatus", "UserRole", "GameVersionType", "TeamPermission",
    "coerce_enum", "require_mapping", "Model",
    "Category", "Loader", "GameVersion", "License", "DonationPlatform", "ModeratorMessage",
    "User", "TeamMember", "GalleryImage", "Project", "ProjectLookup", "SearchResult",
]
