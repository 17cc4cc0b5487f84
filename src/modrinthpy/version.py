"""
modrinthpy.version
------------------

Project versions, their dependencies and their downloadable files.

Download policy
- VersionFile.download() verifies the checksum on the in-memory buffer before
  anything touches the disk; a mismatch raises ChecksumMismatchError and
  leaves the target directory untouched.
- Version.download() is skip-and-continue: a file that fails its checksum or
  transfer is logged and skipped, the remaining files are still attempted, and
  the return value counts the files actually written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import *

import requests

from .exceptions import ChecksumMismatchError, DownloadError, InvalidFormatError
from .fileops import atomic_write, safe_filename
from .models import Model, coerce_enum, require_mapping
from .utils import fingerprint_from_bytes, parse_datetime

logger = logging.getLogger(__name__)

# strongest first
HASH_PREFERENCE = ("sha512", "sha256", "sha1")


class VersionType(str, Enum):
    """Release channel of a version."""
    release = "release"
    beta = "beta"
    alpha = "alpha"


class VersionStatus(str, Enum):
    listed = "listed"
    archived = "archived"
    draft = "draft"
    unlisted = "unlisted"
    scheduled = "scheduled"
    unknown = "unknown"


class DependencyType(str, Enum):
    required = "required"
    optional = "optional"
    incompatible = "incompatible"
    embedded = "embedded"


@dataclass
class Dependency(Model):
    """
    A dependency of a version on another project, version or file.

    Attributes
    ----------
    dependency_type : DependencyType
    version_id : Optional[str]
    project_id : Optional[str]
    filename : Optional[str]
        Name of an external file, for dependencies that are not hosted on Modrinth.
    """
    dependency_type: DependencyType
    version_id: Optional[str] = None
    project_id: Optional[str] = None
    filename: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "Dependency":
        d = require_mapping(payload, "Dependency")
        return cls(
            dependency_type=coerce_enum(DependencyType, d.get("dependency_type"), field_name="dependency_type"),
            version_id=d.get("version_id"),
            project_id=d.get("project_id"),
            filename=d.get("file_name") or d.get("filename"),
        )


@dataclass
class VersionFile(Model):
    """
    A downloadable file attached to a version.

    Attributes
    ----------
    url : str
        Direct download URL.
    filename : str
        Name the file is saved under.
    hashes : Dict[str, str]
        Declared digests keyed by algorithm (sha1, sha256, sha512).
    primary : bool
        Whether this is the version's primary file.
    size : Optional[int]
        Size in bytes.
    file_type : Optional[str]
        Extra file kind (e.g. "required-resource-pack"), None for regular files.
    """
    url: str
    filename: str
    hashes: Dict[str, str] = field(default_factory=dict)
    primary: bool = False
    size: Optional[int] = None
    file_type: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "VersionFile":
        d = require_mapping(payload, "VersionFile")
        if not d.get("url"):
            raise InvalidFormatError("version file requires a 'url' field")
        hashes = d.get("hashes") if isinstance(d.get("hashes"), dict) else {}
        filename = safe_filename(d.get("filename") or d.get("file_name") or d["url"].rsplit("/", 1)[-1])
        if filename is None:
            raise InvalidFormatError(f"version file {d['url']!r} has no usable file name")
        return cls(
            url=d["url"],
            filename=filename,
            hashes={k.lower(): str(v).lower() for k, v in hashes.items() if k.lower() in HASH_PREFERENCE and v},
            primary=bool(d.get("primary")),
            size=d.get("size"),
            file_type=d.get("file_type"),
        )

    @property
    def sha1(self) -> Optional[str]:
        return self.hashes.get("sha1")

    @property
    def sha256(self) -> Optional[str]:
        return self.hashes.get("sha256")

    @property
    def sha512(self) -> Optional[str]:
        return self.hashes.get("sha512")

    def checksum_algorithm(self) -> Optional[str]:
        """The strongest declared hash algorithm, or None when no digest was declared."""
        for algorithm in HASH_PREFERENCE:
            if self.hashes.get(algorithm):
                return algorithm
        return None

    def verify(self, buffer: bytes) -> None:
        """
        Check `buffer` against the strongest declared digest.

        Raises
        ------
        ChecksumMismatchError
            If the computed digest differs from the declared one.
        """
        algorithm = self.checksum_algorithm()
        if algorithm is None:
            return
        expected = self.hashes[algorithm]
        actual = fingerprint_from_bytes(buffer, algorithm)
        if actual != expected:
            raise ChecksumMismatchError(
                f"{algorithm.upper()} checksum failed for {self.filename}: expected {expected}, got {actual}"
            )

    def download(self, target_directory: Union[str, Path] = ".", session: Optional[requests.Session] = None,
                 *, checksum: bool = True, timeout: float = 60.0) -> int:
        """
        Fetch the file, verify it, and write it to `target_directory/filename`.

        Parameters
        ----------
        target_directory : str | Path
            Directory to save into (created if missing).
        session : Optional[requests.Session]
            Session to fetch with; a plain requests.get() is used when omitted.
        checksum : bool
            Verify the declared digest before writing.
        timeout : float
            Request timeout in seconds.

        Returns
        -------
        int
            Number of bytes written.

        Raises
        ------
        ChecksumMismatchError
            The content does not match the declared hash; nothing is written.
        DownloadError
            The transfer or the write failed.
        """
        filename = safe_filename(self.filename)
        if filename is None:
            raise DownloadError(f"refusing to save {self.url} under file name {self.filename!r}")

        getter = session.get if session is not None else requests.get
        try:
            resp = getter(self.url, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise DownloadError(f"failed to fetch {self.url}: {exc}") from exc
        buffer = resp.content

        if checksum:
            self.verify(buffer)

        dest = Path(target_directory) / filename
        written = atomic_write(dest, buffer)
        logger.debug("Downloaded %s (%d bytes) to %s", self.url, written, dest)
        return written


@dataclass
class Version(Model):
    """
    Typed representation of a project version.

    Game versions and loaders are kept as the names sent by the API; resolve
    them against the tag lists with TagCache.game_version()/TagCache.loader().
    """
    id: str
    project_id: str
    name: str
    version_number: str
    version_type: VersionType
    date_published: datetime
    author_id: Optional[str] = None
    changelog: Optional[str] = None
    status: VersionStatus = VersionStatus.unknown
    featured: bool = False
    downloads: int = 0
    game_versions: List[str] = field(default_factory=list)
    loaders: List[str] = field(default_factory=list)
    dependencies: List[Dependency] = field(default_factory=list)
    files: List[VersionFile] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "Version":
        d = require_mapping(payload, "Version")
        return cls(
            id=d.get("id"),
            project_id=d.get("project_id"),
            name=d.get("name"),
            version_number=d.get("version_number"),
            version_type=coerce_enum(VersionType, d.get("version_type"), field_name="version_type"),
            date_published=parse_datetime(d.get("date_published"), field_name="date_published"),
            author_id=d.get("author_id"),
            changelog=d.get("changelog"),
            status=coerce_enum(VersionStatus, d.get("status"), VersionStatus.unknown),
            featured=bool(d.get("featured")),
            downloads=d.get("downloads") or 0,
            game_versions=list(d.get("game_versions") or []),
            loaders=list(d.get("loaders") or []),
            dependencies=[Dependency.from_json(x) for x in (d.get("dependencies") or [])],
            files=[VersionFile.from_json(x) for x in (d.get("files") or [])],
            data=d,
        )

    @property
    def primary_file(self) -> Optional[VersionFile]:
        """The file flagged as primary, falling back to the first file."""
        for f in self.files:
            if f.primary:
                return f
        return self.files[0] if self.files else None

    def download(self, target_directory: Union[str, Path] = ".", primary_only: bool = False,
                 session: Optional[requests.Session] = None) -> int:
        """
        Download the files of this version.

        Returns
        -------
        int
            The number of files successfully written. Files failing their
            checksum or transfer are skipped (and logged), not raised.
        """
        if primary_only:
            primary = self.primary_file
            candidates = [primary] if primary is not None else []
        else:
            candidates = list(self.files)

        count = 0
        for resource in candidates:
            try:
                resource.download(target_directory, session)
            except (ChecksumMismatchError, DownloadError) as exc:
                logger.warning("Skipping %s of version %s: %s", resource.filename, self.id, exc)
                continue
            count += 1
        return count

    def __repr__(self) -> str:
        return f"<Version id={self.id!r} number={self.version_number!r} type={self.version_type.value}>"


__all__ = ["VersionType", "VersionStatus", "DependencyType", "Dependency", "VersionFile", "Version"]
