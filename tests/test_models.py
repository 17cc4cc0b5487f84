"""Tests for payload decoding of the resource models."""

from datetime import datetime, timezone

import pytest

from modrinthpy.exceptions import InvalidFormatError
from modrinthpy.models import (
    DonationPlatform,
    GameVersion,
    GameVersionType,
    License,
    ModeratorMessage,
    Project,
    ProjectStatus,
    ProjectType,
    SearchResult,
    SupportLevel,
    TeamMember,
    TeamPermission,
    User,
    UserRole,
    coerce_enum,
)
from modrinthpy.version import Dependency, DependencyType, Version, VersionStatus, VersionType

from payloads import make_hit, make_project, make_user, make_version


class TestCoerceEnum:
    """Conversion of raw values into enums."""

    def test_known_value(self):
        assert coerce_enum(ProjectType, "shader") is ProjectType.shader

    def test_unknown_value_falls_back(self):
        assert coerce_enum(ProjectStatus, "mystery", ProjectStatus.unknown) is ProjectStatus.unknown

    def test_unknown_value_without_default_raises(self):
        with pytest.raises(InvalidFormatError):
            coerce_enum(UserRole, "overlord", field_name="role")

    def test_missing_value_without_default_raises(self):
        with pytest.raises(InvalidFormatError):
            coerce_enum(UserRole, None)


class TestProject:
    """Project decoding, fallbacks and identity."""

    def test_decodes_full_payload(self):
        project = Project.from_json(make_project())
        assert project.id == "AABBCCDD"
        assert project.project_type is ProjectType.mod
        assert project.client_side is SupportLevel.required
        assert project.status is ProjectStatus.approved
        assert project.published == datetime(2021, 1, 1, tzinfo=timezone.utc)
        assert project.approved == datetime(2021, 1, 2, tzinfo=timezone.utc)
        assert project.queued is None
        assert project.data["slug"] == "sodium"

    def test_nested_objects(self):
        project = Project.from_json(make_project())
        assert project.license == License("LGPL-3.0-only")
        assert project.license.name == "GNU LGPLv3"
        assert project.donation_urls == [DonationPlatform.patreon("https://patreon.com/x")]
        assert project.gallery[0].featured is True
        assert project.gallery[0].created.year == 2022
        assert project.moderator_message is None

    def test_unknown_symbols_fall_back(self):
        project = Project.from_json(make_project(
            project_type="hologram", client_side="sometimes", server_side=None, status="vanished",
        ))
        assert project.project_type is ProjectType.mod
        assert project.client_side is SupportLevel.unsupported
        assert project.server_side is SupportLevel.unsupported
        assert project.status is ProjectStatus.unknown

    @pytest.mark.parametrize("field_name", ["published", "updated"])
    def test_missing_required_timestamp_raises(self, field_name):
        payload = make_project()
        del payload[field_name]
        with pytest.raises(InvalidFormatError):
            Project.from_json(payload)

    def test_malformed_timestamp_raises(self):
        with pytest.raises(InvalidFormatError):
            Project.from_json(make_project(published="yesterday-ish"))

    def test_malformed_optional_timestamp_is_none(self):
        assert Project.from_json(make_project(approved="not a date")).approved is None

    def test_non_mapping_raises(self):
        with pytest.raises(InvalidFormatError):
            Project.from_json(["AABBCCDD"])

    def test_moderator_message_requires_message(self):
        with pytest.raises(InvalidFormatError):
            Project.from_json(make_project(moderator_message={"body": "details only"}))

    def test_equality_is_by_id(self):
        a = Project.from_json(make_project(title="One"))
        b = Project.from_json(make_project(title="Two", downloads=1))
        c = Project.from_json(make_project(project_id="OTHER000"))
        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    @pytest.mark.parametrize("slug,valid", [
        ("sodium", True),
        ("fabric-api", True),
        ("ab", False),
        ("has space", False),
        ("x" * 65, False),
    ])
    def test_slug_validation(self, slug, valid):
        assert Project.is_valid_slug(slug) is valid

    def test_to_dict_is_json_friendly(self):
        d = Project.from_json(make_project()).to_dict()
        assert d["project_type"] == "mod"
        assert d["published"].startswith("2021-01-01T00:00:00")
        assert d["license"]["id"] == "LGPL-3.0-only"
        assert "data" not in d


class TestSearchResult:
    """Search hits are immutable and compare by project id."""

    def test_decodes_hit(self):
        result = SearchResult.from_json(make_hit())
        assert result.project_id == "AABBCCDD"
        assert result.categories == ("fabric", "optimization")
        assert result.versions == ("1.19.2", "1.20.1")
        assert result.date_modified.month == 6

    def test_equality_ignores_other_fields(self):
        a = SearchResult.from_json(make_hit(project_id="X", title="A"))
        b = SearchResult.from_json(make_hit(project_id="X", title="B", downloads=7))
        assert a == b
        assert hash(a) == hash(b)

    def test_is_immutable(self):
        result = SearchResult.from_json(make_hit())
        with pytest.raises(AttributeError):
            result.title = "changed"

    def test_unknown_side_falls_back(self):
        result = SearchResult.from_json(make_hit(server_side="whatever"))
        assert result.server_side is SupportLevel.unsupported

    def test_to_dict_skips_lookup(self):
        d = SearchResult.from_json(make_hit(), lookup=lambda pid: None).to_dict()
        assert "_lookup" not in d
        assert d["categories"] == ["fabric", "optimization"]


class TestTags:
    """License, donation platform and game version tags."""

    def test_license_equality_is_by_id(self):
        assert License("MIT", "MIT License") == License("MIT", "Expat")
        assert License("MIT") != License("Apache-2.0")

    def test_license_short_field(self):
        assert License.from_json({"short": "MIT", "name": "MIT License"}).id == "MIT"

    def test_donation_platform_equality_includes_url(self):
        assert DonationPlatform.kofi("https://ko-fi.com/a") == DonationPlatform("ko-fi", "Ko-fi", "https://ko-fi.com/a")
        assert DonationPlatform.kofi("https://ko-fi.com/a") != DonationPlatform.kofi("https://ko-fi.com/b")

    def test_donation_platform_tag_payload(self):
        platform = DonationPlatform.from_json({"short": "github", "name": "GitHub Sponsors"})
        assert platform.id == "github"
        assert platform.url is None

    def test_game_version(self):
        gv = GameVersion.from_json({"version": "1.19.2", "version_type": "release",
                                    "date": "2022-08-05T11:57:05Z", "major": False})
        assert gv.version_type is GameVersionType.release
        assert str(gv) == "1.19.2 (Release)"

    def test_game_version_type_is_strict(self):
        with pytest.raises(InvalidFormatError):
            GameVersion.from_json({"version": "x", "version_type": "nightly", "date": "2022-08-05T11:57:05Z"})

    def test_game_version_requires_date(self):
        with pytest.raises(InvalidFormatError):
            GameVersion.from_json({"version": "1.19.2", "version_type": "release"})

    def test_moderator_message(self):
        assert str(ModeratorMessage.from_json({"message": "Please fix the license"})) == "Please fix the license"


class TestUsersAndTeams:
    """User and team member decoding."""

    def test_user(self):
        user = User.from_json(make_user())
        assert user.role is UserRole.developer
        assert user.created.year == 2020
        assert str(user) == "jellysquid3"

    def test_user_role_is_strict(self):
        with pytest.raises(InvalidFormatError):
            User.from_json(make_user(role="superuser"))

    def test_user_requires_created(self):
        with pytest.raises(InvalidFormatError):
            User.from_json(make_user(created=None))

    def test_team_member_permissions(self):
        perms = int(TeamPermission.UPLOAD_VERSION | TeamPermission.EDIT_BODY)
        member = TeamMember.from_json({"team_id": "TEAM0001", "user": make_user(), "role": "Owner",
                                       "permissions": perms, "accepted": True})
        assert member.user.username == "jellysquid3"
        assert member.has_permission(TeamPermission.UPLOAD_VERSION)
        assert member.has_permission(TeamPermission.EDIT_BODY)
        assert not member.has_permission(TeamPermission.DELETE_PROJECT)
        assert member.to_dict()["permissions"] == perms

    def test_team_member_without_permissions(self):
        member = TeamMember.from_json({"team_id": "T", "user": make_user(), "role": "Member", "permissions": None})
        assert member.permissions == TeamPermission.NONE

    def test_team_member_requires_user(self):
        with pytest.raises(InvalidFormatError):
            TeamMember.from_json({"team_id": "T", "role": "Member"})


class TestVersion:
    """Version decoding and strictness."""

    def test_decodes_version(self):
        version = Version.from_json(make_version())
        assert version.version_type is VersionType.release
        assert version.status is VersionStatus.listed
        assert version.dependencies == [Dependency(DependencyType.required, project_id="P7dR8mSH")]
        assert version.game_versions == ["1.20.1"]
        assert version.files[0].filename == "mod.jar"

    def test_version_type_is_strict(self):
        with pytest.raises(InvalidFormatError):
            Version.from_json(make_version(version_type="nightly"))

    def test_unknown_status_falls_back(self):
        assert Version.from_json(make_version(status="hidden")).status is VersionStatus.unknown

    def test_dependency_type_is_strict(self):
        with pytest.raises(InvalidFormatError):
            Dependency.from_json({"project_id": "X", "dependency_type": "suggested"})

    def test_requires_date_published(self):
        with pytest.raises(InvalidFormatError):
            Version.from_json(make_version(date_published=None))

    def test_file_requires_url(self):
        with pytest.raises(InvalidFormatError):
            Version.from_json(make_version(files=[{"filename": "a.jar", "hashes": {}}]))
