"""JSON payload factories mirroring the shapes returned by the API."""

import hashlib


def make_hit(project_id="AABBCCDD", title="Sodium", **overrides):
    hit = {
        "project_id": project_id,
        "slug": title.lower().replace(" ", "-"),
        "title": title,
        "description": f"{title} description",
        "categories": ["fabric", "optimization"],
        "display_categories": ["optimization"],
        "client_side": "required",
        "server_side": "unsupported",
        "project_type": "mod",
        "downloads": 1000,
        "follows": 42,
        "icon_url": "https://cdn.modrinth.com/icon.png",
        "author": "jellysquid3",
        "versions": ["1.19.2", "1.20.1"],
        "date_created": "2021-01-01T00:00:00Z",
        "date_modified": "2023-06-01T12:30:00Z",
        "latest_version": "1.20.1",
        "license": "LGPL-3.0-only",
        "gallery": [],
    }
    hit.update(overrides)
    return hit


def make_search_response(hits, offset=0, limit=10, total_hits=None):
    return {
        "hits": hits,
        "offset": offset,
        "limit": limit,
        "total_hits": len(hits) if total_hits is None else total_hits,
    }


def make_project(project_id="AABBCCDD", **overrides):
    project = {
        "id": project_id,
        "slug": "sodium",
        "title": "Sodium",
        "description": "A modern rendering engine",
        "body": "Long form body",
        "categories": ["optimization"],
        "additional_categories": [],
        "client_side": "required",
        "server_side": "unsupported",
        "project_type": "mod",
        "downloads": 5000,
        "followers": 300,
        "team": "TEAM0001",
        "status": "approved",
        "published": "2021-01-01T00:00:00Z",
        "updated": "2023-06-01T12:30:00Z",
        "approved": "2021-01-02T00:00:00Z",
        "versions": ["VER00001", "VER00002"],
        "game_versions": ["1.19.2"],
        "loaders": ["fabric"],
        "license": {"id": "LGPL-3.0-only", "name": "GNU LGPLv3", "url": None},
        "issues_url": "https://github.com/example/issues",
        "source_url": "https://github.com/example",
        "wiki_url": None,
        "discord_url": None,
        "donation_urls": [{"id": "patreon", "platform": "Patreon", "url": "https://patreon.com/x"}],
        "gallery": [
            {"url": "https://cdn.modrinth.com/g.png", "featured": True, "title": "Shot",
             "description": None, "created": "2022-01-01T00:00:00Z", "ordering": 0},
        ],
    }
    project.update(overrides)
    return project


def make_user(user_id="USER0001", **overrides):
    user = {
        "id": user_id,
        "username": "jellysquid3",
        "name": "JellySquid",
        "email": None,
        "bio": "Hello",
        "avatar_url": "https://cdn.modrinth.com/avatar.png",
        "github_id": 1234,
        "created": "2020-05-05T10:00:00Z",
        "role": "developer",
    }
    user.update(overrides)
    return user


def make_file(content=b"jar-bytes", filename="mod.jar", primary=True, hashes=None):
    if hashes is None:
        hashes = {"sha1": hashlib.sha1(content).hexdigest()}
    return {
        "url": f"https://cdn.modrinth.com/data/{filename}",
        "filename": filename,
        "hashes": hashes,
        "primary": primary,
        "size": len(content),
    }


def make_version(version_id="VER00001", files=None, **overrides):
    version = {
        "id": version_id,
        "project_id": "AABBCCDD",
        "author_id": "USER0001",
        "name": "Sodium 0.5.0",
        "version_number": "mc1.20.1-0.5.0",
        "changelog": "Fixes",
        "dependencies": [{"version_id": None, "project_id": "P7dR8mSH", "file_name": None,
                          "dependency_type": "required"}],
        "game_versions": ["1.20.1"],
        "version_type": "release",
        "loaders": ["fabric"],
        "featured": True,
        "status": "listed",
        "date_published": "2023-06-01T12:30:00Z",
        "downloads": 100,
        "files": files if files is not None else [make_file()],
    }
    version.update(overrides)
    return version


