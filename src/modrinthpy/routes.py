class MODRINTHAPIURLS:
    """
    Centralized container for all Modrinth REST API endpoint paths.

    This class only stores **relative paths**.
    You should prepend these with `BASE_URL` to build the full request URL.

    Usage:
        >>> full_url=f"{MODRINTHAPIURLS.BASE_URL}{MODRINTHAPIURLS.PROJECT.format(id='AANobbMI')}"

    Documentation Source:
        - https://docs.modrinth.com/api/

    Notes:
        - Use `GET` unless otherwise specified.
        - Path parameters use str.format() placeholders.
    """

    BASE_URL="https://api.modrinth.com/v2"
    """Base API root for the Modrinth REST API (v2)."""

    STAGING_URL="https://staging-api.modrinth.com/v2"
    """Staging server, useful for testing against non-production data."""

    # ------------------------------------------
    # TAGS
    # ------------------------------------------
    TAG_CATEGORY="/tag/category"
    """GET → List of categories, their icons and applicable project types."""

    TAG_LOADER="/tag/loader"
    """GET → List of loaders, their icons and supported project types."""

    TAG_GAME_VERSION="/tag/game_version"
    """GET → List of game versions and information about them."""

    TAG_LICENSE="/tag/license"
    """GET → List of licenses (short id and name)."""

    TAG_DONATION="/tag/donation_platform"
    """GET → List of donation platforms."""

    TAG_REPORT_TYPE="/tag/report_type"
    """GET → List of valid report types (plain strings)."""

    # ------------------------------------------
    # SEARCH & PROJECTS
    # ------------------------------------------
    SEARCH="/search"
    """GET → Search projects.
    Query Parameters:
        - query, facets, index, offset, limit, filters
    """

    PROJECT="/project/{id}"
    """GET → A project by id or slug."""

    PROJECTS="/projects"
    """GET → Multiple projects. Query Parameters: ids (JSON array)."""

    PROJECT_VERSIONS="/project/{id}/version"
    """GET → Versions of a project. Query Parameters: loaders, game_versions, featured."""

    PROJECT_TEAM="/project/{id}/members"
    """GET → Team members of a project."""

    # ------------------------------------------
    # VERSIONS & FILES
    # ------------------------------------------
    VERSION="/version/{id}"
    """GET → A version by id."""

    VERSION_FILE="/version_file/{hash}"
    """GET → The version owning a file, by file hash. Query Parameters: algorithm."""

    VERSION_FILES="/version_files"
    """POST → Versions owning several files. Body: {"hashes": [...], "algorithm": "sha1"}."""

    # ------------------------------------------
    # USERS & TEAMS
    # ------------------------------------------
    USER="/user/{id}"
    """GET → A user by id or username."""

    USER_PROJECTS="/user/{id}/projects"
    """GET → Projects a user is a member of."""

    TEAM="/team/{id}/members"
    """GET → Members of a team."""

    @classmethod
    def list_names(cls):
        return sorted(name for name in vars(cls) if name.isupper())
