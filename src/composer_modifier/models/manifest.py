"""
Composer Manifest Model — the ``composer.json`` document.

Field names follow the Composer schema reference
(https://getcomposer.org/doc/04-schema.md). Only ``name`` is required; every
other field is optional and stays absent on render when absent on load.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Union

from pydantic import Field, RootModel, StrictBool, StrictStr

from composer_modifier.models.base import Document, NonNegativeInt
from composer_modifier.models.variants import (
    Abandoned,
    AllowPlugins,
    OneOrMany,
    PlatformCheck,
    PlatformPackage,
    PreferredInstall,
    PromptToggle,
    StashToggle,
)

MANIFEST_FILE_NAME = "composer.json"

# Keys of the dependency maps ("package links"), in schema order.
PACKAGE_LINK_KEYS = ("require", "require-dev", "conflict", "replace", "provide", "suggest")

BUILTIN_PACKAGE_TYPES = ("library", "project", "metapackage", "composer-plugin")


class Stability(Enum):
    DEV = "dev"
    ALPHA = "alpha"
    BETA = "beta"
    RC = "RC"
    STABLE = "stable"


class RepositoryType(Enum):
    COMPOSER = "composer"
    VCS = "vcs"
    PACKAGE = "package"
    ARTIFACT = "artifact"
    PATH = "path"
    # VCS drivers Composer also accepts as repository types
    GIT = "git"
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    FOSSIL = "fossil"
    HG = "hg"
    SVN = "svn"


class GitProtocol(Enum):
    GIT = "git"
    HTTP = "http"
    HTTPS = "https"
    SSH = "ssh"


class BinaryCompatibility(Enum):
    AUTO = "auto"
    FULL = "full"
    PROXY = "proxy"
    SYMLINK = "symlink"


class ScriptEventType(Enum):
    COMMAND = "command"
    INSTALLER = "installer"
    PACKAGE = "package"
    PLUGIN = "plugin"


SCRIPT_EVENTS: dict[str, ScriptEventType] = {
    **dict.fromkeys(
        (
            "pre-install-cmd",
            "post-install-cmd",
            "pre-update-cmd",
            "post-update-cmd",
            "pre-status-cmd",
            "post-status-cmd",
            "pre-archive-cmd",
            "post-archive-cmd",
            "pre-autoload-dump",
            "post-autoload-dump",
            "post-root-package-install",
            "post-create-project-cmd",
        ),
        ScriptEventType.COMMAND,
    ),
    "pre-operations-exec": ScriptEventType.INSTALLER,
    **dict.fromkeys(
        (
            "pre-package-install",
            "post-package-install",
            "pre-package-update",
            "post-package-update",
            "pre-package-uninstall",
            "post-package-uninstall",
        ),
        ScriptEventType.PACKAGE,
    ),
    **dict.fromkeys(
        (
            "init",
            "command",
            "pre-file-download",
            "post-file-download",
            "pre-command-run",
            "pre-pool-create",
        ),
        ScriptEventType.PLUGIN,
    ),
}


# ──────────────────────────────────────────────
# Nested shapes
# ──────────────────────────────────────────────


class Author(Document):
    name: StrictStr
    email: StrictStr | None = None
    homepage: StrictStr | None = None
    role: StrictStr | None = None


class Support(Document):
    email: StrictStr | None = None
    issues: StrictStr | None = None
    forum: StrictStr | None = None
    wiki: StrictStr | None = None
    irc: StrictStr | None = None
    source: StrictStr | None = None
    docs: StrictStr | None = None
    rss: StrictStr | None = None
    chat: StrictStr | None = None
    security: StrictStr | None = None


class Funding(Document):
    platform: StrictStr | None = Field(default=None, alias="type")
    url: StrictStr | None = None


class Autoload(Document):
    psr_4: dict[str, OneOrMany] | None = None
    psr_0: dict[str, OneOrMany] | None = None
    classmap: list[StrictStr] | None = None
    files: list[StrictStr] | None = None
    exclude_from_classmap: list[StrictStr] | None = None


class Repository(Document):
    """
    One entry of ``repositories``. Type-specific keys (``options``,
    ``package``, ``canonical`` ...) travel in ``model_extra``.
    """

    repository_type: RepositoryType = Field(alias="type")
    url: StrictStr | None = None


# ``repositories`` is usually a list, but Composer also accepts an object keyed
# by repository name. Either form may disable the default repository with a
# ``packagist.org: false`` entry, which is kept as given.
RepositoryEntry = Union[Repository, StrictBool, dict[str, StrictBool]]


class Archive(Document):
    name: StrictStr | None = None
    exclude: list[StrictStr] | None = None


class Audit(Document):
    ignored: list[StrictStr] | None = None
    abandoned: StrictStr | None = None


class BitbucketOauth(Document):
    consumer_key: StrictStr
    consumer_secret: StrictStr


class BasicAuth(Document):
    username: StrictStr
    password: StrictStr


class GitlabCredentials(Document):
    username: StrictStr
    token: StrictStr


class Config(Document):
    """The ``config`` section (root-only)."""

    process_timeout: NonNegativeInt | None = None
    allow_plugins: AllowPlugins | None = None
    use_include_path: StrictBool | None = None
    preferred_install: PreferredInstall | None = None
    audit: Audit | None = None
    use_parent_dir: PromptToggle | None = None
    store_auths: PromptToggle | None = None
    github_protocols: list[GitProtocol] | None = None
    github_oauth: dict[str, StrictStr] | None = None
    gitlab_domains: list[StrictStr] | None = None
    gitlab_oauth: dict[str, StrictStr] | None = None
    # per host: a bare token, or a username plus token
    gitlab_token: dict[str, Union[StrictStr, GitlabCredentials]] | None = None
    gitlab_protocol: GitProtocol | None = None
    disable_tls: StrictBool | None = None
    secure_http: StrictBool | None = None
    bitbucket_oauth: dict[str, BitbucketOauth] | None = None
    cafile: StrictStr | None = None
    capath: StrictStr | None = None
    http_basic: dict[str, BasicAuth] | None = None
    bearer: dict[str, StrictStr] | None = None
    platform: dict[str, PlatformPackage] | None = None
    vendor_dir: StrictStr | None = None
    bin_dir: StrictStr | None = None
    data_dir: StrictStr | None = None
    cache_dir: StrictStr | None = None
    cache_files_dir: StrictStr | None = None
    cache_repo_dir: StrictStr | None = None
    cache_vcs_dir: StrictStr | None = None
    cache_files_ttl: NonNegativeInt | None = None
    cache_files_maxsize: StrictStr | None = None
    cache_read_only: StrictBool | None = None
    bin_compat: BinaryCompatibility | None = None
    prepend_autoloader: StrictBool | None = None
    autoloader_suffix: StrictStr | None = None
    optimize_autoloader: StrictBool | None = None
    sort_packages: StrictBool | None = None
    classmap_authoritative: StrictBool | None = None
    apcu_autoloader: StrictBool | None = None
    github_domains: list[StrictStr] | None = None
    github_expose_hostname: StrictBool | None = None
    use_github_api: StrictBool | None = None
    notify_on_install: StrictBool | None = None
    discard_changes: StashToggle | None = None
    archive_format: StrictStr | None = None
    archive_dir: StrictStr | None = None
    htaccess_protect: StrictBool | None = None
    lock: StrictBool | None = None
    platform_check: PlatformCheck | None = None
    secure_svn_domains: list[StrictStr] | None = None


class Scripts(RootModel[dict[str, OneOrMany]]):
    """
    ``scripts``: script name → one or many commands, in file order.

    Names in SCRIPT_EVENTS are Composer event hooks; anything else is a
    custom command runnable with ``composer run-script``.
    """

    def items(self):
        return self.root.items()

    def event_hooks(self) -> Iterator[tuple[str, ScriptEventType, OneOrMany]]:
        for name, commands in self.items():
            if name in SCRIPT_EVENTS:
                yield name, SCRIPT_EVENTS[name], commands

    def custom_commands(self) -> dict[str, OneOrMany]:
        return {name: commands for name, commands in self.items() if name not in SCRIPT_EVENTS}


# ──────────────────────────────────────────────
# The manifest
# ──────────────────────────────────────────────


class Manifest(Document):
    """
    A parsed ``composer.json``.

    Dependency maps (``require`` and friends) are plain dicts of package
    name to version constraint, kept in file order.
    """

    name: StrictStr
    description: StrictStr | None = None
    version: StrictStr | None = None
    package_type: StrictStr | None = Field(default=None, alias="type")
    keywords: list[StrictStr] | None = None
    homepage: StrictStr | None = None
    readme: StrictStr | None = None
    time: StrictStr | None = None
    license: OneOrMany | None = None
    authors: list[Author] | None = None
    support: Support | None = None
    funding: list[Funding] | None = None

    require: dict[str, StrictStr] | None = None
    require_dev: dict[str, StrictStr] | None = None
    conflict: dict[str, StrictStr] | None = None
    replace: dict[str, StrictStr] | None = None
    provide: dict[str, StrictStr] | None = None
    suggest: dict[str, StrictStr] | None = None

    autoload: Autoload | None = None
    autoload_dev: Autoload | None = None
    include_path: list[StrictStr] | None = None  # deprecated
    target_dir: StrictStr | None = None  # deprecated
    minimum_stability: Stability | None = None
    prefer_stable: StrictBool | None = None
    repositories: Union[list[RepositoryEntry], dict[str, RepositoryEntry], None] = None
    config: Config | None = None
    scripts: Scripts | None = None
    scripts_descriptions: dict[str, StrictStr] | None = None
    scripts_aliases: dict[str, list[StrictStr]] | None = None
    extra: Any = None
    bin: list[StrictStr] | None = None
    archive: Archive | None = None
    abandoned: Abandoned | None = None
    non_feature_branches: list[StrictStr] | None = None

    @property
    def is_custom_type(self) -> bool:
        return self.package_type is not None and self.package_type not in BUILTIN_PACKAGE_TYPES

    def package_links(self) -> dict[str, dict[str, str]]:
        """The dependency maps present in this manifest, keyed by JSON name."""
        links = {}
        for key in PACKAGE_LINK_KEYS:
            value = getattr(self, link_attribute(key))
            if value is not None:
                links[key] = value
        return links


def link_attribute(key: str) -> str:
    """Map a dependency-map JSON key (``require-dev``) to its attribute name."""
    if key not in PACKAGE_LINK_KEYS:
        raise KeyError(key)
    return key.replace("-", "_")
