# topmark:header:start
#
#   project      : PagePress
#   file         : model.py
#   file_relpath : src/pagepress/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress configuration model: mutable builder and immutable runtime snapshot.

Configuration is assembled in layers, each one overriding the previous:

    built-in defaults -> ``~/.pagepressrc.toml`` -> ``[tool.pagepress]`` in
    ``pyproject.toml`` -> ``pagepress.toml`` -> ``--config`` files -> CLI flags

`MutableConfig` holds tri-state fields (``None`` = inherit) so that layers can
be merged without losing information. `MutableConfig.freeze` resolves the type
table, computes the date strings and returns an immutable `Config` which is
threaded explicitly through the rendering pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pagepress.config.io.getters import (
    get_bool_value_or_none_checked,
    get_float_value_or_none_checked,
    get_string_pairs_checked,
    get_string_value_or_none_checked,
    warn_unknown_keys,
)
from pagepress.config.io.guards import as_toml_table_map, get_table_value
from pagepress.config.io.loaders import load_defaults_dict, load_toml_dict
from pagepress.config.keys import Toml
from pagepress.config.logging import get_logger
from pagepress.config.profiles import (
    MutableProfile,
    merge_profile_tables,
    parse_type_tables,
    profile_for_type,
    resolve_profiles,
)
from pagepress.constants import (
    COPYRIGHT_TEXT,
    DEFAULT_TYPE,
    PROJECT_CONFIG_NAME,
    PYPROJECT_CONFIG_NAME,
    USER_CONFIG_NAME,
)
from pagepress.core.diagnostics import DiagnosticLog
from pagepress.text.macros import DEFAULT_DELIMITERS, MacroSyntax

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pagepress.config.io.types import TomlTable, TomlTableMap
    from pagepress.config.logging import PagepressLogger
    from pagepress.config.profiles import ProfileTable, TypeProfile
    from pagepress.core.diagnostics import Diagnostic

logger: PagepressLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved ``[settings]`` values.

    Attributes:
        add_banner (bool): Insert the program banner comment into the output.
        date_format (str): ``strftime`` format for the short date; empty means
            "same as the long date".
        default_creator (str): Creator code seeded into the ``default`` type.
        destination (str): Default output directory ("" = none configured).
        macro_syntax (MacroSyntax): Delimiters recognized around macro keywords.
        set_file_exec (str): Path to the ``SetFile`` executable.
        xml_lint_command (str): Command line used to lint XML output.
        site_module (str): Path to a Python file exposing processing hooks.
        link_timeout (float): Seconds allowed per remote link probe.
    """

    add_banner: bool
    date_format: str
    default_creator: str
    destination: str
    macro_syntax: MacroSyntax
    set_file_exec: str
    xml_lint_command: str
    site_module: str
    link_timeout: float


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for PagePress.

    This snapshot is produced by `MutableConfig.freeze` after merging all
    configuration layers and CLI overrides.

    Attributes:
        timestamp (datetime): When the run started; source of both date strings.
        settings (Settings): Resolved ``[settings]`` values.
        profiles (ProfileTable): Resolved type table (read-only mapping).
        long_date (str): Locale-formatted timestamp (``<<longdate>>``).
        short_date (str): ``date_format``-formatted timestamp (``<<date>>``).
        banner_text (str): Program name, version and copyright line.
        href_check (bool): Verify every hyperlink target.
        lint (bool): Run the XML linter on XML output.
        inplace (bool): Overwrite input files instead of writing to a directory.
        output_dir (Path | None): Output directory given on the command line.
        config_files (tuple[Path | str, ...]): Config sources that were merged.
        diagnostics (tuple[Diagnostic, ...]): Warnings or errors from loading,
            merging and resolving the configuration.
    """

    timestamp: datetime
    settings: Settings
    profiles: ProfileTable
    long_date: str
    short_date: str
    banner_text: str
    href_check: bool
    lint: bool
    inplace: bool
    output_dir: Path | None
    config_files: tuple[Path | str, ...]
    diagnostics: tuple[Diagnostic, ...]

    def profile_for(self, type_id: str, diagnostics: DiagnosticLog | None = None) -> TypeProfile:
        """Return the profile for ``type_id``, or ``default`` (reported) when unknown."""
        return profile_for_type(self.profiles, type_id, diagnostics)

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict (settings and types)."""
        s: Settings = self.settings
        return {
            Toml.SECTION_SETTINGS: {
                Toml.KEY_ADD_BANNER: s.add_banner,
                Toml.KEY_DATE_FORMAT: s.date_format,
                Toml.KEY_DEFAULT_CREATOR: s.default_creator,
                Toml.KEY_DESTINATION: s.destination,
                Toml.KEY_MACRO_DELIMITERS: [list(pair) for pair in s.macro_syntax.delimiters],
                Toml.KEY_SET_FILE_EXEC: s.set_file_exec,
                Toml.KEY_XML_LINT_COMMAND: s.xml_lint_command,
                Toml.KEY_SITE_MODULE: s.site_module,
                Toml.KEY_LINK_TIMEOUT: s.link_timeout,
            },
            Toml.SECTION_TYPES: {
                name: profile.to_toml_dict() for name, profile in self.profiles.items()
            },
        }


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Attributes:
        timestamp (datetime): When this draft was created.
        add_banner (bool | None): See `Settings.add_banner`.
        date_format (str | None): See `Settings.date_format`.
        default_creator (str | None): See `Settings.default_creator`.
        destination (str | None): See `Settings.destination`.
        macro_delimiters (list[tuple[str, str]]): Macro delimiter pairs (empty = inherit).
        set_file_exec (str | None): See `Settings.set_file_exec`.
        xml_lint_command (str | None): See `Settings.xml_lint_command`.
        site_module (str | None): See `Settings.site_module`.
        link_timeout (float | None): See `Settings.link_timeout`.
        base_types (dict[str, MutableProfile]): Built-in type table.
        type_overrides (dict[str, MutableProfile]): Merged ``[types.*]`` tables
            from configuration files and the site module.
        href_check (bool | None): Runtime intent: verify links.
        lint (bool | None): Runtime intent: lint XML output.
        inplace (bool | None): Runtime intent: overwrite input files.
        output_dir (Path | None): Output directory from the command line.
        config_files (list[Path | str]): Config sources merged into this draft.
        diagnostics (DiagnosticLog): Warnings recorded while loading and merging.
    """

    timestamp: datetime = field(default_factory=datetime.now)

    # [settings]
    add_banner: bool | None = None
    date_format: str | None = None
    default_creator: str | None = None
    destination: str | None = None
    macro_delimiters: list[tuple[str, str]] = field(default_factory=lambda: [])
    set_file_exec: str | None = None
    xml_lint_command: str | None = None
    site_module: str | None = None
    link_timeout: float | None = None

    # [types.*]
    base_types: dict[str, MutableProfile] = field(default_factory=lambda: {})
    type_overrides: dict[str, MutableProfile] = field(default_factory=lambda: {})

    # Runtime options (command line only)
    href_check: bool | None = None
    lint: bool | None = None
    inplace: bool | None = None
    output_dir: Path | None = None

    # Provenance
    config_files: list[Path | str] = field(default_factory=lambda: [])

    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self, now: datetime | None = None) -> Config:
        """Freeze this builder into an immutable `Config`.

        The ``default`` type's creator is seeded from ``default_creator`` before
        configured type tables are merged on top, then inheritance is resolved.

        Args:
            now (datetime | None): Timestamp used for the date strings
                (defaults to this draft's ``timestamp``).

        Returns:
            Config: The runtime snapshot.

        Raises:
            ConfigError: If no ``default`` type is defined.
        """
        timestamp: datetime = now or self.timestamp
        diagnostics = DiagnosticLog()
        diagnostics.extend(self.diagnostics)

        base: dict[str, MutableProfile] = {name: replace(p) for name, p in self.base_types.items()}
        if DEFAULT_TYPE in base:
            base[DEFAULT_TYPE].creator = self.default_creator or ""
        table: dict[str, MutableProfile] = merge_profile_tables(base, self.type_overrides)
        profiles: ProfileTable = resolve_profiles(table, diagnostics=diagnostics)

        date_format: str = self.date_format if self.date_format is not None else "%Y-%m-%d"
        long_date: str = timestamp.strftime("%c")
        short_date: str = timestamp.strftime(date_format) if date_format else long_date

        settings = Settings(
            add_banner=self.add_banner if self.add_banner is not None else True,
            date_format=date_format,
            default_creator=self.default_creator or "",
            destination=self.destination or "",
            macro_syntax=MacroSyntax(tuple(self.macro_delimiters) or DEFAULT_DELIMITERS),
            set_file_exec=self.set_file_exec or "",
            xml_lint_command=self.xml_lint_command or "",
            site_module=self.site_module or "",
            link_timeout=self.link_timeout or 10.0,
        )

        return Config(
            timestamp=timestamp,
            settings=settings,
            profiles=profiles,
            long_date=long_date,
            short_date=short_date,
            banner_text=COPYRIGHT_TEXT,
            href_check=bool(self.href_check),
            lint=self.lint if self.lint is not None else True,
            inplace=bool(self.inplace),
            output_dir=self.output_dir,
            config_files=tuple(self.config_files),
            diagnostics=tuple(diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft populated with the runtime defaults and built-in type table."""
        return cls.from_toml_dict(load_defaults_dict(), use_defaults=True)

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` only the ``[tool.pagepress]`` table is used.
        Unreadable or malformed files yield an empty draft carrying a warning.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig: The parsed draft.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        diagnostics = DiagnosticLog()
        data: TomlTable = load_toml_dict(path, diagnostics)
        draft: MutableConfig = cls.from_toml_dict(data, config_file=path)
        draft.diagnostics.extend(diagnostics)
        return draft

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        config_file: Path | None = None,
        use_defaults: bool = False,
    ) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML data.
            config_file (Path | None): Source file, recorded for provenance and
                used as the base for a relative ``site_module`` path.
            use_defaults (bool): Store the ``[types]`` tables as the built-in
                base table instead of as overrides.

        Returns:
            MutableConfig: The resulting draft.
        """
        draft = cls()
        where_file: str = f" ({config_file})" if config_file else ""
        warn_unknown_keys(
            data,
            Toml.ALLOWED_TOP_LEVEL_KEYS,
            where=f"<root>{where_file}",
            diagnostics=draft.diagnostics,
        )

        settings_tbl: TomlTable = get_table_value(data, Toml.SECTION_SETTINGS)
        logger.trace("TOML [settings]: %s", settings_tbl)
        where: str = f"[{Toml.SECTION_SETTINGS}]"
        warn_unknown_keys(
            settings_tbl, Toml.ALLOWED_SETTINGS_KEYS, where=where, diagnostics=draft.diagnostics
        )

        def _string(key: str) -> str | None:
            return get_string_value_or_none_checked(
                settings_tbl, key, where=where, diagnostics=draft.diagnostics
            )

        draft.add_banner = get_bool_value_or_none_checked(
            settings_tbl, Toml.KEY_ADD_BANNER, where=where, diagnostics=draft.diagnostics
        )
        draft.date_format = _string(Toml.KEY_DATE_FORMAT)
        draft.default_creator = _string(Toml.KEY_DEFAULT_CREATOR)
        draft.destination = _string(Toml.KEY_DESTINATION)
        draft.set_file_exec = _string(Toml.KEY_SET_FILE_EXEC)
        draft.xml_lint_command = _string(Toml.KEY_XML_LINT_COMMAND)
        draft.macro_delimiters = (
            get_string_pairs_checked(
                settings_tbl, Toml.KEY_MACRO_DELIMITERS, where=where, diagnostics=draft.diagnostics
            )
            or []
        )
        draft.link_timeout = get_float_value_or_none_checked(
            settings_tbl, Toml.KEY_LINK_TIMEOUT, where=where, diagnostics=draft.diagnostics
        )

        site_module: str | None = _string(Toml.KEY_SITE_MODULE)
        if site_module and config_file is not None and not Path(site_module).is_absolute():
            # Relative to the declaring config file
            site_module = str(config_file.parent / site_module)
        draft.site_module = site_module

        types_tbl: TomlTableMap = as_toml_table_map(data.get(Toml.SECTION_TYPES))
        logger.trace("TOML [types]: %s", types_tbl)
        parsed: dict[str, MutableProfile] = parse_type_tables(types_tbl, draft.diagnostics)
        if use_defaults:
            draft.base_types = parsed
        else:
            draft.type_overrides = parsed

        if config_file is not None:
            draft.config_files = [config_file]
        return draft

    @classmethod
    def discover_config_files(cls, cwd: Path, home: Path) -> list[Path]:
        """Return existing config files in merge order (lowest precedence first).

        Order: ``~/.pagepressrc.toml``, ``./pyproject.toml`` (only when it has a
        ``[tool.pagepress]`` table; an empty table is harmless), ``./pagepress.toml``.
        """
        candidates: list[Path] = [
            home / USER_CONFIG_NAME,
            cwd / PYPROJECT_CONFIG_NAME,
            cwd / PROJECT_CONFIG_NAME,
        ]
        found: list[Path] = [p for p in candidates if p.is_file()]
        for p in found:
            logger.debug("Discovered config file: %s", p)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        extra_config_files: Iterable[Path] = (),
        no_config: bool = False,
        cwd: Path | None = None,
        home: Path | None = None,
    ) -> MutableConfig:
        """Build a draft from defaults and every discovered configuration layer.

        Args:
            extra_config_files (Iterable[Path]): Files given via ``--config``;
                merged last, in order.
            no_config (bool): Skip discovery of user and project config files.
            cwd (Path | None): Directory searched for project config files.
            home (Path | None): Directory searched for the user config file.

        Returns:
            MutableConfig: The merged draft (CLI overrides not yet applied).
        """
        draft: MutableConfig = cls.from_defaults()
        layers: list[Path] = []
        if not no_config:
            layers.extend(cls.discover_config_files(cwd or Path.cwd(), home or Path.home()))
        layers.extend(extra_config_files)
        for path in layers:
            draft = draft.merge_with(cls.from_toml_file(path))
        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Type tables merge per type and per field, so a layer may change a
        single field of a built-in type.
        """

        def _pick(attr: str) -> Any:
            value: Any = getattr(other, attr)
            return value if value is not None else getattr(self, attr)

        diagnostics = DiagnosticLog()
        diagnostics.extend(self.diagnostics)
        diagnostics.extend(other.diagnostics)

        return MutableConfig(
            timestamp=self.timestamp,
            add_banner=_pick("add_banner"),
            date_format=_pick("date_format"),
            default_creator=_pick("default_creator"),
            destination=_pick("destination"),
            macro_delimiters=other.macro_delimiters or self.macro_delimiters,
            set_file_exec=_pick("set_file_exec"),
            xml_lint_command=_pick("xml_lint_command"),
            site_module=_pick("site_module"),
            link_timeout=_pick("link_timeout"),
            base_types=merge_profile_tables(self.base_types, other.base_types),
            type_overrides=merge_profile_tables(self.type_overrides, other.type_overrides),
            href_check=_pick("href_check"),
            lint=_pick("lint"),
            inplace=_pick("inplace"),
            output_dir=_pick("output_dir"),
            config_files=self.config_files + other.config_files,
            diagnostics=diagnostics,
        )

    def apply_type_tables(self, tables: Mapping[str, Any], source: str) -> None:
        """Merge extra ``[types.*]``-shaped tables (e.g. a site module's ``FILE_TYPES``).

        Args:
            tables (Mapping[str, Any]): Type identifier to field table.
            source (str): Provenance label recorded in ``config_files``.
        """
        parsed: dict[str, MutableProfile] = parse_type_tables(
            as_toml_table_map(dict(tables)), self.diagnostics
        )
        self.type_overrides = merge_profile_tables(self.type_overrides, parsed)
        self.config_files.append(source)
