# topmark:header:start
#
#   project      : PagePress
#   file         : profiles.py
#   file_relpath : src/pagepress/config/profiles.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-type processing profiles and their inheritance resolution.

A *type profile* holds the settings applied to every file whose extension
matches the type identifier (``compress``, ``non_ascii``, ``textwidth``, ...).
Profiles may name a parent through ``copy_from``; unset fields are then filled
from the parent. Every chain ends at the ``default`` profile.

Two shapes exist, following the builder/frozen split used by `MutableConfig`:

* `MutableProfile`: tri-state (``None`` = unset) builder parsed from TOML and
  merged layer by layer.
* `TypeProfile`: immutable, fully populated profile produced by
  `resolve_profiles()`.

Resolution is a fixed point over the table. A type is resolved once its parent
is ``default`` or is itself resolved. Unknown parents are reported and rebound
to ``default``. Types that stall because they inherit from each other in a loop
are reported as ``CYCLE`` errors and rebound to ``default`` as well, so
resolution always terminates.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from pagepress.config.io.getters import (
    get_int_value_or_none_checked,
    get_string_value_or_none_checked,
    warn_unknown_keys,
)
from pagepress.config.keys import Toml
from pagepress.config.logging import get_logger
from pagepress.constants import DEFAULT_TYPE
from pagepress.core.diagnostics import DiagnosticKind, DiagnosticLog
from pagepress.core.errors import ConfigError

if TYPE_CHECKING:
    from pagepress.config.io.types import TomlTable, TomlTableMap
    from pagepress.config.logging import PagepressLogger

logger: PagepressLogger = get_logger(__name__)

# Fields that are inherited along copy_from chains.
PROFILE_FIELDS: Final[tuple[str, ...]] = (
    "info",
    "compress",
    "non_ascii",
    "textwidth",
    "creator",
    "out",
)

ProfileTable = Mapping[str, "TypeProfile"]


@dataclass(frozen=True, slots=True)
class TypeProfile:
    """Resolved, immutable settings for one file type.

    Attributes:
        name (str): Type identifier (the file extension, or ``default``).
        info (str): Human-readable description.
        compress (int): 0 = none, 1 = moderate, 2 = aggressive (strict markup).
        non_ascii (bool): Encode non-ASCII characters as entities.
        textwidth (int): Target line width for wrapping; 0 disables wrapping.
        creator (str): Macintosh creator code applied after writing ("" = none).
        out (str | None): Replacement output extension, if any.
    """

    name: str
    info: str
    compress: int
    non_ascii: bool
    textwidth: int
    creator: str
    out: str | None = None

    def thaw(self) -> MutableProfile:
        """Return a builder with every field set and no parent reference."""
        return MutableProfile(
            info=self.info,
            compress=self.compress,
            non_ascii=self.non_ascii,
            textwidth=self.textwidth,
            creator=self.creator,
            out=self.out,
        )

    def to_toml_dict(self) -> dict[str, Any]:
        """Return a ``[types.<name>]``-shaped dict (``out`` omitted when unset)."""
        data: dict[str, Any] = {
            Toml.KEY_INFO: self.info,
            Toml.KEY_COMPRESS: self.compress,
            Toml.KEY_NON_ASCII: int(self.non_ascii),
            Toml.KEY_TEXTWIDTH: self.textwidth,
            Toml.KEY_CREATOR: self.creator,
        }
        if self.out:
            data[Toml.KEY_OUT] = self.out
        return data


@dataclass
class MutableProfile:
    """Tri-state builder for a type profile.

    ``None`` means *unset* and is filled from the parent during resolution.
    """

    info: str | None = None
    compress: int | None = None
    non_ascii: bool | None = None
    textwidth: int | None = None
    creator: str | None = None
    out: str | None = None
    copy_from: str | None = None

    @classmethod
    def from_toml_table(
        cls,
        name: str,
        table: TomlTable,
        diagnostics: DiagnosticLog,
    ) -> MutableProfile:
        """Parse a ``[types.<name>]`` table.

        Malformed values are reported as ``CONFIG`` warnings and left unset.

        Args:
            name (str): Type identifier (used in messages).
            table (TomlTable): Raw table contents.
            diagnostics (DiagnosticLog): Collector for shape warnings.

        Returns:
            MutableProfile: The parsed builder.
        """
        where: str = f"[{Toml.SECTION_TYPES}.{name}]"
        warn_unknown_keys(table, Toml.ALLOWED_TYPE_KEYS, where=where, diagnostics=diagnostics)

        non_ascii: int | None = get_int_value_or_none_checked(
            table, Toml.KEY_NON_ASCII, where=where, diagnostics=diagnostics, minimum=0
        )
        out: str | None = get_string_value_or_none_checked(
            table, Toml.KEY_OUT, where=where, diagnostics=diagnostics
        )
        return cls(
            info=get_string_value_or_none_checked(
                table, Toml.KEY_INFO, where=where, diagnostics=diagnostics
            ),
            compress=get_int_value_or_none_checked(
                table, Toml.KEY_COMPRESS, where=where, diagnostics=diagnostics, minimum=0, maximum=2
            ),
            non_ascii=None if non_ascii is None else non_ascii > 0,
            textwidth=get_int_value_or_none_checked(
                table, Toml.KEY_TEXTWIDTH, where=where, diagnostics=diagnostics, minimum=0
            ),
            creator=get_string_value_or_none_checked(
                table, Toml.KEY_CREATOR, where=where, diagnostics=diagnostics
            ),
            # An empty "out" means "keep the input extension".
            out=out.lstrip(".") if out is not None else None,
            copy_from=get_string_value_or_none_checked(
                table, Toml.KEY_COPY_FROM, where=where, diagnostics=diagnostics
            ),
        )

    def merge_with(self, other: MutableProfile) -> MutableProfile:
        """Return a new builder where fields set in ``other`` override ``self``."""
        merged = replace(self)
        for f in fields(other):
            value: Any = getattr(other, f.name)
            if value is not None:
                setattr(merged, f.name, value)
        return merged

    def inherit_from(self, parent: MutableProfile) -> None:
        """Fill every unset field from ``parent`` (in place)."""
        for name in PROFILE_FIELDS:
            if getattr(self, name) is None:
                setattr(self, name, getattr(parent, name))

    def freeze(self, name: str) -> TypeProfile:
        """Build the immutable profile; any field still unset becomes its zero value."""
        return TypeProfile(
            name=name,
            info=self.info or "",
            compress=self.compress or 0,
            non_ascii=bool(self.non_ascii),
            textwidth=self.textwidth or 0,
            creator=self.creator or "",
            out=self.out or None,
        )


def parse_type_tables(
    tables: TomlTableMap,
    diagnostics: DiagnosticLog,
) -> dict[str, MutableProfile]:
    """Parse a ``[types]`` table map into builders keyed by type identifier."""
    return {
        name: MutableProfile.from_toml_table(name, table, diagnostics)
        for name, table in tables.items()
    }


def merge_profile_tables(
    base: Mapping[str, MutableProfile],
    overrides: Mapping[str, MutableProfile],
) -> dict[str, MutableProfile]:
    """Merge ``overrides`` onto ``base`` field by field; new types are appended."""
    merged: dict[str, MutableProfile] = {name: replace(p) for name, p in base.items()}
    for name, profile in overrides.items():
        merged[name] = merged[name].merge_with(profile) if name in merged else replace(profile)
    return merged


def _cycle_members(table: Mapping[str, MutableProfile], pending: set[str]) -> list[str]:
    """Return the pending types that lie on an inheritance loop."""
    members: set[str] = set()
    for start in pending:
        seen: list[str] = []
        current: str | None = start
        while current is not None and current in pending and current not in seen:
            seen.append(current)
            current = table[current].copy_from
        if current in seen:
            members.update(seen[seen.index(current) :])
    return sorted(members)


def resolve_profiles(
    table: Mapping[str, MutableProfile],
    *,
    diagnostics: DiagnosticLog | None = None,
) -> ProfileTable:
    """Resolve ``copy_from`` inheritance until every profile is complete.

    Args:
        table (Mapping[str, MutableProfile]): Merged builders keyed by type
            identifier. Must contain ``default``.
        diagnostics (DiagnosticLog | None): Collector for unknown-parent and
            cycle errors. A throw-away log is used when omitted.

    Returns:
        ProfileTable: Read-only mapping of type identifier to `TypeProfile`.

    Raises:
        ConfigError: If the ``default`` profile is missing.
    """
    log: DiagnosticLog = diagnostics if diagnostics is not None else DiagnosticLog()
    if DEFAULT_TYPE not in table:
        raise ConfigError(f"The '{DEFAULT_TYPE}' type is missing from the type table")

    work: dict[str, MutableProfile] = {name: replace(p) for name, p in table.items()}
    # default never inherits
    work[DEFAULT_TYPE].copy_from = None

    for name, profile in work.items():
        if name != DEFAULT_TYPE and not profile.copy_from:
            profile.copy_from = DEFAULT_TYPE

    resolved: set[str] = {DEFAULT_TYPE}
    pending: set[str] = set(work) - resolved

    while pending:
        progressed = False
        for name in sorted(pending):
            profile: MutableProfile = work[name]
            parent: str = profile.copy_from or DEFAULT_TYPE
            if parent not in work:
                log.add_error(
                    f"Type '{name}' copies from undefined type '{parent}'; using '{DEFAULT_TYPE}'",
                    DiagnosticKind.REFERENCE,
                )
                parent = profile.copy_from = DEFAULT_TYPE
            if parent not in resolved:
                continue
            profile.inherit_from(work[parent])
            logger.trace("Resolved type %s from %s", name, parent)
            resolved.add(name)
            progressed = True
        pending -= resolved

        if pending and not progressed:
            for name in _cycle_members(work, pending):
                log.add_error(
                    f"Type '{name}' is part of a copy_from cycle; using '{DEFAULT_TYPE}'",
                    DiagnosticKind.CYCLE,
                )
                work[name].copy_from = DEFAULT_TYPE

    return MappingProxyType({name: p.freeze(name) for name, p in sorted(work.items())})


def profile_for_type(
    profiles: ProfileTable,
    type_id: str,
    diagnostics: DiagnosticLog | None = None,
) -> TypeProfile:
    """Look up the profile for ``type_id``, falling back to ``default``.

    An unknown identifier is reported as a ``REFERENCE`` error.
    """
    found: TypeProfile | None = profiles.get(type_id)
    if found is not None:
        return found
    if diagnostics is not None:
        diagnostics.add_error(
            f"Undefined file type: {type_id}; using '{DEFAULT_TYPE}'",
            DiagnosticKind.REFERENCE,
        )
    return profiles[DEFAULT_TYPE]
