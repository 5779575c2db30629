"""Shader model registry for DXIL targets.

Catalogs every supported shader profile (stage + major.minor), parses
profile strings such as ``ps_6_6`` and derives the DXIL and validator
versions a profile compiles to.

Usage:
    python shader_model.py --list-profiles --kind cs
    python shader_model.py --info lib_6_x
"""

import argparse
from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NamedTuple


# ===--- Kinds ---=== #


class ShaderKind(IntEnum):
    """Shader stages. Ordinals are part of the profile key; keep them stable."""

    PIXEL = 0
    VERTEX = 1
    GEOMETRY = 2
    HULL = 3
    DOMAIN = 4
    COMPUTE = 5
    LIBRARY = 6
    RAY_GENERATION = 7
    INTERSECTION = 8
    ANY_HIT = 9
    CLOSEST_HIT = 10
    MISS = 11
    CALLABLE = 12
    MESH = 13
    AMPLIFICATION = 14
    NODE = 15
    INVALID = 16


class NodeLaunchType(IntEnum):
    INVALID = 0
    BROADCASTING = 1
    COALESCING = 2
    THREAD = 3


SHADER_KIND_NAMES: tuple[str, ...] = (
    "ps",
    "vs",
    "gs",
    "hs",
    "ds",
    "cs",
    "lib",
    "raygeneration",
    "intersection",
    "anyhit",
    "closesthit",
    "miss",
    "callable",
    "ms",
    "as",
    "node",
    "invalid",
)
"""Short display names indexed by ShaderKind ordinal."""

# Library and Invalid have no spelling for use with the shader attribute.
SHADER_KIND_FULL_NAMES: dict[ShaderKind, str] = {
    ShaderKind.PIXEL: "pixel",
    ShaderKind.VERTEX: "vertex",
    ShaderKind.GEOMETRY: "geometry",
    ShaderKind.HULL: "hull",
    ShaderKind.DOMAIN: "domain",
    ShaderKind.COMPUTE: "compute",
    ShaderKind.RAY_GENERATION: "raygeneration",
    ShaderKind.INTERSECTION: "intersection",
    ShaderKind.ANY_HIT: "anyhit",
    ShaderKind.CLOSEST_HIT: "closesthit",
    ShaderKind.MISS: "miss",
    ShaderKind.CALLABLE: "callable",
    ShaderKind.MESH: "mesh",
    ShaderKind.AMPLIFICATION: "amplification",
    ShaderKind.NODE: "node",
}
_KINDS_BY_FULL_NAME = {name: kind for kind, name in SHADER_KIND_FULL_NAMES.items()}

NODE_LAUNCH_TYPE_NAMES: tuple[str, ...] = (
    "invalid",
    "broadcasting",
    "coalescing",
    "thread",
)

if len(SHADER_KIND_NAMES) != len(ShaderKind):
    raise RuntimeError("Invalid kinds or names: SHADER_KIND_NAMES out of sync")
if len(NODE_LAUNCH_TYPE_NAMES) != len(NodeLaunchType):
    raise RuntimeError("Invalid launch type or names: NODE_LAUNCH_TYPE_NAMES out of sync")


def kind_name(kind: ShaderKind) -> str:
    return SHADER_KIND_NAMES[kind]


def kind_from_name(name: str) -> ShaderKind:
    """Inverse of kind_name. Unknown names map to ShaderKind.INVALID."""
    try:
        return ShaderKind(SHADER_KIND_NAMES.index(name))
    except ValueError:
        return ShaderKind.INVALID


def full_name_from_kind(kind: ShaderKind) -> str:
    return SHADER_KIND_FULL_NAMES.get(kind, "")


def kind_from_full_name(name: str) -> ShaderKind:
    return _KINDS_BY_FULL_NAME.get(name, ShaderKind.INVALID)


def node_launch_type_name(launch_type: NodeLaunchType) -> str:
    return NODE_LAUNCH_TYPE_NAMES[launch_type]


def node_launch_type_from_name(name: str) -> NodeLaunchType:
    """Case-insensitive; anything but the three launch modes is INVALID."""
    lowered = name.lower()
    for launch_type in (
        NodeLaunchType.BROADCASTING,
        NodeLaunchType.COALESCING,
        NodeLaunchType.THREAD,
    ):
        if NODE_LAUNCH_TYPE_NAMES[launch_type] == lowered:
            return launch_type
    return NodeLaunchType.INVALID


# ===--- Shader model records ---=== #


class OfflineMinor(Enum):
    """Minor version of profiles usable only for offline library linking."""

    OFFLINE = "x"


class UnlimitedCount(Enum):
    UNLIMITED = "unlimited"


OFFLINE = OfflineMinor.OFFLINE
UNLIMITED = UnlimitedCount.UNLIMITED

HIGHEST_SHADER_MODEL_MINOR = 8
OFFLINE_MINOR_CODE = 0xF

MinorVersion = int | OfflineMinor
RegisterCount = int | UnlimitedCount


class Version(NamedTuple):
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class ShaderModel:
    """One shader profile and its resource-binding limits.

    Equality is field-wise, so two records compare equal when every field,
    name included, matches.

    Attributes:
        kind: Shader stage this profile targets.
        major: Shader model major version.
        minor: Numeric minor version, or OFFLINE for lib_6_x.
        name: Canonical profile string, e.g. "ps_6_5".
        input_registers: Input register slots (0 when the stage has none).
        output_registers: Output register slots (0 when the stage has none).
        typed_uavs: Whether typed UAV loads are supported.
        uav_registers: UAV register slots, or UNLIMITED.
    """

    kind: ShaderKind
    major: int
    minor: MinorVersion
    name: str
    input_registers: int
    output_registers: int
    typed_uavs: bool
    uav_registers: RegisterCount

    def __str__(self) -> str:
        return self.name


def format_profile_name(kind: ShaderKind, major: int, minor: MinorVersion) -> str:
    minor_text = minor.value if isinstance(minor, OfflineMinor) else str(minor)
    return f"{kind_name(kind)}_{major}_{minor_text}"


# ===--- Version table ---=== #

_SM = ShaderModel
_K = ShaderKind

# Values before the invalid entry must remain sorted by kind, then major, then minor.
SHADER_MODELS: tuple[ShaderModel, ...] = (
    # kind, major, minor, name, inputs, outputs, typed UAVs, UAV registers
    _SM(_K.PIXEL, 4, 0, "ps_4_0", 32, 8, False, 0),
    _SM(_K.PIXEL, 4, 1, "ps_4_1", 32, 8, False, 0),
    _SM(_K.PIXEL, 5, 0, "ps_5_0", 32, 8, True, 64),
    _SM(_K.PIXEL, 5, 1, "ps_5_1", 32, 8, True, 64),
    _SM(_K.PIXEL, 6, 0, "ps_6_0", 32, 8, True, UNLIMITED),
    _SM(_K.PIXEL, 6, 1, "ps_6_1", 32, 8, True, UNLIMITED),
    _SM(_K.PIXEL, 6, 2, "ps_6_2", 32, 8, True, UNLIMITED),
    _SM(_K.PIXEL, 6, 3, "ps_6_3", 32, 8, True, UNLIMITED),
    _SM(_K.PIXEL, 6, 4, "ps_6_4", 32, 8, True, UNLIMITED),
    _SM(_K.PIXEL, 6, 5, "ps_6_5", 32, 8, True, UNLIMITED),
    _SM(_K.PIXEL, 6, 6, "ps_6_6", 32, 8, True, UNLIMITED),
    _SM(_K.PIXEL, 6, 7, "ps_6_7", 32, 8, True, UNLIMITED),
    _SM(_K.PIXEL, 6, 8, "ps_6_8", 32, 8, True, UNLIMITED),
    _SM(_K.VERTEX, 4, 0, "vs_4_0", 16, 16, False, 0),
    _SM(_K.VERTEX, 4, 1, "vs_4_1", 32, 32, False, 0),
    _SM(_K.VERTEX, 5, 0, "vs_5_0", 32, 32, True, 64),
    _SM(_K.VERTEX, 5, 1, "vs_5_1", 32, 32, True, 64),
    _SM(_K.VERTEX, 6, 0, "vs_6_0", 32, 32, True, UNLIMITED),
    _SM(_K.VERTEX, 6, 1, "vs_6_1", 32, 32, True, UNLIMITED),
    _SM(_K.VERTEX, 6, 2, "vs_6_2", 32, 32, True, UNLIMITED),
    _SM(_K.VERTEX, 6, 3, "vs_6_3", 32, 32, True, UNLIMITED),
    _SM(_K.VERTEX, 6, 4, "vs_6_4", 32, 32, True, UNLIMITED),
    _SM(_K.VERTEX, 6, 5, "vs_6_5", 32, 32, True, UNLIMITED),
    _SM(_K.VERTEX, 6, 6, "vs_6_6", 32, 32, True, UNLIMITED),
    _SM(_K.VERTEX, 6, 7, "vs_6_7", 32, 32, True, UNLIMITED),
    _SM(_K.VERTEX, 6, 8, "vs_6_8", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 4, 0, "gs_4_0", 16, 32, False, 0),
    _SM(_K.GEOMETRY, 4, 1, "gs_4_1", 32, 32, False, 0),
    _SM(_K.GEOMETRY, 5, 0, "gs_5_0", 32, 32, True, 64),
    _SM(_K.GEOMETRY, 5, 1, "gs_5_1", 32, 32, True, 64),
    _SM(_K.GEOMETRY, 6, 0, "gs_6_0", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 6, 1, "gs_6_1", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 6, 2, "gs_6_2", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 6, 3, "gs_6_3", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 6, 4, "gs_6_4", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 6, 5, "gs_6_5", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 6, 6, "gs_6_6", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 6, 7, "gs_6_7", 32, 32, True, UNLIMITED),
    _SM(_K.GEOMETRY, 6, 8, "gs_6_8", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 5, 0, "hs_5_0", 32, 32, True, 64),
    _SM(_K.HULL, 5, 1, "hs_5_1", 32, 32, True, 64),
    _SM(_K.HULL, 6, 0, "hs_6_0", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 6, 1, "hs_6_1", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 6, 2, "hs_6_2", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 6, 3, "hs_6_3", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 6, 4, "hs_6_4", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 6, 5, "hs_6_5", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 6, 6, "hs_6_6", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 6, 7, "hs_6_7", 32, 32, True, UNLIMITED),
    _SM(_K.HULL, 6, 8, "hs_6_8", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 5, 0, "ds_5_0", 32, 32, True, 64),
    _SM(_K.DOMAIN, 5, 1, "ds_5_1", 32, 32, True, 64),
    _SM(_K.DOMAIN, 6, 0, "ds_6_0", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 6, 1, "ds_6_1", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 6, 2, "ds_6_2", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 6, 3, "ds_6_3", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 6, 4, "ds_6_4", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 6, 5, "ds_6_5", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 6, 6, "ds_6_6", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 6, 7, "ds_6_7", 32, 32, True, UNLIMITED),
    _SM(_K.DOMAIN, 6, 8, "ds_6_8", 32, 32, True, UNLIMITED),
    _SM(_K.COMPUTE, 4, 0, "cs_4_0", 0, 0, False, 0),
    _SM(_K.COMPUTE, 4, 1, "cs_4_1", 0, 0, False, 0),
    _SM(_K.COMPUTE, 5, 0, "cs_5_0", 0, 0, True, 64),
    _SM(_K.COMPUTE, 5, 1, "cs_5_1", 0, 0, True, 64),
    _SM(_K.COMPUTE, 6, 0, "cs_6_0", 0, 0, True, UNLIMITED),
    _SM(_K.COMPUTE, 6, 1, "cs_6_1", 0, 0, True, UNLIMITED),
    _SM(_K.COMPUTE, 6, 2, "cs_6_2", 0, 0, True, UNLIMITED),
    _SM(_K.COMPUTE, 6, 3, "cs_6_3", 0, 0, True, UNLIMITED),
    _SM(_K.COMPUTE, 6, 4, "cs_6_4", 0, 0, True, UNLIMITED),
    _SM(_K.COMPUTE, 6, 5, "cs_6_5", 0, 0, True, UNLIMITED),
    _SM(_K.COMPUTE, 6, 6, "cs_6_6", 0, 0, True, UNLIMITED),
    _SM(_K.COMPUTE, 6, 7, "cs_6_7", 0, 0, True, UNLIMITED),
    _SM(_K.COMPUTE, 6, 8, "cs_6_8", 0, 0, True, UNLIMITED),
    _SM(_K.LIBRARY, 6, 1, "lib_6_1", 32, 32, True, UNLIMITED),
    _SM(_K.LIBRARY, 6, 2, "lib_6_2", 32, 32, True, UNLIMITED),
    _SM(_K.LIBRARY, 6, 3, "lib_6_3", 32, 32, True, UNLIMITED),
    _SM(_K.LIBRARY, 6, 4, "lib_6_4", 32, 32, True, UNLIMITED),
    _SM(_K.LIBRARY, 6, 5, "lib_6_5", 32, 32, True, UNLIMITED),
    _SM(_K.LIBRARY, 6, 6, "lib_6_6", 32, 32, True, UNLIMITED),
    _SM(_K.LIBRARY, 6, 7, "lib_6_7", 32, 32, True, UNLIMITED),
    _SM(_K.LIBRARY, 6, 8, "lib_6_8", 32, 32, True, UNLIMITED),
    # lib_6_x is for offline linking only, and relaxes restrictions
    _SM(_K.LIBRARY, 6, OFFLINE, "lib_6_x", 32, 32, True, UNLIMITED),
    _SM(_K.MESH, 6, 5, "ms_6_5", 0, 0, True, UNLIMITED),
    _SM(_K.MESH, 6, 6, "ms_6_6", 0, 0, True, UNLIMITED),
    _SM(_K.MESH, 6, 7, "ms_6_7", 0, 0, True, UNLIMITED),
    _SM(_K.MESH, 6, 8, "ms_6_8", 0, 0, True, UNLIMITED),
    _SM(_K.AMPLIFICATION, 6, 5, "as_6_5", 0, 0, True, UNLIMITED),
    _SM(_K.AMPLIFICATION, 6, 6, "as_6_6", 0, 0, True, UNLIMITED),
    _SM(_K.AMPLIFICATION, 6, 7, "as_6_7", 0, 0, True, UNLIMITED),
    _SM(_K.AMPLIFICATION, 6, 8, "as_6_8", 0, 0, True, UNLIMITED),
    _SM(_K.INVALID, 0, 0, "invalid", 0, 0, False, 0),
)

INVALID_SHADER_MODEL: ShaderModel = SHADER_MODELS[-1]


def _minor_code(minor: MinorVersion) -> int:
    return OFFLINE_MINOR_CODE if minor is OFFLINE else minor


def profile_key(kind: ShaderKind, major: int, minor: MinorVersion) -> int:
    """Composite sort/search key: kind in bits 16+, major in 8-15, minor in 0-7."""
    return int(kind) << 16 | major << 8 | _minor_code(minor)


def validate_table(models: tuple[ShaderModel, ...]) -> None:
    """Check the ordering and sentinel invariants of a shader model table.

    Args:
        models: Candidate table; the last entry must be the invalid sentinel.

    Raises:
        ValueError: On the first violated invariant, naming the offending entries.
    """
    if not models:
        raise ValueError("Shader model table is empty")

    sentinel = models[-1]
    if sentinel != ShaderModel(ShaderKind.INVALID, 0, 0, "invalid", 0, 0, False, 0):
        raise ValueError(f"Last shader model must be the invalid sentinel, got {sentinel}")

    entries = models[:-1]
    previous: ShaderModel | None = None
    for sm in entries:
        if sm.kind == ShaderKind.INVALID:
            raise ValueError(f"Invalid kind before the end of the table: {sm}")
        if sm.minor is OFFLINE and sm.kind != ShaderKind.LIBRARY:
            raise ValueError(f"Offline minor is only allowed for library profiles: {sm}")
        expected_name = format_profile_name(sm.kind, sm.major, sm.minor)
        if sm.name != expected_name:
            raise ValueError(f"Profile {sm} should be named {expected_name}")
        if previous is not None and profile_key(
            previous.kind, previous.major, previous.minor
        ) >= profile_key(sm.kind, sm.major, sm.minor):
            raise ValueError(f"Shader models out of order: {previous} before {sm}")
        previous = sm


validate_table(SHADER_MODELS)

# Ascending keys parallel to SHADER_MODELS, sentinel excluded.
_PROFILE_KEYS: tuple[int, ...] = tuple(
    profile_key(sm.kind, sm.major, sm.minor) for sm in SHADER_MODELS[:-1]
)


# ===--- Lookup ---=== #


def resolve(kind: ShaderKind, major: int, minor: MinorVersion) -> ShaderModel:
    """Return the table entry for (kind, major, minor), or INVALID_SHADER_MODEL.

    The key alone is not trusted: out-of-range components can alias another
    profile's key, so the matched entry's fields are compared as well.
    """
    key = profile_key(kind, major, minor)
    idx = bisect_left(_PROFILE_KEYS, key)
    if idx == len(_PROFILE_KEYS) or _PROFILE_KEYS[idx] != key:
        return INVALID_SHADER_MODEL
    sm = SHADER_MODELS[idx]
    if (sm.kind, sm.major, sm.minor) != (kind, major, minor):
        return INVALID_SHADER_MODEL
    return sm


def is_valid(sm: ShaderModel) -> bool:
    return sm.kind != ShaderKind.INVALID


def is_valid_for_dxil(sm: ShaderModel) -> bool:
    """True for shader model 6 profiles that map onto a DXIL version.

    Legacy 4.x/5.x profiles exist in the table but are never DXIL targets.
    The offline minor only qualifies for library profiles.
    """
    if not is_valid(sm) or sm.major != 6:
        return False
    if sm.minor is OFFLINE:
        return sm.kind == ShaderKind.LIBRARY
    return 0 <= sm.minor <= HIGHEST_SHADER_MODEL_MINOR


def profiles_for_kind(kind: ShaderKind) -> tuple[ShaderModel, ...]:
    return tuple(sm for sm in SHADER_MODELS[:-1] if sm.kind == kind)


# ===--- Profile name parsing ---=== #

# Checked in order; "lib" is the only three-character prefix.
PROFILE_PREFIXES: tuple[tuple[str, ShaderKind], ...] = (
    ("ps", ShaderKind.PIXEL),
    ("vs", ShaderKind.VERTEX),
    ("gs", ShaderKind.GEOMETRY),
    ("hs", ShaderKind.HULL),
    ("ds", ShaderKind.DOMAIN),
    ("cs", ShaderKind.COMPUTE),
    ("lib", ShaderKind.LIBRARY),
    ("ms", ShaderKind.MESH),
    ("as", ShaderKind.AMPLIFICATION),
)

_MAJOR_DIGITS = {"4": 4, "5": 5, "6": 6}
# Minors 2 and up only exist for shader model 6.
_SM6_MINOR_DIGITS = {str(m): m for m in range(2, HIGHEST_SHADER_MODEL_MINOR + 1)}


def _parse_minor(token: str, kind: ShaderKind, major: int) -> MinorVersion | None:
    if token in ("0", "1"):
        return int(token)
    if token in _SM6_MINOR_DIGITS:
        return _SM6_MINOR_DIGITS[token] if major == 6 else None
    if token == OFFLINE.value and kind == ShaderKind.LIBRARY and major == 6:
        return OFFLINE
    return None


def parse(name: str) -> ShaderModel:
    """Resolve a profile string like "ps_6_6" or "lib_6_x".

    Grammar: <prefix>_<major>_<minor>, each version component one character.
    Anything malformed, including trailing characters, yields
    INVALID_SHADER_MODEL. Well-formed names still go through resolve(), so a
    combination the table lacks (e.g. "hs_4_0") is invalid too.
    """
    for prefix, kind in PROFILE_PREFIXES:
        if name.startswith(prefix + "_"):
            break
    else:
        return INVALID_SHADER_MODEL

    rest = name[len(prefix) + 1 :]
    if len(rest) != 3 or rest[1] != "_":
        return INVALID_SHADER_MODEL

    major = _MAJOR_DIGITS.get(rest[0])
    if major is None:
        return INVALID_SHADER_MODEL

    minor = _parse_minor(rest[2], kind, major)
    if minor is None:
        return INVALID_SHADER_MODEL

    return resolve(kind, major, minor)


# ===--- Capability derivation ---=== #


def dxil_version(sm: ShaderModel) -> Version:
    """DXIL IR version the profile compiles to.

    Offline library profiles are relinked before execution, so they always
    target the highest DXIL minor.
    """
    assert is_valid_for_dxil(sm), f"invalid shader model: {sm}"
    if sm.minor is OFFLINE:
        return Version(1, HIGHEST_SHADER_MODEL_MINOR)
    return Version(1, sm.minor)


def min_validator_version(sm: ShaderModel) -> Version:
    """Minimum validator version that accepts output for the profile.

    Offline library profiles are never validated on their own and report
    (0, 0). This deliberately differs from dxil_version.
    """
    assert is_valid_for_dxil(sm), f"invalid shader model: {sm}"
    if sm.minor is OFFLINE:
        return Version(0, 0)
    return Version(1, sm.minor)


def is_sm_at_least(sm: ShaderModel, major: int, minor: int) -> bool:
    # The offline minor ranks above every numeric minor.
    return (sm.major, _minor_code(sm.minor)) >= (major, minor)


_ALWAYS_DERIVATIVE_KINDS = frozenset(
    {ShaderKind.PIXEL, ShaderKind.LIBRARY, ShaderKind.NODE}
)
_SM66_DERIVATIVE_KINDS = frozenset(
    {ShaderKind.COMPUTE, ShaderKind.AMPLIFICATION, ShaderKind.MESH}
)


def is_dxil_derivatives_allowed(kind: ShaderKind, sm: ShaderModel) -> bool:
    """Whether derivative instructions are legal for kind under profile sm."""
    if kind in _ALWAYS_DERIVATIVE_KINDS:
        return True
    if kind in _SM66_DERIVATIVE_KINDS:
        return is_sm_at_least(sm, 6, 6)
    return False


def supports_uavs(sm: ShaderModel) -> bool:
    return sm.uav_registers != 0


# ===--- CLI config contracts ---=== #


@dataclass(frozen=True)
class DiscoveryConfig:
    command: str
    kind_filter: ShaderKind | None
    info_profile: ShaderModel | None


VALID_ERROR_CODES = {
    "MISSING_COMMAND",
    "INVALID_PROFILE",
    "UNKNOWN_KIND",
    "KIND_WITHOUT_LIST",
}


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


def validate_profile_name(raw: str) -> ShaderModel:
    sm = parse(raw)
    if is_valid(sm):
        return sm
    raise ConfigError(
        "INVALID_PROFILE",
        f"Unknown shader profile: {raw}",
        "Profiles look like <stage>_<major>_<minor> (for example ps_6_6 or lib_6_x).",
    )


def validate_kind_name(raw: str) -> ShaderKind:
    kind = kind_from_full_name(raw)
    if kind == ShaderKind.INVALID:
        kind = kind_from_name(raw)
    if kind == ShaderKind.INVALID:
        raise ConfigError(
            "UNKNOWN_KIND",
            f"Unknown shader kind: {raw}",
            "Use a short name (ps, cs, lib) or a full name (pixel, compute).",
        )
    return kind


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect the DXIL shader model registry")

    command_group = parser.add_mutually_exclusive_group()
    command_group.add_argument("--list-profiles", action="store_true", default=False)
    command_group.add_argument("--list-kinds", action="store_true", default=False)
    command_group.add_argument("--info", type=str, default=None)

    parser.add_argument("--kind", type=str, default=None)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> DiscoveryConfig:
    if args.kind is not None and not args.list_profiles:
        raise ConfigError(
            "KIND_WITHOUT_LIST",
            "--kind requires --list-profiles.",
            "Add --list-profiles or remove --kind.",
        )

    if args.list_profiles:
        kind_filter = validate_kind_name(args.kind) if args.kind is not None else None
        return DiscoveryConfig(
            command="list-profiles", kind_filter=kind_filter, info_profile=None
        )

    if args.list_kinds:
        return DiscoveryConfig(command="list-kinds", kind_filter=None, info_profile=None)

    if args.info is not None:
        return DiscoveryConfig(
            command="info",
            kind_filter=None,
            info_profile=validate_profile_name(args.info),
        )

    raise ConfigError(
        "MISSING_COMMAND",
        "No command given.",
        "Pass one of --list-profiles, --list-kinds or --info PROFILE.",
    )


def build_config(argv: list[str] | None = None) -> DiscoveryConfig:
    return validate_config(parse_args(argv))


# ===--- Discovery ---=== #


@dataclass(frozen=True)
class ProfileSummary:
    """One row of the --list-profiles table.

    dxil and validator are None for profiles that are not DXIL targets
    (every 4.x/5.x profile).
    """

    model: ShaderModel
    dxil: Version | None
    validator: Version | None


def gather_profile_summaries(kind: ShaderKind | None = None) -> list[ProfileSummary]:
    models = SHADER_MODELS[:-1] if kind is None else profiles_for_kind(kind)
    summaries = []
    for sm in models:
        if is_valid_for_dxil(sm):
            summaries.append(ProfileSummary(sm, dxil_version(sm), min_validator_version(sm)))
        else:
            summaries.append(ProfileSummary(sm, None, None))
    return summaries


def _format_count(count: RegisterCount) -> str:
    return "unlimited" if count is UNLIMITED else str(count)


def _format_validator(version: Version | None) -> str:
    if version is None:
        return "-"
    if version == Version(0, 0):
        return "none"
    return str(version)


def format_profiles_table(summaries: list[ProfileSummary]) -> str:
    """Return the complete --list-profiles output as a string.

    Output format:

        91 shader models:

          ps_4_0   in 32  out 8   uav 0          dxil -    val -
          lib_6_x  in 32  out 32  uav unlimited  dxil 1.8  val none
    """
    lines = [f"{len(summaries)} shader models:", ""]
    name_width = max((len(s.model.name) for s in summaries), default=0)
    for s in summaries:
        sm = s.model
        dxil = str(s.dxil) if s.dxil is not None else "-"
        row = (
            f"  {sm.name.ljust(name_width)}  in {sm.input_registers:<3} "
            f"out {sm.output_registers:<3} uav {_format_count(sm.uav_registers):<10} "
            f"dxil {dxil:<4} val {_format_validator(s.validator)}"
        )
        lines.append(row.rstrip())
    lines.append("")
    return "\n".join(lines)


def format_kinds_table() -> str:
    lines = ["Shader kinds:", ""]
    for kind in ShaderKind:
        full_name = full_name_from_kind(kind) or "-"
        count = len(profiles_for_kind(kind))
        lines.append(
            f"  {int(kind):>2}  {kind_name(kind):<14} {full_name:<14} {count} profiles"
        )
    lines.append("")
    return "\n".join(lines)


def format_profile_detail(sm: ShaderModel) -> str:
    """Return the complete --info output for one profile.

    Output format:

        ps_6_6 (pixel shader model 6.6)
          Input registers:   32
          Output registers:  8
          UAV registers:     unlimited
          Typed UAVs:        yes
          DXIL version:      1.6
          Validator version: 1.6
          Derivatives:       yes
    """
    label = full_name_from_kind(sm.kind) or "library"
    minor_text = sm.minor.value if sm.minor is OFFLINE else str(sm.minor)
    suffix = ", offline linking only" if sm.minor is OFFLINE else ""
    lines = [f"{sm.name} ({label} shader model {sm.major}.{minor_text}{suffix})"]
    lines.append(f"  Input registers:   {sm.input_registers}")
    lines.append(f"  Output registers:  {sm.output_registers}")
    lines.append(f"  UAV registers:     {_format_count(sm.uav_registers)}")
    lines.append(f"  Typed UAVs:        {'yes' if sm.typed_uavs else 'no'}")
    if is_valid_for_dxil(sm):
        lines.append(f"  DXIL version:      {dxil_version(sm)}")
        lines.append(f"  Validator version: {_format_validator(min_validator_version(sm))}")
    else:
        lines.append("  DXIL version:      n/a (pre-DXIL profile)")
    derivatives = is_dxil_derivatives_allowed(sm.kind, sm)
    lines.append(f"  Derivatives:       {'yes' if derivatives else 'no'}")
    lines.append("")
    return "\n".join(lines)


def run_discovery(config: DiscoveryConfig) -> None:
    if config.command == "list-profiles":
        output = format_profiles_table(gather_profile_summaries(config.kind_filter))
    elif config.command == "list-kinds":
        output = format_kinds_table()
    else:
        assert config.info_profile is not None  # validate_config guarantees this
        output = format_profile_detail(config.info_profile)
    print(output, end="")


# ===--- Main ---=== #


def main():
    try:
        config = build_config()
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err

    run_discovery(config)


if __name__ == "__main__":
    main()
