"""OpenGL FFI bindings generator for Mojo.

Resolves the Khronos gl.xml registry for a desktop OpenGL target and an
OpenGL ES 2 target, then writes one staged `gl_*` module package per API
family under <output-dir>/<package>/<api>.

Usage:
    python glgen.py --gl 4.6 --profile core --core --output-dir libs/gl/src
"""

import argparse
import io
import logging
import os
import re
import urllib.request
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, NamedTuple

logger = logging.getLogger(__name__)

REGISTRY_URL = (
    "https://raw.githubusercontent.com/KhronosGroup/OpenGL-Registry/main/xml/gl.xml"
)
CACHE_DIR_NAME = "mojo-gl-bindings-gen"
CACHE_FILE_NAME = "gl.xml"
DEFAULT_OUTPUT_DIR = Path("generated")
DEFAULT_PACKAGE = "gl"
DEFAULT_GL_VERSION = "3.1"
DEFAULT_GLES_VERSION = "2.0"

API_GL = "gl"
API_GLES2 = "gles2"
API_LABELS = {API_GL: "OpenGL", API_GLES2: "OpenGL ES"}
CORE_PROFILE = "core"


# ===--- CLI config contracts ---=== #


class GLVersion(NamedTuple):
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?$")


def parse_gl_version(raw: str) -> GLVersion:
    """Parse "major.minor" text into a GLVersion.

    A bare "major" is accepted and means minor 0.

    Raises:
        ValueError: If raw is not one or two dot-separated decimal numbers.
    """
    m = _VERSION_RE.match(raw.strip())
    if not m:
        raise ValueError(f"Malformed version: {raw!r}")
    return GLVersion(int(m.group(1)), int(m.group(2) or "0"))


@dataclass(frozen=True)
class GenerateConfig:
    gl_version: GLVersion
    gles_version: GLVersion
    profile: str
    core_profile: bool
    package: str
    output_dir: Path
    gl_xml: Path | None
    force_update: bool = False


@dataclass(frozen=True)
class DiscoveryConfig:
    gl_xml: Path | None
    force_update: bool = False


VALID_ERROR_CODES = {
    "INVALID_VERSION",
    "INVALID_PACKAGE_NAME",
    "PATH_NOT_FOUND",
    "CONFLICT_SOURCE_FLAGS",
    "CONFLICT_GENERATE_DISCOVERY",
}


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


def parse_version(raw: str, flag: str) -> GLVersion:
    try:
        return parse_gl_version(raw)
    except ValueError as err:
        raise ConfigError(
            "INVALID_VERSION",
            f"Invalid {flag} version: {raw}",
            f"Pass {flag} as major.minor, for example {flag} 3.3.",
        ) from err


def validate_package_name(name: str) -> str:
    if name.isidentifier():
        return name
    raise ConfigError(
        "INVALID_PACKAGE_NAME",
        f"Invalid package name: {name}",
        "Package names must be valid identifiers (for example gl or mygl).",
    )


def validate_path_exists(path: Path, flag: str) -> Path:
    if path.exists():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Path for {flag} does not exist: {path}",
        "Provide an existing gl.xml, or omit the flag to use the cached registry.",
    )


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate OpenGL bindings for Mojo")

    parser.add_argument("--gl", type=str, default=None, metavar="VERSION")
    parser.add_argument("--gles", type=str, default=None, metavar="VERSION")
    parser.add_argument("--profile", type=str, default=None)
    parser.add_argument("--core", action="store_true", default=False)
    parser.add_argument("-p", "--package", type=str, default=None)
    parser.add_argument("-o", "--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR)

    parser.add_argument("--gl-xml", type=Path, default=None)
    parser.add_argument("-f", "--force-update", action="store_true", default=False)
    parser.add_argument("-v", "--verbose", action="store_true", default=False)

    parser.add_argument("--list-features", action="store_true", default=False)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> GenerateConfig | DiscoveryConfig:
    has_generate_input = bool(
        args.gl or args.gles or args.profile or args.core or args.package
    )

    if args.gl_xml is not None and args.force_update:
        raise ConfigError(
            "CONFLICT_SOURCE_FLAGS",
            "Cannot combine --gl-xml with --force-update.",
            "Use --gl-xml for a local registry, or --force-update to refresh the cache.",
        )

    gl_xml = (
        validate_path_exists(args.gl_xml, "--gl-xml")
        if args.gl_xml is not None
        else None
    )

    if args.list_features:
        if has_generate_input:
            raise ConfigError(
                "CONFLICT_GENERATE_DISCOVERY",
                "Generate flags cannot be combined with --list-features.",
                "Choose either generate mode or --list-features.",
            )
        return DiscoveryConfig(gl_xml=gl_xml, force_update=bool(args.force_update))

    return GenerateConfig(
        gl_version=parse_version(args.gl or DEFAULT_GL_VERSION, "--gl"),
        gles_version=parse_version(args.gles or DEFAULT_GLES_VERSION, "--gles"),
        profile=args.profile or "",
        core_profile=bool(args.core),
        package=validate_package_name(args.package or DEFAULT_PACKAGE),
        output_dir=args.output_dir,
        gl_xml=gl_xml,
        force_update=bool(args.force_update),
    )


def build_config(argv: list[str] | None = None) -> GenerateConfig | DiscoveryConfig:
    return validate_config(parse_args(argv))


# ===--- Registry errors ---=== #


VALID_REGISTRY_ERROR_CODES = {
    "DECODE_ERROR",
    "DUPLICATE_ENUM",
    "MISSING_ENTITY",
    "UNKNOWN_TYPE",
}


class RegistryError(Exception):
    """Fatal registry decode or resolution failure.

    Attributes:
        code: One of VALID_REGISTRY_ERROR_CODES.
        message: Human-readable description.
        feature: Name of the feature block being resolved, when relevant.
        entity: Name of the offending enum, command or type token.
    """

    def __init__(
        self,
        code: str,
        message: str,
        feature: str | None = None,
        entity: str | None = None,
    ):
        if code not in VALID_REGISTRY_ERROR_CODES:
            raise ValueError(f"Unknown registry error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.feature = feature
        self.entity = entity


# ===--- Constants ---=== #

C_TO_MOJO = {
    "void": "NoneType",
    "char": "c_char",
    "signed char": "Int8",
    "unsigned char": "c_uchar",
    "short": "c_short",
    "unsigned short": "c_ushort",
    "int": "c_int",
    "unsigned int": "c_uint",
    "long": "c_long",
    "float": "c_float",
    "double": "c_double",
    "int8_t": "Int8",
    "uint8_t": "UInt8",
    "int16_t": "Int16",
    "uint16_t": "UInt16",
    "int32_t": "Int32",
    "uint32_t": "UInt32",
    "int64_t": "Int64",
    "uint64_t": "UInt64",
    "intptr_t": "Int",
    "uintptr_t": "UInt",
    "ptrdiff_t": "Int",
    "size_t": "c_size_t",
}

KHRONOS_TYPE_SUBSTITUTIONS = {
    "int8_t": "int8_t",
    "uint8_t": "uint8_t",
    "int16_t": "int16_t",
    "uint16_t": "uint16_t",
    "int32_t": "int32_t",
    "uint32_t": "uint32_t",
    "int64_t": "int64_t",
    "uint64_t": "uint64_t",
    "intptr_t": "intptr_t",
    "uintptr_t": "uintptr_t",
    "ssize_t": "intptr_t",
    "usize_t": "uintptr_t",
    "float_t": "float",
}

# Excluded from typedef output: supplied by <KHR/khrplatform.h>.
PLATFORM_HEADER_TYPES = {"khrplatform"}

TYPE_QUALIFIERS = frozenset({"const", "volatile", "struct"})

MOJO_RESERVED = {
    "ref",
    "in",
    "out",
    "var",
    "fn",
    "type",
    "mut",
    "owned",
    "inout",
    "alias",
    "comptime",
    "struct",
    "trait",
    "def",
    "return",
    "raises",
    "from",
    "import",
    "as",
    "with",
    "pass",
    "and",
    "or",
    "not",
    "is",
    "if",
    "else",
    "for",
    "while",
    "break",
    "continue",
    "self",
    "Self",
}

VOID_POINTER = "UnsafePointer[NoneType, MutAnyOrigin]"


# ===--- Data classes ---=== #


@dataclass(frozen=True)
class TypeDescriptor:
    base_name: str
    pointer_depth: int = 0
    qualifiers: frozenset[str] = frozenset()

    @property
    def is_void(self) -> bool:
        return self.base_name == "void" and self.pointer_depth == 0

    def __str__(self) -> str:
        prefix = " ".join(sorted(self.qualifiers))
        text = f"{prefix} {self.base_name}" if prefix else self.base_name
        if self.pointer_depth:
            text += " " + "*" * self.pointer_depth
        return text


class EnumEntry(NamedTuple):
    name: str
    value: str


@dataclass(frozen=True)
class CommandParam:
    name: str
    type: TypeDescriptor


@dataclass(frozen=True)
class CommandDef:
    name: str
    return_type: TypeDescriptor
    params: tuple[CommandParam, ...] = ()
    version: GLVersion | None = None


@dataclass(frozen=True)
class RemoveBlock:
    profile: str
    enums: tuple[str, ...]
    commands: tuple[str, ...]


@dataclass(frozen=True)
class FeatureBlock:
    api: str
    name: str
    version: GLVersion
    require_enums: tuple[str, ...]
    require_commands: tuple[str, ...]
    removals: tuple[RemoveBlock, ...] = ()


@dataclass(frozen=True)
class RawCatalogue:
    """Everything one decode pass extracted for a single API family.

    The pools are unordered, read-only views (MappingProxyType) and must
    only reach the emission stage through assemble_surface.

    Attributes:
        api: API family the enum and typedef pools were filtered for.
        typedefs: Normalized typedef text, in document order.
        enums: All enums (name -> literal value) visible to api.
        commands: All commands by name, with version unset.
        features: Feature blocks of every API family, in document order.
    """

    api: str
    typedefs: tuple[str, ...]
    enums: Mapping[str, str]
    commands: Mapping[str, CommandDef]
    features: tuple[FeatureBlock, ...]


@dataclass(frozen=True)
class TargetConfig:
    """Explicit, immutable target for one resolution.

    Attributes:
        api: API family to resolve, e.g. "gl" or "gles2".
        version: Highest feature version to include.
        profile: Profile scoping removals, e.g. "core". Empty for none.
        core_profile: When True, removals scoped to "core" always apply.
        package_label: Opaque package label passed through to emission.
        profile_tag: Free-form description of the build configuration.
    """

    api: str
    version: GLVersion
    profile: str = ""
    core_profile: bool = False
    package_label: str = DEFAULT_PACKAGE
    profile_tag: str = ""


@dataclass(frozen=True)
class ResolvedSets:
    enums: dict[str, str]
    commands: dict[str, CommandDef]


@dataclass(frozen=True)
class ResolvedSurface:
    api: str
    version: GLVersion
    profile_tag: str
    package_label: str
    typedefs: tuple[str, ...]
    enums: tuple[EnumEntry, ...]
    commands: tuple[CommandDef, ...]


# ===--- Type descriptors ---=== #


def mojo_param_name(name: str) -> str:
    if name in MOJO_RESERVED:
        return name + "_"
    return name


def parse_type_descriptor(base_token: str, fragment: str = "") -> TypeDescriptor:
    """Build a TypeDescriptor from a <ptype> token and its surrounding text.

    Pointer depth is the number of '*' in fragment; recognized qualifiers are
    collected from it as well. When base_token is empty the base type is
    whatever non-qualifier words the fragment holds. A declaration with no
    type word at all is untyped and becomes a void pointer.

    Args:
        base_token: Text of the <ptype> element, or "" when there is none.
        fragment: Character data around the type, e.g. "const  *".

    Returns:
        Immutable TypeDescriptor.
    """
    words = fragment.replace("*", " * ").split()
    pointer_depth = words.count("*")
    qualifiers = frozenset(w for w in words if w in TYPE_QUALIFIERS)
    base = base_token.strip()
    if not base:
        base = " ".join(w for w in words if w != "*" and w not in TYPE_QUALIFIERS)
    if not base:
        return TypeDescriptor("void", max(pointer_depth, 1), qualifiers)
    return TypeDescriptor(base, pointer_depth, qualifiers)


# ===--- Typedef normalization ---=== #

_KHRONOS_TOKEN_RE = re.compile(r"\bkhronos_(\w+)")


def normalize_typedef(text: str) -> str:
    """Rewrite khronos_* portable types to plain fixed-width type names.

    Only the namespaced token is replaced; surrounding text is preserved.
    The result never contains a khronos_ token, so normalizing it again
    returns it unchanged.

    Raises:
        RegistryError: UNKNOWN_TYPE for an unrecognized khronos_ suffix.
    """

    def _substitute(m: re.Match[str]) -> str:
        suffix = m.group(1)
        subst = KHRONOS_TYPE_SUBSTITUTIONS.get(suffix)
        if subst is None:
            raise RegistryError(
                "UNKNOWN_TYPE",
                f"Unknown portable type khronos_{suffix}",
                entity=f"khronos_{suffix}",
            )
        return subst

    return _KHRONOS_TOKEN_RE.sub(_substitute, text)


# ===--- Registry decoding ---=== #


def _type_text(elem: ET.Element) -> str:
    parts = [elem.text or ""]
    for child in elem:
        if child.tag == "apientry":
            parts.append("APIENTRY")
        else:
            parts.append(_type_text(child))
        parts.append(child.tail or "")
    return "".join(parts)


def decode_typedef(elem: ET.Element, api: str) -> str | None:
    if elem.get("name") in PLATFORM_HEADER_TYPES:
        return None
    type_api = elem.get("api")
    if type_api and type_api != api:
        return None
    text = _type_text(elem)
    if not text.strip():
        return None
    return normalize_typedef(text)


def decode_enum(elem: ET.Element, api: str, pool: dict[str, str]) -> None:
    name = elem.get("name")
    value = elem.get("value")
    if not name or value is None:
        raise RegistryError(
            "DECODE_ERROR", f"Enum declaration without name or value: {name!r}"
        )
    enum_api = elem.get("api")
    if enum_api and enum_api != api:
        return
    if name in pool:
        raise RegistryError("DUPLICATE_ENUM", f"Duplicate enum {name}", entity=name)
    pool[name] = value


def _split_declaration(elem: ET.Element) -> tuple[str, str]:
    """Return (<ptype> text, direct character data) of a proto/param element."""
    ptype = ""
    chardata = [elem.text or ""]
    for child in elem:
        if child.tag == "ptype":
            ptype = child.text or ""
        chardata.append(child.tail or "")
    return ptype, "".join(chardata)


def decode_command(elem: ET.Element) -> CommandDef:
    proto = elem.find("proto")
    name_el = proto.find("name") if proto is not None else None
    name = (name_el.text or "").strip() if name_el is not None else ""
    if proto is None or not name:
        raise RegistryError("DECODE_ERROR", "Command declaration without <proto>/<name>")

    params: list[CommandParam] = []
    for p in elem.findall("param"):
        p_name_el = p.find("name")
        p_name = (p_name_el.text or "").strip() if p_name_el is not None else ""
        if not p_name:
            raise RegistryError(
                "DECODE_ERROR", f"Parameter without <name> in command {name}"
            )
        params.append(
            CommandParam(mojo_param_name(p_name), parse_type_descriptor(*_split_declaration(p)))
        )

    return CommandDef(
        name=name,
        return_type=parse_type_descriptor(*_split_declaration(proto)),
        params=tuple(params),
    )


def _directive_names(directive: ET.Element, tag: str, feature: str) -> list[str]:
    names = []
    for entry in directive.findall(tag):
        name = entry.get("name")
        if not name:
            raise RegistryError(
                "DECODE_ERROR",
                f"<{tag}> without name in feature {feature}",
                feature=feature,
            )
        names.append(name)
    return names


def decode_feature(elem: ET.Element) -> FeatureBlock:
    name = elem.get("name", "")
    number = elem.get("number")
    if number is None:
        raise RegistryError(
            "DECODE_ERROR", f"Feature {name} has no number attribute", feature=name
        )
    try:
        version = parse_gl_version(number)
    except ValueError as err:
        raise RegistryError(
            "DECODE_ERROR",
            f"Feature {name} has malformed number {number!r}",
            feature=name,
        ) from err

    require_enums: list[str] = []
    require_commands: list[str] = []
    removals: list[RemoveBlock] = []
    for directive in elem:
        if directive.tag == "require":
            require_enums.extend(_directive_names(directive, "enum", name))
            require_commands.extend(_directive_names(directive, "command", name))
        elif directive.tag == "remove":
            removals.append(
                RemoveBlock(
                    profile=directive.get("profile", ""),
                    enums=tuple(_directive_names(directive, "enum", name)),
                    commands=tuple(_directive_names(directive, "command", name)),
                )
            )

    return FeatureBlock(
        api=elem.get("api", ""),
        name=name,
        version=version,
        require_enums=tuple(require_enums),
        require_commands=tuple(require_commands),
        removals=tuple(removals),
    )


def decode_registry(source: bytes | BinaryIO, api: str) -> RawCatalogue:
    """Decode a gl.xml document in one forward streaming pass.

    Handles <types>/<type>, <enums>/<enum>, <commands>/<command> and
    <registry>/<feature>; every other element is skipped. Elements are
    cleared once consumed so memory stays bounded by the largest block.

    Args:
        source: Raw document bytes or a binary stream.
        api: API family used to filter api-tagged enums and types.

    Returns:
        RawCatalogue with the enum/command pools, typedefs and features.

    Raises:
        RegistryError: DECODE_ERROR for malformed or unexpected structure,
            DUPLICATE_ENUM for a repeated enum name, UNKNOWN_TYPE from
            typedef normalization. Nothing is returned on error.
    """
    stream = io.BytesIO(source) if isinstance(source, bytes) else source
    typedefs: list[str] = []
    enums: dict[str, str] = {}
    commands: dict[str, CommandDef] = {}
    features: list[FeatureBlock] = []
    stack: list[str] = []

    try:
        for event, elem in ET.iterparse(stream, events=("start", "end")):
            if event == "start":
                if not stack and elem.tag != "registry":
                    raise RegistryError(
                        "DECODE_ERROR", f"Unexpected root element <{elem.tag}>"
                    )
                stack.append(elem.tag)
                continue

            stack.pop()
            parent = stack[-1] if stack else None
            handled = True
            if elem.tag == "type" and parent == "types":
                text = decode_typedef(elem, api)
                if text is not None:
                    typedefs.append(text)
            elif elem.tag == "enum" and parent == "enums":
                decode_enum(elem, api, enums)
            elif elem.tag == "command" and parent == "commands":
                command = decode_command(elem)
                commands[command.name] = command
            elif elem.tag == "feature" and parent == "registry":
                features.append(decode_feature(elem))
            else:
                handled = False

            if handled or len(stack) == 1:
                elem.clear()
    except ET.ParseError as err:
        raise RegistryError(
            "DECODE_ERROR", f"Malformed registry document: {err}"
        ) from err

    return RawCatalogue(
        api=api,
        typedefs=tuple(typedefs),
        enums=MappingProxyType(enums),
        commands=MappingProxyType(commands),
        features=tuple(features),
    )


# ===--- Feature resolution ---=== #


def _lookup(pool: Mapping, name: str, kind: str, feature: FeatureBlock):
    try:
        return pool[name]
    except KeyError:
        raise RegistryError(
            "MISSING_ENTITY",
            f"Unknown {kind} {name} in feature {feature.name or feature.version}",
            feature=feature.name,
            entity=name,
        ) from None


def removal_applies(removal: RemoveBlock, target: TargetConfig) -> bool:
    if not removal.profile or removal.profile == target.profile:
        return True
    return target.core_profile and removal.profile == CORE_PROFILE


def resolve_features(catalogue: RawCatalogue, target: TargetConfig) -> ResolvedSets:
    """Walk feature blocks in document order and build the resolved sets.

    Blocks for another API family, or with a version above target.version,
    are skipped entirely. Requires insert (and overwrite) pool entries;
    each required command is stamped with the block version, so the last
    matching require wins. Removals apply per removal_applies and silently
    ignore names not currently resolved.

    The catalogue is never mutated; stamped commands are copies.

    Args:
        catalogue: Decoded pools and features.
        target: Explicit target configuration.

    Returns:
        ResolvedSets keyed by name (unordered).

    Raises:
        RegistryError: MISSING_ENTITY when a require or remove names an
            entity absent from its pool. No partial result is returned.
    """
    enums: dict[str, str] = {}
    commands: dict[str, CommandDef] = {}

    for feature in catalogue.features:
        if feature.api != target.api:
            continue
        if feature.version > target.version:
            continue

        for name in feature.require_enums:
            enums[name] = _lookup(catalogue.enums, name, "enum", feature)
        for name in feature.require_commands:
            command = _lookup(catalogue.commands, name, "command", feature)
            commands[name] = replace(command, version=feature.version)

        for removal in feature.removals:
            if not removal_applies(removal, target):
                continue
            for name in removal.enums:
                _lookup(catalogue.enums, name, "enum", feature)
                enums.pop(name, None)
            for name in removal.commands:
                _lookup(catalogue.commands, name, "command", feature)
                commands.pop(name, None)

    return ResolvedSets(enums=enums, commands=commands)


def assemble_surface(
    catalogue: RawCatalogue,
    resolved: ResolvedSets,
    target: TargetConfig,
) -> ResolvedSurface:
    """Order resolved sets for emission.

    Enums sort by name; commands sort by introducing version, then name.
    """
    enums = tuple(EnumEntry(name, resolved.enums[name]) for name in sorted(resolved.enums))
    commands = tuple(
        sorted(resolved.commands.values(), key=lambda c: (c.version, c.name))
    )
    return ResolvedSurface(
        api=target.api,
        version=target.version,
        profile_tag=target.profile_tag,
        package_label=target.package_label,
        typedefs=catalogue.typedefs,
        enums=enums,
        commands=commands,
    )


def build_surface(catalogue: RawCatalogue, target: TargetConfig) -> ResolvedSurface:
    return assemble_surface(catalogue, resolve_features(catalogue, target), target)


def format_profile_tag(
    api: str, version: GLVersion, profile: str = "", core_profile: bool = False
) -> str:
    tag = f"{api} {version}"
    if profile:
        tag += f" {profile}"
    if core_profile:
        tag += " [core build]"
    return tag


def build_target_configs(config: GenerateConfig) -> tuple[TargetConfig, ...]:
    """Return the desktop GL target followed by the GLES2 target.

    The GLES2 target never inherits the desktop profile or core mode.
    """
    gl = TargetConfig(
        api=API_GL,
        version=config.gl_version,
        profile=config.profile,
        core_profile=config.core_profile,
        package_label=config.package,
        profile_tag=format_profile_tag(
            API_GL, config.gl_version, config.profile, config.core_profile
        ),
    )
    gles = TargetConfig(
        api=API_GLES2,
        version=config.gles_version,
        package_label=config.package,
        profile_tag=format_profile_tag(API_GLES2, config.gles_version),
    )
    return (gl, gles)


# ===--- Registry source ---=== #


@dataclass(frozen=True)
class RegistrySource:
    data: bytes
    label: str


def registry_cache_dir() -> Path:
    base = os.environ.get("XDG_CACHE_HOME")
    root = Path(base) if base else Path.home() / ".cache"
    return root / CACHE_DIR_NAME


def fetch_registry(url: str = REGISTRY_URL, timeout: float = 60.0) -> bytes:
    logger.info("Fetching OpenGL registry from %s", url)
    with urllib.request.urlopen(url, timeout=timeout) as resp:
        return resp.read()


def load_registry(
    gl_xml: Path | None,
    force_update: bool = False,
    cache_dir: Path | None = None,
) -> RegistrySource:
    """Return registry bytes from an explicit file, the cache, or a download.

    A fresh download is written to the cache. When the cache directory
    cannot be created the registry is downloaded without caching.

    Raises:
        OSError: File read or network failure (urllib.error.URLError).
    """
    if gl_xml is not None:
        return RegistrySource(gl_xml.read_bytes(), str(gl_xml))

    cache_dir = registry_cache_dir() if cache_dir is None else cache_dir
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        logger.warning("Cannot create cache directory %s: %s", cache_dir, err)
        return RegistrySource(fetch_registry(), REGISTRY_URL)

    cached = cache_dir / CACHE_FILE_NAME
    if cached.is_file() and not force_update:
        updated = datetime.fromtimestamp(cached.stat().st_mtime)
        logger.info(
            "Using cached registry file %s; last updated: %s",
            cached,
            updated.strftime("%a, %d %b %Y %H:%M:%S"),
        )
        logger.info("Use --force-update to refresh it")
        return RegistrySource(cached.read_bytes(), str(cached))

    data = fetch_registry()
    cached.write_bytes(data)
    return RegistrySource(data, REGISTRY_URL)


# ===--- Mojo type mapping ---=== #

_TYPEDEF_RE = re.compile(
    r"^typedef\s+(?P<ctype>[A-Za-z_][\w ]*?)\s*(?P<ptr>\**)\s*(?P<name>\w+)\s*;$"
)
_FUNCPTR_TYPEDEF_RE = re.compile(r"^typedef\s.*\(\s*APIENTRY\s*\*\s*(?P<name>\w+)\s*\)")
_INT_SUFFIX_RE = re.compile(r"[uUlL]+$")


def typedef_to_mojo(text: str) -> tuple[str, str] | None:
    """Map one normalized C typedef to (alias name, Mojo type).

    Returns None for text that is not a single mappable typedef
    (preprocessor blocks, forward declarations, unknown base types).
    """
    stripped = " ".join(text.split())
    m = _FUNCPTR_TYPEDEF_RE.match(stripped)
    if m:
        return m.group("name"), VOID_POINTER
    m = _TYPEDEF_RE.match(stripped)
    if not m:
        return None
    ctype = m.group("ctype").strip()
    if m.group("ptr"):
        return m.group("name"), VOID_POINTER
    if ctype.startswith("struct "):
        return None
    mojo = C_TO_MOJO.get(ctype)
    if mojo is None:
        return None
    return m.group("name"), mojo


def mojo_enum_literal(value: str) -> tuple[str, str]:
    """Return (Mojo type, literal) for a registry enum value string."""
    literal = _INT_SUFFIX_RE.sub("", value.strip())
    negative = literal.startswith("-")
    digits = literal.lstrip("-")
    number = int(digits, 16) if digits.lower().startswith("0x") else int(digits, 10)
    if negative:
        return ("Int32" if number <= 2**31 else "Int64"), literal
    if number > 0xFFFFFFFF:
        return "UInt64", literal
    return "UInt32", literal


def mojo_type_for(desc: TypeDescriptor, known_types: set[str]) -> str:
    base = desc.base_name
    if base in known_types:
        mojo_base = base
    elif base in C_TO_MOJO:
        mojo_base = C_TO_MOJO[base]
    else:
        mojo_base = "NoneType" if desc.pointer_depth > 0 else "UInt64"

    result = mojo_base
    for _ in range(desc.pointer_depth):
        result = f"UnsafePointer[{result}, MutAnyOrigin]"
    return result


def mojo_return_type(desc: TypeDescriptor, known_types: set[str]) -> str:
    if desc.is_void:
        return "None"
    return mojo_type_for(desc, known_types)


def to_snake_case(name: str) -> str:
    name = re.sub(r"(\d)D\b", r"_\1d", name)
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "_", name).lower()


def gl_to_snake(name: str) -> str:
    return mojo_param_name(to_snake_case(name.removeprefix("gl")))


# ===--- Content generators ---=== #


def generate_typedefs(typedefs: tuple[str, ...]) -> tuple[list[str], dict[str, str]]:
    """Return (lines, emitted alias map) for the gl_types module body.

    Unmappable or repeated typedefs are kept as comments so the generated
    file still documents the full registry typedef list.
    """
    aliases: dict[str, str] = {}
    body: list[str] = []
    for text in typedefs:
        mapped = typedef_to_mojo(text)
        if mapped is None or mapped[0] in aliases:
            for raw_line in text.strip().splitlines():
                body.append(f"# {raw_line.rstrip()}")
            continue
        name, mojo = mapped
        aliases[name] = mojo
        body.append(f"comptime {name} = {mojo}")

    lines = ["# ========= TYPEDEFS =========", f"# {len(aliases)} type aliases", ""]
    lines.extend(body)
    lines.append("")
    return lines, aliases


def generate_enums(enums: tuple[EnumEntry, ...]) -> list[str]:
    lines = ["# ========= ENUMS =========", f"# {len(enums)} constants", ""]
    for entry in enums:
        try:
            mojo_type, literal = mojo_enum_literal(entry.value)
        except ValueError:
            lines.append(f"# {entry.name} = {entry.value}")
            continue
        lines.append(f"comptime {entry.name}: {mojo_type} = {literal}")
    lines.append("")
    return lines


def generate_command_type(cmd: CommandDef, known_types: set[str]) -> str:
    params = ", ".join(f"{p.name}: {mojo_type_for(p.type, known_types)}" for p in cmd.params)
    ret = mojo_return_type(cmd.return_type, known_types)
    return f"comptime {cmd.name} = fn({params}) -> {ret}"


def generate_wrapper_fn(cmd: CommandDef, known_types: set[str]) -> list[str]:
    params = ", ".join(f"{p.name}: {mojo_type_for(p.type, known_types)}" for p in cmd.params)
    args = ", ".join(p.name for p in cmd.params)
    ret = mojo_return_type(cmd.return_type, known_types)
    return [
        f"fn {gl_to_snake(cmd.name)}({params}) raises -> {ret}:",
        f'    return get_fn[{cmd.name}, "{cmd.name}"]()({args})',
        "",
    ]


def generate_commands(
    api: str, commands: tuple[CommandDef, ...], known_types: set[str]
) -> list[str]:
    """Emit command type declarations grouped by introducing version, then wrappers."""
    lines = [
        "# ========= COMMANDS =========",
        f"# {len(commands)} command type declarations",
        "#",
        "# Each command is a `comptime` type alias for its C function signature.",
        "# The loader casts loaded function pointers to these types.",
    ]
    current: GLVersion | None = None
    for cmd in commands:
        if cmd.version != current:
            current = cmd.version
            lines.append("")
            lines.append(f"# --- {API_LABELS.get(api, api)} {current} ---")
        lines.append(generate_command_type(cmd, known_types))

    lines.append("")
    lines.append("# ========= WRAPPER FUNCTIONS =========")
    lines.append(f"# {len(commands)} wrapper functions")
    lines.append("")
    for cmd in commands:
        lines.extend(generate_wrapper_fn(cmd, known_types))
    return lines


def generate_loader(commands: tuple[CommandDef, ...]) -> list[str]:
    lines = [
        "# ========= LOADER INFRASTRUCTURE =========",
        "",
        "comptime LoadProc = fn(var proc: String) raises -> fn() -> None",
        "comptime FuncPtr = ImmutOpaquePointer[ImmutExternalOrigin]",
        "",
        "fn _init_empty_table() -> Dict[String, FuncPtr]:",
        "    return Dict[String, FuncPtr]()",
        'comptime func_table = _Global["gl_table", _init_empty_table]()',
        "",
        "",
        "@always_inline",
        "fn try_load_fn_ptr(name: String, load: LoadProc) raises -> FuncPtr:",
        "    var func = load(name)",
        "    return UnsafePointer(to=func).bitcast[FuncPtr]()[]",
        "",
        "",
        "@always_inline",
        "fn get_fn[fn_type: TrivialRegisterPassable, name: StaticString]() raises -> fn_type:",
        "    var ptr = func_table.get_or_create_ptr()[][name]",
        "    if not ptr:",
        '        raise Error("OpenGL function " + String(name) + " is not available")',
        "    return UnsafePointer(to=ptr).bitcast[fn_type]()[]",
        "",
        "",
        "fn init_gl(load: LoadProc) raises:",
        "    table = func_table.get_or_create_ptr()",
    ]
    for cmd in commands:
        lines.append(f'    table[]["{cmd.name}"] = try_load_fn_ptr("{cmd.name}", load)')
    lines.append("")
    return lines


# ===--- Package writer ---=== #

MODULE_TYPES: str = "gl_types"
MODULE_ENUMS: str = "gl_enums"
MODULE_LOADER: str = "gl_loader"
MODULE_COMMANDS: str = "gl_commands"

MODULE_ORDER: tuple[str, ...] = (
    MODULE_TYPES,
    MODULE_ENUMS,
    MODULE_LOADER,
    MODULE_COMMANDS,
)

LOADER_SELECTIVE_EXPORTS: tuple[str, ...] = ("LoadProc", "FuncPtr", "init_gl")


@dataclass(frozen=True)
class WriteConfig:
    """Shared generation metadata embedded in every file preamble.

    Attributes:
        api: API family, e.g. "gl".
        target_version: Resolved target version.
        profile_tag: Free-form profile/build description.
        package_label: Package label from --package.
        source_label: Where the registry came from (path or URL).
    """

    api: str
    target_version: GLVersion
    profile_tag: str
    package_label: str
    source_label: str


@dataclass(frozen=True)
class ExternalImport:
    module: str
    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError(f"Import from {self.module} names nothing")

    @property
    def statement(self) -> str:
        return f"from {self.module} import {', '.join(self.names)}"


@dataclass(frozen=True)
class SiblingImport:
    module_stem: str
    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError(f"Import from .{self.module_stem} names nothing")

    @property
    def statement(self) -> str:
        return f"from .{self.module_stem} import {', '.join(self.names)}"


@dataclass(frozen=True)
class ModuleSpec:
    """Complete input for one generated .mojo module file (not __init__.mojo).

    Attributes:
        filename: Output filename including .mojo extension.
        external_imports: Imports from non-package modules.
        sibling_imports: Named imports from sibling package modules.
        content_lines: Module body, one line per string, no trailing newlines.
    """

    filename: str
    external_imports: tuple[ExternalImport, ...]
    sibling_imports: tuple[SiblingImport, ...]
    content_lines: tuple[str, ...]


@dataclass(frozen=True)
class InitReExport:
    """One re-export line of __init__.mojo.

    A selective re-export of several names renders as a parenthesized
    block, one name per line with a trailing comma.
    """

    module_stem: str
    wildcard: bool
    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.wildcard and not self.names:
            raise ValueError(f"Selective re-export of .{self.module_stem} names nothing")

    @property
    def statement(self) -> str:
        prefix = f"from .{self.module_stem} import"
        if self.wildcard:
            return f"{prefix} *"
        if len(self.names) == 1:
            return f"{prefix} {self.names[0]}"
        block = "".join(f"\n    {name}," for name in self.names)
        return f"{prefix} ({block}\n)"


@dataclass(frozen=True)
class InitModuleSpec:
    re_exports: tuple[InitReExport, ...]


@dataclass(frozen=True)
class FileWriteResult:
    filename: str
    path: Path
    line_count: int
    byte_count: int


@dataclass(frozen=True)
class PackageWriteResult:
    output_dir: Path
    files: tuple[FileWriteResult, ...]

    @property
    def total_lines(self) -> int:
        return sum(f.line_count for f in self.files)


PACKAGE_MODULE_EXPORTS: tuple[InitReExport, ...] = (
    InitReExport(MODULE_TYPES, wildcard=True, names=()),
    InitReExport(MODULE_ENUMS, wildcard=True, names=()),
    InitReExport(MODULE_LOADER, wildcard=False, names=LOADER_SELECTIVE_EXPORTS),
    InitReExport(MODULE_COMMANDS, wildcard=True, names=()),
)

_HEADER_BORDER: str = "# x-------------------------------------------x #"


def format_file_header(config: WriteConfig) -> list[str]:
    """Return the boxed comment header for a generated module file.

    Output format:
        # x-------------------------------------------x #
        # | OpenGL 4.6 bindings for Mojo
        # | Generated by mojo-gl-bindings-gen
        # | Source: gl.xml
        # | Target: gl 4.6 core
        # | Package: gl
        # x-------------------------------------------x #

    Raises:
        ValueError: If config.source_label is empty.
    """
    if not config.source_label:
        raise ValueError("source_label must not be empty")

    label = API_LABELS.get(config.api, config.api)
    return [
        _HEADER_BORDER,
        f"# | {label} {config.target_version} bindings for Mojo",
        "# | Generated by mojo-gl-bindings-gen",
        f"# | Source: {config.source_label}",
        f"# | Target: {config.profile_tag or f'{config.api} {config.target_version}'}",
        f"# | Package: {config.package_label}",
        _HEADER_BORDER,
    ]


def _join_sections(sections: list[list[str]]) -> list[str]:
    """Concatenate the non-empty sections with one blank line between each."""
    lines: list[str] = []
    for section in sections:
        if not section:
            continue
        if lines:
            lines.append("")
        lines.extend(section)
    return lines


def format_import_block(
    external_imports: tuple[ExternalImport, ...],
    sibling_imports: tuple[SiblingImport, ...],
) -> list[str]:
    """External imports first, then sibling imports, as separate groups."""
    return _join_sections(
        [
            [imp.statement for imp in external_imports],
            [imp.statement for imp in sibling_imports],
        ]
    )


def assemble_module_source(config: WriteConfig, spec: ModuleSpec) -> str:
    """Join header, import block and body into one .mojo source string.

    Raises:
        ValueError: If spec.filename does not end with ".mojo".
    """
    if not spec.filename.endswith(".mojo"):
        raise ValueError(f"Module filename must end with .mojo: {spec.filename!r}")
    lines = _join_sections(
        [
            format_file_header(config),
            format_import_block(spec.external_imports, spec.sibling_imports),
            list(spec.content_lines),
        ]
    )
    return "\n".join(lines) + "\n"


def assemble_init_source(config: WriteConfig, init_spec: InitModuleSpec) -> str:
    label = API_LABELS.get(config.api, config.api)
    docstring = (
        f'"""{label} {config.target_version} bindings for Mojo. '
        f"Generated by mojo-gl-bindings-gen. Target: {config.profile_tag}.\"\"\""
    )
    statements = [re_export.statement for re_export in init_spec.re_exports]
    return "\n".join([docstring, "", *statements]) + "\n"


def _write_text(output_dir: Path, filename: str, content: str) -> FileWriteResult:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    file_path = output_dir / filename
    file_path.write_text(content, encoding="utf-8")
    logger.info("Generated %s", file_path)
    resolved = file_path.resolve()
    return FileWriteResult(
        filename=filename,
        path=resolved,
        line_count=content.count("\n"),
        byte_count=len(resolved.read_bytes()),
    )


def write_module(
    output_dir: Path, config: WriteConfig, spec: ModuleSpec
) -> FileWriteResult:
    return _write_text(output_dir, spec.filename, assemble_module_source(config, spec))


def write_init_module(
    output_dir: Path, config: WriteConfig, init_spec: InitModuleSpec
) -> FileWriteResult:
    return _write_text(output_dir, "__init__.mojo", assemble_init_source(config, init_spec))


def write_package(
    output_dir: Path,
    config: WriteConfig,
    module_specs: tuple[ModuleSpec, ...],
    init_spec: InitModuleSpec,
) -> PackageWriteResult:
    """Write all module files, then __init__.mojo last.

    OSError propagates immediately; earlier files are left in place.
    """
    files: list[FileWriteResult] = []
    for spec in module_specs:
        files.append(write_module(output_dir, config, spec))
    files.append(write_init_module(output_dir, config, init_spec))
    return PackageWriteResult(output_dir=Path(output_dir), files=tuple(files))


# ===--- Pipeline stages ---=== #


def build_write_config(surface: ResolvedSurface, source_label: str) -> WriteConfig:
    if not source_label:
        raise ValueError("source_label must not be empty")
    return WriteConfig(
        api=surface.api,
        target_version=surface.version,
        profile_tag=surface.profile_tag,
        package_label=surface.package_label,
        source_label=source_label,
    )


def build_module_specs(surface: ResolvedSurface) -> tuple[ModuleSpec, ...]:
    """Assemble the four ModuleSpec instances for one resolved surface, in MODULE_ORDER."""
    type_lines, aliases = generate_typedefs(surface.typedefs)
    known_types = set(aliases)
    ffi_names = sorted({mojo for mojo in aliases.values() if mojo.startswith("c_")})
    types_spec = ModuleSpec(
        filename=f"{MODULE_TYPES}.mojo",
        external_imports=(ExternalImport("ffi", tuple(ffi_names)),) if ffi_names else (),
        sibling_imports=(),
        content_lines=tuple(type_lines),
    )

    enum_spec = ModuleSpec(
        filename=f"{MODULE_ENUMS}.mojo",
        external_imports=(),
        sibling_imports=(),
        content_lines=tuple(generate_enums(surface.enums)),
    )

    loader_spec = ModuleSpec(
        filename=f"{MODULE_LOADER}.mojo",
        external_imports=(ExternalImport(module="ffi", names=("_Global",)),),
        sibling_imports=(),
        content_lines=tuple(generate_loader(surface.commands)),
    )

    referenced: set[str] = set()
    raw_c_types: set[str] = set()
    for cmd in surface.commands:
        for desc in (cmd.return_type, *(p.type for p in cmd.params)):
            if desc.base_name in known_types:
                referenced.add(desc.base_name)
            elif desc.base_name in C_TO_MOJO:
                raw_c_types.add(C_TO_MOJO[desc.base_name])
    cmd_ffi = sorted(name for name in raw_c_types if name.startswith("c_"))
    cmd_siblings: list[SiblingImport] = [SiblingImport(MODULE_LOADER, ("get_fn",))]
    if referenced:
        cmd_siblings.append(SiblingImport(MODULE_TYPES, tuple(sorted(referenced))))
    cmd_spec = ModuleSpec(
        filename=f"{MODULE_COMMANDS}.mojo",
        external_imports=(ExternalImport("ffi", tuple(cmd_ffi)),) if cmd_ffi else (),
        sibling_imports=tuple(cmd_siblings),
        content_lines=tuple(
            generate_commands(surface.api, surface.commands, known_types)
        ),
    )

    return (types_spec, enum_spec, loader_spec, cmd_spec)


def run_generate(config: GenerateConfig) -> tuple[PackageWriteResult, ...]:
    """Execute the full pipeline for both API families.

    load -> (decode -> resolve -> assemble -> write) per target -> summary.

    Raises:
        OSError: Registry not readable/downloadable or filesystem write failure.
        RegistryError: Decode or resolution failure.
    """
    source = load_registry(config.gl_xml, config.force_update)
    print(f"Parsing: {source.label}")

    surfaces: list[ResolvedSurface] = []
    results: list[PackageWriteResult] = []
    init_spec = InitModuleSpec(re_exports=PACKAGE_MODULE_EXPORTS)
    for target in build_target_configs(config):
        logger.info("Parsing %s (%s)", CACHE_FILE_NAME, API_LABELS[target.api])
        catalogue = decode_registry(source.data, target.api)
        print(
            f"  {target.api}: {len(catalogue.enums)} enums, "
            f"{len(catalogue.commands)} commands, {len(catalogue.typedefs)} typedefs, "
            f"{len(catalogue.features)} features"
        )

        surface = build_surface(catalogue, target)
        print(
            f"  Resolved {surface.profile_tag}: {len(surface.enums)} enums, "
            f"{len(surface.commands)} commands"
        )

        output_dir = config.output_dir / config.package / target.api
        result = write_package(
            output_dir,
            build_write_config(surface, source.label),
            build_module_specs(surface),
            init_spec,
        )
        print(
            f"  Written: {len(result.files)} files, "
            f"{result.total_lines} lines to {result.output_dir}"
        )
        surfaces.append(surface)
        results.append(result)

    summary = build_generation_summary(
        config.package, source.label, tuple(surfaces), tuple(results)
    )
    print_generation_summary(summary)
    return tuple(results)


# ===--- Discovery ---=== #


@dataclass(frozen=True)
class FeatureSummary:
    version: GLVersion
    name: str
    enum_count: int
    command_count: int
    removed_count: int
    removal_profiles: tuple[str, ...]


def gather_feature_summaries(catalogue: RawCatalogue) -> list[FeatureSummary]:
    """Return one FeatureSummary per feature of catalogue.api, in document order."""
    summaries: list[FeatureSummary] = []
    for feature in catalogue.features:
        if feature.api != catalogue.api:
            continue
        profiles = sorted({r.profile for r in feature.removals if r.profile})
        summaries.append(
            FeatureSummary(
                version=feature.version,
                name=feature.name,
                enum_count=len(feature.require_enums),
                command_count=len(feature.require_commands),
                removed_count=sum(
                    len(r.enums) + len(r.commands) for r in feature.removals
                ),
                removal_profiles=tuple(profiles),
            )
        )
    return summaries


def format_features_table(api: str, summaries: list[FeatureSummary]) -> str:
    """Return the --list-features section for one API family.

    Output format:

        gl features in gl.xml:

          1.0    GL_VERSION_1_0          +12 enums    +306 commands
          3.2    GL_VERSION_3_2          +40 enums    +19 commands    -571 removed (core)
    """
    lines = [f"{api} features in gl.xml:", ""]
    if not summaries:
        lines.append("  (none)")
    for row in summaries:
        enum_col = f"+{row.enum_count} enums"
        cmd_col = f"+{row.command_count} commands"
        line = f"  {str(row.version):<6} {row.name:<24} {enum_col:<12} {cmd_col:<15}"
        if row.removed_count:
            profiles = ", ".join(row.removal_profiles) or "all profiles"
            line += f" -{row.removed_count} removed ({profiles})"
        lines.append(line.rstrip())
    lines.append("")
    return "\n".join(lines)


def run_discovery(config: DiscoveryConfig) -> None:
    source = load_registry(config.gl_xml, config.force_update)
    for api in (API_GL, API_GLES2):
        catalogue = decode_registry(source.data, api)
        print(format_features_table(api, gather_feature_summaries(catalogue)), end="")


# ===--- Summary report ---=== #


@dataclass(frozen=True)
class TargetCounts:
    label: str
    typedefs: int
    enums: int
    commands: int


@dataclass(frozen=True)
class GenerationSummary:
    """Immutable data for the post-generation console report.

    Attributes:
        package_label: Package label from --package.
        source_label: Registry source (path or URL).
        targets: One TargetCounts per resolved API family, in generation order.
        packages: Write results, parallel to targets.
    """

    package_label: str
    source_label: str
    targets: tuple[TargetCounts, ...]
    packages: tuple[PackageWriteResult, ...]


def build_generation_summary(
    package_label: str,
    source_label: str,
    surfaces: tuple[ResolvedSurface, ...],
    packages: tuple[PackageWriteResult, ...],
) -> GenerationSummary:
    if len(surfaces) != len(packages):
        raise ValueError("surfaces and packages must have the same length")
    targets = tuple(
        TargetCounts(
            label=s.profile_tag or f"{s.api} {s.version}",
            typedefs=len(s.typedefs),
            enums=len(s.enums),
            commands=len(s.commands),
        )
        for s in surfaces
    )
    return GenerationSummary(
        package_label=package_label,
        source_label=source_label,
        targets=targets,
        packages=packages,
    )


def format_generation_summary(summary: GenerationSummary) -> str:
    lines: list[str] = [f"OpenGL bindings generated ({summary.package_label}):", ""]
    lines.append(f"  Source:     {summary.source_label}")
    lines.append("")
    lines.append("  Targets:")
    for t in summary.targets:
        lines.append(
            f"    {t.label:<28}{t.typedefs:>6} typedefs{t.enums:>7} enums"
            f"{t.commands:>6} commands"
        )

    lines.append("")
    lines.append("  Files written:")
    for package in summary.packages:
        for f in package.files:
            name = f"{package.output_dir.name}/{f.filename}"
            lines.append(f"    {name:<28} {f.line_count:>6,} lines")

    total_lines = sum(p.total_lines for p in summary.packages)
    file_count = sum(len(p.files) for p in summary.packages)
    lines.append("")
    lines.append(f"  Total: {total_lines:,} lines across {file_count} files")
    lines.append("")
    for package in summary.packages:
        lines.append(
            f"  Verify: mojo package {package.output_dir} "
            f"-o /tmp/{package.output_dir.name}.mojopkg"
        )
    lines.append("")
    return "\n".join(lines)


def print_generation_summary(summary: GenerationSummary) -> None:
    print(format_generation_summary(summary), end="")


# ===--- Main generation ---=== #


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    try:
        config = validate_config(args)
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err

    try:
        if isinstance(config, DiscoveryConfig):
            run_discovery(config)
        else:
            run_generate(config)
    except RegistryError as err:
        print(f"Registry error [{err.code}]: {err.message}")
        raise SystemExit(1) from err
    except OSError as err:
        print(f"Error: {err}")
        raise SystemExit(1) from err


if __name__ == "__main__":
    main()
