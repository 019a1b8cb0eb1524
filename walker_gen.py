"""System view attribute walker generator.

Generates SystemViewRowAttributeWalker implementations for system view
classes described in a static view registry (views.xml). Produces one
`<View>Walker.java` per configured view under the walker package.

Usage:
    python walker_gen.py --src-root modules/core/src/main/java
"""

import os
import argparse
import re
import stat
import tempfile
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

TOOL_ROOT = Path(__file__).resolve().parent
DEFAULT_VIEWS_XML = TOOL_ROOT / "views.xml"
DEFAULT_SRC_ROOT = Path("modules") / "core" / "src" / "main" / "java"


# ===--- CLI config contracts ---=== #


VIEW_PACKAGE = "org.apache.ignite.spi.systemview.view"

DEFAULT_VIEW_TYPES: tuple[str, ...] = (
    f"{VIEW_PACKAGE}.CacheGroupView",
    f"{VIEW_PACKAGE}.CacheView",
    f"{VIEW_PACKAGE}.ServiceView",
    f"{VIEW_PACKAGE}.ComputeTaskView",
    f"{VIEW_PACKAGE}.ClientConnectionView",
)
"""Views a generation run processes, in processing order.

Build-time configuration: no flag or environment variable alters it."""


@dataclass(frozen=True)
class GenerateConfig:
    views_xml: Path
    src_root: Path
    check: bool = False
    view_types: tuple[str, ...] = DEFAULT_VIEW_TYPES


@dataclass(frozen=True)
class DiscoveryConfig:
    command: str
    info_view: str | None
    views_xml: Path


VALID_ERROR_CODES = {
    "INVALID_VIEW_NAME",
    "CONFLICT_CHECK_DISCOVERY",
    "PATH_NOT_FOUND",
}
_JAVA_IDENT = r"[A-Za-z_$][A-Za-z0-9_$]*"
_JAVA_IDENT_RE = re.compile(rf"^{_JAVA_IDENT}$")
_VIEW_NAME_RE = re.compile(rf"^{_JAVA_IDENT}(\.{_JAVA_IDENT})*$")


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


def validate_view_name(name: str) -> str:
    if _VIEW_NAME_RE.match(name):
        return name
    raise ConfigError(
        "INVALID_VIEW_NAME",
        f"Invalid view name: {name}",
        "Pass a Java class name, either simple (CacheView) or fully "
        "qualified (org.apache.ignite.spi.systemview.view.CacheView).",
    )


def validate_path_exists(
    path: Path | None, flag: str, suggestion: str | None = None
) -> Path:
    if path is None:
        raise ConfigError(
            "PATH_NOT_FOUND",
            f"{flag} is required: no path provided.",
            suggestion or f"Pass the path explicitly: {flag} /path/to/resource",
        )
    if path.exists():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Path for {flag} does not exist: {path}",
        suggestion or "Provide an existing path for this flag.",
    )


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate system view attribute walkers"
    )

    parser.add_argument("--views-xml", type=Path, default=DEFAULT_VIEWS_XML)
    parser.add_argument("--src-root", type=Path, default=DEFAULT_SRC_ROOT)
    parser.add_argument("--check", action="store_true", default=False)

    discovery_group = parser.add_mutually_exclusive_group()
    discovery_group.add_argument("--list-views", action="store_true", default=False)
    discovery_group.add_argument("--info", type=str, default=None)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> GenerateConfig | DiscoveryConfig:
    has_discovery_command = bool(args.list_views or args.info is not None)

    if args.check and has_discovery_command:
        raise ConfigError(
            "CONFLICT_CHECK_DISCOVERY",
            "--check cannot be combined with discovery flags.",
            "Run --check on its own, or one of --list-views / --info.",
        )

    views_xml = validate_path_exists(
        args.views_xml,
        "--views-xml",
        "Pass the view registry explicitly: --views-xml /path/to/views.xml",
    )

    if has_discovery_command:
        command = "list-views" if args.list_views else "info"
        info_view = validate_view_name(args.info) if args.info is not None else None
        return DiscoveryConfig(
            command=command,
            info_view=info_view,
            views_xml=views_xml,
        )

    if args.check:
        src_root = validate_path_exists(
            args.src_root,
            "--src-root",
            "--check compares against existing walkers; point --src-root at "
            "the source root that holds them.",
        )
    else:
        src_root = args.src_root

    return GenerateConfig(views_xml=views_xml, src_root=src_root, check=args.check)


def build_config(argv: list[str] | None = None) -> GenerateConfig | DiscoveryConfig:
    return validate_config(parse_args(argv))


# ===--- Constants ---=== #

WALKER_PACKAGE = "org.apache.ignite.internal.managers.systemview.walker"
WALKER_INTERFACE = "org.apache.ignite.spi.systemview.view.SystemViewRowAttributeWalker"
WALKER_SUFFIX = "Walker"
GENERATOR_NAME = "walker_gen"

# Universal object methods, never exposed as attributes.
EXCLUDED_ACCESSORS = frozenset({"equals", "hashCode", "toString", "getClass"})

VOID = "void"
REFERENCE = "reference"

PRIMITIVE_ACCEPT = {
    "boolean": "acceptBoolean",
    "char": "acceptChar",
    "byte": "acceptByte",
    "short": "acceptShort",
    "int": "acceptInt",
    "long": "acceptLong",
    "float": "acceptFloat",
    "double": "acceptDouble",
}
GENERIC_ACCEPT = "accept"

TAB = "    "

LICENSE_HEADER: tuple[str, ...] = (
    "/*",
    " * Licensed to the Apache Software Foundation (ASF) under one or more",
    " * contributor license agreements.  See the NOTICE file distributed with",
    " * this work for additional information regarding copyright ownership.",
    " * The ASF licenses this file to You under the Apache License, Version 2.0",
    ' * (the "License"); you may not use this file except in compliance with',
    " * the License.  You may obtain a copy of the License at",
    " *",
    " *      http://www.apache.org/licenses/LICENSE-2.0",
    " *",
    " * Unless required by applicable law or agreed to in writing, software",
    ' * distributed under the License is distributed on an "AS IS" BASIS,',
    " * WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.",
    " * See the License for the specific language governing permissions and",
    " * limitations under the License.",
    " */",
)


# ===--- Data classes ---=== #


@dataclass(frozen=True)
class AccessorDecl:
    name: str
    type_name: str
    order: int | None = None
    is_static: bool = False


@dataclass(frozen=True)
class ViewType:
    name: str
    accessors: tuple[AccessorDecl, ...]

    @property
    def simple_name(self) -> str:
        return simple_class_name(self.name)

    @property
    def package(self) -> str:
        return self.name.rpartition(".")[0]


@dataclass(frozen=True)
class TypeRef:
    """Dispatch classification of a declared Java type.

    Attributes:
        name: Declared type as written in the registry, e.g. "int",
            "java.lang.Class<?>", "byte[]", "org.x.Outer$Inner".
        kind: One of the PRIMITIVE_ACCEPT keys, or REFERENCE.
    """

    name: str
    kind: str

    @property
    def is_primitive(self) -> bool:
        return self.kind != REFERENCE

    @property
    def erasure(self) -> str:
        return strip_type_arguments(self.name)

    @property
    def class_literal(self) -> str:
        """Source text before `.class`, e.g. "String", "Map", "byte[]"."""
        component, dims = split_array_type(self.erasure)
        return simple_class_name(component) + "[]" * dims

    @property
    def import_name(self) -> str | None:
        """Canonical import path, or None when no import is needed.

        Nested classes are always imported, java.lang ones included, since
        class_literal names them by their innermost simple name.
        """
        component, _dims = split_array_type(self.erasure)
        if component in PRIMITIVE_ACCEPT:
            return None
        package, _, outer = component.rpartition(".")
        if not package:
            return None
        if package == "java.lang" and "$" not in outer:
            return None
        return component.replace("$", ".")

    @property
    def accept_method(self) -> str:
        return PRIMITIVE_ACCEPT.get(self.kind, GENERIC_ACCEPT)


@dataclass(frozen=True)
class Attribute:
    name: str
    type: TypeRef
    index: int
    order: int | None = None


# ===--- Type names ---=== #


def strip_type_arguments(type_name: str) -> str:
    """Drop every `<...>` segment: "java.util.Map<K, List<V>>" -> "java.util.Map"."""
    out: list[str] = []
    depth = 0
    for ch in type_name:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif depth == 0:
            out.append(ch)
    return "".join(out).replace(" ", "")


def split_array_type(type_name: str) -> tuple[str, int]:
    dims = 0
    while type_name.endswith("[]"):
        type_name = type_name[:-2]
        dims += 1
    return type_name, dims


def simple_class_name(type_name: str) -> str:
    return type_name.rpartition(".")[2].rpartition("$")[2]


def classify_type(type_name: str) -> TypeRef:
    kind = type_name if type_name in PRIMITIVE_ACCEPT else REFERENCE
    return TypeRef(name=type_name, kind=kind)


# ===--- Registry parsing ---=== #


class RegistryError(ValueError):
    """View metadata in the registry cannot be introspected."""


class DuplicateOrderError(RegistryError):
    def __init__(self, view_name: str, order: int, accessors: tuple[str, ...]):
        super().__init__(
            f"{view_name}: order {order} is declared by more than one accessor: "
            f"{', '.join(accessors)}"
        )
        self.view_name = view_name
        self.order = order
        self.accessors = accessors


def extract_registry_version(root: ET.Element) -> str:
    return root.get("version") or "unknown"


def index_views(root: ET.Element) -> dict[str, ET.Element]:
    """Map fully qualified view class name -> <view> element, in file order."""
    views: dict[str, ET.Element] = {}
    for view_el in root.findall("view"):
        name = view_el.get("class")
        if not name:
            raise RegistryError("<view> element without a 'class' attribute")
        if name in views:
            raise RegistryError(f"View {name} is declared more than once")
        views[name] = view_el
    return views


def view_name_candidates(views: dict[str, ET.Element], name: str) -> list[str]:
    """Registry keys a fully qualified or simple view name may refer to."""
    if name in views:
        return [name]
    return sorted(key for key in views if simple_class_name(key) == name)


def parse_accessor(view_name: str, el: ET.Element) -> AccessorDecl:
    name = el.get("name")
    type_name = el.get("type")
    if not name or not type_name:
        raise RegistryError(
            f"{view_name}: <accessor> requires both 'name' and 'type' attributes"
        )
    if not _JAVA_IDENT_RE.match(name):
        raise RegistryError(f"{view_name}: invalid accessor name {name!r}")

    raw_order = el.get("order")
    order: int | None = None
    if raw_order is not None:
        try:
            order = int(raw_order)
        except ValueError:
            raise RegistryError(
                f"{view_name}.{name}: order must be an integer, got {raw_order!r}"
            ) from None

    raw_static = el.get("static", "false")
    if raw_static not in ("true", "false"):
        raise RegistryError(
            f"{view_name}.{name}: static must be 'true' or 'false', got {raw_static!r}"
        )

    return AccessorDecl(
        name=name,
        type_name=type_name.strip(),
        order=order,
        is_static=raw_static == "true",
    )


def parse_view(view_el: ET.Element) -> ViewType:
    name = view_el.get("class") or ""
    if not _VIEW_NAME_RE.match(name):
        raise RegistryError(f"Invalid view class name {name!r}")

    accessors: list[AccessorDecl] = []
    seen: set[str] = set()
    for accessor_el in view_el.findall("accessor"):
        accessor = parse_accessor(name, accessor_el)
        if accessor.name in seen:
            raise RegistryError(f"{name}: accessor {accessor.name} declared twice")
        seen.add(accessor.name)
        accessors.append(accessor)

    return ViewType(name=name, accessors=tuple(accessors))


# ===--- Attribute enumeration ---=== #


def is_attribute_accessor(accessor: AccessorDecl) -> bool:
    if accessor.is_static:
        return False
    if accessor.name in EXCLUDED_ACCESSORS:
        return False
    return accessor.type_name != VOID


def enumerate_attributes(view: ViewType) -> tuple[Attribute, ...]:
    """Return the view's attributes in walker index order.

    Accessors carrying an explicit order come first, ascending by order
    value; the rest follow ascending by name. Indices are 0..n-1.

    Raises:
        DuplicateOrderError: Two eligible accessors share an order value.
    """
    ordered: list[AccessorDecl] = []
    not_ordered: list[AccessorDecl] = []
    for accessor in view.accessors:
        if not is_attribute_accessor(accessor):
            continue
        if accessor.order is not None:
            ordered.append(accessor)
        else:
            not_ordered.append(accessor)

    by_order: dict[int, list[str]] = {}
    for accessor in ordered:
        by_order.setdefault(accessor.order, []).append(accessor.name)
    for order, names in sorted(by_order.items()):
        if len(names) > 1:
            raise DuplicateOrderError(view.name, order, tuple(names))

    ordered.sort(key=lambda a: a.order)
    not_ordered.sort(key=lambda a: a.name)

    return tuple(
        Attribute(
            name=accessor.name,
            type=classify_type(accessor.type_name),
            index=index,
            order=accessor.order,
        )
        for index, accessor in enumerate(ordered + not_ordered)
    )


# ===--- Walker emission ---=== #


def walker_class_name(view: ViewType) -> str:
    return view.simple_name + WALKER_SUFFIX


def walker_filename(view: ViewType) -> str:
    return walker_class_name(view) + ".java"


def walker_path(src_root: Path, view: ViewType) -> Path:
    return Path(src_root).joinpath(*WALKER_PACKAGE.split(".")) / walker_filename(view)


def collect_imports(view: ViewType, attributes: tuple[Attribute, ...]) -> list[str]:
    """Return sorted, unique import lines for a walker source file."""
    names = {WALKER_INTERFACE, view.name.replace("$", ".")}
    for attr in attributes:
        import_name = attr.type.import_name
        if import_name is not None:
            names.add(import_name)
    return sorted(f"import {name};" for name in names)


def format_schema_visit(attr: Attribute) -> str:
    return (
        f'{TAB}{TAB}v.accept({attr.index}, "{attr.name}", '
        f"{attr.type.class_literal}.class);"
    )


def format_value_visit(attr: Attribute) -> str:
    value = f"row.{attr.name}()"
    if attr.type.is_primitive:
        return (
            f'{TAB}{TAB}v.{attr.type.accept_method}({attr.index}, "{attr.name}", '
            f"{value});"
        )
    return (
        f'{TAB}{TAB}v.accept({attr.index}, "{attr.name}", '
        f"{attr.type.class_literal}.class, {value});"
    )


def emit_walker(view: ViewType, attributes: tuple[Attribute, ...]) -> str:
    """Render the complete Java source of the view's attribute walker.

    File structure:
        <license header>
                                    <- blank line
        package <WALKER_PACKAGE>;
                                    <- blank line
        <sorted imports>
                                    <- blank line
        <class javadoc>
        public class <View>Walker implements SystemViewRowAttributeWalker<<View>> {
            visitAll(AttributeVisitor)                      <- schema only
            visitAll(<View>, AttributeWithValueVisitor)     <- with values
            count()
        }

    Output depends only on the arguments, so repeated runs are byte-identical.

    Args:
        view: View the walker is generated for.
        attributes: Output of enumerate_attributes(view).

    Returns:
        Java source string, LF line endings, single trailing newline.
    """
    simple = view.simple_name

    lines: list[str] = list(LICENSE_HEADER)
    lines.append("")
    lines.append(f"package {WALKER_PACKAGE};")
    lines.append("")
    lines.extend(collect_imports(view, attributes))
    lines.append("")
    lines.extend(
        [
            "/**",
            f" * Generated by {{@code {GENERATOR_NAME}}}.",
            f" * {{@link {simple}}} attributes walker.",
            " *",
            f" * @see {simple}",
            " */",
            f"public class {walker_class_name(view)} implements "
            f"SystemViewRowAttributeWalker<{simple}> {{",
        ]
    )

    lines.append(f"{TAB}/** {{@inheritDoc}} */")
    lines.append(f"{TAB}@Override public void visitAll(AttributeVisitor v) {{")
    lines.extend(format_schema_visit(attr) for attr in attributes)
    lines.append(f"{TAB}}}")
    lines.append("")

    lines.append(f"{TAB}/** {{@inheritDoc}} */")
    lines.append(
        f"{TAB}@Override public void visitAll({simple} row, "
        f"AttributeWithValueVisitor v) {{"
    )
    lines.extend(format_value_visit(attr) for attr in attributes)
    lines.append(f"{TAB}}}")
    lines.append("")

    lines.append(f"{TAB}/** {{@inheritDoc}} */")
    lines.append(f"{TAB}@Override public int count() {{")
    lines.append(f"{TAB}{TAB}return {len(attributes)};")
    lines.append(f"{TAB}}}")
    lines.append("}")

    return "\n".join(lines) + "\n"


def generate_walker(view: ViewType) -> tuple[tuple[Attribute, ...], str]:
    attributes = enumerate_attributes(view)
    return attributes, emit_walker(view, attributes)


# ===--- Writer ---=== #

STATUS_WRITTEN = "written"
STATUS_UNCHANGED = "unchanged"
STATUS_STALE = "stale"
STATUS_MISSING = "missing"


@dataclass(frozen=True)
class FileWriteResult:
    """Outcome for one walker file.

    Attributes:
        view_name: Fully qualified view class name.
        filename: Walker filename, e.g. "CacheViewWalker.java".
        path: Absolute path of the walker file.
        attribute_count: Number of attributes the walker visits.
        line_count: Newline characters in the rendered content.
        byte_count: UTF-8 bytes of the rendered content.
        status: STATUS_WRITTEN or STATUS_UNCHANGED in generate mode,
            STATUS_UNCHANGED, STATUS_STALE or STATUS_MISSING in check mode.
    """

    view_name: str
    filename: str
    path: Path
    attribute_count: int
    line_count: int
    byte_count: int
    status: str


def target_mode(path: Path) -> int:
    """Permission bits a rewritten walker should carry.

    An existing file keeps its mode. A new file gets 0o666 minus the umask,
    as open() would give it.
    """
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, content: str) -> None:
    """Replace path with content, never leaving a truncated file behind.

    Content goes to a temporary sibling first and is moved over path with
    os.replace. The temporary file gets the mode from target_mode(), since
    tempfile creates it owner-only. It is removed if anything fails.

    Raises:
        OSError: Propagated from directory creation, write or rename.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_name = ""
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="\n",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(content)
        os.chmod(tmp_name, target_mode(path))
        os.replace(tmp_name, path)
        tmp_name = ""
    finally:
        if tmp_name:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass


def read_existing(path: Path) -> bytes | None:
    """Raw bytes of the walker on disk, or None when it does not exist."""
    if not path.exists():
        return None
    return path.read_bytes()


def write_walker(
    src_root: Path,
    view: ViewType,
    attributes: tuple[Attribute, ...],
    content: str,
    check: bool = False,
) -> FileWriteResult:
    """Write (or, with check=True, only compare) one walker file.

    An existing file with identical bytes is left untouched and reported
    as unchanged. Any other existing file is stale, whatever its encoding.

    Raises:
        OSError: Propagated from reading or writing the walker file.
    """
    path = walker_path(src_root, view)
    existing = read_existing(path)
    encoded = content.encode("utf-8")

    if existing == encoded:
        status = STATUS_UNCHANGED
    elif check:
        status = STATUS_MISSING if existing is None else STATUS_STALE
    else:
        write_atomic(path, content)
        status = STATUS_WRITTEN

    return FileWriteResult(
        view_name=view.name,
        filename=path.name,
        path=path.resolve(),
        attribute_count=len(attributes),
        line_count=content.count("\n"),
        byte_count=len(encoded),
        status=status,
    )


# ===--- Pipeline ---=== #


class GenerationError(RuntimeError):
    """A view failed at one pipeline step. The run stops here."""

    def __init__(self, view_name: str, step: str, message: str):
        super().__init__(f"{view_name}: {step} failed: {message}")
        self.view_name = view_name
        self.step = step
        self.message = message


@dataclass(frozen=True)
class GenerationResult:
    source_label: str
    output_dir: Path
    files: tuple[FileWriteResult, ...]
    check: bool = False

    @property
    def total_attributes(self) -> int:
        return sum(f.attribute_count for f in self.files)

    @property
    def out_of_date(self) -> tuple[FileWriteResult, ...]:
        return tuple(
            f for f in self.files if f.status in (STATUS_STALE, STATUS_MISSING)
        )


def load_registry(views_xml: Path) -> tuple[ET.Element, dict[str, ET.Element]]:
    """Parse the registry file and index its views.

    Raises:
        OSError: Registry file not readable.
        ET.ParseError: Malformed XML.
        RegistryError: Missing or duplicate view class names.
    """
    root = ET.parse(views_xml).getroot()
    return root, index_views(root)


def process_view(
    views: dict[str, ET.Element], view_name: str, src_root: Path, check: bool
) -> FileWriteResult:
    """Run lookup -> parse -> enumerate -> emit -> write for one view.

    Raises:
        GenerationError: Naming the view and the failing step.
    """
    step = "lookup"
    try:
        view_el = views.get(view_name)
        if view_el is None:
            raise RegistryError("view is not declared in the registry")
        step = "parse"
        view = parse_view(view_el)
        step = "enumerate"
        attributes = enumerate_attributes(view)
        step = "emit"
        content = emit_walker(view, attributes)
        step = "write"
        return write_walker(src_root, view, attributes, content, check=check)
    except (RegistryError, OSError) as err:
        raise GenerationError(view_name, step, str(err)) from err


def run_generate(config: GenerateConfig) -> GenerationResult:
    """Generate (or check) the walker of every configured view, in order.

    Args:
        config: Validated GenerateConfig from build_config.

    Returns:
        GenerationResult with one FileWriteResult per configured view.

    Raises:
        OSError: Registry file not readable.
        ET.ParseError: Malformed registry XML.
        RegistryError: Registry-level problem (duplicate or unnamed views).
        GenerationError: First view that failed, with the failing step.
    """
    print(f"Parsing: {config.views_xml}")
    root, views = load_registry(config.views_xml)
    registry_version = extract_registry_version(root)
    print(f"  Registry: {len(views)} views, version {registry_version}")

    files: list[FileWriteResult] = []
    for view_name in config.view_types:
        result = process_view(views, view_name, config.src_root, config.check)
        print(
            f"  {simple_class_name(view_name)}: {result.attribute_count} attributes"
            f" -> {result.filename} ({result.status})"
        )
        files.append(result)

    output_dir = Path(config.src_root).joinpath(*WALKER_PACKAGE.split("."))
    generation = GenerationResult(
        source_label=f"{Path(config.views_xml).name} {registry_version}",
        output_dir=output_dir,
        files=tuple(files),
        check=config.check,
    )
    print_generation_summary(build_generation_summary(generation))
    return generation


# ===--- Discovery ---=== #


@dataclass(frozen=True)
class ViewSummary:
    name: str
    attribute_count: int
    configured: bool


def gather_view_summaries(
    views: dict[str, ET.Element],
    configured: tuple[str, ...] = DEFAULT_VIEW_TYPES,
) -> list[ViewSummary]:
    """One row per registry view, sorted by simple name.

    Raises:
        RegistryError: A view's metadata is malformed or its order
            values collide.
    """
    summaries = [
        ViewSummary(
            name=name,
            attribute_count=len(enumerate_attributes(parse_view(view_el))),
            configured=name in configured,
        )
        for name, view_el in views.items()
    ]
    summaries.sort(key=lambda s: (simple_class_name(s.name), s.name))
    return summaries


def format_views_table(summaries: list[ViewSummary], registry_version: str) -> str:
    """Return the complete --list-views output.

    Output format:

        System views in views.xml 2.8.0:

          CacheGroupView            20 attributes   configured
          SqlSchemaView              2 attributes
    """
    lines = [f"System views in views.xml {registry_version}:", ""]
    for row in summaries:
        name = simple_class_name(row.name)
        marker = "configured" if row.configured else ""
        lines.append(
            f"  {name:<24} {row.attribute_count:>4} attributes   {marker}".rstrip()
        )
    lines.append("")
    lines.append(
        f"  {len(summaries)} views, "
        f"{sum(1 for s in summaries if s.configured)} configured for generation"
    )
    lines.append("")
    return "\n".join(lines)


def format_view_detail(view: ViewType, attributes: tuple[Attribute, ...]) -> str:
    """Return the --info output: the walker's attribute table for one view."""
    lines = [
        f"{view.name}",
        "",
        f"  Walker:     {WALKER_PACKAGE}.{walker_class_name(view)}",
        f"  Attributes: {len(attributes)}",
        "",
    ]
    if attributes:
        lines.append(f"  {'#':>3}  {'Name':<28} {'Type':<32} {'Dispatch':<14} Order")
        for attr in attributes:
            order = "-" if attr.order is None else str(attr.order)
            lines.append(
                f"  {attr.index:>3}  {attr.name:<28} {attr.type.name:<32} "
                f"{attr.type.accept_method:<14} {order}"
            )
        lines.append("")
    return "\n".join(lines)


def run_discovery(config: DiscoveryConfig) -> None:
    """Execute the discovery command specified in config.

    Raises:
        SystemExit(1): --info names a view that is not in the registry, or a
            simple name shared by several views.
        RegistryError: Propagated from parsing malformed view metadata.
    """
    import sys

    root, views = load_registry(config.views_xml)
    registry_version = extract_registry_version(root)

    if config.command == "list-views":
        summaries = gather_view_summaries(views)
        print(format_views_table(summaries, registry_version), end="")

    elif config.command == "info":
        assert config.info_view is not None
        matches = view_name_candidates(views, config.info_view)
        if not matches:
            print(
                f"Error: view '{config.info_view}' not found in views.xml "
                f"{registry_version}",
                file=sys.stderr,
            )
            raise SystemExit(1)
        if len(matches) > 1:
            print(
                f"Error: view '{config.info_view}' is ambiguous in views.xml "
                f"{registry_version}; use one of: {', '.join(matches)}",
                file=sys.stderr,
            )
            raise SystemExit(1)
        view = parse_view(views[matches[0]])
        print(format_view_detail(view, enumerate_attributes(view)), end="")


# ===--- Summary report ---=== #


@dataclass(frozen=True)
class GenerationSummary:
    """Immutable data for the post-run console report.

    Attributes:
        heading: First line of the report.
        source_label: Registry source string, e.g. "views.xml 2.8.0".
        output_dir: Walker package directory as a string.
        files: Per-walker results, in processing order.
        check: True for a --check run.
    """

    heading: str
    source_label: str
    output_dir: str
    files: tuple[FileWriteResult, ...]
    check: bool


def build_generation_summary(result: GenerationResult) -> GenerationSummary:
    heading = (
        "System view walkers checked:"
        if result.check
        else "System view walkers generated:"
    )
    return GenerationSummary(
        heading=heading,
        source_label=result.source_label,
        output_dir=str(result.output_dir),
        files=result.files,
        check=result.check,
    )


def format_generation_summary(summary: GenerationSummary) -> str:
    lines: list[str] = [summary.heading, ""]
    lines.append(f"  Source:     {summary.source_label}")
    lines.append(f"  Output:     {summary.output_dir}")
    lines.append("")
    lines.append("  Walkers:")
    for file_result in summary.files:
        lines.append(
            f"    {file_result.filename:<32} {file_result.attribute_count:>4} attributes"
            f"  {file_result.line_count:>5,} lines  {file_result.status}"
        )

    counts: dict[str, int] = {}
    for file_result in summary.files:
        counts[file_result.status] = counts.get(file_result.status, 0) + 1
    breakdown = ", ".join(f"{n} {status}" for status, n in sorted(counts.items()))
    total_attributes = sum(f.attribute_count for f in summary.files)

    lines.append("")
    total = f"  Total: {len(summary.files)} walkers, {total_attributes} attributes"
    lines.append(f"{total} ({breakdown})" if breakdown else total)
    lines.append("")
    return "\n".join(lines)


def print_generation_summary(summary: GenerationSummary) -> None:
    print(format_generation_summary(summary), end="")


# ===--- Main generation ---=== #


def main():
    try:
        config = build_config()
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err

    try:
        if isinstance(config, DiscoveryConfig):
            run_discovery(config)
            return
        result = run_generate(config)
    except (GenerationError, RegistryError, OSError, ET.ParseError) as err:
        print(f"Error: {err}")
        raise SystemExit(1) from err

    if result.out_of_date:
        stale = ", ".join(f.filename for f in result.out_of_date)
        print(f"Out of date: {stale} (run walker_gen.py without --check)")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
