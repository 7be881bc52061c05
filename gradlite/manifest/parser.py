"""Deterministic parser for Kotlin DSL module manifests (`build.gradle.kts`).

Only the declarative subset a module manifest uses is understood: plugins,
group/version, repositories, dependencies and the test task. The text is never
evaluated, so parsing the same text always yields the same descriptor.
"""

from __future__ import annotations

import logging
import re

from gradlite.errors import MalformedManifest
from gradlite.manifest.descriptor import (
    Coordinate,
    Dependency,
    ExcludeRule,
    KOTLIN_GROUP,
    ModuleCoordinate,
    ModuleDescriptor,
    PluginDeclaration,
    ProjectCoordinate,
    RepositoryDeclaration,
    TestConfiguration,
)
from gradlite.manifest.lexer import (
    Statement,
    has_template,
    split_args,
    split_block,
    split_call,
    split_statements,
    string_literal,
    strip_comments,
)
from gradlite.testing.registry import platform_for_call

_LOG = logging.getLogger(__name__)

_ASSIGN_RE = re.compile(r"^([A-Za-z_][\w.]*)\s*=\s*(.+)$", re.DOTALL)
_IDENT_RE = re.compile(r"^[A-Za-z_][\w]*$")
_BACKTICK_RE = re.compile(r"^`([^`]+)`$")
_PLUGIN_TAIL_RE = re.compile(r'^(?:version\s+("(?:[^"\\]|\\.)*"))?\s*(?:apply\s+(true|false))?$')
_NAMED_ARG_RE = re.compile(r"^([A-Za-z_]\w*)\s*=\s*(.+)$", re.DOTALL)
_COORD_PART_RE = re.compile(r"^[A-Za-z0-9_.\-+\[\](),]+$")
_TEST_TASK_HEADS = {"tasks.test", 'tasks.named<Test>("test")', "tasks.withType<Test>", "test", 'tasks.named("test", Test::class)'}

_REPOSITORY_SHORTHANDS = ("mavenCentral", "mavenLocal", "google", "gradlePluginPortal")
_PLATFORM_WRAPPERS = ("platform", "enforcedPlatform")
_ENGINE_OPTIONS = {
    "includeTags": "include_tags",
    "excludeTags": "exclude_tags",
    "includeEngines": "include_engines",
    "excludeEngines": "exclude_engines",
}


def _reject_template(text: str, what: str, line: int) -> None:
    if text.strip().startswith('"') and has_template(text):
        raise MalformedManifest(f"{what} uses a string template, which cannot be evaluated: {text.strip()!r}", line)


def _require_string(text: str, what: str, line: int) -> str:
    value = string_literal(text)
    if value is None:
        _reject_template(text, what, line)
        raise MalformedManifest(f"{what} must be a string literal, got {text.strip()!r}", line)
    return value


def _named_args(args: list[str], line: int) -> dict[str, str]:
    named: dict[str, str] = {}
    for arg in args:
        m = _NAMED_ARG_RE.match(arg)
        if m is None:
            raise MalformedManifest(f"expected a named argument, got {arg!r}", line)
        named[m.group(1)] = m.group(2).strip()
    return named


def parse_coordinate_notation(notation: str, line: int | None = None, platform: str | None = None) -> ModuleCoordinate:
    """Parse `group:name[:version]` into a module coordinate.

    Example:
        >>> parse_coordinate_notation("org.junit:junit-bom:5.9.1").version
        '5.9.1'
    """
    parts = notation.split(":")
    if len(parts) not in (2, 3) or not all(parts) or not all(_COORD_PART_RE.match(p) for p in parts):
        raise MalformedManifest(f"invalid coordinate {notation!r}, expected 'group:name[:version]'", line)
    version = parts[2] if len(parts) == 3 else None
    return ModuleCoordinate(group=parts[0], name=parts[1], version=version, platform=platform)


def _parse_project_path(args: list[str], line: int) -> ProjectCoordinate:
    if len(args) != 1:
        raise MalformedManifest("project(...) takes exactly one path", line)
    arg = args[0]
    m = _NAMED_ARG_RE.match(arg)
    if m is not None and string_literal(arg) is None:
        if m.group(1) != "path":
            raise MalformedManifest(f"unsupported project(...) argument {m.group(1)!r}", line)
        arg = m.group(2)
    path = _require_string(arg, "project path", line).strip()
    if not path:
        raise MalformedManifest("project path cannot be empty", line)
    if not path.startswith(":"):
        path = ":" + path
    return ProjectCoordinate(path)


def _parse_kotlin_module(args: list[str], line: int) -> ModuleCoordinate:
    """`kotlin("test")` is shorthand for `org.jetbrains.kotlin:kotlin-test`."""
    if len(args) not in (1, 2):
        raise MalformedManifest("kotlin(...) takes a module name and an optional version", line)
    module = _require_string(args[0], "kotlin module", line)
    version = _require_string(args[1], "kotlin module version", line) if len(args) == 2 else None
    notation = f"{KOTLIN_GROUP}:kotlin-{module}" + (f":{version}" if version else "")
    return parse_coordinate_notation(notation, line)


def _parse_coordinate_expr(expr: str, line: int) -> Coordinate:
    """Parse the argument of a dependency configuration call."""
    literal = string_literal(expr)
    if literal is not None:
        return parse_coordinate_notation(literal, line)
    _reject_template(expr, "dependency notation", line)

    call = split_call(expr)
    if call is not None and not call[2]:
        name, inner, _ = call
        if name == "project":
            return _parse_project_path(split_args(inner), line)
        if name == "kotlin":
            return _parse_kotlin_module(split_args(inner), line)
        if name in _PLATFORM_WRAPPERS:
            wrapped = _parse_coordinate_expr(inner, line)
            if isinstance(wrapped, ProjectCoordinate):
                raise MalformedManifest(f"{name}(project(...)) is not supported", line)
            return ModuleCoordinate(wrapped.group, wrapped.name, wrapped.version, platform=name)

    raise MalformedManifest(f"cannot understand dependency expression {expr.strip()!r}", line)


def _parse_excludes(body: Statement) -> tuple[ExcludeRule, ...]:
    rules: list[ExcludeRule] = []
    for stmt in split_statements(body.text, body.line):
        call = split_call(stmt.text)
        if call is None or call[0] != "exclude" or call[2]:
            raise MalformedManifest(f"unsupported dependency option {stmt.text!r}", stmt.line)
        named = _named_args(split_args(call[1]), stmt.line)
        unknown = set(named) - {"group", "module"}
        if unknown or not named:
            raise MalformedManifest("exclude(...) takes 'group' and/or 'module'", stmt.line)
        rules.append(
            ExcludeRule(
                group=_require_string(named["group"], "exclude group", stmt.line) if "group" in named else None,
                module=_require_string(named["module"], "exclude module", stmt.line) if "module" in named else None,
            )
        )
    return tuple(rules)


def _parse_dependency(stmt: Statement) -> Dependency:
    text = stmt.text
    excludes: tuple[ExcludeRule, ...] = ()
    block = split_block(stmt)
    if block is not None:
        text, body = block
        excludes = _parse_excludes(body)

    call = split_call(text)
    if call is None or call[2] or not _IDENT_RE.match(call[0]):
        raise MalformedManifest(f"cannot understand dependency declaration {text!r}", stmt.line)
    configuration, inner, _ = call
    args = split_args(inner)
    if not args:
        raise MalformedManifest(f"{configuration}() needs a coordinate", stmt.line)

    if len(args) == 1:
        coordinate = _parse_coordinate_expr(args[0], stmt.line)
    else:
        named = _named_args(args, stmt.line)
        if not {"group", "name"} <= set(named) or set(named) - {"group", "name", "version"}:
            raise MalformedManifest("map notation needs 'group' and 'name' (and optionally 'version')", stmt.line)
        group = _require_string(named["group"], "group", stmt.line)
        name = _require_string(named["name"], "name", stmt.line)
        version = _require_string(named["version"], "version", stmt.line) if "version" in named else None
        notation = f"{group}:{name}" + (f":{version}" if version else "")
        coordinate = parse_coordinate_notation(notation, stmt.line)
    return Dependency(configuration=configuration, coordinate=coordinate, excludes=excludes)


def _parse_plugin(stmt: Statement) -> PluginDeclaration:
    text = stmt.text
    m = _BACKTICK_RE.match(text)
    if m is not None:
        return PluginDeclaration(m.group(1))
    if _IDENT_RE.match(text):
        return PluginDeclaration(text)

    call = split_call(text)
    if call is None or call[0] not in {"id", "kotlin"}:
        raise MalformedManifest(f"cannot understand plugin declaration {text!r}", stmt.line)
    name, inner, tail = call
    plugin_id = _require_string(inner, "plugin id", stmt.line)
    if name == "kotlin":
        plugin_id = f"{KOTLIN_GROUP}.{plugin_id}"
    tail_m = _PLUGIN_TAIL_RE.match(tail)
    if tail_m is None:
        raise MalformedManifest(f"cannot understand plugin modifiers {tail!r}", stmt.line)
    version = _require_string(tail_m.group(1), "plugin version", stmt.line) if tail_m.group(1) else None
    apply = tail_m.group(2) != "false"
    return PluginDeclaration(plugin_id, version=version, apply=apply)


def _parse_repository(stmt: Statement) -> RepositoryDeclaration:
    block = split_block(stmt)
    if block is not None:
        head, body = block
        if head not in {"maven", "maven()"}:
            raise MalformedManifest(f"unsupported repository block {head!r}", stmt.line)
        url: str | None = None
        for inner in split_statements(body.text, body.line):
            assign = _ASSIGN_RE.match(inner.text)
            call = split_call(inner.text)
            if assign is not None and assign.group(1) == "url":
                value = assign.group(2).strip()
                uri = split_call(value)
                if uri is not None and uri[0] == "uri" and not uri[2]:
                    value = uri[1]
                url = _require_string(value, "repository url", inner.line)
            elif call is not None and call[0] == "setUrl" and not call[2]:
                url = _require_string(call[1], "repository url", inner.line)
            else:
                _LOG.debug("ignoring repository option at line %d: %s", inner.line, inner.text)
        if not url:
            raise MalformedManifest("maven { } repository needs a url", stmt.line)
        return RepositoryDeclaration("maven", url)

    call = split_call(stmt.text)
    if call is None or call[2]:
        raise MalformedManifest(f"cannot understand repository declaration {stmt.text!r}", stmt.line)
    name, inner, _ = call
    if name in _REPOSITORY_SHORTHANDS:
        if inner:
            raise MalformedManifest(f"{name}() takes no arguments here", stmt.line)
        return RepositoryDeclaration(name)
    if name == "maven":
        args = split_args(inner)
        if len(args) != 1:
            raise MalformedManifest("maven(...) takes exactly one url", stmt.line)
        arg = args[0]
        m = _NAMED_ARG_RE.match(arg)
        if m is not None and string_literal(arg) is None and m.group(1) == "url":
            arg = m.group(2)
        return RepositoryDeclaration("maven", _require_string(arg, "repository url", stmt.line))
    raise MalformedManifest(f"unknown repository {name!r}", stmt.line)


def _parse_test_task(body: Statement) -> TestConfiguration:
    platform: str | None = None
    options: dict[str, tuple[str, ...]] = {}
    for stmt in split_statements(body.text, body.line):
        engine_body: Statement | None = None
        text = stmt.text
        block = split_block(stmt)
        if block is not None:
            text, engine_body = block
        name = text[:-2] if text.endswith("()") else text
        spec = platform_for_call(name)
        if spec is None:
            _LOG.debug("ignoring test task option at line %d: %s", stmt.line, stmt.text)
            continue
        platform = spec.name
        options = {}
        if engine_body is None:
            continue
        for opt in split_statements(engine_body.text, engine_body.line):
            call = split_call(opt.text)
            if call is None or call[0] not in _ENGINE_OPTIONS or call[2]:
                _LOG.debug("ignoring engine option at line %d: %s", opt.line, opt.text)
                continue
            values = tuple(_require_string(a, call[0], opt.line) for a in split_args(call[1]))
            key = _ENGINE_OPTIONS[call[0]]
            options[key] = options.get(key, ()) + values
    return TestConfiguration(platform=platform, **options)


def _body_statements(body: Statement) -> list[Statement]:
    return split_statements(body.text, body.line)


def parse_manifest(text: str) -> ModuleDescriptor:
    """Parse manifest text into an immutable module descriptor.

    Raises:
        MalformedManifest: syntax errors, unknown constructs in known blocks,
            or a missing/empty `group` or `version`.

    Example:
        >>> parse_manifest(open("build.gradle.kts").read()).group
        'org.example'
    """
    cleaned = strip_comments(text)
    fields: dict[str, str] = {}
    plugins: list[PluginDeclaration] = []
    repositories: list[RepositoryDeclaration] = []
    dependencies: list[Dependency] = []
    test_configuration = TestConfiguration()
    extensions: list[str] = []

    for stmt in split_statements(cleaned):
        block = split_block(stmt)
        if block is not None:
            head, body = block
            if head == "plugins":
                plugins.extend(_parse_plugin(s) for s in _body_statements(body))
            elif head == "repositories":
                repositories.extend(_parse_repository(s) for s in _body_statements(body))
            elif head == "dependencies":
                dependencies.extend(_parse_dependency(s) for s in _body_statements(body))
            elif head in _TEST_TASK_HEADS:
                test_configuration = _parse_test_task(body)
            else:
                extensions.append(head)
                _LOG.debug("recording extension block %r at line %d", head, stmt.line)
            continue

        assign = _ASSIGN_RE.match(stmt.text)
        if assign is not None and assign.group(1) in {"group", "version", "description"}:
            key = assign.group(1)
            if key in fields:
                raise MalformedManifest(f"'{key}' is assigned more than once", stmt.line)
            fields[key] = _require_string(assign.group(2), key, stmt.line)
            continue

        call = split_call(stmt.text)
        if call is not None and call[0] == "apply" and not call[2]:
            named = _named_args(split_args(call[1]), stmt.line)
            if set(named) != {"plugin"}:
                raise MalformedManifest("apply(...) needs exactly 'plugin = \"id\"'", stmt.line)
            plugins.append(PluginDeclaration(_require_string(named["plugin"], "plugin id", stmt.line)))
            continue

        _LOG.debug("ignoring statement at line %d: %s", stmt.line, stmt.text)

    for key in ("group", "version"):
        if key not in fields:
            raise MalformedManifest(f"missing '{key}' assignment")
        if not fields[key].strip():
            raise MalformedManifest(f"'{key}' cannot be empty")

    return ModuleDescriptor(
        group=fields["group"],
        version=fields["version"],
        plugins=tuple(plugins),
        repositories=tuple(repositories),
        dependencies=tuple(dependencies),
        test_configuration=test_configuration,
        description=fields.get("description"),
        extensions=tuple(extensions),
    )
