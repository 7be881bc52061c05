"""Bracket- and string-aware splitting of Kotlin DSL manifest text.

The manifest is never evaluated. It is cut into statements (separated by
newlines or `;` at bracket depth zero), and block statements are cut into a
head and a body, which is split again recursively by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass

from gradlite.errors import MalformedManifest

_OPENERS = {"(": ")", "{": "}", "[": "]"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", '"': '"', "'": "'", "\\": "\\", "$": "$"}


@dataclass(frozen=True)
class Statement:
    """One top-level statement and the 1-based line it starts on."""

    text: str
    line: int


def _line_of(text: str, index: int, base_line: int) -> int:
    return base_line + text.count("\n", 0, index)


def _skip_string(text: str, start: int, base_line: int) -> int:
    """Return index just past the string literal opening at `start`."""
    if text.startswith('"""', start):
        end = text.find('"""', start + 3)
        if end < 0:
            raise MalformedManifest("unterminated raw string literal", _line_of(text, start, base_line))
        return end + 3
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        if ch == "\n":
            break
        i += 1
    raise MalformedManifest("unterminated string literal", _line_of(text, start, base_line))


def strip_comments(text: str, base_line: int = 1) -> str:
    """Blank out `//` and `/* */` comments, keeping offsets and newlines intact.

    Example:
        >>> strip_comments('group = "a" // note')
        'group = "a"        '
    """
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            end = _skip_string(text, i, base_line)
            out.append(text[i:end])
            i = end
        elif text.startswith("//", i):
            end = text.find("\n", i)
            end = len(text) if end < 0 else end
            out.append(" " * (end - i))
            i = end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end < 0:
                raise MalformedManifest("unterminated block comment", _line_of(text, i, base_line))
            chunk = text[i : end + 2]
            out.append("".join("\n" if c == "\n" else " " for c in chunk))
            i = end + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def split_statements(text: str, base_line: int = 1) -> list[Statement]:
    """Split comment-free text into statements at bracket depth zero.

    A statement that starts with `{` is glued onto the previous one, so a
    block whose brace sits on the next line still forms one statement.
    """
    statements: list[Statement] = []
    stack: list[tuple[str, int]] = []
    start = 0
    i = 0

    def flush(end: int) -> None:
        raw = text[start:end]
        stripped = raw.strip()
        if not stripped:
            return
        offset = start + (len(raw) - len(raw.lstrip()))
        line = _line_of(text, offset, base_line)
        if stripped.startswith("{") and statements:
            prev = statements.pop()
            gap = text[start:offset]
            statements.append(Statement(prev.text + gap + stripped, prev.line))
            return
        statements.append(Statement(stripped, line))

    while i < len(text):
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i, base_line)
            continue
        if ch in _OPENERS:
            stack.append((ch, i))
        elif ch in _CLOSERS:
            if not stack or stack[-1][0] != _CLOSERS[ch]:
                raise MalformedManifest(f"unexpected '{ch}'", _line_of(text, i, base_line))
            stack.pop()
        elif ch in "\n;" and not stack:
            flush(i)
            start = i + 1
        i += 1

    if stack:
        opener, pos = stack[-1]
        raise MalformedManifest(f"unclosed '{opener}'", _line_of(text, pos, base_line))
    flush(len(text))
    return statements


def _matching(text: str, open_index: int) -> int:
    """Return the index of the bracket closing the one at `open_index`."""
    depth = 0
    i = open_index
    while i < len(text):
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i, 1)
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def split_block(stmt: Statement) -> tuple[str, Statement] | None:
    """Split `head { body }` into the head text and the body statement.

    Returns None when the statement does not end with a brace block.

    Example:
        >>> head, body = split_block(Statement("plugins {\\n java\\n}", 1))
        >>> head
        'plugins'
    """
    text = stmt.text
    if not text.endswith("}"):
        return None
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i, stmt.line)
            continue
        if ch in "([":
            close = _matching(text, i)
            if close < 0:
                return None
            i = close + 1
            continue
        if ch == "{":
            close = _matching(text, i)
            if close != len(text) - 1:
                return None
            body_line = stmt.line + text.count("\n", 0, i + 1)
            return text[:i].strip(), Statement(text[i + 1 : close], body_line)
        i += 1
    return None


def split_call(text: str) -> tuple[str, str, str] | None:
    """Split `name(args) rest` into its three parts.

    Example:
        >>> split_call('id("java") version "1"')
        ('id', '"java"', 'version "1"')
    """
    open_index = text.find("(")
    if open_index <= 0:
        return None
    name = text[:open_index].strip()
    close = _matching(text, open_index)
    if close < 0:
        return None
    return name, text[open_index + 1 : close].strip(), text[close + 1 :].strip()


def split_args(text: str) -> list[str]:
    """Split a call's argument list on top-level commas."""
    args: list[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i, 1)
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == "," and depth == 0:
            args.append(text[start:i].strip())
            start = i + 1
        i += 1
    # Kotlin allows a trailing comma.
    tail = text[start:].strip()
    if tail:
        args.append(tail)
    return args


def has_template(text: str) -> bool:
    """Return True when `text` contains an unescaped `$name` or `${...}` template."""
    text = text.strip()
    raw = text.startswith('"""')
    i = 0
    while i < len(text) - 1:
        ch = text[i]
        if ch == "\\" and not raw:
            i += 2
            continue
        if ch == "$" and (text[i + 1] == "{" or text[i + 1] == "_" or text[i + 1].isalpha()):
            return True
        i += 1
    return False


def string_literal(text: str) -> str | None:
    """Return the value of a plain string literal, or None if `text` is not one.

    Strings with templates are not plain: their value depends on evaluation.

    Example:
        >>> string_literal('"org.example"')
        'org.example'
    """
    text = text.strip()
    if has_template(text):
        return None
    if len(text) >= 6 and text.startswith('"""') and text.endswith('"""'):
        return text[3:-3]
    if len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
        return None
    try:
        if _skip_string(text, 0, 1) != len(text):
            return None
    except MalformedManifest:
        return None
    out: list[str] = []
    i = 1
    while i < len(text) - 1:
        ch = text[i]
        if ch == "\\" and i + 1 < len(text) - 1:
            out.append(_ESCAPES.get(text[i + 1], text[i + 1]))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)
