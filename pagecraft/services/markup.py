"""Rich-text markup used in section copy.

Grammar (tried in this order at every position, inner text rendered recursively)::

    [[size:K]]...[[/size:K]]     K in small | large | xlarge | 2xlarge
    [[color:K]]...[[/color:K]]   K any name without brackets or line breaks
    **...**                      bold
    *...*                        italic
    {{name}}                     personalization token, left unresolved

Inner text is at least one character, never crosses a line break and ends at the
nearest matching close marker. Anything else is literal text.
"""

from __future__ import annotations

import html
import re
from bisect import bisect_left
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Literal, Union

MAX_MARKUP_DEPTH = 32

SIZE_CLASSES: dict[str, str] = {
    "small": "text-sm",
    "large": "text-lg",
    "xlarge": "text-xl",
    "2xlarge": "text-2xl",
}

COLOR_VALUES: dict[str, str] = {
    "primary": "var(--primary)",
    "accent": "var(--accent)",
    "muted": "var(--muted-foreground)",
    "destructive": "var(--destructive)",
}

StyleKind = Literal["size", "color", "bold", "italic"]


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class TokenNode:
    token: str

    @property
    def name(self) -> str:
        return self.token[2:-2]


@dataclass(frozen=True)
class StyledNode:
    kind: StyleKind
    value: str
    children: tuple["MarkupNode", ...]


MarkupNode = Union[TextNode, TokenNode, StyledNode]


def _color_value(key: str) -> str:
    return COLOR_VALUES.get(key, key)


_OPEN_TAG = re.compile(r"\[\[(size|color):([^\[\]\r\n]+)\]\]")
_CLOSE_TAG = re.compile(r"\[\[/(size|color):([^\[\]\r\n]+)\]\]")
_LINE_BREAK = re.compile(r"[\r\n]")


class _Scanner:
    """Match helpers over one string.

    Close tags and line breaks are indexed once and plain markers remember their
    next occurrence, so unclosed openers cost no more than a lookup each.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._closers: dict[tuple[str, str], list[int]] = {}
        for match in _CLOSE_TAG.finditer(text):
            self._closers.setdefault((match.group(1), match.group(2)), []).append(match.start())
        self._breaks = [match.start() for match in _LINE_BREAK.finditer(text)]
        self._next: dict[str, int] = {}

    def _crosses_line(self, start: int, end: int) -> bool:
        i = bisect_left(self._breaks, start)
        return i < len(self._breaks) and self._breaks[i] < end

    def _find(self, marker: str, start: int) -> int:
        # Callers ask with non-decreasing starts for a given marker.
        found = self._next.get(marker)
        if found is None or 0 <= found < start:
            found = self.text.find(marker, start)
            self._next[marker] = found
        return found

    def match_tag(self, pos: int) -> tuple[str, str, str, int] | None:
        """Match ``[[tag:K]]inner[[/tag:K]]`` at ``pos``. Returns (tag, key, inner, end)."""
        opener = _OPEN_TAG.match(self.text, pos)
        if opener is None:
            return None
        tag, key = opener.group(1), opener.group(2)
        if tag == "size" and key not in SIZE_CLASSES:
            return None
        positions = self._closers.get((tag, key))
        if not positions:
            return None
        inner_start = opener.end()
        i = bisect_left(positions, inner_start + 1)
        if i == len(positions):
            return None
        close = positions[i]
        if self._crosses_line(inner_start, close):
            return None
        closer_length = len(f"[[/{tag}:{key}]]")
        return tag, key, self.text[inner_start:close], close + closer_length

    def match_delimited(self, pos: int, marker: str) -> tuple[str, int] | None:
        text = self.text
        if not text.startswith(marker, pos):
            return None
        inner_start = pos + len(marker)
        if marker == "*" and text.startswith("*", inner_start):
            return None
        close = self._find(marker, inner_start + 1)
        if close < 0 or self._crosses_line(inner_start, close):
            return None
        return text[inner_start:close], close + len(marker)

    def match_token(self, pos: int) -> int | None:
        if not self.text.startswith("{{", pos):
            return None
        close = self._find("}", pos + 2)
        if close <= pos + 2 or not self.text.startswith("}}", close):
            return None
        return close + 2


def _parse(text: str, depth: int) -> tuple[MarkupNode, ...]:
    nodes: list[MarkupNode] = []
    literal: list[str] = []
    scanner = _Scanner(text)

    def flush() -> None:
        if literal:
            nodes.append(TextNode("".join(literal)))
            literal.clear()

    def styled(kind: StyleKind, value: str, inner: str) -> StyledNode:
        if depth + 1 >= MAX_MARKUP_DEPTH:
            children: tuple[MarkupNode, ...] = (TextNode(inner),)
        else:
            children = _parse(inner, depth + 1)
        return StyledNode(kind, value, children)

    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == "[":
            matched = scanner.match_tag(pos)
            if matched is not None:
                tag, key, inner, end = matched
                flush()
                if tag == "size":
                    nodes.append(styled("size", SIZE_CLASSES[key], inner))
                else:
                    nodes.append(styled("color", _color_value(key), inner))
                pos = end
                continue
        elif char == "*":
            delimited = scanner.match_delimited(pos, "**")
            if delimited is not None:
                inner, end = delimited
                flush()
                nodes.append(styled("bold", "", inner))
                pos = end
                continue
            delimited = scanner.match_delimited(pos, "*")
            if delimited is not None:
                inner, end = delimited
                flush()
                nodes.append(styled("italic", "", inner))
                pos = end
                continue
        elif char == "{":
            end = scanner.match_token(pos)
            if end is not None:
                flush()
                nodes.append(TokenNode(text[pos:end]))
                pos = end
                continue
        literal.append(char)
        pos += 1
    flush()
    return tuple(nodes)


@lru_cache(maxsize=2048)
def render(raw: str) -> tuple[MarkupNode, ...]:
    if not raw:
        return ()
    return _parse(raw, 0)


def to_plain_text(nodes: Iterable[MarkupNode]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(node.text)
        elif isinstance(node, TokenNode):
            parts.append(node.token)
        else:
            parts.append(to_plain_text(node.children))
    return "".join(parts)


def to_html(nodes: Iterable[MarkupNode]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(html.escape(node.text, quote=False))
        elif isinstance(node, TokenNode):
            parts.append(f'<span class="token">{html.escape(node.token, quote=False)}</span>')
        else:
            inner = to_html(node.children)
            if node.kind == "size":
                parts.append(f'<span class="{html.escape(node.value)}">{inner}</span>')
            elif node.kind == "color":
                parts.append(f'<span style="color: {html.escape(node.value)}">{inner}</span>')
            elif node.kind == "bold":
                parts.append(f"<strong>{inner}</strong>")
            else:
                parts.append(f"<em>{inner}</em>")
    return "".join(parts)
