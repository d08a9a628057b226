from __future__ import annotations

import re
from typing import Callable, Iterable, Mapping, Optional

from pagecraft.schemas.personalization import CustomVariable, PersonalizationData
from pagecraft.services import markup
from pagecraft.services.markup import MarkupNode, StyledNode, TextNode

TOKEN_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

# Built-in tokens offered by the editor's variable picker. Case does not matter
# when resolving, the ALL CAPS spellings resolve to the same values.
SYSTEM_VARIABLES: tuple[dict[str, str], ...] = (
    {"token": "{{first_name}}", "name": "First Name", "type": "System"},
    {"token": "{{FIRST_NAME}}", "name": "First Name (ALL CAPS)", "type": "System"},
    {"token": "{{last_name}}", "name": "Last Name", "type": "System"},
    {"token": "{{LAST_NAME}}", "name": "Last Name (ALL CAPS)", "type": "System"},
    {"token": "{{company}}", "name": "Company", "type": "System"},
    {"token": "{{COMPANY}}", "name": "Company (ALL CAPS)", "type": "System"},
    {"token": "{{full_name}}", "name": "Full Name", "type": "System"},
    {"token": "{{FULL_NAME}}", "name": "Full Name (ALL CAPS)", "type": "System"},
    {"token": "{{landing_page}}", "name": "Landing Page URL", "type": "System"},
    {"token": "{{custom_field}}", "name": "Custom Field", "type": "System"},
)

# Resolution precedence: earlier names win over custom variables of the same name.
_SYSTEM_RESOLVERS: tuple[tuple[str, Callable[[PersonalizationData], Optional[str]]], ...] = (
    ("first_name", lambda data: data.first_name),
    ("last_name", lambda data: data.last_name),
    ("company", lambda data: data.company),
    ("company_name", lambda data: data.company),
    ("full_name", lambda data: data.resolved_full_name()),
    ("landing_page", lambda data: data.landing_page),
    ("custom_field", lambda data: data.custom_field),
)
_SYSTEM_NAMES = {name for name, _ in _SYSTEM_RESOLVERS}
_RESOLVERS = dict(_SYSTEM_RESOLVERS)

# Private-use code points that carry substituted values through the markup pass.
_PLACEHOLDER_OPEN = "\ue000"
_PLACEHOLDER_CLOSE = "\ue001"
_PLACEHOLDER_PATTERN = re.compile(f"{_PLACEHOLDER_OPEN}(\\d+){_PLACEHOLDER_CLOSE}")
_TRAILING_PLACEHOLDER_PATTERN = re.compile(f"{_PLACEHOLDER_OPEN}(\\d+){_PLACEHOLDER_CLOSE}$")


def build_variables(
    custom_variables: Iterable[CustomVariable],
    values: Optional[Mapping[str, Optional[str]]] = None,
) -> dict[str, str]:
    """Map lower-cased token names to recipient values or the variable fallback.

    ``values`` may be keyed by the variable's display name or its token name.
    """
    lookup = {str(key).strip().lower(): value for key, value in (values or {}).items()}
    resolved: dict[str, str] = {}
    for variable in custom_variables:
        key = variable.token_name.lower()
        value = lookup.get(key) or lookup.get(variable.name.strip().lower())
        resolved[key] = value if value else variable.fallback_value
    return resolved


def _resolve(
    name: str,
    data: PersonalizationData,
    variables: Optional[Mapping[str, str]],
) -> str:
    key = name.strip().lower()
    if key in _SYSTEM_NAMES:
        return _RESOLVERS[key](data) or ""
    if variables:
        for var_name, value in variables.items():
            if var_name.strip().lower() == key:
                return value or ""
    return ""


def strip_tokens(text: str) -> str:
    """Remove every ``{{...}}`` reference, including ones formed by a removal."""
    while True:
        text, count = TOKEN_PATTERN.subn("", text)
        if not count:
            return text


def _resolve_clean(
    name: str,
    data: PersonalizationData,
    variables: Optional[Mapping[str, str]],
) -> str:
    # A value is inserted once; any token it carries is dropped like an unresolved one.
    return strip_tokens(_resolve(name, data, variables))


def apply_personalization(
    raw: str,
    data: Optional[PersonalizationData] = None,
    variables: Optional[Mapping[str, str]] = None,
) -> str:
    """Substitute ``{{token}}`` references and drop the ones that do not resolve.

    No ``{{...}}`` survives in the result. A string that holds no token is
    returned unchanged; otherwise the result is trimmed.
    """
    if not raw or "{{" not in raw:
        return raw
    data = data or PersonalizationData()
    result, count = TOKEN_PATTERN.subn(lambda m: _resolve_clean(m.group(1), data, variables), raw)
    if not count:
        return raw
    return strip_tokens(result).strip()


def _expand_nodes(nodes: tuple[MarkupNode, ...], values: list[str]) -> tuple[MarkupNode, ...]:
    def expand(text: str) -> str:
        return _PLACEHOLDER_PATTERN.sub(lambda m: values[int(m.group(1))], text)

    expanded: list[MarkupNode] = []
    for node in nodes:
        if isinstance(node, TextNode):
            expanded.append(TextNode(expand(node.text)))
        elif isinstance(node, StyledNode):
            expanded.append(StyledNode(node.kind, expand(node.value), _expand_nodes(node.children, values)))
        else:
            expanded.append(node)
    return tuple(expanded)


def _trim_edges(text: str, values: list[str]) -> str:
    """Trim ``text`` as if its placeholders were already expanded."""
    while True:
        text = text.lstrip()
        match = _PLACEHOLDER_PATTERN.match(text)
        if match is None:
            break
        index = int(match.group(1))
        values[index] = values[index].lstrip()
        if values[index]:
            break
        text = text[match.end():]
    while True:
        text = text.rstrip()
        match = _TRAILING_PLACEHOLDER_PATTERN.search(text)
        if match is None:
            break
        index = int(match.group(1))
        values[index] = values[index].rstrip()
        if values[index]:
            break
        text = text[: match.start()]
    return text


def render_personalized(
    raw: str,
    data: Optional[PersonalizationData] = None,
    variables: Optional[Mapping[str, str]] = None,
) -> tuple[MarkupNode, ...]:
    """Personalize ``raw`` and render the result as markup.

    Recipient values are protected from the markup pass, so a company called
    ``*Acme*`` renders as literal text rather than italics. The text matches
    what ``apply_personalization`` returns for the same input.
    """
    if not raw:
        return ()
    if "{{" not in raw:
        return markup.render(raw)
    data = data or PersonalizationData()
    cleaned = raw.replace(_PLACEHOLDER_OPEN, "").replace(_PLACEHOLDER_CLOSE, "")
    values: list[str] = []

    def placeholder(match: re.Match[str]) -> str:
        value = _resolve_clean(match.group(1), data, variables)
        if not value:
            return ""
        values.append(value)
        return f"{_PLACEHOLDER_OPEN}{len(values) - 1}{_PLACEHOLDER_CLOSE}"

    substituted, count = TOKEN_PATTERN.subn(placeholder, cleaned)
    if not count:
        return markup.render(raw)
    substituted = _trim_edges(strip_tokens(substituted), values)
    nodes = markup.render(substituted)
    if not values:
        return nodes
    return _expand_nodes(nodes, values)
