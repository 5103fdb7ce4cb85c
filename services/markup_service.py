"""
Markup rendering for lock messages.

The lock message is authored by a site administrator in one of the host's text
formats and shown to anonymous visitors, so it is sanitised with nh3 against
the tag allowlist of its format before it leaves the server.
"""

from __future__ import annotations

import html
from typing import Dict, FrozenSet, Mapping

import nh3

from domain.lock_rule import MessageFormat

_HEADING_TAGS = {"h2", "h3", "h4", "h5", "h6"}

RESTRICTED_HTML_TAGS: FrozenSet[str] = frozenset(
    {"a", "em", "strong", "cite", "blockquote", "code", "ul", "ol", "li", "dl", "dt", "dd"}
    | _HEADING_TAGS
)
RESTRICTED_HTML_ATTRIBUTES: Dict[str, set] = {
    "a": {"href", "hreflang"},
    "blockquote": {"cite"},
    "ul": {"type"},
    "ol": {"start", "type"},
    **{tag: {"id"} for tag in _HEADING_TAGS},
}

BASIC_HTML_TAGS: FrozenSet[str] = RESTRICTED_HTML_TAGS | {"p", "br", "span", "img"}
BASIC_HTML_ATTRIBUTES: Dict[str, set] = {
    **RESTRICTED_HTML_ATTRIBUTES,
    "img": {"src", "alt", "height", "width"},
}


class SanitizingMarkupRenderer:
    """MarkupRenderer backed by nh3."""

    def __init__(
        self,
        allowlists: Mapping[MessageFormat, tuple[FrozenSet[str], Dict[str, set]]] | None = None,
    ) -> None:
        self._allowlists = dict(allowlists) if allowlists is not None else {
            MessageFormat.RESTRICTED_HTML: (RESTRICTED_HTML_TAGS, RESTRICTED_HTML_ATTRIBUTES),
            MessageFormat.BASIC_HTML: (BASIC_HTML_TAGS, BASIC_HTML_ATTRIBUTES),
        }

    def render(self, text: str, text_format: MessageFormat) -> str:
        if not text:
            return ""

        if text_format is MessageFormat.FULL_HTML:
            return text

        allowlist = self._allowlists.get(text_format)
        if allowlist is None:
            return self.render_plain(text)

        tags, attributes = allowlist
        return nh3.clean(text, tags=set(tags), attributes=attributes)

    @staticmethod
    def render_plain(text: str) -> str:
        """Escape everything and keep the author's line breaks."""

        return "<br>\n".join(html.escape(line) for line in text.splitlines())
