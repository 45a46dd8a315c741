"""
Field sanitizers for incoming post payloads.

- sanitize_text_field: plain text, no markup, no line breaks
- sanitize_post_html: post content restricted to the post allow-list
- coerce_author: non-negative author id
"""

import math
import re
from typing import Any, Dict, FrozenSet

from bs4 import BeautifulSoup, Comment

CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
WHITESPACE_RUN = re.compile(r"[\r\n\t ]+")
PERCENT_OCTET = re.compile(r"%[a-f0-9]{2}", re.IGNORECASE)
LEADING_INT = re.compile(r"\s*[+-]?\d+")

# Elements removed together with everything inside them
DROP_WITH_CONTENT = ("script", "style", "iframe", "object", "embed", "noscript", "template")

GLOBAL_ATTRIBUTES: FrozenSet[str] = frozenset(
    {"class", "id", "style", "title", "lang", "dir", "role", "xml:lang"}
)

POST_ALLOWED_TAGS: Dict[str, FrozenSet[str]] = {
    "a": frozenset({"href", "rel", "rev", "name", "target", "download", "hreflang"}),
    "abbr": frozenset(),
    "address": frozenset(),
    "article": frozenset({"align"}),
    "aside": frozenset({"align"}),
    "audio": frozenset({"autoplay", "controls", "loop", "muted", "preload", "src"}),
    "b": frozenset(),
    "bdo": frozenset(),
    "big": frozenset(),
    "blockquote": frozenset({"cite"}),
    "br": frozenset(),
    "button": frozenset({"disabled", "name", "type", "value"}),
    "caption": frozenset({"align"}),
    "cite": frozenset(),
    "code": frozenset(),
    "col": frozenset({"align", "span", "width"}),
    "colgroup": frozenset({"align", "span", "width"}),
    "dd": frozenset(),
    "del": frozenset({"datetime"}),
    "details": frozenset({"align", "open"}),
    "dfn": frozenset(),
    "div": frozenset({"align"}),
    "dl": frozenset(),
    "dt": frozenset(),
    "em": frozenset(),
    "figcaption": frozenset({"align"}),
    "figure": frozenset({"align"}),
    "footer": frozenset({"align"}),
    "h1": frozenset({"align"}),
    "h2": frozenset({"align"}),
    "h3": frozenset({"align"}),
    "h4": frozenset({"align"}),
    "h5": frozenset({"align"}),
    "h6": frozenset({"align"}),
    "header": frozenset({"align"}),
    "hr": frozenset({"align", "noshade", "size", "width"}),
    "i": frozenset(),
    "img": frozenset({"alt", "align", "border", "height", "hspace", "loading", "longdesc",
                      "vspace", "src", "usemap", "width", "srcset", "sizes", "decoding"}),
    "ins": frozenset({"datetime", "cite"}),
    "kbd": frozenset(),
    "li": frozenset({"align", "value"}),
    "main": frozenset({"align"}),
    "mark": frozenset(),
    "nav": frozenset({"align"}),
    "ol": frozenset({"start", "type", "reversed"}),
    "p": frozenset({"align"}),
    "pre": frozenset({"width"}),
    "q": frozenset({"cite"}),
    "s": frozenset(),
    "samp": frozenset(),
    "section": frozenset({"align"}),
    "small": frozenset(),
    "source": frozenset({"src", "type", "srcset", "sizes", "media"}),
    "span": frozenset({"align"}),
    "strike": frozenset(),
    "strong": frozenset(),
    "sub": frozenset(),
    "summary": frozenset({"align"}),
    "sup": frozenset(),
    "table": frozenset({"align", "bgcolor", "border", "cellpadding", "cellspacing", "rules",
                        "summary", "width"}),
    "tbody": frozenset({"align", "valign"}),
    "td": frozenset({"abbr", "align", "axis", "bgcolor", "char", "charoff", "colspan",
                     "headers", "height", "nowrap", "rowspan", "scope", "valign", "width"}),
    "tfoot": frozenset({"align", "valign"}),
    "th": frozenset({"abbr", "align", "axis", "bgcolor", "char", "charoff", "colspan",
                     "headers", "height", "nowrap", "rowspan", "scope", "valign", "width"}),
    "thead": frozenset({"align", "valign"}),
    "time": frozenset({"datetime"}),
    "tr": frozenset({"align", "bgcolor", "char", "charoff", "valign"}),
    "tt": frozenset(),
    "u": frozenset(),
    "ul": frozenset({"type"}),
    "var": frozenset(),
    "video": frozenset({"autoplay", "controls", "height", "loop", "muted", "playsinline",
                        "poster", "preload", "src", "width"}),
}

URL_ATTRIBUTES = frozenset({"href", "src", "cite", "longdesc", "poster", "usemap"})

ALLOWED_PROTOCOLS = frozenset({
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "irc6", "ircs", "gopher",
    "nntp", "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel", "fax", "xmpp",
    "webcal", "urn",
})

UNSAFE_CSS = re.compile(r"expression\s*\(|javascript:|behavior\s*:|url\s*\(", re.IGNORECASE)


def _is_allowed_attribute(tag: str, attr: str) -> bool:
    attr = attr.lower()
    if attr in GLOBAL_ATTRIBUTES or attr.startswith("aria-") or attr.startswith("data-"):
        return True
    return attr in POST_ALLOWED_TAGS.get(tag, frozenset())


def _has_allowed_protocol(url: str) -> bool:
    """Relative URLs pass; absolute URLs need an allow-listed scheme."""
    cleaned = CONTROL_CHARS.sub("", url).strip()
    cleaned = re.sub(r"\s", "", cleaned)
    scheme, sep, _ = cleaned.partition(":")
    if not sep or any(ch in scheme for ch in "/?#"):
        return True
    return scheme.lower() in ALLOWED_PROTOCOLS


def sanitize_text_field(value: Any) -> str:
    """
    Reduce a value to a single line of plain text.

    Strips tags (dropping script/style bodies), control characters,
    percent-encoded octets and line breaks, and collapses whitespace.
    Containers (dict, list) become an empty string.
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    if isinstance(value, bool):
        return "1" if value else ""

    text = str(value)

    if "<" in text:
        soup = BeautifulSoup(text, "html.parser")
        for element in soup(["script", "style"]):
            element.decompose()
        text = soup.get_text()

    text = CONTROL_CHARS.sub("", text)
    text = WHITESPACE_RUN.sub(" ", text)

    while PERCENT_OCTET.search(text):
        text = PERCENT_OCTET.sub("", text)

    return WHITESPACE_RUN.sub(" ", text).strip()


def sanitize_post_html(value: Any) -> str:
    """Filter HTML down to the tags and attributes allowed in post content."""
    if value is None or isinstance(value, (dict, list, tuple, set, bool)):
        return ""

    html = CONTROL_CHARS.sub("", str(value))
    if "<" not in html:
        return html

    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for element in soup(list(DROP_WITH_CONTENT)):
        element.decompose()

    for tag in soup.find_all(True):
        if tag.name not in POST_ALLOWED_TAGS:
            tag.unwrap()
            continue

        for attr in list(tag.attrs):
            value = tag.attrs[attr]
            if not _is_allowed_attribute(tag.name, attr):
                del tag.attrs[attr]
            elif attr.lower() in URL_ATTRIBUTES and not _has_allowed_protocol(str(value)):
                del tag.attrs[attr]
            elif attr.lower() == "style" and UNSAFE_CSS.search(str(value)):
                del tag.attrs[attr]

    return str(soup)


def coerce_author(value: Any) -> int:
    """Absolute integer author id; 1 when missing or non-numeric."""
    if value is None:
        return 1
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        return abs(int(value)) if math.isfinite(value) else 1
    if isinstance(value, str):
        match = LEADING_INT.match(value)
        return abs(int(match.group())) if match else 1
    return 1
