"""
Structured document codec.

Documents start with a YAML header block delimited by two "---" marker lines,
followed by a markdown body:

    ---
    date: 2026-01-20
    type: push
    split: [push, pull, legs]
    muscles:
      primary: [chest]
      secondary: [triceps]
    ---

    ## Exercises

Block lists (one "- item" per line) are read the same as inline lists. Dates
come back as ISO strings, so callers only ever see str, int, float, list and
dict values.
"""
import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

MARKER = "---"

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class HeaderSyntaxError(ValueError):
    """Raised when a header block is not a valid YAML mapping"""


class HeaderDumper(yaml.SafeDumper):
    """SafeDumper that keeps ISO dates unquoted and multi-line text as literal blocks"""


def _represent_str(dumper, data):
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    if ISO_DATE_PATTERN.match(data):
        try:
            return dumper.represent_date(date.fromisoformat(data))
        except ValueError:
            pass
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


HeaderDumper.add_representer(str, _represent_str)


def split_frontmatter(text: str) -> Optional[Tuple[str, str]]:
    """
    Split a document into (header text, body).

    Returns None when the document does not open with the marker pair.
    """
    text = text.replace("\r\n", "\n")
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return None
    return match.group(1) or "", text[match.end():]


def _normalize(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize(v) for v in value]
    return value


def parse_header(header_text: str) -> Dict[str, Any]:
    """Parse header text into a dict. An empty header gives an empty dict."""
    try:
        fields = yaml.safe_load(header_text)
    except (yaml.YAMLError, ValueError) as e:
        # ValueError covers timestamps such as 2026-13-45
        raise HeaderSyntaxError(str(e)) from e

    if fields is None:
        return {}
    if not isinstance(fields, dict):
        raise HeaderSyntaxError(f"Header is not a mapping: {header_text!r}")
    return _normalize(fields)


def parse_document(text: str) -> Optional[Tuple[Dict[str, Any], str]]:
    """Return (header fields, body), or None if the document is not recognized."""
    split = split_frontmatter(text)
    if split is None:
        return None

    header_text, body = split
    try:
        return parse_header(header_text), body
    except HeaderSyntaxError as e:
        logger.warning("Malformed document header: %s", e)
        return None


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    return value


def render_header(fields: Dict[str, Any]) -> str:
    """Render fields as a header block, marker lines included. None values are skipped."""
    fields = _drop_none(fields)
    if not fields:
        return f"{MARKER}\n{MARKER}\n"

    body = yaml.dump(
        fields,
        Dumper=HeaderDumper,
        sort_keys=False,
        default_flow_style=None,
        allow_unicode=True,
    )
    return f"{MARKER}\n{body}{MARKER}\n"


def split_sections(body: str, level: int) -> List[Tuple[str, str]]:
    """
    Split a markdown body into (heading text, section text) pairs.

    Only headings of exactly `level` hashes start a section; each section runs
    up to the next heading of the same level.
    """
    pattern = re.compile(rf"^{'#' * level}(?!#)[ \t]+(.+?)[ \t]*$", re.MULTILINE)
    matches = list(pattern.finditer(body))

    sections = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(body)
        sections.append((match.group(1), body[match.end():end]))
    return sections
