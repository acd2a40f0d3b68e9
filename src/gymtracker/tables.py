"""
Markdown table codec and exercise-reference helpers.

Column meaning is discovered from the header row, so a table written as

    | Sets | Exercise | Progression | Reps |

parses the same way as the canonical Exercise, Sets, Reps, Progression order.
"""
import re
from typing import Dict, List, Optional, Sequence, Tuple

# Header label substrings, checked in order for every header cell.
COLUMN_LABELS = (
    ("exercise", ("exercise", "name")),
    ("sets", ("set",)),
    ("reps", ("rep",)),
    ("progression", ("progress",)),
)

DEFAULT_COLUMNS = {"exercise": 0, "sets": 1, "reps": 2, "progression": 3}

EXERCISE_LINK_PATTERN = re.compile(r"\[\[([^\]|\\]+)(?:\\?\|[^\]]*)?\]\]")
# A pipe inside [[id|Display Name]] is part of the link, not a cell boundary
CELL_SEPARATOR_PATTERN = re.compile(r"(?<!\\)\|(?![^\[]*\]\])")
# Unsigned: a leading "-" is not a number here, so negative cells fall back to the default
INT_PATTERN = re.compile(r"^\s*\+?\d+")
FLOAT_PATTERN = re.compile(r"^\s*\+?(?:\d+(?:\.\d*)?|\.\d+)")


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated identifier: "Farmer's Walk" -> "farmer-s-walk"."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def extract_exercise_id(cell: str) -> Optional[str]:
    """
    Resolve an exercise reference.

    Supports [[exercise-id]], [[exercise-id|Display Name]] and plain text,
    which is slugified. Returns None when nothing can be resolved.
    """
    link = EXERCISE_LINK_PATTERN.search(cell)
    if link:
        return link.group(1).strip() or None

    return slugify(cell.strip()) or None


def parse_int(text: Optional[str], default):
    if text is None:
        return default
    match = INT_PATTERN.match(text)
    return int(match.group(0)) if match else default


def parse_float(text: Optional[str], default):
    if text is None:
        return default
    match = FLOAT_PATTERN.match(text)
    return float(match.group(0)) if match else default


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def is_table_line(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) > 1 and stripped.startswith("|") and stripped.endswith("|")


def split_row(line: str) -> List[str]:
    parts = CELL_SEPARATOR_PATTERN.split(line.strip())
    if parts and not parts[0].strip():
        parts = parts[1:]
    if parts and not parts[-1].strip():
        parts = parts[:-1]
    return [part.strip() for part in parts]


def read_table(text: str) -> Optional[Tuple[List[str], List[List[str]]]]:
    """
    Find the first pipe table in `text`.

    Returns (header cells, data rows). The separator row is required but
    skipped. The table ends at the first non-blank line that is not a table
    row. Returns None when no header + separator pair exists.
    """
    header = None
    separator_seen = False
    rows = []

    for line in text.split("\n"):
        stripped = line.strip()
        if is_table_line(stripped):
            cells = split_row(stripped)
            if header is None:
                header = cells
            elif not separator_seen:
                separator_seen = True
            else:
                rows.append(cells)
        elif header is not None and stripped:
            break

    if header is None or not separator_seen:
        return None
    return header, rows


def discover_columns(header_cells: Sequence[str]) -> Dict[str, int]:
    """Map column names to indexes, keeping the positional default for unmatched ones."""
    columns = dict(DEFAULT_COLUMNS)

    for index, cell in enumerate(header_cells):
        lower = cell.lower()
        for column, labels in COLUMN_LABELS:
            if any(label in lower for label in labels):
                columns[column] = index
                break

    return columns


def _cell(cells: List[str], index: int) -> Optional[str]:
    return cells[index] if 0 <= index < len(cells) else None


def parse_exercise_rows(text: str, sets_default: int, reps_default: str,
                        with_progression: bool = False) -> List[Dict]:
    """
    Parse an Exercise/Sets/Reps[/Progression] table into row dicts.

    Rows without a resolvable exercise are skipped. A missing, invalid or zero
    set count becomes `sets_default`; a blank rep cell becomes `reps_default`.
    """
    table = read_table(text)
    if table is None:
        return []

    header, rows = table
    columns = discover_columns(header)

    exercises = []
    for cells in rows:
        exercise_id = extract_exercise_id(_cell(cells, columns["exercise"]) or "")
        if not exercise_id:
            continue

        row = {
            "exercise_id": exercise_id,
            "sets": parse_int(_cell(cells, columns["sets"]), 0) or sets_default,
            "reps": (_cell(cells, columns["reps"]) or "").strip() or reps_default,
        }
        if with_progression:
            row["progression"] = _cell(cells, columns["progression"]) or None
        exercises.append(row)

    return exercises


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("-" * (len(h) + 2) for h in headers) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines) + "\n"
