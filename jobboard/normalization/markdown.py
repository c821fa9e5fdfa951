"""Best-effort cleanup of markdown job descriptions.

Descriptions are authored by hand in the record store and arrive with a known
set of formatting defects: labels like ``**Requirements :**text``, headings
glued to the previous sentence, nested bullets indented by two spaces, bold
runs stuck together, and so on. This module repairs them without parsing the
markdown.

The cleanup is an ordered pipeline of named rewrite stages (SANITIZER_STAGES).
Each stage is a pure ``str -> str`` function and can be tested on its own.
Later stages assume earlier ones already ran, so the order is fixed.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Tuple

# A bold run on a single line: **text**
BOLD_RUN = re.compile(r"\*\*([^*\n]+?)\*\*")

# A bold label: **Requirements:**
LABEL_RUN = re.compile(r"\*\*[^*\n:]+:\*\*")

_LABEL_CONTENT = re.compile(r"(.*?)[ \t]*:[ \t]*")
_ORDINAL_MARKER = re.compile(r"\d+\.")
_MARKER_ONLY = re.compile(r"[ \t]*(?:[-*+]|\d+\.|#{1,6})?[ \t]*")
_NESTED_ITEM = re.compile(r"[ \t]{1,3}(- .*)")

_HEADING_AFTER_TEXT = re.compile(r"(\S)\s*(?<!#)###(?!#)")
_HEADING_LINE = re.compile(r"(?<!#)###(?!#)[ \t]*([^\n]*)(\n|\Z)")
_HEADING_BOLD = re.compile(r"(?<!#)###(?!#)[ \t]*\*\*([^*\n]+?)\*\*")

_ADJACENT_BOLD = re.compile(r"\*\*([^*\n]+?)\*\*(?=\*\*[^*\n]+?\*\*)")
_BLANK_LINE_RUN = re.compile(r"\n(?:[ \t]*\n){2,}")
_INNER_SPACE_RUN = re.compile(r"(?<=\S)[ \t]+")

NESTED_LIST_INDENT = "    "


@dataclass(frozen=True)
class RewriteStage:
    """One named step of the sanitizer pipeline."""

    name: str
    rewrite: Callable[[str], str]

    def __call__(self, text: str) -> str:
        return self.rewrite(text)


def is_list_item(line: str) -> bool:
    """Whether a line, once trimmed, starts with ``- `` or an ordinal ``N.``."""
    stripped = line.strip()
    return stripped.startswith("- ") or _ORDINAL_MARKER.match(stripped) is not None


def _is_bold_only(line: str) -> bool:
    return BOLD_RUN.fullmatch(line.strip()) is not None


def _starts_with_label(line: str) -> bool:
    return LABEL_RUN.match(line.lstrip()) is not None


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def tighten_bold_labels(text: str) -> str:
    """Rewrite ``**Label :**text`` as ``**Label:** text``.

    Spaces around the colon inside a bold label are removed, and exactly one
    space is inserted when the closing marker is immediately followed by a
    non-whitespace character.
    """

    def _tighten(match: re.Match) -> str:
        label = _LABEL_CONTENT.fullmatch(match.group(1))
        if label is None or not label.group(1).strip():
            return match.group(0)
        following = match.string[match.end():match.end() + 1]
        spacer = " " if following and not following.isspace() else ""
        return f"**{label.group(1).strip()}:**{spacer}"

    return BOLD_RUN.sub(_tighten, text)


def space_headings(text: str) -> str:
    """Put ``###`` headings on their own paragraph.

    A heading glued to preceding text gets a blank line before it, the marker
    is followed by exactly one space, and a heading line that is not the last
    line is followed by a blank line.
    """

    def _space(match: re.Match) -> str:
        trailer = "\n\n" if match.group(2) else ""
        return f"### {match.group(1)}{trailer}"

    text = _HEADING_AFTER_TEXT.sub(r"\1\n\n###", text)
    return _HEADING_LINE.sub(_space, text)


def wrap_bold_headings(text: str) -> str:
    """Normalize ``###**Title **`` to ``### **Title**``."""

    def _wrap(match: re.Match) -> str:
        title = match.group(1).strip()
        if not title:
            return match.group(0)
        return f"### **{title}**"

    return _HEADING_BOLD.sub(_wrap, text)


def _split_at_labels(line: str) -> List[str]:
    """Split a line before every label that follows other text.

    A label that directly follows a bare list or heading marker stays where
    it is ("- **Stack:** Python").
    """
    pieces = []
    start = 0
    for match in LABEL_RUN.finditer(line):
        head = line[start:match.start()]
        if start == 0 and _MARKER_ONLY.fullmatch(head):
            continue
        pieces.append(head.rstrip() if start == 0 else head.strip())
        start = match.start()
    tail = line[start:]
    pieces.append(tail if start == 0 else tail.strip())
    return pieces


def force_labels_onto_own_paragraph(text: str) -> str:
    """Move bold labels glued to prose or list text onto their own paragraph.

    ``Some text **Benefits:** more`` becomes ``Some text``, a blank line, then
    ``**Benefits:** more``. A line that starts with a label and follows a
    non-blank line is also separated by a blank line.
    """
    lines: List[str] = []
    for line in text.split("\n"):
        for piece in _split_at_labels(line):
            if _starts_with_label(piece) and lines and lines[-1].strip():
                lines.append("")
            lines.append(piece)
    return "\n".join(lines)


def normalize_nested_list_indent(text: str) -> str:
    """Re-indent nested ``- `` items to four spaces.

    A list starts at the first list item outside a list and continues through
    nested items, blank lines and continuation lines; it ends at a heading or
    at a non-list line that follows a blank line. The first item's indent is
    the list's base indent and is removed from every item of the list, so
    ``  - a\\n  - b`` becomes ``- a\\n- b``. After that, items indented by one
    to three spaces or tabs are nested under the item above.
    """
    lines = []
    in_list = False
    base_indent = ""
    previous_blank = True
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            previous_blank = True
            lines.append(line)
            continue

        if is_list_item(stripped):
            indent = line[: len(line) - len(line.lstrip())]
            if not in_list or not indent.startswith(base_indent):
                in_list = True
                base_indent = indent
            line = line[len(base_indent):]
            nested = _NESTED_ITEM.fullmatch(line)
            if nested:
                line = NESTED_LIST_INDENT + nested.group(1)
        elif previous_blank or stripped.startswith("#"):
            in_list = False

        previous_blank = False
        lines.append(line)
    return "\n".join(lines)


def join_list_item_bold_continuation(text: str) -> str:
    """Join a bold line onto the list item directly above it.

    ``- Experience with\\n**Kubernetes**`` becomes
    ``- Experience with **Kubernetes**``. Items ending in ``:`` and bold
    labels are left alone.
    """
    lines: List[str] = []
    for line in text.split("\n"):
        if lines and is_list_item(lines[-1]) and not lines[-1].rstrip().endswith(":"):
            bold = BOLD_RUN.match(line.lstrip())
            if bold and ":" not in bold.group(1):
                lines[-1] = f"{lines[-1].rstrip()} {line.strip()}"
                continue
        lines.append(line)
    return "\n".join(lines)


def separate_adjacent_bold_runs(text: str) -> str:
    """Split ``**One****Two**`` into two paragraphs."""
    return _ADJACENT_BOLD.sub(r"**\1**\n\n", text)


def collapse_whitespace(text: str) -> str:
    """Collapse blank-line runs to one blank line and space runs to one space.

    Whitespace-only lines count as blank. Leading indentation is kept so nested
    list items survive.
    """
    text = _BLANK_LINE_RUN.sub("\n\n", text)
    return _INNER_SPACE_RUN.sub(" ", text)


def dedent_prose_lines(text: str) -> str:
    """Trim every line except list items, which keep their indentation."""
    return "\n".join(
        line.rstrip() if is_list_item(line) else line.strip()
        for line in text.split("\n")
    )


def _surround_bold_only_lines(text: str) -> str:
    lines = text.split("\n")
    result: List[str] = []
    for index, line in enumerate(lines):
        if not _is_bold_only(line):
            result.append(line)
            continue
        if result and result[-1].strip():
            result.append("")
        result.append(line)
        if index + 1 < len(lines) and lines[index + 1].strip():
            result.append("")
    return "\n".join(result)


def _separate_trailing_paragraph(text: str) -> str:
    lines = text.rstrip().split("\n")
    if len(lines) < 2:
        return text
    last, previous = lines[-1], lines[-2]
    if is_list_item(last) or "**" in last or not previous.strip():
        return text
    return "\n".join(lines[:-1] + ["", last])


def final_cleanup(text: str) -> str:
    """Re-apply label rules after dedenting, then pad bold lines and the last paragraph."""
    text = force_labels_onto_own_paragraph(text)
    text = tighten_bold_labels(text)
    text = _surround_bold_only_lines(text)
    return _separate_trailing_paragraph(text)


def trim(text: str) -> str:
    return text.strip()


SANITIZER_STAGES: Tuple[RewriteStage, ...] = (
    RewriteStage("normalize_line_endings", normalize_line_endings),
    RewriteStage("tighten_bold_labels", tighten_bold_labels),
    RewriteStage("space_headings", space_headings),
    RewriteStage("wrap_bold_headings", wrap_bold_headings),
    RewriteStage("force_labels_onto_own_paragraph", force_labels_onto_own_paragraph),
    RewriteStage("normalize_nested_list_indent", normalize_nested_list_indent),
    RewriteStage("join_list_item_bold_continuation", join_list_item_bold_continuation),
    RewriteStage("separate_adjacent_bold_runs", separate_adjacent_bold_runs),
    RewriteStage("collapse_whitespace", collapse_whitespace),
    RewriteStage("dedent_prose_lines", dedent_prose_lines),
    RewriteStage("final_cleanup", final_cleanup),
    RewriteStage("trim", trim),
)


def sanitize_markdown(text: object) -> str:
    """Run a description through every sanitizer stage in order.

    Args:
        text: Raw description; None, empty or non-string input yields ""

    Returns:
        Cleaned markdown
    """
    if not text or not isinstance(text, str):
        return ""
    for stage in SANITIZER_STAGES:
        text = stage(text)
    return text
