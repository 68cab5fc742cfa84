"""
Line-oriented scanner for gettext PO/POT catalogs.

The scanner is an explicit finite-state machine. Every input line is
classified by its prefix into a ``LineKind`` and fed to the handler of the
current ``ScanState``. Handlers either accumulate the line into the pending
entry, flush a finished entry, or recover from malformed input by dropping
what is pending.

Texts are kept exactly as they appear between the quotes of the source
lines (escaped PO form), so an entry that is not translated can be written
back byte-identical to the source.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from po_translation_generator.utils.constants import SKIP_TRANSLATION_SECTIONS

logger = logging.getLogger(__name__)


class LineKind(Enum):
    COMMENT = "comment"
    MSGCTXT = "msgctxt"
    MSGID = "msgid"
    MSGID_PLURAL = "msgid_plural"
    MSGSTR = "msgstr"
    CONTINUATION = "continuation"
    BLANK = "blank"
    OTHER = "other"


class ScanState(Enum):
    IDLE = "idle"
    IN_METADATA = "in_metadata"
    HAVE_MSGCTXT = "have_msgctxt"
    HAVE_MSGID = "have_msgid"
    HAVE_MSGID_PLURAL = "have_msgid_plural"
    DISCARDING_PLURAL = "discarding_plural"


# Order matters: "msgid_plural" also starts with "msgid"
_LINE_PREFIXES = (
    ("#", LineKind.COMMENT),
    ("msgctxt", LineKind.MSGCTXT),
    ("msgid_plural", LineKind.MSGID_PLURAL),
    ("msgid", LineKind.MSGID),
    ("msgstr", LineKind.MSGSTR),
    ('"', LineKind.CONTINUATION),
)


def classify_line(line: str) -> LineKind:
    """Classify a catalog line by its prefix."""
    if not line.strip():
        return LineKind.BLANK
    for prefix, kind in _LINE_PREFIXES:
        if line.startswith(prefix):
            return kind
    return LineKind.OTHER


def quoted_text(line: str) -> str:
    """
    Return the characters between the first and the last double quote.

    Escape sequences are left untouched, ``msgid "Say \\"hi\\""`` gives
    ``Say \\"hi\\"``.
    """
    start = line.find('"')
    end = line.rfind('"')
    if start == -1 or end <= start:
        return ""
    return line[start + 1 : end]


def is_skip_marker(line: str) -> bool:
    """True if a comment line marks boilerplate that is never translated."""
    return any(section in line for section in SKIP_TRANSLATION_SECTIONS)


@dataclass
class CatalogEntry:
    """A singular catalog entry as read from the source."""

    metadata: list[str]
    msgctxt_lines: list[str]
    msgid_lines: list[str]
    msgid: str
    skip: bool = False
    line_number: int = 0

    @property
    def is_plural(self) -> bool:
        return False

    @property
    def source_texts(self) -> list[str]:
        return [self.msgid]


@dataclass
class PluralEntry(CatalogEntry):
    """A catalog entry carrying a ``msgid_plural``."""

    msgid_plural_lines: list[str] = field(default_factory=list)
    msgid_plural: str = ""

    @property
    def is_plural(self) -> bool:
        return True

    @property
    def source_texts(self) -> list[str]:
        return [self.msgid, self.msgid_plural]


@dataclass
class _PendingEntry:
    metadata: list[str] = field(default_factory=list)
    skip: bool = False
    msgctxt_lines: list[str] = field(default_factory=list)
    msgid_lines: list[str] = field(default_factory=list)
    msgid_parts: list[str] = field(default_factory=list)
    msgid_plural_lines: list[str] = field(default_factory=list)
    msgid_plural_parts: list[str] = field(default_factory=list)
    line_number: int = 0


class CatalogScanner:
    """
    Finite-state machine turning catalog lines into entries.

    Call ``feed`` with each line; it returns the entry completed by that
    line, if any. ``finish`` must be called once the input is exhausted.
    """

    def __init__(self):
        self.state = ScanState.IDLE
        self._pending = _PendingEntry()
        self._line_number = 0
        self._handlers = {
            ScanState.IDLE: self._on_idle,
            ScanState.IN_METADATA: self._on_idle,
            ScanState.HAVE_MSGCTXT: self._on_msgctxt,
            ScanState.HAVE_MSGID: self._on_msgid,
            ScanState.HAVE_MSGID_PLURAL: self._on_msgid_plural,
            ScanState.DISCARDING_PLURAL: self._on_discarding_plural,
        }

    def feed(self, line: str) -> CatalogEntry | None:
        self._line_number += 1
        line = line.rstrip("\r\n")
        return self._handlers[self.state](line, classify_line(line))

    def finish(self) -> None:
        if self.state in (ScanState.HAVE_MSGID, ScanState.HAVE_MSGID_PLURAL):
            logger.debug(
                "Dropping msgid at line %s: end of input before msgstr",
                self._pending.line_number,
            )
        self._reset()

    def _reset(self) -> None:
        self._pending = _PendingEntry()
        self.state = ScanState.IDLE

    def _drop_and_reprocess(self, line: str, kind: LineKind) -> CatalogEntry | None:
        logger.debug(
            "Dropping incomplete entry at line %s: unexpected %s at line %s",
            self._pending.line_number,
            kind.value,
            self._line_number,
        )
        self._reset()
        return self._on_idle(line, kind)

    def _start_msgid(self, line: str) -> None:
        self._pending.msgid_lines.append(line)
        self._pending.msgid_parts.append(quoted_text(line))
        self._pending.line_number = self._line_number
        self.state = ScanState.HAVE_MSGID

    def _on_idle(self, line: str, kind: LineKind) -> CatalogEntry | None:
        if kind == LineKind.COMMENT:
            self._pending.metadata.append(line)
            if is_skip_marker(line):
                self._pending.skip = True
            self.state = ScanState.IN_METADATA
        elif kind == LineKind.MSGCTXT:
            self._pending.msgctxt_lines.append(line)
            self.state = ScanState.HAVE_MSGCTXT
        elif kind == LineKind.MSGID:
            self._start_msgid(line)
        elif kind == LineKind.MSGID_PLURAL:
            logger.warning(
                "Removing msgid_plural section without msgid at line %s",
                self._line_number,
            )
            self._reset()
            self.state = ScanState.DISCARDING_PLURAL
        elif kind == LineKind.OTHER:
            logger.debug("Ignoring unrecognized line %s", self._line_number)
        # msgstr and continuation lines without a pending msgid are inert
        return None

    def _on_msgctxt(self, line: str, kind: LineKind) -> CatalogEntry | None:
        if kind == LineKind.CONTINUATION:
            self._pending.msgctxt_lines.append(line)
        elif kind == LineKind.MSGID:
            self._start_msgid(line)
        elif kind != LineKind.BLANK:
            return self._drop_and_reprocess(line, kind)
        return None

    def _on_msgid(self, line: str, kind: LineKind) -> CatalogEntry | None:
        if kind == LineKind.CONTINUATION:
            self._pending.msgid_lines.append(line)
            self._pending.msgid_parts.append(quoted_text(line))
        elif kind == LineKind.MSGID_PLURAL:
            self._pending.msgid_plural_lines.append(line)
            self._pending.msgid_plural_parts.append(quoted_text(line))
            self.state = ScanState.HAVE_MSGID_PLURAL
        elif kind == LineKind.MSGSTR:
            return self._flush(plural=False)
        elif kind != LineKind.BLANK:
            return self._drop_and_reprocess(line, kind)
        return None

    def _on_msgid_plural(self, line: str, kind: LineKind) -> CatalogEntry | None:
        if kind == LineKind.CONTINUATION:
            self._pending.msgid_plural_lines.append(line)
            self._pending.msgid_plural_parts.append(quoted_text(line))
        elif kind == LineKind.MSGSTR:
            return self._flush(plural=True)
        elif kind != LineKind.BLANK:
            return self._drop_and_reprocess(line, kind)
        return None

    def _on_discarding_plural(self, line: str, kind: LineKind) -> CatalogEntry | None:
        if kind in (LineKind.MSGSTR, LineKind.COMMENT, LineKind.CONTINUATION):
            return None
        self.state = ScanState.IDLE
        return self._on_idle(line, kind)

    def _flush(self, *, plural: bool) -> CatalogEntry | None:
        pending = self._pending
        self._reset()
        msgid = "".join(pending.msgid_parts)
        if not msgid:
            # The header entry; a fresh one is generated for every output
            logger.debug("Skipping catalog header at line %s", pending.line_number)
            return None
        common = {
            "metadata": pending.metadata,
            "msgctxt_lines": pending.msgctxt_lines,
            "msgid_lines": pending.msgid_lines,
            "msgid": msgid,
            "skip": pending.skip,
            "line_number": pending.line_number,
        }
        if plural:
            return PluralEntry(
                **common,
                msgid_plural_lines=pending.msgid_plural_lines,
                msgid_plural="".join(pending.msgid_plural_parts),
            )
        return CatalogEntry(**common)


def scan_catalog(
    lines: Iterable[str], plural: bool | None = None
) -> Iterator[CatalogEntry]:
    """
    Scan catalog lines into entries, in source order.

    Args:
        lines: Catalog lines, with or without line terminators
        plural: ``None`` yields every entry, ``False`` only singular entries
            and ``True`` only plural entries

    Yields:
        ``CatalogEntry`` and ``PluralEntry`` records
    """
    scanner = CatalogScanner()
    for line in lines:
        entry = scanner.feed(line)
        if entry is None:
            continue
        if plural is None or entry.is_plural == plural:
            yield entry
    scanner.finish()
