"""Deciding where a transcript goes and putting it there."""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from .errors import InvalidCursor, StorageFailure

logger = logging.getLogger(__name__)

NOTE_EXTENSION = ".md"


@dataclass(frozen=True)
class CursorPosition:
    """Cursor location in a document (zero-based line, character offset)."""

    line: int
    ch: int


@dataclass(frozen=True)
class NewDocument:
    """Create a note at ``path`` (relative to the vault)."""

    path: str


@dataclass(frozen=True)
class InsertAtCursor:
    """Insert the transcript into the active document at ``position``."""

    position: CursorPosition


PlacementDecision = Union[NewDocument, InsertAtCursor]


def _join_folder(folder: str, name: str) -> str:
    return f"{folder}/{name}" if folder else name


def note_path_for(file_name: str, folder: str = "") -> str:
    """Vault path of the note created for a recording."""
    return _join_folder(folder, f"{PurePosixPath(file_name).stem}{NOTE_EXTENSION}")


def audio_path_for(file_name: str, folder: str = "") -> str:
    """Vault path the recording itself is saved under."""
    return _join_folder(folder, file_name)


def build_note_content(text: str, audio_link: Optional[str] = None) -> str:
    """Note body: optional audio embed line followed by the transcript."""
    if audio_link:
        return f"![[{audio_link}]]\n{text}"
    return text


def advance_cursor(cursor: CursorPosition, text: str) -> CursorPosition:
    """Cursor position after inserting text at ``cursor``."""
    return CursorPosition(line=cursor.line, ch=cursor.ch + len(text))


def decide_placement(
    create_new_file: bool,
    has_active_document: bool,
    note_path: str,
    cursor: Optional[CursorPosition] = None,
) -> PlacementDecision:
    """Pick between a new note and an insertion at the cursor.

    Args:
        create_new_file: User preference to always create a new note.
        has_active_document: Whether an editable document is open.
        note_path: Vault path to use if a new note is created.
        cursor: Cursor of the active document.

    Returns:
        NewDocument or InsertAtCursor.
    """
    if create_new_file or not has_active_document or cursor is None:
        return NewDocument(path=note_path)
    return InsertAtCursor(position=cursor)


class TextEditor:
    """An editable document with a single cursor."""

    def __init__(self, text: str = "", cursor: Optional[CursorPosition] = None):
        self.text = text
        self._cursor = cursor or self.end_position()

    def end_position(self) -> CursorPosition:
        lines = self.text.split("\n")
        return CursorPosition(line=len(lines) - 1, ch=len(lines[-1]))

    def get_cursor(self) -> CursorPosition:
        return self._cursor

    def set_cursor(self, position: CursorPosition) -> None:
        self._cursor = position

    def _offset(self, position: CursorPosition) -> int:
        lines = self.text.split("\n")
        if not 0 <= position.line < len(lines):
            raise InvalidCursor(position.line, position.ch, "line out of range")
        if not 0 <= position.ch <= len(lines[position.line]):
            raise InvalidCursor(position.line, position.ch, "column out of range")
        return sum(len(line) + 1 for line in lines[: position.line]) + position.ch

    def replace_range(self, text: str, position: CursorPosition) -> None:
        """Insert text at position (no range is replaced)."""
        offset = self._offset(position)
        self.text = self.text[:offset] + text + self.text[offset:]


class FileEditor(TextEditor):
    """TextEditor backed by a note file on disk."""

    def __init__(self, path: Path, text: str, cursor: Optional[CursorPosition] = None):
        super().__init__(text, cursor)
        self.path = path

    @classmethod
    def open(cls, path: Path, cursor: Optional[CursorPosition] = None) -> "FileEditor":
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageFailure(path, e) from e
        editor = cls(path, text, cursor)
        if cursor is not None:
            editor._offset(cursor)
        return editor

    def save(self) -> None:
        try:
            self.path.write_text(self.text, encoding="utf-8")
        except OSError as e:
            raise StorageFailure(self.path, e) from e


class Vault:
    """Filesystem document store rooted at a directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def resolve(self, rel_path: str) -> Path:
        path = (self.root / rel_path).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise StorageFailure(path, ValueError("Path escapes the vault"))
        return path

    def exists(self, rel_path: str) -> bool:
        return self.resolve(rel_path).exists()

    def write_binary(self, rel_path: str, data: bytes) -> Path:
        path = self.resolve(rel_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageFailure(path, e) from e
        return path

    def create(self, rel_path: str, content: str) -> Path:
        """Create a new note; an existing note is never overwritten."""
        path = self.resolve(rel_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "x", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise StorageFailure(path, e) from e
        return path


def apply_placement(
    decision: PlacementDecision,
    text: str,
    vault: Vault,
    editor: Optional[TextEditor] = None,
    audio_link: Optional[str] = None,
) -> Union[Path, CursorPosition]:
    """Carry out a placement decision.

    Returns:
        The created note path, or the cursor position after the insertion.
    """
    if isinstance(decision, NewDocument):
        path = vault.create(decision.path, build_note_content(text, audio_link))
        logger.info(f"Created note {path}")
        return path

    if editor is None:
        raise ValueError("Inserting at the cursor requires an active editor")

    editor.replace_range(text, decision.position)
    new_position = advance_cursor(decision.position, text)
    editor.set_cursor(new_position)
    logger.info(f"Inserted {len(text)} chars at {decision.position}")
    return new_position
