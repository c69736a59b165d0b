"""
Linear edit history for Ayra.

The ledger is an ordered list of ImageResources plus a cursor. Entry 0 is the
original upload for the session. Appending while the cursor is behind the
newest entry discards the redo branch before appending, so history never
forks.

Classes:
    HistoryLedger: Cursor-addressed undo/redo over immutable image resources
"""

from typing import List, Optional, Tuple
import logging

from AY_Libs.ImageEditingLib.image_models import ImageResource, describe_resource

logger = logging.getLogger(__name__)


class HistoryLedger:
    """
    Branch-truncating undo/redo ledger.

    Invariants:
        - cursor == -1 exactly when there are no entries
        - entries are never mutated; transitions replace the tuple or move the cursor

    Example:
        >>> ledger = HistoryLedger()
        >>> ledger.load(upload)
        >>> ledger.append(edited)
        >>> ledger.undo()
        True
        >>> ledger.current() is upload
        True
    """

    def __init__(self):
        self._entries: Tuple[ImageResource, ...] = ()
        self._cursor = -1

    @property
    def entries(self) -> Tuple[ImageResource, ...]:
        return self._entries

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        """Forget everything; used when the session restarts."""
        self._entries = ()
        self._cursor = -1
        logger.debug("History reset")

    def load(self, initial: ImageResource) -> None:
        """Start a new history with a freshly selected image, discarding the old one."""
        self._entries = (initial,)
        self._cursor = 0
        logger.debug(f"History loaded with {describe_resource(initial)}")

    def append(self, entry: ImageResource) -> None:
        """
        Record a new version after the cursor.

        Entries after the cursor (the redo branch) are discarded first. On an
        empty ledger the entry becomes the original.
        """
        dropped = len(self._entries) - (self._cursor + 1)
        self._entries = self._entries[: self._cursor + 1] + (entry,)
        self._cursor = len(self._entries) - 1
        if dropped:
            logger.debug(f"Discarded {dropped} redo entries")
        logger.debug(f"History append {describe_resource(entry)} at {self._cursor}")

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self._cursor -= 1
        logger.debug(f"Undo to {self._cursor}")
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self._cursor += 1
        logger.debug(f"Redo to {self._cursor}")
        return True

    def current(self) -> Optional[ImageResource]:
        if self._cursor == -1:
            return None
        return self._entries[self._cursor]

    def original(self) -> Optional[ImageResource]:
        if not self._entries:
            return None
        return self._entries[0]

    def resources(self) -> List[ImageResource]:
        return list(self._entries)
