"""
selection.py - Selection State Machine
======================================
Tracks which node (if any) the user has selected.  The UI feeds it clicks;
the highlighter reads `selected`.

State machine:
    NONE      →  click_node(a)   →  a
    a         →  click_node(a)   →  NONE      (toggle off)
    a         →  click_node(b)   →  b         (replace)
    any       →  click_pane()    →  NONE

At most one node is selected at a time.

Clicking a node also copies its label to a clipboard sink.  A successful
copy raises a transient "copied" flag that drops after
COPY_FEEDBACK_SECONDS.  A failing sink is logged and otherwise ignored:
the selection change still happens.

Thread safety:
  Not thread-safe.  Each web session owns its own Selection, rebuilt from
  the session dict on every request.
"""

import logging
import time
from typing import Callable, Optional, Protocol

log = logging.getLogger(__name__)

COPY_FEEDBACK_SECONDS = 2.0


class ClipboardSink(Protocol):
    def write(self, text: str) -> None: ...


class MemoryClipboard:
    """Keeps the last copied text.  The browser does the real clipboard write."""

    def __init__(self):
        self.last: Optional[str] = None

    def write(self, text: str) -> None:
        self.last = text


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------
class Selection:
    """
    Attributes:
        selected  : ID of the selected node, or None.
        clipboard : Where clicked labels are copied to.
        clock     : Wall-clock seconds, so the copy timestamp survives a trip
                    through the session cookie; injectable for tests.
    """

    def __init__(
        self,
        selected: Optional[str] = None,
        clipboard: Optional[ClipboardSink] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.selected: Optional[str]      = selected
        self.clipboard: ClipboardSink     = clipboard or MemoryClipboard()
        self.clock: Callable[[], float]   = clock
        self._copied_text: Optional[str]  = None
        self._copied_at: float            = 0.0

    # ------------------------------------------------------------------
    # Clicks
    # ------------------------------------------------------------------
    def click_node(self, node_id: str, label: str) -> Optional[str]:
        """Toggle `node_id` and copy its label.  Returns the new selection."""
        self.selected = None if self.selected == node_id else node_id
        self._copy(label)
        return self.selected

    def click_pane(self) -> None:
        self.selected = None

    def clear(self) -> None:
        self.selected = None
        self._copied_text = None

    # ------------------------------------------------------------------
    # Copy feedback
    # ------------------------------------------------------------------
    @property
    def copied_text(self) -> Optional[str]:
        """Last copied label while the feedback window is open, else None."""
        if self._copied_text is not None:
            elapsed = self.clock() - self._copied_at
            # a timestamp from the future (clock skew between workers) expires too
            if not 0 <= elapsed < COPY_FEEDBACK_SECONDS:
                self._copied_text = None
        return self._copied_text

    @property
    def is_selected(self) -> bool:
        return self.selected is not None

    def _copy(self, label: str) -> None:
        try:
            self.clipboard.write(label)
        except Exception as exc:
            log.warning("failed to copy %r to clipboard: %s", label, exc)
            return
        self._copied_text = label
        self._copied_at = self.clock()

    # ------------------------------------------------------------------
    # Serialisation  (web session)
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "selected":    self.selected,
            "copied_text": self._copied_text,
            "copied_at":   self._copied_at,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        clipboard: Optional[ClipboardSink] = None,
        clock: Callable[[], float] = time.time,
    ) -> "Selection":
        sel = cls(selected=data.get("selected"), clipboard=clipboard, clock=clock)
        sel._copied_text = data.get("copied_text")
        sel._copied_at = data.get("copied_at", 0.0)
        return sel

    def __repr__(self) -> str:
        return f"Selection(selected={self.selected}, copied={self._copied_text is not None})"
