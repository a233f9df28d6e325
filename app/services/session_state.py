"""Per-session UI state: trending list, selection, generation history

Held in process memory only; cleared on restart.
"""
import itertools
import uuid
from dataclasses import dataclass, field
from typing import Optional

from .gnews_service import DEFAULT_REGION, TrendingItem
from .script_generator import GeneratedEntry

# Logical request slots. A completion only applies if its token is still the latest for the slot.
SLOT_TRENDING = "trending"
SLOT_SCRIPT = "script"
SLOT_IMAGE = "image"

_DEFAULT_HISTORY_LIMIT = 50


@dataclass
class SessionState:
    region: str = DEFAULT_REGION
    items: list[TrendingItem] = field(default_factory=list)
    selected: Optional[GeneratedEntry] = None
    history: list[GeneratedEntry] = field(default_factory=list)
    history_limit: int = _DEFAULT_HISTORY_LIMIT
    loaded_region: Optional[str] = None
    _counter: "itertools.count[int]" = field(default_factory=itertools.count, repr=False)
    _tokens: dict[str, int] = field(default_factory=dict, repr=False)

    def begin(self, slot: str) -> int:
        """Start a request in ``slot``; returns its sequence token"""
        token = next(self._counter)
        self._tokens[slot] = token
        return token

    def is_current(self, slot: str, token: int) -> bool:
        return self._tokens.get(slot) == token

    def find_item(self, item_id: str) -> Optional[TrendingItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def needs_refresh(self, region: str) -> bool:
        return not self.items or self.loaded_region != region

    def set_items(self, region: str, items: list[TrendingItem]) -> None:
        self.items = list(items)
        self.loaded_region = region

    def add_history(self, entry: GeneratedEntry) -> None:
        """Newest first; the oldest entries beyond the limit are dropped"""
        self.history.insert(0, entry)
        del self.history[self.history_limit:]


class SessionStore:
    """SessionState by session id, keeping at most ``max_sessions`` (oldest evicted)"""

    def __init__(self, max_sessions: int = 500, history_limit: int = _DEFAULT_HISTORY_LIMIT):
        self.max_sessions = max_sessions
        self.history_limit = history_limit
        self._sessions: dict[str, SessionState] = {}

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    def get(self, session_id: str) -> SessionState:
        state = self._sessions.pop(session_id, None)
        if state is None:
            state = SessionState(history_limit=self.history_limit)
        self._sessions[session_id] = state
        while len(self._sessions) > self.max_sessions:
            self._sessions.pop(next(iter(self._sessions)))
        return state

    def __len__(self) -> int:
        return len(self._sessions)
