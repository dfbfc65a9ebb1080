from __future__ import annotations

import json
import logging
from typing import List, Optional

from recall.components.score_entry import ScoreEntry
from recall.constants import HIGH_SCORE_CAPACITY, PREF_HIGH_SCORES
from recall.events.bus import EVENT_HIGH_SCORES_CHANGED, EventBus
from recall.utils.preferences import PreferencesStore

logger = logging.getLogger(__name__)


class HighScoreLedger:
    """Bounded ranked list of the best (name, score) pairs.

    Stored under ``high_scores`` as a JSON array of ``"name:score"`` strings.
    Entries are unique on the full pair, so one name may hold several places
    with different scores. Order is score descending, then name ascending.
    """

    def __init__(
        self,
        preferences: PreferencesStore,
        *,
        capacity: int = HIGH_SCORE_CAPACITY,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._preferences = preferences
        self._capacity = capacity
        self.event_bus = event_bus
        self._entries: List[ScoreEntry] = []
        self.load()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> List[ScoreEntry]:
        return list(self._entries)

    def load(self) -> List[ScoreEntry]:
        raw = self._preferences.get(PREF_HIGH_SCORES)
        self._entries = self._rank(self._parse(raw))
        return self.entries

    def record(self, name: str | None, score: int) -> List[ScoreEntry]:
        """Merge a finished session's score; a missing name records nothing."""
        player = (name or "").strip()
        if not player:
            logger.info("No player name set; score %d not recorded", score)
            return self.entries
        self._entries = self._rank([*self._entries, ScoreEntry(name=player, score=int(score))])
        self._save()
        return self.entries

    def _rank(self, entries: List[ScoreEntry]) -> List[ScoreEntry]:
        unique =list(dict.fromkeys(entries))
        unique.sort(key=ScoreEntry.sort_key)
        return unique[: self._capacity]

    def _parse(self, raw: str | None) -> List[ScoreEntry]:
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Discarding unreadable high scores: %s", e)
            return []
        if not isinstance(payload, list):
            logger.warning("Discarding high scores: expected a list, got %s", type(payload).__name__)
            return []
        entries: List[ScoreEntry] = []
        for item in payload:
            entry = ScoreEntry.parse(item)
            if entry is None:
                logger.warning("Skipping malformed high score entry %r", item)
                continue
            entries.append(entry)
        return entries

    def _save(self) -> None:
        self._preferences.set(
            PREF_HIGH_SCORES,
            json.dumps([entry.serialize() for entry in self._entries]),
        )
        if self.event_bus is not None:
            self.event_bus.emit(EVENT_HIGH_SCORES_CHANGED, entries=self.entries)
