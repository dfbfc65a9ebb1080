from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScoreEntry:
    """A recorded (name, score) pair in the high score ledger."""
    name: str
    score: int

    def serialize(self) -> str:
        return f"{self.name}:{self.score}"

    @classmethod
    def parse(cls, raw: object) -> "ScoreEntry | None":
        """Parse a stored ``"name:score"`` string, returning None when malformed."""
        if not isinstance(raw, str):
            return None
        name, sep, score_text = raw.rpartition(":")
        if not sep or not name:
            return None
        try:
            score = int(score_text)
        except ValueError:
            return None
        return cls(name=name, score=score)

    @staticmethod
    def sort_key(entry: "ScoreEntry") -> tuple[int, str]:
        return (-entry.score, entry.name)
