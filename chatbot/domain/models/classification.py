from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

NONE_INTENT = "None"


@dataclass(frozen=True)
class IntentScore:
    """Immutable value object pairing an intent label with its confidence."""
    intent: str
    score: float


@dataclass(frozen=True)
class Entity:
    """A builtin named entity found in an utterance."""
    entity: str
    start: int
    end: int
    len: int
    accuracy: float
    source_text: str
    resolution: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ClassificationResult:
    """
    Raw outcome of classifying one utterance.

    `intent` is NONE_INTENT when no known intent reaches the classifier's
    threshold; `classifications` still lists every known intent, best first.
    """
    locale: str
    utterance: str
    intent: str
    score: float
    classifications: List[IntentScore] = field(default_factory=list)
    entities: List[Entity] = field(default_factory=list)
    answers: List[str] = field(default_factory=list)
    answer: Optional[str] = None

    @property
    def is_match(self) -> bool:
        return self.intent != NONE_INTENT

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
