import re
from typing import Any, Dict, List, Pattern, Tuple

from chatbot.domain.models.classification import Entity

# Builtin entity patterns, highest priority first when two matches share a span.
_ENTITY_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("email", re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")),
    ("url", re.compile(r"\bhttps?://[^\s]+|\bwww\.[^\s]+", re.IGNORECASE)),
    ("phonenumber", re.compile(
        r"(?<!\w)(?:\+\d{1,3}[\s.-]?)?(?:\(\d{3}\)\s*|\d{3}[\s.-]?)\d{3}[\s.-]?\d{4}\b"
    )),
    ("percentage", re.compile(r"(?<![\w.])-?\d+(?:\.\d+)?\s?%")),
    ("number", re.compile(r"(?<![\w.])-?\d+(?:\.\d+)?\b")),
]

ENTITY_ACCURACY = 0.95


def _parse_number(text: str) -> Any:
    text = text.strip().rstrip("%").strip()
    return float(text) if "." in text else int(text)


def _resolve(entity: str, text: str) -> Dict[str, Any]:
    if entity == "number":
        return {"str_value": text, "value": _parse_number(text)}
    if entity == "percentage":
        return {"str_value": text, "value": _parse_number(text), "subtype": "percentage"}
    return {"value": text}


def extract_entities(text: str) -> List[Entity]:
    """
    Find builtin entities in an utterance.

    Overlapping candidates are resolved by keeping the one that starts first,
    then the longest, then the higher-priority entity type.

    Args:
        text: Utterance to scan

    Returns:
        Non-overlapping entities ordered by position
    """
    candidates = []
    for priority, (name, pattern) in enumerate(_ENTITY_PATTERNS):
        for match in pattern.finditer(text):
            candidates.append((match.start(), -(match.end() - match.start()), priority, name, match))

    entities: List[Entity] = []
    last_end = -1
    for start, _, _, name, match in sorted(candidates, key=lambda c: c[:3]):
        if start < last_end:
            continue
        source_text = match.group(0)
        entities.append(Entity(
            entity=name,
            start=start,
            end=match.end() - 1,
            len=len(source_text),
            accuracy=ENTITY_ACCURACY,
            source_text=source_text,
            resolution=_resolve(name, source_text),
        ))
        last_end = match.end()
    return entities
