from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TrainingRecord:
    """
    An intent definition with example utterances and candidate answers.

    The id is assigned by the document store and lives outside the stored
    document body; it is attached when a record is read back.
    """
    intent: str
    utterances: List[str] = field(default_factory=list)
    answers: List[str] = field(default_factory=list)
    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        """Document body as persisted, without the id."""
        return {
            "intent": self.intent,
            "utterances": list(self.utterances),
            "answers": list(self.answers),
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.to_document()
        if self.id is not None:
            data["id"] = self.id
        return data

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "TrainingRecord":
        """
        Build a record from a stored document body.

        Stored documents written by other clients may lack fields or carry
        scalars where lists are expected; both are normalised to lists.
        """
        return cls(
            id=doc_id,
            intent=data.get("intent", ""),
            utterances=_as_list(data.get("utterances")),
            answers=_as_list(data.get("answers")),
        )


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
