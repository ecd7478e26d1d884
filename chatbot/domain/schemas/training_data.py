from typing import Any, Dict, List

from pydantic import BaseModel, Field


class TrainingRecordResponse(BaseModel):
    """Schema for a stored training record"""
    id: str = Field(..., description="Store-assigned identifier of the record")
    intent: Any = Field(..., description="Name of the intent")
    utterances: List[Any] = Field(default_factory=list, description="Example phrases for the intent")
    answers: List[Any] = Field(default_factory=list, description="Candidate responses for the intent")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "65f1c2a9e4b0a1b2c3d4e5f6",
                "intent": "greeting",
                "utterances": ["hi", "hello"],
                "answers": ["Hello!"]
            }
        }
    }


class TrainingRecordCreated(BaseModel):
    """Schema returned after creating a training record"""
    id: str = Field(..., description="Store-assigned identifier of the new record")


class ErrorResponse(BaseModel):
    """Schema for validation failures"""
    error: str = Field(..., description="Which required field or shape constraint failed")


class MessageResponse(BaseModel):
    """Schema wrapping the raw classification result"""
    response: Dict[str, Any] = Field(..., description="Classification result for the message")

    model_config = {
        "json_schema_extra": {
            "example": {
                "response": {
                    "locale": "en",
                    "utterance": "hello",
                    "intent": "greeting",
                    "score": 1.0,
                    "classifications": [
                        {"intent": "greeting", "score": 1.0},
                        {"intent": "farewell", "score": 0.0}
                    ],
                    "entities": [],
                    "answers": ["Hello!"],
                    "answer": "Hello!"
                }
            }
        }
    }
