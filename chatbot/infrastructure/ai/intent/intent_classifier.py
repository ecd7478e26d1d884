from typing import Any, Dict, List, Optional, Tuple
import logging
import random

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from chatbot.domain.models.classification import (
    ClassificationResult,
    IntentScore,
    NONE_INTENT
)
from chatbot.infrastructure.ai.intent.entity_extractor import extract_entities
from chatbot.utils.exceptions import ClassifierNotTrainedError


def _intent_label(intent: Any) -> str:
    # Stored intents are only checked for presence, so labels may be any JSON value.
    return intent if isinstance(intent, str) else str(intent)


class IntentClassifier:
    """
    Classifies user intent from text input.

    Utterances are registered per intent and answers per intent; train()
    fits a character n-gram TF-IDF space over the utterances and process()
    scores a message against each intent by its closest utterance.
    """

    def __init__(
        self,
        languages: List[str],
        force_ner: bool = False,
        threshold: float = 0.5,
        random_state: Optional[int] = None
    ):
        """
        Initialize the intent classifier.

        Args:
            languages: Locales the classifier accepts documents and messages for
            force_ner: Extract builtin entities from every processed message
            threshold: Minimum score for an intent to be reported
            random_state: Seed for picking an answer among an intent's answers
        """
        if not languages:
            raise ValueError("At least one language is required")

        self.logger = logging.getLogger(__name__)
        self.languages = list(languages)
        self.force_ner = force_ner
        self.threshold = threshold
        self._random = random.Random(random_state)

        self._documents: List[Tuple[str, str]] = []
        self._answers: Dict[str, List[str]] = {}
        self._intents: List[str] = []

        self.vectorizer: Optional[TfidfVectorizer] = None
        self._matrix = None
        self._intent_rows: Dict[str, np.ndarray] = {}
        self.trained = False

    def _check_language(self, language: str) -> None:
        if language not in self.languages:
            raise ValueError(f"Language '{language}' is not configured for this classifier")

    def add_document(self, language: str, utterance: Any, intent: Any) -> None:
        """Register an example utterance for an intent."""
        self._check_language(language)
        intent = _intent_label(intent)
        self._documents.append(("" if utterance is None else str(utterance), intent))
        if intent not in self._intents:
            self._intents.append(intent)
        self.trained = False

    def add_answer(self, language: str, intent: Any, answer: Any) -> None:
        """Register a candidate answer for an intent."""
        self._check_language(language)
        intent = _intent_label(intent)
        self._answers.setdefault(intent, []).append(answer)

    @property
    def intents(self) -> List[str]:
        return list(self._intents)

    def train(self) -> Dict[str, Any]:
        """
        Fit the classifier on every registered utterance.

        Returns:
            Dictionary containing training results
        """
        self.vectorizer = None
        self._matrix = None
        self._intent_rows = {}

        if self._documents:
            texts = [text for text, _ in self._documents]
            labels = np.array([intent for _, intent in self._documents], dtype=object)
            vectorizer = TfidfVectorizer(
                analyzer="char_wb",
                ngram_range=(2, 4),
                lowercase=True,
                strip_accents="unicode",
                sublinear_tf=True
            )
            try:
                self._matrix = vectorizer.fit_transform(texts)
                self.vectorizer = vectorizer
                self._intent_rows = {
                    intent: np.flatnonzero(labels == intent) for intent in self._intents
                }
            except ValueError as e:
                # Raised when no utterance yields a single n-gram.
                self.logger.warning(f"Training produced an empty vocabulary: {str(e)}")

        self.trained = True
        self.logger.debug(
            f"Trained intent classifier on {len(self._documents)} utterances",
            extra={"intent_count": len(self._intents)}
        )
        return {
            "success": True,
            "num_samples": len(self._documents),
            "num_classes": len(self._intents),
        }

    def _score_intents(self, text: str) -> List[IntentScore]:
        if self.vectorizer is None:
            return [IntentScore(intent=intent, score=0.0) for intent in self._intents]

        similarities = cosine_similarity(self.vectorizer.transform([text]), self._matrix)[0]
        scores = [
            IntentScore(intent=intent, score=float(similarities[rows].max()))
            for intent, rows in self._intent_rows.items()
        ]
        # sorted() is stable, so ties keep registration order
        return sorted(scores, key=lambda s: s.score, reverse=True)

    def process(self, language: str, text: Any) -> ClassificationResult:
        """
        Classify the intent of the input text.

        Args:
            language: Locale of the text
            text: Input text to classify; None is treated as empty

        Returns:
            ClassificationResult for the text

        Raises:
            ClassifierNotTrainedError: If train() has not completed since the
                last registered document
        """
        if not self.trained:
            raise ClassifierNotTrainedError("Intent classifier must be trained before processing")
        self._check_language(language)

        utterance = "" if text is None else str(text)
        classifications = self._score_intents(utterance)
        entities = extract_entities(utterance) if self.force_ner else []

        best = classifications[0] if classifications else None
        if best is not None and best.score > 0 and best.score >= self.threshold:
            intent, score = best.intent, best.score
        else:
            # Score of the fallback is the confidence that nothing matched.
            intent, score = NONE_INTENT, 1.0 - (best.score if best else 0.0)

        answers = list(self._answers.get(intent, []))
        answer = self._random.choice(answers) if answers else None

        return ClassificationResult(
            locale=language,
            utterance=utterance,
            intent=intent,
            score=score,
            classifications=classifications,
            entities=entities,
            answers=answers,
            answer=answer
        )
