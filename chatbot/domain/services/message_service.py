"""
Service answering chat messages from the current training data.

Each call lists the whole training-data collection, builds and trains a
fresh classifier from it and classifies the message. Nothing is cached
between calls, so the answer always reflects the latest training data and
every call pays the full fetch, build and train cost.
"""

from typing import Any, Callable, Optional

from chatbot.domain.interfaces.repository_interface import RepositoryInterface
from chatbot.domain.models.classification import ClassificationResult
from chatbot.domain.models.training_record import TrainingRecord
from chatbot.domain.result import Err, ErrorKind, Ok, Result
from chatbot.domain.services.classifier_builder import build_classifier
from chatbot.utils.logger import get_logger

CLASSIFICATION_ERROR_MESSAGE = "Failed to classify message"


class MessageClassificationService:
    """
    Orchestrates fetch, build, train and classify for one message.
    """

    def __init__(
        self,
        repository: RepositoryInterface[TrainingRecord, str],
        language: str = "en",
        force_ner: bool = True,
        threshold: float = 0.5,
        classifier_factory: Callable[..., Any] = build_classifier
    ):
        """
        Initialize the message classification service.

        Args:
            repository: Training data repository
            language: Locale used for training and classification
            force_ner: Extract builtin entities from messages
            threshold: Minimum score for an intent to be reported
            classifier_factory: Builds a trained classifier from records
        """
        self.repository = repository
        self.language = language
        self.force_ner = force_ner
        self.threshold = threshold
        self.classifier_factory = classifier_factory
        self.logger = get_logger(__name__)

    def classify(self, message: Optional[Any]) -> Result[ClassificationResult]:
        """
        Classify a message against the current training data.

        The message is handed to the classifier unchecked.

        Args:
            message: Message text

        Returns:
            Ok with the raw classification result, or Err(CLASSIFICATION) when
            any step fails
        """
        self.logger.info("Getting training data")
        listed = self.repository.list_all()
        if not listed.ok:
            self.logger.error(f"Could not fetch training data: {listed.message}")
            return Err(ErrorKind.CLASSIFICATION, CLASSIFICATION_ERROR_MESSAGE)

        try:
            classifier = self.classifier_factory(
                listed.value,
                language=self.language,
                force_ner=self.force_ner,
                threshold=self.threshold
            )
            result = classifier.process(self.language, message)
            self.logger.info(
                "Classified message",
                extra={"intent": result.intent, "score": result.score, "record_count": len(listed.value)}
            )
        except Exception as e:
            self.logger.error(f"Failed to classify message: {str(e)}", exc_info=True)
            return Err(ErrorKind.CLASSIFICATION, CLASSIFICATION_ERROR_MESSAGE)

        return Ok(result)
