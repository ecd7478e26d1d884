"""
Tests for the message classification service.
"""
from unittest.mock import MagicMock

from chatbot.domain.models.classification import NONE_INTENT
from chatbot.domain.result import Err, ErrorKind, Ok
from chatbot.domain.services.message_service import MessageClassificationService


class TestMessageClassificationService:
    """Test the fetch, build, train and classify pipeline."""

    def test_classifies_against_current_training_data(self, repository, greeting_record, farewell_record):
        repository.create(greeting_record)
        repository.create(farewell_record)
        service = MessageClassificationService(repository)

        hello = service.classify("hello")
        bye = service.classify("bye")

        assert hello.ok and hello.value.intent == "greeting"
        assert bye.ok and bye.value.intent == "farewell"

    def test_picks_up_new_training_data_without_restart(self, repository, greeting_record, farewell_record):
        repository.create(greeting_record)
        service = MessageClassificationService(repository)
        assert service.classify("bye").value.intent == NONE_INTENT

        repository.create(farewell_record)

        assert service.classify("bye").value.intent == "farewell"

    def test_empty_training_data(self, repository):
        result = MessageClassificationService(repository).classify("hello")
        assert result.ok
        assert result.value.intent == NONE_INTENT

    def test_missing_message_is_passed_through(self, repository, greeting_record):
        repository.create(greeting_record)
        result = MessageClassificationService(repository).classify(None)
        assert result.ok
        assert result.value.intent == NONE_INTENT

    def test_builds_a_new_classifier_per_call(self, repository, greeting_record):
        repository.create(greeting_record)
        classifier = MagicMock()
        factory = MagicMock(return_value=classifier)
        service = MessageClassificationService(
            repository, language="en", force_ner=False, threshold=0.7, classifier_factory=factory
        )

        assert service.classify("hello").ok
        assert service.classify("hi").ok

        assert factory.call_count == 2
        records = factory.call_args[0][0]
        assert [r.intent for r in records] == ["greeting"]
        assert factory.call_args[1] == {"language": "en", "force_ner": False, "threshold": 0.7}
        classifier.process.assert_called_with("en", "hi")

    def test_fetch_failure_is_classification_error(self):
        repository = MagicMock()
        repository.list_all.return_value = Err(ErrorKind.STORE, "down")

        result = MessageClassificationService(repository).classify("hello")

        assert not result.ok
        assert result.kind is ErrorKind.CLASSIFICATION

    def test_training_failure_is_classification_error(self):
        repository = MagicMock()
        repository.list_all.return_value = Ok([])
        factory = MagicMock(side_effect=RuntimeError("training blew up"))

        result = MessageClassificationService(repository, classifier_factory=factory).classify("hello")

        assert result.kind is ErrorKind.CLASSIFICATION
        assert "training blew up" not in result.message

    def test_process_failure_is_classification_error(self):
        repository = MagicMock()
        repository.list_all.return_value = Ok([])
        classifier = MagicMock()
        classifier.process.side_effect = ValueError("bad input")

        service = MessageClassificationService(
            repository, classifier_factory=MagicMock(return_value=classifier)
        )

        assert service.classify("hello").kind is ErrorKind.CLASSIFICATION

    def test_unreadable_result_is_classification_error(self):
        repository = MagicMock()
        repository.list_all.return_value = Ok([])
        classifier = MagicMock()
        classifier.process.return_value = object()

        service = MessageClassificationService(
            repository, classifier_factory=MagicMock(return_value=classifier)
        )

        assert service.classify("hello").kind is ErrorKind.CLASSIFICATION

    def test_non_string_intents_do_not_break_classification(self, repository, greeting_record):
        repository.create(greeting_record)
        repository.create({"intent": 5, "utterances": ["five"], "answers": ["Five!"]})
        repository.create({"intent": ["x"], "utterances": ["ex"], "answers": ["Ex!"]})
        service = MessageClassificationService(repository)

        hello = service.classify("hello")
        five = service.classify("five")

        assert hello.ok and hello.value.intent == "greeting"
        assert five.ok and five.value.intent == "5"
        assert five.value.answers == ["Five!"]
