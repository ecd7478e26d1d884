"""
Intent classification components.

This package provides the classification engine used to answer chat
messages. Features include:
- Utterance and answer registration per intent
- Character n-gram TF-IDF training with scikit-learn
- Confidence scoring with a "None" fallback below the threshold
- Builtin entity extraction (emails, urls, phone numbers, percentages, numbers)
"""
