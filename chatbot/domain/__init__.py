"""
Domain package.

Training records, classification results, validation and the services that
orchestrate training-data storage and message classification.
"""
