"""
Domain Services Package.

The classifier builder turns training records into a trained, throwaway
intent classifier; the message classification service runs the whole
fetch, build, train and classify pipeline for one message.
"""
