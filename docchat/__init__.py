"""docchat: conversational retrieval-augmented Q&A over a single document."""

__version__ = "0.1.0"
