"""
Résumé RAG — turn a structured JSON résumé into searchable embeddings.

Subpackages
-----------
- :mod:`resume_rag.ingestion` — load, normalise, chunk, and store.
- :mod:`resume_rag.store` — vector collection / cache gateway.
- :mod:`resume_rag.serving` — search API consumed by the chat UI.
"""

__version__ = "0.1.0"
