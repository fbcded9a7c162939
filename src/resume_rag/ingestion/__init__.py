"""
Ingestion — résumé loading, chunking, and embedding into the vector store.

This package converts the structured JSON résumé into overlapping text
chunks and stores one embedded row per chunk, reporting progress through
structured events.
"""
