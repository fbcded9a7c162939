"""Text chunking strategies."""

from __future__ import annotations

from langchain_text_splitters import RecursiveCharacterTextSplitter

from resume_rag.errors import ConfigError
from resume_rag.models import Chunk, ResumeDocument

SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


def build_splitter(chunk_size: int = 1000, chunk_overlap: int = 200) -> RecursiveCharacterTextSplitter:
    """Return a splitter preferring paragraph, line, sentence, then word breaks.

    Whitespace is kept intact so that chunks are exact substrings of the
    source text and can be located by offset.

    Raises
    ------
    ConfigError
        If ``chunk_size`` is not positive or ``chunk_overlap`` is not in
        ``[0, chunk_size)``.
    """
    if chunk_size <= 0:
        raise ConfigError(f"chunk_size ({chunk_size}) must be > 0")
    if chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise ConfigError(
            f"chunk_overlap ({chunk_overlap}) must be >= 0 and < chunk_size ({chunk_size})"
        )
    return RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        length_function=len,
        separators=SEPARATORS,
        strip_whitespace=False,
        add_start_index=True,
    )


def chunk_documents(
    documents: list[ResumeDocument],
    splitter: RecursiveCharacterTextSplitter | None = None,
) -> list[Chunk]:
    """Split *documents* into overlapping chunks for embedding.

    Parameters
    ----------
    documents:
        Normalised résumé sections, in order.
    splitter:
        Pre-built splitter; defaults to ``build_splitter()``.

    Returns
    -------
    list[Chunk]
        Chunks in document order, each carrying its parent's metadata.
    """
    splitter = splitter or build_splitter()
    chunks: list[Chunk] = []
    for doc in documents:
        pieces = splitter.create_documents([doc.text])
        for idx, piece in enumerate(pieces):
            chunks.append(
                Chunk(
                    text=piece.page_content,
                    metadata=doc.metadata.model_copy(),
                    index=idx,
                    start_index=piece.metadata.get("start_index", 0),
                )
            )
    return chunks
