"""Select the document passages most relevant to a question (keyword overlap).

Lightweight stand-in for embedding search: the document is split into
paragraphs, each paragraph is scored by how many distinct query keywords it
contains, and the best paragraphs are concatenated up to a character budget.
"""
import logging
import re
import string

logger = logging.getLogger(__name__)

MAX_CONTEXT_LENGTH = 1500  # characters
MAX_CHUNKS = 3
MIN_KEYWORD_LENGTH = 3

CHUNK_SEPARATOR = "\n\n"
_BLANK_LINE = re.compile(r"\n\s*\n")


def _tokenize(text: str) -> list[str]:
    """Lower-case whitespace tokens with surrounding punctuation stripped."""
    tokens = []
    for raw in text.lower().split():
        token = raw.strip(string.punctuation)
        if token:
            tokens.append(token)
    return tokens


def extract_keywords(query: str) -> set[str]:
    """Return the deduplicated keyword set of a query (tokens of 3+ chars)."""
    return {token for token in _tokenize(query) if len(token) >= MIN_KEYWORD_LENGTH}


def split_chunks(document_text: str) -> list[str]:
    """Split a document into paragraphs at blank lines, dropping empty ones."""
    return [chunk.strip() for chunk in _BLANK_LINE.split(document_text) if chunk.strip()]


def score_chunk(chunk: str, keywords: set[str]) -> int:
    """Count the distinct keywords that appear as tokens of the chunk."""
    if not keywords:
        return 0
    return len(keywords & set(_tokenize(chunk)))


def find_relevant_context(
    query: str,
    document_text: str,
    max_context_length: int = MAX_CONTEXT_LENGTH,
    max_chunks: int = MAX_CHUNKS,
) -> str:
    """
    Find the passages of ``document_text`` most relevant to ``query``.

    Chunks are ranked by keyword overlap (stable, so equal scores keep
    document order). The top ``max_chunks`` chunks that scored above zero are
    joined with blank lines until the next one would exceed
    ``max_context_length``; that chunk and everything after it are dropped.
    When no chunk matches at all, the first ``max_context_length`` characters
    of the document are returned instead.
    A document with no non-blank paragraph yields an empty string.

    Args:
        query: The user's question or search phrase
        document_text: Full plain text of the document
        max_context_length: Character budget for the returned context
        max_chunks: Maximum number of paragraphs to include

    Returns:
        Context string, never longer than ``max_context_length``
    """
    if not isinstance(query, str):
        raise TypeError(f"query must be a str, got {type(query).__name__}")
    if not isinstance(document_text, str):
        raise TypeError(f"document_text must be a str, got {type(document_text).__name__}")
    if max_context_length < 1:
        raise ValueError(f"max_context_length must be positive, got {max_context_length}")
    if max_chunks < 1:
        raise ValueError(f"max_chunks must be positive, got {max_chunks}")

    keywords = extract_keywords(query)
    chunks = split_chunks(document_text)
    if not chunks:
        return ""

    scored = [(chunk, score_chunk(chunk, keywords)) for chunk in chunks]
    # sorted() is stable: ties keep their original document order
    ranked = sorted(scored, key=lambda item: item[1], reverse=True)
    relevant = [chunk for chunk, score in ranked if score > 0]

    if not relevant:
        logger.debug("No chunk matched %d keyword(s); using document head", len(keywords))
        return document_text[:max_context_length]

    selected: list[str] = []
    length = 0
    for chunk in relevant[:max_chunks]:
        added = len(chunk) + (len(CHUNK_SEPARATOR) if selected else 0)
        if length + added > max_context_length:
            break
        selected.append(chunk)
        length += added

    logger.debug(
        "Selected %d of %d chunk(s) (%d relevant), %d chars",
        len(selected), len(chunks), len(relevant), length,
    )
    return CHUNK_SEPARATOR.join(selected).strip()
