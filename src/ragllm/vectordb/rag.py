"""
Retrieval-augmented prompt construction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from ragllm.vectordb.base import DEFAULT_QUERY_LIMIT, Document, VectorDatabase

if TYPE_CHECKING:
    from ragllm.backends import Backend

logger = logging.getLogger(__name__)


def combine_query_with_context(query: str, documents: Iterable[Document]) -> str:
    """Prefix ``query`` with the text of the retrieved documents.

    Documents without string content are skipped.
    """
    context = "".join(f"{doc.content}\n" for doc in documents if doc.content is not None)
    return f"Context: {context}\nQuery: {query}"


def retrieve_and_augment(
    backend: Backend,
    store: VectorDatabase,
    query: str,
    selector: str | None = None,
    limit: int = DEFAULT_QUERY_LIMIT,
) -> str:
    """Embed ``query``, fetch related documents and build the augmented prompt.

    ``selector`` defaults to the embedding backend's name.
    """
    embedding = backend.embed(query)
    documents = store.query_relevant_documents(
        embedding, selector=selector or backend.name, limit=limit
    )
    for doc in documents:
        logger.debug("Retrieved document %s (score=%s)", doc.id, doc.score)
    return combine_query_with_context(query, documents)
