"""
Vector storage and retrieval-augmented prompting.
"""

from ragllm.vectordb.base import (
    DEFAULT_QUERY_LIMIT,
    Document,
    VectorDatabase,
    new_document_id,
)
from ragllm.vectordb.memory import InMemoryVectorStore
from ragllm.vectordb.rag import combine_query_with_context, retrieve_and_augment

__all__ = [
    "DEFAULT_QUERY_LIMIT",
    "Document",
    "VectorDatabase",
    "InMemoryVectorStore",
    "new_document_id",
    "combine_query_with_context",
    "retrieve_and_augment",
]
