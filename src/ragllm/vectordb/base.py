"""
Vector database contract.

Stores document embeddings and returns the documents closest to a query
embedding. ``selector`` partitions the store by embedding family (usually
the backend name), since vectors from different models are not comparable.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

DEFAULT_QUERY_LIMIT = 5


class Document(BaseModel):
    """A stored document. The text lives in ``metadata["content"]``."""

    id: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: Optional[float] = None

    @property
    def content(self) -> Optional[str]:
        value = self.metadata.get("content")
        return value if isinstance(value, str) else None


def new_document_id() -> str:
    return f"doc-{uuid.uuid4()}"


class VectorDatabase(ABC):
    """Interface implemented by every vector store."""

    @abstractmethod
    def save_embeddings(
        self,
        doc_id: str,
        embedding: Sequence[float],
        metadata: dict[str, Any],
        selector: str = "default",
    ) -> None:
        """Store ``embedding`` and ``metadata`` under ``doc_id``."""

    @abstractmethod
    def query_relevant_documents(
        self,
        embedding: Sequence[float],
        selector: str = "default",
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> list[Document]:
        """Documents closest to ``embedding``, best match first."""

    def insert_document(
        self,
        content: str,
        embedding: Sequence[float],
        selector: str = "default",
    ) -> str:
        """Store ``content`` under a fresh id and return the id."""
        doc_id = new_document_id()
        self.save_embeddings(doc_id, embedding, {"content": content}, selector=selector)
        return doc_id
