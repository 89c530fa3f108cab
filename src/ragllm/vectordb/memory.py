"""In-process vector store backed by numpy."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from ragllm.core import VectorStoreError
from ragllm.vectordb.base import DEFAULT_QUERY_LIMIT, Document, VectorDatabase

logger = logging.getLogger(__name__)


@dataclass
class _Partition:
    """Embeddings of one selector; all vectors share a dimension."""

    dim: int
    ids: list[str] = field(default_factory=list)
    metadata: list[dict[str, Any]] = field(default_factory=list)
    vectors: list[np.ndarray] = field(default_factory=list)


class InMemoryVectorStore(VectorDatabase):
    """Cosine-similarity store kept in memory.

    Saving an existing ``doc_id`` in the same selector replaces it.

    Usage:
        store = InMemoryVectorStore()
        store.insert_document("The moon is made of rock.", backend.embed(text), "ollama")
        docs = store.query_relevant_documents(backend.embed(query), "ollama")
    """

    def __init__(self) -> None:
        self._partitions: dict[str, _Partition] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _as_vector(embedding: Sequence[float]) -> np.ndarray:
        vec = np.asarray(embedding, dtype=np.float32)
        if vec.ndim != 1 or vec.size == 0:
            raise VectorStoreError("embedding must be a non-empty 1-D sequence")
        return vec

    @staticmethod
    def _cosine_similarity(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
        """Cosine similarity of every row of ``matrix`` against ``query``."""
        m_norm = matrix / (np.linalg.norm(matrix, axis=1, keepdims=True) + 1e-9)
        q_norm = query / (np.linalg.norm(query) + 1e-9)
        return m_norm @ q_norm

    def save_embeddings(
        self,
        doc_id: str,
        embedding: Sequence[float],
        metadata: dict[str, Any],
        selector: str = "default",
    ) -> None:
        vec = self._as_vector(embedding)
        with self._lock:
            part = self._partitions.setdefault(selector, _Partition(dim=vec.size))
            if vec.size != part.dim:
                raise VectorStoreError(
                    f"unsupported embedding length {vec.size} for {selector!r} "
                    f"(expected {part.dim})"
                )
            if doc_id in part.ids:
                idx = part.ids.index(doc_id)
                part.vectors[idx] = vec
                part.metadata[idx] = dict(metadata)
            else:
                part.ids.append(doc_id)
                part.vectors.append(vec)
                part.metadata.append(dict(metadata))
        logger.debug("Saved %s in %s", doc_id, selector)

    def query_relevant_documents(
        self,
        embedding: Sequence[float],
        selector: str = "default",
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> list[Document]:
        query = self._as_vector(embedding)
        with self._lock:
            part = self._partitions.get(selector)
            if part is None or not part.ids:
                return []
            if query.size != part.dim:
                raise VectorStoreError(
                    f"query embedding length {query.size} does not match {selector!r} "
                    f"(expected {part.dim})"
                )
            scores = self._cosine_similarity(np.vstack(part.vectors), query)
            ids = list(part.ids)
            metadata = [dict(m) for m in part.metadata]

        order = np.argsort(-scores, kind="stable")[: max(limit, 0)]
        return [
            Document(id=ids[i], metadata=metadata[i], score=float(scores[i]))
            for i in order
        ]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(p.ids) for p in self._partitions.values())
