#!/usr/bin/env python3
"""
Tests for the in-memory vector store and prompt augmentation.
"""

import pytest

from ragllm.backends import OllamaBackend
from ragllm.core import VectorStoreError
from ragllm.vectordb import (
    Document,
    InMemoryVectorStore,
    VectorDatabase,
    combine_query_with_context,
    new_document_id,
    retrieve_and_augment,
)


@pytest.fixture
def store():
    store = InMemoryVectorStore()
    store.save_embeddings("rock", [1.0, 0.0, 0.0], {"content": "The moon is made of rock."})
    store.save_embeddings("cheese", [0.0, 1.0, 0.0], {"content": "Cheese is made of milk."})
    store.save_embeddings("mixed", [0.7, 0.7, 0.0], {"content": "Moon cheese is a myth."})
    return store


# ============================================================================
# Document Tests
# ============================================================================

class TestDocument:
    """Tests for Document."""

    def test_content(self):
        doc = Document(id="d1", metadata={"content": "text", "source": "wiki"})
        assert doc.content == "text"

    def test_missing_content(self):
        assert Document(id="d1").content is None
        assert Document(id="d1", metadata={"content": 3}).content is None

    def test_new_document_id(self):
        a, b = new_document_id(), new_document_id()
        assert a.startswith("doc-")
        assert a != b


# ============================================================================
# InMemoryVectorStore Tests
# ============================================================================

class TestInMemoryVectorStore:
    """Tests for InMemoryVectorStore."""

    def test_implements_contract(self):
        assert isinstance(InMemoryVectorStore(), VectorDatabase)

    def test_query_orders_by_similarity(self, store):
        """Test results come back best match first."""
        docs = store.query_relevant_documents([1.0, 0.1, 0.0])
        assert [d.id for d in docs] == ["rock", "mixed", "cheese"]
        assert docs[0].score > docs[1].score > docs[2].score
        assert docs[0].content == "The moon is made of rock."

    def test_query_limit(self, store):
        assert len(store.query_relevant_documents([1.0, 0.0, 0.0], limit=2)) == 2
        assert store.query_relevant_documents([1.0, 0.0, 0.0], limit=0) == []

    def test_unknown_selector(self, store):
        """Test querying an empty selector returns nothing."""
        assert store.query_relevant_documents([1.0, 0.0, 0.0], selector="openai") == []

    def test_selectors_are_separate(self, store):
        """Test each selector has its own dimension and documents."""
        store.save_embeddings("wide", [0.1] * 5, {"content": "x"}, selector="openai")
        docs = store.query_relevant_documents([0.1] * 5, selector="openai")
        assert [d.id for d in docs] == ["wide"]
        assert len(store) == 4

    def test_dimension_mismatch(self, store):
        """Test vectors of the wrong length are rejected."""
        with pytest.raises(VectorStoreError, match="unsupported embedding length"):
            store.save_embeddings("bad", [1.0, 2.0], {"content": "x"})
        with pytest.raises(VectorStoreError):
            store.query_relevant_documents([1.0, 2.0])

    def test_empty_embedding(self):
        with pytest.raises(VectorStoreError):
            InMemoryVectorStore().save_embeddings("e", [], {})

    def test_replace_document(self, store):
        """Test saving an existing id replaces it."""
        store.save_embeddings("rock", [0.0, 0.0, 1.0], {"content": "Replaced."})
        assert len(store) == 3
        docs = store.query_relevant_documents([0.0, 0.0, 1.0], limit=1)
        assert docs[0].id == "rock"
        assert docs[0].content == "Replaced."

    def test_metadata_is_copied(self, store):
        """Test callers cannot mutate stored metadata through results."""
        doc = store.query_relevant_documents([1.0, 0.0, 0.0], limit=1)[0]
        doc.metadata["content"] = "mutated"
        again = store.query_relevant_documents([1.0, 0.0, 0.0], limit=1)[0]
        assert again.content == "The moon is made of rock."

    def test_insert_document(self):
        store = InMemoryVectorStore()
        doc_id = store.insert_document("hello", [0.5, 0.5], selector="ollama")
        docs = store.query_relevant_documents([0.5, 0.5], selector="ollama")
        assert docs[0].id == doc_id
        assert docs[0].metadata == {"content": "hello"}


# ============================================================================
# Augmentation Tests
# ============================================================================

class TestAugmentation:
    """Tests for combine_query_with_context and retrieve_and_augment."""

    def test_combine_query_with_context(self):
        docs = [
            Document(id="1", metadata={"content": "First fact."}),
            Document(id="2", metadata={}),
            Document(id="3", metadata={"content": "Second fact."}),
        ]
        assert combine_query_with_context("What?", docs) == (
            "Context: First fact.\nSecond fact.\n\nQuery: What?"
        )

    def test_combine_without_documents(self):
        assert combine_query_with_context("What?", []) == "Context: \nQuery: What?"

    def test_retrieve_and_augment(self, server):
        """Test the query is embedded and matched in the backend's selector."""
        server.reply_json({"embedding": [1.0, 0.0]})
        backend = OllamaBackend(model="emb", client=server.client())
        store = InMemoryVectorStore()
        store.save_embeddings("a", [1.0, 0.0], {"content": "Relevant."}, selector="ollama")
        store.save_embeddings("b", [0.0, 1.0], {"content": "Irrelevant."}, selector="ollama")

        prompt = retrieve_and_augment(backend, store, "Tell me", limit=1)

        assert prompt == "Context: Relevant.\n\nQuery: Tell me"
        assert server.bodies[0] == {"model": "emb", "prompt": "Tell me"}
