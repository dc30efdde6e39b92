"""Deterministic YAML stream generators for performance benchmarks.

All generators produce fixed, reproducible text. No random values.
Three tiers: 100 flat documents, 1000 nested documents, and a 1000-document
stream with a malformed document every 50 documents.
"""

from __future__ import annotations

import pytest


def generate_flat_stream(num_docs: int, num_keys: int = 10) -> str:
    """Generate ``num_docs`` flat map documents with mixed scalar kinds."""
    docs = []
    for i in range(num_docs):
        lines = [f"key_{k}: {i * k}" for k in range(num_keys - 3)]
        lines.append(f"name: item_{i}")
        lines.append(f"ratio: {i}.5")
        lines.append(f"day: 2024-01-{i % 28 + 1:02d}")
        docs.append("\n".join(lines))
    return "\n---\n".join(docs) + "\n"


def generate_nested_stream(num_docs: int) -> str:
    """Generate documents with nested maps and lists whose fields vary by document."""
    docs = []
    for i in range(num_docs):
        docs.append(
            f"id: {i}\n"
            f"user:\n  name: user_{i}\n  active: {'yes' if i % 2 else 'no'}\n"
            f"  section_{i % 5}: {i}\n"
            f"tags: [t{i % 3}, t{i % 7}]\n"
            f"events:\n  - at: 2024-02-01T10:{i % 60:02d}:00Z\n    code: {i % 400}\n"
        )
    return "---\n".join(docs)


def generate_malformed_stream(num_docs: int) -> str:
    """Generate a stream where every 50th document fails to parse."""
    docs = []
    for i in range(num_docs):
        if i % 50 == 49:
            docs.append("broken: [unclosed")
        else:
            docs.append(f"id: {i}\nvalue: {i * 1.5}")
    return "\n---\n".join(docs) + "\n"


# --- Fixtures for each tier ---


@pytest.fixture
def flat_100() -> str:
    """100 flat documents with 10 keys each."""
    return generate_flat_stream(100)


@pytest.fixture
def nested_1000() -> str:
    """1000 nested documents with partially overlapping fields."""
    return generate_nested_stream(1000)


@pytest.fixture
def malformed_1000() -> str:
    """1000 documents, 20 of them malformed."""
    return generate_malformed_stream(1000)
