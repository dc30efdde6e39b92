"""Performance benchmark suite for yaml-tabular.

Covers the three stages that dominate a read: parsing, schema inference and
row conversion, plus recovery of a stream holding malformed documents.

Run with: pytest tests/benchmarks/ --benchmark-only -v
Skip during normal test runs: pytest --benchmark-disable
"""

from __future__ import annotations

from yaml_tabular import InferenceConfig, ReadOptions, parse_documents, read_yaml
from yaml_tabular.schema.inference import SchemaInferrer


class TestReadPerformance:
    """End-to-end reads."""

    def test_flat_100(self, benchmark, flat_100):  # type: ignore[no-untyped-def]
        result = benchmark(read_yaml, flat_100)
        # Verify the result is valid (not just timing)
        assert len(result.rows) == 100
        assert len(result.schema.fields) == 10

    def test_nested_1000(self, benchmark, nested_1000):  # type: ignore[no-untyped-def]
        result = benchmark(read_yaml, nested_1000)
        assert len(result.rows) == 1000
        assert result.schema.names == ["id", "user", "tags", "events"]

    def test_nested_1000_sampled(self, benchmark, nested_1000):  # type: ignore[no-untyped-def]
        options = ReadOptions(inference=InferenceConfig(sample_size=100))
        result = benchmark(read_yaml, nested_1000, options)
        assert len(result.rows) == 1000


class TestInferencePerformance:
    """Schema inference over pre-parsed documents."""

    def test_infer_nested_1000(self, benchmark, nested_1000):  # type: ignore[no-untyped-def]
        docs = parse_documents(nested_1000)
        schema = benchmark(SchemaInferrer().infer, docs)
        assert "user" in schema


class TestRecoveryPerformance:
    """Resilient parsing of a stream with malformed documents."""

    def test_malformed_1000(self, benchmark, malformed_1000):  # type: ignore[no-untyped-def]
        docs = benchmark(parse_documents, malformed_1000, True)
        assert len(docs) == 980
