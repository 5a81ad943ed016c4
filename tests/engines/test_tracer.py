"""Tests for the engine invocation tracer."""

from inventory_engines.tracer import compute_input_fingerprint, traced_engine
from inventory_kernel.domain.line_item import LineItem


class TestEngineTracer:
    """Test the engine invocation tracer."""

    def test_traced_engine_decorator_returns_result(self):
        @traced_engine("test_engine", "1.0", fingerprint_fields=("x", "y"))
        def add(x=0, y=0):
            return x + y

        assert add(x=3, y=4) == 7

    def test_positional_arguments_are_fingerprinted(self, captured_logs):
        @traced_engine("test_engine", "1.0", fingerprint_fields=("x",))
        def double(x):
            return x * 2

        double(5)
        double(x=5)

        traces = [r for r in captured_logs() if r["message"] == "INVENTORY_ENGINE_TRACE"]
        assert len(traces) == 2
        assert traces[0]["input_fingerprint"] == traces[1]["input_fingerprint"]
        assert traces[0]["function"].endswith("double")

    def test_compute_input_fingerprint_deterministic(self):
        fp1 = compute_input_fingerprint(("a", "b"), {"a": 1, "b": "hello"})
        fp2 = compute_input_fingerprint(("a", "b"), {"a": 1, "b": "hello"})
        assert fp1 == fp2
        assert len(fp1) == 16

    def test_compute_input_fingerprint_changes_with_input(self):
        fp1 = compute_input_fingerprint(("a",), {"a": 1})
        fp2 = compute_input_fingerprint(("a",), {"a": 2})
        assert fp1 != fp2

    def test_line_items_fingerprint_by_identity(self):
        cheap = LineItem(id=1, uuid="u1", group_id="g")
        pricey = LineItem(id=1, uuid="u1", group_id="g", item_code="X")

        assert compute_input_fingerprint(("item",), {"item": cheap}) == \
            compute_input_fingerprint(("item",), {"item": pricey})
