"""Tests for data models and built-in examples."""

import pytest

from tolstack.models import Dimension, DimensionType, ToleranceStack
from tolstack.scenarios import STACK_EXAMPLES, create_stack, default_stack
from tolstack.stackup import compute_stackup


class TestDimension:
    def test_limits(self):
        d = Dimension("Battery", 12.5, 0.3, 0.1, DimensionType.DECREASING)
        assert d.max_size == pytest.approx(12.8)
        assert d.min_size == pytest.approx(12.4)
        assert d.half_tolerance == pytest.approx(0.2)

    def test_ids_are_unique(self):
        a = Dimension("A", 1.0, 0.1, 0.1)
        b = Dimension("A", 1.0, 0.1, 0.1)
        assert a.id != b.id

    def test_from_dict_defaults(self):
        d = Dimension.from_dict({"name": "X", "nominal": 3, "tolerance_plus": 0.1,
                                 "tolerance_minus": 0.1})
        assert d.direction is DimensionType.INCREASING
        assert d.description == ""
        assert d.id

    def test_bad_direction(self):
        with pytest.raises(ValueError):
            Dimension.from_dict({"name": "X", "nominal": 3, "tolerance_plus": 0.1,
                                 "tolerance_minus": 0.1, "direction": "SIDEWAYS"})


class TestToleranceStack:
    def test_add_remove(self):
        stack = default_stack()
        stack.add(Dimension("Foam", 0.5, 0.1, 0.1, DimensionType.DECREASING, id="5"))
        assert len(stack.dimensions) == 5
        stack.remove("2")
        assert [d.id for d in stack.dimensions] == ["1", "3", "4", "5"]
        stack.remove("missing")
        assert len(stack.dimensions) == 4

    def test_save_load(self, tmp_path):
        stack = default_stack()
        path = str(tmp_path / "stack.json")
        stack.save(path)
        loaded = ToleranceStack.load(path)
        assert loaded == stack
        assert compute_stackup(loaded.dimensions) == compute_stackup(stack.dimensions)


class TestExamples:
    def test_default_ids(self):
        assert [d.id for d in default_stack().dimensions] == ["1", "2", "3", "4"]

    def test_every_example_computes(self):
        for key in STACK_EXAMPLES:
            stack = create_stack(key)
            assert stack.dimensions
            assert compute_stackup(stack.dimensions).contributor_count == len(stack.dimensions)

    def test_fresh_copies(self):
        a = create_stack("button")
        a.dimensions[0].nominal = 99.0
        assert create_stack("button").dimensions[0].nominal == 8.5

    def test_button_pre_travel(self):
        r = compute_stackup(create_stack("button").dimensions)
        assert r.nominal_gap == pytest.approx(0.2)

    def test_unknown_example(self):
        with pytest.raises(ValueError):
            create_stack("gearbox")
