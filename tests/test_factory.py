"""Tests for the segment factory."""

import pytest

from hl7kit.common.errors import MalformedSegmentError
from hl7kit.layouts.registry import GENERIC_LAYOUT, SegmentLayoutRegistry, get_default_registry
from hl7kit.model.factory import build_segment, create_segment


class TestBuildSegment:
    def test_known_type_bound_to_layout(self) -> None:
        seg = build_segment("PID|1||123||Doe^John")
        assert seg.layout is get_default_registry().lookup("PID")
        assert seg.read_field("patient_name") == "Doe^John"

    def test_unknown_type_falls_back_to_generic(self) -> None:
        seg = build_segment("ZZZ|foo|bar")
        assert seg.layout is GENERIC_LAYOUT
        assert seg.read_field(0) == "ZZZ"
        assert seg.read_field("sid") == "foo"
        assert seg.read_field(2) == "bar"

    def test_custom_registry(self) -> None:
        registry = SegmentLayoutRegistry()
        registry.register("ZAB", 2, {"code": 1})
        seg = build_segment("ZAB|X1", registry=registry)
        assert seg.read_field("code") == "X1"
        assert seg.weight == 2
        assert build_segment("PID|1", registry=registry).layout is GENERIC_LAYOUT

    def test_delimiters_passed_through(self) -> None:
        seg = build_segment("PID#1####A&B", "#", item_delim="&")
        assert seg.read_items("patient_name") == ["A", "B"]
        assert seg.to_raw() == "PID#1####A&B"

    def test_empty_input_rejected(self) -> None:
        with pytest.raises(MalformedSegmentError):
            build_segment("")

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("DEBUG", logger="hl7kit.model.factory"):
            build_segment("ZZZ|1")
        assert "ZZZ" in caplog.text


class TestCreateSegment:
    def test_create_with_values(self) -> None:
        seg = create_segment("NTE", "", "L", "A comment")
        assert seg.fields == ["NTE", "", "L", "A comment"]
        assert seg.read_field("comment") == "A comment"

    def test_create_empty(self) -> None:
        seg = create_segment("OBX")
        assert seg.fields == ["OBX"]
        assert seg.read_field("set_id") is None

    def test_create_unknown_type(self) -> None:
        seg = create_segment("ZZZ", "a")
        assert seg.layout is GENERIC_LAYOUT
        assert seg.to_raw() == "ZZZ|a"
