"""Tests for Segment field access and ordering."""

import pytest

from hl7kit.common.errors import EmptySegmentError, UnknownFieldError
from hl7kit.layouts.registry import GENERIC_LAYOUT, SegmentLayout
from hl7kit.model.segment import Segment


PID_LAYOUT = SegmentLayout(
    type_id="PID",
    field_map={"set_id": 1, "patient_id": 2, "patient_name": 5},
)
NTE_LAYOUT = SegmentLayout(type_id="NTE", weight=4, field_map={"set_id": 1, "comment": 3})
MSH_LAYOUT = SegmentLayout(type_id="MSH", weight=-1, field_map={"sending_app": 2})


def _pid() -> Segment:
    return Segment.parse("PID|1||123||Doe^John", layout=PID_LAYOUT)


class TestSegmentParse:
    def test_split_fields(self) -> None:
        seg = _pid()
        assert seg.fields == ["PID", "1", "", "123", "", "Doe^John"]
        assert seg.type_id == "PID"

    def test_trailing_empty_fields_kept(self) -> None:
        seg = Segment.parse("NTE|1||", layout=NTE_LAYOUT)
        assert seg.fields == ["NTE", "1", "", ""]
        assert seg.to_raw() == "NTE|1||"

    def test_custom_element_delimiter(self) -> None:
        seg = Segment.parse("PID#1#X", "#", layout=PID_LAYOUT)
        assert seg.read_field("set_id") == "1"
        assert seg.to_raw() == "PID#1#X"
        assert seg.to_raw("|") == "PID|1|X"

    def test_empty_input_rejected(self) -> None:
        with pytest.raises(EmptySegmentError):
            Segment.parse("")

    def test_no_fields_rejected(self) -> None:
        with pytest.raises(EmptySegmentError):
            Segment([])

    def test_leading_delimiter_gives_empty_type(self) -> None:
        seg = Segment.parse("|x")
        assert seg.fields == ["", "x"]
        assert seg.layout is GENERIC_LAYOUT


class TestReadField:
    def test_read_by_name(self) -> None:
        seg = _pid()
        assert seg.read_field("set_id") == "1"
        assert seg.read_field("patient_id") == ""

    def test_read_by_index(self) -> None:
        assert _pid().read_field(3) == "123"

    def test_embedded_item_delimiter_returned_unmodified(self) -> None:
        assert _pid().read_field("patient_name") == "Doe^John"

    def test_read_past_end_is_none(self) -> None:
        seg = _pid()
        assert seg.read_field(40) is None
        assert seg.read_field("e12") is None

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(UnknownFieldError, match="favourite_color"):
            _pid().read_field("favourite_color")

    def test_negative_index_raises(self) -> None:
        with pytest.raises(UnknownFieldError):
            _pid().read_field(-1)

    def test_wrong_selector_type(self) -> None:
        with pytest.raises(TypeError):
            _pid().read_field(1.5)

    @pytest.mark.parametrize("name", ["e3", "element3", "element_3"])
    def test_positional_names(self, name: str) -> None:
        assert _pid().read_field(name) == "123"

    def test_layout_name_takes_precedence(self) -> None:
        layout = SegmentLayout(type_id="ZAB", field_map={"e1": 2})
        seg = Segment.parse("ZAB|one|two", layout=layout)
        assert seg.read_field("e1") == "two"

    def test_read_items(self) -> None:
        seg = _pid()
        assert seg.read_items("patient_name") == ["Doe", "John"]
        assert seg.read_items("set_id") == ["1"]
        assert seg.read_items(30) == []

    def test_mapping_style_access(self) -> None:
        seg = _pid()
        assert seg["patient_name"] == "Doe^John"
        assert seg[3] == "123"
        assert len(seg) == 6


class TestWriteField:
    def test_overwrite_in_place(self) -> None:
        seg = _pid()
        seg.write_field("patient_id", "P-9")
        assert seg.fields[2] == "P-9"
        assert len(seg) == 6

    def test_write_pads_with_empty_fields(self) -> None:
        seg = Segment.parse("NTE|1", layout=NTE_LAYOUT)
        seg.write_field(6, "x")
        assert seg.fields == ["NTE", "1", "", "", "", "", "x"]
        assert len(seg) == 7

    def test_write_by_positional_name(self) -> None:
        seg = Segment.parse("ZZZ")
        seg["e2"] = "value"
        assert seg.fields == ["ZZZ", "", "value"]

    def test_values_stored_as_strings(self) -> None:
        seg = Segment.parse("NTE", layout=NTE_LAYOUT)
        seg.write_field("set_id", 3)
        seg.write_field("comment", None)
        assert seg.fields == ["NTE", "3", "", ""]

    def test_sequence_joined_with_item_delimiter(self) -> None:
        seg = _pid()
        seg.write_field("patient_name", ["Roe", "Jane"])
        assert seg.read_field("patient_name") == "Roe^Jane"
        seg.write_field("patient_id", ["only"])
        assert seg.read_field("patient_id") == "only"

    def test_unknown_name_raises(self) -> None:
        seg = _pid()
        with pytest.raises(UnknownFieldError):
            seg.write_field("nope", "x")
        assert len(seg) == 6

    def test_generic_layout_sid(self) -> None:
        seg = Segment.parse("ZZZ|foo|bar")
        assert seg.read_field("sid") == "foo"
        assert seg.has_field("sid")
        assert not seg.has_field("set_id")


class TestSegmentOrdering:
    def test_lower_weight_sorts_first(self) -> None:
        msh = Segment.parse("MSH", layout=MSH_LAYOUT)
        nte = Segment.parse("NTE", layout=NTE_LAYOUT)
        pid = _pid()
        assert msh < nte < pid
        assert pid > msh
        assert sorted([pid, nte, msh]) == [msh, nte, pid]

    def test_ties_compare_equal(self) -> None:
        a = Segment.parse("NTE|1", layout=NTE_LAYOUT)
        b = Segment.parse("NTE|2", layout=NTE_LAYOUT)
        assert a.compare(b) == 0
        assert a <= b and b <= a
        assert not a < b
        assert sorted([b, a]) == [b, a]

    def test_equality_is_identity(self) -> None:
        a = Segment.parse("NTE|1", layout=NTE_LAYOUT)
        b = Segment.parse("NTE|1", layout=NTE_LAYOUT)
        assert a != b
        assert a == a


class TestSegmentRendering:
    def test_str_is_wire_form(self) -> None:
        assert str(_pid()) == "PID|1||123||Doe^John"

    def test_to_info(self) -> None:
        assert _pid().to_info().startswith("PID: 6 fields")
        assert Segment.parse("|x").to_info().startswith("<generic>")
