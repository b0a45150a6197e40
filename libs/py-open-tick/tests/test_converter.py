"""Tests for canonical tick conversion."""

from datetime import date

import pytest
from pydantic import ValidationError

from open_tick.converter import (
    ConversionOutcome,
    convert,
    convert_many,
    convert_mountain_project,
    convert_thecrag,
)
from open_tick.exceptions import ConversionError, OpenTickError
from open_tick.schema import CanonicalTick, Discipline
from open_tick.vendor_schemas import MountainProjectTick, TheCragTick

MP_ROW = {
    "Date": "2023-06-01",
    "Route": "Route Name",
    "Rating": "5.10a",
    "Notes": "fun route",
    "URL": "https://www.mountainproject.com/route/271828/route-name",
    "Pitches": "1",
    "Location": "Area > Crag",
    "Avg Stars": "2.5",
    "Your Stars": "-1",
    "Style": "TR",
    "Lead Style": "",
    "Route Type": "Trad, TR",
    "Your Rating": "5.10b",
    "Length": "80",
    "Rating Code": "2100",
}

THECRAG_ROW = {
    "Route Name": "Kachoong",
    "Ascent Label": "Kachoong, Redpoint",
    "Ascent ID": "4567890",
    "Ascent Link": "https://www.thecrag.com/ascent/4567890",
    "Ascent Type": "Redpoint",
    "Route Grade": "21",
    "Ascent Grade": "22",
    "Route Gear Style": "Trad",
    "Ascent Gear Style": "TopRope",
    "Route Height": "30",
    "Ascent Height": "30",
    "# Ascents": "1200",
    "Route Stars": "***",
    "Route ID": "11928",
    "Route Link": "https://www.thecrag.com/route/11928",
    "Country": "Australia",
    "Country Link": "https://www.thecrag.com/climbing/australia",
    "Crag Name": "Arapiles",
    "Crag Link": "https://www.thecrag.com/climbing/australia/arapiles",
    "Crag Path": "Australia > Victoria > Arapiles > Pharos",
    "With": "Sam",
    "Comment": "Big roof",
    "Quality": "Classic",
    "Ascent Date": "2023-05-20T10:00:00Z",
    "Log Date": "2023-06-01T08:30:00Z",
    "Shot": "1",
}


def mp_tick(**overrides) -> MountainProjectTick:
    return MountainProjectTick.model_validate({**MP_ROW, **overrides})


def thecrag_tick(**overrides) -> TheCragTick:
    return TheCragTick.model_validate({**THECRAG_ROW, **overrides})


class TestMountainProjectConversion:
    """Tests for Mountain Project ticks."""

    def test_strings_copied_verbatim(self):
        """Test that free-text fields pass through unchanged."""
        tick = convert(mp_tick())

        assert tick.route_name == "Route Name"
        assert tick.route_location == "Area > Crag"
        assert tick.route_grade == "5.10a"
        assert tick.ascent_grade == "5.10b"
        assert tick.comment == "fun route"

    def test_empty_strings_are_present(self):
        """Test that empty columns stay present as empty strings."""
        tick = convert(mp_tick(Notes="", **{"Your Rating": ""}))

        assert tick.comment == ""
        assert tick.ascent_grade == ""

    def test_date_passes_through(self):
        """Test that the tick date is kept."""
        assert convert(mp_tick()).date == date(2023, 6, 1)

    def test_missing_date(self):
        """Test that a blank date stays absent."""
        assert convert(mp_tick(Date="")).date is None

    def test_route_discipline_from_route_type(self):
        """Test that route type maps through the taxonomy."""
        tick = convert(mp_tick())

        assert tick.route_discipline == Discipline(trad=True, top_rope=True)

    @pytest.mark.parametrize("route_type", ["Trad, TR", "Boulder", "Unknown", "", "Sport"])
    def test_ascent_discipline_always_absent(self, route_type):
        """Test that the ascent discipline is never guessed from the route."""
        tick = convert(mp_tick(**{"Route Type": route_type, "Style": "Lead"}))

        assert tick.ascent_discipline is None

    def test_direct_converter_matches_dispatch(self):
        """Test the source-specific entry point."""
        record = mp_tick()

        assert convert_mountain_project(record) == convert(record)


class TestTheCragConversion:
    """Tests for theCrag ticks."""

    def test_strings_copied_verbatim(self):
        """Test that names, grades and comments pass through."""
        tick = convert(thecrag_tick())

        assert tick.route_name == "Kachoong"
        assert tick.route_grade == "21"
        assert tick.ascent_grade == "22"
        assert tick.comment == "Big roof"

    def test_date_from_ascent_date(self):
        """Test that the ascent timestamp is truncated to a date."""
        assert convert(thecrag_tick()).date == date(2023, 5, 20)

    def test_log_date_never_used(self):
        """Test that a missing ascent date is not filled from the log date."""
        record = thecrag_tick(**{"Ascent Date": ""})

        assert record.log_date is not None
        assert convert(record).date is None

    def test_location_from_crag_path(self):
        """Test that the full hierarchy is used, not the bare crag name."""
        tick = convert(thecrag_tick())

        assert tick.route_location == "Australia > Victoria > Arapiles > Pharos"
        assert tick.route_location != "Arapiles"

    def test_route_and_ascent_disciplines_differ(self):
        """Test that both disciplines are mapped independently."""
        tick = convert(thecrag_tick())

        assert tick.route_discipline == Discipline(trad=True)
        assert tick.ascent_discipline == Discipline(top_rope=True)

    def test_unmodelled_gear_style(self):
        """Test that newer gear styles become unknown instead of failing."""
        tick = convert(thecrag_tick(**{"Route Gear Style": "Alpine", "Ascent Gear Style": ""}))

        assert tick.route_discipline == Discipline(unknown=True)
        assert tick.ascent_discipline == Discipline(unknown=True)

    def test_direct_converter_matches_dispatch(self):
        """Test the source-specific entry point."""
        record = thecrag_tick()

        assert convert_thecrag(record) == convert(record)


class TestCanonicalTick:
    """Tests for the canonical output record."""

    def test_is_immutable(self):
        """Test that converted ticks cannot be changed."""
        tick = convert(mp_tick())

        with pytest.raises(ValidationError):
            tick.route_name = "Other"

    def test_all_fields_optional(self):
        """Test that an empty tick is valid."""
        tick = CanonicalTick()

        assert tick.date is None
        assert tick.route_discipline is None

    def test_to_dict(self):
        """Test serialisation for downstream consumers."""
        data = convert(thecrag_tick()).to_dict()

        assert data["date"] == "2023-05-20"
        assert data["route_discipline"] == ["trad"]
        assert data["ascent_discipline"] == ["top-rope"]

    def test_to_dict_absent_discipline(self):
        """Test that absent disciplines serialise as None."""
        assert convert(mp_tick()).to_dict()["ascent_discipline"] is None


class TestDispatch:
    """Tests for dispatch and batch conversion."""

    def test_unknown_record_type(self):
        """Test that non-records are rejected loudly."""
        with pytest.raises(TypeError):
            convert({"Route": "not a record"})

    def test_conversion_error_is_open(self):
        """Test that new conversion failures can be added as subclasses."""

        class GradeFormatError(ConversionError):
            pass

        error = GradeFormatError("bad grade", source="thecrag")

        assert isinstance(error, ConversionError)
        assert isinstance(error, OpenTickError)
        assert error.to_dict()["error"]["code"] == "gradeformat"

    def test_convert_many_keeps_order(self):
        """Test that batch outcomes follow input order."""
        records = [mp_tick(Route="A"), thecrag_tick(), mp_tick(Route="B")]

        outcomes = list(convert_many(records))

        assert [o.index for o in outcomes] == [0, 1, 2]
        assert all(o.ok for o in outcomes)
        assert [o.tick.route_name for o in outcomes] == ["A", "Kachoong", "B"]

    def test_convert_many_skip(self, monkeypatch):
        """Test that a failing record is reported and the batch continues."""
        import open_tick.converter as converter

        def failing(record):
            raise ConversionError("rejected", source="mountainproject")

        monkeypatch.setitem(converter._CONVERTERS, MountainProjectTick, failing)

        outcomes = list(convert_many([mp_tick(), thecrag_tick()], on_error="skip"))

        assert outcomes[0] == ConversionOutcome(index=0, error=outcomes[0].error)
        assert not outcomes[0].ok
        assert outcomes[1].ok

    def test_convert_many_abort(self, monkeypatch):
        """Test that abort re-raises the first failure."""
        import open_tick.converter as converter

        def failing(record):
            raise ConversionError("rejected", source="mountainproject")

        monkeypatch.setitem(converter._CONVERTERS, MountainProjectTick, failing)

        with pytest.raises(ConversionError):
            list(convert_many([thecrag_tick(), mp_tick()], on_error="abort"))

    def test_convert_many_bad_policy(self):
        """Test that unknown policies are rejected."""
        with pytest.raises(ValueError):
            list(convert_many([], on_error="retry"))
