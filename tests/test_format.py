"""Tests for format translation and rendering."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from sdate import RFC3339, Epoch, Layout, translate
from sdate.format import TOKENS, Directive, Field, Text

DT = datetime(2023, 1, 5, 7, 8, 9, 123456, tzinfo=timezone.utc)


def test_basic_layout_segments():
    layout = translate("YYYY/MM/DD hh:mm:ss")

    assert layout == Layout(
        (
            Field("YYYY"),
            Text("/"),
            Field("MM"),
            Text("/"),
            Field("DD"),
            Text(" "),
            Field("hh"),
            Text(":"),
            Field("mm"),
            Text(":"),
            Field("ss"),
        )
    )


def test_basic_layout_renders_zero_padded():
    rendered = translate("YYYY/MM/DD hh:mm:ss").render(DT)

    assert rendered == "2023/01/05 07:08:09"
    assert not any(letter in rendered for letter in "YMDhms")


def test_milliseconds_keep_literal_dot():
    layout = translate("YYYY-MM-DD hh:mm:ss.SSS")

    assert Text(".") in layout.segments
    assert layout.segments[-1] == Field("SSS")
    assert layout.render(DT) == "2023-01-05 07:08:09.123"


def test_microseconds():
    assert translate("ss.UUU").render(DT) == "09.123456"


def test_unpadded_and_short_tokens():
    assert translate("M/D/YY").render(DT) == "1/5/23"
    dec = datetime(2023, 12, 25, tzinfo=timezone.utc)
    assert translate("M/D/YY").render(dec) == "12/25/23"


def test_meridiem():
    morning = datetime(2023, 1, 5, 7, 0, 0, tzinfo=timezone.utc)
    evening = datetime(2023, 1, 5, 19, 0, 0, tzinfo=timezone.utc)
    noon = datetime(2023, 1, 5, 12, 0, 0, tzinfo=timezone.utc)

    assert translate("hh a").render(morning) == "07 am"
    assert translate("hh a").render(evening) == "19 pm"
    assert translate("a").render(noon) == "pm"


@pytest.mark.parametrize(
    "tz,abbrev,colon,plain",
    [
        ("Asia/Tokyo", "JST", "+09:00", "+0900"),
        ("America/New_York", "EST", "-05:00", "-0500"),
        ("Asia/Kolkata", "IST", "+05:30", "+0530"),
        ("UTC", "UTC", "+00:00", "+0000"),
    ],
)
def test_zone_tokens(tz, abbrev, colon, plain):
    dt = datetime(2023, 1, 5, 12, 0, 0, tzinfo=ZoneInfo(tz))

    assert translate("TZ").render(dt) == abbrev
    assert translate("ZZ").render(dt) == colon
    assert translate("ZZZ").render(dt) == plain


def test_zone_abbreviation_for_fixed_offset():
    """Test that offset-only zones render their offset in place of a name."""
    dt = datetime(2023, 1, 5, 12, 0, 0, tzinfo=timezone(timedelta(hours=9)))

    assert translate("TZ").render(dt) == "+0900"


def test_longest_token_wins():
    """Test that overlapping tokens are matched longest-first in one pass."""
    assert translate("YYYY").segments == (Field("YYYY"),)
    assert translate("YYYYYY").segments == (Field("YYYY"), Field("YY"))
    assert translate("ZZZ").segments == (Field("ZZZ"),)
    assert translate("ZZZZ").segments == (Field("ZZZ"), Text("Z"))
    assert translate("MMM").segments == (Field("MM"), Field("M"))


def test_tokens_sorted_longest_first():
    lengths = [len(token) for token in TOKENS]

    assert lengths == sorted(lengths, reverse=True)
    assert "rfc3339_zone" not in TOKENS


def test_other_letters_are_literal():
    layout = translate("YYYY-MM-DDThh:mm:ss")

    assert layout.render(DT) == "2023-01-05T07:08:09"


def test_token_letters_inside_words_are_substituted():
    """Text that spells a token is still a token (single-pass, no escaping)."""
    assert translate("Day").render(DT) == "5amy"


def test_layout_str_round_trips_format():
    fmt = "YYYY/MM/DD hh:mm:ss.SSS ZZ (TZ)"

    assert str(translate(fmt)) == fmt


def test_empty_format():
    assert translate("").render(DT) == ""


@pytest.mark.parametrize("keyword", ["unix", "epoch", "UNIX", "Epoch"])
def test_epoch_keywords(keyword):
    assert translate(keyword) == Epoch()


def test_epoch_render():
    dt = datetime(2023, 10, 27, 2, 0, 0, 999999, tzinfo=timezone.utc)

    assert Epoch().render(dt) == "1698372000"


def test_epoch_render_floors_before_1970():
    dt = datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=timezone.utc)

    assert Epoch().render(dt) == "-1"


def test_epoch_ignores_timezone():
    dt = datetime(2023, 10, 27, 11, 0, 0, tzinfo=ZoneInfo("Asia/Tokyo"))

    assert Epoch().render(dt) == "1698372000"


def test_rfc3339_keyword():
    assert translate("rfc3339") is RFC3339
    assert translate("RFC3339") is RFC3339


def test_rfc3339_render():
    utc = datetime(2023, 10, 27, 10, 30, 0, 500000, tzinfo=timezone.utc)
    tokyo = datetime(2023, 10, 27, 10, 30, 0, tzinfo=ZoneInfo("Asia/Tokyo"))
    new_york = datetime(2023, 10, 27, 10, 30, 0, tzinfo=ZoneInfo("America/New_York"))

    assert RFC3339.render(utc) == "2023-10-27T10:30:00Z"
    assert RFC3339.render(tokyo) == "2023-10-27T10:30:00+09:00"
    assert RFC3339.render(new_york) == "2023-10-27T10:30:00-04:00"


def test_unknown_field_token():
    with pytest.raises(ValueError, match="Unknown format token"):
        Field("QQ")


def test_strftime_directives():
    layout = translate("%Y-%m-%d")

    assert layout.segments == (
        Directive("%Y"),
        Text("-"),
        Directive("%m"),
        Text("-"),
        Directive("%d"),
    )
    assert layout.render(DT) == "2023-01-05"
    assert translate("%j").render(DT) == "005"


def test_strftime_directives_mixed_with_tokens():
    """Test that directives and friendly tokens can share one format."""
    layout = translate("%A DD/MM hh:%M ZZ")

    assert layout.render(DT) == "Thursday 05/01 07:08 +00:00"


def test_directive_letters_are_not_tokens():
    assert translate("%M").segments == (Directive("%M"),)
    assert translate("%D").segments == (Directive("%D"),)
    assert translate("%a").segments == (Directive("%a"),)


def test_percent_escapes():
    assert translate("100%%").render(DT) == "100%"
    assert translate("100%").render(DT) == "100%"


def test_layout_str_round_trips_directives():
    fmt = "%Y/MM/%d hh:mm %Z"

    assert str(translate(fmt)) == fmt


def test_invalid_directive():
    with pytest.raises(ValueError, match="Invalid strftime directive"):
        Directive("Y")


def test_weekday_and_month_names_next_to_tokens():
    dt = datetime(2023, 10, 27, 10, 30, tzinfo=timezone.utc)

    assert translate("YYYY-MM-DD hh:mm:ss.SSS").render(dt) == "2023-10-27 10:30:00.000"
    assert translate("%A, DD %b").render(dt) == "Friday, 27 Oct"
