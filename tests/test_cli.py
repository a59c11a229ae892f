"""Tests for the command-line entry point."""

import pytest

from sdate.cli import main


def test_positional_operation(capsys):
    code = main(["--base", "2023-10-27T10:30:00Z", "@d"])

    assert code == 0
    assert capsys.readouterr().out == "2023-10-27T00:00:00Z\n"


def test_op_flag_overrides_positional(capsys):
    code = main(["--base", "2023-10-27T10:30:00Z", "--op=-1d@d", "@y"])

    assert code == 0
    assert capsys.readouterr().out == "2023-10-26T00:00:00Z\n"


def test_operation_after_double_dash(capsys):
    code = main(["--base", "2023-10-27T10:30:00Z", "--", "-1d@d"])

    assert code == 0
    assert capsys.readouterr().out == "2023-10-26T00:00:00Z\n"


def test_no_operation_prints_base(capsys):
    code = main(["--base", "1698372000", "--format", "unix"])

    assert code == 0
    assert capsys.readouterr().out == "1698372000\n"


def test_format_and_output_timezone(capsys):
    code = main(
        [
            "--op=+2h",
            "--base",
            "TZ=America/New_York 2023-10-27T10:00:00",
            "--output-tz",
            "Asia/Tokyo",
            "--format",
            "YYYY-MM-DD hh:mm:ss ZZ",
        ]
    )

    assert code == 0
    assert capsys.readouterr().out == "2023-10-28 01:00:00 +09:00\n"


def test_environment_defaults(capsys, monkeypatch):
    monkeypatch.setenv("SDATE_FORMAT", "YYYY/MM/DD TZ")
    monkeypatch.setenv("SDATE_OUTPUT_TZ", "Asia/Tokyo")

    code = main(["--base", "2023-10-27T20:00:00Z"])

    assert code == 0
    assert capsys.readouterr().out == "2023/10/28 JST\n"


def test_flags_win_over_environment(capsys, monkeypatch):
    monkeypatch.setenv("SDATE_FORMAT", "unix")

    code = main(["--base", "2023-10-27T20:00:00Z", "--format", "YYYY"])

    assert code == 0
    assert capsys.readouterr().out == "2023\n"


@pytest.mark.parametrize(
    "argv,message",
    [
        (["--base", "2023-10-27T10:30:00Z", "@x"], "Invalid operation"),
        (["--base", "not a time", "@d"], "Invalid base time"),
        (["--base", "TZ=Nowhere/Land 2023-10-27", "@d"], "Invalid timezone name"),
        (["--base", "2023-10-27", "--output-tz", "Nowhere/Land"], "Invalid timezone name"),
    ],
)
def test_errors_exit_non_zero(capsys, argv, message):
    code = main(argv)

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert captured.err.startswith("Error: ")
    assert message in captured.err


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("sdate ")


def test_op_flag_with_separate_negative_value(capsys):
    code = main(["--op", "-1d@d", "--base", "2023-10-27T10:30:00Z"])

    assert code == 0
    assert capsys.readouterr().out == "2023-10-26T00:00:00Z\n"


def test_op_flag_with_separate_positive_value(capsys):
    code = main(["--base", "2023-10-27T10:30:00Z", "--op", "+2h"])

    assert code == 0
    assert capsys.readouterr().out == "2023-10-27T12:30:00Z\n"


def test_strftime_format(capsys):
    code = main(["--base", "2023-10-27T10:30:00Z", "--format", "%Y-%m-%d %H:%M"])

    assert code == 0
    assert capsys.readouterr().out == "2023-10-27 10:30\n"
