import pytest

from dissrc.gnugetopt import Getopt, OptionEvent, getopt
from dissrc.longopts import HasArg, LongOption

OPTSTRING = "abc:d:0123456789"

LONGOPTS = [
    LongOption("verbose", HasArg.NO, val="v"),
    LongOption("version", HasArg.NO, val="V"),
    LongOption("name", HasArg.REQUIRED, val="n"),
    LongOption("color", HasArg.OPTIONAL, val="c"),
    LongOption("quiet", flag="quiet", val=1),
]


def scan(argv, optstring=OPTSTRING, **kwargs):
    kwargs.setdefault("posixly_correct", None)
    parser = Getopt(argv, optstring, **kwargs)
    events = list(parser)
    return parser, events


def test_permute_moves_operands_to_end():
    parser, events = scan(["prog", "-a", "x", "-b", "-cfoo", "y", "-d", "bar", "z"])
    assert [(e.option, e.arg) for e in events] == [
        ("a", None),
        ("b", None),
        ("c", "foo"),
        ("d", "bar"),
    ]
    assert parser.remaining() == ["x", "y", "z"]
    assert parser.argv[0] == "prog"


def test_clustered_short_options():
    _, events = scan(["prog", "-ab12"])
    assert [e.option for e in events] == ["a", "b", "1", "2"]


def test_require_order_stops_at_operand():
    parser, events = scan(["prog", "-a", "x", "-b"], "+" + OPTSTRING)
    assert [e.option for e in events] == ["a"]
    assert parser.remaining() == ["x", "-b"]


def test_posixly_correct_means_require_order():
    parser, events = scan(["prog", "-a", "x", "-b"], posixly_correct="1")
    assert [e.option for e in events] == ["a"]
    assert parser.remaining() == ["x", "-b"]


def test_return_in_order_reports_operands_as_code_one():
    parser, events = scan(["prog", "x", "-a", "y"], "-" + OPTSTRING)
    assert [(e.option, e.arg) for e in events] == [(1, "x"), ("a", None), (1, "y")]
    assert parser.remaining() == []


def test_double_dash_ends_options():
    parser, events = scan(["prog", "-a", "--", "-b", "x"])
    assert [e.option for e in events] == ["a"]
    assert parser.remaining() == ["-b", "x"]


def test_lone_dash_is_operand():
    parser, events = scan(["prog", "-", "-a"])
    assert [e.option for e in events] == ["a"]
    assert parser.remaining() == ["-"]


def test_separate_required_argument():
    _, events = scan(["prog", "-c", "-a"])
    assert events == [OptionEvent("c", "-a")]


def test_invalid_option_reports_and_sets_optopt(capsys):
    parser, events = scan(["prog", "-z"])
    assert len(events) == 1
    assert events[0].option == "?"
    assert events[0].is_error
    assert parser.optopt == "z"
    assert "invalid option -- z" in capsys.readouterr().err


def test_illegal_wording_when_posixly_correct(capsys):
    _, events = scan(["prog", "-z"], posixly_correct="")
    assert events[0].option == "?"
    assert "illegal option -- z" in capsys.readouterr().err


def test_opterr_false_is_silent(capsys):
    _, events = scan(["prog", "-z"], opterr=False)
    assert events[0].option == "?"
    assert capsys.readouterr().err == ""


def test_missing_argument_question_mark(capsys):
    parser, events = scan(["prog", "-c"])
    assert events[0].option == "?"
    assert parser.optopt == "c"
    assert "option requires an argument -- c" in capsys.readouterr().err


def test_missing_argument_colon_mode_is_silent(capsys):
    _, events = scan(["prog", "-c"], ":" + OPTSTRING)
    assert events[0].option == ":"
    assert capsys.readouterr().err == ""


def test_optional_short_argument():
    parser, events = scan(["prog", "-efoo", "-e", "bar"], "e::")
    assert [(e.option, e.arg) for e in events] == [("e", "foo"), ("e", None)]
    assert parser.remaining() == ["bar"]


def test_long_options_exact_and_abbreviated():
    parser, events = scan(
        ["prog", "--verbose", "--na=x", "--name", "y", "file"], "", longopts=LONGOPTS
    )
    assert [(e.option, e.arg, e.long_index) for e in events] == [
        ("v", None, 0),
        ("n", "x", 2),
        ("n", "y", 2),
    ]
    assert parser.remaining() == ["file"]


def test_long_optional_argument():
    parser, events = scan(
        ["prog", "--color", "red", "--color=blue"], "", longopts=LONGOPTS
    )
    assert [(e.option, e.arg) for e in events] == [("c", None), ("c", "blue")]
    assert parser.remaining() == ["red"]


def test_long_flag_is_stored():
    parser, events = scan(["prog", "--quiet"], "", longopts=LONGOPTS)
    assert events == [OptionEvent(0, None, 4)]
    assert parser.flags == {"quiet": 1}


def test_ambiguous_long_option(capsys):
    parser, events = scan(["prog", "--ver", "x"], "", longopts=LONGOPTS)
    assert [e.option for e in events] == ["?"]
    assert "is ambiguous" in capsys.readouterr().err
    assert parser.remaining() == ["x"]


def test_long_option_disallows_argument(capsys):
    _, events = scan(["prog", "--verbose=1"], "", longopts=LONGOPTS)
    assert events[0].option == "?"
    assert "doesn't allow an argument" in capsys.readouterr().err


def test_long_option_missing_argument(capsys):
    _, events = scan(["prog", "--name"], "", longopts=LONGOPTS)
    assert events[0].option == "?"
    assert "requires an argument" in capsys.readouterr().err


def test_long_option_missing_argument_colon_mode():
    _, events = scan(["prog", "--name"], ":", longopts=LONGOPTS)
    assert events[0].option == ":"


def test_unrecognized_long_option(capsys):
    _, events = scan(["prog", "--bogus"], "", longopts=LONGOPTS)
    assert events[0].option == "?"
    assert "unrecognized option `--bogus'" in capsys.readouterr().err


def test_long_only_accepts_single_dash():
    _, events = scan(["prog", "-verbose", "-v"], "v", longopts=LONGOPTS, long_only=True)
    assert [(e.option, e.long_index) for e in events] == [("v", 0), ("v", None)]


def test_w_semicolon_maps_to_long_option():
    _, events = scan(["prog", "-W", "verbose", "-Wname=x"], "W;", longopts=LONGOPTS)
    assert [(e.option, e.long_index) for e in events] == [("v", 0), ("n", 2)]
    assert events[1].arg == "x"


def test_w_unknown_word_returns_w():
    _, events = scan(["prog", "-W", "other"], "W;", longopts=LONGOPTS)
    assert events == [OptionEvent("W", "other")]


def test_getopt_helper_returns_events_and_operands(monkeypatch):
    monkeypatch.delenv("POSIXLY_CORRECT", raising=False)
    events, rest = getopt(["prog", "x", "-a", "-dval"], OPTSTRING)
    assert [(e.option, e.arg) for e in events] == [("a", None), ("d", "val")]
    assert rest == ["x"]


def test_empty_argv_yields_nothing():
    parser = Getopt([], OPTSTRING, posixly_correct=None)
    assert parser.next() is None
    assert parser.remaining() == []