from typed_argparser import Argument, ArgumentParser, OptionNames, ValueKind


def _noop_writer(value):
    return None


def test_fluent_modifiers_return_the_argument():
    argument = Argument(0, ValueKind.PATH, ["input"], _noop_writer)

    assert argument.required() is argument
    assert argument.help("File to read") is argument
    assert argument.is_required
    assert argument.help_text == "File to read"


def test_defaults():
    argument = Argument(3, ValueKind.BOOL, ["--verbose", "-v"], _noop_writer)

    assert argument.index == 3
    assert argument.name == "--verbose"
    assert argument.names == ("--verbose", "-v")
    assert not argument.is_required
    assert not argument.provided
    assert argument.help_text == ""


def test_mark_provided_is_sticky():
    argument = Argument(0, ValueKind.INT64, ["count"], _noop_writer)
    argument.mark_provided()
    argument.mark_provided()
    assert argument.provided


def test_repr():
    argument = Argument(1, ValueKind.UINT64, ["-n"], _noop_writer).required()
    assert repr(argument) == (
        "Argument(index=1, names=('-n',), kind=uint64, required=True)"
    )


def test_option_names():
    assert OptionNames("--out", "-o").one_defined()
    assert OptionNames(short_name="-o").one_defined()
    assert not OptionNames().one_defined()
    assert OptionNames("--out") == ("--out", "")


def test_parser_assigns_stable_indices():
    parser = ArgumentParser(["prog"])
    first = parser.positional("input", str)
    option = parser.option(("--jobs", "-j"), int).help("Worker count")
    second = parser.positional("output", str)

    assert [a.index for a in parser.arguments] == [0, 1, 2]
    assert parser.arguments == (first, option, second)
    assert option.kind is ValueKind.INT64
    assert option.help_text == "Worker count"
