import pytest

from comptree.types import DEFAULT_TYPE, ArgType, ListOf, implicit_type, normalize_types, to_flag_type


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        (ArgType.COUNT, ArgType.COUNT),
        (ListOf(ArgType.NUMBER), ListOf(ArgType.NUMBER)),
        (bool, ArgType.BOOLEAN),
        (str, ArgType.STRING),
        (int, ArgType.NUMBER),
        (float, ArgType.NUMBER),
        (list[str], ListOf(ArgType.STRING)),
        (list[int], ListOf(ArgType.NUMBER)),
        (tuple[float, ...], ListOf(ArgType.NUMBER)),
        ([str], ListOf(ArgType.STRING)),
        ([int], ListOf(ArgType.NUMBER)),
        ("count", ArgType.COUNT),
        ("Boolean", ArgType.BOOLEAN),
        ("int", ArgType.NUMBER),
        ("list[number]", ListOf(ArgType.NUMBER)),
        ("list[str]", ListOf(ArgType.STRING)),
    ],
)
def test_to_flag_type(hint, expected):
    assert to_flag_type(hint) == expected


@pytest.mark.parametrize("hint", [dict, "whatever", [str, int], list[bool], "list[count]"])
def test_to_flag_type_invalid(hint):
    with pytest.raises(TypeError):
        to_flag_type(hint)


def test_list_of_rejects_non_value_elements():
    with pytest.raises(TypeError):
        ListOf(ArgType.COUNT)


def test_implicit_type():
    assert implicit_type(False) is DEFAULT_TYPE is ArgType.BOOLEAN
    assert implicit_type(True) is ArgType.COUNT


def test_normalize_types_aliases_copy_canonical_type():
    types = {"--target": str}
    aliases = {"-t": "--target"}

    result = normalize_types(types, aliases)

    assert result == {"--target": ArgType.STRING, "-t": ArgType.STRING}
    # Inputs are left untouched.
    assert types == {"--target": str}


def test_normalize_types_untyped_canonical_defaults_to_boolean():
    with pytest.warns(UserWarning, match="no declared type"):
        result = normalize_types({}, {"-f": "--force"})
    assert result == {"-f": ArgType.BOOLEAN}


def test_normalize_types_command_alias_does_not_warn(recwarn):
    normalize_types({}, {"b": "build"})
    assert not recwarn.list
