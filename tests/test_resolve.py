import pytest

from comptree import CompletionUnit, parse_tree, resolve


@pytest.fixture
def root(tree):
    return parse_tree(tree)


def test_resolve_root(root):
    units = resolve(root, ())

    assert units == [
        CompletionUnit(name="start", description="Start the service"),
        CompletionUnit(name="stop", description="Stop the service"),
        CompletionUnit(name="build", description="Build the project"),
        CompletionUnit(name="deploy"),
        CompletionUnit(name="shell"),
    ]


def test_resolve_nested(root):
    assert [unit.name for unit in resolve(root, ["build"])] == ["release", "debug"]


def test_resolve_leaf_list(root):
    assert resolve(root, ["deploy"]) == [CompletionUnit(name="staging"), CompletionUnit(name="prod")]


def test_resolve_leaf_string(root):
    assert resolve(root, ["shell"]) == "__payload__"


@pytest.mark.parametrize(
    "tokens",
    [
        ["missing"],
        ["build", "missing"],
        ["build", "release", "missing"],
        ["deploy", "staging"],
        ["shell", "anything"],
    ],
)
def test_resolve_unknown_path_is_empty(root, tokens):
    assert resolve(root, tokens) == []


def test_resolve_pending_flag(root):
    assert resolve(root, ["build"], pending_flag="--target") == [
        CompletionUnit(name="x86"),
        CompletionUnit(name="arm"),
    ]


def test_resolve_pending_flag_without_options(root):
    assert resolve(root, [], pending_flag="--target") == []
    assert resolve(root, ["build"], pending_flag="--unknown") == []


def test_resolve_pending_flag_on_leaf(root):
    assert resolve(root, ["deploy"], pending_flag="--target") == []


def test_resolve_pending_flag_with_described_values():
    root = parse_tree({"__opts": {"--color": {"red": {"__desc": "Warm"}, "blue": {}}}})

    assert resolve(root, [], pending_flag="--color") == [
        CompletionUnit(name="red", description="Warm"),
        CompletionUnit(name="blue"),
    ]


def test_resolve_shared_description():
    root = parse_tree({"__desc": "Output format", "json": {}, "yaml": {"__desc": "YAML document"}})

    assert resolve(root, []) == [
        CompletionUnit(name="json", description="Output format"),
        CompletionUnit(name="yaml", description="YAML document"),
    ]


def test_resolve_alias_hints(root):
    units = resolve(root, [], alias_hints={"build": "b"})

    assert units[2] == CompletionUnit(name="build", description="Build the project", alias="b")
    assert units[0].alias is None
