import io

import pytest

from comptree import ArgType, Completion, CompletionUnit, next_completions


def test_bash_root(completion):
    result = completion.next_completions("bash", line="mycli ")
    assert result.completions == ["start", "stop", "build", "deploy", "shell"]


def test_bash_prefix_filter(completion):
    result = completion.next_completions("bash", line="mycli st")
    assert result.completions == ["start", "stop"]


@pytest.mark.parametrize("partial", ["", "s", "st", "sto", "b", "x", "S"])
def test_bash_is_filtered_subset(completion, partial):
    unfiltered = completion.next_completions("bash", line="mycli ").completions
    filtered = completion.next_completions("bash", line=f"mycli {partial}").completions

    assert isinstance(filtered, list)
    assert set(filtered) <= set(unfiltered)
    assert all(entry.startswith(partial) for entry in filtered)
    assert filtered == [entry for entry in unfiltered if entry.startswith(partial)]


@pytest.mark.parametrize("shell", ["zsh", "fish"])
def test_zsh_fish_are_not_filtered(completion, shell):
    full = completion.next_completions(shell, line="mycli ").completions
    partial = completion.next_completions(shell, line="mycli st").completions

    assert full == partial
    assert len(full) == 5


def test_zsh_descriptions():
    completion = Completion({"start": {"__desc": "Start the service"}, "stop": {"__desc": "Stop the service"}})

    result = completion.next_completions("zsh", line="mycli ")

    assert result.completions == ["start:Start the service", "stop:Stop the service"]


def test_zsh_escapes_colons(completion):
    result = completion.next_completions("zsh", line="mycli build ")
    assert result.completions == ["release:Release build", r"debug:Debug\: unoptimized"]


def test_fish_leaf_list(completion):
    result = completion.next_completions("fish", line="mycli deploy ")
    assert result.completions == ["staging", "prod"]


def test_flag_value_completion(completion):
    result = completion.next_completions("bash", line="mycli --verbose build --target ")

    assert result.completions == ["x86", "arm"]
    assert result.arg_values["--verbose"] is True
    assert result.parsed is not None
    assert result.parsed.awaiting_flag_value is True
    assert result.parsed.tokens == ("build",)


def test_flag_value_completion_with_prefix(completion):
    result = completion.next_completions("bash", line="mycli build --target=a")
    assert result.completions == ["arm"]


def test_flag_value_completion_via_alias(completion):
    canonical = completion.next_completions("zsh", line="mycli --verbose build --target ")
    alias = completion.next_completions("zsh", line="mycli --verbose b -t ")

    assert alias == canonical


def test_number_list_then_subcommand(completion):
    result = completion.next_completions("bash", line="mycli --nums 1 bu")

    assert result.completions == ["build"]
    assert result.arg_values["--nums"] == [1]


def test_number_list_continues(completion):
    assert completion.next_completions("bash", line="mycli build --nums 1 ").completions == ["1", "2"]


def test_flag_value_without_options_is_empty(completion):
    assert completion.next_completions("bash", line="mycli --target ").completions == []


def test_payload_is_returned_verbatim(completion):
    result = completion.next_completions("zsh", ["--help"], line="mycli shell ")

    assert result.completions == "__payload__"
    assert result.is_payload


def test_other_completions_are_appended(completion):
    extras = ["--help", CompletionUnit(name="--version", description="Show: version")]

    bash = completion.next_completions("bash", extras, line="mycli --")
    zsh = completion.next_completions("zsh", extras, line="mycli --")

    assert bash.completions == ["--help", "--version"]
    assert zsh.completions[-2:] == ["--help", r"--version:Show\: version"]


def test_separator(completion):
    result = completion.next_completions("bash", line="mycli build -- some thing")

    assert result.completions == ["release", "debug"]
    assert result.arg_values["--"] == ["some", "thing"]


def test_arg_values(completion):
    result = completion.next_completions("bash", line="mycli -vvv --tags a,b,c build ")

    assert result.arg_values["-v"] == 3
    assert result.arg_values["--tags"] == ["a", "b", "c"]
    assert result.arg_values["build"] is True


def test_comp_line_environment(completion, monkeypatch):
    monkeypatch.setenv("COMP_LINE", "mycli st")
    assert completion.next_completions("bash").completions == ["start", "stop"]


def test_missing_comp_line(completion, monkeypatch):
    monkeypatch.delenv("COMP_LINE", raising=False)
    result = completion.next_completions("bash")

    assert result.completions == []
    assert result.arg_values == {}
    assert result.parsed is None


@pytest.mark.parametrize("shell", ["bash", "zsh", "fish"])
@pytest.mark.parametrize(
    "line",
    [
        "mycli ",
        "mycli b",
        "mycli -vv b -t ",
        "mycli --nums 1 2 3 build deb",
        "mycli unknown --what ever -- x",
    ],
)
def test_idempotent(completion, shell, line):
    first = completion.next_completions(shell, line=line)
    second = completion.next_completions(shell, line=line)

    assert first.completions == second.completions
    assert first.arg_values == second.arg_values


def test_constructor_patches_alias_types(completion):
    assert completion.types["-t"] is ArgType.STRING
    assert completion.types["b"] is ArgType.BOOLEAN


def test_constructor_does_not_mutate_inputs(tree, aliases, types):
    original = dict(types)
    Completion(tree, aliases, types)
    assert types == original


def test_constructor_rejects_bad_tree():
    with pytest.raises(TypeError):
        Completion({"build": 42})


def test_result_write_lines(completion):
    buffer = io.StringIO()
    completion.next_completions("fish", line="mycli build ").write(buffer)

    assert buffer.getvalue() == "release\tRelease build\ndebug\tDebug: unoptimized\n"


def test_result_write_payload(completion, capsys):
    completion.next_completions("bash", line="mycli shell ").write()
    assert capsys.readouterr().out == "__payload__\n"


def test_next_completions_function(tree):
    result = next_completions(tree, "bash", types={"--target": str}, line="mycli bu")
    assert result.completions == ["build"]
