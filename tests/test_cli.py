# tests/test_cli.py
import numpy as np
import pytest

from probrng.cli import main, format_samples


def _fake_input(*answers):
    it = iter(answers)
    return lambda prompt: next(it)


def _last_line(text):
    return text.strip().splitlines()[-1]


def test_flags_print_samples(capsys):
    code = main(["--distribution", "uniform", "--accuracy", "1", "--count", "5", "--seed", "123"])
    out = capsys.readouterr().out

    assert code == 0
    values = [float(v) for v in _last_line(out).split(", ")]
    assert len(values) == 5
    assert all(0.0 <= v <= 1.0 for v in values)


def test_same_seed_same_output(capsys):
    argv = ["-d", "exponential", "--lam", "0.5", "-a", "2", "-n", "6", "--seed", "4"]
    main(argv)
    first = capsys.readouterr().out
    main(argv)
    assert capsys.readouterr().out == first


def test_normal_with_parameters(capsys):
    code = main(["-d", "normal", "--mu", "5", "--sigma", "0.1", "-a", "2", "-n", "3", "--seed", "1"])
    assert code == 0
    assert len(_last_line(capsys.readouterr().out).split(", ")) == 3


def test_interactive_prompts(capsys):
    code = main(["--interactive", "--seed", "9"], input_func=_fake_input("Uniform", "2", "3"))
    out = capsys.readouterr().out

    assert code == 0
    assert "Starting random number generator!" in out
    assert len(_last_line(out).split(", ")) == 3


def test_missing_distribution_falls_back_to_prompts(capsys):
    code = main(["--seed", "9"], input_func=_fake_input("Chi-Square", "1", "2"))
    assert code == 0
    assert len(_last_line(capsys.readouterr().out).split(", ")) == 2


@pytest.mark.parametrize("argv", [
    ["-d", "uniform", "-a", "7", "-n", "3"],
    ["-d", "uniform", "-a", "2", "-n", "0"],
    ["-d", "uniform", "-a", "2", "-n", "5000"],
    ["-d", "cauchy", "-a", "2", "-n", "3"],
    ["-d", "uniform", "--mu", "1", "-n", "3"],
    ["-d", "normal", "--sigma", "-1", "-n", "3"],
])
def test_invalid_input_exit_status(capsys, argv):
    assert main(argv) == 1
    assert "Error" in capsys.readouterr().err


def test_interactive_non_integer(capsys):
    code = main(["-i"], input_func=_fake_input("Uniform", "two", "3"))
    assert code == 1
    assert "Invalid input" in capsys.readouterr().err


def test_argparse_type_error_exits_two():
    with pytest.raises(SystemExit) as exc:
        main(["--count", "abc"])
    assert exc.value.code == 2


def test_format_samples():
    assert format_samples(np.array([0.1, 1.0, -0.25]), 2) == "0.10, 1.00, -0.25"


def test_format_samples_drops_negative_zero():
    assert format_samples(np.array([-0.0, 0.0, -0.5]), 3) == "0.000, 0.000, -0.500"


def test_standard_normal_output_is_finite(capsys):
    code = main(["-d", "standard normal", "-a", "1", "-n", "200", "--seed", "0"])
    tokens = _last_line(capsys.readouterr().out).split(", ")

    assert code == 0
    assert len(tokens) == 200
    assert not any("inf" in t or "nan" in t for t in tokens)
    assert "-0.0" not in tokens
