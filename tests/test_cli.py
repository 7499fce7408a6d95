import pytest

from minilang.cli import LANGUAGE_SPEC, main


def write(tmp_path, code, name="prog.minilang"):
    path = tmp_path / name
    path.write_text(code)
    return str(path)


def test_no_arguments_runs_fibonacci(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "55\n"


def test_runs_a_file_quietly(tmp_path, capsys):
    path = write(tmp_path, "x = 3; while (x > 0) { print(x); x = x - 1; }")
    assert main([path]) == 0
    captured = capsys.readouterr()
    assert captured.out == "3\n2\n1\n"
    assert captured.err == ""


def test_verbose_prints_banners_then_tac_then_output(tmp_path, capsys):
    path = write(tmp_path, "a = 1; b = 2; print(a + b * 3);")
    assert main(["-v", path]) == 0
    out = capsys.readouterr().out
    assert out.index("PHASE 1: LEXICAL ANALYSIS") < out.index("--- THREE ADDRESS CODE ---")
    assert out.index("t2 = a + t1") < out.index("--- END TAC ---")
    assert out.index("--- END TAC ---") < out.index("Program Output:") < out.index("\n7\n")
    assert "[PARSER]" not in out


def test_verbose_without_file_uses_default_program(capsys):
    assert main(["-v"]) == 0
    out = capsys.readouterr().out
    assert "THREE ADDRESS CODE" in out
    assert "\n55\n" in out


def test_debug_adds_phase_traces(capsys):
    assert main(["-d"]) == 0
    out = capsys.readouterr().out
    for tag in ("[LEXER]", "[PARSER]", "[SEMANTIC]", "[OPTIMIZATION]", "[TAC]"):
        assert tag in out
    assert "THREE ADDRESS CODE" in out


@pytest.mark.parametrize("flag", ["--spec", "-spec"])
def test_spec_flag(flag, capsys):
    assert main([flag]) == 0
    assert capsys.readouterr().out.strip() == LANGUAGE_SPEC.strip()


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help_exits_zero(flag, capsys):
    with pytest.raises(SystemExit) as exc:
        main([flag])
    assert exc.value.code == 0
    assert "-v" in capsys.readouterr().out


def test_missing_file_is_an_io_error(tmp_path, capsys):
    missing = str(tmp_path / "nope.minilang")
    assert main([missing]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == f"I/O error: cannot open file: {missing}\n"


def test_semantic_error_exits_nonzero_without_output(tmp_path, capsys):
    assert main([write(tmp_path, "print(y);")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "variable 'y' used before assignment" in captured.err


def test_runtime_error_after_partial_output(tmp_path, capsys):
    assert main([write(tmp_path, "print(4);\na = 10 / 0;")]) == 1
    captured = capsys.readouterr()
    assert captured.out == "4\n"
    assert captured.err == "Runtime error (line 2): division by zero\n"


def test_long_flat_sum(tmp_path, capsys):
    code = "a = 1; x = " + " + ".join(["a"] * 1200) + "; print(x);"
    assert main([write(tmp_path, code)]) == 0
    captured = capsys.readouterr()
    assert captured.out == "1200\n"
    assert captured.err == ""


def test_too_deep_nesting_is_a_one_line_diagnostic(tmp_path, capsys):
    code = "x = " + "(" * 3000 + "1" + ")" * 3000 + "; print(x);"
    assert main([write(tmp_path, code)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Compile error: program nested too deeply\n"


def test_verbose_phase_labels(capsys):
    assert main(["-v"]) == 0
    out = capsys.readouterr().out
    assert out.index("--- PHASE 3: SEMANTIC ANALYSIS ---") \
        < out.index("--- PHASE 5: OPTIMIZATION ---") \
        < out.index("--- PHASE 4 & 6: INTERMEDIATE CODE GENERATION ---") \
        < out.index("--- THREE ADDRESS CODE ---") \
        < out.index("--- PHASE 6: EXECUTION ---")
    assert out.endswith("---------------\nExecution completed!\n")


def test_verbose_error_skips_the_trailer(tmp_path, capsys):
    assert main(["-v", write(tmp_path, "print(1 / 0);")]) == 1
    captured = capsys.readouterr()
    assert "Execution completed!" not in captured.out
    assert captured.err == "Runtime error (line 1): division by zero\n"
