import pytest

from minilang.compiler import PHASES, Block, CollectTrace, IntLiteral, compile_source, tokenize
from minilang.samples import DEFAULT_PROGRAM, SAMPLES


def test_default_program_prints_tenth_fibonacci_number():
    result = compile_source(DEFAULT_PROGRAM)
    assert result['errors'] == []
    assert result['output'] == ["55"]


@pytest.mark.parametrize("name, expected", [
    ("factorial", ["1", "2", "6", "24", "120", "720", "5040", "40320", "362880", "3628800"]),
    ("primes", ["2", "3", "5", "7", "11", "13", "17", "19", "23",
                "29", "31", "37", "41", "43", "47"]),
    ("arithmetic", [str(3 + 4 * k) for k in range(10)]),
    ("geometric", [str(2 * 3 ** k) for k in range(10)]),
    ("triangular", [str(n * (n + 1) // 2) for n in range(1, 11)]),
])
def test_samples(name, expected):
    result = compile_source(SAMPLES[name])
    assert result['errors'] == []
    assert result['output'] == expected


def test_result_carries_every_artifact():
    result = compile_source("a = 1; b = 2; print(a + b * 3);")
    assert [tok.type for tok in result['tokens']][-1] == "EOF"
    assert isinstance(result['ast'], Block)
    assert result['tac'] == ["a = 1", "b = 2", "t1 = b * 3", "t2 = a + t1", "print t2"]
    assert result['output'] == ["7"]
    assert result['environment'] == {"a": 1, "b": 2}


def test_condition_is_folded_before_execution():
    result = compile_source("if (1 == 1) { y = 10; } else { y = 20; } print(y);")
    # y is only defined inside the branches
    assert result['errors'] == ["Semantic error (line 1): variable 'y' used before assignment"]

    result = compile_source("if (1 == 1) { y = 10; print(y); } else { y = 20; print(y); }")
    assert result['errors'] == []
    assert result['output'] == ["10"]
    assert result['ast'].statements[0].cond == IntLiteral(1)
    assert result['tac'][0] == "ifz 1 goto L0a"


def test_semantic_error_produces_no_output():
    result = compile_source("print(y);")
    assert result['errors'] == ["Semantic error (line 1): variable 'y' used before assignment"]
    assert result['output'] == []
    assert result['tac'] == []


def test_division_by_zero_survives_folding_and_fails_at_runtime():
    result = compile_source("a = 10 / 0;")
    assert result['tac'] == ["t1 = 10 / 0", "a = t1"]
    assert result['errors'] == ["Runtime error (line 1): division by zero"]


def test_output_before_runtime_error_is_kept():
    result = compile_source("print(1); a = 0; print(5 % a);")
    assert result['output'] == ["1"]
    assert result['environment'] == {"a": 0}
    assert result['errors'] == ["Runtime error (line 1): modulo by zero"]


def test_lex_error_stops_everything():
    result = compile_source("a = 1;\nb = a $ 2;")
    assert result['errors'] == ["Lexical error (line 2): unexpected character '$'"]
    assert result['tokens'] == []
    assert result['ast'] is None


def test_parse_error_is_reported():
    result = compile_source("print(1)")
    assert result['errors'] == ["Syntax error (line 1): expected SEMI but got EOF ('')"]
    assert result['ast'] is None


def test_trace_covers_every_phase():
    trace = CollectTrace()
    compile_source("a = 1 + 2; print(a);", trace=trace)
    phases = {phase for phase, _ in trace.events}
    assert phases == {"LEXER", "PARSER", "SEMANTIC", "OPTIMIZATION", "TAC"}


def test_tokens_come_from_the_parsing_pass():
    code = "a = 1;\nprint(a);"
    trace = CollectTrace()
    result = compile_source(code, trace=trace)
    assert result['tokens'] == tokenize(code)
    identifiers = [msg for _, msg in trace.events if msg == "Identifier: a"]
    assert len(identifiers) == 2


def test_phase_hook_sees_every_phase_in_order():
    seen = []
    compile_source("print(1);", on_phase=lambda title, result: seen.append(title))
    assert seen == list(PHASES)


def test_phase_hook_stops_at_the_failing_phase():
    seen = []
    result = compile_source("print(y);", on_phase=lambda title, result: seen.append(title))
    assert seen == list(PHASES[:3])
    assert result['errors']


def test_long_flat_sum_runs_every_phase():
    code = "a = 1; x = " + " + ".join(["a"] * 1200) + "; print(x);"
    result = compile_source(code)
    assert result['errors'] == []
    assert result['output'] == ["1200"]
    assert result['tac'][-2:] == ["x = t1199", "print x"]


def test_too_deep_nesting_is_reported():
    code = "print(" + "-" * 30000 + "1);"
    result = compile_source(code)
    assert result['errors'] == ["Compile error: program nested too deeply"]
    assert result['output'] == []
