"""Synchronous runner behaviour on known programs."""

import logging

import pytest

from intcode import run, Machine
from intcode.config import IntcodeConfig, reset_config
from intcode.errors import IntcodeError, StepLimitExceededError, UnknownOpcodeError

QUINE = "109,1,204,-1,1001,100,1,100,1008,100,16,101,1006,101,0,99"

# Compares the input with 8: 999 below, 1000 equal, 1001 above
COMPARE_8 = (
    "3,21,1008,21,8,20,1005,20,22,107,8,21,20,1006,20,31,"
    "1106,0,36,98,0,0,1002,21,125,20,4,20,1105,1,46,104,"
    "999,1105,1,46,1101,1000,1,20,4,20,1105,1,46,98,99"
)


class TestRun:

    def test_echo_input(self):
        assert run("3,0,4,0,99", [55]) == [55]

    def test_no_output(self):
        assert run("1002,4,3,4,33") == []

    def test_quine(self):
        assert run(QUINE) == [int(v) for v in QUINE.split(",")]

    def test_large_literal(self):
        assert run("104,1125899906842624,99") == [1125899906842624]

    def test_large_multiplication(self):
        assert run("1102,34915192,34915192,7,4,7,99,0") == [1219070632396864]

    @pytest.mark.parametrize("given,expected", [(7, 999), (8, 1000), (9, 1001)])
    def test_compare_program(self, given, expected):
        assert run(COMPARE_8, [given]) == [expected]

    def test_accepts_cell_list(self):
        assert run([104, 3, 99]) == [3]

    def test_input_exhaustion_returns_partial_output(self):
        # outputs 1, then asks for input that never comes
        assert run("104,1,3,0,104,2,99") == [1]

    def test_extra_inputs_ignored(self):
        assert run("3,0,4,0,99", [1, 2, 3]) == [1]

    def test_deterministic(self):
        program = "3,9,8,9,10,9,4,9,99,-1,8"
        first, second = Machine(program, [8]), Machine(program, [8])
        first.run_until_blocked()
        second.run_until_blocked()
        assert first.outputs == second.outputs
        assert first.memory.snapshot() == second.memory.snapshot()
        assert run(program, [8]) == run(program, [8])


class TestRunFailures:

    def test_unknown_opcode_surfaces(self):
        with pytest.raises(UnknownOpcodeError):
            run("104,1,77")

    def test_errors_share_base_class(self):
        with pytest.raises(IntcodeError):
            run("1,0")

    def test_explicit_step_budget(self):
        with pytest.raises(StepLimitExceededError):
            run("1105,1,0", max_steps=100)

    def test_configured_step_budget(self):
        reset_config(IntcodeConfig(max_steps=5))
        with pytest.raises(StepLimitExceededError) as info:
            run("1105,1,0")
        assert info.value.max_steps == 5

    def test_budget_allows_final_halt(self):
        assert run("104,1,99", max_steps=1) == [1]
        with pytest.raises(StepLimitExceededError):
            run("104,1,104,2,99", max_steps=1)


def test_trace_logging(caplog):
    reset_config(IntcodeConfig(trace=True))
    with caplog.at_level(logging.DEBUG, logger="intcode.machine"):
        run("104,1,99")
    assert any("ip=0" in record.getMessage() for record in caplog.records)
