"""Amplifier chains and feedback loops.

The threaded and cooperative variants must agree with each other and with
the sequential runner on every program below.
"""

import pytest

from intcode.pipeline import (
    find_max_signal,
    run_chain,
    run_feedback_loop,
    run_feedback_round_robin,
    run_in_sequence,
    stage_name,
)
from intcode.errors import DeadlockError, PipelineError, UnknownOpcodeError

CHAIN_CASES = [
    ("3,15,3,16,1002,16,10,16,1,16,15,15,4,15,99,0,0", [4, 3, 2, 1, 0], 43210),
    ("3,23,3,24,1002,24,10,24,1002,23,-1,23,101,5,23,23,1,24,23,23,4,23,99,0,0",
     [0, 1, 2, 3, 4], 54321),
    ("3,31,3,32,1002,32,10,32,1001,31,-2,31,1007,31,0,33,1002,33,7,33,1,33,31,31,"
     "1,32,31,31,4,31,99,0,0,0", [1, 0, 4, 3, 2], 65210),
]

FEEDBACK_CASES = [
    ("3,26,1001,26,-4,26,3,27,1002,27,2,27,1,27,26,27,4,27,1001,28,-1,28,1005,28,6,"
     "99,0,0,5", [9, 8, 7, 6, 5], 139629729),
    ("3,52,1001,52,-5,52,3,53,1,52,56,54,1007,54,5,55,1005,55,26,1001,54,-5,54,1105,1,"
     "12,1,53,54,53,1008,54,0,55,1001,55,1,55,2,53,55,53,4,53,1001,56,-1,56,1005,56,6,"
     "99,0,0,0,0,10", [9, 7, 8, 5, 6], 18216),
]


def test_stage_names():
    assert [stage_name(i) for i in range(3)] == ["A", "B", "C"]
    assert stage_name(30) == "amp30"


class TestChain:

    @pytest.mark.parametrize("program,phases,expected", CHAIN_CASES)
    def test_sequential(self, program, phases, expected):
        assert run_in_sequence(program, phases) == expected

    @pytest.mark.parametrize("program,phases,expected", CHAIN_CASES)
    def test_threaded(self, program, phases, expected):
        assert run_chain(program, phases, signal=0) == expected

    def test_single_stage(self):
        assert run_chain("3,0,3,1,1,0,1,0,4,0,99", [5], signal=6) == 11

    def test_no_phases(self):
        with pytest.raises(ValueError):
            run_chain("99", [])

    def test_silent_program(self):
        assert run_in_sequence("3,0,3,0,99", [1, 2]) is None
        assert run_chain("3,0,3,0,99", [1, 2]) is None

    def test_failure_reported(self):
        with pytest.raises(PipelineError) as info:
            run_chain("3,0,3,0,42", [1, 2, 3])
        assert info.value.amplifier == "A"
        assert isinstance(info.value.__cause__, UnknownOpcodeError)


class TestFeedbackLoop:

    @pytest.mark.parametrize("program,phases,expected", FEEDBACK_CASES)
    def test_threaded(self, program, phases, expected):
        assert run_feedback_loop(program, phases) == expected

    @pytest.mark.parametrize("program,phases,expected", FEEDBACK_CASES)
    def test_round_robin(self, program, phases, expected):
        assert run_feedback_round_robin(program, phases) == expected

    def test_tail_closes_first(self):
        # every stage passes its input on once and halts
        program = "3,0,3,0,4,0,99"
        assert run_feedback_loop(program, [1, 2, 3], signal=9) == 9
        assert run_feedback_round_robin(program, [1, 2, 3], signal=9) == 9

    def test_halted_upstream_ends_stream(self):
        # the head halts while the later stages still wait for input
        program = "3,0,3,0,4,0,3,0,99"
        assert run_feedback_loop(program, [1, 2, 3], signal=9) == 9
        assert run_feedback_round_robin(program, [1, 2, 3], signal=9) == 9

    def test_failure_reported(self):
        with pytest.raises(PipelineError) as info:
            run_feedback_loop("3,0,3,0,4,0,42", [1, 2])
        assert isinstance(info.value.error, UnknownOpcodeError)

    def test_round_robin_deadlock(self):
        # each stage wants three inputs but only forwards one value
        with pytest.raises(DeadlockError):
            run_feedback_round_robin("3,0,3,0,3,0,99", [1, 2])


class TestFindMaxSignal:

    def test_chain(self):
        program, phases, expected = CHAIN_CASES[0]
        best, best_phases = find_max_signal(program, range(5))
        assert best == expected
        assert list(best_phases) == phases

    def test_feedback(self):
        program, phases, expected = FEEDBACK_CASES[0]
        best, best_phases = find_max_signal(program, range(5, 10), feedback=True)
        assert best == expected
        assert list(best_phases) == phases
