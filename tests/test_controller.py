import pytest

from movcpu.assembler import Assembler
from movcpu.controller import RunController
from movcpu.registers import INP, TMP, PC


@pytest.fixture
def ctrl():
    return RunController(interval_ms=1)


def test_queued_inputs_feed_default_program(ctrl):
    ctrl.queue_input(7, 3)
    steps = ctrl.run_to_halt(100)
    assert steps == 7
    assert ctrl.is_halted
    assert ctrl.output_log == [4]
    assert not ctrl.pending_input


def test_waiting_for_input(ctrl):
    assert ctrl.waiting_for_input
    ctrl.set_input(1)
    ctrl.step()
    ctrl.step()
    assert not ctrl.waiting_for_input


def test_set_input_range(ctrl):
    ctrl.set_input(9999)
    assert ctrl.sim.memory[INP] == 9999
    with pytest.raises(ValueError):
        ctrl.set_input(10000)
    with pytest.raises(ValueError):
        ctrl.queue_input(1, -1)
    assert not ctrl.pending_input


def test_step_back_drops_logged_output(ctrl):
    ctrl.queue_input(2, 5)
    ctrl.run_to_halt(100)
    assert ctrl.output_log == [7]
    assert ctrl.step_back()   # undoes OUT TRN
    assert ctrl.output_log == []
    assert ctrl.step_back()
    assert ctrl.output_log == []


def test_step_back_on_empty_history(ctrl):
    assert ctrl.step_back() is False


def test_tick_pauses_on_halt(ctrl):
    states = []
    ctrl.running_changed.connect(states.append)
    ctrl.queue_input(1, 1)
    ctrl.run()
    assert ctrl.is_running
    for _ in range(10):
        ctrl.tick()
    assert not ctrl.is_running
    assert states == [True, False]
    assert ctrl.output_log == [2]


def test_toggle_run(ctrl):
    ctrl.toggle_run()
    assert ctrl.is_running
    ctrl.toggle_run()
    assert not ctrl.is_running


def test_reset_clears_log_and_stops(ctrl):
    ctrl.queue_input(4, 4)
    ctrl.run_to_halt(100)
    ctrl.run()
    ctrl.reset()
    assert not ctrl.is_running
    assert ctrl.output_log == []
    assert ctrl.sim.memory[PC] == 50
    assert ctrl.sim.history_empty


def test_clear_program_restores_default(ctrl):
    ctrl.sim.load_program(Assembler().out(INP).halt())
    counter = ctrl.sim.program_reload_counter
    ctrl.clear_program()
    assert ctrl.sim.memory[50] == 1202
    assert ctrl.sim.program_reload_counter == counter + 1


def test_run_to_halt_respects_limit(ctrl):
    ctrl.sim.load_program(Assembler().mov(TMP, PC))
    ctrl.sim.update_memory(TMP, 49)
    assert ctrl.run_to_halt(25) == 25
    assert not ctrl.is_halted
