import pytest

from dtm.direction import Direction
from dtm.machine import Machine, is_valid_tape_symbol
from dtm.state import StateBehavior
from dtm.tape import BLANK_SYMBOL

F, S, B = Direction.MOVE_FORWARD, Direction.STAY, Direction.MOVE_BACK


def accept_a_machine():
    """Two states, 0 normal start and 1 accepting, only the output tape."""
    machine = Machine(2, 0, 0, set(), {1})
    machine.add_command(0, "a", ["~"], 1, F, ["a"], [F])
    return machine


def copy_machine():
    machine = Machine(2, 0, 0, set(), {1})
    machine.add_command(0, "a", ["~"], 0, F, ["a"], [F])
    machine.add_command(0, "b", ["~"], 0, F, ["b"], [F])
    machine.add_command(0, "~", ["~"], 1, S, ["~"], [S])
    return machine


def test_construction_tags_states_and_allocates_tapes():
    machine = Machine(4, 2, 1, {2, 3}, {3})
    assert [state.behavior for state in machine.states] == [
        StateBehavior.NORMAL,
        StateBehavior.NORMAL,
        StateBehavior.HOLDING,
        StateBehavior.ACCEPTING,
    ]
    assert machine.begin_state is machine.states[1]
    assert len(machine.working_tapes) == 3
    assert machine.output_tape is machine.working_tapes[0]


def test_add_command_registers_on_the_source_state():
    machine = accept_a_machine()
    assert len(machine.states[0].commands) == 1
    assert machine.states[1].commands == []


@pytest.mark.parametrize("word, accepted", [("a", True), ("b", False), ("", False), ("ab", True)])
def test_accept_a(word, accepted):
    assert accept_a_machine().check(word) is accepted


def test_simulate_returns_the_output_tape():
    assert accept_a_machine().simulate("a") == "a"
    assert copy_machine().simulate("abba") == "abba"


def test_holding_start_state_rejects_immediately():
    machine = Machine(1, 0, 0, {0}, set())
    assert machine.check("abc") is False
    assert machine.steps_taken == 0
    assert machine.input_tape.contents() == ["a", "b", "c"]
    assert machine.input_tape.head == 0
    assert machine.output_tape.contents() == [BLANK_SYMBOL]


def test_accepting_state_halts_even_with_outgoing_commands():
    machine = Machine(2, 0, 0, set(), {0})
    machine.add_command(0, "a", ["~"], 1, F, ["x"], [F])
    assert machine.check("a") is True
    assert machine.steps_taken == 0
    assert machine.simulate("a") == ""


def test_no_matching_command_rejects_in_a_normal_state():
    machine = Machine(2, 0, 0, set(), {1})
    machine.add_command(0, "a", ["x"], 1, F, ["a"], [F])
    assert machine.check("a") is False


def test_reaching_a_holding_state_rejects():
    machine = Machine(2, 0, 0, {1}, set())
    machine.add_command(0, "a", ["~"], 1, F, ["r"], [S])
    assert machine.check("a") is False
    assert machine.output_tape.render() == "r"


def test_first_registered_command_wins_on_conflicts():
    machine = Machine(3, 0, 0, {2}, {1})
    first = machine.add_command(0, "a", ["~"], 1, S, ["~"], [S])
    shadowed = machine.add_command(0, "a", ["~"], 2, S, ["~"], [S])
    assert machine.check("a") is True
    assert machine.find_conflicts() == [(first, shadowed)]


def test_find_conflicts_is_empty_for_a_deterministic_table():
    assert copy_machine().find_conflicts() == []


def test_repeated_runs_on_fresh_machines_agree():
    results = {accept_a_machine().check("a") for _ in range(5)}
    assert results == {True}


def test_tapes_are_not_reset_between_runs():
    machine = accept_a_machine()
    assert machine.check("a") is True
    # Output head now sits after the "a", input head after the word.
    assert machine.check("") is False
    assert machine.output_tape.render() == "a"


def test_reset_tapes_allows_reuse():
    machine = accept_a_machine()
    machine.check("a")
    machine.reset_tapes()
    assert machine.output_tape.render() == ""
    assert machine.simulate("a") == "a"


def test_loading_a_word_resets_the_input_head():
    machine = copy_machine()
    machine.check("ab")
    machine.reset_tapes()
    machine.input_tape.move(F)
    assert machine.simulate("ba") == "ba"


def test_working_tape_grows_to_the_left():
    # Writes the word backwards by walking the output head left.
    machine = Machine(2, 0, 0, set(), {1})
    machine.add_command(0, "a", ["~"], 0, F, ["a"], [B])
    machine.add_command(0, "b", ["~"], 0, F, ["b"], [B])
    machine.add_command(0, "~", ["~"], 1, S, ["~"], [S])
    assert machine.simulate("aab") == "baa"
    assert machine.steps_taken == 4


def test_configuration_reads_every_head():
    machine = Machine(1, 2, 0)
    machine.input_tape.set_content("q")
    assert machine.configuration() == ("q", ("~", "~", "~"))


def test_multi_tape_commands_write_and_move_every_tape():
    machine = Machine(2, 1, 0, set(), {1})
    machine.add_command(0, "a", ["~", "~"], 0, F, ["x", "y"], [F, S])
    machine.add_command(0, "~", ["~", "y"], 1, S, ["!", "z"], [S, S])
    assert machine.check("a") is True
    assert machine.output_tape.render() == "x!"
    assert machine.working_tapes[1].render() == "z"
    assert machine.steps_taken == 2


def test_arity_mismatch_fails_loudly():
    machine = Machine(2, 1, 0, set(), {1})
    machine.add_command(0, "a", ["~", "~"], 1, F, ["x"], [F])
    with pytest.raises(IndexError):
        machine.check("a")


def test_out_of_range_source_state_fails_loudly():
    with pytest.raises(IndexError):
        accept_a_machine().add_command(5, "a", ["~"], 1, F, ["a"], [F])


def test_render_concatenates_states_in_id_order():
    machine = Machine(3, 0, 0, set(), {2})
    machine.add_command(1, "b", ["~"], 2, S, ["b"], [S])
    machine.add_command(0, "a", ["~"], 1, F, ["a"], [F])
    machine.add_command(0, "!", ["~"], 1, F, ["!"], [F])
    assert str(machine) == (
        "(0, !, ~) -> (1, +1, !, +1)\n"
        "(0, a, ~) -> (1, +1, a, +1)\n"
        "(1, b, ~) -> (2, 0, b, 0)\n"
    )


@pytest.mark.parametrize("symbol, valid", [
    ("!", True),
    ("a", True),
    ("|", True),
    ("}", True),
    ("~", True),
    (" ", False),
    ("\x7f", False),
    ("é", False),
    ("ab", False),
    ("", False),
])
def test_is_valid_tape_symbol(symbol, valid):
    assert is_valid_tape_symbol(symbol) is valid
