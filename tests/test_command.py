import pytest

from dtm.command import Command
from dtm.direction import Direction

F, S, B = Direction.MOVE_FORWARD, Direction.STAY, Direction.MOVE_BACK


def make(source=0, symbol="a", working=("~",), target=1, move=F, writes=("a",), moves=(F,)):
    return Command(source, symbol, working, target, move, writes, moves)


def test_equality_covers_the_payload():
    assert make() == make()
    assert make() != make(target=2)
    assert make() != make(writes=("b",))
    assert make() != make(moves=(S,))
    assert hash(make()) == hash(make())


def test_sequences_are_stored_as_tuples():
    command = make(working=["~"], writes=["a"], moves=[F])
    assert command.working_symbols == ("~",)
    assert command == make()


def test_command_is_immutable():
    with pytest.raises(AttributeError):
        make().target_state = 3


def test_matches_only_looks_at_the_key():
    command = make(target=7, writes=("z",), moves=(B,))
    assert command.matches(0, "a", ["~"])
    assert not command.matches(1, "a", ("~",))
    assert not command.matches(0, "b", ("~",))
    assert not command.matches(0, "a", ("a",))


def test_ordering_is_lexicographic_by_key():
    commands = [
        make(source=1, symbol="a"),
        make(source=0, symbol="b"),
        make(source=0, symbol="a", working=("b",)),
        make(source=0, symbol="a", working=("a",)),
    ]
    assert [command.key for command in sorted(commands)] == [
        (0, "a", ("a",)),
        (0, "a", ("b",)),
        (0, "b", ("~",)),
        (1, "a", ("~",)),
    ]


def test_ordering_keeps_insertion_order_for_equal_keys():
    first = make(target=5)
    second = make(target=3)
    assert sorted([first, second]) == [first, second]
    assert sorted([second, first]) == [second, first]


def test_str_uses_signed_direction_labels():
    command = Command(0, "a", ("~", "b"), 3, S, ("x", "y"), (B, F))
    assert str(command) == "(0, a, ~, b) -> (3, 0, x, -1, y, +1)"
    assert str(make()) == "(0, a, ~) -> (1, +1, a, +1)"


@pytest.mark.parametrize("label, direction", [("-1", B), ("0", S), ("+1", F), ("1", F), (" +1 ", F)])
def test_direction_from_label(label, direction):
    assert Direction.from_label(label) is direction


def test_direction_from_label_rejects_garbage():
    with pytest.raises(ValueError, match="Unknown head movement"):
        Direction.from_label("R")


def test_direction_offsets():
    assert [d.offset for d in (B, S, F)] == [-1, 0, 1]
    assert str(F) == "+1"
