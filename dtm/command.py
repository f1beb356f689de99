from dataclasses import dataclass

from dtm.direction import Direction


@dataclass(frozen=True)
class Command:
    """
    One transition rule of a deterministic Turing machine.

    The rule applies when the machine is in ``source_state``, reads
    ``input_symbol`` on the input tape and ``working_symbols`` on the output
    and working tapes (output tape first). Executing it moves the input head
    by ``input_move``, writes ``write_symbols`` and moves the working heads
    by ``write_moves``, then switches to ``target_state``.

    Nothing is validated here: the arity of the per-tape sequences and the
    range of the state ids are the caller's business.
    """

    source_state: int
    input_symbol: str
    working_symbols: tuple
    target_state: int
    input_move: Direction
    write_symbols: tuple
    write_moves: tuple

    def __post_init__(self):
        object.__setattr__(self, "working_symbols", tuple(self.working_symbols))
        object.__setattr__(self, "write_symbols", tuple(self.write_symbols))
        object.__setattr__(self, "write_moves", tuple(self.write_moves))

    @property
    def key(self):
        return self.source_state, self.input_symbol, self.working_symbols

    def matches(self, state_id, input_symbol, working_symbols):
        """True if the rule applies to this state id and these tape reads."""
        return (self.source_state == state_id
                and self.input_symbol == input_symbol
                and self.working_symbols == tuple(working_symbols))

    # Ordering only looks at the key; sorted() keeps equal keys in insertion order.
    def __lt__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return self.key < other.key

    def __gt__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return self.key > other.key

    def __str__(self):
        reads = ", ".join([str(self.source_state), self.input_symbol, *self.working_symbols])
        actions = [str(self.target_state), self.input_move.label]
        for symbol, move in zip(self.write_symbols, self.write_moves):
            actions.extend([symbol, move.label])
        return f"({reads}) -> ({', '.join(actions)})"
