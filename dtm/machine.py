from dtm.command import Command
from dtm.state import MachineState, StateBehavior
from dtm.tape import BLANK_SYMBOL, Tape, WritableTape

# Printable symbols a program may use, plus the blank.
FIRST_SYMBOL = "!"
LAST_SYMBOL = "}"


def is_valid_tape_symbol(symbol):
    if not isinstance(symbol, str) or len(symbol) != 1:
        return False
    if symbol > LAST_SYMBOL:
        return symbol == BLANK_SYMBOL
    return symbol >= FIRST_SYMBOL


class Machine:
    """
    Deterministic Turing machine with one read-only input tape and
    ``num_tapes + 1`` writable tapes, the first of which is the output tape.

    The machine does not reset its tapes between runs. Build a new instance
    (or call ``reset_tapes``) to get independent results.
    """

    def __init__(self, num_states, num_tapes, start_state, holding_states=(), accepting_states=()):
        self.num_tapes = num_tapes

        self.states = []
        for state_id in range(num_states):
            state = MachineState(state_id)
            if state_id in holding_states:
                state.behavior = StateBehavior.HOLDING
            # Accepting wins when an id is in both sets.
            if state_id in accepting_states:
                state.behavior = StateBehavior.ACCEPTING
            self.states.append(state)

        self.begin_state = self.states[start_state]
        self.input_tape = Tape()
        self.working_tapes = [WritableTape() for _ in range(num_tapes + 1)]
        self.steps_taken = 0

    @property
    def output_tape(self):
        return self.working_tapes[0]

    def add_command(self, source_state, input_symbol, working_symbols, target_state,
                    input_move, write_symbols, write_moves):
        command = Command(source_state, input_symbol, working_symbols, target_state,
                          input_move, write_symbols, write_moves)
        self.states[source_state].add_command(command)
        return command

    def configuration(self):
        """Symbols under the input head and under every working head."""
        return self.input_tape.read(), tuple(tape.read() for tape in self.working_tapes)

    def check(self, word):
        """Run the machine on ``word``; True if it halts in an accepting state."""
        self.steps_taken = 0
        self._load_input(word)
        current = self.begin_state

        while not current.behavior.is_terminal:
            input_symbol, working_symbols = self.configuration()
            command = current.find_command(input_symbol, working_symbols)
            if command is None:
                return False
            current = self._execute(command)
            self.steps_taken += 1

        return current.behavior is StateBehavior.ACCEPTING

    def simulate(self, word):
        """Run the machine on ``word`` and return the trimmed output tape."""
        self.check(word)
        return self.output_tape.render()

    def reset_tapes(self):
        self.input_tape.reset()
        for tape in self.working_tapes:
            tape.reset()

    def find_conflicts(self):
        """Pairs (first, shadowed) of commands registered for the same key."""
        conflicts = []
        for state in self.states:
            seen = {}
            for command in state.commands:
                if command.key in seen:
                    conflicts.append((seen[command.key], command))
                else:
                    seen[command.key] = command
        return conflicts

    def render(self):
        return "".join(state.render() for state in self.states)

    def __str__(self):
        return self.render()

    def _load_input(self, word):
        # The empty word leaves the input tape as it is.
        if word:
            self.input_tape.reset()
            self.input_tape.set_content(word)

    def _execute(self, command):
        self.input_tape.move(command.input_move)
        for index, tape in enumerate(self.working_tapes):
            tape.write(command.write_symbols[index])
            tape.move(command.write_moves[index])
        return self.states[command.target_state]
