from enum import Enum


class StateBehavior(Enum):
    NORMAL = "normal"
    # Terminal, the word is rejected.
    HOLDING = "holding"
    # Terminal, the word is accepted.
    ACCEPTING = "accepting"

    @property
    def is_terminal(self):
        return self is not StateBehavior.NORMAL


class MachineState:
    def __init__(self, state_id, behavior=StateBehavior.NORMAL):
        self.state_id = state_id
        self._behavior = behavior
        self.commands = []

    @property
    def behavior(self):
        return self._behavior

    @behavior.setter
    def behavior(self, behavior):
        self._behavior = behavior

    def add_command(self, command):
        """Append a command; duplicates and conflicting keys are kept as given."""
        self.commands.append(command)

    def find_command(self, input_symbol, working_symbols):
        """Return the first command, in insertion order, matching the tape reads."""
        working_symbols = tuple(working_symbols)
        for command in self.commands:
            if command.matches(self.state_id, input_symbol, working_symbols):
                return command
        return None

    def render(self):
        return "".join(f"{command}\n" for command in sorted(self.commands))

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"MachineState({self.state_id}, {self.behavior.name}, commands={len(self.commands)})"
