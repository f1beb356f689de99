# tools/program_loader.py

import json
import re
from dataclasses import dataclass, field
from pathlib import Path

from dtm.direction import Direction
from dtm.machine import Machine, is_valid_tape_symbol

HEADER_KEYS = ("states", "tapes", "start", "holding", "accepting")

COMMAND_LINE = re.compile(r"^\((?P<reads>.*)\)\s*->\s*\((?P<actions>.*)\)$")
# One field: a signed integer or a single non-blank character, then a comma or the end.
FIELD = re.compile(r"\s*([+-]?\d+|\S)\s*(?:,|$)")
ID_SEPARATOR = re.compile(r"[\s,]+")


@dataclass
class ProgramDefinition:
    """Parsed program: everything needed to build identical fresh machines."""

    num_states: int
    num_tapes: int
    start_state: int
    holding_states: frozenset = frozenset()
    accepting_states: frozenset = frozenset()
    commands: list = field(default_factory=list)
    source: str = "<memory>"

    def build_machine(self):
        machine = Machine(self.num_states, self.num_tapes, self.start_state,
                          self.holding_states, self.accepting_states)
        for command in self.commands:
            machine.add_command(*command)
        return machine


# === Parsing helpers ===
def split_fields(text, where):
    fields = []
    pos = 0
    text = text.strip()
    while pos < len(text):
        match = FIELD.match(text, pos)
        if match is None or match.end() == pos:
            raise ValueError(f"{where}: cannot parse {text[pos:]!r}")
        fields.append(match.group(1))
        pos = match.end()
    return fields


def parse_int(value, name, where):
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"{where}: {name} must be an integer, got {value!r}") from None
    if number < 0:
        raise ValueError(f"{where}: {name} must not be negative, got {number}")
    return number


def parse_symbol(value, where):
    if not is_valid_tape_symbol(value):
        raise ValueError(f"{where}: invalid tape symbol {value!r}")
    return value


def parse_id_list(value, name, where):
    value = value.strip()
    if not value:
        return frozenset()
    return frozenset(parse_int(part, name, where) for part in ID_SEPARATOR.split(value) if part)


def parse_command(text, num_tapes, where="command"):
    """
    Parse ``(source, input, w0, ...) -> (target, moveIn, w0', m0, ...)`` into
    the argument tuple of ``Machine.add_command``.
    """
    match = COMMAND_LINE.match(text.strip())
    if match is None:
        raise ValueError(f"{where}: expected '(state, symbols...) -> (state, move, symbol, move...)', got {text!r}")

    arity = num_tapes + 1
    reads = split_fields(match.group("reads"), where)
    actions = split_fields(match.group("actions"), where)
    if len(reads) != arity + 2:
        raise ValueError(f"{where}: expected {arity + 2} fields before '->', got {len(reads)}")
    if len(actions) != 2 * arity + 2:
        raise ValueError(f"{where}: expected {2 * arity + 2} fields after '->', got {len(actions)}")

    source_state = parse_int(reads[0], "source state", where)
    input_symbol = parse_symbol(reads[1], where)
    working_symbols = tuple(parse_symbol(symbol, where) for symbol in reads[2:])

    target_state = parse_int(actions[0], "target state", where)
    try:
        input_move = Direction.from_label(actions[1])
        write_moves = tuple(Direction.from_label(move) for move in actions[3::2])
    except ValueError as e:
        raise ValueError(f"{where}: {e}") from None
    write_symbols = tuple(parse_symbol(symbol, where) for symbol in actions[2::2])

    return source_state, input_symbol, working_symbols, target_state, input_move, write_symbols, write_moves


def check_definition(definition):
    """Range checks the engine itself leaves to its callers."""
    name = definition.source
    if definition.num_states < 1:
        raise ValueError(f"{name}: a program needs at least one state")

    def check_id(state_id, what):
        if state_id >= definition.num_states:
            raise ValueError(f"{name}: {what} {state_id} out of range (states: {definition.num_states})")

    check_id(definition.start_state, "start state")
    for state_id in definition.holding_states:
        check_id(state_id, "holding state")
    for state_id in definition.accepting_states:
        check_id(state_id, "accepting state")
    for command in definition.commands:
        check_id(command[0], "source state")
        check_id(command[3], "target state")


# === Text format ===
def parse_program_text(text, source="<memory>"):
    header = {}
    commands = []

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        where = f"{source}:{line_number}"

        if line.startswith("("):
            missing = [key for key in HEADER_KEYS if key not in header]
            if missing:
                raise ValueError(f"{where}: command before header keys {', '.join(missing)}")
            commands.append(parse_command(line, header["tapes"], where))
            continue

        key, sep, value = line.partition(":")
        key = key.strip().lower()
        if not sep or key not in HEADER_KEYS:
            raise ValueError(f"{where}: unknown line {line!r}")
        if key in header:
            raise ValueError(f"{where}: duplicate header key {key!r}")
        if commands:
            raise ValueError(f"{where}: header key {key!r} after the first command")

        if key in ("holding", "accepting"):
            header[key] = parse_id_list(value, f"{key} state", where)
        else:
            header[key] = parse_int(value.strip(), key, where)

    missing = [key for key in HEADER_KEYS if key not in header]
    if missing:
        raise ValueError(f"{source}: missing header keys {', '.join(missing)}")

    definition = ProgramDefinition(header["states"], header["tapes"], header["start"],
                                   header["holding"], header["accepting"], commands, source)
    check_definition(definition)
    return definition


# === JSON format ===
def parse_program_json(data, source="<memory>"):
    if not isinstance(data, dict):
        raise ValueError(f"{source}: expected a JSON object")
    missing = [key for key in HEADER_KEYS + ("commands",) if key not in data]
    if missing:
        raise ValueError(f"{source}: missing keys {', '.join(missing)}")

    def as_int(value, name):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{source}: {name} must be an integer, got {value!r}")
        return parse_int(value, name, source)

    def as_ids(values, name):
        if not isinstance(values, list):
            raise ValueError(f"{source}: {name} must be a list of state ids")
        return frozenset(as_int(value, name) for value in values)

    num_tapes = as_int(data["tapes"], "tapes")
    if not isinstance(data["commands"], list):
        raise ValueError(f"{source}: commands must be a list of command strings")
    commands = []
    for index, line in enumerate(data["commands"]):
        if not isinstance(line, str):
            raise ValueError(f"{source}: commands[{index}] must be a string")
        commands.append(parse_command(line, num_tapes, f"{source}: commands[{index}]"))
    definition = ProgramDefinition(as_int(data["states"], "states"), num_tapes, as_int(data["start"], "start"),
                                   as_ids(data["holding"], "holding"), as_ids(data["accepting"], "accepting"),
                                   commands, source)
    check_definition(definition)
    return definition


# === Entry points ===
def load_program(path):
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Program file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return parse_program_json(json.load(f), str(path))
        return parse_program_text(f.read(), str(path))


def load_machine(path):
    return load_program(path).build_machine()


def format_program(definition):
    """Text form of a definition, loadable by ``parse_program_text``."""
    def ids(values):
        return ", ".join(str(value) for value in sorted(values))

    lines = [
        f"states: {definition.num_states}",
        f"tapes: {definition.num_tapes}",
        f"start: {definition.start_state}",
        f"holding: {ids(definition.holding_states)}".rstrip(),
        f"accepting: {ids(definition.accepting_states)}".rstrip(),
    ]
    return "\n".join(lines) + "\n" + definition.build_machine().render()
