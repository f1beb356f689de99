# app.py

import argparse
import re

from rich.console import Console
from rich.text import Text

from config.config_loader import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH, load_config
from logger.logger import JSONLogger
from tools.program_inspect import print_summary, program_table
from tools.program_loader import load_program
from tools.simulate_words import simulate_words

console = Console()
error_console = Console(stderr=True)

WHITESPACE_SPLIT = re.compile(r"\s+")

HELP_TEXT = """This program can simulate a functioning deterministic turing machine.
Following commands are available:

INPUT <path>: Initiates the turing machine from given file.
RUN <word> : Prints content of the output tape after computing the input word.
CHECK <word> : Returns whether the given word is accepted by the machine.
PRINT: Prints out the commands contained in the turing machine.
HELP : Prints out this help message.
QUIT : Terminates this program.
"""


class Session:
    """What the shell keeps between commands: the loaded program and the run logger."""

    def __init__(self, config, logger=None):
        self.config = config
        self.logger = logger
        self.program = None

    def fresh_machine(self):
        return self.program.build_machine()


# === Utilities ===
def load_runtime_config(path=DEFAULT_CONFIG_PATH):
    try:
        return load_config(path, quiet=True)
    except FileNotFoundError:
        console.print(f"[yellow]Warning: {path} not found, using default configuration.[/yellow]")
        return DEFAULT_CONFIG.copy()

def print_plain(text):
    console.print(text, markup=False, highlight=False, soft_wrap=True)

def print_error(message):
    error_console.print(f"Error! {message}", markup=False, highlight=False, soft_wrap=True)

def has_machine(session):
    if session.program is None:
        print_error("This deterministic turing machine has not been instantiated. "
                    "Please use 'INPUT <path>' to do so.")
        return False
    return True

def word_argument(tokens):
    """The word of a check/run command; no word means the empty word."""
    if len(tokens) == 1:
        return ""
    if len(tokens) == 2:
        return tokens[1]
    print_error("The amount of arguments is incorrect.")
    return None

def log_run(session, mode, word, accepted, output, machine):
    if session.logger is None or not session.config.get("log_runs", True):
        return
    session.logger.log({
        "timestamp": session.logger.timestamp(),
        "program": session.program.source,
        "mode": mode,
        "word": word,
        "accepted": accepted,
        "output": output,
        "steps_taken": machine.steps_taken
    })


# === Shell Commands ===
def handle_input(session, tokens):
    if len(tokens) != 2:
        print_error("The amount of arguments is incorrect.")
        session.program = None
        return
    try:
        session.program = load_program(tokens[1])
    except (OSError, ValueError) as e:
        print_error(f"Caught: {e}")
        session.program = None
        return

    if session.config.get("warn_on_conflicts", True):
        conflicts = session.fresh_machine().find_conflicts()
        for first, shadowed in conflicts:
            console.print(Text(f"Warning: {shadowed} is shadowed by {first}", style="yellow"), soft_wrap=True)

def handle_check(session, tokens):
    if not has_machine(session):
        return
    word = word_argument(tokens)
    if word is None:
        # No run took place, so nothing was accepted.
        print_plain("reject")
        return

    # A fresh machine per run, the engine never resets its tapes.
    machine = session.fresh_machine()
    accepted = machine.check(word)
    print_plain("accept" if accepted else "reject")
    log_run(session, "check", word, accepted, machine.output_tape.render(), machine)

def handle_run(session, tokens):
    if not has_machine(session):
        return
    word = word_argument(tokens)
    if word is None:
        return

    machine = session.fresh_machine()
    output = machine.simulate(word)
    print_plain(output)
    log_run(session, "run", word, None, output, machine)

def handle_print(session):
    if not has_machine(session):
        return
    print_plain(session.fresh_machine().render())

def execute(session, line):
    """Execute one shell line. Returns False once the shell should quit."""
    tokens = [token for token in WHITESPACE_SPLIT.split(line.strip()) if token]
    if not tokens:
        print_error("There is no command")
        return True

    command = tokens[0].lower()[0]
    if command == "i":
        handle_input(session, tokens)
    elif command == "h":
        print_plain(HELP_TEXT)
    elif command == "c":
        handle_check(session, tokens)
    elif command == "r":
        handle_run(session, tokens)
    elif command == "p":
        handle_print(session)
    elif command == "q":
        return False
    else:
        print_error("Command unknown.")
        print_plain('Type "help" for further hints.')
    return True


def interactive_main(config, logger=None):
    session = Session(config, logger)

    while True:
        try:
            line = console.input(config["prompt"])
        except EOFError:
            break
        if not execute(session, line):
            break

# === CLI Mode for Automation ===
def cli_main(args, config, logger=None):
    session = Session(config, logger)
    handle_input(session, ["input", args.program])
    if session.program is None:
        return 1

    if args.print:
        handle_print(session)
    if args.inspect:
        print_summary(session.program)
        console.print(program_table(session.program))
    if args.check is not None:
        handle_check(session, ["check", args.check] if args.check else ["check"])
    if args.run is not None:
        handle_run(session, ["run", args.run] if args.run else ["run"])
    if args.words:
        simulate_words(
            args.program,
            args.words,
            batch_size=config["batch_size"],
            results_directory=config["results_directory"],
            logger=logger if config["log_runs"] else None
        )
    return 0

def main(argv=None):
    parser = argparse.ArgumentParser(description="Deterministic Turing Machine Simulator")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Runtime configuration file")
    parser.add_argument("--program", help="Program file to load (.tm text or .json)")
    parser.add_argument("--check", metavar="WORD", help="Print whether WORD is accepted")
    parser.add_argument("--run", metavar="WORD", help="Print the output tape after running WORD")
    parser.add_argument("--print", action="store_true", help="Print the commands of the program")
    parser.add_argument("--inspect", action="store_true", help="Show the program as a table")
    parser.add_argument("--words", help="Run every word of this file and save the results")
    args = parser.parse_args(argv)

    config = load_runtime_config(args.config)
    logger = JSONLogger(config["output_directory"], config["log_file_prefix"])

    if args.program:
        return cli_main(args, config, logger)

    if args.check is not None or args.run is not None or args.print or args.inspect or args.words:
        parser.error("--program is required with --check, --run, --print, --inspect or --words")
    interactive_main(config, logger)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
