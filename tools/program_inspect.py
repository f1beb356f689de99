import argparse

from rich.console import Console
from rich.table import Table
from rich.text import Text

from tools.program_loader import load_program

console = Console()

LATEX_SPECIAL = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "#": r"\#",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "_": r"\_",
    "^": r"\^{}",
    "~": r"\sqcup",
}


def command_rows(definition):
    """Rows (state, behavior, reads, target, actions) in command order."""
    machine = definition.build_machine()
    rows = []
    for state in machine.states:
        for command in sorted(state.commands):
            reads = [command.input_symbol, *command.working_symbols]
            actions = [command.input_move.label]
            for symbol, move in zip(command.write_symbols, command.write_moves):
                actions.append(f"{symbol}{move.label}")
            rows.append((state.state_id, state.behavior.value, reads, command.target_state, actions))
    return rows


def program_table(definition):
    table = Table(title=f"Program {definition.source}", show_header=True, header_style="bold magenta")
    table.add_column("State", justify="center")
    table.add_column("Behavior", justify="center")
    table.add_column("Reads", justify="left")
    table.add_column("Target", justify="center")
    table.add_column("Moves / Writes", justify="left")

    color = {"normal": "white", "holding": "red", "accepting": "green"}
    for state_id, behavior, reads, target, actions in command_rows(definition):
        table.add_row(
            str(state_id),
            f"[{color[behavior]}]{behavior}[/{color[behavior]}]",
            Text(" ".join(reads)),
            str(target),
            Text(" ".join(actions)),
        )
    return table


def latex_symbol(symbol):
    if symbol in LATEX_SPECIAL:
        return LATEX_SPECIAL[symbol]
    return rf"\text{{{symbol}}}"


def latex_table(definition):
    lines = [r"\begin{array}{c|c|c|c}",
             r"\text{State} & \text{Reads} & \text{Target} & \text{Moves/Writes} \\ \hline"]
    for state_id, _, reads, target, actions in command_rows(definition):
        read_cells = ", ".join(latex_symbol(symbol) for symbol in reads)
        action_cells = [actions[0]]
        for action in actions[1:]:
            action_cells.append(f"{latex_symbol(action[0])}{action[1:]}")
        lines.append(f"q_{{{state_id}}} & {read_cells} & q_{{{target}}} & {', '.join(action_cells)} \\\\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def print_summary(definition):
    console.print(f"[INFO] Program {definition.source}", markup=False, highlight=False)
    console.print(f"  States: {definition.num_states}")
    console.print(f"  Working tapes: {definition.num_tapes} (+ output tape)")
    console.print(f"  Start state: {definition.start_state}")
    console.print(f"  Holding states: {sorted(definition.holding_states)}")
    console.print(f"  Accepting states: {sorted(definition.accepting_states)}")
    console.print(f"  Commands: {len(definition.commands)}")


def main():
    parser = argparse.ArgumentParser(description="Deterministic Turing Machine Program Inspector")
    parser.add_argument("--program", required=True, help="Program file (.tm text or .json)")
    parser.add_argument("--latex", action="store_true", help="Also print a LaTeX array of the commands")
    args = parser.parse_args()

    definition = load_program(args.program)
    print_summary(definition)
    console.print(program_table(definition))
    if args.latex:
        console.print("\n=== LaTeX Table ===")
        console.print(latex_table(definition), markup=False, highlight=False)

if __name__ == "__main__":
    main()
