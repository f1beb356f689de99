# tools/simulate_words.py

import argparse
import json
import os
from pathlib import Path
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from tools.program_loader import load_program

# === Utility Loaders ===
def load_word_pool(words_file):
    with open(words_file, "r", encoding="utf-8") as f:
        words = [line.strip() for line in f if line.strip()]
    return words

def load_checkpoint(checkpoint_path):
    if checkpoint_path.exists():
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            checkpoint = json.load(f)
        return checkpoint.get("completed", [])
    return []

def save_checkpoint(completed, checkpoint_path):
    with open(checkpoint_path, "w", encoding="utf-8") as f:
        json.dump({"completed": completed}, f, indent=4)

def console_message(msg):
    print(f"[{Path(os.getcwd()).name}] {msg}")

def run_word(definition, word):
    """Run one word on a fresh machine so earlier words leave no trace on the tapes."""
    machine = definition.build_machine()
    accepted = machine.check(word)
    return {
        "word": word,
        "accepted": accepted,
        "output": machine.output_tape.render(),
        "steps_taken": machine.steps_taken
    }

# === Main Simulation Runner ===
def simulate_words(program_path, words_file, output_name="results", batch_size=256, results_directory="results/", logger=None):
    definition = load_program(program_path)

    results_folder = Path(results_directory) / Path(program_path).stem
    results_folder.mkdir(parents=True, exist_ok=True)
    results_file = results_folder / f"{output_name}.jsonl"
    checkpoint_file = results_folder / f"{output_name}_checkpoint.json"

    all_words = load_word_pool(words_file)
    completed = load_checkpoint(checkpoint_file)
    done = set(completed)

    pending = [(index, word) for index, word in enumerate(all_words) if index not in done]
    console_message(f"Loaded {len(all_words):,} total words. {len(pending):,} pending.")

    new_results = []

    with open(results_file, "a", encoding="utf-8") as results_fh:
        for batch_start in range(0, len(pending), batch_size):
            batch = pending[batch_start:batch_start + batch_size]
            console_message(f"Processing batch {batch_start // batch_size + 1} with {len(batch):,} words...")

            with Progress(
                    SpinnerColumn(),
                    BarColumn(),
                    "[progress.percentage]{task.percentage:>3.0f}%",
                    TextColumn("{task.completed}/{task.total} Words"),
                    TimeElapsedColumn()
            ) as progress:

                task = progress.add_task("[cyan]Simulating...", total=len(batch))

                batch_results = []

                for index, word in batch:
                    entry = {"index": index, **run_word(definition, word)}
                    batch_results.append(entry)
                    completed.append(index)
                    progress.update(task, advance=1)

            # === BULK WRITE once per batch ===
            for entry in batch_results:
                results_fh.write(json.dumps(entry) + "\n")
            results_fh.flush()

            if logger is not None:
                logger.log_batch(batch_results)
                logger.log_accepted([entry for entry in batch_results if entry["accepted"]])
                logger.log_rejected([entry for entry in batch_results if not entry["accepted"]])

            save_checkpoint(completed, checkpoint_file)
            new_results.extend(batch_results)
            console_message("[INFO] Batch completed. Checkpoint saved.")

    accepted = sum(1 for entry in new_results if entry["accepted"])
    console_message(f"[SUCCESS] {len(new_results):,} words simulated, {accepted:,} accepted. Results saved to {results_file}")
    return new_results


# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Run a pool of words through one Turing machine program with checkpointing.")
    parser.add_argument("--program", required=True, help="Program file (.tm text or .json)")
    parser.add_argument("--words", required=True, help="Path to word pool file (one word per line)")
    parser.add_argument("--output", default="results", help="Output result file name (default: results)")
    parser.add_argument("--batch_size", type=int, default=256, help="Batch size per save/checkpoint")
    parser.add_argument("--results_dir", default="results/", help="Directory for result folders")
    args = parser.parse_args()

    simulate_words(
        args.program,
        args.words,
        args.output,
        batch_size=args.batch_size,
        results_directory=args.results_dir
    )

if __name__ == "__main__":
    main()
