import json
import os
from datetime import datetime, timezone

class JSONLogger:
    """Appends run records as JSON lines, one file per UTC day."""

    def __init__(self, output_directory="logs/", log_file_prefix="dtm_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = os.path.join(self.output_directory, f"{self.log_file_prefix}{self.today}.jsonl")

    def _append(self, path, entries):
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    @staticmethod
    def timestamp():
        return datetime.now(timezone.utc).isoformat()

    def log(self, entry: dict):
        """One shell run (check or run) to the main log."""
        self._append(self.current_log, [entry])

    def log_batch(self, entries: list):
        """A batch of word-pool results to the main log."""
        self._append(self.current_log, entries)

    def log_accepted(self, entries: list):
        self._append(os.path.join(self.output_directory, f"accepted_{self.today}.jsonl"), entries)

    def log_rejected(self, entries: list):
        self._append(os.path.join(self.output_directory, f"rejected_{self.today}.jsonl"), entries)
