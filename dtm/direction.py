from enum import Enum


class Direction(Enum):
    """Head movement of a tape, labelled the way programs write it."""

    MOVE_BACK = "-1"
    STAY = "0"
    MOVE_FORWARD = "+1"

    @property
    def label(self):
        return self.value

    @property
    def offset(self):
        return int(self.value)

    @classmethod
    def from_label(cls, label):
        label = label.strip()
        if label == "1":
            return cls.MOVE_FORWARD
        try:
            return cls(label)
        except ValueError:
            raise ValueError(f"Unknown head movement {label!r}, expected -1, 0 or +1") from None

    def __str__(self):
        return self.value
