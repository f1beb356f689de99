BLANK_SYMBOL = "~"


class Tape:
    """
    Read-only tape with a movable head, blank-filled in both directions.

    Cells are kept in two lists around a signed head position: ``_right``
    holds positions 0, 1, 2, ... and ``_left`` holds -1, -2, ... so that
    growing on either edge is an append.
    """

    def __init__(self):
        self._left = []
        self._right = [BLANK_SYMBOL]
        self._position = 0

    def read(self):
        if self._position >= 0:
            return self._right[self._position]
        return self._left[-self._position - 1]

    def move(self, direction):
        self._position += direction.offset

        if self._position >= len(self._right):
            self._right.append(BLANK_SYMBOL)
        elif -self._position > len(self._left):
            self._left.append(BLANK_SYMBOL)

    def set_content(self, symbols):
        """
        Replace the content wholesale; the head keeps its index into the content.

        The head index must still fall inside the new content, otherwise the
        next ``read`` raises ``IndexError``. Call ``reset`` first to start
        reading at the first symbol.
        """
        head = self.head
        symbols = list(symbols)
        self._left = []
        self._right = symbols if symbols else [BLANK_SYMBOL]
        self._position = head

    def reset(self):
        self._left = []
        self._right = [BLANK_SYMBOL]
        self._position = 0

    @property
    def head(self):
        """Index of the head into ``contents()``."""
        return self._position + len(self._left)

    def contents(self):
        return self._left[::-1] + self._right

    def render(self):
        """Tape content with leading and trailing blanks removed."""
        return "".join(self.contents()).strip(BLANK_SYMBOL)

    def __len__(self):
        return len(self._left) + len(self._right)

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"{type(self).__name__}({''.join(self.contents())!r}, head={self.head})"


class WritableTape(Tape):
    """Tape whose cell under the head can be overwritten (output and working tapes)."""

    def write(self, symbol):
        if self._position >= 0:
            self._right[self._position] = symbol
        else:
            self._left[-self._position - 1] = symbol
