from .JsonRepairChars import is_whitespace

class JsonRepairBuffer:
    """
    Append-only text accumulator for repaired output.

    Parsers record len(buffer) before a speculative attempt and call
    truncate() with it when the attempt fails. The few repairs that edit
    already written text (inserting a missing comma before trailing
    whitespace, dropping a dangling comma) go through the helpers below and
    only touch the tail of the buffer.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def write(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._length += len(text)

    def getvalue(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def truncate(self, length: int) -> None:
        while self._length > length:
            part = self._parts.pop()
            self._length -= len(part)
            if self._length < length:
                self.write(part[:length - self._length])

    def endswith(self, text: str) -> bool:
        if len(text) > self._length:
            return False
        tail = ""
        index = len(self._parts) - 1
        while len(tail) < len(text):
            tail = self._parts[index] + tail
            index -= 1
        return tail.endswith(text)

    def _pop_trailing_whitespace(self) -> str:
        removed: list[str] = []
        while self._parts:
            part = self._parts[-1]
            index = len(part)
            while index > 0 and is_whitespace(part[index - 1]):
                index -= 1
            if index == len(part):
                break
            self._parts.pop()
            self._length -= len(part)
            removed.append(part[index:])
            if index > 0:
                self.write(part[:index])
                break
        return "".join(reversed(removed))

    def insert_before_last_whitespace(self, text: str) -> None:
        """
        Inserts text before the run of whitespace at the end of the buffer,
        so `1 \\n` becomes `1, \\n` rather than `1 \\n,`.
        """
        trailing = self._pop_trailing_whitespace()
        self.write(text)
        self.write(trailing)

    def remove_trailing_comma(self) -> None:
        """
        Drops the last comma if nothing but whitespace follows it.
        """
        trailing = self._pop_trailing_whitespace()
        if self.endswith(","):
            self.truncate(self._length - 1)
        self.write(trailing)
