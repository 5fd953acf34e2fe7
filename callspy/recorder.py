from typing import List
from typing import Optional

from callspy.call import Call


class CallRecorder(object):
    """Append-only log of the calls observed by a spy, in arrival order."""

    __slots__ = ("_calls",)

    def __init__(self):
        # type: () -> None
        self._calls = []  # type: List[Call]

    def __len__(self):
        # type: () -> int
        return len(self._calls)

    def __repr__(self):
        return "{}(calls={})".format(self.__class__.__name__, len(self._calls))

    def append(self, call):
        # type: (Call) -> None
        self._calls.append(call)

    def query(self, method_name=None):
        # type: (Optional[str]) -> List[Call]
        """Return the recorded calls, optionally only those made to ``method_name``.

        The result is always a new list: callers can't alter the log through it.
        """
        if method_name is None:
            return list(self._calls)
        return [c for c in self._calls if c.method_name == method_name]
