from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from typing import Callable
from typing import Mapping
from typing import Optional
from typing import Tuple


_EMPTY_KWARGS: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class Call:
    """A single invocation observed by a spy.

    ``receiver`` is the object the call arrived on. For spies installed on every
    instance of a class this is the instance that was called, so a single spy can
    tell its receivers apart. ``args`` holds the positional arguments, excluding
    the receiver, and ``kwargs`` a read-only view of the keyword arguments.
    """

    receiver: Any
    method_name: str
    args: Tuple[Any, ...] = ()
    kwargs: Optional[Mapping[str, Any]] = None

    def __post_init__(self):
        # Freeze the containers so a recorded call can't be altered after the fact
        object.__setattr__(self, "args", tuple(self.args))
        if self.kwargs is None:
            object.__setattr__(self, "kwargs", _EMPTY_KWARGS)
        elif not isinstance(self.kwargs, MappingProxyType):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    @property
    def block(self) -> Optional[Callable[..., Any]]:
        """The last positional argument, when it is callable.

        Python has no dedicated block argument, so this is a heuristic: any
        callable passed last is reported, including classes and builtins such
        as ``int``. Check ``args`` when the distinction matters.
        """
        if self.args and callable(self.args[-1]):
            return self.args[-1]
        return None
