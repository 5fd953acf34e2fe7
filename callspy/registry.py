"""
Registry of the spies attached in the current execution context.

Each thread sees its own registry: a spy registered in one thread is never
cleaned from another. asyncio tasks run in a copy of the context that created
them and so share its registry, unless they enter a scope of their own.

``scoped()`` replaces the registry with an empty one for the duration of a
block and force-cleans whatever got registered in it on the way out, whether
the block returned or raised.
"""
import contextlib
import contextvars
from typing import TYPE_CHECKING
from typing import Any
from typing import Callable
from typing import Dict
from typing import Iterator
from typing import List
from typing import Optional

from callspy.internal.logger import get_logger


if TYPE_CHECKING:  # pragma: no cover
    from callspy.spy import Spy  # noqa:F401


log = get_logger(__name__)


class ActiveSpyRegistry(object):
    """Insertion-ordered set of spies, unique by identity."""

    def __init__(self):
        # type: () -> None
        self._spies = {}  # type: Dict[int, Spy]

    def __len__(self):
        # type: () -> int
        return len(self._spies)

    def __contains__(self, spy):
        # type: (Any) -> bool
        return self._spies.get(id(spy)) is spy

    def __iter__(self):
        # type: () -> Iterator[Spy]
        return iter(self.snapshot())

    def __repr__(self):
        return "{}(spies={})".format(self.__class__.__name__, len(self._spies))

    def register(self, spy):
        # type: (Spy) -> None
        self._spies.setdefault(id(spy), spy)

    def unregister(self, spy):
        # type: (Spy) -> None
        if spy in self:
            del self._spies[id(spy)]

    def snapshot(self):
        # type: () -> List[Spy]
        return list(self._spies.values())

    def bulk_clean(self):
        # type: () -> None
        """Clean every registered spy, most recent first, and empty the registry.

        Spies stacked on the same member are restored in the reverse order they
        were installed in, so each one puts back exactly what it found.
        """
        spies = self.snapshot()
        log.debug("cleaning %d active spies", len(spies))
        for spy in reversed(spies):
            spy.clean()
        self._spies.clear()


_ACTIVE_SPIES = contextvars.ContextVar("callspy_active_spies")  # type: contextvars.ContextVar[ActiveSpyRegistry]


def current_registry():
    # type: () -> ActiveSpyRegistry
    """Return the registry of the current execution context, creating it if needed."""
    registry = _ACTIVE_SPIES.get(None)
    if registry is None:
        registry = ActiveSpyRegistry()
        _ACTIVE_SPIES.set(registry)
    return registry


def active_spies():
    # type: () -> List[Spy]
    return current_registry().snapshot()


@contextlib.contextmanager
def scoped():
    # type: () -> Iterator[ActiveSpyRegistry]
    """Run a block with its own, initially empty, registry::

        with callspy.scoped():
            spy = callspy.on(client, "send")
            ...
        # every spy attached inside the block has been cleaned

    The outer registry is put back untouched when the block exits.
    """
    registry = ActiveSpyRegistry()
    token = _ACTIVE_SPIES.set(registry)
    log.debug("entering spy scope %r", registry)
    try:
        yield registry
    finally:
        try:
            registry.bulk_clean()
        finally:
            _ACTIVE_SPIES.reset(token)
            log.debug("left spy scope %r", registry)


def clean(func=None, *args, **kwargs):
    # type: (Optional[Callable[..., Any]], Any, Any) -> Any
    """Clean spies.

    Without arguments, every spy registered in the current context is cleaned.
    Given a callable, it is called with the remaining arguments inside
    ``scoped()`` and its result returned once the spies it attached are cleaned.
    """
    if func is None:
        current_registry().bulk_clean()
        return None

    with scoped():
        return func(*args, **kwargs)
