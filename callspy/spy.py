import inspect
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple

from callspy.call import Call
from callspy.internal.logger import get_logger
from callspy.internal.patching import Patch
from callspy.internal.patching import SpyMode
from callspy.internal.patching import default_mode
from callspy.internal.patching import eligible_members
from callspy.internal.patching import install
from callspy.internal.patching import uninstall
from callspy.recorder import CallRecorder
from callspy.registry import ActiveSpyRegistry
from callspy.registry import current_registry


log = get_logger(__name__)


class Spy(object):
    """Records the calls made to the members of ``target`` it is attached to.

    A spy starts detached. ``on`` and ``on_all`` attach it to members of the
    target and register it with the active spy registry; ``clean`` puts the
    original members back and unregisters it. The recorded calls are kept
    across ``clean``, and the spy can be attached again afterwards.

    ``mode`` selects what gets spied on:

    - ``SpyMode.INSTANCE``: the members of a single object;
    - ``SpyMode.CLASS``: the class methods and static methods of a class, or
      the functions of a module;
    - ``SpyMode.ALL_INSTANCES``: the instance methods of a class, for every
      current and future instance.

    It defaults to ``CLASS`` for classes and modules, ``INSTANCE`` otherwise.
    When ``registry`` is given the spy registers there instead of in the
    registry of the current execution context.
    """

    def __init__(self, target, mode=None, registry=None):
        # type: (Any, Optional[SpyMode], Optional[ActiveSpyRegistry]) -> None
        self.target = target
        self.mode = SpyMode(mode) if mode is not None else default_mode(target)
        self._registry = registry
        self._recorder = CallRecorder()
        self._patches = {}  # type: Dict[str, Patch]

    def __repr__(self):
        return "{}(target={!r}, mode={}, patched={}, calls={})".format(
            self.__class__.__name__, self.target, self.mode.value, list(self._patches), len(self._recorder)
        )

    def __enter__(self):
        # type: () -> Spy
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.clean()

    @property
    def patched_methods(self):
        # type: () -> Tuple[str, ...]
        return tuple(self._patches)

    def on(self, method_name):
        # type: (str) -> Spy
        self._spy_on(method_name)
        self._register()
        return self

    def on_all(self):
        # type: () -> Spy
        for method_name in eligible_members(self.target, self.mode):
            self._spy_on(method_name)
        self._register()
        return self

    def calls(self, method_name=None):
        # type: (Optional[str]) -> List[Call]
        return self._recorder.query(method_name)

    def clean(self):
        # type: () -> Spy
        # Undo the patches last to first so members patched twice unwind correctly
        for method_name, patch in reversed(list(self._patches.items())):
            uninstall(self.target, patch)
            del self._patches[method_name]

        self._active_registry().unregister(self)
        return self

    def is_dirty(self):
        # type: () -> bool
        return bool(self._patches)

    def _spy_on(self, method_name):
        # type: (str) -> None
        if method_name in self._patches:
            log.debug("%s is already spied on by %r", method_name, self)
            return
        self._patches[method_name] = install(self.target, method_name, self._recorder.append, self.mode)

    def _active_registry(self):
        # type: () -> ActiveSpyRegistry
        return self._registry if self._registry is not None else current_registry()

    def _register(self):
        # type: () -> None
        self._active_registry().register(self)


def _spy_with_options(target, method_name, mode=None):
    # type: (Any, Optional[str], Optional[SpyMode]) -> Spy
    spy = Spy(target, mode=mode)
    if method_name is None:
        return spy.on_all()
    return spy.on(method_name)


def on(target, method_name=None):
    # type: (Any, Optional[str]) -> Spy
    """Spy on ``method_name`` of ``target``, or on all of its eligible members.

    ``target`` may be an object, a class (its class methods and static methods
    are spied on) or a module (its functions are spied on)::

        spy = callspy.on(client)
        client.send("ping")
        assert spy.calls("send")[0].args == ("ping",)
    """
    return _spy_with_options(target, method_name)


def on_all_instances_of(cls, method_name=None):
    # type: (type, Optional[str]) -> Spy
    """Spy on the instance methods of ``cls`` for all of its instances, existing or not.

    Every instance reports to the same spy; ``Call.receiver`` tells them apart.
    """
    if not inspect.isclass(cls):
        raise TypeError("on_all_instances_of expects a class, got {!r}".format(cls))
    return _spy_with_options(cls, method_name, SpyMode.ALL_INSTANCES)
