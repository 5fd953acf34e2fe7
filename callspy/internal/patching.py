"""
Reversible patching of callable members.

A member is intercepted by moving its current implementation aside under a
generated alias and putting a ``wrapt.FunctionWrapper`` in its place. The
wrapper reports every invocation before forwarding it, unchanged, to the
original. Uninstalling puts the original back from the alias and drops the
alias, leaving the holder's member table as it was found.

The member table of the holder is rewritten in place: for classes and modules
this is process-wide state.
"""
from dataclasses import dataclass
from enum import Enum
import inspect
import secrets
import types
from typing import Any
from typing import Callable
from typing import Dict
from typing import List
from typing import Optional

import wrapt

from callspy.call import Call
from callspy.internal.logger import get_logger
from callspy.settings import config


log = get_logger(__name__)

ALIAS_MARKER = "_before_spy_"

_MISSING = object()


class SpyMode(str, Enum):
    # the members of a single object
    INSTANCE = "instance"
    # the class-level members of a class, or the functions of a module
    CLASS = "class"
    # the instance methods of a class, shared by every current and future instance
    ALL_INSTANCES = "all_instances"


@dataclass(eq=False)
class Patch:
    method_name: str
    alias: str
    # whether the holder defined the member itself, as opposed to inheriting it
    owned: bool
    wrapper: Any = None
    # cleared on uninstall; a wrapper still reachable from a later spy then only forwards
    active: bool = True


def default_mode(target):
    # type: (Any) -> SpyMode
    if inspect.isclass(target) or inspect.ismodule(target):
        return SpyMode.CLASS
    return SpyMode.INSTANCE


def _root_type(target, mode):
    if mode == SpyMode.CLASS:
        return types.ModuleType if inspect.ismodule(target) else type
    return object


def _is_dunder(name):
    # type: (str) -> bool
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _is_spyable(raw, target, mode):
    # type: (Any, Any, SpyMode) -> bool
    if mode == SpyMode.ALL_INSTANCES:
        return inspect.isfunction(raw)
    if mode == SpyMode.CLASS and not inspect.ismodule(target):
        return isinstance(raw, (classmethod, staticmethod))
    return isinstance(raw, (classmethod, staticmethod)) or inspect.isroutine(raw)


def eligible_members(target, mode):
    # type: (Any, SpyMode) -> List[str]
    """Return the names of the members of ``target`` that can be spied on in ``mode``.

    Members defined by the root type (``object``, ``type`` or ``ModuleType``) are
    never returned, nor are aliases holding the originals of spied members.
    Dunder members are skipped unless ``CALLSPY_SPY_DUNDERS`` is enabled.
    Members are looked up statically so properties are never evaluated.
    """
    root_members = set(dir(_root_type(target, mode)))
    names = []
    for name in dir(target):
        if name in root_members or ALIAS_MARKER in name:
            continue
        if _is_dunder(name) and not config.spy_dunders:
            continue
        raw = inspect.getattr_static(target, name, _MISSING)
        if raw is not _MISSING and _is_spyable(raw, target, mode):
            names.append(name)
    return names


def _own_members(holder):
    # type: (Any) -> Dict[str, Any]
    return getattr(holder, "__dict__", {})


def has_member(holder, name):
    # type: (Any, str) -> bool
    return inspect.getattr_static(holder, name, _MISSING) is not _MISSING


def generate_alias(holder, method_name):
    # type: (Any, str) -> str
    """Return a name for the original of ``method_name`` that is not a member of ``holder``."""
    while True:
        alias = "_{}{}{}".format(method_name, ALIAS_MARKER, secrets.token_hex(config.alias_suffix_bytes))
        if not has_member(holder, alias):
            return alias
        log.debug("alias %s already taken on %r, retrying", alias, holder)


def _missing_member(holder, method_name, mode):
    if mode == SpyMode.INSTANCE:
        message = "{!r} object has no attribute {!r}".format(type(holder).__name__, method_name)
    elif mode == SpyMode.ALL_INSTANCES:
        message = "{!r} object has no attribute {!r}".format(holder.__name__, method_name)
    elif inspect.ismodule(holder):
        message = "module {!r} has no attribute {!r}".format(holder.__name__, method_name)
    else:
        message = "type object {!r} has no attribute {!r}".format(holder.__name__, method_name)

    def missing(*args, **kwargs):
        raise AttributeError(message)

    missing.__name__ = missing.__qualname__ = method_name
    return missing


def _current_implementation(holder, method_name, mode):
    own = _own_members(holder)
    if method_name in own:
        return own[method_name], True

    if not has_member(holder, method_name):
        return _missing_member(holder, method_name, mode), False

    if mode == SpyMode.INSTANCE:
        # Inherited from the class: keep it bound to the instance it is moved onto
        return getattr(holder, method_name), False

    # Inherited from a base class: the raw descriptor binds to whichever class it lives on
    return inspect.getattr_static(holder, method_name), False


class SpyFunctionWrapper(wrapt.FunctionWrapper):
    """A ``wrapt.FunctionWrapper`` that knows the patch that installed it."""

    def __init__(self, wrapped, wrapper, patch):
        super(SpyFunctionWrapper, self).__init__(wrapped, wrapper)
        self._self_patch = patch


def _covering_patch(holder, patch):
    # type: (Any, Patch) -> Optional[Patch]
    """Return the patch installed directly over ``patch`` on the same member, if any."""
    own = _own_members(holder)
    current = own.get(patch.method_name, _MISSING)
    # type() since wrapt proxies report the class of the wrapped object
    while type(current) is SpyFunctionWrapper:
        outer = current._self_patch
        saved = own.get(outer.alias, _MISSING)
        if saved is patch.wrapper:
            return outer
        current = saved
    return None


def install(holder, method_name, on_invoke, mode):
    # type: (Any, str, Callable[[Call], None], SpyMode) -> Patch
    """Route calls to ``holder.<method_name>`` through ``on_invoke``.

    Every call builds a ``Call`` record, hands it to ``on_invoke`` and then runs
    the original implementation with the same arguments, returning its result.
    The receiver of the record is the object the call was bound to; when the
    host binds none (static methods, module functions) it is ``holder``.
    """
    alias = generate_alias(holder, method_name)
    original, owned = _current_implementation(holder, method_name, mode)
    patch = Patch(method_name=method_name, alias=alias, owned=owned)

    def spy_wrapper(wrapped, instance, args, kwargs):
        if patch.active:
            receiver = holder if instance is None else instance
            on_invoke(Call(receiver, method_name, args, kwargs))
        return wrapped(*args, **kwargs)

    patch.wrapper = SpyFunctionWrapper(original, spy_wrapper, patch)

    setattr(holder, alias, original)
    setattr(holder, method_name, patch.wrapper)

    log.debug("installed spy on %r.%s (original saved as %s)", holder, method_name, alias)
    return patch


def uninstall(holder, patch):
    # type: (Any, Patch) -> None
    """Undo ``install``: restore the original implementation and drop its alias.

    When other spies were installed over the same member afterwards, the member
    is left to them: the spy directly above takes over the implementation this
    one saved, so that the last of them to go puts back exactly what was there
    before any spy was installed.
    """
    patch.active = False
    own = _own_members(holder)

    if own.get(patch.method_name, _MISSING) is not patch.wrapper:
        outer = _covering_patch(holder, patch)
        if outer is not None:
            setattr(holder, outer.alias, own[patch.alias])
            outer.owned = patch.owned
            delattr(holder, patch.alias)
            log.debug("removed spy from %r.%s underneath %s", holder, patch.method_name, outer.alias)
            return

        log.warning(
            "restoring %r.%s which was replaced after the spy was installed",
            holder,
            patch.method_name,
        )

    if patch.owned:
        setattr(holder, patch.method_name, own[patch.alias])
    elif patch.method_name in own:
        delattr(holder, patch.method_name)
    delattr(holder, patch.alias)

    log.debug("removed spy from %r.%s", holder, patch.method_name)
