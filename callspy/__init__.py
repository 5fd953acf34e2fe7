"""
Spies for tests: record the calls made to members of an object, a class or a
module, while the members keep behaving as before.

    import callspy

    spy = callspy.on(client)
    client.send("ping")
    assert spy.calls("send")[0].args == ("ping",)
    spy.clean()

``callspy.clean()`` removes every spy attached in the current thread or task;
``callspy.scoped()`` limits that to the spies attached within a block.
"""
from ._logger import configure_callspy_logger
from .settings import config


# configure the callspy logger before other modules log
configure_callspy_logger()  # noqa: E402

from .call import Call  # noqa: E402
from .internal.patching import SpyMode  # noqa: E402
from .recorder import CallRecorder  # noqa: E402
from .registry import ActiveSpyRegistry  # noqa: E402
from .registry import active_spies  # noqa: E402
from .registry import clean  # noqa: E402
from .registry import current_registry  # noqa: E402
from .registry import scoped  # noqa: E402
from .spy import Spy  # noqa: E402
from .spy import on  # noqa: E402
from .spy import on_all_instances_of  # noqa: E402
from .version import __version__  # noqa: E402


__all__ = [
    "ActiveSpyRegistry",
    "Call",
    "CallRecorder",
    "Spy",
    "SpyMode",
    "__version__",
    "active_spies",
    "clean",
    "config",
    "current_registry",
    "on",
    "on_all_instances_of",
    "scoped",
]
