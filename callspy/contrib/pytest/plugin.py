import pytest

from callspy.contrib.pytest.constants import HELP_MSG
from callspy.internal.logger import get_logger
from callspy.registry import scoped


log = get_logger(__name__)


def pytest_addoption(parser):
    """Add callspy options."""
    group = parser.getgroup("callspy")

    group._addoption(
        "--callspy",
        action="store_true",
        dest="callspy",
        default=False,
        help=HELP_MSG,
    )

    parser.addini("callspy", HELP_MSG, type="bool")


def is_enabled(config):
    """Check if the callspy plugin is enabled."""
    return config.getoption("callspy") or config.getini("callspy")


def pytest_report_header(config):
    if is_enabled(config):
        return "callspy: spies are cleaned after every test"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_protocol(item, nextitem):
    if not is_enabled(item.config):
        yield
        return

    with scoped() as registry:
        yield
        if len(registry):
            log.debug("cleaning %d spies left by %s", len(registry), item.nodeid)


@pytest.fixture
def callspy_scope():
    """Registry of the spies attached by the test, all cleaned on teardown."""
    with scoped() as registry:
        yield registry
