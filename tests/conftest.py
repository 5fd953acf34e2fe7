import pytest

import callspy
from callspy.internal import logger


@pytest.fixture(autouse=True)
def spy_scope():
    # Keep spies from leaking between tests, whatever the outcome of the test
    with callspy.scoped() as registry:
        yield registry


@pytest.fixture
def no_log_rate_limit():
    logger.reset_buckets()
    yield
    logger.reset_buckets()
