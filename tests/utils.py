import contextlib
import os


@contextlib.contextmanager
def override_env(env, replace_os_env=False):
    """
    Temporarily override ``os.environ`` with provided values::

        >>> with override_env(dict(CALLSPY_DEBUG="true")):
            # Your test
    """
    # Copy the full original environment
    original = dict(os.environ)

    # We allow callers to clear out the environment to prevent leaking variables into the test
    if replace_os_env:
        os.environ.clear()

    for k in list(os.environ.keys()):
        if k.startswith("CALLSPY_"):
            del os.environ[k]

    # Update based on the passed in arguments
    os.environ.update(env)
    try:
        yield
    finally:
        # Full clear the environment out and reset back to the original
        os.environ.clear()
        os.environ.update(original)


class MockObject(object):
    def __init__(self):
        self.method_1_called = False
        self.method_with_args_called = False
        self.method_with_block_called = False

    def method_1(self):
        self.method_1_called = True
        return "method_1"

    def method_with_args(self, arg_1, arg_2):
        self.method_with_args_called = True
        return (arg_1, arg_2)

    def method_with_block(self, arg_1, block):
        self.method_with_block_called = True
        return block(arg_1)

    @property
    def evaluated(self):
        raise AssertionError("properties must not be evaluated while looking for members to spy on")


class MockClass(object):
    created = 0

    @classmethod
    def create(cls, value):
        cls.created += 1
        return (cls, value)

    @staticmethod
    def double(value):
        return value * 2

    def instance_method(self):
        return self


class MockSubClass(MockClass):
    pass
