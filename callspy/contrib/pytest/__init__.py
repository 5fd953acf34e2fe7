"""
pytest integration.

The plugin is registered automatically when callspy is installed. Run pytest
with ``--callspy`` (or set ``callspy = true`` in the ini file) to clean every
spy a test attaches, including the ones attached by its fixtures, once the test
has finished::

    pytest --callspy

Single tests can instead request the ``callspy_scope`` fixture, which yields
the registry the test's spies are registered in and cleans them on teardown.
"""
