"""Global pytest fixtures for BINSTRING."""

pytest_plugins = [
    "tests.fixtures.runtimes",
]
