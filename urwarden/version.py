"""Build metadata. Release builds overwrite COMMIT, BUILD_DATE and BUILD_NUMBER."""

__version__ = "0.1.0"

COMMIT = "unknown"
BUILD_DATE = "unknown"
BUILD_NUMBER = "0"


def version_string() -> str:
    return f"urwarden {__version__} (commit {COMMIT}, date {BUILD_DATE}, build {BUILD_NUMBER})"
