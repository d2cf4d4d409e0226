"""Data-layer error types."""


class RepositoryError(Exception):
    """The observation store could not be read."""
