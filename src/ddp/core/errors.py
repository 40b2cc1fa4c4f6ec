# src/ddp/core/errors.py


class DDPError(Exception):
    """An error that ends the run with a message and an exit status."""
    exit_code = 1


class CleanConfigError(DDPError):
    """The clean config could not be read or does not have the expected shape."""


class DiffError(DDPError):
    """The diff utility failed."""


class MissingExecutableError(DDPError):
    exit_code = 2
