"""Errors raised by storeconfig."""


class StoreConfigError(Exception):
    """Base class for every failure the command reports to the user."""


class UserInputError(StoreConfigError):
    """Invalid command line input."""


class UnknownFormatError(UserInputError):
    """Unrecognized table output format."""

    def __init__(self, output_format: str) -> None:
        self.output_format = output_format
        super().__init__(f"Unhandled format {output_format!r}")


class DecryptionError(StoreConfigError):
    """A configuration value could not be decrypted."""


class StoreError(StoreConfigError):
    """The configuration store could not be reached or queried."""
