"""
Exception types raised by the Cronos ID resolver.
"""


class CronosIdError(Exception):
    """Base class for every error raised by this package"""


class ConfigError(CronosIdError):
    """Invalid deployment configuration"""


class NormalizationError(CronosIdError, ValueError):
    """A domain name contains a code point rejected by the UTS #46 table"""

    def __init__(self, name, message):
        super().__init__(f"Cannot normalize {name!r}: {message}")
        self.name = name


class ChainQueryError(CronosIdError):
    """The JSON-RPC endpoint failed, timed out or answered with garbage"""

    def __init__(self, operation, message):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class UnresolvedNameError(CronosIdError):
    """The registry has no owner for a name"""

    def __init__(self, name):
        super().__init__(f"{name} is not registered")
        self.name = name


class NoReverseRecordError(CronosIdError):
    """An address has no usable reverse record"""

    NO_RESOLVER = "no-resolver"
    EMPTY_NAME = "empty-name"

    def __init__(self, address, reason):
        super().__init__(f"No reverse record for {address} ({reason})")
        self.address = address
        self.reason = reason


class OwnershipMismatchError(CronosIdError):
    """The forward owner of a reverse-resolved name is not the queried address"""

    def __init__(self, address, name, owner):
        super().__init__(
            f"{address} claims {name} but the registry says it is owned by {owner}"
        )
        self.address = address
        self.name = name
        self.owner = owner
