"""
Error hierarchy for BlazeKV.
"""


class KeyStoreError(RuntimeError):
    """Base error for key store failures."""


class TransactionError(KeyStoreError):
    """Raised when a transaction boundary cannot be honoured."""


class ConfigurationError(KeyStoreError):
    """Raised when store configuration is invalid."""


class CommandError(KeyStoreError):
    """Raised when a prompt command cannot be parsed."""
