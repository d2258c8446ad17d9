# -*- coding: utf-8 -*-
"""Error taxonomy for the registry and the model tester."""


class RegistryError(Exception):
    """Base class for all registry errors."""


class ValidationError(RegistryError):
    """Caller-supplied data violates a precondition."""


class NotFoundError(RegistryError):
    """The referenced API id (or provider) does not exist."""


class StorageError(RegistryError):
    """The key-value store could not be read or written."""


class ProviderCallError(RegistryError):
    """An external provider call failed.

    ``str(err)`` is the human-readable message also shown in the
    model test state.
    """
