"""Custom exception classes for the vault core."""


class VaultError(Exception):
    """
    Base exception class for all vault errors.
    """

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(VaultError):
    """
    Raised on bad user input: empty name, missing password, expiration or emails.
    """
    pass


class ItemNotFoundError(ValidationError):
    """
    Raised when a share targets a file or folder that does not exist.
    """
    pass


class DuplicateNameError(VaultError):
    """
    Raised when a sibling folder already uses the name (case-insensitive).
    """
    pass


class NotEmptyError(VaultError):
    """
    Raised when deleting a folder that still has child folders or files.
    """
    pass


class ProtectedEntityError(VaultError):
    """
    Raised when attempting to delete the root folder.
    """
    pass


class FolderNotFoundError(VaultError):
    """
    Raised when an operation needs a folder that does not exist.
    """
    pass


class StorageUnavailable(VaultError):
    """
    Raised when the persistence medium cannot be read or written.
    """
    pass


class EmptyQueueError(VaultError):
    """
    Raised when starting the upload pipeline with nothing queued.
    """
    pass


class UploadInProgressError(VaultError):
    """
    Raised when starting the upload pipeline while a run is active.
    """
    pass
