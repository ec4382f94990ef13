"""Backup error hierarchy."""

from __future__ import annotations


class BackupError(Exception):
    """Base class for all backup failures."""


class FolderUnreadableError(BackupError):
    """A selected folder is missing or cannot be listed."""


class MetadataUnavailableError(BackupError):
    """A file's size could not be read (vanished or permission revoked)."""


class DestinationUnwritableError(BackupError):
    """The metadata file or the archive container cannot be created."""


class ArchiveWriteError(BackupError):
    """An I/O error occurred while writing an archive entry."""


class ArchiveFinalizeError(BackupError):
    """The archive could not be closed; a partial archive is likely on disk."""
