"""Resolve the File records that back translations.

Files follow the ``{domain}.{locale}.{extension}`` naming convention and are
identified by a hash of their name and their path relative to the root dir,
so resolving the same name twice always yields the same record.
"""

import hashlib
import logging
import os

logger = logging.getLogger(__name__)


class FileManager:
    """Lookup-or-create File records rooted at ``root_dir``."""

    def __init__(self, storage, root_dir: str):
        self.storage = storage
        self.root_dir = root_dir

    def resolve(self, domain: str, locale: str, extension: str, base_dir: str):
        """Return the File for the given naming context under ``base_dir``."""
        name = f'{domain}.{locale}.{extension}'
        return self.get_for(name, base_dir)

    def get_for(self, name: str, path: str):
        """Get the File matching ``name`` in ``path``, creating it if needed."""
        file = self.storage.find_one_by('file', hash=self.hash(name, path))

        if file is None:
            file = self.create(name, path)

        return file

    def create(self, name: str, path: str, flush: bool = False):
        """Create a new File from its name and directory.

        Args:
            name: File name, e.g. ``messages.en.yml``
            path: Directory containing the file (absolute or relative to
                the root dir)
            flush: Commit immediately

        Raises:
            ValueError: If the name does not follow ``domain.locale.extension``
        """
        parts = name.rsplit('.', 2)
        if len(parts) != 3 or not all(parts):
            raise ValueError(f'Invalid translation file name: {name}')

        domain, locale, extension = parts
        file_class = self.storage.model_class_for('file')

        file = file_class(
            domain=domain,
            locale=locale,
            extension=extension,
            path=self.get_file_relative_path(path),
            hash=self.hash(name, path),
        )

        self.storage.stage(file)
        logger.debug(f'Staged translation file {file.path}/{name}')

        if flush:
            self.storage.commit()

        return file

    def hash(self, name: str, path: str) -> str:
        relative_path = self.get_file_relative_path(path)
        return hashlib.sha256(f'{relative_path}/{name}'.encode('utf-8')).hexdigest()

    def get_file_relative_path(self, path: str) -> str:
        """Return ``path`` relative to the root dir, using forward slashes."""
        absolute = os.path.normpath(os.path.join(self.root_dir, path))
        relative = os.path.relpath(absolute, os.path.normpath(self.root_dir))
        return relative.replace(os.sep, '/')
