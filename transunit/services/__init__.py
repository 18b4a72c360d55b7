"""Translation services wired to the current Flask application.

Use these factories inside an application context; they bind the services to
``db.session`` and the application's configuration.
"""

from flask import current_app

from transunit import db
from transunit.services.file_manager import FileManager
from transunit.services.storage import SQLAlchemyStorage, Storage
from transunit.services.trans_unit_manager import TransUnitManager
from transunit.services.trans_unit_repository import TransUnitRepository


def get_storage() -> SQLAlchemyStorage:
    return SQLAlchemyStorage(db.session)


def get_file_manager() -> FileManager:
    return FileManager(get_storage(), current_app.config['TRANSLATION_ROOT_DIR'])


def get_trans_unit_manager() -> TransUnitManager:
    storage = get_storage()
    root_dir = current_app.config['TRANSLATION_ROOT_DIR']
    return TransUnitManager(storage, FileManager(storage, root_dir), root_dir)


def get_trans_unit_repository() -> TransUnitRepository:
    return TransUnitRepository(db.session)


__all__ = [
    'FileManager',
    'SQLAlchemyStorage',
    'Storage',
    'TransUnitManager',
    'TransUnitRepository',
    'get_file_manager',
    'get_storage',
    'get_trans_unit_manager',
    'get_trans_unit_repository',
]
