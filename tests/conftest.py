"""
Pytest configuration and fixtures for testing the translation manager.
"""

import os
import sys
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from transunit import create_app, db
from transunit.services import (
    FileManager,
    SQLAlchemyStorage,
    TransUnitManager,
    TransUnitRepository,
)

fake = Faker()

LOCALES = ['en', 'fr', 'de']


@pytest.fixture(scope='session')
def app(tmp_path_factory):
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app('testing')
    app.config['TRANSLATION_LOCALES'] = LOCALES
    app.config['TRANSLATION_ROOT_DIR'] = str(tmp_path_factory.mktemp('project'))
    app.config['JWT_SECRET_KEY'] = 'test-secret-key-for-testing'

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def root_dir(app):
    return app.config['TRANSLATION_ROOT_DIR']


@pytest.fixture
def storage(db_session):
    return SQLAlchemyStorage(db_session)


@pytest.fixture
def file_manager(storage, root_dir):
    return FileManager(storage, root_dir)


@pytest.fixture
def manager(storage, file_manager, root_dir):
    return TransUnitManager(storage, file_manager, root_dir)


@pytest.fixture
def repository(db_session):
    return TransUnitRepository(db_session)


@pytest.fixture
def make_trans_unit(manager):
    """Factory creating a committed unit with the given ``{locale: content}``."""
    def _make_trans_unit(domain=None, key=None, translations=None, file=None):
        trans_unit = manager.create(key or fake.unique.slug(), domain or 'messages')
        for locale, content in (translations or {}).items():
            manager.add_translation(trans_unit, locale, content, file)
        db.session.commit()
        return trans_unit

    return _make_trans_unit


@pytest.fixture
def messages_file(file_manager, db_session):
    """A committed ``translations/messages.en.yml`` file."""
    file = file_manager.get_for('messages.en.yml', 'translations')
    db_session.commit()
    return file


@pytest.fixture
def dataset(make_trans_unit):
    """A small set of units over three domains and three locales."""
    return {
        'hello': make_trans_unit('messages', 'hello', {'en': 'Hello', 'fr': 'Bonjour'}),
        'bye': make_trans_unit('messages', 'bye', {'en': 'Goodbye', 'fr': 'Au revoir'}),
        'required': make_trans_unit('validators', 'required', {'en': 'This value is required'}),
        'title': make_trans_unit('admin', 'title', {'de': 'Titel'}),
    }
