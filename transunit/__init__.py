from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
import logging
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()


def create_app(config_name='development'):
    app = Flask(__name__)

    logging.basicConfig(level=os.getenv('LOG_LEVEL', 'INFO').upper())

    # Config
    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
    else:
        app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv(
            'DATABASE_URL',
            'sqlite:///translations.db'
        )

    # Render/Heroku style URLs
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('postgres://'):
        app.config['SQLALCHEMY_DATABASE_URI'] = app.config['SQLALCHEMY_DATABASE_URI'].replace(
            'postgres://', 'postgresql://', 1
        )

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['TRANSLATION_ROOT_DIR'] = os.getenv('TRANSLATION_ROOT_DIR', os.getcwd())
    app.config['TRANSLATION_LOCALES'] = [
        locale.strip()
        for locale in os.getenv('TRANSLATION_LOCALES', 'en').split(',')
        if locale.strip()
    ]
    app.config['TRANSLATION_GRID_ROWS'] = int(os.getenv('TRANSLATION_GRID_ROWS', 20))

    # Initialize extensions
    db.init_app(app)
    CORS(app)

    # Create tables with error handling
    with app.app_context():
        from transunit import models  # noqa: F401  (register tables on db.metadata)
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning(f"Could not create database tables: {e}")

    # Register routes
    from transunit.routes import register_routes
    register_routes(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
