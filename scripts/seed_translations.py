#!/usr/bin/env python3
"""Seed the database with demo translations, the way a file import does.

Existing translations are merged: contents edited by hand in the grid are
kept, identical contents are skipped.

Usage:
    python scripts/seed_translations.py
"""

import sys
import os

# Add parent directory to path to import transunit modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from transunit import create_app, db
from transunit.services import get_file_manager, get_trans_unit_manager
from transunit.models import TransUnit

TRANSLATIONS_DIR = 'translations'
EXTENSION = 'yml'

# domain -> key -> locale -> content
TRANSLATIONS_DATA = {
    'messages': {
        'hello': {'en': 'Hello', 'fr': 'Bonjour', 'de': 'Hallo'},
        'bye': {'en': 'Goodbye', 'fr': 'Au revoir', 'de': 'Auf Wiedersehen'},
        'welcome': {'en': 'Welcome, %name%!', 'fr': 'Bienvenue, %name% !'},
    },
    'validators': {
        'not_blank': {'en': 'This value should not be blank.', 'fr': 'Cette valeur ne doit pas être vide.'},
        'email': {'en': 'This value is not a valid email address.'},
    },
}


def import_translations(manager, file_manager, data):
    """Import ``data`` through the merge rules.

    Returns:
        Tuple (added, updated, skipped)
    """
    added_count = 0
    updated_count = 0
    skipped_count = 0

    for domain, units in data.items():
        print(f"\nProcessing domain: {domain}")

        for key, translations in units.items():
            trans_unit = TransUnit.query.filter_by(key=key, domain=domain).first()
            if trans_unit is None:
                trans_unit = manager.create(key, domain)

            for locale, content in translations.items():
                if trans_unit.has_translation(locale):
                    if manager.update_translation(trans_unit, locale, content, merge=True):
                        updated_count += 1
                        print(f"  Updated: {key} ({locale})")
                    else:
                        skipped_count += 1
                else:
                    file = file_manager.resolve(domain, locale, EXTENSION, TRANSLATIONS_DIR)
                    manager.add_translation(trans_unit, locale, content, file)
                    added_count += 1
                    print(f"  Added: {key} ({locale})")

    return added_count, updated_count, skipped_count


def seed_translations():
    """Import TRANSLATIONS_DATA, merging with what is already stored."""
    app = create_app(os.getenv('FLASK_ENV', 'development'))

    with app.app_context():
        added_count, updated_count, skipped_count = import_translations(
            get_trans_unit_manager(),
            get_file_manager(),
            TRANSLATIONS_DATA
        )

        # Commit all changes
        db.session.commit()

        print(f"\n" + "="*50)
        print(f"Translations seeding completed!")
        print(f"Added: {added_count} translations")
        print(f"Updated: {updated_count} translations")
        print(f"Skipped (unchanged or edited by hand): {skipped_count}")
        print(f"Total translation units in database: {TransUnit.query.count()}")
        print("="*50)


if __name__ == '__main__':
    seed_translations()
