"""Create, update and delete translation units and their translations.

Updates coming from translation files use ``merge=True``: a translation a
user edited by hand (``modified_manually``) is never overwritten by a later
import, and importing the same content again is a no-op.
"""

import logging
import os

logger = logging.getLogger(__name__)


class TransUnitManager:
    """Manage TransUnit entities through a storage gateway."""

    def __init__(self, storage, file_manager, root_dir: str):
        self.storage = storage
        self.file_manager = file_manager
        self.root_dir = root_dir

    def new_instance(self, locales=()):
        """Build an unsaved unit with one empty translation per locale."""
        trans_unit_class = self.storage.model_class_for('trans_unit')
        translation_class = self.storage.model_class_for('translation')

        trans_unit = trans_unit_class()

        for locale in locales:
            trans_unit.add_translation(translation_class(locale=locale))

        return trans_unit

    def create(self, key_name: str, domain_name: str, flush: bool = False):
        """Create a new unit for the given key and domain."""
        trans_unit = self.new_instance()
        trans_unit.key = key_name
        trans_unit.domain = domain_name

        self.storage.stage(trans_unit)

        if flush:
            self.storage.commit()

        return trans_unit

    def add_translation(self, trans_unit, locale: str, content, file=None, flush: bool = False):
        """Add a translation to the unit.

        Existing translations are never overwritten here: if the unit already
        has a translation for ``locale`` nothing happens and None is returned.
        """
        if trans_unit.has_translation(locale):
            return None

        translation_class = self.storage.model_class_for('translation')
        translation = translation_class(locale=locale, content=content)

        if file is not None:
            translation.file = file

        trans_unit.add_translation(translation)
        self.storage.stage(translation)

        if flush:
            self.storage.commit()

        return translation

    def update_translation(self, trans_unit, locale: str, content, flush: bool = False, merge: bool = False):
        """Update the content of an existing translation.

        Args:
            trans_unit: Unit owning the translation
            locale: Locale of the translation to update
            content: New content
            flush: Commit the changes
            merge: Keep manual edits and skip identical content. The old
                translation is replaced by a fresh copy so it looks like a
                new import.

        Returns:
            The updated translation, or None if the unit has no translation
            for ``locale`` or the merge had nothing to do.
        """
        translation = None
        for candidate in trans_unit.translations:
            if candidate.locale == locale:
                translation = candidate
                break

        if translation is None:
            return None

        if merge:
            if translation.modified_manually or translation.content == content:
                return None

            new_translation = translation.clone()

            # The old row must be gone before the copy is inserted (one row per locale)
            trans_unit.remove_translation(translation)
            self.storage.remove(translation)
            self.storage.commit()

            new_translation.content = content
            trans_unit.add_translation(new_translation)
            self.storage.stage(new_translation)
            translation = new_translation

        translation.content = content

        if flush:
            self.storage.commit()

        return translation

    def update_translations_content(self, trans_unit, translations: dict, flush: bool = False):
        """Update the unit from a ``{locale: content}`` mapping entered by hand.

        Blank contents are skipped. A translation whose content actually
        changes, or which did not exist yet, is flagged as modified manually.
        Non-string contents (numbers from JSON) are stored as text.
        """
        for locale, content in translations.items():
            if content is None or not str(content).strip():
                continue
            content = str(content)

            translation = trans_unit.get_translation(locale)
            content_updated = True

            if translation is not None:
                original_content = translation.content
                translation = self.update_translation(trans_unit, locale, content)
                content_updated = translation.content != original_content
            else:
                # New translations go to the file of the unit's other locales
                file = self.get_translation_file(trans_unit, locale)
                translation = self.add_translation(trans_unit, locale, content, file)

            if translation is not None and content_updated:
                translation.modified_manually = True

        if flush:
            self.storage.commit()

    def get_translation_file(self, trans_unit, locale: str):
        """Return the File a new translation in ``locale`` should belong to.

        Uses the first file referenced by the unit's translations and swaps in
        the target locale. None if no translation of the unit has a file.
        """
        file = None
        for translation in trans_unit.translations:
            if translation.file is not None:
                file = translation.file
                break

        if file is None:
            return None

        return self.file_manager.resolve(
            file.domain,
            locale,
            file.extension,
            os.path.join(self.root_dir, file.path),
        )

    def delete(self, trans_unit) -> bool:
        """Delete a unit and its translations. Returns False on failure."""
        try:
            self.storage.remove(trans_unit)
            self.storage.commit()
            return True
        except Exception as e:
            self.storage.rollback()
            logger.warning(f'Could not delete trans unit: {e}')
            return False

    def delete_translation(self, trans_unit, locale: str) -> bool:
        """Delete the unit's translation for ``locale``. Returns False on failure."""
        try:
            translation = trans_unit.get_translation(locale)
            if translation is None:
                logger.debug(f'Trans unit {trans_unit.id} has no {locale} translation')
                return False

            trans_unit.remove_translation(translation)
            self.storage.remove(translation)
            self.storage.commit()
            return True
        except Exception as e:
            self.storage.rollback()
            logger.warning(f'Could not delete {locale} translation: {e}')
            return False
