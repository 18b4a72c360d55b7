"""Translation unit model: one (domain, key) pair and its translations."""

from datetime import datetime
from transunit import db


class TransUnit(db.Model):
    """A translatable string, identified by its domain and key."""

    __tablename__ = 'trans_units'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(255), nullable=False)
    domain = db.Column(db.String(255), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # The unit owns its translations; deleting it deletes them
    translations = db.relationship(
        'Translation',
        back_populates='trans_unit',
        cascade='all, delete-orphan',
        order_by='Translation.id',
    )

    __table_args__ = (
        db.UniqueConstraint('key', 'domain', name='key_domain_idx'),
    )

    def has_translation(self, locale):
        """Check if the unit already has a translation for the given locale."""
        return self.get_translation(locale) is not None

    def get_translation(self, locale):
        """Return the translation for the given locale, or None."""
        for translation in self.translations:
            if translation.locale == locale:
                return translation
        return None

    def add_translation(self, translation):
        """Attach a translation to this unit."""
        self.translations.append(translation)

    def remove_translation(self, translation):
        """Detach a translation from this unit."""
        self.translations.remove(translation)

    def get_locales(self):
        return [translation.locale for translation in self.translations]

    def to_dict(self, locales=None):
        """Convert unit to dictionary.

        When ``locales`` is given only translations in those locales are
        included.
        """
        return {
            'id': self.id,
            'key': self.key,
            'domain': self.domain,
            'translations': [
                translation.to_dict()
                for translation in self.translations
                if locales is None or translation.locale in locales
            ],
        }

    def __repr__(self):
        return f'<TransUnit {self.id}: {self.domain}/{self.key}>'
