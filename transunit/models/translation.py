"""Translation model: the content of a unit in one locale."""

from datetime import datetime
from sqlalchemy import event
from transunit import db


class Translation(db.Model):
    """One locale's content for a translation unit."""

    __tablename__ = 'translations'

    id = db.Column(db.Integer, primary_key=True)
    trans_unit_id = db.Column(db.Integer, db.ForeignKey('trans_units.id'), nullable=False, index=True)
    locale = db.Column(db.String(10), nullable=False, index=True)
    content = db.Column(db.Text, nullable=True)
    file_id = db.Column(db.Integer, db.ForeignKey('files.id'), nullable=True, index=True)
    modified_manually = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    trans_unit = db.relationship('TransUnit', back_populates='translations')
    file = db.relationship('File')  # No backref: files are managed externally

    __table_args__ = (
        db.UniqueConstraint('trans_unit_id', 'locale', name='trans_unit_locale_idx'),
    )

    def clone(self):
        """Copy the non-identity fields into a new, detached translation."""
        return Translation(
            locale=self.locale,
            content=self.content,
            file=self.file,
            modified_manually=self.modified_manually,
        )

    def is_updated(self):
        """True once the translation was edited after its creation."""
        return (
            self.created_at is not None
            and self.updated_at is not None
            and self.updated_at > self.created_at
        )

    def to_dict(self):
        """Convert translation to dictionary."""
        return {
            'id': self.id,
            'locale': self.locale,
            'content': self.content,
            'file_id': self.file_id,
            'modified_manually': self.modified_manually,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Translation {self.id}: {self.locale}>'


@event.listens_for(Translation, 'before_insert')
def _stamp_new_translation(mapper, connection, target):
    # Both timestamps share one instant so updated_at > created_at only after an edit
    now = datetime.utcnow()
    target.created_at = now
    target.updated_at = now
