"""File model for the on-disk resources backing translations."""

from transunit import db


class File(db.Model):
    """A translation file, e.g. ``translations/messages.en.yml``.

    Files are managed outside of this package: translations only keep a
    reference to the file they were imported from.
    """

    __tablename__ = 'files'

    id = db.Column(db.Integer, primary_key=True)
    domain = db.Column(db.String(255), nullable=False, index=True)
    locale = db.Column(db.String(10), nullable=False)
    extension = db.Column(db.String(10), nullable=False)
    path = db.Column(db.String(255), nullable=False)  # Directory, relative to the root dir
    hash = db.Column(db.String(64), unique=True, nullable=False)

    @property
    def name(self):
        return f'{self.domain}.{self.locale}.{self.extension}'

    def to_dict(self):
        """Convert file to dictionary."""
        return {
            'id': self.id,
            'domain': self.domain,
            'locale': self.locale,
            'extension': self.extension,
            'path': self.path,
            'name': self.name,
        }

    def __repr__(self):
        return f'<File {self.id}: {self.path}/{self.name}>'
