"""Read queries over translation units and their translations.

The grid listing works in two steps: first select one page of matching unit
ids, then load those units with their translations. Filters follow the grid
conventions: ``_search`` enables the domain/key filters, ``sidx``/``sord``
choose the sort, and any managed locale can be used as a content filter.
"""

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import selectinload

from transunit.models import TransUnit, Translation

# Only these unit attributes may be used to sort a listing
SORTABLE_COLUMNS = {
    'id': TransUnit.id,
    'domain': TransUnit.domain,
    'key': TransUnit.key,
    'created_at': TransUnit.created_at,
    'updated_at': TransUnit.updated_at,
}

SORT_DIRECTIONS = ('ASC', 'DESC')


class TransUnitRepository:
    """Query translation units through a SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def get_all_domains_by_locale(self) -> list[tuple[str, str]]:
        """Return every (locale, domain) pair that has at least one translation."""
        rows = self.session.query(
            Translation.locale,
            TransUnit.domain
        ).select_from(TransUnit).join(
            TransUnit.translations
        ).group_by(
            Translation.locale,
            TransUnit.domain
        ).order_by(Translation.locale, TransUnit.domain).all()

        return [(locale, domain) for locale, domain in rows]

    def get_all_by_locale_and_domain(self, locale: str, domain: str) -> list[TransUnit]:
        """Return the units of ``domain`` translated in ``locale``.

        Each unit comes with all of its translations, not only ``locale``.
        """
        return self.session.query(TransUnit).options(
            selectinload(TransUnit.translations)
        ).filter(
            TransUnit.domain == domain,
            TransUnit.translations.any(Translation.locale == locale)
        ).order_by(TransUnit.id).all()

    def get_all_domains(self) -> list[str]:
        """Return the distinct domains, in ascending order."""
        rows = self.session.query(TransUnit.domain).distinct().order_by(TransUnit.domain.asc()).all()
        return [domain for (domain,) in rows]

    def get_trans_unit_list(self, locales=None, rows: int = 20, page: int = 1, filters: dict | None = None) -> list[dict]:
        """Return one page of units with their translations.

        Args:
            locales: Locales to include (and to filter on), None for all
            rows: Page size, at least 1
            page: 1-based page number
            filters: Grid filters (``_search``, ``domain``, ``key``, ``sidx``,
                ``sord`` and ``<locale>`` content filters)

        Returns:
            List of unit dicts, each holding only the translations in
            ``locales``.

        Raises:
            ValueError: On an invalid page, page size or sort option
        """
        if rows < 1 or page < 1:
            raise ValueError('rows and page must be positive integers')

        order_by = self._get_order_by(filters)

        builder = self.session.query(TransUnit.id)
        builder = self._add_trans_unit_filters(builder, filters)
        builder = self._add_translation_filter(builder, locales, filters)

        ids = [
            unit_id for (unit_id,) in builder.order_by(
                order_by, TransUnit.id
            ).offset(rows * (page - 1)).limit(rows).all()
        ]

        if not ids:
            return []

        trans_units = self.session.query(TransUnit).options(
            selectinload(TransUnit.translations)
        ).filter(
            TransUnit.id.in_(ids)
        ).order_by(order_by, TransUnit.id).all()

        return [trans_unit.to_dict(locales=locales) for trans_unit in trans_units]

    def count(self, locales=None, filters: dict | None = None) -> int:
        """Count the units matching the same filters as the listing."""
        builder = self.session.query(func.count(distinct(TransUnit.id)))
        builder = self._add_trans_unit_filters(builder, filters)
        builder = self._add_translation_filter(builder, locales, filters)

        return builder.scalar() or 0

    def count_by_domains(self) -> list[tuple[str, int]]:
        """Return the number of units per domain."""
        rows = self.session.query(
            TransUnit.domain,
            func.count(distinct(TransUnit.id))
        ).group_by(TransUnit.domain).order_by(TransUnit.domain).all()

        return [(domain, number) for domain, number in rows]

    def get_translations_for_file(self, file, only_updated: bool) -> dict[str, str]:
        """Return ``{key: content}`` for all translations stored in ``file``.

        With ``only_updated`` only translations edited after their creation
        are returned.
        """
        query = self.session.query(
            TransUnit.key,
            Translation.content
        ).select_from(TransUnit).join(
            TransUnit.translations
        ).filter(
            Translation.file_id == file.id
        ).order_by(Translation.id.asc())

        if only_updated:
            query = query.filter(Translation.updated_at > Translation.created_at)

        return {key: content for key, content in query.all()}

    def _get_order_by(self, filters):
        filters = filters or {}
        column_name = filters.get('sidx') or 'id'
        direction = str(filters.get('sord') or 'ASC').upper()

        if column_name not in SORTABLE_COLUMNS:
            raise ValueError(f'Cannot sort on column: {column_name}')
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f'Invalid sort direction: {direction}')

        column = SORTABLE_COLUMNS[column_name]
        return column.desc() if direction == 'DESC' else column.asc()

    def _add_trans_unit_filters(self, builder, filters):
        """Apply the domain/key filters, only when ``_search`` is set."""
        if filters and filters.get('_search'):
            if filters.get('domain'):
                builder = builder.filter(TransUnit.domain.contains(filters['domain'], autoescape=True))

            if filters.get('key'):
                builder = builder.filter(TransUnit.key.contains(filters['key'], autoescape=True))

        return builder

    def _add_translation_filter(self, builder, locales, filters):
        """Restrict to units translated in ``locales``, honouring content filters.

        Every locale with a content filter must match. The candidate ids stay
        in the database as a subquery, so when no unit matches the result is
        empty.
        """
        if locales is None:
            return builder

        filters = filters or {}

        ids_query = select(Translation.trans_unit_id).where(
            Translation.locale.in_(locales)
        )

        for locale in locales:
            if filters.get(locale):
                matching = select(Translation.trans_unit_id).where(
                    Translation.locale == locale,
                    Translation.content.contains(filters[locale], autoescape=True)
                )
                ids_query = ids_query.where(Translation.trans_unit_id.in_(matching))

        return builder.filter(TransUnit.id.in_(ids_query))
