"""Turn grid query-string arguments into repository filters."""

TRUE_VALUES = ('true', '1', 'yes', 'on')


def parse_grid_filters(args, locales) -> dict:
    """Build the filters dict expected by ``TransUnitRepository``.

    Query strings only carry strings, so ``_search`` is converted to a bool
    here. Only managed locales are accepted as content filters.
    """
    filters = {
        '_search': str(args.get('_search', '')).lower() in TRUE_VALUES,
        'sidx': args.get('sidx') or 'id',
        'sord': (args.get('sord') or 'ASC').upper(),
    }

    for name in ('domain', 'key'):
        if args.get(name):
            filters[name] = args.get(name)

    for locale in locales:
        if args.get(locale):
            filters[locale] = args.get(locale)

    return filters
