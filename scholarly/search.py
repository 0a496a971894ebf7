from scholarly.models import ResourceType

TAB_ALL = 'ALL'

TABS = [
    (TAB_ALL, 'All'),
    (ResourceType.ANNOUNCEMENT.value, 'Announcements'),
    (ResourceType.TIMETABLE.value, 'Timetables'),
    (ResourceType.VIDEO.value, 'Lessons'),
    (ResourceType.DOCUMENT.value, 'Classes'),
]


def parse_tab(raw):
    """Map a tab query argument to ALL or a resource type value."""
    if not raw or raw == TAB_ALL:
        return TAB_ALL
    try:
        return ResourceType(raw).value
    except ValueError:
        return TAB_ALL


def _contains(text, lower_query):
    return lower_query in (text or '').lower()


def filter_hubs(hubs, query=''):
    """Hubs whose name or description contains the query, case-insensitive."""
    if not query:
        return list(hubs)
    q = query.lower()
    return [h for h in hubs if _contains(h.name, q) or _contains(h.description, q)]


def filter_rooms(hub, query='', tab=TAB_ALL):
    """Rooms of a hub narrowed to the resources matching query and tab.

    Rooms left without resources are dropped only when a query is given, so
    an empty search still lists empty rooms. The stored rooms are not touched.
    """
    q = (query or '').lower()
    tab = parse_tab(tab)

    result = []
    for room in hub.classes:
        room_matches = _contains(room.name, q)
        kept = [
            res for res in room.resources
            if (not q or room_matches or _contains(res.title, q) or _contains(res.description, q))
            and (tab == TAB_ALL or res.type.value == tab)
        ]
        if kept or not query:
            result.append(room.with_resources(kept))
    return result


def visible_hubs(hubs, ctx):
    return filter_hubs(hubs, ctx.query)


def visible_rooms(hub, ctx):
    return filter_rooms(hub, ctx.query, ctx.tab)
