"""
Hub mutations.

Each operation takes the current hub list and returns a new one; the input
list and its records are never modified. Writing the result back is a
separate step (`commit`), so a route always runs "mutate, then commit".
"""

import logging

from scholarly.access import authorize_delete_hub, authorize_elevated
from scholarly.errors import NotFoundError, PermissionDeniedError, UnauthorizedError
from scholarly.models import Hub, Resource, Room

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def find_hub(hubs, hub_id):
    for hub in hubs:
        if hub.id == hub_id:
            return hub
    return None


def _all_ids(hubs):
    hub_ids, room_ids, resource_ids = set(), set(), set()
    for hub in hubs:
        hub_ids.add(hub.id)
        for room in hub.classes:
            room_ids.add(room.id)
            for res in room.resources:
                resource_ids.add(res.id)
    return hub_ids, room_ids, resource_ids


def _unique(build, taken):
    """Call build() until it yields a record whose id is not taken."""
    record = build()
    while record.id in taken:
        record = build()
    return record


def _replace_hub(hubs, updated):
    return [updated if h.id == updated.id else h for h in hubs]


def _require_hub(hubs, hub_id):
    hub = find_hub(hubs, hub_id)
    if hub is None:
        raise NotFoundError(f'Hub {hub_id} not found')
    return hub


def _require_admin(ctx, hub):
    if not authorize_elevated(ctx, hub):
        raise PermissionDeniedError('Staff access required.')


def commit(store, hubs):
    store.save(hubs)
    return hubs


# ---------------------------------------------------------------------------
# Hubs
# ---------------------------------------------------------------------------

def create_hub(hubs, name, student_passphrase, admin_passphrase,
               description=None, logo_url=None):
    taken, _, _ = _all_ids(hubs)
    hub = _unique(lambda: Hub.new(
        name=name,
        student_passphrase=student_passphrase,
        admin_passphrase=admin_passphrase,
        description=description,
        logo_url=logo_url,
    ), taken)
    logger.info('Created hub %s', hub.id)
    return [hub] + list(hubs), hub


def delete_hub(hubs, hub_id, supplied_admin_passphrase, ctx=None):
    hub = find_hub(hubs, hub_id)
    if hub is None:
        return list(hubs)
    if not authorize_delete_hub(hub, supplied_admin_passphrase):
        logger.info('Rejected deletion of hub %s', hub_id)
        raise UnauthorizedError('Unauthorized. Deletion failed.')
    if ctx is not None and ctx.hub_id == hub_id:
        ctx.leave()
    logger.info('Deleted hub %s', hub_id)
    return [h for h in hubs if h.id != hub_id]


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------

def create_room(hubs, ctx, hub_id, name, teacher):
    hub = _require_hub(hubs, hub_id)
    _require_admin(ctx, hub)
    _, taken, _ = _all_ids(hubs)
    room = _unique(lambda: Room.new(name=name, teacher=teacher), taken)
    updated = hub.with_classes([room] + hub.classes)
    logger.info('Created room %s in hub %s', room.id, hub_id)
    return _replace_hub(hubs, updated), room


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

def publish_resource(hubs, ctx, hub_id, room_id, type, title, description,
                     url=None, now=None):
    hub = _require_hub(hubs, hub_id)
    _require_admin(ctx, hub)
    room = hub.find_room(room_id)
    if room is None:
        raise NotFoundError(f'Room {room_id} not found')

    _, _, taken = _all_ids(hubs)
    resource = _unique(lambda: Resource.new(
        type=type, title=title, description=description, url=url, now=now,
    ), taken)

    updated_room = room.with_resources([resource] + room.resources)
    updated = hub.with_classes([updated_room if c.id == room_id else c for c in hub.classes])
    logger.info('Published %s resource %s in room %s', resource.type.value, resource.id, room_id)
    return _replace_hub(hubs, updated), resource


def delete_resource(hubs, ctx, hub_id, room_id, resource_id):
    hub = _require_hub(hubs, hub_id)
    _require_admin(ctx, hub)
    room = hub.find_room(room_id)
    if room is None or room.find_resource(resource_id) is None:
        return list(hubs)

    updated_room = room.with_resources([r for r in room.resources if r.id != resource_id])
    updated = hub.with_classes([updated_room if c.id == room_id else c for c in hub.classes])
    logger.info('Deleted resource %s from room %s', resource_id, room_id)
    return _replace_hub(hubs, updated)
