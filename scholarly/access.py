"""
Passphrase checks for hubs.

Every hub carries two plaintext shared secrets. Matching is exact string
equality, admin phrase first, so a phrase equal to both grants ADMIN.
"""

import logging

from scholarly.models import Role

logger = logging.getLogger(__name__)


def authenticate(passphrase, hub):
    if passphrase == hub.admin_passphrase:
        return Role.ADMIN
    if passphrase == hub.student_passphrase:
        return Role.STUDENT
    return Role.NONE


def enter_hub(ctx, passphrase, hub):
    """Authenticate and, on success, enter the hub in the given session.

    A failed attempt leaves the session untouched.
    """
    role = authenticate(passphrase, hub)
    if role == Role.NONE:
        logger.info('Rejected access code for hub %s', hub.id)
        return role
    ctx.enter(hub.id, role)
    logger.info('Entered hub %s as %s', hub.id, role.value)
    return role


def authorize_delete_hub(hub, supplied_admin_passphrase):
    # Re-authentication: the current session role plays no part here
    return supplied_admin_passphrase == hub.admin_passphrase


def authorize_elevated(ctx, hub=None):
    if not ctx.is_admin:
        return False
    if hub is not None and ctx.hub_id != hub.id:
        return False
    return True
