from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import flash, g, redirect, session, url_for

from scholarly.models import Role
from scholarly.search import TAB_ALL
from scholarly.access import authorize_elevated

SESSION_KEY = 'hub_session'


@dataclass
class HubSession:
    """Which hub is entered, under what role, and the current search state.

    Never persisted with the hubs; it lives in the signed session cookie and
    is rebuilt once per request.
    """
    hub_id: Optional[str] = None
    role: Role = Role.NONE
    query: str = ''
    tab: str = TAB_ALL

    @property
    def is_entered(self):
        return self.hub_id is not None and self.role != Role.NONE

    @property
    def is_admin(self):
        return self.is_entered and self.role == Role.ADMIN

    @property
    def is_student(self):
        return self.is_entered and self.role == Role.STUDENT

    @property
    def role_label(self):
        return 'Staff Profile' if self.role == Role.ADMIN else 'Student Access'

    def enter(self, hub_id, role):
        self.hub_id = hub_id
        self.role = Role(role)
        self.query = ''
        self.tab = TAB_ALL

    def leave(self):
        self.hub_id = None
        self.role = Role.NONE
        self.query = ''
        self.tab = TAB_ALL

    def to_dict(self):
        return {'hub_id': self.hub_id, 'role': self.role.value}

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        try:
            role = Role(data.get('role', Role.NONE.value))
        except ValueError:
            role = Role.NONE
        hub_id = data.get('hub_id')
        if not hub_id or role == Role.NONE:
            return cls()
        return cls(hub_id=hub_id, role=role)


def load_hub_session():
    """Load the hub session into g before each request."""
    if hasattr(g, '_hub_session'):
        return
    g._hub_session = HubSession.from_dict(session.get(SESSION_KEY))


def get_hub_session():
    if not hasattr(g, '_hub_session'):
        load_hub_session()
    return g._hub_session


def save_hub_session(ctx):
    g._hub_session = ctx
    if ctx.is_entered:
        session[SESSION_KEY] = ctx.to_dict()
    else:
        session.pop(SESSION_KEY, None)


def hub_required(f):
    @wraps(f)
    def decorated(hub_id, *args, **kwargs):
        ctx = get_hub_session()
        if not ctx.is_entered or ctx.hub_id != hub_id:
            flash('Enter the hub with its access code first.', 'info')
            return redirect(url_for('hubs.join', hub_id=hub_id))
        g.hub_session = ctx
        return f(hub_id, *args, **kwargs)
    return decorated


def admin_required(f):
    @wraps(f)
    def decorated(hub_id, *args, **kwargs):
        ctx = get_hub_session()
        if not ctx.is_entered or ctx.hub_id != hub_id:
            flash('Enter the hub with its access code first.', 'info')
            return redirect(url_for('hubs.join', hub_id=hub_id))
        if not authorize_elevated(ctx):
            flash('Staff access required.', 'danger')
            return redirect(url_for('hubs.view', hub_id=hub_id))
        g.hub_session = ctx
        return f(hub_id, *args, **kwargs)
    return decorated
