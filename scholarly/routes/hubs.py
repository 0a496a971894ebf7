from flask import Blueprint, render_template, redirect, url_for, flash, request
from scholarly.session import (
    get_hub_session, save_hub_session, hub_required, admin_required,
)
from scholarly.store import get_store
from scholarly.forms import JoinHubForm, RoomForm, ResourceForm, DeleteResourceForm
from scholarly.search import TABS, parse_tab, visible_rooms
from scholarly.access import enter_hub
from scholarly.models import Role
from scholarly.errors import NotFoundError, PermissionDeniedError, ValidationError
from scholarly import operations as ops

bp = Blueprint('hubs', __name__, url_prefix='/hubs')


def _load_hub(hub_id):
    store = get_store()
    hubs = store.load()
    hub = ops.find_hub(hubs, hub_id)
    if hub is None:
        flash('That hub no longer exists.', 'danger')
    return store, hubs, hub


@bp.route('/<hub_id>/join', methods=['GET', 'POST'])
def join(hub_id):
    _, _, hub = _load_hub(hub_id)
    if hub is None:
        ctx = get_hub_session()
        if ctx.hub_id == hub_id:
            ctx.leave()
            save_hub_session(ctx)
        return redirect(url_for('main.index'))

    form = JoinHubForm()
    if form.validate_on_submit():
        ctx = get_hub_session()
        role = enter_hub(ctx, form.passphrase.data, hub)
        if role != Role.NONE:
            save_hub_session(ctx)
            return redirect(url_for('hubs.view', hub_id=hub_id))
        flash('Invalid access code. Please try again.', 'danger')
    return render_template('hubs/join.html', hub=hub, form=form)


@bp.route('/<hub_id>')
@hub_required
def view(hub_id):
    _, _, hub = _load_hub(hub_id)
    ctx = get_hub_session()
    if hub is None:
        ctx.leave()
        save_hub_session(ctx)
        return redirect(url_for('main.index'))

    ctx.query = request.args.get('q', '')
    ctx.tab = parse_tab(request.args.get('tab'))

    return render_template('hubs/view.html',
                           hub=hub,
                           rooms=visible_rooms(hub, ctx),
                           ctx=ctx,
                           tabs=TABS,
                           room_form=RoomForm(),
                           resource_form=ResourceForm(),
                           delete_form=DeleteResourceForm())


@bp.route('/<hub_id>/rooms', methods=['POST'])
@admin_required
def create_room(hub_id):
    form = RoomForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'danger')
        return redirect(url_for('hubs.view', hub_id=hub_id))

    store, hubs, hub = _load_hub(hub_id)
    if hub is None:
        return redirect(url_for('main.index'))

    try:
        hubs, room = ops.create_room(hubs, get_hub_session(), hub_id,
                                     name=form.name.data, teacher=form.teacher.data)
    except (ValidationError, PermissionDeniedError) as e:
        flash(str(e), 'danger')
        return redirect(url_for('hubs.view', hub_id=hub_id))

    ops.commit(store, hubs)
    flash('Room created.', 'success')
    return redirect(url_for('hubs.view', hub_id=hub_id))


@bp.route('/<hub_id>/rooms/<room_id>/resources', methods=['POST'])
@admin_required
def publish_resource(hub_id, room_id):
    form = ResourceForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'danger')
        return redirect(url_for('hubs.view', hub_id=hub_id))

    store, hubs, hub = _load_hub(hub_id)
    if hub is None:
        return redirect(url_for('main.index'))

    try:
        hubs, resource = ops.publish_resource(
            hubs, get_hub_session(), hub_id, room_id,
            type=form.type.data,
            title=form.title.data,
            description=form.description.data,
            url=form.url.data,
        )
    except (ValidationError, PermissionDeniedError, NotFoundError) as e:
        flash(str(e), 'danger')
        return redirect(url_for('hubs.view', hub_id=hub_id))

    ops.commit(store, hubs)
    flash('Resource published.', 'success')
    return redirect(url_for('hubs.view', hub_id=hub_id))


@bp.route('/<hub_id>/rooms/<room_id>/resources/<resource_id>/delete', methods=['POST'])
@admin_required
def delete_resource(hub_id, room_id, resource_id):
    form = DeleteResourceForm()
    if not form.validate_on_submit():
        return redirect(url_for('hubs.view', hub_id=hub_id))

    store, hubs, hub = _load_hub(hub_id)
    if hub is None:
        return redirect(url_for('main.index'))

    try:
        hubs = ops.delete_resource(hubs, get_hub_session(), hub_id, room_id, resource_id)
    except PermissionDeniedError as e:
        flash(str(e), 'danger')
        return redirect(url_for('hubs.view', hub_id=hub_id))

    ops.commit(store, hubs)
    return redirect(url_for('hubs.view', hub_id=hub_id))
