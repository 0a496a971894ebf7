from flask import Blueprint, render_template, redirect, url_for, flash, request, jsonify
from scholarly.session import get_hub_session, save_hub_session
from scholarly.store import get_store
from scholarly.forms import HubForm, DeleteHubForm
from scholarly.search import visible_hubs
from scholarly.errors import UnauthorizedError, ValidationError
from scholarly import operations as ops

bp = Blueprint('main', __name__)


@bp.route('/health')
def health():
    return jsonify({'status': 'ok'}), 200


@bp.route('/')
def index():
    ctx = get_hub_session()
    ctx.query = request.args.get('q', '')

    hubs = get_store().load()
    return render_template('index.html',
                           hubs=visible_hubs(hubs, ctx),
                           query=ctx.query,
                           form=HubForm(),
                           delete_form=DeleteHubForm())


@bp.route('/home')
def home():
    ctx = get_hub_session()
    ctx.leave()
    save_hub_session(ctx)
    return redirect(url_for('main.index'))


@bp.route('/hubs', methods=['POST'])
def create_hub():
    form = HubForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'danger')
        return redirect(url_for('main.index'))

    store = get_store()
    try:
        hubs, hub = ops.create_hub(
            store.load(),
            name=form.name.data,
            description=form.description.data,
            logo_url=form.logo_url.data,
            student_passphrase=form.student_passphrase.data,
            admin_passphrase=form.admin_passphrase.data,
        )
    except ValidationError as e:
        flash(str(e), 'danger')
        return redirect(url_for('main.index'))

    ops.commit(store, hubs)
    flash('Hub created.', 'success')
    return redirect(url_for('main.index'))


@bp.route('/hubs/<hub_id>/delete', methods=['POST'])
def delete_hub(hub_id):
    form = DeleteHubForm()
    if not form.validate_on_submit():
        # Cancelled prompt: nothing to do
        return redirect(url_for('main.index'))

    store = get_store()
    ctx = get_hub_session()
    hubs = store.load()
    if ops.find_hub(hubs, hub_id) is None:
        return redirect(url_for('main.index'))

    try:
        hubs = ops.delete_hub(hubs, hub_id, form.admin_passphrase.data, ctx)
    except UnauthorizedError as e:
        flash(str(e), 'danger')
        return redirect(url_for('main.index'))

    ops.commit(store, hubs)
    save_hub_session(ctx)
    flash('Hub deleted.', 'success')
    return redirect(url_for('main.index'))
