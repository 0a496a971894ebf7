import logging
from flask import Flask
from flask_wtf.csrf import CSRFProtect
from config import Config

csrf = CSRFProtect()


def create_app(config_class=Config, store=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    csrf.init_app(app)

    # Hub document store (Firestore, local file or memory)
    from scholarly import store as hub_store
    hub_store.init_app(app, store)

    # Register hub session context processor and before_request
    from scholarly.session import load_hub_session, get_hub_session

    @app.before_request
    def before_request():
        load_hub_session()

    @app.context_processor
    def inject_hub_session():
        return {'hub_session': get_hub_session()}

    # Register blueprints
    from scholarly.routes import main, hubs, api
    app.register_blueprint(main.bp)
    app.register_blueprint(hubs.bp)
    app.register_blueprint(api.bp)
    csrf.exempt(api.bp)

    return app
