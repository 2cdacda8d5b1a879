# charity_backend/app_factory.py
from flask import Flask, jsonify
from flask_cors import CORS
from flask_login import LoginManager
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import MethodNotAllowed, NotFound
from charity_backend.init_db import db
from charity_backend.authentication.views import token_from_header, load_user_from_token
from charity_backend.charity_tracker.models import Charity  # noqa: F401  registers the table
from charity_backend.charity_tracker.views import INSERT_BY_DIALECT
from charity_backend.logging_config import setup_logging

logger = setup_logging()

def create_app(config_class='charity_backend.config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_class)

    backend = make_url(app.config['SQLALCHEMY_DATABASE_URI']).get_backend_name()
    if backend not in INSERT_BY_DIALECT:
        logger.error(f"Unsupported database backend: {backend}")
        raise ValueError(f"DATABASE_URL must point to one of: {', '.join(sorted(INSERT_BY_DIALECT))}")

    db.init_app(app)
    CORS(app, origins=app.config.get('CORS_ORIGINS', '*'))

    login_manager = LoginManager()
    login_manager.init_app(app)

    @login_manager.request_loader
    def load_user(request):
        return load_user_from_token(token_from_header(request.headers.get('Authorization')))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'message': 'You need to login to access this page'}), 403

    @app.errorhandler(NotFound)
    def not_found(e):
        return jsonify({'message': 'Not found'}), 404

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        return jsonify({'message': 'Method not allowed'}), 405

    # Import and register blueprints
    from charity_backend.authentication.routes import auth_bp as auth_blueprint
    app.register_blueprint(auth_blueprint)

    from charity_backend.charity_tracker.routes import charity_tracker_bp as charity_tracker_blueprint
    app.register_blueprint(charity_tracker_blueprint)

    with app.app_context():
        try:
            db.create_all()
        except OperationalError as e:
            logger.error(f"OperationalError during database initialization: {e}")

    return app
