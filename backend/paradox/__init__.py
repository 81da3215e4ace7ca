from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
from sqlalchemy.exc import SQLAlchemyError
import click
from config import Config
from paradox.broadcast import BroadcastHub
from paradox.errors import ParadoxError, PersistenceError

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)
hub = BroadcastHub()

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)
    hub.init_app(flask_app, socketio)

    from paradox.main import main
    flask_app.register_blueprint(main)

    from paradox.api.public import public
    flask_app.register_blueprint(public, url_prefix='/api')

    from paradox.api.admin import admin
    flask_app.register_blueprint(admin, url_prefix='/api/admin')

    from paradox.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @flask_app.errorhandler(ParadoxError)
    def handle_domain_error(exc):
        return jsonify({'error': exc.message}), exc.status_code

    @flask_app.errorhandler(SQLAlchemyError)
    def handle_store_error(exc):
        db.session.rollback()
        flask_app.logger.error(f"[store] unhandled database error: {exc}")
        err = PersistenceError()
        return jsonify({'error': err.message}), err.status_code

    if flask_app.config.get('AUTO_CREATE_TABLES'):
        from paradox.services.game.settings import seed_default_settings
        with flask_app.app_context():
            db.create_all()
            seed_default_settings()

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from paradox.services.game.settings import seed_default_settings
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            seed_default_settings()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
