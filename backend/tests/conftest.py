import os
import sys
import pytest

# Ensure the backend root (containing the `paradox` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from paradox import create_app, db, socketio

ADMIN_PASSWORD = 'test-operator-secret'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ADMIN_PASSWORD = ADMIN_PASSWORD
    ADMIN_HEADER = 'X-Admin-Password'
    STARTING_BALANCE = 2000.0
    DEFAULT_GAME_TITLE = 'DATA PARADOX'
    AUTO_CREATE_TABLES = True
    # Deliver broadcast events inline so tests can assert on them
    BROADCAST_ASYNC = False
    CORS_ORIGINS = ['http://localhost:5173']


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def admin_headers():
    return {'X-Admin-Password': ADMIN_PASSWORD}


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def join(client):
    def _join(name):
        res = client.post('/api/teams/join', json={'name': name})
        assert res.status_code == 200
        return res.get_json()
    return _join


@pytest.fixture()
def start_round(client, admin_headers):
    def _start(theme='Population of Lagos in millions'):
        res = client.post('/api/admin/rounds', json={'theme': theme}, headers=admin_headers)
        assert res.status_code == 200
        return res.get_json()
    return _start
