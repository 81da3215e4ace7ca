import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///data_paradox.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Shared operator secret, sent by admin clients in ADMIN_HEADER
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'
    ADMIN_HEADER = 'X-Admin-Password'
    STARTING_BALANCE = float(os.environ.get('STARTING_BALANCE', '2000'))
    DEFAULT_GAME_TITLE = os.environ.get('DEFAULT_GAME_TITLE') or 'DATA PARADOX'
    # Create missing tables and seed default settings on start-up
    AUTO_CREATE_TABLES = os.environ.get('AUTO_CREATE_TABLES', '1') != '0'
    # Fan out broadcast events from a background task instead of the request thread
    BROADCAST_ASYNC = os.environ.get('BROADCAST_ASYNC', '1') != '0'
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000',
        ).split(',') if o.strip()
    ]
