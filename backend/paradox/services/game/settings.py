from flask import current_app

from paradox import db, hub
from paradox.broadcast import EventType
from paradox.models import Setting
from .transactions import transactional
from .validation import required_text

GAME_TITLE_KEY = 'game_title'


def get_settings():
    return {s.key: s.value for s in Setting.query.order_by(Setting.key).all()}


def update_setting(key, value) -> Setting:
    setting = _store_setting(key, value)
    hub.publish(EventType.SETTINGS_UPDATED, key=setting.key, value=setting.value)
    return setting


@transactional
def _store_setting(key, value) -> Setting:
    key = required_text(key, 'key')
    value = '' if value is None else str(value)
    setting = db.session.get(Setting, key)
    if setting is None:
        setting = Setting(key=key)
        db.session.add(setting)
    setting.value = value
    current_app.logger.info(f"[settings] {key}={value!r}")
    return setting


@transactional
def seed_default_settings() -> None:
    if db.session.get(Setting, GAME_TITLE_KEY) is None:
        db.session.add(Setting(
            key=GAME_TITLE_KEY,
            value=current_app.config.get('DEFAULT_GAME_TITLE', 'DATA PARADOX'),
        ))
