from flask import Blueprint, current_app, jsonify, request

from paradox.auth import admin_required, check_admin_password
from paradox.errors import AuthError
from paradox.services.game import rounds, settings, submissions

admin = Blueprint('admin', __name__)


@admin.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    if not check_admin_password(data.get('password')):
        current_app.logger.warning('[auth] failed admin login')
        raise AuthError('Incorrect password')
    return jsonify({'success': True})


@admin.route('/settings', methods=['POST'])
@admin_required
def update_setting():
    data = request.get_json(silent=True) or {}
    settings.update_setting(data.get('key'), data.get('value'))
    return jsonify({'success': True})


@admin.route('/rounds', methods=['POST'])
@admin_required
def start_round():
    data = request.get_json(silent=True) or {}
    rnd = rounds.start_round(data.get('theme'))
    return jsonify({'id': rnd.id, 'theme': rnd.theme})


@admin.route('/rounds/reveal', methods=['POST'])
@admin_required
def reveal_round():
    data = request.get_json(silent=True) or {}
    rounds.reveal(data.get('roundId'), data.get('actualValue'))
    return jsonify({'success': True})


@admin.route('/submissions/<int:round_id>', methods=['GET'])
@admin_required
def list_submissions(round_id):
    subs = submissions.list_for_round(round_id)
    return jsonify([s.to_dict(include_team_name=True) for s in subs])


@admin.route('/reset', methods=['POST'])
@admin_required
def reset_game():
    current_app.logger.info('[reset] admin requested game reset')
    rounds.reset()
    return jsonify({'success': True})
