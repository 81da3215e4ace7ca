from flask import Blueprint, jsonify, request

from paradox.services.game import rounds, settings, submissions, teams

public = Blueprint('public', __name__)


@public.route('/settings', methods=['GET'])
def get_settings():
    return jsonify(settings.get_settings())


@public.route('/teams', methods=['GET'])
def list_teams():
    return jsonify([t.to_dict() for t in teams.list_teams()])


@public.route('/teams/join', methods=['POST'])
def join_team():
    data = request.get_json(silent=True) or {}
    team = teams.join(data.get('name'))
    return jsonify(team.to_dict())


@public.route('/teams/<int:team_id>/submissions/<int:round_id>', methods=['GET'])
def get_own_submission(team_id, round_id):
    submission = submissions.find_for_team(team_id, round_id)
    return jsonify(submission.to_dict() if submission else None)


@public.route('/rounds/current', methods=['GET'])
def get_current_round():
    rnd = rounds.current_round()
    return jsonify(rnd.to_dict() if rnd else None)


@public.route('/submissions', methods=['POST'])
def submit_prediction():
    data = request.get_json(silent=True) or {}
    submissions.submit(
        data.get('teamId'),
        data.get('roundId'),
        data.get('predictedValue'),
        data.get('bidAmount'),
    )
    return jsonify({'success': True})
