from flask import current_app
from sqlalchemy.exc import IntegrityError

from paradox import db, hub
from paradox.broadcast import EventType
from paradox.errors import ConflictError, InsufficientFundsError, ValidationError
from paradox.models import Round, Submission, Team
from .transactions import transactional
from .validation import finite_number, record_id


def submit(team_id, round_id, predicted_value, bid_amount) -> Submission:
    """Record one prediction and bid for a team in the open round.

    Raises ValidationError, ConflictError or InsufficientFundsError. On
    success every connected viewer gets a SUBMISSION_RECEIVED signal carrying
    only the team id.
    """
    submission = _record_submission(team_id, round_id, predicted_value, bid_amount)
    current_app.logger.info(
        f"[submit] team={submission.team_id} round={submission.round_id} bid={submission.bid_amount}"
    )
    hub.publish(EventType.SUBMISSION_RECEIVED, teamId=submission.team_id)
    return submission


@transactional
def _record_submission(team_id, round_id, predicted_value, bid_amount) -> Submission:
    team_id = record_id(team_id, 'teamId')
    round_id = record_id(round_id, 'roundId')
    predicted = finite_number(predicted_value, 'predictedValue')
    bid = finite_number(bid_amount, 'bidAmount')
    if bid <= 0:
        raise ValidationError('bidAmount must be greater than zero')

    rnd = Round.query.filter_by(id=round_id).with_for_update().first()
    if not rnd:
        raise ValidationError(f'Round {round_id} not found')
    if not rnd.is_open:
        raise ConflictError('This round is no longer accepting submissions')

    team = Team.query.filter_by(id=team_id).with_for_update().first()
    if not team:
        raise ValidationError(f'Team {team_id} not found')

    if Submission.query.filter_by(team_id=team_id, round_id=round_id).first():
        raise ConflictError('Already submitted for this round')
    if bid > team.balance:
        raise InsufficientFundsError(
            f'Insufficient balance: bid {bid:g} exceeds balance {team.balance:g}'
        )

    submission = Submission(
        team_id=team_id,
        round_id=round_id,
        predicted_value=predicted,
        bid_amount=bid,
        score=0.0,
        error_percent=None,
    )
    db.session.add(submission)
    try:
        db.session.flush()
    except IntegrityError as exc:
        # Unique (team_id, round_id) caught a writer outside this process
        raise ConflictError('Already submitted for this round') from exc
    return submission


def list_for_round(round_id):
    round_id = record_id(round_id, 'roundId')
    return (
        Submission.query.filter_by(round_id=round_id)
        .order_by(Submission.id.asc())
        .all()
    )


def find_for_team(team_id, round_id):
    return Submission.query.filter_by(
        team_id=record_id(team_id, 'teamId'),
        round_id=record_id(round_id, 'roundId'),
    ).first()
