"""Round lifecycle: open -> revealed.

A round is created open by :func:`start_round` and moves to revealed either
through :func:`reveal`, which settles every submission, or by being
force-closed when the next round starts. Force-closing does not score or
settle anything; those submissions keep score 0 and no error percent.
"""
from flask import current_app

from paradox import db, hub
from paradox.broadcast import EventType
from paradox.errors import ConflictError, ValidationError
from paradox.models import Round, RoundStatus, Submission, Team
from . import ledger
from .scoring import score_prediction
from .transactions import transactional
from .validation import finite_number, record_id, required_text


def current_round():
    """The most recently created round, or None."""
    return Round.query.order_by(Round.id.desc()).first()


def start_round(theme) -> Round:
    rnd = _open_round(theme)
    current_app.logger.info(f"[round-start] round={rnd.id} theme={rnd.theme!r}")
    hub.publish(
        EventType.ROUND_STARTED,
        round={'id': rnd.id, 'theme': rnd.theme, 'status': rnd.status.value},
    )
    return rnd


@transactional
def _open_round(theme) -> Round:
    theme = required_text(theme, 'theme')
    stale = (
        Round.query.filter(Round.status != RoundStatus.REVEALED)
        .with_for_update()
        .all()
    )
    for previous in stale:
        unsettled = previous.submissions.count()
        current_app.logger.warning(
            f"[round-start] force-closing round={previous.id} without settlement unsettled_submissions={unsettled}"
        )
        previous.status = RoundStatus.REVEALED
    rnd = Round(theme=theme, status=RoundStatus.OPEN, actual_value=None)
    db.session.add(rnd)
    db.session.flush()
    return rnd


def reveal(round_id, actual_value) -> Round:
    """Reveal the true value and settle the round exactly once.

    Scores every submission, writes score and error percent, and moves each
    team's balance by ``score - bid``, all in one transaction. A second call
    for the same round raises ConflictError and changes nothing.
    """
    rnd, settled = _settle_round(round_id, actual_value)
    current_app.logger.info(
        f"[reveal] round={rnd.id} actual={rnd.actual_value} settled_submissions={settled}"
    )
    hub.publish(EventType.ROUND_REVEALED, roundId=rnd.id, actualValue=rnd.actual_value)
    return rnd


@transactional
def _settle_round(round_id, actual_value):
    round_id = record_id(round_id, 'roundId')
    actual = finite_number(actual_value, 'actualValue')

    rnd = Round.query.filter_by(id=round_id).with_for_update().first()
    if not rnd:
        raise ValidationError(f'Round {round_id} not found')
    if not rnd.is_open:
        raise ConflictError(f'Round {round_id} has already been revealed')

    rnd.actual_value = actual
    rnd.status = RoundStatus.REVEALED

    submissions = (
        Submission.query.filter_by(round_id=round_id)
        .order_by(Submission.id.asc())
        .with_for_update()
        .all()
    )
    for sub in submissions:
        err_percent, final_score = score_prediction(sub.predicted_value, actual, sub.bid_amount)
        sub.error_percent = err_percent
        sub.score = final_score
        ledger.settle(sub.team_id, sub.bid_amount, final_score)
    return rnd, len(submissions)


def reset() -> None:
    """Delete every team, round and submission; settings are kept."""
    counts = _clear_game()
    current_app.logger.info(f"[reset] cleared {counts}")
    hub.publish(EventType.GAME_RESET)


@transactional
def _clear_game():
    counts = {}
    # Children first so foreign keys never dangle mid-transaction
    for model in (Submission, Round, Team):
        counts[model.__tablename__] = db.session.query(model).delete(synchronize_session=False)
    return counts
