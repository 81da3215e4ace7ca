from flask import current_app
from sqlalchemy.exc import IntegrityError

from paradox import db
from paradox.models import Team
from .transactions import transactional
from .validation import required_text


def list_teams():
    """All teams, richest first."""
    return Team.query.order_by(Team.balance.desc(), Team.id.asc()).all()


def _find_by_name(name):
    return Team.query.filter_by(name=name).first()


@transactional
def join(name) -> Team:
    """Create a team, or return the existing one with the same name."""
    name = required_text(name, 'name').strip()
    team = _find_by_name(name)
    if team:
        return team
    team = Team(name=name, balance=float(current_app.config.get('STARTING_BALANCE', 2000)))
    db.session.add(team)
    try:
        db.session.flush()
    except IntegrityError:
        # Unique name taken by a writer outside this process; hand back its team
        db.session.rollback()
        current_app.logger.info(f"[join] name={name!r} taken concurrently, returning existing team")
        return Team.query.filter_by(name=name).one()
    current_app.logger.info(f"[join] team={team.id} name={name!r}")
    return team
