"""Team balance ledger.

Balances change in exactly two places: team creation (starting balance) and
round settlement through :func:`settle`. ``settle`` must run inside the
reveal transaction; it never commits.
"""
import logging

from sqlalchemy import update

from paradox import db
from paradox.models import Team

logger = logging.getLogger(__name__)


def settle(team_id: int, bid_amount: float, final_score: float) -> None:
    """Apply ``balance = balance - bid + score`` as one UPDATE statement."""
    result = db.session.execute(
        update(Team)
        .where(Team.id == team_id)
        .values(balance=Team.balance - bid_amount + final_score)
    )
    if result.rowcount != 1:
        logger.warning(f"[settle] team={team_id} not found, balance delta {final_score - bid_amount} dropped")
