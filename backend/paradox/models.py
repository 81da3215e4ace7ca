import enum

from paradox import db


class RoundStatus(enum.Enum):
    OPEN = 'open'
    REVEALED = 'revealed'


class Team(db.Model):
    __tablename__ = 'team'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), unique=True, nullable=False, index=True)
    balance = db.Column(db.Float, nullable=False, default=2000.0)
    submissions = db.relationship('Submission', back_populates='team')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'balance': self.balance,
        }


class Round(db.Model):
    __tablename__ = 'round'
    id = db.Column(db.Integer, primary_key=True)
    theme = db.Column(db.Text, nullable=False)
    actual_value = db.Column(db.Float, nullable=True)
    status = db.Column(
        db.Enum(RoundStatus, native_enum=False, length=16,
                values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RoundStatus.OPEN,
    )
    submissions = db.relationship('Submission', back_populates='round', lazy='dynamic')

    @property
    def is_open(self):
        return self.status == RoundStatus.OPEN

    def to_dict(self):
        return {
            'id': self.id,
            'theme': self.theme,
            'actual_value': self.actual_value,
            'status': self.status.value if self.status else None,
        }


class Submission(db.Model):
    __tablename__ = 'submission'
    __table_args__ = (
        db.UniqueConstraint('team_id', 'round_id', name='uq_submission_team_round'),
    )
    id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=False, index=True)
    round_id = db.Column(db.Integer, db.ForeignKey('round.id'), nullable=False, index=True)
    predicted_value = db.Column(db.Float, nullable=False)
    bid_amount = db.Column(db.Float, nullable=False)
    score = db.Column(db.Float, nullable=False, default=0.0)
    error_percent = db.Column(db.Float, nullable=True)
    team = db.relationship('Team', back_populates='submissions')
    round = db.relationship('Round', back_populates='submissions')

    def to_dict(self, include_team_name=False):
        data = {
            'id': self.id,
            'team_id': self.team_id,
            'round_id': self.round_id,
            'predicted_value': self.predicted_value,
            'bid_amount': self.bid_amount,
            'score': self.score,
            'error_percent': self.error_percent,
        }
        if include_team_name:
            data['team_name'] = self.team.name if self.team else None
        return data


class Setting(db.Model):
    __tablename__ = 'setting'
    key = db.Column(db.String(128), primary_key=True)
    value = db.Column(db.Text, nullable=True)
