from flask import session
from flask_login import UserMixin
from datetime import datetime
import hashlib
import re
from app import db

# Five digits following the first three are hidden before the id is stored.
GOV_ID_MASK_PATTERN = re.compile(r'(?<=\d{3})\d{5}')
GOV_ID_MASK = '*****'


def mask_gov_id(gov_id):
    """Hide the middle digits of a national id, keeping the first three."""
    return GOV_ID_MASK_PATTERN.sub(GOV_ID_MASK, gov_id, count=1)


def gov_id_signature(gov_id):
    """One-way signature of the unmasked national id (SHA-1 hex digest)."""
    return hashlib.sha1(gov_id.encode('ascii')).hexdigest()


class PlatformUser(UserMixin):
    """The Lichess account signed in on the current browser session."""

    def __init__(self, user_id, user_name=None, auth_token=None):
        self.id = user_id
        self.user_name = user_name
        self.auth_token = auth_token

    @classmethod
    def from_session(cls, user_id):
        return cls(user_id, session.get('user_name'), session.get('auth_token'))

    def remember(self):
        session['user_name'] = self.user_name
        session['auth_token'] = self.auth_token

    def __repr__(self):
        return f'<PlatformUser {self.id}>'


class Player(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False)
    user_name = db.Column(db.String(64))
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    birth_year = db.Column(db.Integer, nullable=False)
    gov_id = db.Column(db.String(20), nullable=False)  # masked, e.g. 123*****901
    gov_id_signature = db.Column(db.String(40), nullable=False, index=True)
    banned = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @classmethod
    def find_by_user_id(cls, user_id):
        return cls.query.filter_by(user_id=user_id).order_by(cls.id.asc()).first()

    @classmethod
    def find_by_signature(cls, signature, banned):
        return cls.query.filter_by(gov_id_signature=signature, banned=banned).all()

    @classmethod
    def find_banned(cls):
        return cls.query.filter_by(banned=True).order_by(cls.created_at.asc(), cls.id.asc()).all()

    @classmethod
    def find_active(cls, user_ids, members):
        """
        Non-banned players split by team roster: those whose user id is in
        `user_ids` when `members` is true, those absent from it otherwise.
        """
        condition = cls.user_id.in_(user_ids)
        if not members:
            condition = ~condition
        return cls.query.filter(condition, cls.banned == False).order_by(cls.created_at.asc(), cls.id.asc()).all()  # noqa: E712

    @classmethod
    def create(cls, user, first_name, last_name, birth_year, gov_id, banned=False):
        """Store a verification outcome; the national id is masked first."""
        player = cls(
            user_id=user.id,
            user_name=user.user_name,
            first_name=first_name,
            last_name=last_name,
            birth_year=birth_year,
            gov_id=mask_gov_id(gov_id),
            gov_id_signature=gov_id_signature(gov_id),
            banned=banned,
        )
        db.session.add(player)
        db.session.commit()
        return player

    @classmethod
    def set_banned(cls, user_id, banned):
        """Flip the ban flag on the user's record; returns None when absent."""
        player = cls.find_by_user_id(user_id)
        if player is not None:
            player.banned = banned
            db.session.commit()
        return player

    def __repr__(self):
        return f'<Player {self.user_id}{" banned" if self.banned else ""}>'
