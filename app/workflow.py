"""
Verification workflow for a browser session.

The session's position in the flow is derived from the signed-in account and
its stored player record, then the handlers branch on it.
"""

import enum
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime

from flask import current_app

from app import lichess, gov_id
from app.models import Player, gov_id_signature

# Youngest accepted player age, used for the birth year hint on the form.
MIN_AGE_HINT = 7

DIGITS = re.compile(r'[0-9]+', re.ASCII)


class VerificationState(enum.Enum):
    ANONYMOUS = 'anonymous'
    AUTHENTICATED = 'authenticated'
    VERIFIED = 'verified'
    BANNED = 'banned'


class Outcome(enum.Enum):
    """Where a verification attempt leaves the user."""

    RETRY = 'retry'
    SUCCESS = 'success'
    BANNED = 'banned'
    ERROR = 'error'


@dataclass
class Submission:
    national_id: str
    first_name: str
    last_name: str
    birth_year: int

    @classmethod
    def from_form(cls, form):
        """Build a submission from the posted form, or None if incomplete."""
        values = [(form.get(key) or '').strip() for key in ('id', 'name', 'surname', 'year')]
        if not all(values):
            return None
        national_id, first_name, last_name, year = values
        if not DIGITS.fullmatch(national_id) or not DIGITS.fullmatch(year):
            return None
        # Leading zeros are not part of the id; the registry sees it as a number
        return cls(str(int(national_id)), first_name, last_name, int(year))


def default_birth_year():
    return datetime.now().year - MIN_AGE_HINT


def resolve_state(user):
    if not user.is_authenticated:
        return VerificationState.ANONYMOUS, None
    player = Player.find_by_user_id(user.id)
    if player is None:
        return VerificationState.AUTHENTICATED, None
    if player.banned:
        return VerificationState.BANNED, player
    return VerificationState.VERIFIED, player


def rejoin(user):
    """A verified account that left the team is let back in."""
    return Outcome.SUCCESS if lichess.join_team(user.auth_token) else Outcome.ERROR


def verify(user, submission):
    """
    Check the submitted identity and act on it.

    A ban on the same real identity follows the person to any new account;
    otherwise a valid identity joins the team and is recorded.
    """
    valid = gov_id.verify(submission.national_id, submission.first_name,
                          submission.last_name, submission.birth_year)
    if not valid:
        current_app.logger.info('Identity check rejected for %s', user.id)
        return Outcome.RETRY

    signature = gov_id_signature(submission.national_id)
    banned_players = Player.find_by_signature(signature, banned=True)

    if banned_players:
        if not any(p.user_id == user.id for p in banned_players):
            Player.create(user, submission.first_name, submission.last_name,
                          submission.birth_year, submission.national_id, banned=True)
            current_app.logger.warning('Ban carried over to new account %s', user.id)
        return Outcome.BANNED

    if not lichess.join_team(user.auth_token):
        return Outcome.ERROR

    Player.create(user, submission.first_name, submission.last_name,
                  submission.birth_year, submission.national_id)
    return Outcome.SUCCESS


def list_players(admin, members):
    roster = lichess.get_team_members(admin.auth_token)
    return Player.find_active(roster, members=members)


def ban(admin, user_id):
    """
    Kick the user from the team and flag their record, both at once.

    The two writes are independent: if one fails the other is not undone.
    """
    with ThreadPoolExecutor(max_workers=1) as executor:
        kick = executor.submit(lichess.kick_member, user_id, admin.auth_token)
        player = Player.set_banned(user_id, True)
        kicked = kick.result()
    if not kicked or player is None:
        current_app.logger.warning('Ban of %s incomplete: kicked=%s, record=%s',
                                   user_id, kicked, player is not None)
    return kicked, player


def unban(user_id):
    return Player.set_banned(user_id, False)
