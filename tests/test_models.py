"""Player record store: masking, signatures and lookups."""

import hashlib

from app.models import Player, PlatformUser, mask_gov_id, gov_id_signature
from conftest import NATIONAL_ID


def test_mask_keeps_first_three_digits():
    assert mask_gov_id('12345678') == '123*****'
    assert mask_gov_id('12345678901') == '123*****901'


def test_mask_leaves_short_ids_alone():
    assert mask_gov_id('1234567') == '1234567'


def test_signature_is_sha1_of_unmasked_id():
    expected = hashlib.sha1(b'12345678').hexdigest()
    assert gov_id_signature('12345678') == expected
    assert len(expected) == 40
    assert gov_id_signature('12345678') != gov_id_signature(mask_gov_id('12345678'))


def test_create_stores_masked_id_and_signature(app):
    with app.app_context():
        player = Player.create(PlatformUser('alice', 'Alice'), 'Ayşe', 'Yılmaz', 1990, NATIONAL_ID)

        assert player.user_id == 'alice'
        assert player.user_name == 'Alice'
        assert player.gov_id == '100*****146'
        assert player.gov_id_signature == gov_id_signature(NATIONAL_ID)
        assert player.banned is False
        assert NATIONAL_ID not in {player.gov_id, player.gov_id_signature}


def test_find_by_signature_filters_on_ban_flag(app, make_player):
    make_player('alice')
    make_player('mallory', banned=True)
    make_player('bob', national_id='20000000000')

    with app.app_context():
        signature = gov_id_signature(NATIONAL_ID)
        assert [p.user_id for p in Player.find_by_signature(signature, banned=True)] == ['mallory']
        assert [p.user_id for p in Player.find_by_signature(signature, banned=False)] == ['alice']


def test_find_active_splits_on_roster(app, make_player):
    make_player('alice')
    make_player('bob')
    make_player('carol', banned=True)

    with app.app_context():
        members = Player.find_active(['alice', 'carol'], members=True)
        waiting = Player.find_active(['alice', 'carol'], members=False)
        nobody = Player.find_active([], members=False)

        assert [p.user_id for p in members] == ['alice']
        assert [p.user_id for p in waiting] == ['bob']
        assert [p.user_id for p in nobody] == ['alice', 'bob']


def test_set_banned_toggles_flag(app, make_player):
    make_player('alice')

    with app.app_context():
        assert Player.set_banned('alice', True).banned is True
        assert Player.find_by_user_id('alice').banned is True
        assert Player.set_banned('alice', False).banned is False


def test_set_banned_unknown_user(app):
    with app.app_context():
        assert Player.set_banned('ghost', True) is None


def test_duplicate_records_are_allowed(app, make_player):
    make_player('alice')
    make_player('alice')

    with app.app_context():
        assert Player.query.filter_by(user_id='alice').count() == 2
        assert Player.find_by_user_id('alice').id == 1
