import pytest
from flask import template_rendered

from app import create_app, db, lichess, gov_id
from app.models import Player, PlatformUser

TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret',
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'LICHESS_CLIENT_ID': 'test-client',
    'LICHESS_CLIENT_SECRET': 'test-client-secret',
    'LICHESS_API_URL': 'https://lichess.test',
    'LICHESS_OAUTH_URL': 'https://oauth.lichess.test',
    'LICHESS_TEAM_ID': 'ankara-chess',
    'LICHESS_TEAM_ADMIN': 'admin',
    'GOV_WSDL': 'https://kps.test/KPSPublic.asmx?WSDL',
    'SERVER_NAME': 'team.test',
}

NATIONAL_ID = '10000000146'


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Put a signed-in Lichess account on the test client's session."""
    def _login(user_id, user_name=None, auth_token=None):
        with client.session_transaction() as sess:
            sess['_user_id'] = user_id
            sess['user_name'] = user_name or user_id.capitalize()
            sess['auth_token'] = auth_token or f'{user_id}-token'
    return _login


@pytest.fixture
def team(monkeypatch):
    """Replace the Lichess team calls with an in-memory team."""
    class FakeTeam:
        def __init__(self):
            self.members = ['admin']
            self.join_ok = True
            self.kick_ok = True
            self.calls = []

        def get_team_members(self, auth_token):
            self.calls.append(('members', auth_token))
            return list(self.members)

        def join_team(self, auth_token):
            self.calls.append(('join', auth_token))
            return self.join_ok

        def kick_member(self, user_id, auth_token):
            self.calls.append(('kick', user_id, auth_token))
            return self.kick_ok

    fake = FakeTeam()
    monkeypatch.setattr(lichess, 'get_team_members', fake.get_team_members)
    monkeypatch.setattr(lichess, 'join_team', fake.join_team)
    monkeypatch.setattr(lichess, 'kick_member', fake.kick_member)
    return fake


@pytest.fixture
def registry(monkeypatch):
    """Replace the identity service; answers `valid` and records calls."""
    class FakeRegistry:
        def __init__(self):
            self.valid = True
            self.calls = []

        def verify(self, national_id, first_name, last_name, birth_year):
            self.calls.append((national_id, first_name, last_name, birth_year))
            return self.valid

    fake = FakeRegistry()
    monkeypatch.setattr(gov_id, 'verify', fake.verify)
    return fake


@pytest.fixture
def captured_templates(app):
    recorded = []

    def record(sender, template, context, **extra):
        recorded.append((template, context))

    template_rendered.connect(record, app)
    yield recorded
    template_rendered.disconnect(record, app)


@pytest.fixture
def make_player(app):
    def _make_player(user_id, banned=False, national_id=NATIONAL_ID, user_name=None):
        user = PlatformUser(user_id, user_name or user_id.capitalize())
        with app.app_context():
            Player.create(user, 'Ayşe', 'Yılmaz', 1990, national_id, banned=banned)
    return _make_player
