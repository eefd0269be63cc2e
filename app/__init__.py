from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from authlib.integrations.flask_client import OAuth
import os
from dotenv import load_dotenv

from app.lichess import LichessClient
from app.gov_id import GovIdClient

load_dotenv()

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
oauth = OAuth()
lichess = LichessClient()
gov_id = GovIdClient()

OAUTH_SCOPES = 'preference:read team:write'


def create_app(config=None):
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SESSION_SECRET') or 'dev-secret-key-change-in-production'
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL') or 'sqlite:///chess_team.db'
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['LICHESS_CLIENT_ID'] = os.environ.get('LICHESS_CLIENT_ID')
    app.config['LICHESS_CLIENT_SECRET'] = os.environ.get('LICHESS_CLIENT_SECRET')
    app.config['LICHESS_API_URL'] = os.environ.get('LICHESS_API_URL') or 'https://lichess.org'
    app.config['LICHESS_OAUTH_URL'] = os.environ.get('LICHESS_OAUTH_URL') or 'https://oauth.lichess.org'
    app.config['LICHESS_TEAM_ID'] = os.environ.get('LICHESS_TEAM_ID')
    app.config['LICHESS_TEAM_ADMIN'] = os.environ.get('LICHESS_TEAM_ADMIN')
    app.config['LICHESS_TIMEOUT'] = float(os.environ['LICHESS_TIMEOUT']) if os.environ.get('LICHESS_TIMEOUT') else None
    app.config['GOV_WSDL'] = os.environ.get('GOV_WSDL')
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL') or 'INFO'

    if config:
        app.config.update(config)

    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    oauth.init_app(app)
    lichess.init_app(app)
    gov_id.init_app(app)

    oauth_url = app.config['LICHESS_OAUTH_URL']
    oauth.register(
        'lichess',
        client_id=app.config['LICHESS_CLIENT_ID'],
        client_secret=app.config['LICHESS_CLIENT_SECRET'],
        access_token_url=f'{oauth_url}/oauth',
        authorize_url=f'{oauth_url}/oauth/authorize',
        client_kwargs={'scope': OAUTH_SCOPES, 'code_challenge_method': 'S256'},
    )

    # Create tables
    with app.app_context():
        from app import models  # noqa: F401
        db.create_all()

    # Configure login manager
    from app.routes.auth import redirect_to_login
    login_manager.unauthorized_handler(redirect_to_login)

    # User loader for Flask-Login
    from app.models import PlatformUser

    @login_manager.user_loader
    def load_user(user_id):
        return PlatformUser.from_session(user_id)

    # Register blueprints
    from app.routes import main_bp, auth_bp, verification_bp, admin_bp
    from app.routes import main, auth, verification, admin  # noqa: F401

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(verification_bp)
    app.register_blueprint(admin_bp, url_prefix='/players')

    app.logger.info('Team gate configured for team %s', app.config['LICHESS_TEAM_ID'])

    return app
