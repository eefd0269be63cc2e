from flask import request, redirect, url_for, session, current_app
from flask_login import login_user
from authlib.integrations.base_client import OAuthError
from app.routes import auth_bp
from app.models import PlatformUser
from app.errors import SERVICE_ERRORS
from app import oauth, lichess


def redirect_to_login(return_url=None):
    """Send an anonymous visitor to sign in, coming back to `return_url`."""
    return redirect(url_for('auth.login', returnUrl=return_url or request.path), 303)


@auth_bp.route('/auth')
def login():
    return_url = request.args.get('returnUrl') or '/'
    # Local paths only, so sign-in cannot bounce to another site
    if not return_url.startswith('/') or return_url.startswith('//'):
        return_url = '/'
    session['return_url'] = return_url
    redirect_uri = url_for('auth.callback', _external=True)
    return oauth.lichess.authorize_redirect(redirect_uri)


@auth_bp.route('/callback')
def callback():
    return_url = session.pop('return_url', None) or '/'

    try:
        token = oauth.lichess.authorize_access_token()
        if not token or not token.get('access_token'):
            raise OAuthError(error='missing_token', description='Token not exists')

        user_id, user_name = lichess.get_account(token['access_token'])
    except (OAuthError, *SERVICE_ERRORS) as e:
        current_app.logger.error(f'Sign-in failed: {e}')
        return redirect(url_for('main.index'), 303)

    user = PlatformUser(user_id, user_name, token['access_token'])
    login_user(user)
    user.remember()
    current_app.logger.info('Signed in %s (%s)', user_name, user_id)

    return redirect(return_url, 303)
