from flask import render_template, request, redirect, url_for, current_app
from flask_login import current_user
from functools import wraps
from app.routes import admin_bp
from app.routes.auth import redirect_to_login
from app.routes.main import message_redirect
from app.models import Player
from app.errors import SERVICE_ERRORS
from app.workflow import list_players, ban, unban
from app import db


def admin_required(return_url=None):
    """Decorator to require the team administrator's account"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return redirect_to_login(return_url)
            if current_user.id != current_app.config['LICHESS_TEAM_ADMIN']:
                current_app.logger.info('Admin page refused for %s', current_user.id)
                return redirect(url_for('main.index'), 303)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


@admin_bp.route('/<any(waiting, verified):player_type>')
@admin_required()
def players(player_type):
    try:
        players = list_players(current_user, members=player_type == 'verified')
    except SERVICE_ERRORS as e:
        db.session.rollback()
        current_app.logger.exception(f'Listing {player_type} players failed: {e}')
        return message_redirect('error')

    return render_template(f'players/{player_type}.html', players=players)


@admin_bp.route('/banned')
@admin_required()
def banned():
    try:
        players = Player.find_banned()
    except SERVICE_ERRORS as e:
        db.session.rollback()
        current_app.logger.exception(f'Listing banned players failed: {e}')
        return message_redirect('error')

    return render_template('players/banned.html', players=players)


@admin_bp.route('/ban', methods=['POST'])
@admin_required(return_url='/players/verified')
def ban_player():
    user_id = request.form.get('user')
    if not user_id:
        return redirect(url_for('admin.players', player_type='verified'), 303)

    try:
        ban(current_user, user_id)
    except SERVICE_ERRORS as e:
        db.session.rollback()
        current_app.logger.exception(f'Banning {user_id} failed: {e}')
        return message_redirect('error')

    return redirect(url_for('admin.players', player_type='verified'), 303)


@admin_bp.route('/unban', methods=['POST'])
@admin_required(return_url='/players/banned')
def unban_player():
    user_id = request.form.get('user')
    if not user_id:
        return redirect(url_for('admin.banned'), 303)

    try:
        unban(user_id)
    except SERVICE_ERRORS as e:
        db.session.rollback()
        current_app.logger.exception(f'Unbanning {user_id} failed: {e}')
        return message_redirect('error')

    return redirect(url_for('admin.players', player_type='verified'), 303)
