from flask import render_template, redirect, url_for
from app.routes import main_bp

MESSAGE_TYPES = ('success', 'banned', 'error')


@main_bp.route('/')
def index():
    return render_template('index.html')


@main_bp.route('/messages/<message_type>')
def message(message_type):
    if message_type not in MESSAGE_TYPES:
        return redirect(url_for('main.index'))
    return render_template(f'messages/{message_type}.html')


def message_redirect(message_type):
    """See-other redirect to one of the three outcome pages."""
    return redirect(url_for('main.message', message_type=message_type), 303)
