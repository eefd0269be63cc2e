"""
Identity verification routes
Signed-in players prove their identity here before joining the team
"""

from flask import render_template, request, redirect, url_for, current_app
from flask_login import login_required, current_user
from app.routes import verification_bp
from app.routes.main import message_redirect
from app.errors import SERVICE_ERRORS
from app.workflow import (
    VerificationState, Outcome, Submission,
    resolve_state, default_birth_year, rejoin, verify,
)
from app import db


@verification_bp.route('/verify/gov', methods=['GET'])
@login_required
def gov_form():
    try:
        state, _player = resolve_state(current_user)

        if state is VerificationState.AUTHENTICATED:
            return render_template('verify/gov.html', year=default_birth_year())

        if state is VerificationState.BANNED:
            return message_redirect('banned')

        return message_redirect(rejoin(current_user).value)

    except SERVICE_ERRORS as e:
        db.session.rollback()
        current_app.logger.exception(f'Verification page failed for {current_user.id}: {e}')
        return message_redirect('error')


@verification_bp.route('/verify/gov', methods=['POST'])
@login_required
def gov_submit():
    submission = Submission.from_form(request.form)
    if submission is None:
        return redirect(url_for('verification.gov_form'), 303)

    try:
        outcome = verify(current_user, submission)
    except SERVICE_ERRORS as e:
        db.session.rollback()
        current_app.logger.exception(f'Verification failed for {current_user.id}: {e}')
        return message_redirect('error')

    if outcome is Outcome.RETRY:
        return redirect(url_for('verification.gov_form'), 303)

    return message_redirect(outcome.value)
