"""
Lichess platform API client.

Covers the account lookup used after sign-in and the three team membership
calls: roster listing, joining and kicking.
"""

import atexit
import json

import requests


class LichessError(Exception):
    """The platform answered with something we cannot interpret."""


class LichessClient:
    """Team membership calls for the configured team, authenticated per call."""

    def __init__(self, app=None):
        self.base_url = 'https://lichess.org'
        self.team_id = None
        self.timeout = None
        self.http = requests.Session()
        self._close_registered = False
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.base_url = app.config.get('LICHESS_API_URL', self.base_url).rstrip('/')
        self.team_id = app.config.get('LICHESS_TEAM_ID')
        self.timeout = app.config.get('LICHESS_TIMEOUT')
        if not self._close_registered:
            atexit.register(self.close)
            self._close_registered = True
        app.extensions['lichess'] = self

    def close(self):
        self.http.close()

    def _headers(self, auth_token):
        return {'Authorization': f'Bearer {auth_token}'}

    def _post_ok(self, path, auth_token):
        response = self.http.post(
            f'{self.base_url}{path}',
            headers=self._headers(auth_token),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return bool(response.json().get('ok'))

    def get_account(self, auth_token):
        """Return (user id, username) of the token's owner."""
        response = self.http.get(
            f'{self.base_url}/api/account',
            headers=self._headers(auth_token),
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()
        try:
            return data['id'], data['username']
        except KeyError as exc:
            raise LichessError(f'Account response is missing {exc}') from exc

    def get_team_members(self, auth_token):
        """
        Collect the ids of every team member.

        The roster is streamed as newline-delimited JSON, one member object
        per line; blank keep-alive lines are skipped.
        """
        with self.http.get(
            f'{self.base_url}/team/{self.team_id}/users',
            headers=self._headers(auth_token),
            stream=True,
            timeout=self.timeout,
        ) as response:
            response.raise_for_status()
            user_ids = []
            for line in response.iter_lines():
                if not line:
                    continue
                try:
                    user_ids.append(json.loads(line)['id'])
                except (ValueError, KeyError) as exc:
                    raise LichessError(f'Bad roster line: {line!r}') from exc
            return user_ids

    def join_team(self, auth_token):
        return self._post_ok(f'/team/{self.team_id}/join', auth_token)

    def kick_member(self, user_id, auth_token):
        return self._post_ok(f'/team/{self.team_id}/kick/{user_id}', auth_token)
