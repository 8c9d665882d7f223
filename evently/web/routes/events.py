from typing import Optional
from urllib.parse import urlparse

import requests
from flask import Blueprint, render_template, request, redirect, url_for, flash, session

from ..api import APIClientError
from ..list_state import ListView
from .common import get_client, requested_page

# Create the blueprint
events_bp = Blueprint('events', __name__)

UPCOMING_PAGE_SIZE = 5
PAST_PAGE_SIZE = 10

LOGIN_UNAVAILABLE_MESSAGE = "The event service is unavailable. Please try again later."

def _load_view(fetch, limit: int, **filters) -> ListView:
    view = ListView(fetch, limit=limit, filters=filters)
    view.load(requested_page())
    return view

@events_bp.route('/')
def index():
    """Render the upcoming events page."""
    view = _load_view(get_client().get_upcoming_events, UPCOMING_PAGE_SIZE)
    return render_template('events.html', title='Upcoming events', view=view, endpoint='events.index')

@events_bp.route('/past')
def past():
    """Render past events with their ratings."""
    view = _load_view(get_client().get_past_events, PAST_PAGE_SIZE)
    return render_template('events.html', title='Past events', view=view, endpoint='events.past')

def _safe_next(target: Optional[str]) -> str:
    """The post-login destination: only a path on this site, never another host."""
    if target and target.startswith('/') and not target.startswith('//') and '\\' not in target:
        parsed = urlparse(target)
        if not parsed.scheme and not parsed.netloc:
            return target
    return url_for('events.index')

@events_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Log in against the API and keep the token in the session."""
    if request.method == 'POST':
        client = get_client(token='')
        try:
            body = client.login(request.form.get('username', ''), request.form.get('password', ''))
        except APIClientError as e:
            flash(e.message, 'danger')
            return render_template('login.html'), e.status_code
        except requests.RequestException:
            flash(LOGIN_UNAVAILABLE_MESSAGE, 'danger')
            return render_template('login.html'), 503
        session['token'] = body['token']
        session['username'] = body.get('username')
        session['role'] = body.get('role')
        return redirect(_safe_next(request.args.get('next')))
    return render_template('login.html')

@events_bp.route('/logout')
def logout():
    session.clear()
    return redirect(url_for('events.index'))
