"""Admin tables: users, events and reviews, each with a page-size selector."""

from functools import wraps

from flask import Blueprint, current_app, redirect, render_template, request, session, url_for

from ..list_state import ListView
from .common import get_client, requested_limit, requested_page

admin_bp = Blueprint('admin', __name__)

DEFAULT_ADMIN_PAGE_SIZE = 10

TABLES = {
    'users': {
        'title': 'Users',
        'columns': ['user_id', 'username', 'email', 'role', 'created_at'],
        'filters': ['search', 'role'],
    },
    'events': {
        'title': 'Events',
        'columns': ['event_id', 'name', 'event_date', 'location', 'category_id'],
        'filters': ['category_id', 'sort_by', 'sort_order'],
    },
    'reviews': {
        'title': 'Reviews',
        'columns': ['review_id', 'event_name', 'username', 'rating', 'moderation_status', 'created_at'],
        'filters': ['event_id', 'min_rating', 'max_rating', 'status', 'sort_by', 'sort_order'],
    },
}

def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get('token') or session.get('role') != 'admin':
            return redirect(url_for('events.login', next=request.path))
        return view(*args, **kwargs)
    return wrapper

def _render_table(name: str, fetch):
    table = TABLES[name]
    filters = {key: request.args.get(key) or None for key in table['filters']}
    view = ListView(fetch, limit=requested_limit(DEFAULT_ADMIN_PAGE_SIZE), filters=filters)
    view.load(requested_page())
    return render_template(
        'admin_table.html',
        title=table['title'],
        columns=table['columns'],
        view=view,
        endpoint=f'admin.{name}',
        page_sizes=current_app.config['ADMIN_PAGE_SIZES'],
    )

@admin_bp.route('/users')
@admin_required
def users():
    return _render_table('users', get_client().get_users)

@admin_bp.route('/events')
@admin_required
def events():
    return _render_table('events', get_client().get_events)

@admin_bp.route('/reviews')
@admin_required
def reviews():
    return _render_table('reviews', get_client().get_reviews)
