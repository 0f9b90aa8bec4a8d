"""
Rate limiting.

The Limiter instance is created in ``tessellate/__init__.py`` with no
default limits. Only the login route is limited (``LOGIN_RATE_LIMIT`` per
remote address) to slow down password guessing; health checks are exempt.

Usage:
    from tessellate.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)


def init_rate_limits(app, limiter):
    """Apply the login limit. Disabled in testing mode."""
    if app.config.get("TESTING"):
        app.logger.info("Rate limiter disabled (TESTING=True)")
        return

    login_limit = app.config.get("LOGIN_RATE_LIMIT", "10/minute")
    view = app.view_functions.get("auth_bp.login")
    if view is not None:
        app.view_functions["auth_bp.login"] = limiter.limit(login_limit)(view)

    bp = app.blueprints.get("health_bp")
    if bp:
        limiter.exempt(bp)

    app.logger.info("Rate limiter configured: login %s", login_limit)
