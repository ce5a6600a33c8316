# app/adapters/inbound/api/deps.py (async version)

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends() for database access and outbound notifications.
"""

from app.adapters.outbound.persistence.database import get_db
from app.adapters.outbound.notification.dispatcher import NotificationDispatcher
from app.adapters.outbound.notification.email_notifier import notification_dispatcher

########################################################################
# Database Session Management
########################################################################

# Alias used by the endpoints; tests override get_db
get_session = get_db


########################################################################
# Notifications
########################################################################

def get_notifier() -> NotificationDispatcher:
    """
    Return the application's notification dispatcher.

    Returns:
        NotificationDispatcher shared by every request
    """
    return notification_dispatcher
