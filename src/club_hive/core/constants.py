"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_EVENT_POINTS = 10
NOTIFICATION_CONTENT_MAX_LENGTH = 200
REMINDER_LOOKAHEAD_HOURS = 24
DEFAULT_LEADERBOARD_LIMIT = 50
DEFAULT_PAGE_LIMIT = 50
ANALYTICS_RECENT_DAYS = 30
ANALYTICS_HISTORY_MONTHS = 6
MIN_PASSWORD_LENGTH = 6
ANALYTICS_TOP_CLUBS = 5
ANALYTICS_ACTIVE_MEMBERS = 10
ANALYTICS_RECENT_EVENTS = 5
TITLE_MAX_LENGTH = 200
VENUE_MAX_LENGTH = 200
CLUB_NAME_MAX_LENGTH = 150
