from datetime import date, datetime


def get_local_today() -> date:
    """Return today's calendar date in the local timezone."""
    return datetime.now().astimezone().date()
