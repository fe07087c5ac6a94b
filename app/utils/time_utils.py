from datetime import date, timedelta

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def to_minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def from_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def day_of_week(day: date) -> int:
    """Day number with 0 = Sunday, matching WeeklyAvailability.day_of_week."""
    return (day.weekday() + 1) % 7


def start_of_week(day: date, week_starts_on: int = 0) -> date:
    offset = (day_of_week(day) - week_starts_on) % 7
    return day - timedelta(days=offset)


def end_of_week(day: date, week_starts_on: int = 0) -> date:
    return start_of_week(day, week_starts_on) + timedelta(days=6)


def parse_iso_date(value: str) -> date:
    return date.fromisoformat(value)
