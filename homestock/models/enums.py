"""Enums for model fields."""

from enum import Enum


class Site(str, Enum):
    """Physical household sites, each with its own pantry stock."""

    JACKSON = "jackson"
    SHORE = "shore"

    @property
    def display_name(self) -> str:
        """Human-readable site name used in summaries."""
        return "Jackson" if self == Site.JACKSON else "Shore"

    def other(self) -> "Site":
        """The site on the other side of a transfer."""
        return Site.SHORE if self == Site.JACKSON else Site.JACKSON


class WeekType(str, Enum):
    """Alternating meal-plan weeks."""

    A = "A"
    B = "B"


class MealType(str, Enum):
    """Meal slots in a day."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class DayOfWeek(str, Enum):
    """Days of the meal-plan grid."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"
