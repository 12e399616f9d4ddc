"""
Holiday provider using the holidays library.

Holiday groups are opaque identifiers; each one is mapped to a subdivision of
the configured country (for Germany: the Bundesland code such as HH or BY).
"""

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Protocol, Set

import holidays

from working_time_act.data.schemas import Config, Holiday

logger = logging.getLogger(__name__)


class HolidayLookup(Protocol):
    """Anything able to list the public holidays of a group within a period."""

    def find_holidays(self, start: date, end: date, group_id: str) -> Iterable[date]:
        ...


class HolidayProvider:
    """Provides public holiday information per holiday group."""

    def __init__(
        self,
        country: str = "DE",
        language: str = "de",
        groups: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the holiday provider.

        Args:
            country: ISO country code understood by the holidays library.
            language: Language for holiday names.
            groups: Mapping of holiday group identifiers to subdivision codes.
                Identifiers missing from the mapping are used as the code itself.
        """
        self.country = country.upper()
        self.language = language
        self.groups = {str(k): v for k, v in (groups or {}).items()}
        self._cache: Dict[tuple, List[Holiday]] = {}

    @classmethod
    def from_config(cls, config: Config) -> "HolidayProvider":
        """Create a provider from the holiday settings of a Config."""
        return cls(
            country=config.holiday_country,
            language=config.holiday_language,
            groups=config.holiday_groups,
        )

    def resolve_subdivision(self, group_id) -> str:
        """
        Map a holiday group identifier to a subdivision code.

        Raises:
            ValueError: If the code is not a subdivision of the country.
        """
        key = str(group_id)
        subdiv = self.groups.get(key, key).upper()

        supported = holidays.list_supported_countries()
        if self.country not in supported:
            raise ValueError(f"Unsupported holiday country: {self.country}")
        if subdiv not in supported[self.country]:
            raise ValueError(f"Unknown holiday group {group_id!r} for country {self.country}")
        return subdiv

    def get_holidays_for_range(self, start: date, end: date, group_id) -> List[Holiday]:
        """
        Get all holidays within a date range for a holiday group.

        Args:
            start: Start date of the range.
            end: End date of the range.
            group_id: Holiday group identifier.

        Returns:
            List of Holiday objects within the range, in date order.
        """
        subdiv = self.resolve_subdivision(group_id)
        cache_key = (start, end, subdiv, self.language)
        if cache_key in self._cache:
            return self._cache[cache_key]

        years = set(range(start.year, end.year + 1))
        calendar = holidays.country_holidays(
            self.country, subdiv=subdiv, years=years, language=self.language
        )

        result = []
        current = start
        while current <= end:
            if current in calendar:
                result.append(Holiday(holiday_date=current, name=calendar.get(current)))
            current += timedelta(days=1)

        logger.debug(
            f"Found {len(result)} holidays for {self.country}-{subdiv} "
            f"between {start.isoformat()} and {end.isoformat()}"
        )
        self._cache[cache_key] = result
        return result

    def find_holidays(self, start: date, end: date, group_id) -> Set[date]:
        """
        Get the set of holiday dates within a range.

        Args:
            start: Start date of the range.
            end: End date of the range.
            group_id: Holiday group identifier.

        Returns:
            Set of dates that are holidays.
        """
        return {h.holiday_date for h in self.get_holidays_for_range(start, end, group_id)}

    def is_holiday(self, check_date: date, group_id) -> bool:
        """Check if a specific date is a holiday for the group."""
        return len(self.get_holidays_for_range(check_date, check_date, group_id)) > 0

    def get_holidays_for_year(self, year: int, group_id) -> List[Holiday]:
        """
        Get all holidays for a specific year.

        Args:
            year: Year to get holidays for.
            group_id: Holiday group identifier.

        Returns:
            List of Holiday objects for the year.
        """
        return self.get_holidays_for_range(date(year, 1, 1), date(year, 12, 31), group_id)

    def clear_cache(self) -> None:
        """Clear the holiday cache."""
        self._cache.clear()
