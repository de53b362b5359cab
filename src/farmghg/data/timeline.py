"""Management period timeline for an animal group."""

from collections.abc import Iterator
from datetime import date, timedelta

from farmghg.core.errors import InvalidManagementPeriodError
from farmghg.data.models import AnimalGroup, ManagementPeriod


def validate_group_timeline(group: AnimalGroup) -> None:
    """
    Check that a group's management periods form one contiguous timeline.

    Periods must be in chronological order, each start the day after the
    previous one ends, have a positive duration and a non-negative head count.

    Raises:
        InvalidManagementPeriodError: On the first problem found
    """
    periods = group.management_periods
    if not periods:
        raise InvalidManagementPeriodError(group.name, "has no management periods")

    previous: ManagementPeriod | None = None
    for period in periods:
        if period.duration_days <= 0:
            raise InvalidManagementPeriodError(
                group.name, f"period '{period.name}' has non-positive duration {period.duration_days}"
            )
        if period.number_of_animals < 0:
            raise InvalidManagementPeriodError(
                group.name, f"period '{period.name}' has negative head count {period.number_of_animals}"
            )
        if previous is not None:
            expected = previous.end + timedelta(days=1)
            if period.start < expected:
                raise InvalidManagementPeriodError(
                    group.name,
                    f"period '{period.name}' starts {period.start} but '{previous.name}' runs until {previous.end}",
                )
            if period.start > expected:
                raise InvalidManagementPeriodError(
                    group.name,
                    f"gap between '{previous.name}' (ends {previous.end}) and '{period.name}' (starts {period.start})",
                )
        previous = period


def iter_group_days(group: AnimalGroup) -> Iterator[tuple[ManagementPeriod, date]]:
    """Yield (management period, day) for every simulated day of a group, in order."""
    for period in group.management_periods:
        for day in period.days():
            yield period, day


def group_date_range(group: AnimalGroup) -> tuple[date, date]:
    """First and last simulated day of a group."""
    return group.management_periods[0].start, group.management_periods[-1].end
