from collections import Counter
from typing import Any, Iterable, List, Optional

from showdesk.utils.show_status import (
    Criterion,
    ShowStatus,
    _field,
    describe_show,
    round_half_up,
)


def genre_counts(shows: Iterable[Any]) -> List[tuple]:
    """(genre, count) for every non-empty genre, most common first, ties alphabetical."""
    counter = Counter()
    for show in shows:
        genre = _field(show, "genre")
        if isinstance(genre, str) and genre.strip():
            counter[genre.strip()] += 1
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def summarize_season(shows: Iterable[Any], criteria: Optional[Iterable[Criterion]] = None) -> dict:
    """
    Season dashboard figures.

    Season progress is the mean of every show's progress percentage, rounded
    half-up; a season without shows is at 0%. `described` holds the
    `describe_show` result for each show, in input order.
    """
    shows = list(shows)
    if criteria is not None:
        criteria = tuple(criteria)
    described = [describe_show(show, criteria) for show in shows]

    by_status = {status: 0 for status in ShowStatus}
    for item in described:
        by_status[item["status"]] += 1

    progress = 0
    if described:
        progress = round_half_up(sum(item["progress"] for item in described) / len(described))

    return {
        "show_count": len(shows),
        "done_count": by_status[ShowStatus.done],
        "progress": progress,
        "by_status": by_status,
        "genres": genre_counts(shows),
        "described": described,
    }
