# aggregation over an already fetched tally + registration list
from typing import Dict, Iterable, List, Mapping

from .models import ActivityResult, ContestantResult, Registration, Results


def votes_for_activity(votes: Mapping[str, int], activity: str, exact: bool = False) -> int:
    """
    Sum the counts of every contestant in `activity`.

    By default any key containing "-<activity>" matches, so a contestant whose
    name contains "-<other activity>" is also counted under that other activity.
    With exact=True only keys ending in "-<activity>" are summed.
    """
    needle = f"-{activity}"
    if exact:
        return sum(count for key, count in votes.items() if key.endswith(needle))
    return sum(count for key, count in votes.items() if needle in key)


def votes_for_contestant(votes: Mapping[str, int], full_name: str, activity: str) -> int:
    return votes.get(f"{full_name}-{activity}", 0)


def total_votes(votes: Mapping[str, int]) -> int:
    return sum(votes.values())


def percentage(part: float, whole: float) -> float:
    if whole == 0:
        return 0
    return part / whole * 100


def group_by_activity(registrations: Iterable[Registration]) -> Dict[str, List[Registration]]:
    """
    Group registrations by activity, keeping first-seen order of activities
    and form order within each group.
    """
    groups: Dict[str, List[Registration]] = {}
    for reg in registrations:
        groups.setdefault(reg.activity, []).append(reg)
    return groups


def contestants_for_activity(
    registrations: Iterable[Registration], votes: Mapping[str, int], activity: str
) -> List[Registration]:
    """
    Registrations for `activity`, most votes first (ties keep form order).
    """
    return sorted(
        (reg for reg in registrations if reg.activity == activity),
        key=lambda reg: votes_for_contestant(votes, reg.fullName, reg.activity),
        reverse=True,
    )


def contestant_result(
    reg: Registration, votes: Mapping[str, int], activity_votes: int
) -> ContestantResult:
    count = votes_for_contestant(votes, reg.fullName, reg.activity)
    return ContestantResult(
        fullName=reg.fullName,
        department=reg.department,
        activity=reg.activity,
        imageUrl=reg.imageUrl,
        votes=count,
        percentage=percentage(count, activity_votes),
    )


def build_results(
    registrations: List[Registration], votes: Mapping[str, int], activities: Iterable[str]
) -> Results:
    total = total_votes(votes)
    out: List[ActivityResult] = []

    for title in activities:
        activity_votes = votes_for_activity(votes, title)
        contestants = contestants_for_activity(registrations, votes, title)
        out.append(
            ActivityResult(
                title=title,
                votes=activity_votes,
                percentage=percentage(activity_votes, total),
                contestantCount=len(contestants),
                contestants=[contestant_result(reg, votes, activity_votes) for reg in contestants],
            )
        )

    return Results(totalVotes=total, activities=out)
