# matcher.py
from typing import List
from config import MIN_COMMON_INTERESTS
from models import Match, User


def common_interests(a: List[str], b: List[str]) -> List[str]:
    """Interests of `a` that also occur in `b`, in a's order."""
    others = set(b)
    return [i for i in dict.fromkeys(a) if i in others]


def match_score(common_count: int, a_count: int, b_count: int) -> int:
    """
    Jaccard similarity |A & B| / |A | B| as a whole percentage.
    Rounds half up, so 2/16 gives 13 rather than Python's banker's 12.
    """
    total = a_count + b_count - common_count
    return (200 * common_count + total) // (2 * total)


def find_matches_for_user(store, user: User) -> List[Match]:
    """
    Rank every other stored user against `user`.
    Ties keep store order (sorted() is stable with reverse=True).
    """
    my_interests = list(dict.fromkeys(user.interests))
    matches = []
    for other in store.get_all_users():
        if other.id == user.id:
            continue
        common = common_interests(my_interests, other.interests)
        # below the threshold total can't be zero, so no division guard is needed
        if len(common) < MIN_COMMON_INTERESTS:
            continue
        other_count = len(set(other.interests))
        matches.append(Match(
            user=other,
            common_interests=common,
            match_score=match_score(len(common), len(my_interests), other_count),
        ))

    return sorted(matches, key=lambda m: m.match_score, reverse=True)


def find_matches(store, name: str) -> List[Match]:
    """Return ranked matches for the first user named `name`, or [] if there is none."""
    user = store.get_user_by_name(name)
    if not user:
        return []
    return find_matches_for_user(store, user)
