from typing import Any, Optional

from app.logger import logger
from app.leetcode_tracker.client import GraphQLClient, AiohttpGraphQLClient, LEETCODE_GRAPHQL_URL
from app.leetcode_tracker.errors import FetchError, InvalidInput, NotFound, UpstreamUnavailable
from app.leetcode_tracker.structures import (
    NormalizedProfile, RawProfileResponse, MatchedUser, UserProfile, ContestRanking, SubmissionCount
)

DIFFICULTIES = ("Easy", "Medium", "Hard")

USER_PROFILE_QUERY = """
query getUserProfile($username: String!) {
  matchedUser(username: $username) {
    username
    profile {
      realName
      userAvatar
      ranking
    }
    submitStats {
      acSubmissionNum {
        difficulty
        count
      }
    }
  }
  userContestRanking(username: $username) {
    rating
    globalRanking
    totalParticipants
    attendedContestsCount
  }
}
"""


async def fetch_profile(identifier: str, client: Optional[GraphQLClient] = None) -> NormalizedProfile:
    """
    Fetch a LeetCode profile and reshape it into a NormalizedProfile.
    :param identifier:
        The LeetCode username. Blank values are rejected before any request is made.
    :param client:
        The GraphQL client to query with, defaults to the shared aiohttp one.
    :raises InvalidInput: the identifier is empty or blank
    :raises NotFound: the platform has no user with that name
    :raises UpstreamUnavailable: the query failed or the response has an unexpected shape
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidInput(identifier=identifier, detail="empty profile identifier")
    username = identifier.strip()
    client = client or AiohttpGraphQLClient()

    try:
        document = await client.execute(USER_PROFILE_QUERY, {"username": username})
    except UpstreamUnavailable as e:
        e.identifier = username
        raise
    except Exception as e:
        logger.error(f"Profile: query failed for {username}: {e}", exc_info=True)
        raise UpstreamUnavailable(identifier=username, detail=str(e)) from e

    data: RawProfileResponse | None = document.get("data") if isinstance(document, dict) else None
    if not isinstance(data, dict):
        logger.error(f"Profile: no data in response for {username}: {document!r:.200}")
        raise UpstreamUnavailable(identifier=username, detail="response has no data object")

    matched_user: MatchedUser | None = data.get("matchedUser")
    if matched_user is None:
        logger.info(f"Profile: no matched user for {username}")
        raise NotFound(identifier=username)
    if not isinstance(matched_user, dict):
        raise UpstreamUnavailable(identifier=username, detail="matchedUser is not an object")

    solved = _solved_by_difficulty(username, matched_user)
    profile = normalize_profile(username, matched_user, data.get("userContestRanking"), solved)
    logger.debug(f"Profile: {username} normalized, {profile['totalSolved']} solved")
    return profile


def normalize_profile(
        username: str,
        matched_user: MatchedUser,
        contest: ContestRanking | None,
        solved: dict[str, int]
) -> NormalizedProfile:
    user_profile: UserProfile = _object_or_empty(username, matched_user.get("profile"), "profile")
    contest_ranking: ContestRanking = _object_or_empty(username, contest, "userContestRanking")

    easy, medium, hard = (solved[d] for d in DIFFICULTIES)
    return NormalizedProfile(
        username=matched_user.get("username") or username,
        realName=user_profile.get("realName") or None,
        avatar=user_profile.get("userAvatar") or None,
        ranking=_optional_count(username, user_profile.get("ranking"), "ranking"),
        totalSolved=easy + medium + hard,
        easySolved=easy,
        mediumSolved=medium,
        hardSolved=hard,
        contestRating=_number(username, contest_ranking.get("rating"), "rating"),
        contestRanking=_count(username, contest_ranking.get("globalRanking"), "globalRanking"),
        attendedContests=_count(username, contest_ranking.get("attendedContestsCount"), "attendedContestsCount"),
    )


def _solved_by_difficulty(username: str, matched_user: MatchedUser) -> dict[str, int]:
    submit_stats = _object_or_empty(username, matched_user.get("submitStats"), "submitStats")
    entries: list[SubmissionCount] = submit_stats.get("acSubmissionNum") or []
    if not isinstance(entries, list):
        raise UpstreamUnavailable(identifier=username, detail="acSubmissionNum is not a list")

    solved: dict[str, int] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            raise UpstreamUnavailable(identifier=username, detail="malformed acSubmissionNum entry")
        difficulty = entry.get("difficulty")
        # the first entry wins when a difficulty is listed twice
        if difficulty in DIFFICULTIES and difficulty not in solved:
            solved[difficulty] = _count(username, entry.get("count"), difficulty)
    return {d: solved.get(d, 0) for d in DIFFICULTIES}


def _object_or_empty(username: str, value: Any, field: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise UpstreamUnavailable(identifier=username, detail=f"{field} is not an object")
    return value


def _number(username: str, value: Any, field: str) -> int | float:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UpstreamUnavailable(identifier=username, detail=f"{field} is not a number: {value!r}")
    return value


def _count(username: str, value: Any, field: str) -> int:
    return _optional_count(username, value, field) or 0


def _optional_count(username: str, value: Any, field: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise UpstreamUnavailable(identifier=username, detail=f"{field} is not an integer: {value!r}")
    return value


__all__ = [
    "fetch_profile",
    "normalize_profile",
    "USER_PROFILE_QUERY",
    "DIFFICULTIES",
    "LEETCODE_GRAPHQL_URL",
    "GraphQLClient",
    "AiohttpGraphQLClient",
    "FetchError",
    "InvalidInput",
    "NotFound",
    "UpstreamUnavailable",
    "NormalizedProfile",
]
