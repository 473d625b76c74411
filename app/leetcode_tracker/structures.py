from typing import Optional, TypedDict


class SubmissionCount(TypedDict, total=False):
    difficulty: str
    count: Optional[int]


class SubmitStats(TypedDict, total=False):
    acSubmissionNum: list[SubmissionCount]


class UserProfile(TypedDict, total=False):
    realName: Optional[str]
    userAvatar: Optional[str]
    ranking: Optional[int]


class MatchedUser(TypedDict, total=False):
    username: str
    profile: Optional[UserProfile]
    submitStats: Optional[SubmitStats]


class ContestRanking(TypedDict, total=False):
    rating: Optional[float]
    globalRanking: Optional[int]
    totalParticipants: Optional[int]
    attendedContestsCount: Optional[int]


class RawProfileResponse(TypedDict, total=False):
    """
    The ``data`` object of the getUserProfile query.
    Both fields are null when the platform has no such user / no contest record.
    """
    matchedUser: Optional[MatchedUser]
    userContestRanking: Optional[ContestRanking]


class NormalizedProfile(TypedDict):
    username: str
    realName: Optional[str]
    avatar: Optional[str]
    ranking: Optional[int]
    totalSolved: int
    easySolved: int
    mediumSolved: int
    hardSolved: int
    contestRating: float
    contestRanking: int
    attendedContests: int
