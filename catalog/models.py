"""
Module: models.py
Description:
    Row shapes returned by the data-access functions.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, TypedDict

AnimeStatus = Literal["airing", "completed", "upcoming"]


class Anime(TypedDict):
    id: str
    title: str
    rating: Optional[float]
    genres: list[str]
    year: Optional[int]
    season: Optional[str]
    status: AnimeStatus
    episodes: Optional[int]
    description: Optional[str]
    cover_image: str
    banner_image: Optional[str]
    trailer: Optional[str]


class AnimeSuggestion(TypedDict):
    id: str
    title: str
    cover_image: str
    genres: list[str]


class Author(TypedDict):
    username: str
    avatar_url: Optional[str]


class Review(TypedDict):
    id: str
    anime_id: str
    user_id: str
    rating: float
    content: str
    created_at: str
    user: Author


class EpisodeRating(TypedDict):
    id: str
    user_id: str
    anime_id: str
    episode_number: int
    rating: float
    created_at: str


class EpisodeComment(TypedDict):
    id: str
    user_id: str
    anime_id: str
    episode_number: int
    content: str
    created_at: str
    user: Author


class UserList(TypedDict):
    id: str
    name: str
    description: Optional[str]
    is_private: bool


class ListedAnime(TypedDict):
    id: str
    title: str
    cover_image: str


class ListItem(TypedDict):
    id: str
    anime_id: str
    anime: Optional[ListedAnime]


class ModeratedComment(TypedDict):
    id: str
    user_id: str
    content: str
    created_at: str
    reported: bool
    username: str


class Profile(TypedDict):
    id: str
    username: str
    bio: Optional[str]
    avatar_url: Optional[str]


class ProfileUpdate(TypedDict):
    bio: Optional[str]
    avatar_url: Optional[str]


class UserRating(TypedDict):
    id: str
    rating: float
    created_at: str
    anime: Optional[ListedAnime]


class UserComment(TypedDict):
    id: str
    content: str
    created_at: str
    anime: Optional[ListedAnime]


class UserEpisodeRating(UserRating):
    episode_number: int


class UserEpisodeComment(UserComment):
    episode_number: int


class UserActivity(TypedDict):
    """A user's recent rows per section; `failed` names sections that could not be loaded."""

    lists: list[UserList]
    ratings: list[UserRating]
    reviews: list[UserComment]
    episode_ratings: list[UserEpisodeRating]
    episode_comments: list[UserEpisodeComment]
    failed: list[str]


@dataclass
class AnimeFilters:
    """Browse filters. Empty values are ignored; status "all" means no status filter."""

    genres: list[str] = field(default_factory=list)
    year: Optional[int] = None
    season: Optional[str] = None
    status: Optional[str] = None
    query: Optional[str] = None


@dataclass
class PaginatedAnime:
    data: list[Anime]
    has_more: bool
    total_count: int
    total_pages: int
