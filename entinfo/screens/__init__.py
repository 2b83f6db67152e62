"""Per-screen view state built from TMDB catalog calls."""

from .base import FeedScreen, Screen, ScreenState
from .detail import DetailBundle, DetailScreen
from .home import HomeFeed, HomeScreen
from .listings import Listing, MoviesScreen, TrendingFeed, TrendingScreen, TVScreen
from .search import SearchResults, SearchScreen

__all__ = [
    "DetailBundle",
    "DetailScreen",
    "FeedScreen",
    "HomeFeed",
    "HomeScreen",
    "Listing",
    "MoviesScreen",
    "Screen",
    "ScreenState",
    "SearchResults",
    "SearchScreen",
    "TVScreen",
    "TrendingFeed",
    "TrendingScreen",
]
