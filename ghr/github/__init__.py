"""GitHub REST API boundary."""

from .duplicates import is_duplicate_asset_error
from .http import ApiError, GitHubHttp, MockGitHubHttp, RealGitHubHttp

__all__ = [
    "ApiError",
    "GitHubHttp",
    "MockGitHubHttp",
    "RealGitHubHttp",
    "is_duplicate_asset_error",
]
