# GitHub API integration module

from .github_api import REPOS_PER_PAGE, REPOS_SORT, GitHubRepoLookup

__all__ = [
    "GitHubRepoLookup",
    "REPOS_PER_PAGE",
    "REPOS_SORT",
]
