"""badgerelay CI providers.

Public API:
    CIProvider            — provider Protocol
    GitHubActionsProvider — GitHub Actions implementation
    create_provider       — startup factory
"""
from badgerelay.providers.factory import create_provider
from badgerelay.providers.github import GitHubActionsProvider, create_github_client
from badgerelay.providers.protocol import CIProvider

__all__ = ["CIProvider", "GitHubActionsProvider", "create_github_client", "create_provider"]
