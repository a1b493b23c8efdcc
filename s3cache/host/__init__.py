"""CI host integration."""

from .context import GitHubActionsContext, HostContext

__all__ = ["GitHubActionsContext", "HostContext"]
