"""GitHub token lookup for source downloads.

Token precedence:
- ``auth.token`` from the configuration file
- SNIPSYNC_GITHUB_TOKEN: token dedicated to snipsync
- GITHUB_TOKEN: the usual CI token
- GH_TOKEN: the GitHub CLI token
"""

import os
import re
from typing import Dict, List, Optional


class GitHubTokenManager:
    """Resolves the token used for GitHub API requests."""

    TOKEN_PRECEDENCE: List[str] = ['SNIPSYNC_GITHUB_TOKEN', 'GITHUB_TOKEN', 'GH_TOKEN']

    def __init__(self, configured_token: Optional[str] = None):
        """Initialize token manager.

        Args:
            configured_token: Token from the configuration file; wins over the environment.
        """
        self.configured_token = configured_token

    def get_token(self, env: Optional[Dict[str, str]] = None) -> Optional[str]:
        """Get the best available token.

        Args:
            env: Environment to check (defaults to os.environ)

        Returns:
            Token string, or None when requests should be anonymous
        """
        if self.configured_token:
            return self.configured_token
        if env is None:
            env = os.environ
        for var in self.TOKEN_PRECEDENCE:
            value = env.get(var)
            if value:
                return value
        return None

    def auth_headers(self, env: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        token = self.get_token(env)
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}


def sanitize_error(message: str) -> str:
    """Remove anything that looks like a GitHub token from an error message."""
    sanitized = re.sub(r'https://[^@\s]+@github\.com', 'https://***@github.com', message)
    sanitized = re.sub(r'(ghp_|gho_|ghu_|ghs_|ghr_|github_pat_)[a-zA-Z0-9_]+', '***', sanitized)
    sanitized = re.sub(r'Bearer\s+[^\s\'"]+', 'Bearer ***', sanitized)
    return sanitized
