# SKSYNC Default Configuration
# Full default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "server": {
        "url": "https://www.skillhub.club",
        "timeout": 30.0,
        "token_env": "SKSYNC_TOKEN",
        "cache_ttl": 60.0,
    },
    "local": {
        "skills_dir": "~/.claude/skills",
        "max_depth": 16,
        "exclude": [
            "*.swp",
            "*.swo",
            "*~",
            "__pycache__",
            "*.pyc",
            ".env",
            ".env.*",
        ],
    },
    "output": {
        "verbose": False,
        "colored": True,
        "sync_history": "~/.config/sksync/SYNC_LOG.md",
    },
}


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# SKSYNC - Skill Sync Configuration
#
# server:  version store URL, request timeout (seconds), the environment
#          variable holding the access token, and the read cache TTL
#          (seconds, 0 disables caching of version lists, history and diffs)
# local:   where skills live and which files are never pushed
# output:  console settings and the sync history log

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
