"""Docker secrets with environment fallback."""

import os

SECRETS_DIR = "/run/secrets"


def read_secret(name: str, env_var: str, default: str | None = None) -> str | None:
    """Read a value from a Docker secret, falling back to the environment."""
    secret_path = os.path.join(SECRETS_DIR, name)
    try:
        with open(secret_path) as f:
            return f.read().strip()
    except FileNotFoundError:
        return os.getenv(env_var, default)
