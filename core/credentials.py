"""
Service-account credential helpers.

Both Firebase and the Sheets API authenticate with a Google service account.
The key material arrives through environment variables, where newlines in
the PEM block are usually escaped as a literal backslash-n.
"""

from typing import Dict, Mapping

from .exceptions import ConfigurationError


GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


def normalize_private_key(key: str) -> str:
    """Turn escaped ``\\n`` sequences back into real newlines."""
    return key.replace("\\n", "\n")


def require_settings(config: Mapping, *names: str) -> Dict[str, str]:
    """
    Fetch required settings, raising once with every missing name.

    Args:
        config: Flask config or any mapping
        names: Setting names that must be present and non-empty

    Returns:
        Dict of name -> value

    Raises:
        ConfigurationError: If any setting is missing or empty
    """
    missing = [name for name in names if not config.get(name)]
    if missing:
        raise ConfigurationError(missing)
    return {name: config[name] for name in names}


def service_account_info(
    client_email: str,
    private_key: str,
    project_id: str = ""
) -> Dict[str, str]:
    """
    Build the service-account dict accepted by google-auth and firebase-admin.

    Only the fields those libraries read are filled in.
    """
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": normalize_private_key(private_key),
        "token_uri": GOOGLE_TOKEN_URI,
    }
    if project_id:
        info["project_id"] = project_id
    return info
