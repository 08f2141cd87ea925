from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.exceptions import ConfigurationError
from ..media.image_store import CloudinaryConfig
from ..sheets.connection import SheetsConfig

# Service-account JSON fields, one env var each (GOOGLE_<FIELD upper-cased>).
GOOGLE_CREDENTIAL_FIELDS = (
    "type",
    "project_id",
    "private_key_id",
    "private_key",
    "client_email",
    "client_id",
    "auth_uri",
    "token_uri",
    "auth_provider_x509_cert_url",
    "client_x509_cert_url",
    "universe_domain",
)

REQUIRED_ENV_VARS = tuple(f"GOOGLE_{name.upper()}" for name in GOOGLE_CREDENTIAL_FIELDS) + (
    "SPREADSHEET_ID",
    "PORT",
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_API_KEY",
    "CLOUDINARY_API_SECRET",
    "JWT_SECRET",
)


@dataclass(frozen=True)
class Settings:
    sheets: SheetsConfig
    cloudinary: CloudinaryConfig
    jwt_secret: str = field(repr=False)
    port: int
    debug: bool = False


def load_settings(environ: Optional[Mapping[str, str]] = None, *, debug: bool = False) -> Settings:
    """Build Settings from the environment; every required variable must be set."""
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
    if missing:
        raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

    try:
        port = int(env["PORT"])
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {env['PORT']!r}")

    service_account_info = {name: env[f"GOOGLE_{name.upper()}"] for name in GOOGLE_CREDENTIAL_FIELDS}
    # .env files usually carry the PEM key on one line with literal \n.
    service_account_info["private_key"] = service_account_info["private_key"].replace("\\n", "\n")

    return Settings(
        sheets=SheetsConfig(spreadsheet_id=env["SPREADSHEET_ID"], service_account_info=service_account_info),
        cloudinary=CloudinaryConfig(
            cloud_name=env["CLOUDINARY_CLOUD_NAME"],
            api_key=env["CLOUDINARY_API_KEY"],
            api_secret=env["CLOUDINARY_API_SECRET"],
        ),
        jwt_secret=env["JWT_SECRET"],
        port=port,
        debug=debug,
    )
