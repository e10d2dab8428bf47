"""
Fragekasten Application Configuration
======================================

PURPOSE:
    Pydantic-Settings based configuration for the Fragekasten server.
    All settings can be overridden via environment variables (FRAGEKASTEN_ prefix)
    or a local .env file. The database location is read from DATABASE_URL
    (see fragekasten.core.database).
"""

import logging
from typing import Literal, Optional

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Sources understood by fragekasten.core.client_ip.resolve_client_ip
IpSource = Literal[
    "ConnectInfo",
    "RightmostXForwardedFor",
    "XRealIp",
    "CfConnectingIp",
    "TrueClientIp",
    "FlyClientIp",
]


class Settings(BaseSettings):
    debug: bool = False

    # Listen address
    host: str = "127.0.0.1"
    port: int = 6251

    # Default SQLite location when DATABASE_URL is not set
    data_directory: str = "data"

    # How the client address is obtained. "ConnectInfo" (socket peer) does not
    # work behind a reverse proxy; pick the header the proxy sets instead.
    ip_source: IpSource = "ConnectInfo"

    # Discord webhook that receives new questions
    discord_webhook_url: Optional[str] = None
    # Discord user ID (not name) mentioned in each notification
    discord_user_id: Optional[int] = None

    # Public page
    page_owner_name: str = "Someone"
    page_title: str = "Fragekasten"
    page_description: str = "Ask me anything. Questions are anonymous."  # inline HTML allowed
    page_question_min_length: int = 15
    page_question_max_length: int = 300
    page_question_placeholder: str = "Would you like to hold hands in the rain together?"

    # Stored questions are purged once this many seconds have passed
    question_ttl_seconds: int = 60 * 60 * 24 * 7

    # Logging
    log_dir: str = "logs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "FRAGEKASTEN_"


settings = Settings()
