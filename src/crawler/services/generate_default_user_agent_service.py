# src/crawler/services/generate_default_user_agent_service.py
import platform
from typing import Optional

from ddp.core.managers.config_manager import config_manager

OS_TOKENS = {
    "Windows": "Windows NT 10.0; Win64; x64",
    "Darwin": "Macintosh; Intel Mac OS X 10_15_7",
    "Linux": "X11; Linux x86_64",
}


def generate_default_user_agent(chrome_version: Optional[str] = None) -> str:
    """
    Builds a desktop Chrome User-Agent for the current OS, so the deployed site
    serves the same markup a visitor's browser would get.
    The Chrome version defaults to 'user_agent.chrome_version' in settings.json.
    """
    os_part = OS_TOKENS.get(platform.system(), "Unknown OS")
    chrome_version = chrome_version or config_manager.get_nested("user_agent.chrome_version", "120.0.0.0")

    return (
        f"Mozilla/5.0 ({os_part}) AppleWebKit/537.36 (KHTML, like Gecko) "
        f"Chrome/{chrome_version} Safari/537.36"
    )
