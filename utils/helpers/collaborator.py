import os
import requests
from dotenv import load_dotenv
from typing import Any, Dict
from exceptions.custom_errors import CollaboratorUnavailableError
from utils.constants import COLLABORATOR_TIMEOUT
from utils.logger import logger

load_dotenv()


def collaborator_timeout() -> float:
    return float(os.getenv("COLLABORATOR_TIMEOUT", COLLABORATOR_TIMEOUT))


def post_to_collaborator(url_env: str, payload: Dict[str, Any]) -> str:
    """
    POST ``payload`` to the service whose URL is held in environment variable
    ``url_env`` and return the raw response body.

    Raises CollaboratorUnavailableError when no URL is configured and lets
    ``requests`` errors propagate; callers decide how to fall back. No retries.
    """
    url = os.getenv(url_env)
    if not url:
        raise CollaboratorUnavailableError(f"{url_env} is not set")

    logger.info("Calling %s (%s)", url_env, url)
    resp = requests.post(url, json=payload, timeout=collaborator_timeout())
    resp.raise_for_status()
    return resp.text
