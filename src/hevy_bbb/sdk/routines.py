"""
Hevy routine SDK functions.

GET/POST /routines, PUT /routines/{id}
"""

import logging
from typing import Any, Dict, List

from hevy_bbb.sdk.client import HevyClient
from hevy_bbb.sdk.types import ROUTINE_KEY, ROUTINES_KEY, ROUTINES_PAGE_SIZE

logger = logging.getLogger(__name__)


def get_routines(client: HevyClient) -> List[Dict[str, Any]]:
    """
    Fetch every routine.

    GET routines?page=N&pageSize=10

    Returns:
        List of {id, title, folder_id, exercises, ...}
    """
    return client.get_all_pages("routines", ROUTINES_KEY, ROUTINES_PAGE_SIZE)


def create_routine(client: HevyClient, routine: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a routine.

    POST routines  body: {"routine": {title, folder_id, exercises}}

    Returns:
        The echoed routine, or {"title": ...} if the echo cannot be decoded
    """
    response = client.make_request(
        "POST", "routines", json_data={ROUTINE_KEY: routine}, ok_statuses=(200, 201),
    )
    return _echoed_routine(response, routine)


def update_routine(
    client: HevyClient, routine_id: str, routine: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Replace an existing routine.

    PUT routines/{id}  body: {"routine": {title, exercises}}

    folder_id is rejected by the API on update.

    Returns:
        The echoed routine, or {"title": ...} if the echo cannot be decoded
    """
    response = client.make_request(
        "PUT", f"routines/{routine_id}", json_data={ROUTINE_KEY: routine},
    )
    return _echoed_routine(response, routine)


def _echoed_routine(response, routine: Dict[str, Any]) -> Dict[str, Any]:
    """Read the routine echo; the mutation already succeeded either way."""
    try:
        echoed = response.json()[ROUTINE_KEY]
        if isinstance(echoed, list):
            echoed = echoed[0]
        if not isinstance(echoed, dict):
            raise TypeError(f"unexpected routine echo {type(echoed).__name__}")
        return echoed
    except (ValueError, TypeError, KeyError, IndexError) as e:
        logger.debug("Could not decode routine echo for %r: %s", routine.get("title"), e)
        return {"title": routine.get("title", "")}
