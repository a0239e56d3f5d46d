"""
Hevy routine folder SDK functions.

GET/POST /routine_folders
"""

from typing import Any, Dict, List

from hevy_bbb.sdk.client import HevyClient, HevyDecodeError
from hevy_bbb.sdk.types import FOLDER_KEY, FOLDERS_KEY, FOLDERS_PAGE_SIZE


def get_folders(client: HevyClient) -> List[Dict[str, Any]]:
    """
    Fetch every routine folder.

    GET routine_folders?page=N&pageSize=10

    Returns:
        List of {id, index, title, updated_at, created_at}
    """
    return client.get_all_pages("routine_folders", FOLDERS_KEY, FOLDERS_PAGE_SIZE)


def create_folder(client: HevyClient, title: str) -> Dict[str, Any]:
    """
    Create a routine folder.

    POST routine_folders  body: {"routine_folder": {"title": ...}}

    Returns:
        The created folder {id, title, ...}

    Raises:
        HevyDecodeError: If the echoed folder cannot be read; the ID is
            required for placing routines.
    """
    response = client.make_request(
        "POST",
        "routine_folders",
        json_data={FOLDER_KEY: {"title": title}},
        ok_statuses=(200, 201),
    )
    try:
        folder = response.json()[FOLDER_KEY]
        int(folder["id"])
    except (ValueError, TypeError, KeyError) as e:
        raise HevyDecodeError(f"Failed to decode folder response: {e}") from e
    return folder
