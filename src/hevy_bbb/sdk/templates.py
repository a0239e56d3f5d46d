"""
Hevy exercise template SDK functions.

GET /exercise_templates
"""

from typing import Any, Dict, List

from hevy_bbb.sdk.client import HevyClient
from hevy_bbb.sdk.types import TEMPLATES_KEY, TEMPLATES_PAGE_SIZE


def get_exercise_templates(client: HevyClient) -> List[Dict[str, Any]]:
    """
    Fetch the full exercise template catalog (built-in and custom).

    GET exercise_templates?page=N&pageSize=100

    Returns:
        List of {id, title, type, primary_muscle_group, is_custom, ...}
    """
    return client.get_all_pages("exercise_templates", TEMPLATES_KEY, TEMPLATES_PAGE_SIZE)
