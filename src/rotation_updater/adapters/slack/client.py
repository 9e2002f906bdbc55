from __future__ import annotations

import logging
from typing import Optional

import httpx

from rotation_updater.ports.slack import SlackUserGroupPort

logger = logging.getLogger(__name__)

USERGROUPS_USERS_UPDATE = "/usergroups.users.update"


class SlackUserGroupClient(SlackUserGroupPort):
    """HTTP client for the Slack user group membership API."""

    def __init__(
        self,
        base_url: str = "https://slack.com/api",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json; charset=utf-8"},
            transport=transport,
        )
        logger.info(f"Initialized SlackUserGroupClient with base_url={base_url}, timeout={timeout}")

    def replace_membership(self, user_group_id: str, user_id: str, token: str) -> Optional[dict]:
        """Replace the whole membership of ``user_group_id`` with ``user_id``.

        Returns Slack's JSON response, or None when the call did not succeed.
        """
        logger.info(f"Updating Slack user group ({user_group_id}) to user ({user_id})")
        payload = {
            # Encoded ID of the user group to update.
            "usergroup": user_group_id,
            # Comma separated list of every member of the group; always one here.
            "users": user_id,
        }
        try:
            response = self.client.post(
                USERGROUPS_USERS_UPDATE,
                json=payload,
                headers={"Authorization": f"Bearer {token}"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout updating Slack user group {user_group_id}: {e}")
            return None
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Failed to update Slack user group {user_group_id}: "
                f"status {e.response.status_code}: {e.response.text}"
            )
            return None
        except httpx.HTTPError as e:
            logger.error(f"Failed to connect to Slack API: {e}")
            return None
        except ValueError as e:
            logger.error(f"Slack API returned a non-JSON body for user group {user_group_id}: {e}")
            return None

        if isinstance(data, dict) and not data.get("ok", True):
            logger.warning(f"Slack rejected user group update for {user_group_id}: {data.get('error')}")
        return data

    def close(self) -> None:
        self.client.close()
