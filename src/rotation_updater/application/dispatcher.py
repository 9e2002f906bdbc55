from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Type

from pydantic import BaseModel, ValidationError

from rotation_updater.application.commands import (
    PutTeamCommand,
    PutUserCommand,
    TeamKeyCommand,
    UpdateOnCallCommand,
    UserKeyCommand,
)
from rotation_updater.application.services import Response, RotationService, respond
from rotation_updater.ports.mappings import MappingStoreError


@dataclass(frozen=True)
class Route:
    command_type: Type[BaseModel]
    handler: Callable[[Any], Response]


class OperationDispatcher:
    """Routes an inbound event to the handler named by its ``operation`` field.

    Every dispatch yields a response envelope. Unknown operations, invalid
    events and store failures are logged and answered with an empty body.
    """

    def __init__(self, service: RotationService) -> None:
        self.service = service
        self.logger = logging.getLogger(__name__)
        self.routes: Dict[str, Route] = {
            "updateOnCall": Route(UpdateOnCallCommand, service.update_on_call),
            "putTeam": Route(PutTeamCommand, service.put_team),
            "getTeam": Route(TeamKeyCommand, service.get_team),
            "deleteTeam": Route(TeamKeyCommand, service.delete_team),
            "putUser": Route(PutUserCommand, service.put_user),
            "getUser": Route(UserKeyCommand, service.get_user),
            "deleteUser": Route(UserKeyCommand, service.delete_user),
        }

    def dispatch(self, event: Mapping[str, Any]) -> Response:
        self.logger.info("req: %s", json.dumps(event, default=str))
        response = self._dispatch(event)
        self.logger.info("resp: %s", json.dumps(response))
        return response

    def _dispatch(self, event: Mapping[str, Any]) -> Response:
        operation = event.get("operation") if isinstance(event, Mapping) else None
        route = self.routes.get(operation) if isinstance(operation, str) else None
        if route is None:
            self.logger.warning("Unrecognized operation: %s", operation)
            return respond()

        try:
            command = route.command_type.model_validate(event)
            return route.handler(command)
        except ValidationError as exc:
            self.logger.warning("Invalid %s event: %s", operation, exc)
        except MappingStoreError as exc:
            self.logger.error("Mapping store failure during %s: %s", operation, exc)
        except Exception as exc:  # noqa: BLE001
            self.logger.error("Failed to handle %s: %s", operation, exc, exc_info=True)
        return respond()
