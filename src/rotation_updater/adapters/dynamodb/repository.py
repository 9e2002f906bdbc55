from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ValidationError

from rotation_updater.domain.models import Team, User
from rotation_updater.ports.mappings import MappingStoreError, TeamRepository, UserRepository

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


class DynamoDbTable(Generic[RecordT]):
    """Single-key get/put/delete of pydantic records against one DynamoDB table.

    Items are stored with the record's aliased (camelCase) attribute names.
    Every write replaces the whole item; there are no condition expressions,
    so the last writer wins.
    """

    def __init__(self, client: Any, table_name: str, key_attribute: str, record_type: Type[RecordT]) -> None:
        self.client = client
        self.table_name = table_name
        self.key_attribute = key_attribute
        self.record_type = record_type

    def get(self, key: str) -> Optional[RecordT]:
        try:
            response = self.client.get_item(
                TableName=self.table_name,
                Key=self._key(key),
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"get_item failed on {self.table_name} for {self.key_attribute}={key}: {e}")
            raise MappingStoreError(f"get_item failed on {self.table_name}: {e}") from e

        item = response.get("Item")
        if not item:
            logger.info(f"No item in {self.table_name} for {self.key_attribute}={key}")
            return None
        try:
            return self.record_type.model_validate(_deserialize(item))
        except ValidationError as e:
            logger.warning(f"Ignoring malformed item in {self.table_name} for {self.key_attribute}={key}: {e}")
            return None

    def put(self, record: RecordT) -> None:
        item = record.model_dump(by_alias=True)
        try:
            self.client.put_item(TableName=self.table_name, Item=_serialize(item))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"put_item failed on {self.table_name} for {self.key_attribute}={item.get(self.key_attribute)}: {e}")
            raise MappingStoreError(f"put_item failed on {self.table_name}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.client.delete_item(TableName=self.table_name, Key=self._key(key))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"delete_item failed on {self.table_name} for {self.key_attribute}={key}: {e}")
            raise MappingStoreError(f"delete_item failed on {self.table_name}: {e}") from e

    def _key(self, key: str) -> Dict[str, Any]:
        return _serialize({self.key_attribute: key})


class DynamoDbTeamRepository(TeamRepository):
    def __init__(self, client: Any, table_name: str) -> None:
        self.table = DynamoDbTable(client, table_name, "victorOpsGroupId", Team)

    def get(self, victor_ops_group_id: str) -> Optional[Team]:
        return self.table.get(victor_ops_group_id)

    def put(self, team: Team) -> None:
        self.table.put(team)

    def delete(self, victor_ops_group_id: str) -> None:
        self.table.delete(victor_ops_group_id)


class DynamoDbUserRepository(UserRepository):
    def __init__(self, client: Any, table_name: str) -> None:
        self.table = DynamoDbTable(client, table_name, "victorOpsUserId", User)

    def get(self, victor_ops_user_id: str) -> Optional[User]:
        return self.table.get(victor_ops_user_id)

    def put(self, user: User) -> None:
        self.table.put(user)

    def delete(self, victor_ops_user_id: str) -> None:
        self.table.delete(victor_ops_user_id)


def _serialize(item: Dict[str, Any]) -> Dict[str, Any]:
    return {name: _serializer.serialize(value) for name, value in item.items()}


def _deserialize(item: Dict[str, Any]) -> Dict[str, Any]:
    return {name: _deserializer.deserialize(value) for name, value in item.items()}
