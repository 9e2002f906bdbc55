from .application.dispatcher import OperationDispatcher
from .application.services import RotationService
from .adapters.dynamodb.repository import DynamoDbTeamRepository, DynamoDbUserRepository
from .adapters.secrets_manager.client import SecretsManagerSecretStore
from .adapters.slack.client import SlackUserGroupClient
from .domain.models import Team, User
from .infrastructure.persistence.in_memory import InMemoryTeamRepository, InMemoryUserRepository
from .infrastructure.secrets.in_memory import InMemorySecretStore

__all__ = [
    "OperationDispatcher",
    "RotationService",
    "DynamoDbTeamRepository",
    "DynamoDbUserRepository",
    "SecretsManagerSecretStore",
    "SlackUserGroupClient",
    "Team",
    "User",
    "InMemoryTeamRepository",
    "InMemoryUserRepository",
    "InMemorySecretStore",
]
