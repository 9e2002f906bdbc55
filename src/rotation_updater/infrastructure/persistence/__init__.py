from rotation_updater.infrastructure.persistence.in_memory import InMemoryTeamRepository, InMemoryUserRepository

__all__ = ["InMemoryTeamRepository", "InMemoryUserRepository"]
