"""
Study Service Factory
Centralizes the logic for wiring the deck store to the study service.
"""

from memorizer.application.config import AppConfig
from memorizer.application.study_service import StudyService
from memorizer.domain.ports import DeckRepository
from memorizer.infrastructure.adapters.yaml_deck import YamlDeckRepository


def get_deck_repository(config: AppConfig) -> DeckRepository:
    """
    Returns the DeckRepository implementation for the configured deck path.
    """
    return YamlDeckRepository(config.deck_path)


def get_study_service(config: AppConfig) -> StudyService:
    return StudyService(get_deck_repository(config), config)
