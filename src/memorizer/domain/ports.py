"""
Ports (interfaces) for deck persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import Deck


class DeckRepository(ABC):
    """
    Port for loading and saving the card collection.

    Implementations:
        - YamlDeckRepository: Stores the deck in a single YAML file.
    """

    @abstractmethod
    def load(self) -> Deck:
        """
        Load the full deck.

        Returns:
            Deck with valid cards, plus raw records that need schedule repair.
        """
        pass

    @abstractmethod
    def save(self, deck: Deck) -> None:
        """
        Persist the full deck, replacing what was stored before.
        """
        pass
