# Infrastructure Adapters Package
from .card_records import CardRecord
from .yaml_deck import YamlDeckRepository

__all__ = ["CardRecord", "YamlDeckRepository"]
