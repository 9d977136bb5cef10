"""
YAML Deck Repository — Infrastructure adapter for a single deck file.

Implements DeckRepository on top of PyYAML. Malformed records are skipped
individually; records with unreadable timestamps are kept aside for repair.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from memorizer.application.utils.time import format_instant, parse_instant
from memorizer.domain.errors import DeckStorageError
from memorizer.domain.models import Deck
from memorizer.domain.ports import DeckRepository

from .card_records import CardRecord

logger = logging.getLogger(__name__)

DECK_FORMAT_VERSION = 1


class YamlDeckRepository(DeckRepository):
    """
    Stores the deck as ``{version, last_reviewed_at, cards: [...]}`` in YAML.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Deck:
        if not self.path.exists():
            logger.debug(f"No deck file at {self.path}; starting empty")
            return Deck()

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise DeckStorageError(f"Could not read deck {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise DeckStorageError(f"Deck {self.path} is not a mapping")

        raw_cards = data.get("cards") or []
        if not isinstance(raw_cards, list):
            raise DeckStorageError(f"Deck {self.path}: 'cards' must be a list")

        deck = Deck(last_reviewed_at=parse_instant(data.get("last_reviewed_at")))
        for index, raw in enumerate(raw_cards):
            record = self._parse_record(index, raw)
            if record is None:
                continue
            if record.needs_repair:
                logger.warning(
                    f"Card {record.id} needs schedule repair "
                    f"(invalid {', '.join(record.invalid_timestamps())})"
                )
                deck.repairs.append(record)
            else:
                deck.cards.append(record.to_card())

        logger.debug(
            f"Loaded {len(deck.cards)} cards ({len(deck.repairs)} needing repair) from {self.path}"
        )
        return deck

    def _parse_record(self, index: int, raw: Any) -> CardRecord | None:
        if not isinstance(raw, dict):
            logger.warning(f"Skipping card #{index} in {self.path}: not a mapping")
            return None
        try:
            return CardRecord.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                f"Skipping card #{index} in {self.path}: {e.error_count()} invalid field(s)"
            )
            return None

    def save(self, deck: Deck) -> None:
        payload = {
            "version": DECK_FORMAT_VERSION,
            "last_reviewed_at": (
                format_instant(deck.last_reviewed_at) if deck.last_reviewed_at else None
            ),
            "cards": [CardRecord.from_card(c).to_dict() for c in deck.cards]
            + [r.to_dict() for r in deck.repairs],
        }
        text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True, default_flow_style=False)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(text)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise DeckStorageError(f"Could not write deck {self.path}: {e}") from e
