"""
Business card repository.

In-memory store keyed by opaque string ids with create/read/update/delete
and a live read-all subscription.
"""

import logging
import threading
import uuid
from typing import Callable, Dict, List, Optional

from .exceptions import CardNotFoundError
from .models import BusinessCard
from .store import ObservableStore

logger = logging.getLogger(__name__)


class BusinessCardRepository:
    """Thread-safe card store with realtime listeners."""

    def __init__(self):
        self._cards: Dict[str, BusinessCard] = {}
        self._lock = threading.RLock()
        self._snapshot: ObservableStore[List[BusinessCard]] = ObservableStore([])

    def _new_id(self) -> str:
        return uuid.uuid4().hex

    def _publish(self) -> None:
        # Caller holds the lock so snapshots are published in write order
        self._snapshot.set([card.copy() for card in self._cards.values()])

    def save(self, card: BusinessCard) -> BusinessCard:
        """Insert or update a card.

        Args:
            card: Card to store; an empty id gets a server-assigned one

        Returns:
            The stored card (with its id set)
        """
        with self._lock:
            stored = card.copy(id=card.id or self._new_id())
            is_new = stored.id not in self._cards
            self._cards[stored.id] = stored
            self._publish()
        logger.info(f"{'Created' if is_new else 'Updated'} business card {stored.id}")
        return stored.copy()

    def get(self, card_id: str) -> Optional[BusinessCard]:
        with self._lock:
            card = self._cards.get(card_id)
            return card.copy() if card else None

    def require(self, card_id: str) -> BusinessCard:
        card = self.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def delete(self, card_id: str) -> bool:
        with self._lock:
            removed = self._cards.pop(card_id, None)
            if removed is None:
                return False
            self._publish()
        logger.info(f"Deleted business card {card_id}")
        return True

    def list_all(self) -> List[BusinessCard]:
        with self._lock:
            return [card.copy() for card in self._cards.values()]

    def observe_all(self, listener: Callable[[List[BusinessCard]], None]) -> Callable[[], None]:
        """Subscribe to the full card list.

        The listener gets the current list right away and again after every
        save or delete. Call the returned function to stop listening.
        """
        with self._lock:
            return self._snapshot.subscribe(lambda cards: listener(list(cards)))

    @property
    def version(self) -> int:
        return self._snapshot.version

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards)
