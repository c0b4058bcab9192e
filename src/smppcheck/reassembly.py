"""
Concatenated SMS Reassembly

Collects the parts of multi-part messages, keyed by their concatenation
reference, and emits each message once every part has arrived. Parts may
arrive in any order and from several threads at once.

A reference is forgotten as soon as its message is emitted, so a later part
reusing the same reference starts a new message. Incomplete messages older
than the configured part timeout are evicted.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .config.defaults import DEFAULT_PART_TIMEOUT
from .exceptions import SMPPReassemblyException
from .protocol.udh import ConcatInfo
from .utils import preview

logger = logging.getLogger(__name__)

MessageHandler = Callable[[str, Optional[int]], None]


@dataclass
class PartialMessage:
    """Parts received so far for one reference"""

    total_parts: int
    created_at: float
    # None marks a part not yet received; '' is a received empty part.
    slots: List[Optional[str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.slots:
            self.slots = [None] * self.total_parts

    @property
    def received(self) -> int:
        return sum(1 for part in self.slots if part is not None)

    @property
    def is_complete(self) -> bool:
        return all(part is not None for part in self.slots)

    def text(self) -> str:
        return ''.join(part or '' for part in self.slots)


class Reassembler:
    """
    Thread-safe reassembly of concatenated messages.

    All access to the tracking map happens under one lock. Completing a
    message and removing it from the map is a single critical section, so a
    message can neither be completed twice nor be seen complete while still
    tracked. The on_message handler runs outside the lock.
    """

    def __init__(
        self,
        part_timeout: Optional[float] = DEFAULT_PART_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the reassembler

        Args:
            part_timeout: Seconds an incomplete message is kept; 0 or None keeps it forever
            clock: Monotonic time source
        """
        self.part_timeout = part_timeout
        self._clock = clock
        self._lock = threading.Lock()
        self._partials: Dict[int, PartialMessage] = {}

        # Event handlers
        self.on_message: Optional[MessageHandler] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._partials)

    def __contains__(self, reference: int) -> bool:
        with self._lock:
            return reference in self._partials

    def pending(self) -> Dict[int, Tuple[int, int]]:
        """Snapshot of tracked references as {reference: (received, total)}."""
        with self._lock:
            return {
                ref: (partial.received, partial.total_parts)
                for ref, partial in self._partials.items()
            }

    def handle(self, text: str, concat: ConcatInfo) -> Optional[str]:
        """
        Process the text of one inbound message.

        Messages without a concatenation header are emitted immediately.

        Returns:
            The complete message text if this message completes one, else None
        """
        if not concat.found:
            logger.info(f'Message: {preview(text)}')
            self._emit(text, None)
            return text
        return self.add_part(concat.reference, concat.total_parts, concat.sequence, text)

    def add_part(
        self, reference: int, total_parts: int, sequence: int, text: str
    ) -> Optional[str]:
        """
        Store one part of a concatenated message.

        Args:
            reference: Concatenation reference number
            total_parts: Number of parts the message consists of
            sequence: 1-based position of this part
            text: Decoded part text

        Returns:
            The reassembled message when this part completes it, else None

        Raises:
            SMPPReassemblyException: If total_parts or sequence is out of range
        """
        if total_parts < 1 or not (1 <= sequence <= total_parts):
            raise SMPPReassemblyException(
                f'Invalid concatenation header: part {sequence}/{total_parts}',
                reference=reference,
                total_parts=total_parts,
                sequence=sequence,
            )

        now = self._clock()
        with self._lock:
            evicted = self._evict_locked(now)

            partial = self._partials.get(reference)
            if partial is not None and partial.total_parts != total_parts:
                logger.warning(
                    f'Reference {reference} reused with {total_parts} parts while '
                    f'{partial.received}/{partial.total_parts} were stored; '
                    f'discarding stored parts'
                )
                partial = None
            if partial is None:
                partial = PartialMessage(total_parts=total_parts, created_at=now)
                self._partials[reference] = partial

            if partial.slots[sequence - 1] is not None:
                logger.debug(f'Duplicate part {sequence} for reference {reference}')
            partial.slots[sequence - 1] = text

            if partial.is_complete:
                del self._partials[reference]
                message = partial.text()
            else:
                message = None
                received = partial.received

        self._log_evicted(evicted)

        if message is None:
            logger.info(
                f'Stored part {sequence}/{total_parts} for reference {reference} '
                f'({received} received)'
            )
            return None

        logger.info(f'Reassembled (concatenated) message: {preview(message)}')
        self._emit(message, reference)
        return message

    def evict_expired(self) -> List[int]:
        """Drop incomplete messages older than the part timeout."""
        with self._lock:
            evicted = self._evict_locked(self._clock())
        self._log_evicted(evicted)
        return [reference for reference, _ in evicted]

    def clear(self) -> None:
        """Forget all incomplete messages."""
        with self._lock:
            self._partials.clear()

    def _evict_locked(self, now: float) -> List[Tuple[int, PartialMessage]]:
        if not self.part_timeout:
            return []
        expired = [
            (ref, partial)
            for ref, partial in self._partials.items()
            if now - partial.created_at >= self.part_timeout
        ]
        for ref, _ in expired:
            del self._partials[ref]
        return expired

    def _log_evicted(self, evicted: List[Tuple[int, PartialMessage]]) -> None:
        for reference, partial in evicted:
            logger.warning(
                f'Evicted incomplete message for reference {reference}: '
                f'{partial.received}/{partial.total_parts} parts after '
                f'{self.part_timeout}s'
            )

    def _emit(self, message: str, reference: Optional[int]) -> None:
        if self.on_message:
            try:
                self.on_message(message, reference)
            except Exception as e:
                logger.exception(f'Error in message handler: {e}')
