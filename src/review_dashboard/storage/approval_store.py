"""Approval state stores.

Every store keeps the approved review IDs in memory and exposes the same
operations. The adapters only differ in where (and whether) that state is
written after each change.
"""

import json
import os
import threading
from datetime import datetime, timezone
from importlib import resources
from pathlib import Path
from typing import MutableMapping, Optional, Set

from pydantic import ValidationError

from review_dashboard.models.approval import ApprovalSeed, ApprovalSnapshot
from review_dashboard.utils.logging import logger

SEED_RESOURCE = "approved_reviews.json"


def load_seed() -> ApprovalSeed:
    """Load the bundled default approval state."""
    text = resources.files("review_dashboard.data").joinpath(SEED_RESOURCE).read_text(
        encoding="utf-8"
    )
    return ApprovalSeed.model_validate_json(text)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class ApprovalStore:
    """Set of review IDs approved for public display.

    State is seeded once, on first access. Each mutation is applied under a
    lock so readers never see a half-applied change, then handed to
    _persist(). Persistence is best-effort: a failed write is logged and the
    in-memory change stands.
    """

    def __init__(self, seed: Optional[ApprovalSeed] = None):
        """Initialize approval store.

        Args:
            seed: Initial state; the bundled snapshot when omitted
        """
        self._seed = seed
        self._lock = threading.RLock()
        self._seeded = False
        self._ids: Set[str] = set()
        self._last_modified: str = ""

    def _load(self) -> Optional[ApprovalSeed]:
        """Read previously persisted state, None when there is none."""
        return None

    def _persist(self) -> None:
        """Write the current state to the backing medium."""

    def close(self) -> None:
        """Release the backing medium."""

    def _ensure_seeded(self) -> None:
        with self._lock:
            if self._seeded:
                return

            data = self._load()
            source = "persisted state"
            if data is None:
                data = self._seed if self._seed is not None else load_seed()
                source = "seed snapshot"

            self._ids = set(data.approved_review_ids)
            self._last_modified = data.last_updated
            self._seeded = True

            logger.info(
                f"{type(self).__name__} loaded {len(self._ids)} approved reviews from {source}"
            )

    def current_ids(self) -> Set[str]:
        """Copy of the approved review IDs."""
        self._ensure_seeded()
        with self._lock:
            return set(self._ids)

    def is_approved(self, review_id: str) -> bool:
        self._ensure_seeded()
        with self._lock:
            return review_id in self._ids

    def set_approval(self, review_id: str, approved: bool) -> None:
        """Approve or unapprove a review.

        Setting the state a review already has leaves the ID set unchanged
        but still refreshes the last-modified stamp.

        Args:
            review_id: Review ID
            approved: Whether the review may be shown publicly
        """
        self._ensure_seeded()
        with self._lock:
            if approved:
                self._ids.add(review_id)
            else:
                self._ids.discard(review_id)
            self._last_modified = _now_iso()

            try:
                self._persist()
            except (OSError, TypeError, ValueError) as e:
                logger.error(
                    f"Failed to persist approval change for review {review_id}: {e}"
                )

    def last_modified(self) -> str:
        self._ensure_seeded()
        with self._lock:
            return self._last_modified

    def snapshot(self) -> ApprovalSnapshot:
        """Current state for the approval query."""
        self._ensure_seeded()
        with self._lock:
            return ApprovalSnapshot(
                approved_review_ids=sorted(self._ids),
                total_approved=len(self._ids),
                last_updated=self._last_modified,
            )

    def _document(self) -> dict:
        return {
            "approvedReviewIds": sorted(self._ids),
            "lastUpdated": self._last_modified,
        }


class MemoryApprovalStore(ApprovalStore):
    """Approval state that lives as long as the store object.

    Suits read-only deployments: changes survive between requests served by
    the same process and reset to the seed snapshot on restart.
    """


class FileApprovalStore(ApprovalStore):
    """Approval state persisted to a JSON file."""

    def __init__(self, path: Path, seed: Optional[ApprovalSeed] = None):
        """Initialize file-backed store.

        Args:
            path: JSON file holding the approval state
            seed: Initial state used when the file does not exist yet
        """
        super().__init__(seed)
        self.path = Path(path)

    def _load(self) -> Optional[ApprovalSeed]:
        if not self.path.exists():
            return None

        try:
            return ApprovalSeed.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load approval file {self.path}: {e}")
            return None

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write then rename; the target is never left half-written
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._document(), f, indent=2)
        os.replace(tmp_path, self.path)
        logger.debug(f"Saved approval state to {self.path}")


class LocalApprovalStore(ApprovalStore):
    """Approval state kept in a client-side key-value mapping.

    Mirrors browser local storage: the whole state is a JSON string under a
    single key of a string mapping owned by the client (a shelve database,
    a dict in tests).
    """

    STORAGE_KEY = "approvedReviews"

    def __init__(
        self,
        storage: MutableMapping[str, str],
        seed: Optional[ApprovalSeed] = None,
        key: str = STORAGE_KEY,
    ):
        """Initialize mapping-backed store.

        Args:
            storage: Client-owned string mapping
            seed: Initial state used when the key is missing
            key: Mapping key holding the JSON document
        """
        super().__init__(seed)
        self.storage = storage
        self.key = key

    def _load(self) -> Optional[ApprovalSeed]:
        raw = self.storage.get(self.key)
        if raw is None:
            return None

        try:
            return ApprovalSeed.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable local approval state: {e}")
            return None

    def _persist(self) -> None:
        self.storage[self.key] = json.dumps(self._document())
        sync = getattr(self.storage, "sync", None)
        if callable(sync):
            sync()

    def close(self) -> None:
        """Close the mapping if it holds a resource, like a shelve database."""
        close = getattr(self.storage, "close", None)
        if callable(close):
            close()
