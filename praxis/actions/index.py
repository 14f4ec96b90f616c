"""
praxis.actions.index — The four coupled maps behind the action database.

    by_type         type name -> entries, oldest first
    postconditions  functor name -> (pattern, entry) pairs, newest first
    primitives /    partition of every active entry by its primitive flag
    scripts
    disabled        type name -> disabled entries, oldest first

``IndexSet`` does no locking.  ``ActionDatabase`` holds one lock around
every call so each method here is observed as a single transaction.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set, Tuple

from praxis.actions.entry import Entry
from praxis.fol.terms import Predicate

log = logging.getLogger("praxis.actions.index")

Candidate = Tuple[Predicate, Entry]


class InconsistentStateError(RuntimeError):
    """An index invariant was found violated.  Indicates a programming error."""


class IndexSet:
    def __init__(self) -> None:
        self.by_type: Dict[str, List[Entry]] = {}
        self.postconditions: Dict[str, List[Candidate]] = {}
        self.primitives: Set[Entry] = set()
        self.scripts: Set[Entry] = set()
        self.disabled: Dict[str, List[Entry]] = {}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, entry: Entry) -> None:
        """Make *entry* active under every index.

        An equal entry that is already active is replaced, so the type
        bucket never holds duplicates and the replacement counts as the
        most recent insertion.  Postcondition pairs the replacement still
        declares keep their place in the candidate lists.
        """
        _remove_from_bucket(self.disabled, entry)

        stored = _remove_from_bucket(self.by_type, entry)
        if stored is not None:
            log.debug("Replacing active action %s", entry)
            self.primitives.discard(stored)
            self.scripts.discard(stored)
            self._retarget_postconditions(stored, entry)

        self.by_type.setdefault(entry.type, []).append(entry)
        self._register_postconditions(entry)
        if entry.is_primitive:
            self.primitives.add(entry)
        else:
            self.scripts.add(entry)

    def remove(self, entry: Entry) -> bool:
        """Drop *entry* from every active index.  False if it was not active."""
        stored = _remove_from_bucket(self.by_type, entry)
        if stored is None:
            return False
        # the stored object may carry different effects than an equal *entry*
        self._unregister_postconditions(stored)
        if entry.is_primitive:
            self.primitives.discard(entry)
        else:
            self.scripts.discard(entry)
        return True

    def disable(self, entry: Entry) -> bool:
        """Move *entry* from the active indices into the disabled map."""
        bucket = self.by_type.get(entry.type, [])
        if entry not in bucket:
            return False
        stored = bucket[bucket.index(entry)]
        self.remove(stored)
        self.disabled.setdefault(stored.type, []).append(stored)
        return True

    def _register_postconditions(self, entry: Entry) -> None:
        for effect in entry.postconditions:
            pair = (effect.predicate, entry)
            functor = effect.predicate.name
            candidates = self.postconditions.get(functor)
            log.debug("Registering postcondition %s for %s", effect.predicate, entry)
            if candidates is None:
                self.postconditions[functor] = [pair]
            elif not any(_same_pair(pair, existing) for existing in candidates):
                candidates.insert(0, pair)

    def _retarget_postconditions(self, old: Entry, new: Entry) -> None:
        """Point *old*'s pairs at *new* in place, dropping patterns *new* lacks."""
        kept = {e.predicate for e in new.postconditions}
        for functor in {e.predicate.name for e in old.postconditions}:
            candidates = self.postconditions.get(functor)
            if candidates is None:
                continue
            remaining = []
            for pattern, owner in candidates:
                if owner != old:
                    remaining.append((pattern, owner))
                elif pattern in kept:
                    remaining.append((pattern, new))
            if remaining:
                self.postconditions[functor] = remaining
            else:
                del self.postconditions[functor]

    def _unregister_postconditions(self, entry: Entry) -> None:
        for functor in {e.predicate.name for e in entry.postconditions}:
            candidates = self.postconditions.get(functor)
            if candidates is None:
                continue
            log.debug("Removing postconditions under %s for %s", functor, entry)
            remaining = [pair for pair in candidates if pair[1] != entry]
            if remaining:
                self.postconditions[functor] = remaining
            else:
                del self.postconditions[functor]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_active(self, entry: Entry) -> bool:
        return entry in self.by_type.get(entry.type, ())

    def newest(self, type_name: str) -> Optional[Entry]:
        bucket = self.by_type.get(type_name)
        return bucket[-1] if bucket else None

    def newest_disabled(self, type_name: str) -> Optional[Entry]:
        bucket = self.disabled.get(type_name)
        return bucket[-1] if bucket else None

    def bucket(self, type_name: str) -> List[Entry]:
        return list(self.by_type.get(type_name, ()))

    def candidates(self, functor: str) -> List[Candidate]:
        return list(self.postconditions.get(functor, ()))

    # ------------------------------------------------------------------
    # Consistency
    # ------------------------------------------------------------------

    def verify(self) -> None:
        """Raise ``InconsistentStateError`` if any cross-index invariant fails."""
        active: List[Entry] = [e for bucket in self.by_type.values() for e in bucket]
        active_set = set(active)

        if len(active) != len(active_set):
            raise InconsistentStateError("Duplicate entries in the type index")
        for type_name, bucket in self.by_type.items():
            if not bucket:
                raise InconsistentStateError(f"Empty type bucket left for {type_name!r}")
            for entry in bucket:
                if entry.type != type_name:
                    raise InconsistentStateError(f"{entry} filed under {type_name!r}")

        for entry in active:
            in_primitives = entry in self.primitives
            in_scripts = entry in self.scripts
            if in_primitives == in_scripts:
                raise InconsistentStateError(
                    f"{entry} must be in exactly one of primitives/scripts"
                )
            if in_primitives != entry.is_primitive:
                raise InconsistentStateError(f"{entry} is in the wrong partition")
            for effect in entry.postconditions:
                candidates = self.postconditions.get(effect.predicate.name, ())
                if not any(_same_pair((effect.predicate, entry), c) for c in candidates):
                    raise InconsistentStateError(
                        f"{entry} unreachable from postcondition {effect.predicate}"
                    )

        stray = (self.primitives | self.scripts) - active_set
        if stray:
            raise InconsistentStateError(f"Partition holds inactive entries: {stray}")

        for functor, candidates in self.postconditions.items():
            for i, pair in enumerate(candidates):
                if pair[1] not in active_set:
                    raise InconsistentStateError(
                        f"Postcondition index {functor!r} references inactive {pair[1]}"
                    )
                if any(_same_pair(pair, other) for other in candidates[i + 1 :]):
                    raise InconsistentStateError(
                        f"Duplicate registration {pair[0]} for {pair[1]} under {functor!r}"
                    )

        for type_name, bucket in self.disabled.items():
            for entry in bucket:
                if entry in active_set:
                    raise InconsistentStateError(f"{entry} is both active and disabled")


def _same_pair(a: Candidate, b: Candidate) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def _remove_from_bucket(buckets: Dict[str, List[Entry]], entry: Entry) -> Optional[Entry]:
    """Remove the stored entry equal to *entry* and return it."""
    bucket = buckets.get(entry.type)
    if not bucket or entry not in bucket:
        return None
    stored = bucket.pop(bucket.index(entry))
    if not bucket:
        del buckets[entry.type]
    return stored
