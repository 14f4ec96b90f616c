"""
praxis.actions.database — The action knowledge base.

Answers the two questions a goal-directed agent asks at run time:

  - "what can achieve this goal?"        ``get_actions_by_effect``
  - "what can I call with these args?"   ``get_actions_by_signature``

plus plain lookup by action type.  Definitions can be inserted,
removed, or disabled while the agent runs.

Concurrency: a single re-entrant lock guards the whole ``IndexSet``.
Every public method holds it for its full duration, so no caller sees
a half-applied insert or removal.  The injected ``Matcher`` is called
while the lock is held and must be synchronous.

Nothing here raises for "not found": lookups return ``None`` or an
empty list and log a warning.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Sequence, Set, Union

from praxis.actions.entry import Entry
from praxis.actions.index import Candidate, IndexSet
from praxis.fol.matcher import Matcher, StructuralMatcher
from praxis.fol.terms import Predicate, Symbol, Term

log = logging.getLogger("praxis.actions.database")

#: Functor that wraps a goal as ``goal(actor, state)``.
GOAL_FUNCTOR = "goal"


class ActionDatabase:
    """Thread-safe store of action entries indexed by type, effect and signature."""

    def __init__(self, matcher: Optional[Matcher] = None) -> None:
        self.matcher: Matcher = matcher if matcher is not None else StructuralMatcher()
        self._index = IndexSet()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def put_action(self, entry: Entry) -> None:
        """Insert *entry*, re-activating it if it was disabled."""
        if not isinstance(entry, Entry):
            log.warning("Attempting to insert invalid action %r. Ignoring request.", entry)
            return
        with self._lock:
            log.debug("Adding action to database: %s", entry)
            self._index.insert(entry)

    def remove_action(self, entry: Optional[Entry]) -> bool:
        """Remove *entry* from every index.  Returns False on a no-op."""
        if entry is None:
            log.warning("Attempting to remove null action. Ignoring request.")
            return False
        if not isinstance(entry, Entry):
            log.warning("Attempting to remove invalid action %r. Ignoring request.", entry)
            return False
        with self._lock:
            removed = self._index.remove(entry)
        if not removed:
            log.warning("Attempting to remove unknown action %s. Ignoring request.", entry)
        return removed

    def disable_action(self, entry: Optional[Entry]) -> bool:
        """Take *entry* out of service but keep it under its type for later."""
        if entry is None:
            log.warning("Attempting to disable null action. Ignoring request.")
            return False
        if not isinstance(entry, Entry):
            log.warning("Attempting to disable invalid action %r. Ignoring request.", entry)
            return False
        with self._lock:
            disabled = self._index.disable(entry)
        if disabled:
            log.info("Disabled action %s", entry)
        else:
            log.warning("Attempting to disable inactive action %s. Ignoring request.", entry)
        return disabled

    def remove_actions_with_signature(self, signature: Predicate) -> List[Entry]:
        """Remove every entry the signature lookup resolves to."""
        with self._lock:
            matches = self.get_actions_by_signature(signature)
            for entry in matches:
                self._index.remove(entry)
        log.debug("Removed %d action(s) matching %s", len(matches), signature)
        return matches

    def remove_scripts(self) -> int:
        """Remove all script (non-primitive) actions, e.g. before a reload."""
        with self._lock:
            scripts = list(self._index.scripts)
            for entry in scripts:
                self._index.remove(entry)
        log.info("Removed %d script action(s)", len(scripts))
        return len(scripts)

    # ------------------------------------------------------------------
    # Lookup by type
    # ------------------------------------------------------------------

    def get_action(
        self,
        type_name: str,
        role_types: Optional[Sequence[str]] = None,
        *,
        actor: Optional[Term] = None,
        input_role_types: Optional[Sequence[str]] = None,
    ) -> Optional[Entry]:
        """Newest entry for *type_name*, optionally filtered.

        - ``role_types``: exact match on the entry's non-local role types.
        - ``actor`` / ``input_role_types``: exact match on the input role
          types after the actor role, and the actor must be acceptable
          to the entry's actor role.
        """
        with self._lock:
            if role_types is None and actor is None and input_role_types is None:
                entry = self._index.newest(type_name)
            else:
                entry = self._find_in_bucket(type_name, role_types, actor, input_role_types)

        if entry is None:
            if role_types is not None:
                log.warning(
                    "[get_action] Could not find action for type %s with role types %s",
                    type_name,
                    list(role_types),
                )
            elif actor is not None or input_role_types is not None:
                log.warning(
                    "[get_action] Could not find action for type %s with role types %s (for actor %s)",
                    type_name,
                    list(input_role_types or ()),
                    actor,
                )
            else:
                log.warning("[get_action] Could not find action for type: %s", type_name)
        return entry

    def _find_in_bucket(
        self,
        type_name: str,
        role_types: Optional[Sequence[str]],
        actor: Optional[Term],
        input_role_types: Optional[Sequence[str]],
    ) -> Optional[Entry]:
        for entry in reversed(self._index.bucket(type_name)):
            if role_types is not None and entry.non_local_role_types != tuple(role_types):
                continue
            if actor is not None or input_role_types is not None:
                if entry.input_role_types != tuple(input_role_types or ()):
                    continue
                if actor is not None and not self.matcher.accepts_actor(actor, entry.actor_types):
                    continue
            return entry
        return None

    def action_exists_by_type(self, type_name: str) -> bool:
        with self._lock:
            return self._index.newest(type_name) is not None

    def get_disabled_action(self, type_name: str) -> Optional[Entry]:
        """Newest disabled entry for *type_name*, or None."""
        with self._lock:
            entry = self._index.newest_disabled(type_name)
        if entry is None:
            log.warning("[get_disabled_action] Could not find action for type: %s", type_name)
        return entry

    # ------------------------------------------------------------------
    # Lookup by effect / signature
    # ------------------------------------------------------------------

    def get_actions_by_effect(self, actor: Optional[Term], effect: Predicate) -> List[Entry]:
        """Entries with a postcondition that *effect* instantiates.

        Newer registrations come first.  When *actor* is given only
        entries whose actor role accepts it are returned.
        """
        log.debug("Looking up actions by effect %s (actor=%s)", effect, actor)
        with self._lock:
            candidates = self._index.candidates(effect.name)
            return self._filter_candidates(effect, candidates, actor)

    def get_actions_by_signature(self, signature: Predicate) -> List[Entry]:
        """Entries callable as *signature*, e.g. ``pickUp(robot1, cup1)``."""
        log.debug("Looking up actions by signature %s", signature)
        with self._lock:
            candidates: List[Candidate] = [
                (variant, entry)
                for entry in self._index.bucket(signature.name)
                for variant in entry.signature_options()
            ]
            if not candidates:
                return []
            actor = signature.get(0) if signature.size() > 0 else None
            return self._filter_candidates(signature, candidates, actor)

    def action_exists(self, goal: Predicate) -> bool:
        """True if some action achieves *goal* or is callable as *goal*.

        ``goal(actor, state)`` is looked up as the effect ``state`` for
        ``actor``; anything else is taken as the effect itself.
        """
        with self._lock:
            if goal.name == GOAL_FUNCTOR and goal.size() == 2 and isinstance(goal.get(1), Predicate):
                by_effect = self.get_actions_by_effect(goal.get(0), goal.get(1))  # type: ignore[arg-type]
            else:
                by_effect = self.get_actions_by_effect(None, goal)
            by_signature = self.get_actions_by_signature(goal)
        return bool(by_effect) or bool(by_signature)

    def _filter_candidates(
        self,
        query: Predicate,
        candidates: Sequence[Candidate],
        actor: Optional[Term],
    ) -> List[Entry]:
        results: List[Entry] = []
        for pattern, entry in candidates:
            if entry in results:
                continue
            if not self.matcher.instance_of(pattern, query):
                continue
            if actor is not None and not self.matcher.accepts_actor(actor, entry.actor_types):
                continue
            results.append(entry)
        return results

    # ------------------------------------------------------------------
    # Snapshots / introspection
    # ------------------------------------------------------------------

    def get_all_actions(self) -> Set[Entry]:
        with self._lock:
            return set(self._index.primitives) | set(self._index.scripts)

    def get_primitives(self) -> Set[Entry]:
        with self._lock:
            return set(self._index.primitives)

    def get_scripts(self) -> Set[Entry]:
        with self._lock:
            return set(self._index.scripts)

    def get_action_signatures_for_name(self, name: Union[str, Symbol]) -> List[Predicate]:
        """One canonical signature per entry registered under *name*."""
        type_name = name.name if isinstance(name, Symbol) else name
        with self._lock:
            return [entry.signature for entry in self._index.bucket(type_name)]

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "types": len(self._index.by_type),
                "primitives": len(self._index.primitives),
                "scripts": len(self._index.scripts),
                "postcondition_functors": len(self._index.postconditions),
                "disabled": sum(len(b) for b in self._index.disabled.values()),
            }

    def check_invariants(self) -> None:
        """Raise ``InconsistentStateError`` if the indices disagree."""
        with self._lock:
            self._index.verify()

    def __len__(self) -> int:
        with self._lock:
            return len(self._index.primitives) + len(self._index.scripts)
