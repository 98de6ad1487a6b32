"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/planner.py
Turns a duplicate group and its scope partition into keep/delete/skip decisions.

POLICIES
--------
Manual    : the operator picks the copy to keep among the eligible members,
            or abstains (0 / out of range) and every eligible member is skipped.
Automatic : if every copy is eligible, the first one (discovery order) is kept and
            the rest deleted. If at least one copy lives outside the authorized roots,
            every eligible copy is deleted, since the outside copy already survives.

A group without any eligible member is skipped entirely, whatever the policy.
The KEEP decision of a group always comes first in the returned list.
"""

import logging
from typing import List, Optional

from dupescope.core.interfaces import KeepSelector
from dupescope.core.models import DeletionDecision, DuplicateGroup, Policy, ScopePartition

logger = logging.getLogger(__name__)


class DeletionPlanner:
    """Computes decisions for one group at a time. Holds no state between groups."""

    def plan(
            self,
            group: DuplicateGroup,
            partition: ScopePartition,
            policy: Policy,
            dry_run: bool,
            prompt_for_keep_index: Optional[KeepSelector] = None
    ) -> List[DeletionDecision]:
        """
        Args:
            group: Duplicate group with 2+ members
            partition: Eligible/ineligible split of the group members
            policy: Manual or automatic
            dry_run: Marks DELETE decisions as simulated
            prompt_for_keep_index: Required for the manual policy

        Returns:
            Decisions in log order (KEEP first)

        Raises:
            ValueError: Manual policy without a prompt collaborator
        """
        if not partition.eligible:
            logger.debug(f"No deletable copy for {group.fingerprint}, skipping group")
            return [DeletionDecision.skip(f.path, group) for f in group.files]

        if policy == Policy.MANUAL:
            return self._plan_manual(group, partition, dry_run, prompt_for_keep_index)
        return self._plan_automatic(group, partition, dry_run)

    @staticmethod
    def _plan_manual(
            group: DuplicateGroup,
            partition: ScopePartition,
            dry_run: bool,
            prompt_for_keep_index: Optional[KeepSelector]
    ) -> List[DeletionDecision]:
        if prompt_for_keep_index is None:
            raise ValueError("Manual policy requires a keep selector")

        candidates = [f.path for f in partition.eligible]
        keep_index = prompt_for_keep_index(group.fingerprint, candidates)

        if not isinstance(keep_index, int) or not 1 <= keep_index <= len(candidates):
            logger.debug(f"Selection {keep_index!r} for {group.fingerprint}: skipping eligible copies")
            return [DeletionDecision.skip(path, group) for path in candidates]

        kept = candidates[keep_index - 1]
        decisions = [DeletionDecision.keep(kept, group)]
        decisions.extend(
            DeletionDecision.delete(path, group, dry_run=dry_run)
            for i, path in enumerate(candidates, 1) if i != keep_index
        )
        return decisions

    @staticmethod
    def _plan_automatic(
            group: DuplicateGroup,
            partition: ScopePartition,
            dry_run: bool
    ) -> List[DeletionDecision]:
        candidates = [f.path for f in partition.eligible]
        decisions = []

        if partition.covers_whole_group:
            decisions.append(DeletionDecision.keep(candidates[0], group))
            candidates = candidates[1:]

        decisions.extend(DeletionDecision.delete(path, group, dry_run=dry_run) for path in candidates)
        return decisions
