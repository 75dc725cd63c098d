#===============================================================================
#  LeaderKey | search.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Free-text search over the whole tree. Case-insensitive substring match on
#  label, key and (actions only) value. Results come back in pre-order; there
#  is no ranking.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import List, Sequence, Tuple

from .models import Group, MatchField, Node, RootConfig, SearchResult


def search_all_items(config: RootConfig, query: str) -> List[SearchResult]:
    results: List[SearchResult] = []
    lower_query = query.lower()

    def traverse(
        items: Sequence[Node],
        current_path: Tuple[str, ...],
        current_keys: Tuple[str, ...],
        current_labels: Tuple[str, ...],
    ) -> None:
        for item in items:
            item_path = current_path + (item.id,)
            item_keys = current_keys + (item.key,)
            item_labels = current_labels + (item.label or item.key,)

            label_match = bool(item.label) and lower_query in item.label.lower()
            key_match = lower_query in item.key.lower()
            value_match = not isinstance(item, Group) and lower_query in item.value.lower()

            if label_match or key_match or value_match:
                if label_match:
                    matched_on = MatchField.LABEL.value
                elif value_match:
                    matched_on = MatchField.VALUE.value
                else:
                    matched_on = MatchField.KEY.value
                results.append(SearchResult(item, item_path, item_keys, item_labels, matched_on))

            if isinstance(item, Group):
                traverse(item.actions, item_path, item_keys, item_labels)

    traverse(config.actions, (), (), ())
    return results
