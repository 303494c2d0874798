"""Name to id resolution within a single board snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from trello_bulk.models import BoardList, Label


@dataclass
class LabelResolution:
    found: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def resolve_label_ids(all_labels: Iterable[Label], wanted_names: Iterable[str]) -> LabelResolution:
    """Map label names to label ids.

    Matching is exact and case-sensitive. When several labels on the board
    share a requested name the first one in board order is used. Names that
    match nothing are returned in ``missing``; deciding whether that is fatal
    is left to the caller.
    """
    labels = list(all_labels)
    resolution = LabelResolution()

    for name in dict.fromkeys(wanted_names):
        match = next((label for label in labels if label.name == name), None)
        if match is None:
            resolution.missing.append(name)
        elif match.id not in resolution.found:
            resolution.found.append(match.id)

    return resolution


def resolve_target_list(
    target_lists: Iterable[BoardList],
    source_list_name: str,
    name_mapping: Mapping[str, str] | None = None,
) -> BoardList | None:
    """Find the target-board list a source list's cards should go to.

    ``name_mapping`` (source name -> target name) wins over the literal name;
    unmapped lists go to the target list with the same name. Exact match only.
    """
    wanted = (name_mapping or {}).get(source_list_name) or source_list_name
    return next((lst for lst in target_lists if lst.name == wanted), None)
