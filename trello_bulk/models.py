"""Board snapshot records and per-card mutation intents.

Trello returns very wide card and list payloads. Only the fields the bulk
operations read are kept here; everything else in the response is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Union


@dataclass(frozen=True)
class Label:
    id: str
    name: str = ""
    color: str | None = None
    id_board: str | None = None

    @property
    def display_name(self) -> str:
        """Label name, or its color for unnamed labels"""
        return self.name or self.color or ""

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Label:
        return cls(
            id=payload["id"],
            name=payload.get("name") or "",
            color=payload.get("color"),
            id_board=payload.get("idBoard"),
        )


@dataclass(frozen=True)
class BoardList:
    id: str
    name: str
    pos: float = 0
    closed: bool = False

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> BoardList:
        return cls(
            id=payload["id"],
            name=payload.get("name", ""),
            pos=payload.get("pos") or 0,
            closed=bool(payload.get("closed", False)),
        )


@dataclass(frozen=True)
class Card:
    id: str
    name: str
    id_list: str
    label_ids: tuple[str, ...] = ()
    labels: tuple[Label, ...] = ()
    closed: bool = False
    pos: float = 0
    short_link: str | None = None

    @property
    def label_names(self) -> set[str]:
        return {label.name for label in self.labels}

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Card:
        """Build a card from a board payload entry.

        ``idLabels`` is authoritative for the label id set; when a payload only
        carries embedded ``labels`` the ids are taken from those instead.
        """
        labels = tuple(Label.from_api(lbl) for lbl in payload.get("labels") or [])
        raw_ids = payload.get("idLabels")
        if raw_ids is None:
            raw_ids = [label.id for label in labels]

        return cls(
            id=payload["id"],
            name=payload.get("name", ""),
            id_list=payload.get("idList", ""),
            label_ids=tuple(dict.fromkeys(raw_ids)),
            labels=labels,
            closed=bool(payload.get("closed", False)),
            pos=payload.get("pos") or 0,
            short_link=payload.get("shortLink"),
        )


@dataclass(frozen=True)
class Board:
    id: str
    name: str = ""
    lists: tuple[BoardList, ...] = ()
    labels: tuple[Label, ...] = ()
    cards: tuple[Card, ...] = ()

    def list_by_id(self, list_id: str) -> BoardList | None:
        return next((lst for lst in self.lists if lst.id == list_id), None)

    def labels_by_id(self) -> dict[str, Label]:
        return {label.id: label for label in self.labels}

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Board:
        lists = sorted(
            (BoardList.from_api(lst) for lst in payload.get("lists") or []),
            key=lambda lst: lst.pos,
        )
        return cls(
            id=payload["id"],
            name=payload.get("name", ""),
            lists=tuple(lists),
            labels=tuple(Label.from_api(lbl) for lbl in payload.get("labels") or []),
            cards=tuple(Card.from_api(card) for card in payload.get("cards") or []),
        )


CardFilter = Callable[[Card], bool]

# Fields Trello copies from the source card when creating a card by reference
DEFAULT_KEEP_FROM_SOURCE: tuple[str, ...] = ("start", "due", "dueReminder", "labels")


@dataclass(frozen=True)
class AddLabels:
    label_ids: tuple[str, ...]


@dataclass(frozen=True)
class CopyToList:
    list_id: str
    list_name: str
    keep_from_source: tuple[str, ...] = DEFAULT_KEEP_FROM_SOURCE


@dataclass(frozen=True)
class SetClosed:
    closed: bool = True


@dataclass(frozen=True)
class DeleteCard:
    pass


MutationIntent = Union[AddLabels, CopyToList, SetClosed, DeleteCard]


@dataclass(frozen=True)
class PlannedMutation:
    """One card and the change computed for it"""

    card: Card
    intent: MutationIntent
    description: str = field(default="", compare=False)
