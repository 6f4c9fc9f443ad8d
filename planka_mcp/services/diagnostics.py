"""Connectivity check against a live Planka instance.

Walks the chain an agent would follow: the current user, all projects, the
first project's boards, the first board's lists and then the cards of the
first list that has any. Each step is reported as it completes. An empty
level stops the walk early without failing it.
"""

from collections.abc import Sequence
from typing import TextIO

from ..exceptions import ResolutionError
from ..models.planka import PlankaModel
from .resolver import PlankaResolver

# Entries listed per level before the rest are summarised
LISTING_LIMIT = 5


class CheckReport:
    """Writes step results to a text stream."""

    def __init__(self, out: TextIO):
        self.out = out

    def step(self, title: str) -> None:
        print(f"\n{title}...", file=self.out)

    def ok(self, message: str) -> None:
        print(f"  ok: {message}", file=self.out)

    def failed(self, error: ResolutionError) -> None:
        print(f"  FAILED: {error.message}", file=self.out)

    def note(self, message: str) -> None:
        print(f"  {message}", file=self.out)

    def listing(self, noun: str, entries: Sequence[PlankaModel]) -> None:
        self.ok(f"found {len(entries)} {noun}(s)")
        for number, entry in enumerate(entries[:LISTING_LIMIT], start=1):
            name = getattr(entry, "name", None) or "(unnamed)"
            self.note(f"{number}. {name} (id {entry.id})")
        if len(entries) > LISTING_LIMIT:
            self.note(f"... and {len(entries) - LISTING_LIMIT} more")


async def run_checks(resolver: PlankaResolver, out: TextIO) -> bool:
    """Run the read-only walk and report each step to ``out``.

    Returns:
        True if every step that ran succeeded
    """
    report = CheckReport(out)

    report.step("Getting current user")
    try:
        user = await resolver.get_me()
    except ResolutionError as e:
        report.failed(e)
        return False
    who = user.username or user.name or user.id
    report.ok(f"logged in as {who}" + (f" ({user.email})" if user.email else ""))

    report.step("Getting projects")
    try:
        projects = await resolver.get_projects()
    except ResolutionError as e:
        report.failed(e)
        return False
    report.listing("project", projects)
    if not projects:
        report.note("no projects, skipping further checks")
        return True

    report.step(f"Getting boards of project {projects[0].name or projects[0].id}")
    try:
        boards = await resolver.get_boards(projects[0].id)
    except ResolutionError as e:
        report.failed(e)
        return False
    report.listing("board", boards)
    if not boards:
        report.note("no boards, skipping further checks")
        return True

    report.step(f"Getting lists of board {boards[0].name or boards[0].id}")
    try:
        lists = await resolver.get_lists(boards[0].id)
    except ResolutionError as e:
        report.failed(e)
        return False
    report.listing("list", lists)
    if not lists:
        report.note("no lists, skipping further checks")
        return True

    for board_list in lists:
        report.step(f"Getting cards of list {board_list.name or board_list.id}")
        try:
            cards = await resolver.get_cards(board_list.id)
        except ResolutionError as e:
            report.failed(e)
            return False
        report.listing("card", cards)
        if cards:
            break
    return True
