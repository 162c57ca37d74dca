#!/usr/bin/env python3
"""
Kanban Session Module

``KanbanSession`` is the single owner of the live Board. It turns user and
policy commands into pipeline calls, commits the resulting Board, records
it in the undo history, schedules an autosave, and publishes advisory
notifications. Presenters (the CLI, tests, a UI) talk only to the session.
"""

from __future__ import annotations

import asyncio
import logging
import random as _random
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from .config import SimulationConfig, resolve_storage_dir
from .config.simulation import BoardDefaults
from .domain.board import Board
from .domain.card import Card
from .domain.card_factory import CardFactory
from .domain.stage import Stage
from .domain.wip import WipLimits
from .domain.work_items import WorkerType
from .domain.worker import RandomFn, Worker
from .history import DEFAULT_MAX_DEPTH, HistoryManager
from .notifications import NotificationHub
from .pipeline.assign_worker import assign_worker as assign_worker_to_card
from .pipeline.day_executor import DayResult
from .pipeline.day_executor import advance_day as run_day
from .pipeline.move_card import move_card as move_card_on_board
from .pipeline.policy import PolicyType, run_policy_day
from .pipeline.policy_runner import CancellationToken, PolicyRunner, validate_days
from .storage.autosave import AutosaveScheduler
from .storage.json_export import ImportResult, ImportSuccess, export_board, import_board_text
from .storage.state_repository import StateRepository
from .storage.stores import FileKeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolicyRunSummary:
    days_completed: int
    cards_completed: int
    cancelled: bool
    last_day: int


def _newly_completed(before: Iterable[Card], after: Iterable[Card]) -> Tuple[str, ...]:
    done_before = {card.id for card in before if card.stage is Stage.DONE}
    return tuple(
        card.id for card in after if card.stage is Stage.DONE and card.id not in done_before
    )


def _session_seed(seed: int, board: Optional[Board]) -> str:
    """Seed for one session, keyed on where the saved board left off.

    Reopening a board continues with fresh draws instead of replaying the
    first session's, while the same command sequence still reproduces.
    """
    day, card_count = (board.current_day, len(board.cards)) if board is not None else (0, 0)
    return f"{seed}:{day}:{card_count}"


class KanbanSession:
    """Owns one Board plus its history, persistence and notifications.

    Args:
        board: Starting board; a fresh board from ``defaults`` when omitted
        repository: Explicit save/load channel; saving is disabled without one
        autosave: Debounced background saver, usually wrapping ``repository``
        history_depth: Undo depth
        random: Uniform [0, 1) source for card generation and worker output
        defaults: Seed for fresh boards (WIP limits and initial workers)
        policy_type: Policy used by ``run_policy``
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        *,
        repository: Optional[StateRepository] = None,
        autosave: Optional[AutosaveScheduler] = None,
        history_depth: int = DEFAULT_MAX_DEPTH,
        random: Optional[RandomFn] = None,
        defaults: Optional[BoardDefaults] = None,
        policy_type: PolicyType = PolicyType.SILOTED_EXPERT,
        notifications: Optional[NotificationHub] = None,
    ):
        self.repository = repository
        self.autosave = autosave
        self.defaults = defaults or BoardDefaults()
        self.policy_type = PolicyType(policy_type)
        self.notifications = notifications or NotificationHub()
        self._random: RandomFn = random or _random.random
        self._board = board if board is not None else self._fresh_board()
        self._history = HistoryManager(max_depth=history_depth).push("Initial state", self._board)
        self._token: Optional[CancellationToken] = None

    @classmethod
    def from_config(
        cls,
        config: SimulationConfig,
        notifications: Optional[NotificationHub] = None,
    ) -> "KanbanSession":
        """Build a file-backed session, resuming the saved board if there is one."""
        store = FileKeyValueStore(resolve_storage_dir(config.storage.directory))
        repository = StateRepository(
            store,
            state_key=config.storage.state_key,
            autosave_key=config.storage.autosave_key,
        )
        autosave = AutosaveScheduler(repository, config.storage.autosave_debounce_seconds)
        board = repository.load_board()

        seed = config.simulation.random_seed
        rng = _random.Random(_session_seed(seed, board)).random if seed is not None else None

        return cls(
            board,
            repository=repository,
            autosave=autosave,
            history_depth=config.history.max_depth,
            random=rng,
            defaults=config.board,
            policy_type=PolicyType(config.simulation.policy_type),
            notifications=notifications,
        )

    def _fresh_board(self) -> Board:
        workers = tuple(Worker(id=seed.id, type=seed.type) for seed in self.defaults.workers)
        return Board(workers=workers, wip_limits=self.defaults.wip_limits)

    # ---- accessors ----
    @property
    def board(self) -> Board:
        return self._board

    @property
    def cards(self) -> Tuple[Card, ...]:
        return self._board.cards

    def cards_in_stage(self, stage: Stage) -> Tuple[Card, ...]:
        return self._board.get_cards_by_stage(stage)

    @property
    def workers(self) -> Tuple[Worker, ...]:
        return self._board.workers

    @property
    def current_day(self) -> int:
        return self._board.current_day

    @property
    def is_running(self) -> bool:
        return self._token is not None

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    @property
    def history(self) -> HistoryManager:
        return self._history

    # ---- commit plumbing ----
    def _commit(self, board: Board, action: str) -> Board:
        self._board = board
        self._history = self._history.push(action, board)
        self._schedule_autosave()
        logger.debug("Committed '%s' at day %d", action, board.current_day)
        return board

    def _schedule_autosave(self) -> None:
        if self.autosave is not None:
            self.autosave.schedule(self._board)

    # ---- card commands ----
    def move_card(self, card_id: str) -> Optional[str]:
        """Click a card. Returns the WIP rejection message, if any."""
        result = move_card_on_board(
            card_id, self._board.cards, self._board.current_day, self._board.wip_limits
        )
        if result.alert_message:
            self.notifications.warning(result.alert_message)
            return result.alert_message
        if result.cards != self._board.cards:
            self._commit(self._board.with_cards(result.cards), f"Move card {card_id}")
        return None

    def assign_worker(self, card_id: str, worker_id: str) -> bool:
        cards = assign_worker_to_card(card_id, worker_id, self._board.cards, self._board.workers)
        if cards == self._board.cards:
            return False
        self._commit(self._board.with_cards(cards), f"Assign {worker_id} to {card_id}")
        return True

    def add_card(self) -> Card:
        card = CardFactory.create(
            CardFactory.next_id(self._board.cards), self._board.current_day, self._random
        )
        self._commit(self._board.add_card(card), f"Add card {card.id}")
        return card

    def toggle_block(self, card_id: str) -> Optional[Card]:
        card = self._board.find_card(card_id)
        if card is None:
            return None
        toggled = card.with_blocked(not card.is_blocked)
        action = "Block" if toggled.is_blocked else "Unblock"
        self._commit(self._board.update_card(card_id, lambda _: toggled), f"{action} card {card_id}")
        return toggled

    # ---- days ----
    def _apply_day(self, result: DayResult, action: str) -> Tuple[str, ...]:
        completed = _newly_completed(self._board.cards, result.cards)
        board = self._board.with_cards(result.cards).with_current_day(result.new_day)
        self._commit(board, action)
        return completed

    def advance_day(self) -> Optional[Board]:
        """Run one manual day. Ignored while a policy run is in flight."""
        if self.is_running:
            logger.info("Ignoring manual day advance while a policy run is in progress")
            return None

        result = run_day(
            self._board.cards, self._board.current_day, self._board.wip_limits, self._random
        )
        completed = self._apply_day(result, f"Advance to day {result.new_day}")

        self.notifications.info(f"Day {result.new_day}")
        for card_id in completed:
            self.notifications.success(f"Card {card_id} completed!")
        return self._board

    async def run_policy(self, days: int) -> Optional[PolicyRunSummary]:
        """Run the autonomous policy for ``days`` days, one day per event-loop tick.

        Returns None without doing anything if a run is already in flight.
        """
        validate_days(days)
        if self.is_running:
            logger.info("Policy run already in progress; ignoring request for %d days", days)
            return None

        token = CancellationToken()
        self._token = token
        cards_completed = 0

        def step() -> DayResult:
            board = self._board
            return run_policy_day(
                board.cards,
                board.workers,
                board.current_day,
                board.wip_limits,
                self._random,
                self.policy_type,
            )

        def commit(result: DayResult) -> None:
            nonlocal cards_completed
            cards_completed += len(self._apply_day(result, f"Policy day {result.new_day}"))

        logger.info("Starting %s policy run for %d days", self.policy_type.value, days)
        self.notifications.info(f"Running {self.policy_type.value} for {days} days...")

        try:
            committed = await PolicyRunner(step, commit).run(days, token)
        finally:
            self._token = None

        cancelled = token.cancelled and committed < days
        summary = PolicyRunSummary(
            days_completed=committed,
            cards_completed=cards_completed,
            cancelled=cancelled,
            last_day=self._board.current_day,
        )

        if cancelled:
            logger.info("Policy run cancelled after %d of %d days", committed, days)
            self.notifications.warning(f"Policy cancelled at day {summary.last_day}")
        else:
            logger.info(
                "Policy run finished: %d days, %d cards completed", committed, cards_completed
            )
            self.notifications.success(f"Policy completed. {cards_completed} card(s) finished.")
        return summary

    def run_policy_sync(self, days: int) -> Optional[PolicyRunSummary]:
        return asyncio.run(self.run_policy(days))

    def cancel_policy(self) -> bool:
        """Request cancellation of the in-flight run. False if nothing is running."""
        if self._token is None:
            return False
        self._token.cancel()
        return True

    # ---- history ----
    def undo(self) -> Optional[Board]:
        result = self._history.undo()
        if result is None:
            return None
        self._history = result.manager
        self._board = result.state
        self._schedule_autosave()
        return self._board

    def redo(self) -> Optional[Board]:
        result = self._history.redo()
        if result is None:
            return None
        self._history = result.manager
        self._board = result.state
        self._schedule_autosave()
        return self._board

    # ---- workers and limits ----
    def _next_worker_id(self, worker_type: WorkerType) -> str:
        prefix = worker_type.value[0].upper()
        pattern = re.compile(rf"^{prefix}(\d+)$")
        taken = [
            int(match.group(1))
            for match in (pattern.match(worker.id) for worker in self._board.workers)
            if match
        ]
        return f"{prefix}{max(taken, default=0) + 1}"

    def add_worker(self, worker_type: WorkerType) -> Worker:
        worker_type = WorkerType(worker_type)
        worker = Worker(id=self._next_worker_id(worker_type), type=worker_type)
        self._commit(self._board.add_worker(worker), f"Add worker {worker.id}")
        return worker

    def delete_worker(self, worker_id: str) -> bool:
        """Remove a worker and take it off any card it was assigned to."""
        if self._board.find_worker(worker_id) is None:
            return False
        board = self._board.remove_worker(worker_id).with_cards(
            card.remove_worker(worker_id) if card.has_worker(worker_id) else card
            for card in self._board.cards
        )
        self._commit(board, f"Delete worker {worker_id}")
        return True

    def set_wip_limit(self, column: str, min_limit: int, max_limit: int) -> WipLimits:
        limits = self._board.wip_limits.with_column_limit(
            column, {"min": min_limit, "max": max_limit}
        )
        self._commit(self._board.with_wip_limits(limits), f"Set WIP limit for {column}")
        return limits

    # ---- persistence ----
    def save(self) -> bool:
        """Write the board through the explicit save channel."""
        if self.repository is None:
            return False
        saved = self.repository.save_board(self._board)
        if not saved:
            self.notifications.error("Could not save board: storage quota exceeded")
        return saved

    def export_json(self) -> str:
        return export_board(self._board)

    def import_json(self, text: Union[str, bytes]) -> ImportResult:
        """Replace the board with an exported one. Failures leave the board untouched."""
        result = import_board_text(text)
        if isinstance(result, ImportSuccess):
            self._commit(result.value, "Import board")
            self.notifications.success("Board imported")
        else:
            self.notifications.error(f"Import failed: {result.error.message}")
        return result

    def reset(self, clear_storage: bool = False) -> Board:
        """Start over with a fresh board built from the configured defaults."""
        if clear_storage and self.repository is not None:
            if self.autosave is not None:
                self.autosave.cancel()
            self.repository.clear_board()
        return self._commit(self._fresh_board(), "Reset board")

    def close(self) -> None:
        """Write any pending autosave."""
        if self.autosave is not None:
            self.autosave.flush()
