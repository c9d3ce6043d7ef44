"""Tests for the local-only StageOrder and ClearStaged use cases."""

import asyncio

import pytest

from stall.application.board_state import BoardState
from stall.application.clear_staged import ClearStagedHandler
from stall.application.confirm_orders import ConfirmOrdersHandler
from stall.application.refresh_board import RefreshBoardHandler
from stall.application.stage_order import StageOrderHandler
from stall.domain.exceptions import TicketsExhaustedError, ValidationError
from stall.domain.model.menu import ItemKind
from stall.domain.model.value_objects import Money
from tests.fakes import FakeOrderStore, open_orders

APPLE = ItemKind.APPLE
BANANA = ItemKind.BANANA


def _state(*apple_tickets: int) -> BoardState:
    state = BoardState()
    state.replace_orders(open_orders(APPLE, *apple_tickets))
    return state


class TestStageOrder:

    def test_stage_takes_lowest_ticket(self):
        state = _state()
        dto = StageOrderHandler(state).handle(APPLE)

        assert dto.ticket_number == 1
        assert dto.price == "¥350"
        assert state.pool.available(APPLE) == list(range(2, 11))
        assert len(state.staged) == 1

    def test_stage_accepts_item_name(self):
        state = _state()
        dto = StageOrderHandler(state).handle("Banana")
        assert dto.item == "banana"

    def test_unknown_item_rejected(self):
        state = _state()
        with pytest.raises(ValidationError):
            StageOrderHandler(state).handle("cherry")
        assert state.staged == []

    def test_stage_skips_open_tickets(self):
        state = _state(1, 2)
        assert StageOrderHandler(state).handle(APPLE).ticket_number == 3

    def test_local_ids_are_unique(self):
        state = _state()
        handler = StageOrderHandler(state)
        ids = {handler.handle(APPLE).local_id, handler.handle(BANANA).local_id}
        assert len(ids) == 2

    def test_eleventh_order_rejected_without_side_effects(self):
        state = _state(*range(1, 11))
        pool_before = state.pool.available(APPLE)

        with pytest.raises(TicketsExhaustedError):
            StageOrderHandler(state).handle(APPLE)

        assert state.staged == []
        assert state.pool.available(APPLE) == pool_before == []

    def test_exhausting_one_kind_leaves_the_other(self):
        state = _state(*range(1, 11))
        dto = StageOrderHandler(state).handle(BANANA)
        assert dto.ticket_number == 1

    def test_staged_total(self):
        state = _state()
        handler = StageOrderHandler(state)
        handler.handle(APPLE)
        handler.handle(APPLE)
        handler.handle(BANANA)
        assert state.staged_total == Money.of(900)


class TestClearStaged:

    def test_clear_returns_tickets(self):
        state = _state(2)
        stage = StageOrderHandler(state)
        stage.handle(APPLE)
        stage.handle(APPLE)
        stage.handle(BANANA)

        cleared = ClearStagedHandler(state).handle()

        assert cleared == 3
        assert state.staged == []
        assert state.pool.available(APPLE) == [1] + list(range(3, 11))
        assert state.pool.available(BANANA) == list(range(1, 11))
        assert state.staged_total == Money.zero()

    def test_clear_with_nothing_staged(self):
        state = _state()
        assert ClearStagedHandler(state).handle() == 0
        assert state.pool.available(APPLE) == list(range(1, 11))

    def test_clear_after_refresh_keeps_foreign_ticket_taken(self):
        store = FakeOrderStore()
        state = BoardState()
        asyncio.run(RefreshBoardHandler(store, state).handle())
        StageOrderHandler(state).handle(APPLE)

        # Another client confirmed apple #1 before this one did
        store.add(APPLE, 1)
        asyncio.run(RefreshBoardHandler(store, state).handle())
        ClearStagedHandler(state).handle()

        assert state.pool.available(APPLE) == list(range(2, 11))

        StageOrderHandler(state).handle(APPLE)
        asyncio.run(ConfirmOrdersHandler(store, state).handle())

        apple_tickets = [o.ticket_number for o in store.rows if o.item is APPLE]
        assert sorted(apple_tickets) == [1, 2]
