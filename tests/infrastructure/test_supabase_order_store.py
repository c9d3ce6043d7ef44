"""Tests for the Supabase store against a stand-in client.

The stand-in records the PostgREST query chain and the realtime channel
wiring so no network is needed.
"""

import asyncio

import httpx
import pytest
from postgrest.exceptions import APIError

from stall.domain.exceptions import StoreError
from stall.domain.model.menu import ItemKind
from stall.domain.model.order import NewOrder
from stall.domain.model.value_objects import Money
from stall.infrastructure.persistence.supabase_order_store import SupabaseOrderStore

ROWS = [
    {"id": 2, "item": "banana", "price": 200, "ticket_number": 1,
     "status": "pending", "created_at": "2024-05-01T10:00:01+00:00"},
    {"id": 1, "item": "apple", "price": 350, "ticket_number": 1,
     "status": "pending", "created_at": "2024-05-01T10:00:00+00:00"},
]


class _Response:

    def __init__(self, data):
        self.data = data


class _Query:

    def __init__(self, client, table):
        self._client = client
        self.calls = [("table", table)]

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return record

    async def execute(self):
        self._client.queries.append(self.calls)
        if self._client.error is not None:
            raise self._client.error
        return _Response(self._client.data)


class _Channel:

    def __init__(self, topic):
        self.topic = topic
        self.callback = None
        self.subscribed = False

    def on_postgres_changes(self, event, callback, table="*", schema="public", filter=None):
        self.event = event
        self.table = table
        self.schema = schema
        self.callback = callback
        return self

    async def subscribe(self):
        self.subscribed = True
        return self


class _Postgrest:

    def __init__(self):
        self.closed = False

    async def aclose(self):
        self.closed = True


class FakeSupabaseClient:

    def __init__(self, data=None, error=None):
        self.data = data if data is not None else []
        self.error = error
        self.queries = []
        self.channels = []
        self.removed = []
        self.all_removed = False
        self.postgrest = _Postgrest()

    def table(self, name):
        return _Query(self, name)

    def channel(self, topic):
        channel = _Channel(topic)
        self.channels.append(channel)
        return channel

    async def remove_channel(self, channel):
        self.removed.append(channel)

    async def remove_all_channels(self):
        self.all_removed = True


def _store(client: FakeSupabaseClient) -> SupabaseOrderStore:
    store = SupabaseOrderStore("https://example.supabase.co", "anon", table="orders")
    store._client = client
    return store


class TestQueries:

    def test_fetch_selects_ordered_by_created_at(self):
        client = FakeSupabaseClient(data=ROWS)

        orders = asyncio.run(_store(client).fetch_all())

        (calls,) = client.queries
        assert calls[0] == ("table", "orders")
        assert calls[1] == ("select", ("*",), {})
        assert calls[2] == ("order", ("created_at",), {})
        assert [(o.id, o.item) for o in orders] == [
            (1, ItemKind.APPLE), (2, ItemKind.BANANA),
        ]

    def test_insert_sends_one_batch(self):
        client = FakeSupabaseClient()
        batch = [
            NewOrder(ItemKind.APPLE, Money.of(350), 1),
            NewOrder(ItemKind.BANANA, Money.of(200), 4),
        ]

        asyncio.run(_store(client).insert_many(batch))

        (calls,) = client.queries
        assert calls[1] == ("insert", ([
            {"item": "apple", "price": 350, "ticket_number": 1},
            {"item": "banana", "price": 200, "ticket_number": 4},
        ],), {})

    def test_empty_insert_makes_no_call(self):
        client = FakeSupabaseClient()
        asyncio.run(_store(client).insert_many([]))
        assert client.queries == []

    def test_delete_by_id(self):
        client = FakeSupabaseClient()

        asyncio.run(_store(client).delete(7))

        (calls,) = client.queries
        assert calls[1:] == [("delete", (), {}), ("eq", ("id", 7), {})]

    def test_unreadable_row_raises_store_error(self):
        client = FakeSupabaseClient(data=[dict(ROWS[0], item="リンゴ")])
        with pytest.raises(StoreError, match="Unreadable order row"):
            asyncio.run(_store(client).fetch_all())


class TestErrorWrapping:

    @pytest.mark.parametrize(
        "error",
        [
            APIError({"message": "permission denied", "code": "42501",
                      "hint": None, "details": None}),
            httpx.ConnectError("connection refused"),
            OSError("network unreachable"),
        ],
    )
    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.fetch_all(),
            lambda s: s.insert_many([NewOrder(ItemKind.APPLE, Money.of(350), 1)]),
            lambda s: s.delete(1),
        ],
    )
    def test_remote_failures_become_store_errors(self, error, call):
        store = _store(FakeSupabaseClient(error=error))
        with pytest.raises(StoreError) as info:
            asyncio.run(call(store))
        assert info.value.__cause__ is error


class TestRealtime:

    def test_subscribe_wires_postgres_changes(self):
        client = FakeSupabaseClient()

        async def noop(event):
            pass

        asyncio.run(_store(client).subscribe(noop))

        (channel,) = client.channels
        assert channel.event == "*"
        assert channel.schema == "public"
        assert channel.table == "orders"
        assert channel.subscribed is True

    def test_payload_schedules_callback_and_drops_finished_task(self):
        client = FakeSupabaseClient()
        store = _store(client)
        seen = []

        async def on_change(event):
            seen.append((event.event_type, event.record))

        async def scenario():
            await store.subscribe(on_change)
            client.channels[0].callback(
                {"data": {"type": "INSERT", "record": {"id": 9}}}
            )
            assert len(store._pending) == 1
            for _ in range(5):
                await asyncio.sleep(0)

        asyncio.run(scenario())

        assert seen == [("INSERT", {"id": 9})]
        assert store._pending == set()

    def test_unsubscribe_removes_channel(self):
        client = FakeSupabaseClient()
        store = _store(client)

        async def noop(event):
            pass

        async def scenario():
            await store.subscribe(noop)
            await store.unsubscribe()

        asyncio.run(scenario())
        assert client.removed == client.channels

    def test_close_releases_socket_and_http_session(self):
        client = FakeSupabaseClient()
        store = _store(client)

        asyncio.run(store.close())

        assert client.all_removed is True
        assert client.postgrest.closed is True
        assert store._client is None

    def test_close_before_first_use_is_a_no_op(self):
        store = SupabaseOrderStore("https://example.supabase.co", "anon")
        asyncio.run(store.close())
