import asyncio

import pytest

from content_admin.admin import (
    ColumnDescriptor,
    ListParams,
    ListResult,
    MessageChannel,
    TableController,
    VisibleColumn,
)


def _columns():
    return [
        ColumnDescriptor(title="Name", data_index="name", render_name="renderNameColumn"),
        ColumnDescriptor(title="Status", data_index="status", options="displayStatus"),
        ColumnDescriptor(title="Audio", data_index="audioUrl", media_type="audio", visible_column=VisibleColumn.SHOWN),
        ColumnDescriptor(title="Gender", data_index="genderCode", visible_column=VisibleColumn.HIDDEN),
        ColumnDescriptor(title="Actions", data_index="actions", action_buttons=("edit", "enable", "disable", "delete")),
    ]


class RecordingLoader:
    def __init__(self, rows=None, total=None):
        self.calls = []
        self.rows = rows if rows is not None else [{"id": 1, "name": "Rain", "status": "DRAFT"}]
        self.total = total if total is not None else len(self.rows)
        self.error = None

    async def __call__(self, params):
        self.calls.append(params)
        if self.error:
            raise self.error
        return ListResult(rows=list(self.rows), total=self.total)


def test_latest_request_wins_when_responses_arrive_out_of_order():
    async def scenario():
        gates = {}

        async def loader(params):
            gate = gates[params.search] = asyncio.Event()
            await gate.wait()
            return ListResult(rows=[{"id": 1, "name": params.search}], total=1)

        table = TableController(_columns(), loader)
        first = asyncio.create_task(table.set_search_value("A"))
        second = asyncio.create_task(table.set_search_value("B"))
        while len(gates) < 2:
            await asyncio.sleep(0)
        assert table.loading

        gates["B"].set()
        assert (await second).rows[0]["name"] == "B"
        assert not table.loading

        gates["A"].set()
        assert await first is None
        return table

    table = asyncio.run(scenario())
    assert [row["name"] for row in table.rows] == ["B"]
    assert not table.loading


def test_failed_fetch_keeps_rows_and_reports_error():
    async def scenario():
        loader = RecordingLoader()
        messages = MessageChannel()
        table = TableController(_columns(), loader, messages=messages)
        await table.fetch_data()
        loader.error = RuntimeError("boom")
        result = await table.fetch_data()
        return table, messages, result

    table, messages, result = asyncio.run(scenario())
    assert result is None
    assert [row["id"] for row in table.rows] == [1]
    assert not table.loading
    assert messages.last().level == "error"
    assert messages.last().text == "Failed to fetch data"


def test_fetch_sends_search_filters_paging_and_sort():
    async def scenario():
        loader = RecordingLoader(total=25)
        table = TableController(_columns(), loader, default_page_size=5)
        await table.set_active_filters({"statusList": ["DRAFT", "ENABLED"]})
        await table.set_search_value("rain")
        await table.set_sorter("name", "asc")
        return table, loader

    table, loader = asyncio.run(scenario())
    params = loader.calls[-1]
    assert params == ListParams(
        search="rain",
        filters={"statusList": ["DRAFT", "ENABLED"]},
        page_index=1,
        page_size=5,
        sort_field="name",
        sort_direction="ASC",
    )
    assert params.to_query() == {
        "pageIndex": 1,
        "pageSize": 5,
        "orderBy": "name",
        "orderDirection": "ASC",
        "keywords": "rain",
        "statusList": "DRAFT,ENABLED",
    }
    assert table.pagination.total_count == 25
    assert table.total_pages == 5


def test_search_and_filter_changes_return_to_first_page():
    async def scenario():
        loader = RecordingLoader(total=100)
        table = TableController(_columns(), loader)
        await table.set_pagination_params(page_index=4)
        page_after_paging = table.pagination.page_index
        await table.set_search_value("wind")
        page_after_search = table.pagination.page_index
        await table.set_pagination_params(page_index=3)
        await table.set_active_filters({"statusList": ["DRAFT"]})
        return page_after_paging, page_after_search, table.pagination.page_index

    assert asyncio.run(scenario()) == (4, 1, 1)


def test_changing_page_size_restarts_from_first_page():
    async def scenario():
        table = TableController(_columns(), RecordingLoader(total=100))
        await table.set_pagination_params(page_index=3)
        await table.set_pagination_params(page_index=3, page_size=20)
        return table.pagination

    pagination = asyncio.run(scenario())
    assert (pagination.page_index, pagination.page_size) == (1, 20)


def test_clearing_the_sorter_restores_defaults():
    async def scenario():
        table = TableController(_columns(), RecordingLoader())
        await table.set_sorter("name", "ASC")
        await table.set_sorter(None)
        return table.pagination

    pagination = asyncio.run(scenario())
    assert (pagination.sort_field, pagination.sort_direction) == ("id", "DESC")


def test_visible_columns_include_mandatory_keys():
    seen = []
    columns = [
        ColumnDescriptor(title="Name", data_index="name", visible_column=VisibleColumn.SHOWN),
        ColumnDescriptor(title="Gender", data_index="genderCode", visible_column=VisibleColumn.HIDDEN),
        ColumnDescriptor(title="Actions", data_index="actions", action_buttons=("edit",)),
    ]
    table = TableController(columns, RecordingLoader(), on_visibility_change=seen.append)

    keys = table.set_visible_columns(["name"])

    assert set(keys) == {"actions", "name"}
    assert seen == [keys]


def test_visible_columns_follow_declaration_order():
    table = TableController(_columns(), RecordingLoader())
    assert table.visible_column_keys() == ["name", "status", "audioUrl", "actions"]

    keys = table.set_visible_columns(["genderCode"])

    assert keys == ["name", "status", "genderCode", "actions"]
    assert [c.key for c in table.visible_columns()] == keys


def test_column_options_lock_always_visible_columns():
    table = TableController(_columns(), RecordingLoader())
    options = {option["key"]: option["disabled"] for option in table.column_options()}
    assert options == {"name": True, "status": True, "audioUrl": False, "genderCode": False}


def test_selection_is_cleared_by_a_fresh_fetch():
    async def scenario(keep_selection):
        loader = RecordingLoader(rows=[{"id": 1, "status": "DRAFT"}, {"id": 2, "status": "ENABLED"}])
        table = TableController(_columns(), loader, keep_selection=keep_selection)
        await table.fetch_data()
        table.select([2, 99])
        selected = (list(table.selected_keys), [row["id"] for row in table.selected_rows])
        await table.fetch_data()
        return selected, table.selected_keys

    selected, after = asyncio.run(scenario(False))
    assert selected == ([2], [2])
    assert after == []

    _, kept = asyncio.run(scenario(True))
    assert kept == [2]


def test_render_rows_uses_visible_columns():
    async def scenario():
        loader = RecordingLoader(rows=[{"id": 7, "name": "Rain", "status": "ENABLED", "audioUrl": "https://cdn/r.mp3"}])
        table = TableController(_columns(), loader)
        await table.fetch_data()
        return table.render_rows()

    assert asyncio.run(scenario()) == [{
        "name": "Rain\nID:7",
        "status": "Enabled",
        "audioUrl": {"mediaType": "audio", "url": "https://cdn/r.mp3"},
        "actions": ["edit", "disable"],
    }]


def test_dispatch_action_calls_handler_for_visible_buttons():
    handled = []

    async def on_action(name, row):
        handled.append((name, row["id"]))
        return "ok"

    table = TableController(_columns(), RecordingLoader(), on_action=on_action)
    row = {"id": 5, "status": "DISABLED"}

    assert asyncio.run(table.dispatch_action("enable", row)) == "ok"
    assert handled == [("enable", 5)]
    with pytest.raises(ValueError):
        asyncio.run(table.dispatch_action("disable", row))


def test_dispatch_action_failure_goes_to_messages():
    def on_action(name, row):
        raise RuntimeError("nope")

    messages = MessageChannel()
    table = TableController(_columns(), RecordingLoader(), on_action=on_action, messages=messages)

    assert asyncio.run(table.dispatch_action("delete", {"id": 1, "status": "DRAFT"})) is None
    assert messages.last().text == "Failed to delete"


def test_move_row_emits_reordered_rows_without_persisting():
    emitted = []

    async def scenario():
        rows = [{"id": 1}, {"id": 2}, {"id": 3}]
        table = TableController(_columns(), RecordingLoader(rows=rows), on_reorder=emitted.append)
        await table.fetch_data()
        reordered = await table.move_row(0, 2)
        return table, reordered

    table, reordered = asyncio.run(scenario())
    assert [row["id"] for row in reordered] == [2, 3, 1]
    assert emitted == [reordered]
    assert [row["id"] for row in table.rows] == [1, 2, 3]


def test_move_row_requires_a_reorder_handler():
    table = TableController(_columns(), RecordingLoader())
    assert not table.draggable
    with pytest.raises(RuntimeError):
        asyncio.run(table.move_row(0, 1))


def test_superseded_failure_is_silent():
    async def scenario():
        gates = {}

        async def loader(params):
            gate = gates[params.search] = asyncio.Event()
            await gate.wait()
            if params.search == "A":
                raise RuntimeError("timeout")
            return ListResult(rows=[{"id": 2, "name": params.search}], total=1)

        messages = MessageChannel()
        table = TableController(_columns(), loader, messages=messages)
        first = asyncio.create_task(table.set_search_value("A"))
        second = asyncio.create_task(table.set_search_value("B"))
        while len(gates) < 2:
            await asyncio.sleep(0)

        gates["B"].set()
        await second
        gates["A"].set()
        return table, messages, await first

    table, messages, result = asyncio.run(scenario())
    assert result is None
    assert messages.messages == []
    assert [row["name"] for row in table.rows] == ["B"]
    assert not table.loading


def test_reset_filters_clears_filters_and_refetches_first_page():
    async def scenario():
        loader = RecordingLoader(total=30)
        table = TableController(_columns(), loader)
        await table.set_active_filters({"statusList": ["DRAFT"]})
        await table.set_pagination_params(page_index=3)
        await table.reset_filters()
        return table, loader

    table, loader = asyncio.run(scenario())
    assert table.active_filters == {}
    assert table.pagination.page_index == 1
    assert loader.calls[-1].filters == {}
    assert loader.calls[-1].page_index == 1


def test_column_choice_survives_reset_with_a_store():
    store = {}
    table = TableController(_columns(), RecordingLoader(), module_key="sound", column_store=store)

    keys = table.set_visible_columns(["genderCode"])
    table.reset()

    assert store == {"sound:visibleColumns": keys}
    assert table.visible_column_keys() == ["name", "status", "genderCode", "actions"]
    remounted = TableController(_columns(), RecordingLoader(), module_key="sound", column_store=store)
    assert remounted.visible_column_keys() == keys
    other = TableController(_columns(), RecordingLoader(), module_key="music", column_store=store)
    assert other.visible_column_keys() == ["name", "status", "audioUrl", "actions"]


def test_column_choice_is_dropped_by_reset_without_a_store():
    table = TableController(_columns(), RecordingLoader(), module_key="sound")
    table.set_visible_columns(["genderCode"])
    table.reset()
    assert table.visible_column_keys() == ["name", "status", "audioUrl", "actions"]


def test_reset_discards_in_flight_responses():
    async def scenario():
        gate = asyncio.Event()

        async def loader(params):
            await gate.wait()
            return ListResult(rows=[{"id": 1}], total=1)

        table = TableController(_columns(), loader, module_key="sound")
        task = asyncio.create_task(table.fetch_data())
        await asyncio.sleep(0)
        table.reset(module_key="music")
        gate.set()
        return table, await task

    table, result = asyncio.run(scenario())
    assert result is None
    assert table.rows == []
    assert table.module_key == "music"
    assert not table.loading


def test_duplicate_column_keys_are_rejected():
    with pytest.raises(ValueError):
        TableController(
            [ColumnDescriptor(title="A", data_index="name"), ColumnDescriptor(title="B", data_index="name")],
            RecordingLoader(),
        )
