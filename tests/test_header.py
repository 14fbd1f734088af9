import pytest

from content_admin.admin import HeaderButton, HeaderState, MessageChannel


def test_set_buttons_ignores_identical_lists():
    header = HeaderState()
    buttons = [HeaderButton("save", "Save", type="primary")]

    assert header.set_buttons(buttons)
    assert not header.set_buttons([HeaderButton("save", "Save", type="primary", on_click=lambda: None)])
    assert header.revision == 1
    assert header.set_buttons([HeaderButton("save", "Save", type="primary", loading=True)])
    assert header.revision == 2


def test_click_skips_disabled_and_loading_buttons():
    clicks = []
    header = HeaderState()
    header.set_buttons([
        HeaderButton("save", "Save", on_click=lambda: clicks.append("save") or "saved"),
        HeaderButton("back", "Back", disabled=True, on_click=lambda: clicks.append("back")),
    ])

    assert header.click("save") == "saved"
    assert header.click("back") is None
    header.set_button("save", loading=True)
    assert header.click("save") is None
    assert clicks == ["save"]
    with pytest.raises(KeyError):
        header.click("missing")


def test_clear_removes_buttons_and_title():
    header = HeaderState()
    header.set_buttons([HeaderButton("save", "Save")])
    header.set_custom_page_title("Edit Sound")
    header.clear()
    assert header.buttons == []
    assert header.custom_page_title is None


def test_set_button_on_unknown_key_is_a_no_op():
    header = HeaderState()
    assert not header.set_button("save", disabled=True)


def test_message_channel_notifies_listener():
    received = []
    channel = MessageChannel(listener=received.append)
    channel.success("Saved")
    channel.error("Failed")

    assert [m.level for m in channel.messages] == ["success", "error"]
    assert received == channel.messages
    with pytest.raises(ValueError):
        channel.notify("fatal", "bad")
    channel.clear()
    assert channel.last() is None
