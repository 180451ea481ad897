# ruff: noqa: S101
import pytest

from courier.config import DEFAULT_URL
from courier.errors import InvalidIndex, LastTabError
from courier.models import Empty, HttpMethod, Pending, RequestSpec
from courier.tabs import TabRegistry


def test_registry_starts_with_default_tab():
    registry = TabRegistry()
    assert len(registry) == 1
    tab = registry.active_tab()
    assert tab.id == 1
    assert tab.title == "Tab 1"
    assert tab.request.url == DEFAULT_URL
    assert tab.request.method is HttpMethod.GET
    assert isinstance(tab.response, Empty)


def test_registry_from_specs_activates_first():
    registry = TabRegistry([RequestSpec(url="https://a.test"), RequestSpec(url="https://b.test")])
    assert len(registry) == 2
    assert registry.active_index == 0
    assert registry.active_tab().request.url == "https://a.test"


def test_registry_copies_specs():
    spec = RequestSpec(url="https://a.test")
    registry = TabRegistry([spec])
    registry.active_tab().request.url = "https://changed.test"
    assert spec.url == "https://a.test"


def test_create_tab_appends_and_activates():
    registry = TabRegistry()
    tab = registry.create_tab(RequestSpec(url="https://new.test"))
    assert registry.active_index == 1
    assert registry.active_tab() is tab
    assert tab.title == "Tab 2"


def test_tab_ids_are_never_reused():
    registry = TabRegistry()
    registry.create_tab()
    registry.close_tab(1)
    tab = registry.create_tab()
    assert tab.id == 3
    assert tab.title == "Tab 3"


def test_close_last_tab_is_rejected():
    registry = TabRegistry()
    with pytest.raises(LastTabError, match="Cannot close the last tab."):
        registry.close_tab(0)
    assert len(registry) == 1


def test_close_invalid_index():
    registry = TabRegistry()
    registry.create_tab()
    with pytest.raises(InvalidIndex):
        registry.close_tab(5)
    with pytest.raises(IndexError):
        registry.activate(-1)


def test_close_active_last_moves_to_new_last():
    registry = TabRegistry()
    registry.create_tab()
    registry.create_tab()
    closed = registry.close_tab(2)
    assert closed.id == 3
    assert registry.active_index == 1
    assert registry.active_tab().id == 2


def test_close_before_active_keeps_same_tab_active():
    registry = TabRegistry()
    registry.create_tab()
    registry.create_tab()
    registry.activate(2)
    registry.close_tab(0)
    assert registry.active_index == 1
    assert registry.active_tab().id == 3


def test_close_after_active_keeps_index():
    registry = TabRegistry()
    registry.create_tab()
    registry.activate(0)
    registry.close_tab(1)
    assert registry.active_index == 0
    assert registry.active_tab().id == 1


def test_active_index_stays_valid_through_mixed_operations():
    registry = TabRegistry()
    for step in range(30):
        if step % 3 == 2 and len(registry) > 1:
            registry.close_tab(step % len(registry))
        elif step % 4 == 1:
            registry.prev_tab()
        else:
            registry.create_tab()
        assert 0 <= registry.active_index < len(registry)
        assert len({tab.id for tab in registry.tabs}) == len(registry)


def test_next_and_prev_wrap():
    registry = TabRegistry()
    registry.create_tab()
    registry.create_tab()
    assert registry.next_tab().id == 1
    assert registry.prev_tab().id == 3


def test_leaving_a_tab_discards_edit_buffers():
    registry = TabRegistry()
    first = registry.active_tab()
    first.edit.url_draft = "https://half-typed"
    first.edit.form_key = "X-Id"
    registry.create_tab()
    assert first.edit.url_draft == ""
    assert first.edit.form_key == ""


def test_begin_request_bumps_generation():
    registry = TabRegistry()
    tab = registry.active_tab()
    tab.response_scroll = 4
    assert tab.begin_request() == 1
    assert tab.begin_request() == 2
    assert isinstance(tab.response, Pending)
    assert tab.response_scroll == 0


def test_snapshot_reflects_state():
    registry = TabRegistry([RequestSpec(url="https://a.test", headers=[("A", "1")])])
    registry.active_tab().edit.url_draft = "draft"
    (snap,) = registry.snapshot()
    assert snap.url == "https://a.test"
    assert snap.headers == (("A", "1"),)
    assert snap.url_draft == "draft"
