import pytest
from app.core.exceptions import ConsentRequiredError, IncompleteFieldsError, MissingSignatureError
from app.services.field_navigator import (
    Applied,
    FieldFocused,
    FieldNavigator,
    Next,
    NoFieldFocused,
    Previous,
    Select,
    next_state,
)
from app.services.placeholders import scan_placeholders
from helpers import TENANT_MARKUP

IMG = "data:image/png;base64,AAAA"


@pytest.fixture
def navigator():
    return FieldNavigator(scan_placeholders(TENANT_MARKUP, "tenant"))


def test_transition_function():
    assert next_state(NoFieldFocused(), Select(2), 3) == FieldFocused(2)
    assert next_state(NoFieldFocused(), Select(3), 3) == NoFieldFocused()
    assert next_state(FieldFocused(0), Applied(), 3) == FieldFocused(1)
    assert next_state(FieldFocused(2), Applied(), 3) == NoFieldFocused()
    assert next_state(FieldFocused(0), Previous(), 3) == FieldFocused(0)
    assert next_state(FieldFocused(2), Next(), 3) == FieldFocused(2)
    assert next_state(FieldFocused(1), Next(), 3) == FieldFocused(2)
    assert next_state(NoFieldFocused(), Next(), 3) == NoFieldFocused()


def test_first_field_focused_initially(navigator):
    assert navigator.active_index == 0
    assert FieldNavigator([]).state == NoFieldFocused()


def test_apply_without_value_is_noop(navigator):
    assert navigator.apply(None) is False
    assert navigator.apply("") is False

    assert navigator.active_index == 0
    assert navigator.tabs[0].completed is False


def test_apply_advances_and_last_unfocuses(navigator):
    navigator.apply(IMG)
    assert navigator.active_index == 1
    navigator.apply(IMG)
    assert navigator.active_index == 2
    navigator.apply(IMG)

    assert navigator.state == NoFieldFocused()
    assert navigator.all_completed
    assert all(tab.value == IMG for tab in navigator.tabs)


def test_value_set_iff_completed(navigator):
    navigator.apply(IMG)

    for tab in navigator.tabs:
        assert (tab.value is not None) == tab.completed


def test_reapply_overwrites_without_changing_tabs(navigator):
    navigator.apply(IMG)
    navigator.select_id("init1")
    navigator.apply("data:image/png;base64,BBBB")

    assert [tab.id for tab in navigator.tabs] == ["init1", "init2", "sig_tenant"]
    assert navigator.tabs[0].value == "data:image/png;base64,BBBB"
    assert navigator.active_index == 1


def test_navigation_boundaries(navigator):
    assert not navigator.can_go_previous
    assert navigator.can_go_next

    navigator.next()
    navigator.next()
    assert navigator.active_index == 2
    assert not navigator.can_go_next

    navigator.next()
    assert navigator.active_index == 2

    navigator.previous()
    assert navigator.active_index == 1
    assert navigator.completed_count == 0


def test_select_unknown_id_keeps_state(navigator):
    navigator.select(1)
    navigator.select_id("init9")

    assert navigator.active_index == 1


def test_submission_checks(navigator):
    with pytest.raises(IncompleteFieldsError):
        navigator.check_submittable(consent=True)

    for _ in navigator.tabs:
        navigator.apply(IMG)

    with pytest.raises(ConsentRequiredError):
        navigator.check_submittable(consent=False)

    assert navigator.check_submittable(consent=True).id == "sig_tenant"


def test_missing_signature_field_blocks_submission():
    navigator = FieldNavigator(scan_placeholders("/init1/", "tenant"))
    navigator.apply(IMG)

    with pytest.raises(MissingSignatureError):
        navigator.check_submittable(consent=True)


def test_no_fields_is_never_complete():
    navigator = FieldNavigator([])

    with pytest.raises(IncompleteFieldsError):
        navigator.check_submittable(consent=True)
