"""
Focus/completion state machine for the signable fields of a lease.

States:
- NoFieldFocused - nothing selected yet, or the last field was just applied
- FieldFocused(index) - field `index` is being filled

Events:
- Select(index) - chip click or click on a stand-in in the document
- Applied - the focused field received a value (auto-advance)
- Previous / Next - boundary-aware navigation, completion untouched
"""
from dataclasses import dataclass
from app.core.exceptions import IncompleteFieldsError, ConsentRequiredError, MissingSignatureError
from app.models.enums import TabKind
from app.services.placeholders import SignatureTab


@dataclass(frozen=True)
class NoFieldFocused:
    pass


@dataclass(frozen=True)
class FieldFocused:
    index: int


FocusState = NoFieldFocused | FieldFocused


@dataclass(frozen=True)
class Select:
    index: int


@dataclass(frozen=True)
class Applied:
    pass


@dataclass(frozen=True)
class Previous:
    pass


@dataclass(frozen=True)
class Next:
    pass


FocusEvent = Select | Applied | Previous | Next

NO_FIELD = NoFieldFocused()


def next_state(state: FocusState, event: FocusEvent, field_count: int) -> FocusState:
    """Pure transition function. Invalid events leave the state unchanged."""
    if isinstance(event, Select):
        if 0 <= event.index < field_count:
            return FieldFocused(event.index)
        return state

    if not isinstance(state, FieldFocused):
        return state

    index = state.index
    if isinstance(event, Applied):
        if index >= field_count - 1:
            return NO_FIELD
        return FieldFocused(index + 1)
    if isinstance(event, Previous):
        return FieldFocused(index - 1) if index > 0 else state
    if isinstance(event, Next):
        return FieldFocused(index + 1) if index < field_count - 1 else state
    return state


class FieldNavigator:
    def __init__(self, tabs: list[SignatureTab]):
        self.tabs = tabs
        self.state: FocusState = FieldFocused(0) if tabs else NO_FIELD

    def _dispatch(self, event: FocusEvent) -> FocusState:
        self.state = next_state(self.state, event, len(self.tabs))
        return self.state

    @property
    def active_index(self) -> int | None:
        return self.state.index if isinstance(self.state, FieldFocused) else None

    @property
    def active_tab(self) -> SignatureTab | None:
        index = self.active_index
        return self.tabs[index] if index is not None else None

    def index_of(self, tab_id: str) -> int | None:
        for index, tab in enumerate(self.tabs):
            if tab.id == tab_id:
                return index
        return None

    def select(self, index: int) -> FocusState:
        return self._dispatch(Select(index))

    def select_id(self, tab_id: str) -> FocusState:
        index = self.index_of(tab_id)
        if index is None:
            return self.state
        return self.select(index)

    def apply(self, value: str | None) -> bool:
        """
        Complete the focused field with `value` and advance.

        Returns False (and changes nothing) when no field is focused or no
        value is available. Re-applying a completed field overwrites it.
        """
        tab = self.active_tab
        if tab is None or not value:
            return False
        tab.apply(value)
        self._dispatch(Applied())
        return True

    @property
    def can_go_previous(self) -> bool:
        index = self.active_index
        return index is not None and index > 0

    @property
    def can_go_next(self) -> bool:
        index = self.active_index
        return index is not None and index < len(self.tabs) - 1

    def previous(self) -> FocusState:
        return self._dispatch(Previous())

    def next(self) -> FocusState:
        return self._dispatch(Next())

    @property
    def completed_count(self) -> int:
        return sum(1 for tab in self.tabs if tab.completed)

    @property
    def all_completed(self) -> bool:
        return bool(self.tabs) and all(tab.completed for tab in self.tabs)

    @property
    def signature_tab(self) -> SignatureTab | None:
        return next((tab for tab in self.tabs if tab.kind == TabKind.SIGNATURE), None)

    @property
    def initial_tabs(self) -> list[SignatureTab]:
        return [tab for tab in self.tabs if tab.kind == TabKind.INITIAL]

    def check_submittable(self, consent: bool) -> SignatureTab:
        """Raise the first local validation error; return the signature field."""
        if not self.all_completed:
            raise IncompleteFieldsError()
        if not consent:
            raise ConsentRequiredError()
        signature = self.signature_tab
        if signature is None or not signature.value:
            raise MissingSignatureError()
        return signature
