"""
Signing session controller.

Drives one signer through a lease: loads the session by token, derives the
signable fields, keeps the typed-stamp previews in sync with the signer name
and style, routes apply/select/navigation through the FieldNavigator, and
submits the result once everything is filled in.
"""
import logging
from typing import Callable
from app.core.exceptions import SessionLoadError, SubmissionError, SubmissionInProgressError
from app.models.enums import SignatureMode, SignerRole, TabKind
from app.schemas.signature import SignSessionRead
from app.services.compositor import compose_lease_html, tab_id_from_click
from app.services.drawing import DrawingSurface
from app.services.field_navigator import FieldNavigator
from app.services.placeholders import SignatureTab, scan_placeholders
from app.services.sign_client import SignApiClient, SignApiError
from app.services.stamp import SignatureSource, StampSource

logger = logging.getLogger(__name__)


class LeaseSigningSession:
    def __init__(
        self,
        client: SignApiClient,
        token: str,
        on_close: Callable[[], None] | None = None,
        on_refresh: Callable[[], None] | None = None,
        max_initials: int | None = None,
        device_pixel_ratio: float = 1.0,
    ):
        self.client = client
        self.token = token
        self.on_close = on_close
        self.on_refresh = on_refresh
        self.max_initials = max_initials

        self.session: SignSessionRead | None = None
        self.is_open = False
        self.loading = False
        self.error: str | None = None
        self.submitting = False
        self.consent = False

        self.navigator = FieldNavigator([])
        self.surface = DrawingSurface(device_pixel_ratio=device_pixel_ratio)
        self.stamps = StampSource()
        self._signer_email = ""
        self._mode = SignatureMode.TYPE
        self._load_generation = 0

        self.current_signature: str | None = None
        self.current_initials: str | None = None

    # Loading

    async def open(self) -> None:
        self.is_open = True
        self.loading = True
        self.error = None
        self._load_generation += 1
        generation = self._load_generation

        try:
            session = await self.client.fetch_session(self.token)
        except SignApiError as e:
            if self._is_current(generation):
                self.error = e.message or SessionLoadError.default_message
                self.loading = False
                raise SessionLoadError(self.error) from e
            return

        if not self._is_current(generation):
            logger.info("Signing session closed before load finished, discarding result")
            return

        self._load(session)
        self.loading = False

    def _is_current(self, generation: int) -> bool:
        return self.is_open and generation == self._load_generation

    def _load(self, session: SignSessionRead) -> None:
        self.session = session
        self.stamps.name = session.recipient_name or ""
        self._signer_email = session.recipient_email or ""
        self.navigator = FieldNavigator(scan_placeholders(session.lease_html, session.role, self.max_initials))
        self._refresh_previews()
        self._on_focus_changed()

    def close(self) -> None:
        self.is_open = False
        self.surface.detach()
        if self.on_close:
            self.on_close()

    # Signer identity and input mode

    @property
    def signer_name(self) -> str:
        return self.stamps.name

    @signer_name.setter
    def signer_name(self, value: str) -> None:
        self.stamps.name = value
        self._refresh_previews()

    @property
    def signer_email(self) -> str:
        return self._signer_email

    @signer_email.setter
    def signer_email(self, value: str) -> None:
        self._signer_email = value

    @property
    def style_index(self) -> int:
        return self.stamps.style

    @style_index.setter
    def style_index(self, value: int) -> None:
        self.stamps.style = value
        self._refresh_previews()

    @property
    def mode(self) -> SignatureMode:
        return self._mode

    @mode.setter
    def mode(self, value: SignatureMode | str) -> None:
        # Completed fields are kept; only the next apply is affected
        self._mode = SignatureMode(value)
        self._refresh_previews()
        self._on_focus_changed()

    def _refresh_previews(self) -> None:
        if self._mode != SignatureMode.TYPE:
            return
        self.current_signature = self.stamps.capture(TabKind.SIGNATURE)
        self.current_initials = self.stamps.capture(TabKind.INITIAL)

    @property
    def preview(self) -> str | None:
        tab = self.active_tab
        if tab is None:
            return None
        return self.current_signature if tab.kind == TabKind.SIGNATURE else self.current_initials

    # Fields

    @property
    def tabs(self) -> list[SignatureTab]:
        return self.navigator.tabs

    @property
    def active_tab(self) -> SignatureTab | None:
        return self.navigator.active_tab

    @property
    def progress(self) -> str:
        return f"{self.navigator.completed_count}/{len(self.tabs)} completed"

    def _on_focus_changed(self) -> None:
        tab = self.active_tab
        if self._mode == SignatureMode.DRAW and tab is not None:
            self.surface.setup_for(tab.kind)
            self.surface.attach()
        else:
            self.surface.detach()

    def select(self, index: int) -> None:
        self.navigator.select(index)
        self._on_focus_changed()

    def select_id(self, tab_id: str) -> None:
        self.navigator.select_id(tab_id)
        self._on_focus_changed()

    def click_document(self, attributes: dict[str, str]) -> None:
        """Click inside the lease preview; stand-ins carry their field id."""
        tab_id = tab_id_from_click(attributes)
        if tab_id:
            self.select_id(tab_id)

    def previous(self) -> None:
        if self.navigator.can_go_previous:
            self.navigator.previous()
            self._on_focus_changed()

    def next(self) -> None:
        if self.navigator.can_go_next:
            self.navigator.next()
            self._on_focus_changed()

    def clear_drawing(self) -> None:
        self.surface.clear()

    def apply(self) -> bool:
        """Fill the focused field from the stamp or the drawing. No-op without a signer name."""
        tab = self.active_tab
        if tab is None or not self.signer_name:
            return False

        source: SignatureSource = self.stamps if self._mode == SignatureMode.TYPE else self.surface
        applied = self.navigator.apply(source.capture(tab.kind))
        if applied:
            self._on_focus_changed()
        return applied

    @property
    def lease_preview_html(self) -> str:
        if self.session is None:
            return ""
        active = self.active_tab
        return compose_lease_html(self.session.lease_html, self.tabs, active.id if active else None)

    # Submission

    @property
    def can_submit(self) -> bool:
        return not self.submitting and self.navigator.all_completed and self.consent

    def build_payload(self) -> dict:
        signature = self.navigator.check_submittable(self.consent)
        return {
            "signatureDataUrl": signature.value,
            "signerName": self.signer_name,
            "signerEmail": self.signer_email,
            "consent": True,
            "initialsData": [
                {"id": tab.id, "value": tab.value} for tab in self.navigator.initial_tabs
            ],
        }

    async def submit(self) -> dict:
        if self.session is None:
            raise SessionLoadError()
        if self.submitting:
            raise SubmissionInProgressError()

        payload = self.build_payload()

        self.submitting = True
        try:
            result = await self.client.submit(self.token, payload)
        except SignApiError as e:
            logger.warning(f"Signature submission failed for lease {self.session.lease_id}: {e}")
            raise SubmissionError(e.message) from e
        finally:
            self.submitting = False

        logger.info(f"Lease {self.session.lease_id} signed as {SignerRole(self.session.role).value}")
        self.close()
        if self.on_refresh:
            self.on_refresh()
        return result
