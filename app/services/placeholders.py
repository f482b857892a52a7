"""
Placeholder scanning for lease markup.

Token vocabulary (produced by the lease template):
- /init1/ ... /initN/ - tenant initials, one per lease section
- /sig_tenant/, /sig_landlord/ - the signature block
"""
from dataclasses import dataclass
from app.core.config import settings
from app.models.enums import SignerRole, TabKind


SIGNATURE_TOKENS = {
    SignerRole.TENANT: "/sig_tenant/",
    SignerRole.LANDLORD: "/sig_landlord/",
}

SIGNATURE_LABELS = {
    SignerRole.TENANT: "Tenant Signature",
    SignerRole.LANDLORD: "Landlord Signature",
}


def initial_token(number: int) -> str:
    return f"/init{number}/"


@dataclass
class SignatureTab:
    """One signable field derived from a placeholder token."""
    id: str
    kind: TabKind
    label: str
    placeholder: str
    value: str | None = None
    completed: bool = False

    def apply(self, value: str) -> None:
        self.value = value
        self.completed = True

    @property
    def chip_label(self) -> str:
        if self.kind == TabKind.INITIAL:
            return f"Initial {self.id.removeprefix('init')}"
        return self.label


def scan_placeholders(markup: str, role: SignerRole | str, max_initials: int | None = None) -> list[SignatureTab]:
    """
    Extract the signable fields for a signer from lease markup.

    Tenants get /init1/../initN/ (ascending, N = max_initials) followed by
    /sig_tenant/. Landlords only get /sig_landlord/. A token is included iff it
    occurs literally in the markup; absent tokens are skipped.
    """
    role = SignerRole(role)
    if max_initials is None:
        max_initials = settings.MAX_INITIAL_FIELDS

    tabs: list[SignatureTab] = []

    if role == SignerRole.TENANT:
        for number in range(1, max_initials + 1):
            token = initial_token(number)
            if token in markup:
                tabs.append(SignatureTab(
                    id=f"init{number}",
                    kind=TabKind.INITIAL,
                    label=f"Section {number} Initial",
                    placeholder=token,
                ))

    token = SIGNATURE_TOKENS[role]
    if token in markup:
        tabs.append(SignatureTab(
            id=token.strip("/"),
            kind=TabKind.SIGNATURE,
            label=SIGNATURE_LABELS[role],
            placeholder=token,
        ))

    return tabs
