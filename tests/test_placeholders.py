from app.models.enums import SignerRole, TabKind
from app.services.lease_template import LeaseTemplateContext, render_lease_html
from app.services.placeholders import scan_placeholders
from helpers import TENANT_MARKUP


def test_tenant_tabs_in_document_order():
    tabs = scan_placeholders(TENANT_MARKUP, "tenant")

    assert [tab.id for tab in tabs] == ["init1", "init2", "sig_tenant"]
    assert [tab.kind for tab in tabs] == [TabKind.INITIAL, TabKind.INITIAL, TabKind.SIGNATURE]
    assert all(tab.completed is False and tab.value is None for tab in tabs)
    assert tabs[0].label == "Section 1 Initial"
    assert tabs[2].placeholder == "/sig_tenant/"


def test_initials_are_ordered_by_number_not_position():
    markup = "/init3/ then /init1/ then /sig_tenant/"

    tabs = scan_placeholders(markup, SignerRole.TENANT)

    assert [tab.id for tab in tabs] == ["init1", "init3", "sig_tenant"]


def test_landlord_ignores_initials():
    markup = "/init1/ /init2/ /sig_tenant/ /sig_landlord/"

    tabs = scan_placeholders(markup, "landlord")

    assert [tab.id for tab in tabs] == ["sig_landlord"]
    assert tabs[0].label == "Landlord Signature"


def test_landlord_without_token_gets_no_tabs():
    assert scan_placeholders("/init1/ /sig_tenant/", "landlord") == []


def test_missing_tokens_are_skipped():
    tabs = scan_placeholders("<p>/init2/</p>", "tenant")

    assert [tab.id for tab in tabs] == ["init2"]


def test_init1_does_not_match_inside_init10():
    tabs = scan_placeholders("/init10/ /sig_tenant/", "tenant", max_initials=10)

    assert [tab.id for tab in tabs] == ["init10", "sig_tenant"]


def test_initial_scan_bound_is_configurable():
    markup = " ".join(f"/init{n}/" for n in range(1, 9))

    assert len(scan_placeholders(markup, "tenant")) == 6
    assert len(scan_placeholders(markup, "tenant", max_initials=8)) == 8


def test_chip_labels():
    tabs = scan_placeholders(TENANT_MARKUP, "tenant")

    assert tabs[1].chip_label == "Initial 2"
    assert tabs[2].chip_label == "Tenant Signature"


def test_rendered_lease_has_six_initials_and_signature():
    context = LeaseTemplateContext(
        landlord_name="Maple Property Group",
        tenant_name="Jane Q Public",
        property_label="Maple Court - Unit 4B (apartment)",
        lease_start_date="November 1, 2026",
        lease_end_date="Month-to-Month",
        rent_amount="1,850",
        billing_day_of_month="1",
        today_date="October 19, 2026",
    )
    html = render_lease_html(context)

    tenant_ids = [tab.id for tab in scan_placeholders(html, "tenant")]
    landlord_ids = [tab.id for tab in scan_placeholders(html, "landlord")]

    assert tenant_ids == ["init1", "init2", "init3", "init4", "init5", "init6", "sig_tenant"]
    assert landlord_ids == ["sig_landlord"]
