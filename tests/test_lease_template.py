from datetime import date
from decimal import Decimal
import pytest
from app.models.domain import Lease
from app.services.lease_template import (
    LEASE_SECTIONS,
    LeaseTemplateContext,
    format_amount,
    format_long_date,
    render_lease_html,
    render_lease_sections,
)
from app.services.placeholders import scan_placeholders


def make_lease(**overrides) -> Lease:
    values = dict(
        id=1,
        landlord_name="Maple Property Group",
        landlord_email="owner@maple.example",
        tenant_name="Jane Q Public",
        tenant_email="jane@example.com",
        property_name="Maple Court",
        unit_name="Unit 4B",
        unit_type="apartment",
        start_date=date(2026, 11, 1),
        end_date=date(2027, 10, 31),
        rent_amount=Decimal("1850.00"),
        billing_day_of_month=5,
    )
    values.update(overrides)
    return Lease(**values)


def test_context_formats_lease_values():
    context = LeaseTemplateContext.from_lease(make_lease(), today=date(2026, 10, 19))

    assert context.property_label == "Maple Court - Unit 4B (apartment)"
    assert context.lease_start_date == "November 1, 2026"
    assert context.lease_end_date == "October 31, 2027"
    assert context.rent_amount == "1,850"
    assert context.billing_day_of_month == "5"
    assert context.today_date == "October 19, 2026"


def test_open_ended_lease_is_month_to_month():
    context = LeaseTemplateContext.from_lease(make_lease(end_date=None))

    assert context.lease_end_date == "Month-to-Month"


@pytest.mark.parametrize(
    "value, expected",
    [(Decimal("1850"), "1,850"), (Decimal("999.5"), "999.50"), (12000, "12,000")],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected


def test_format_long_date_has_no_padding():
    assert format_long_date(date(2026, 1, 5)) == "January 5, 2026"


def test_rendered_lease_carries_every_token():
    html = render_lease_html(LeaseTemplateContext.from_lease(make_lease()))

    for number in range(1, len(LEASE_SECTIONS) + 1):
        assert html.count(f"/init{number}/") == 1
    assert html.count("/sig_tenant/") == 1
    assert html.count("/sig_landlord/") == 1
    assert "Rules &amp; Regulations" in html
    assert "$1,850" in html


def test_tenant_gets_six_initials_and_signature():
    html = render_lease_html(LeaseTemplateContext.from_lease(make_lease()))

    tenant_tabs = scan_placeholders(html, "tenant")
    landlord_tabs = scan_placeholders(html, "landlord")

    assert [tab.id for tab in tenant_tabs] == ["init1", "init2", "init3", "init4", "init5", "init6", "sig_tenant"]
    assert [tab.id for tab in landlord_tabs] == ["sig_landlord"]


def test_values_are_escaped():
    html = render_lease_html(LeaseTemplateContext.from_lease(make_lease(tenant_name="<b>Mallory</b>")))

    assert "<b>Mallory</b>" not in html
    assert "&lt;b&gt;Mallory&lt;/b&gt;" in html


def test_pdf_sections_use_bold_fields():
    sections = render_lease_sections(LeaseTemplateContext.from_lease(make_lease()))

    assert [title for title, _ in sections] == [title for title, _ in LEASE_SECTIONS]
    property_paragraph = sections[0][1][0]
    assert "<b>Maple Court - Unit 4B (apartment)</b>" in property_paragraph
    assert "span" not in property_paragraph


def test_pdf_sections_do_not_recompile_templates(monkeypatch):
    from app.services import lease_template

    def no_compile(source):
        raise AssertionError("template compiled at render time")

    monkeypatch.setattr(lease_template._env, "from_string", no_compile)

    sections = render_lease_sections(LeaseTemplateContext.from_lease(make_lease()))

    assert len(sections) == len(LEASE_SECTIONS)
