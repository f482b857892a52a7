"""
Residential lease HTML with signing placeholders.

The rendered document carries the placeholder tokens consumed by the signing
UI: /init1/ ... /init6/ (tenant initials per section), /sig_landlord/ and
/sig_tenant/ (signature block).
"""
from dataclasses import dataclass
from datetime import date
from jinja2 import Environment
from app.models.domain import Lease


LEASE_SECTIONS = [
    (
        "Property",
        [
            "The Landlord hereby leases to the Tenant the premises located at: "
            "<span class=\"field\">{{ property_label }}</span> (\"Premises\").",
        ],
    ),
    (
        "Lease Term",
        [
            "The term of this Lease shall begin on <span class=\"field\">{{ lease_start_date }}</span> "
            "and end on <span class=\"field\">{{ lease_end_date }}</span> unless renewed or terminated earlier.",
        ],
    ),
    (
        "Rent",
        [
            "Tenant agrees to pay monthly rent of <span class=\"field\">${{ rent_amount }}</span>, "
            "due on the <span class=\"field\">{{ billing_day_of_month }}</span> day of each month.",
            "Payments shall be made to: <span class=\"field\">{{ landlord_name }}</span>.",
        ],
    ),
    (
        "Security Deposit",
        [
            "Tenant shall pay a security deposit as required by law and/or as provided "
            "in the addendum(s) to this Lease.",
        ],
    ),
    (
        "Utilities",
        [
            "Tenant is responsible for the following utilities: "
            "<span class=\"field\">Electric, Gas, Internet, Cable</span>.",
            "Landlord is responsible for: <span class=\"field\">Water, Sewer, Trash</span>.",
        ],
    ),
    (
        "Rules & Regulations",
        [
            "Tenant agrees to comply with all property rules.",
        ],
    ),
]

_SECTION_MARKUP = """
    <h2>{title}</h2>
    <div class="section">
{paragraphs}
      <p class="initials"><strong>Tenant Initials:</strong> /init{number}/ <span class="initials-box"></span></p>
    </div>
"""

_LEASE_MARKUP = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8" />
    <title>Residential Lease Agreement</title>
    <style>
      body { font-family: Arial, sans-serif; font-size: 11px; line-height: 1.5; max-width: 750px; margin: 0 auto; padding: 30px; color: #333; }
      h1 { text-align: center; font-size: 16px; margin-bottom: 20px; text-transform: uppercase; }
      h2 { font-size: 12px; margin-top: 18px; margin-bottom: 8px; text-transform: uppercase; }
      .field { font-weight: bold; }
      .section { margin-bottom: 12px; }
      .signature-section { margin-top: 30px; page-break-inside: avoid; }
      .signature-line { border-bottom: 1px solid #333; width: 250px; display: inline-block; margin-bottom: 5px; }
      .date-line { border-bottom: 1px solid #333; width: 120px; display: inline-block; }
      .sig-row { margin-top: 25px; }
      .initials { font-size: 10px; color: #666; }
      .initials-box { display: inline-block; min-width: 90px; border-bottom: 1px solid #333; margin-left: 8px; }
    </style>
  </head>
  <body>
    <h1>Residential Lease Agreement</h1>

    <div class="section">
      <p>THIS LEASE AGREEMENT ("Agreement") is made on <span class="field">{{ today_date }}</span>, between:</p>
      <p><strong>Landlord:</strong> <span class="field">{{ landlord_name }}</span> ("Landlord")</p>
      <p><strong>Tenant(s):</strong> <span class="field">{{ tenant_name }}</span> ("Tenant")</p>
    </div>
[[SECTIONS]]
    <div class="signature-section">
      <h2>Signatures</h2>
      <div class="sig-row">
        <p><strong>LANDLORD SIGNATURE:</strong> /sig_landlord/ <span class="signature-line"></span> &nbsp;&nbsp; <strong>DATE:</strong> <span class="date-line">{{ today_date }}</span></p>
      </div>
      <div class="sig-row">
        <p><strong>TENANT SIGNATURE:</strong> /sig_tenant/ <span class="signature-line"></span> &nbsp;&nbsp; <strong>DATE:</strong> <span class="date-line">{{ today_date }}</span></p>
      </div>
    </div>
  </body>
</html>"""


def _build_source() -> str:
    sections = []
    for number, (title, paragraphs) in enumerate(LEASE_SECTIONS, start=1):
        sections.append(_SECTION_MARKUP.format(
            title=title.replace("&", "&amp;"),
            paragraphs="\n".join(f"      <p>{p}</p>" for p in paragraphs),
            number=number,
        ))
    return _LEASE_MARKUP.replace("[[SECTIONS]]", "".join(sections))


_env = Environment(autoescape=True)
_template = _env.from_string(_build_source())
_section_templates = [
    (title, [_env.from_string(paragraph) for paragraph in paragraphs])
    for title, paragraphs in LEASE_SECTIONS
]


@dataclass
class LeaseTemplateContext:
    landlord_name: str
    tenant_name: str
    property_label: str
    lease_start_date: str
    lease_end_date: str
    rent_amount: str
    billing_day_of_month: str
    today_date: str

    @classmethod
    def from_lease(cls, lease: Lease, today: date | None = None) -> "LeaseTemplateContext":
        today = today or date.today()
        return cls(
            landlord_name=lease.landlord_name or "Landlord",
            tenant_name=lease.tenant_name or "Tenant",
            property_label=lease.property_label,
            lease_start_date=format_long_date(lease.start_date),
            lease_end_date=format_long_date(lease.end_date) if lease.end_date else "Month-to-Month",
            rent_amount=format_amount(lease.rent_amount),
            billing_day_of_month=str(lease.billing_day_of_month),
            today_date=format_long_date(today),
        )


def format_long_date(value: date) -> str:
    """January 5, 2026"""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_amount(value) -> str:
    amount = float(value)
    if amount.is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"


def render_lease_html(context: LeaseTemplateContext) -> str:
    return _template.render(**context.__dict__)


def render_lease_sections(context: LeaseTemplateContext) -> list[tuple[str, list[str]]]:
    """
    Lease sections as reportlab paragraph markup (fields in bold), used for
    the PDF rendition of the same document.
    """
    values = context.__dict__
    sections = []
    for title, templates in _section_templates:
        rendered = []
        for template in templates:
            markup = template.render(**values)
            rendered.append(markup.replace('<span class="field">', "<b>").replace("</span>", "</b>"))
        sections.append((title, rendered))
    return sections
