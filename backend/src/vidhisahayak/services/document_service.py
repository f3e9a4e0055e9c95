"""
Document template rendering.

Each supported category has its own form fields and a fixed set of template
lines; any other category renders a two-line generic heading.
"""

import logging
from dataclasses import dataclass
from datetime import date as date_cls
from typing import Callable, Dict, List, Mapping, Optional

from vidhisahayak.schemas import CommonFields, TemplateFieldResponse
from vidhisahayak.services.catalog import get_category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateField:
    key: str
    label: str
    placeholder: Optional[str] = None

    def to_response(self) -> TemplateFieldResponse:
        return TemplateFieldResponse(key=self.key, label=self.label, placeholder=self.placeholder)


@dataclass
class RenderedDocument:
    slug: str
    title: str
    lines: List[str]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


TEMPLATE_FIELDS: Dict[str, List[TemplateField]] = {
    "land": [
        TemplateField("seller", "Seller Name"),
        TemplateField("buyer", "Buyer Name"),
        TemplateField("propertyDesc", "Property Description", "Survey/Plot no., area, location"),
        TemplateField("consideration", "Consideration (Amount)"),
    ],
    "rental": [
        TemplateField("landlord", "Landlord Name"),
        TemplateField("tenant", "Tenant Name"),
        TemplateField("premises", "Premises Address"),
        TemplateField("term", "Term (months)"),
        TemplateField("rent", "Monthly Rent"),
    ],
    "affidavit": [
        TemplateField("purpose", "Affidavit Purpose", "Name change / Lost document / Address proof"),
        TemplateField("statement1", "Statement 1"),
        TemplateField("statement2", "Statement 2"),
    ],
    "income-declaration": [
        TemplateField("relation", "Relation (Self/Parent/Guardian)"),
        TemplateField("annualIncome", "Annual Income (INR)"),
        TemplateField("forUse", "Purpose/Institution"),
    ],
    "agreement": [
        TemplateField("partyA", "Party A"),
        TemplateField("partyB", "Party B"),
        TemplateField("scope", "Scope/Services"),
        TemplateField("payment", "Payment/Fees"),
    ],
    "copyright": [
        TemplateField("owner", "Owner/Website Name"),
        TemplateField("work", "Work/Content Description"),
        TemplateField("year", "Year of Publication"),
    ],
}


def template_fields(slug: str) -> List[TemplateField]:
    """Category-specific form fields; empty for categories rendered generically."""
    return list(TEMPLATE_FIELDS.get(slug, []))


def _land(c: CommonFields, f: Mapping[str, str]) -> List[str]:
    return [
        f"SALE/TRANSFER AGREEMENT — {c.city}, dated {c.date}",
        f"Seller: {f['seller']}  Buyer: {f['buyer']}",
        f"Property: {f['propertyDesc']}",
        f"Consideration: ₹{f['consideration']}",
        "Both parties agree to execute and register the final deed at the Sub‑Registrar office.",
    ]


def _rental(c: CommonFields, f: Mapping[str, str]) -> List[str]:
    return [
        f"RENTAL AGREEMENT — dated {c.date}",
        f"Landlord: {f['landlord']}  Tenant: {f['tenant']}",
        f"Premises: {f['premises']}",
        f"Term: {f['term']} months  Rent: ₹{f['rent']}/month",
        "Tenant shall maintain the premises; either party may terminate with notice as per terms.",
    ]


def _affidavit(c: CommonFields, f: Mapping[str, str]) -> List[str]:
    return [
        f"AFFIDAVIT — {c.city}, dated {c.date}",
        f"{c.applicant_name}, residing at {c.address}, solemnly declares:",
        f"1) {f['purpose']}",
        f"2) {f['statement1']}",
        f"3) {f['statement2']}",
        "I affirm the above are true to the best of my knowledge and belief.",
    ]


def _income_declaration(c: CommonFields, f: Mapping[str, str]) -> List[str]:
    return [
        f"INCOME SELF‑DECLARATION — dated {c.date}",
        f"I, {c.applicant_name}, as {f['relation']}, declare my/our annual income is ₹{f['annualIncome']}.",
        f"This declaration is submitted to {f['forUse']}.",
    ]


def _agreement(c: CommonFields, f: Mapping[str, str]) -> List[str]:
    return [
        f"SERVICE AGREEMENT — dated {c.date}",
        f"Parties: {f['partyA']} and {f['partyB']}",
        f"Scope: {f['scope']}",
        f"Payment: {f['payment']}",
        "Term & termination as mutually agreed; disputes subject to local jurisdiction.",
    ]


def _copyright(c: CommonFields, f: Mapping[str, str]) -> List[str]:
    return [
        f"COPYRIGHT NOTICE — {f['year']} {f['owner']}. All rights reserved.",
        f"This notice covers: {f['work']}. Unauthorized copying, reproduction or distribution is prohibited.",
    ]


RENDERERS: Dict[str, Callable[[CommonFields, Mapping[str, str]], List[str]]] = {
    "land": _land,
    "rental": _rental,
    "affidavit": _affidavit,
    "income-declaration": _income_declaration,
    "agreement": _agreement,
    "copyright": _copyright,
}


def render_document(
    slug: str,
    common: Optional[CommonFields] = None,
    fields: Optional[Mapping[str, str]] = None,
    today: Optional[date_cls] = None,
) -> RenderedDocument:
    """
    Render a category's template.

    Missing common or category fields render as empty text and the date
    defaults to today. Raises KeyError for an unknown category.
    """
    category = get_category(slug)
    if category is None:
        raise KeyError(slug)

    common = (common or CommonFields()).model_copy()
    if not common.date:
        common.date = (today or date_cls.today()).isoformat()

    values = {field.key: "" for field in TEMPLATE_FIELDS.get(slug, [])}
    values.update({k: (v or "") for k, v in (fields or {}).items() if k in values})

    renderer = RENDERERS.get(slug)
    if renderer is not None:
        lines = renderer(common, values)
    else:
        lines = [
            f"{category.name} — {common.date}",
            f"Applicant: {common.applicant_name}, {common.address}",
        ]

    logger.info(f"Rendered {slug} template ({len(lines)} lines)")
    return RenderedDocument(slug=slug, title=category.name, lines=lines)
