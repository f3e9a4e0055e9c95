"""
Static legal category catalog for VidhiSahayak.

Holds the document categories, the guidance checklist shown for each of them
and the keywords used to route free-text questions to a category.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    """A document category."""
    slug: str
    name: str
    image: Optional[str] = None
    create_hint: Optional[str] = None
    keywords: tuple = ()


@dataclass(frozen=True)
class Guidance:
    """Where to get, verify and submit a category's documents."""
    where_to_get: List[str]
    type_required: List[str]
    verification_contacts: List[str]
    submission_offices: List[str]
    print_guidance: List[str]
    steps: List[str]

    def as_text(self) -> str:
        return " ".join(
            self.where_to_get
            + self.type_required
            + self.verification_contacts
            + self.submission_offices
            + self.print_guidance
            + self.steps
        )


@dataclass
class DocumentDetails:
    """Detail page content for a category's documents."""
    guidance: List[str]
    where_to_get: List[str]
    types_required: List[str]
    verification: List[str]
    submission: List[str]
    printing: List[str] = field(default_factory=list)
    filling: List[str] = field(default_factory=list)


CATEGORIES: List[Category] = [
    Category(
        slug="land",
        name="Land",
        image="/images/categories/land.jpg",
        create_hint="Sale deed, land purchase/sale agreement, gift deed, PoA, encumbrance certificate requests.",
        keywords=("sale deed", "gift deed", "partition deed", "encumbrance", "property", "plot",
                  "survey number", "sub-registrar", "sub registrar", "mutation", "power of attorney"),
    ),
    Category(
        slug="agreement",
        name="Agreement",
        image="/images/categories/agreement.jpg",
        create_hint="Service agreement, NDA, partnership deed, consultancy, employment/offer letter.",
        keywords=("contract", "service agreement", "nda", "non-disclosure", "partnership deed",
                  "consultancy", "offer letter", "employment agreement"),
    ),
    Category(
        slug="rental",
        name="Rental",
        image="/images/categories/rental.jpg",
        create_hint="House rent agreement, leave & license, commercial lease, rent receipt, notice to vacate.",
        keywords=("rent", "tenant", "landlord", "lease", "tenancy", "rent agreement", "lease agreement",
                  "leave and license", "leave & license", "notice to vacate", "eviction", "security deposit"),
    ),
    Category(
        slug="affidavit",
        name="Affidavit",
        image="/images/categories/affidavit.jpg",
        create_hint="Name change, address proof, identity proof, lost document, self‑declaration affidavits.",
        keywords=("name change", "lost document", "address proof", "notary", "self declaration",
                  "self-declaration", "sworn statement"),
    ),
    Category(
        slug="income-declaration",
        name="Income Declaration",
        create_hint="Self‑declaration of income for scholarships/reservations/hostel/admissions.",
        keywords=("income certificate", "income proof", "annual income", "scholarship", "income declaration"),
    ),
    Category(
        slug="ipr",
        name="IPR",
        create_hint="Trademark application, copyright notice, license agreements, cease & desist.",
        keywords=("trademark", "intellectual property", "patent", "cease and desist", "brand name", "logo"),
    ),
    Category(
        slug="application-form-creation",
        name="Application Form Creation",
        create_hint="Custom application forms for society, school, office, tenders, and registrations.",
        keywords=("application form", "tender", "registration form", "society registration", "e-seva", "csc"),
    ),
    Category(
        slug="design-patents",
        name="Design Patents",
        create_hint="Design application cover, declaration, drawings list, and class details sheets.",
        keywords=("design patent", "design registration", "industrial design", "drawings", "prior art"),
    ),
    Category(
        slug="copyright",
        name="Copyright",
        image="/images/categories/copyright.jpg",
        create_hint="Copyright notice, assignment agreement, license grant, DMCA takedown letter.",
        keywords=("dmca", "takedown", "piracy", "copied my", "plagiarism", "copyright notice"),
    ),
    Category(
        slug="mou",
        name="MOU",
        create_hint="Memorandum of Understanding between parties outlining intent and key terms.",
        keywords=("memorandum of understanding", "mou", "letter of intent"),
    ),
    Category(
        slug="security",
        name="Security",
        create_hint="Security bond, indemnity, surety undertakings, background verification consent.",
        keywords=("security bond", "indemnity", "pledge", "mortgage", "hypothecation", "collateral"),
    ),
    Category(
        slug="surety",
        name="Surety",
        create_hint="Surety bond/undertaking for employment, tenancy, loans, and government forms.",
        keywords=("surety", "guarantor", "guarantee", "bail bond"),
    ),
]


GUIDANCE: Dict[str, Guidance] = {
    "land": Guidance(
        where_to_get=["Local sub-registrar office", "Revenue department website"],
        type_required=["Sale deed / Gift deed / Partition deed (as applicable)", "ID proofs of parties"],
        verification_contacts=["Licensed advocate", "Sub-registrar office"],
        submission_offices=["Sub-registrar office", "Municipal/Revenue department"],
        print_guidance=["A4 bond paper", "Black ink, legible fonts"],
        steps=[
            "Collect ownership documents and encumbrance certificate",
            "Draft deed as per purpose (sale/gift/lease)",
            "Get stamp duty estimation",
            "Book appointment at sub-registrar",
            "Execute and register deed with witnesses",
        ],
    ),
    "agreement": Guidance(
        where_to_get=["Template from legal services website", "Drafted by an advocate"],
        type_required=["Parties' details", "Scope/terms, consideration, timelines"],
        verification_contacts=["Advocate/Notary"],
        submission_offices=["Not required unless registration mandatory"],
        print_guidance=["A4 paper", "Both party signatures on all pages"],
        steps=["Draft terms", "Review risks", "Sign and notarize if needed"],
    ),
    "rental": Guidance(
        where_to_get=["State's rent agreement portal", "Notary/Advocate"],
        type_required=["Owner and tenant KYC", "Property details, rent, tenure"],
        verification_contacts=["Notary public", "Lawyer"],
        submission_offices=[
            "E-registration portal (state-wise)",
            "Sub-registrar if tenure>11 months (varies by state)",
        ],
        print_guidance=["Non-judicial stamp paper as per state", "Two witnesses"],
        steps=["Draft agreement", "Calculate stamp duty", "E-register or notarize", "Share copies with parties"],
    ),
    "affidavit": Guidance(
        where_to_get=["Notary office", "District court complex"],
        type_required=["Declarant details", "Statement of facts"],
        verification_contacts=["Notary public"],
        submission_offices=["As per use-case: university, bank, govt dept"],
        print_guidance=["Non-judicial stamp paper (denomination varies)", "Sign before notary"],
        steps=["Prepare draft", "Visit notary with ID", "Sign and notarize", "Submit to requesting authority"],
    ),
    "income-declaration": Guidance(
        where_to_get=["Chartered accountant", "Government forms"],
        type_required=["Income sources", "Bank statements (if needed)"],
        verification_contacts=["CA/Notary"],
        submission_offices=["As specified by requesting authority"],
        print_guidance=["A4 paper", "Attest supporting documents"],
        steps=["Collect proofs", "Draft declaration", "Notarize if required", "Submit"],
    ),
    "ipr": Guidance(
        where_to_get=["IP India portal", "Patent/design/trademark agent"],
        type_required=["Type: patent/design/trademark", "Owner details, description"],
        verification_contacts=["Registered IP agent", "Lawyer"],
        submission_offices=["https://ipindia.gov.in"],
        print_guidance=["Follow portal formats", "Annex drawings/specifications"],
        steps=["Choose category", "Prepare specification", "File online", "Track examination"],
    ),
    "application-form-creation": Guidance(
        where_to_get=["Concerned department website", "CSC/e-Seva"],
        type_required=["Applicant details", "Purpose-specific attachments"],
        verification_contacts=["Helpline of department", "Facilitator"],
        submission_offices=["Online portal", "Local office"],
        print_guidance=["A4 paper", "Attach photocopies as per checklist"],
        steps=["Download latest form", "Fill carefully", "Attach required docs", "Submit online/offline"],
    ),
    "design-patents": Guidance(
        where_to_get=["IP India Designs Office", "Registered patent/design agent"],
        type_required=["Novel design details", "Drawings/images"],
        verification_contacts=["IP agent"],
        submission_offices=["IP India portal"],
        print_guidance=["As per design rules", "High-quality prints of drawings"],
        steps=["Prior art search", "Prepare drawings", "File application", "Respond to examination"],
    ),
    "copyright": Guidance(
        where_to_get=["Copyright Office of India", "Online portal"],
        type_required=["Work details (literary/artistic/software)", "Author/owner details"],
        verification_contacts=["Lawyer/Agent"],
        submission_offices=["https://copyright.gov.in"],
        print_guidance=["Digital submission preferred", "Attach source code extracts for software"],
        steps=["Prepare work samples", "File online", "Track diary number", "Respond to objections"],
    ),
    "mou": Guidance(
        where_to_get=["Advocate-drafted", "Templates reviewed by lawyer"],
        type_required=["Party details", "Scope, deliverables, term"],
        verification_contacts=["Lawyer"],
        submission_offices=["Not mandatory (kept between parties)"],
        print_guidance=["A4 paper", "Initial every page"],
        steps=["Draft terms", "Review", "Sign by both parties", "Notarize if needed"],
    ),
    "security": Guidance(
        where_to_get=["Bank-prescribed formats", "Lawyer-drafted"],
        type_required=["Type: pledge/mortgage/hypothecation", "Asset and borrower details"],
        verification_contacts=["Bank/legal advisor"],
        submission_offices=["Bank/Registrar depending on instrument"],
        print_guidance=["Stamp duty as per state", "Witness signatures"],
        steps=["Choose instrument", "Draft terms", "Execute and register if applicable"],
    ),
    "surety": Guidance(
        where_to_get=["Bank/company formats", "Notary"],
        type_required=["Surety and principal details", "Obligations and limits"],
        verification_contacts=["Bank/legal advisor"],
        submission_offices=["Bank/company"],
        print_guidance=["Non-judicial stamp paper (as required)", "Witness signatures"],
        steps=["Collect KYC", "Draft surety terms", "Execute and notarize if required"],
    ),
}


GENERIC_DOCUMENT_DETAILS = DocumentDetails(
    guidance=[
        "Purpose and use cases of the document",
        "Key fields to fill and common mistakes to avoid",
        "Keep copies and supporting proofs ready",
    ],
    where_to_get=[
        "Download a template from this site or state portal",
        "Visit nearby eSeva/MeeSeva/Common Service Center if offline required",
    ],
    types_required=["Self-attested ID proof", "Address proof", "Any supporting case/property details"],
    verification=["Local notary/lawyer for attestation", "Concerned department staff for acceptance"],
    submission=[
        "Submit to the appropriate department (Tehsildar/Municipal/Registration office)",
        "Take an acknowledgement receipt",
    ],
    printing=["Use A4 white bond paper", "Black ink, clear margins (1 inch)", "Sign on each page if required"],
    filling=[
        "Write names as per ID proofs",
        "Double-check dates, addresses, survey/door numbers",
        "Strike off non-applicable clauses",
    ],
)

_IP_DETAILS = {
    "guidance": ["Ownership, license or assignment terms", "Notice and takedown (DMCA) where applicable"],
    "where_to_get": ["Template here", "IP India portal for filings"],
    "types_required": ["Work details", "Owner details"],
    "verification": ["Lawyer/IP agent review"],
    "submission": ["IP office portal (for filings)"],
}

# Category-specific overrides; missing keys fall back to the generic details
SPECIFIC_DOCUMENT_DETAILS: Dict[str, Dict[str, List[str]]] = {
    "land": {
        "guidance": [
            "Sale deed / gift deed / land purchase agreement basics",
            "Encumbrance certificate and property identifiers (survey no./plot no.)",
        ],
        "where_to_get": ["Sub-Registrar office forms", "Download template"],
        "types_required": ["Seller & buyer ID/address proofs", "Property documents, tax receipts"],
        "verification": ["Registered document at Sub-Registrar", "Lawyer/notary review"],
        "submission": ["Sub-Registrar office on appointment"],
    },
    "rental": {
        "guidance": ["Leave & License vs Rental—choose correct term", "Tenant/Owner details and duration"],
        "where_to_get": ["Template here", "State e-registration portal (if available)"],
        "types_required": ["Owner & tenant ID proofs", "Address proof of premises"],
        "verification": ["Notarization if required by locality", "Police intimation as per state rules"],
        "submission": ["Keep 2 signed copies for both parties"],
    },
    "affidavit": {
        "guidance": [
            "Affidavit purpose: name change/lost docs/address proof",
            "Declarant’s details and statements",
        ],
        "where_to_get": ["Template here", "Notary/lawyer counters for stamping"],
        "types_required": ["ID proof", "Any supporting evidence"],
        "verification": ["Notary attestation"],
        "submission": ["Submit to the department asking the affidavit"],
    },
    "income-declaration": {
        "guidance": ["Self‑declaration for scholarship/reservation/hostel"],
        "where_to_get": ["Template here"],
        "types_required": ["Applicant ID", "Parent/guardian details"],
        "verification": ["Institute/office may counter‑sign"],
        "submission": ["Submit to the requesting institute/office"],
    },
    "agreement": {
        "guidance": ["Define parties, scope, term, payment, termination"],
        "where_to_get": ["Template here"],
        "types_required": ["Parties’ IDs", "Scope/fee details"],
        "verification": ["Lawyer review recommended for high‑value contracts"],
        "submission": ["Execute in duplicate; share one signed copy each"],
    },
    "copyright": _IP_DETAILS,
    "ipr": _IP_DETAILS,
}

_CATEGORIES_BY_SLUG: Dict[str, Category] = {c.slug: c for c in CATEGORIES}


def list_categories() -> List[Category]:
    """All categories in display order."""
    return list(CATEGORIES)


def get_category(slug: str) -> Optional[Category]:
    return _CATEGORIES_BY_SLUG.get(slug)


def get_guidance(slug: str) -> Optional[Guidance]:
    return GUIDANCE.get(slug)


def document_details(slug: str) -> DocumentDetails:
    """
    Detail content for a category's documents.

    Category-specific sections replace the generic ones; printing and filling
    instructions are always the generic ones.
    """
    specific = SPECIFIC_DOCUMENT_DETAILS.get(slug, {})
    base = GENERIC_DOCUMENT_DETAILS
    return DocumentDetails(
        guidance=list(specific.get("guidance", base.guidance)),
        where_to_get=list(specific.get("where_to_get", base.where_to_get)),
        types_required=list(specific.get("types_required", base.types_required)),
        verification=list(specific.get("verification", base.verification)),
        submission=list(specific.get("submission", base.submission)),
        printing=list(base.printing),
        filling=list(base.filling),
    )
