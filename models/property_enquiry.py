"""
Property Enquiry Model - buyer-qualification questionnaire
Holds the form snapshot, the categorical answer sets and the form definition
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Tuple, Type
from enum import Enum

class Timeline(str, Enum):
    """Purchase timeline"""
    IMMEDIATE = "Immediate"
    SHORT = "Short"
    MEDIUM = "Medium"
    LONG = "Long"

class Financing(str, Enum):
    """Financing situation"""
    READY = "Ready"
    IN_PROGRESS = "In Progress"
    CONTINGENT = "Contingent"
    EARLY = "Early"

class Purpose(str, Enum):
    """Primary goal for the purchase"""
    RESIDENCE = "Residence"
    INVESTMENT = "Investment"
    RESEARCH = "Research"

class DecisionMaker(str, Enum):
    """Decision power"""
    SOLE = "Sole"
    PARTNER = "Partner"
    OTHER = "Other"

class Activity(str, Enum):
    """Recent market activity"""
    ACTIVE = "Active"
    ONLINE = "Online"
    NEW = "New"

class Budget(str, Enum):
    """Budget range (INR)"""
    PREMIUM = "Premium"
    HIGH = "High"
    MID = "Mid"
    ENTRY = "Entry"

class SiteVisit(str, Enum):
    """Consultation readiness"""
    IMMEDIATE = "Immediate"
    NEAR = "Near"
    NOT_READY = "Not ready"

# Allowed answers for each select field
ANSWER_CHOICES: Dict[str, Type[Enum]] = {
    "timeline": Timeline,
    "financing": Financing,
    "purpose": Purpose,
    "decision_maker": DecisionMaker,
    "activity": Activity,
    "budget": Budget,
    "site_visit": SiteVisit,
}

class EnquiryFormData(BaseModel):
    """
    Immutable snapshot of the form fields.
    Every change produces a new snapshot; empty string means unanswered.
    """
    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    mobile: str = ""
    timeline: str = ""
    financing: str = ""
    purpose: str = ""
    decision_maker: str = ""
    activity: str = ""
    budget: str = ""
    site_visit: str = ""

    def with_field(self, field_name: str, value: str) -> "EnquiryFormData":
        """Return a copy with exactly one field replaced"""
        if field_name not in type(self).model_fields:
            raise KeyError(f"Unknown form field: {field_name}")
        return self.model_copy(update={field_name: value})

    def missing_fields(self) -> List[str]:
        """Names of fields still holding the empty string"""
        return [name for name, value in self.model_dump().items() if value == ""]

    def invalid_choices(self) -> List[str]:
        """Answered select fields whose value is not one of the offered options"""
        return [
            field_name for field_name, choices in ANSWER_CHOICES.items()
            if getattr(self, field_name) and getattr(self, field_name) not in {member.value for member in choices}
        ]

    def to_record(self) -> Dict[str, str]:
        """Row shape stored in the property_enquiries table"""
        return self.model_dump()

class FormField(BaseModel):
    """A single input of the enquiry form"""
    name: str
    label: str
    input_type: str = "select"
    placeholder: str
    section: str
    required: bool = True
    options: List[Tuple[str, str]] = Field(default_factory=list)

CONTACT_SECTION = "Contact Information"
REQUIREMENTS_SECTION = "Property Requirements"

# (value, label) pairs shown in each select
OPTION_LABELS: Dict[str, List[Tuple[str, str]]] = {
    "timeline": [
        (Timeline.IMMEDIATE.value, "Immediately / Within 3 months"),
        (Timeline.SHORT.value, "3 to 6 months"),
        (Timeline.MEDIUM.value, "6 to 12 months"),
        (Timeline.LONG.value, "Just browsing / 12+ months"),
    ],
    "financing": [
        (Financing.READY.value, "Cash buyer / Pre-approved"),
        (Financing.IN_PROGRESS.value, "In talks with a lender"),
        (Financing.CONTINGENT.value, "Need to sell current property"),
        (Financing.EARLY.value, "Haven't started financing yet"),
    ],
    "purpose": [
        (Purpose.RESIDENCE.value, "Primary Residence (End-user)"),
        (Purpose.INVESTMENT.value, "Investment (Rental/Resale)"),
        (Purpose.RESEARCH.value, "General market research"),
    ],
    "decision_maker": [
        (DecisionMaker.SOLE.value, "Yes, I am the sole decision-maker"),
        (DecisionMaker.PARTNER.value, "Yes, deciding with a partner"),
        (DecisionMaker.OTHER.value, "No, researching for someone else"),
    ],
    "activity": [
        (Activity.ACTIVE.value, "Actively visiting properties"),
        (Activity.ONLINE.value, "Searching online for 1 month+"),
        (Activity.NEW.value, "Just started looking"),
    ],
    "budget": [
        (Budget.PREMIUM.value, "Above ₹1.5 Crore"),
        (Budget.HIGH.value, "₹1 Crore - ₹1.5 Crore"),
        (Budget.MID.value, "₹60 Lakhs - ₹1 Crore"),
        (Budget.ENTRY.value, "Below ₹60 Lakhs"),
    ],
    "site_visit": [
        (SiteVisit.IMMEDIATE.value, "Ready this week"),
        (SiteVisit.NEAR.value, "Within next 2 weeks"),
        (SiteVisit.NOT_READY.value, "Not ready for a visit yet"),
    ],
}

FORM_FIELDS: List[FormField] = [
    FormField(name="name", label="Full Name", input_type="text",
              placeholder="Enter your full name", section=CONTACT_SECTION),
    FormField(name="email", label="Email Address", input_type="email",
              placeholder="Enter your email address", section=CONTACT_SECTION),
    FormField(name="mobile", label="Mobile Number", input_type="tel",
              placeholder="Enter your mobile number", section=CONTACT_SECTION),
    FormField(name="timeline", label="1. Purchase Timeline",
              placeholder="When are you looking to buy?",
              section=REQUIREMENTS_SECTION, options=OPTION_LABELS["timeline"]),
    FormField(name="financing", label="2. Financing Situation",
              placeholder="Select financing status",
              section=REQUIREMENTS_SECTION, options=OPTION_LABELS["financing"]),
    FormField(name="purpose", label="3. Property Goal",
              placeholder="Primary goal for this purchase",
              section=REQUIREMENTS_SECTION, options=OPTION_LABELS["purpose"]),
    FormField(name="decision_maker", label="4. Decision Power",
              placeholder="Are you the primary decision-maker?",
              section=REQUIREMENTS_SECTION, options=OPTION_LABELS["decision_maker"]),
    FormField(name="activity", label="5. Market Activity",
              placeholder="Your recent activity level",
              section=REQUIREMENTS_SECTION, options=OPTION_LABELS["activity"]),
    FormField(name="budget", label="6. Budget Range (INR)",
              placeholder="Select estimated budget",
              section=REQUIREMENTS_SECTION, options=OPTION_LABELS["budget"]),
    FormField(name="site_visit", label="7. Consultation Readiness",
              placeholder="When can you visit a site?",
              section=REQUIREMENTS_SECTION, options=OPTION_LABELS["site_visit"]),
]

def get_form_field(name: str) -> Optional[FormField]:
    """Look up a field definition by name"""
    for form_field in FORM_FIELDS:
        if form_field.name == name:
            return form_field
    return None
