"""
Proposal Classification

Sorts a client's proposals into the active / completed / cancelled lists shown
on the portal dashboard.
"""

from .coercion import decode_json_list
from .dates import DateResolver

STATUS_PENDING = 'Pending'
STATUS_APPROVED = 'Approved'
STATUS_CANCELLED = 'Cancelled'


class ProposalClassifier:
    """Buckets proposal records by status and event start date."""

    def __init__(self, date_resolver: DateResolver | None = None):
        self.dates = date_resolver or DateResolver()

    def classify(self, proposals: list[dict]) -> dict[str, list[dict]]:
        """
        Active:    pending, or approved with a start date still ahead
        Completed: approved with a start date already passed
        Cancelled: cancelled

        Records keep their input order. A record with an unreadable start
        date is neither active-approved nor completed.
        """
        return {
            "active": [p for p in proposals if self.is_active(p)],
            "completed": [p for p in proposals if self.is_completed(p)],
            "cancelled": [p for p in proposals if p.get("status") == STATUS_CANCELLED],
        }

    def classify_with_totals(self, proposals: list[dict], processor) -> dict[str, list[dict]]:
        """Classify, attaching each record's rendered totals under "totals"."""
        return {
            name: [
                {**proposal, "totals": processor.output_builder.to_dict(processor.process(proposal))}
                for proposal in bucket
            ]
            for name, bucket in self.classify(proposals).items()
        }

    def is_active(self, proposal: dict) -> bool:
        status = proposal.get("status")
        if status == STATUS_PENDING:
            return True
        return status == STATUS_APPROVED and self.dates.is_future(proposal.get("startDate"))

    def is_completed(self, proposal: dict) -> bool:
        return proposal.get("status") == STATUS_APPROVED and self.dates.is_past(proposal.get("startDate"))


def normalize_sections(proposal: dict) -> list:
    """
    Decode a proposal's sections for display, defaulting each product note to "".

    Sections without a product list are passed through unchanged.
    """
    sections = []
    for section in decode_json_list(proposal.get("sectionsJSON"), "sectionsJSON"):
        if isinstance(section, dict) and isinstance(section.get("products"), list):
            section = {
                **section,
                "products": [
                    {**product, "note": product.get("note") or ''} if isinstance(product, dict) else product
                    for product in section["products"]
                ],
            }
        sections.append(section)
    return sections
