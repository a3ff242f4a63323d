"""
Request Validation for the Rental Totals API

The engine itself never rejects a proposal; it degrades malformed fields to
zero. This module checks the request envelope only and raises ValueError with
a clear message when the shape is unusable.
"""


class RequestValidator:
    """Validates API request bodies before they reach the engine."""

    def validate_proposal(self, data) -> None:
        """A totals request must be a single JSON object."""
        if not data:
            raise ValueError("No input data provided")
        if not isinstance(data, dict):
            raise ValueError(f"Proposal must be a JSON object, got: {type(data).__name__}")

    def validate_proposal_list(self, data) -> None:
        """A classification request must be {"proposals": [ {...}, ... ]}."""
        if not data:
            raise ValueError("No input data provided")
        if not isinstance(data, dict):
            raise ValueError(f"Request must be a JSON object, got: {type(data).__name__}")

        proposals = data.get("proposals")
        if not isinstance(proposals, list):
            raise ValueError("proposals is required and must be a list")

        for i, proposal in enumerate(proposals):
            if not isinstance(proposal, dict):
                raise ValueError(f"Proposal {i} must be a JSON object, got: {type(proposal).__name__}")
