"""
RENTAL PROPOSAL TOTALS ENGINE
"""

from .classification import ProposalClassifier
from .models import Proposal, TotalsBreakdown
from .processor import TotalsProcessor, calculate_total, compute_totals

__all__ = [
    'TotalsProcessor',
    'Proposal',
    'TotalsBreakdown',
    'ProposalClassifier',
    'compute_totals',
    'calculate_total',
]
