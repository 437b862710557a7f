"""
Enhanced job status value object.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Where a job sits in the payment -> agreement -> scheduling -> completion pipeline."""

    QUOTE_ACCEPTED = "quote_accepted"
    AWAITING_PAYMENT = "awaiting_payment"
    PAYMENT_RECEIVED = "payment_received"
    AWAITING_AGREEMENT = "awaiting_agreement"
    AGREEMENT_SIGNED = "agreement_signed"
    AWAITING_INSTALL_BOOKING = "awaiting_install_booking"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    INSTALL_COMPLETED_PENDING_QA = "install_completed_pending_qa"
    COMPLETED = "completed"
    REVISIT_REQUIRED = "revisit_required"

    def is_bookable(self) -> bool:
        """Check if status allows installation booking."""
        return self in [JobStatus.AWAITING_INSTALL_BOOKING, JobStatus.SCHEDULED]

    def is_final(self) -> bool:
        """Check if status is final (no more scheduling)."""
        return self in [JobStatus.COMPLETED]

    def has_engineer_work(self) -> bool:
        """Check if engineer work may exist for the job."""
        return self in [
            JobStatus.IN_PROGRESS,
            JobStatus.INSTALL_COMPLETED_PENDING_QA,
            JobStatus.COMPLETED,
            JobStatus.REVISIT_REQUIRED,
        ]
