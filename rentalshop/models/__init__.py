"""In-memory draft models for the contract wizard."""

from rentalshop.models.draft import ContractDraft, ContractItemDraft, PaymentDraft

__all__ = ["ContractDraft", "ContractItemDraft", "PaymentDraft"]
