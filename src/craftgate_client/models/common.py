"""
Vocabulary shared across Craftgate API areas.
"""

from enum import Enum


class Status(Enum):
    """Availability of a record."""
    ACTIVE = "ACTIVE"
    PASSIVE = "PASSIVE"


class Currency(Enum):
    """Currencies accepted by the Craftgate API."""
    TRY = "TRY"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    CNY = "CNY"
    ARS = "ARS"
    BRL = "BRL"
    AED = "AED"
    IQD = "IQD"
    AZN = "AZN"
    KZT = "KZT"


class CardType(Enum):
    """Card funding type."""
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PREPAID_CARD = "PREPAID_CARD"
