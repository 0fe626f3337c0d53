"""Ledger – polymorphic member ledger entries.

The backend tags every ledger row with a ``type``.  Each tag maps to one
dataclass; :func:`parse_ledger_entry` dispatches on the tag and
:func:`entry_details` renders the rows of the expanded view through a
``singledispatch`` registry that must cover every entry class.
"""
from __future__ import annotations

import dataclasses
import functools
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, ClassVar, Mapping

from ub_dashboard.kernel.errors import SerializationError

NOT_AVAILABLE = "N/A"


class LedgerEntryType(str, Enum):
    ADMIN_FEE = "admin_fee"
    ANNUITY_PAYOUT = "annuity_payout"
    MANUAL_ADJUSTMENT = "manual_adjustment"
    CLAIM = "claim"
    ACCOUNT_CONTRIBUTION = "account_contribution"
    MEMBER_CONTRIBUTION = "member_contribution"
    INSURANCE_PREMIUM = "insurance_premium"
    ANNUITY_UPDATE = "annuity_update"
    GENERIC = "ledger_entries"


class AccountType(str, Enum):
    HEALTH = "HEALTH"
    ANNUITY = "ANNUITY"


@dataclasses.dataclass(frozen=True)
class Account:
    id: int
    type: AccountType


@dataclasses.dataclass(frozen=True, kw_only=True)
class LedgerEntry:
    """Fields shared by every ledger entry."""

    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.GENERIC

    id: int
    account_id: int
    member_id: int
    posted: bool
    suspended: bool
    amount: Decimal
    posted_date: date | None
    created_at: datetime
    updated_at: datetime
    account: Account | None = None

    @property
    def type(self) -> str:
        return self.entry_type.value


@dataclasses.dataclass(frozen=True, kw_only=True)
class AdminFeeLedgerEntry(LedgerEntry):
    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.ADMIN_FEE

    insurance_premium_id: int | None = None
    insurance_premium_batch_id: int | None = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class AnnuityPayoutLedgerEntry(LedgerEntry):
    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.ANNUITY_PAYOUT

    account_number: str
    check_date: date | None
    check_number: str | None = None
    tax_rate: Decimal
    allow_overdraft: bool = False
    code1099: str
    use_member_info: bool = False
    admin_fee: bool = False
    admin_fee_amount: Decimal = Decimal("0")
    tax_override_amount: Decimal | None = None
    company_id: int | None = None
    annuity_person_id: int | None = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class ManualAdjustmentLedgerEntry(LedgerEntry):
    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.MANUAL_ADJUSTMENT

    description: str | None = None
    allow_overdraft: bool = False


@dataclasses.dataclass(frozen=True, kw_only=True)
class ClaimLedgerEntry(LedgerEntry):
    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.CLAIM

    description: str | None = None
    check_date: date | None = None
    check_number: str | None = None
    allow_overdraft: bool = False
    claim_type: str


@dataclasses.dataclass(frozen=True, kw_only=True)
class AccountContributionLedgerEntry(LedgerEntry):
    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.ACCOUNT_CONTRIBUTION

    description: str | None = None
    account_contribution_batch_id: int | None = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class MemberContributionLedgerEntry(LedgerEntry):
    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.MEMBER_CONTRIBUTION

    employer_contribution_id: int | None = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class InsurancePremiumLedgerEntry(LedgerEntry):
    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.INSURANCE_PREMIUM

    insurance_premium_batch_id: int | None = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class AnnuityUpdateLedgerEntry(LedgerEntry):
    entry_type: ClassVar[LedgerEntryType] = LedgerEntryType.ANNUITY_UPDATE

    year_end_balance: Decimal | None = None
    annuity_interest_id: int | None = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class GenericLedgerEntry(LedgerEntry):
    """Fallback for the base tag and for tags this client does not know yet."""

    raw_type: str = LedgerEntryType.GENERIC.value

    @property
    def type(self) -> str:
        return self.raw_type


ENTRY_CLASSES: dict[LedgerEntryType, type[LedgerEntry]] = {
    cls.entry_type: cls
    for cls in (
        AdminFeeLedgerEntry,
        AnnuityPayoutLedgerEntry,
        ManualAdjustmentLedgerEntry,
        ClaimLedgerEntry,
        AccountContributionLedgerEntry,
        MemberContributionLedgerEntry,
        InsurancePremiumLedgerEntry,
        AnnuityUpdateLedgerEntry,
        GenericLedgerEntry,
    )
}

_DISPLAY_NAMES: dict[str, str] = {
    LedgerEntryType.ADMIN_FEE.value: "Admin Fee",
    LedgerEntryType.ANNUITY_PAYOUT.value: "Annuity Payout",
    LedgerEntryType.MANUAL_ADJUSTMENT.value: "Manual Adjustment",
    LedgerEntryType.CLAIM.value: "Claim",
    LedgerEntryType.ACCOUNT_CONTRIBUTION.value: "Account Contribution",
    LedgerEntryType.MEMBER_CONTRIBUTION.value: "Member Contribution",
    LedgerEntryType.INSURANCE_PREMIUM.value: "Insurance Premium",
    LedgerEntryType.ANNUITY_UPDATE.value: "Annuity Update",
    LedgerEntryType.GENERIC.value: "Ledger Entry",
}


def display_name(entry_type: str) -> str:
    """Human label for a ledger entry tag (``"some_new_type"`` -> ``"Some new type"``)."""
    if entry_type in _DISPLAY_NAMES:
        return _DISPLAY_NAMES[entry_type]
    if not entry_type:
        return entry_type
    return entry_type[0].upper() + entry_type[1:].replace("_", " ")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {value!r}") from exc


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    if "T" in text or " " in text:
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _to_account(value: Any) -> Account:
    return Account(id=int(value["id"]), type=AccountType(str(value["type"]).upper()))


_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "amount": _to_decimal,
    "tax_rate": _to_decimal,
    "admin_fee_amount": _to_decimal,
    "tax_override_amount": _to_decimal,
    "year_end_balance": _to_decimal,
    "posted_date": _to_date,
    "check_date": _to_date,
    "created_at": _to_datetime,
    "updated_at": _to_datetime,
    "account": _to_account,
}


def parse_ledger_entry(payload: Mapping[str, Any]) -> LedgerEntry:
    """Build the entry class matching ``payload["type"]``.

    Unknown tags produce a :class:`GenericLedgerEntry` that keeps the raw tag.

    Raises
    ------
    SerializationError
        When a required field is missing or a value cannot be converted.
    """
    raw_type = str(payload.get("type") or LedgerEntryType.GENERIC.value)
    try:
        cls = ENTRY_CLASSES[LedgerEntryType(raw_type)]
    except ValueError:
        cls = GenericLedgerEntry

    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        if field.name == "raw_type":
            kwargs["raw_type"] = raw_type
            continue
        if field.name not in payload:
            if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                raise SerializationError(
                    f"{raw_type} ledger entry is missing '{field.name}'",
                    payload_type=raw_type,
                )
            continue
        value = payload[field.name]
        converter = _CONVERTERS.get(field.name)
        if value is not None and converter is not None:
            try:
                value = converter(value)
            except (KeyError, TypeError, ValueError) as exc:
                raise SerializationError(
                    f"{raw_type} ledger entry has invalid '{field.name}': {value!r}",
                    payload_type=raw_type,
                    cause=exc,
                ) from exc
        kwargs[field.name] = value
    return cls(**kwargs)


# ---------------------------------------------------------------------------
# Expanded-view details
# ---------------------------------------------------------------------------


def format_money(value: Decimal | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _text(value: Any) -> str:
    if value is None or value == "":
        return NOT_AVAILABLE
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


Detail = tuple[str, str]


@functools.singledispatch
def type_specific_details(entry: LedgerEntry) -> list[Detail]:
    return []


@type_specific_details.register
def _(entry: GenericLedgerEntry) -> list[Detail]:
    return []


@type_specific_details.register
def _(entry: AdminFeeLedgerEntry) -> list[Detail]:
    return [
        ("Insurance Premium ID", _text(entry.insurance_premium_id)),
        ("Insurance Premium Batch ID", _text(entry.insurance_premium_batch_id)),
    ]


@type_specific_details.register
def _(entry: AnnuityPayoutLedgerEntry) -> list[Detail]:
    rows = [
        ("Account Number", _text(entry.account_number)),
        ("Check Date", _text(entry.check_date)),
        ("Check Number", _text(entry.check_number)),
        ("Tax Rate", f"{entry.tax_rate * 100:.2f}%"),
        ("1099 Code", _text(entry.code1099)),
        ("Allow Overdraft", _yes_no(entry.allow_overdraft)),
        ("Use Member Info", _yes_no(entry.use_member_info)),
        ("Admin Fee", _yes_no(entry.admin_fee)),
        ("Admin Fee Amount", format_money(entry.admin_fee_amount)),
    ]
    if entry.tax_override_amount is not None:
        rows.append(("Tax Override Amount", format_money(entry.tax_override_amount)))
    if entry.company_id:
        rows.append(("Company ID", str(entry.company_id)))
    if entry.annuity_person_id:
        rows.append(("Annuity Person ID", str(entry.annuity_person_id)))
    return rows


@type_specific_details.register
def _(entry: ManualAdjustmentLedgerEntry) -> list[Detail]:
    return [
        ("Description", _text(entry.description)),
        ("Posted", _yes_no(entry.posted)),
        ("Allow Overdraft", _yes_no(entry.allow_overdraft)),
    ]


@type_specific_details.register
def _(entry: ClaimLedgerEntry) -> list[Detail]:
    return [
        ("Claim Type", _text(entry.claim_type)),
        ("Check Number", _text(entry.check_number)),
        ("Check Date", _text(entry.check_date)),
        ("Description", _text(entry.description)),
        ("Allow Overdraft", _yes_no(entry.allow_overdraft)),
    ]


@type_specific_details.register
def _(entry: AccountContributionLedgerEntry) -> list[Detail]:
    return [
        ("Description", _text(entry.description)),
        ("Batch ID", _text(entry.account_contribution_batch_id)),
        ("Posted", _yes_no(entry.posted)),
    ]


@type_specific_details.register
def _(entry: MemberContributionLedgerEntry) -> list[Detail]:
    return [
        ("Employer Contribution ID", _text(entry.employer_contribution_id)),
        ("Posted", _yes_no(entry.posted)),
    ]


@type_specific_details.register
def _(entry: InsurancePremiumLedgerEntry) -> list[Detail]:
    return [("Batch ID", _text(entry.insurance_premium_batch_id))]


@type_specific_details.register
def _(entry: AnnuityUpdateLedgerEntry) -> list[Detail]:
    return [
        ("Year-End Balance", format_money(entry.year_end_balance)),
        ("Annuity Interest ID", _text(entry.annuity_interest_id)),
    ]


_unrendered = [cls.__name__ for cls in ENTRY_CLASSES.values() if cls not in type_specific_details.registry]
if _unrendered:
    raise RuntimeError(f"ledger entry classes without a details renderer: {_unrendered}")


def entry_details(entry: LedgerEntry) -> list[Detail]:
    """Ordered ``(label, value)`` rows shown when a ledger row is expanded."""
    common = [
        ("Entry ID", str(entry.id)),
        ("Transaction Type", display_name(entry.type)),
        ("Account Type", entry.account.type.value if entry.account else NOT_AVAILABLE),
        ("Posted Date", _text(entry.posted_date)),
        ("Amount", format_money(entry.amount)),
        ("Created", _text(entry.created_at)),
        ("Updated", _text(entry.updated_at)),
    ]
    return common + type_specific_details(entry)


__all__ = [
    "Account",
    "AccountContributionLedgerEntry",
    "AccountType",
    "AdminFeeLedgerEntry",
    "AnnuityPayoutLedgerEntry",
    "AnnuityUpdateLedgerEntry",
    "ClaimLedgerEntry",
    "ENTRY_CLASSES",
    "GenericLedgerEntry",
    "InsurancePremiumLedgerEntry",
    "LedgerEntry",
    "LedgerEntryType",
    "ManualAdjustmentLedgerEntry",
    "MemberContributionLedgerEntry",
    "NOT_AVAILABLE",
    "display_name",
    "entry_details",
    "format_money",
    "parse_ledger_entry",
    "type_specific_details",
]
