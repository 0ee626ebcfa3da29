"""
Record Models for Finance Tracker

These models describe the records owned by the external record store:
transactions, accounts, categories (with subcategories), budgets and goals.

DESIGN DECISION: Records are immutable (frozen pydantic models).
The core never edits a record in place; an edit is a new instance built
with model_copy(update=...) and handed back to the store.

DESIGN DECISION: Money is Decimal everywhere. Floats are accepted at the
edges and converted through str() so 0.1 stays 0.1.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction. Amounts are always stored as magnitudes."""
    INCOME = "income"
    EXPENSE = "expense"


class RecurringFrequency(str, Enum):
    """How often a recurring transaction repeats."""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class AccountType(str, Enum):
    """
    Kind of holding.

    CRITICAL: CREDIT accounts hold debt, not funds. They are excluded
    from every "total balance" figure.
    """
    CASH = "cash"
    BANK = "bank"
    CREDIT = "credit"
    INVESTMENT = "investment"
    OTHER = "other"


class BudgetPeriod(str, Enum):
    """Recurring window a budget applies to."""
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RecordKind(str, Enum):
    """Record collections held by the record store."""
    TRANSACTION = "transaction"
    ACCOUNT = "account"
    CATEGORY = "category"
    BUDGET = "budget"
    GOAL = "goal"


_RECORD_CONFIG = ConfigDict(frozen=True, str_strip_whitespace=True)


# =============================================================================
# TRANSACTIONS
# =============================================================================

class Transaction(BaseModel):
    """
    A single dated income or expense.

    The amount is a non-negative magnitude; `type` carries the sign.
    """
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    type: TransactionType
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Magnitude of the transaction"
    )
    description: str = Field(default="", max_length=200)
    date: datetime.date = Field(
        ...,
        description="Calendar date, no time component"
    )
    notes: Optional[str] = Field(default=None, max_length=1000)
    tags: frozenset[str] = Field(default_factory=frozenset)
    recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None

    @model_validator(mode='after')
    def validate_references(self) -> 'Transaction':
        """Cross-field checks that do not need other records."""
        if self.subcategory_id and not self.category_id:
            raise ValueError("Subcategory requires a category")
        if self.recurring_frequency is not None and not self.recurring:
            raise ValueError("Recurring frequency requires a recurring transaction")
        return self

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


# =============================================================================
# ACCOUNTS
# =============================================================================

class Account(BaseModel):
    """
    A holding of funds or credit.

    For credit accounts, `credit_limit`, `due_date` and `closing_date`
    describe the card; the record validator warns when the limit is missing.
    """
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    type: AccountType
    balance: Decimal = Field(
        default=Decimal("0"),
        description="Signed balance"
    )
    currency: str = Field(
        default="BRL",
        pattern="^[A-Z]{3}$",
        description="ISO 4217 currency code"
    )
    is_active: bool = True
    color: Optional[str] = None
    credit_limit: Optional[Decimal] = Field(default=None, ge=0)
    due_date: Optional[int] = Field(
        default=None,
        ge=1,
        le=31,
        description="Day of month the card bill is due"
    )
    closing_date: Optional[int] = Field(
        default=None,
        ge=1,
        le=31,
        description="Day of month the card statement closes"
    )

    @field_validator('currency', mode='before')
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @property
    def is_credit(self) -> bool:
        return self.type == AccountType.CREDIT


# =============================================================================
# CATEGORIES
# =============================================================================

class Subcategory(BaseModel):
    """Narrower classification inside a category. Has no type of its own."""
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    category_id: str = Field(..., min_length=1)


class Category(BaseModel):
    """User-defined classification with income/expense polarity."""
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    type: TransactionType
    color: str = "#888888"
    icon: Optional[str] = None
    subcategories: tuple[Subcategory, ...] = ()

    @model_validator(mode='after')
    def validate_subcategory_parent(self) -> 'Category':
        for sub in self.subcategories:
            if sub.category_id != self.id:
                raise ValueError(
                    f"Subcategory {sub.id} belongs to {sub.category_id}, not {self.id}"
                )
        return self

    def subcategory(self, subcategory_id: str) -> Optional[Subcategory]:
        """Find a subcategory by id."""
        for sub in self.subcategories:
            if sub.id == subcategory_id:
                return sub
        return None


# =============================================================================
# BUDGETS & GOALS
# =============================================================================

class Budget(BaseModel):
    """
    A perpetual spending ceiling for a category (or one of its subcategories).

    Budgets have no start date: the window is always the month or year
    containing the evaluation date.
    """
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)
    subcategory_id: Optional[str] = None
    amount: Decimal = Field(..., ge=0)
    period: BudgetPeriod = BudgetPeriod.MONTHLY


class Goal(BaseModel):
    """A savings target tracked manually against an accumulated amount."""
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., ge=0)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    deadline: Optional[datetime.date] = None
    color: str = "#888888"

    @property
    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount


Record = Union[Transaction, Account, Category, Budget, Goal]

RECORD_TYPES: dict[RecordKind, type] = {
    RecordKind.TRANSACTION: Transaction,
    RecordKind.ACCOUNT: Account,
    RecordKind.CATEGORY: Category,
    RecordKind.BUDGET: Budget,
    RecordKind.GOAL: Goal,
}


def record_kind(record: Record) -> RecordKind:
    """Return the collection a record belongs to."""
    for kind, model in RECORD_TYPES.items():
        if isinstance(record, model):
            return kind
    raise TypeError(f"Not a record: {type(record).__name__}")


class RecordSnapshot(BaseModel):
    """
    Scoped, already-authorized records for exactly one user.

    This is everything the core consumes from the record store.
    """
    model_config = ConfigDict(frozen=True)

    transactions: tuple[Transaction, ...] = ()
    accounts: tuple[Account, ...] = ()
    categories: tuple[Category, ...] = ()
    budgets: tuple[Budget, ...] = ()
    goals: tuple[Goal, ...] = ()
