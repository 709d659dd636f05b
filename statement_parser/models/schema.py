"""
Pydantic models for extracted bank statement data.
"""
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


HeaderField = Literal["Account", "IFSC", "Holder", "Branch", "Bank"]
HeaderFields = Dict[HeaderField, str]

HEADER_FIELDS: Tuple[str, ...] = ("Account", "IFSC", "Holder", "Branch", "Bank")

COLUMN_TEMPLATE: Tuple[str, ...] = (
    "Tran Date",
    "Chq No",
    "Particulars",
    "Debit",
    "Credit",
    "Balance",
)

DiagnosticKind = Literal[
    "no_transactions",
    "text_layer_failed",
    "render_failed",
    "ocr_failed",
    "cancelled",
]


class TextToken(BaseModel):
    """A positioned piece of text from a page's text layer (y grows upwards)."""
    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float


class TransactionRow(BaseModel):
    """One classified transaction. Amounts keep their source formatting."""
    model_config = ConfigDict(frozen=True)

    date: str
    reference: str = ""
    description: str
    debit: str = ""
    credit: str = ""
    balance: str = ""

    @model_validator(mode="after")
    def check_required_columns(self):
        """A row needs a description and at least one of debit/credit."""
        if not self.description:
            raise ValueError(f"Transaction on {self.date} has no description")
        if not self.debit and not self.credit:
            raise ValueError(
                f"Transaction '{self.description}' on {self.date} has neither debit nor credit"
            )
        return self

    def as_list(self) -> List[str]:
        """Cell values in column-template order."""
        return [self.date, self.reference, self.description,
                self.debit, self.credit, self.balance]


class PageDiagnostic(BaseModel):
    """Why a page contributed no rows."""
    model_config = ConfigDict(frozen=True)

    page: int
    kind: DiagnosticKind
    message: str = ""


class ExtractionOptions(BaseModel):
    """Options recognized by the extraction core."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    force_ocr: bool = Field(False, alias="forceOCR")
    merge_multiline_particulars: bool = Field(False, alias="mergeMultilineParticulars")


class ReadOnlyHeader(dict):
    """Header mapping that rejects changes after the result is built."""

    def _readonly(self, *args, **kwargs):
        raise TypeError("Extraction result header is read-only")

    __setitem__ = _readonly
    __delitem__ = _readonly
    clear = _readonly
    pop = _readonly
    popitem = _readonly
    setdefault = _readonly
    update = _readonly
    __ior__ = _readonly

    def __reduce__(self):
        return (ReadOnlyHeader, (dict(self),))


class ExtractionResult(BaseModel):
    """Complete extraction output for one document. Nothing in it can change."""
    model_config = ConfigDict(frozen=True)

    header: HeaderFields = Field(default_factory=dict, validate_default=True)
    columns: Tuple[str, ...] = COLUMN_TEMPLATE
    rows: Tuple[TransactionRow, ...] = ()
    diagnostics: Tuple[PageDiagnostic, ...] = ()

    @field_validator('header')
    @classmethod
    def freeze_header(cls, v):
        return ReadOnlyHeader(v)
