import datetime
import logging
from decimal import Decimal
from typing import Annotated, Any, ClassVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)

from nypl.hold_eligibility.util.datetime_helpers import parse_date

# Sierra uses this block code to indicate that no manual block is set.
NO_BLOCK_CODE = "-"

_log = logging.getLogger(__name__)


class BaseSierraModel(BaseModel):
    """Base class for Sierra API models."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


def invalid_as_none(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    """Treat a value that doesn't parse as if Sierra had left it out."""
    try:
        return handler(value)
    except ValidationError as e:
        _log.warning(f"Ignoring unparseable value {value!r}: {e.errors()[0]['msg']}")
        return None


# The wrap validator is last so it also catches parse_date's errors.
SierraDate = Annotated[
    datetime.date | None,
    BeforeValidator(parse_date),
    WrapValidator(invalid_as_none),
]
SierraMoney = Annotated[Decimal | None, WrapValidator(invalid_as_none)]


class SierraErrorPayload(BaseSierraModel):
    """The structured error document Sierra returns with failed requests.

    For example:
        {"code": 132, "specificCode": 2, "httpStatus": 500,
         "name": "XCirc error", "description": "XCirc error : Bib record cannot be loaded"}
    """

    code: int | None = None
    specific_code: int | None = Field(None, alias="specificCode")
    http_status: int | None = Field(None, alias="httpStatus")
    name: str | None = None
    description: str

    @classmethod
    def from_body(cls, body: Any) -> "SierraErrorPayload | None":
        """Return the structured error in a response body, or None if the
        body doesn't carry one."""
        if not isinstance(body, dict):
            return None
        description = body.get("description")
        if not isinstance(description, str) or not description.strip():
            return None
        try:
            return cls.model_validate(body)
        except ValidationError:
            # Keep the parts that matter for classifying the error.
            name = body.get("name")
            return cls(
                name=name if isinstance(name, str) else None, description=description
            )


class BlockInfo(BaseSierraModel):
    code: str | None = None

    @property
    def is_blocked(self) -> bool:
        return self.code != NO_BLOCK_CODE


class PatronRecord(BaseSierraModel):
    """The attributes of a Sierra patron record that determine hold
    eligibility. Every attribute is optional, since Sierra leaves out
    fields that have never been set on a record."""

    id: int | None = None
    expiration_date: SierraDate = Field(None, alias="expirationDate")
    block_info: BlockInfo | None = Field(None, alias="blockInfo")
    money_owed: SierraMoney = Field(None, alias="moneyOwed")
    patron_type: int | None = Field(None, alias="patronType")

    # The fields we ask Sierra to include in the patron record
    FIELDS: ClassVar[tuple[str, ...]] = (
        "expirationDate",
        "blockInfo",
        "moneyOwed",
        "patronType",
    )

    @property
    def missing_fields(self) -> list[str]:
        missing = []
        if self.expiration_date is None:
            missing.append("expirationDate")
        if self.block_info is None or self.block_info.code is None:
            missing.append("blockInfo")
        if self.money_owed is None:
            missing.append("moneyOwed")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields


class HoldsPage(BaseSierraModel):
    """The response to a request for a patron's holds. Only the count is used."""

    total: int
