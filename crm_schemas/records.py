"""Read-side record schemas used to print store records as JSON."""
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AccountRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    industry: Optional[str] = None
    description: Optional[str] = None


class ContactRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    account_id: Optional[UUID] = None
    first_name: Optional[str] = None
    last_name: str


class OpportunityRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    account_id: Optional[UUID] = None
    name: str
    stage_name: str
    close_date: date
    amount: Optional[Decimal] = None
    external_key: Optional[str] = None


class OperationResult(BaseModel):
    """What the command-line runner prints after an operation."""

    operation: str
    record_id: Optional[UUID] = None
    accounts: list[AccountRecord] = Field(default_factory=list)
    contacts: list[ContactRecord] = Field(default_factory=list)
    opportunities: list[OpportunityRecord] = Field(default_factory=list)
