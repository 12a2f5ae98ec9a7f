"""
Sample application used by the test suite.

Schemas (dataclasses), views rendering them, and a controller whose actions
declare their request bodies with TypedDicts.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Literal, NotRequired, Optional, TypedDict
from uuid import UUID

import sample_schemas
from schemadoc.typespec import Cents, Encrypted


class Request:
    """Stand-in for a web framework request object"""


# ============================================================================
# SCHEMAS
# ============================================================================


class Plan(str, Enum):
    FREE = "free"
    PRO = "pro"


@dataclass
class Organization:
    id: UUID
    name: str
    plan: Plan

    required_fields = ("name",)
    optional_fields = ("plan",)


@dataclass
class User:
    id: UUID
    email: str
    password: Encrypted
    balance: Cents
    status: Literal["active", "banned"]
    avatar: bytes
    inserted_at: datetime
    organization_id: UUID

    required_fields = ("email", "password")
    optional_fields = ("status", "avatar")
    allowed_fields = ("balance", "email")
    update_fields = ("status", "email", "avatar", "status")


@dataclass
class Invoice:
    number: str
    total: Cents
    note: Optional[str] = None
    lines: List[str] = field(default_factory=list)


@dataclass
class Team:
    id: int
    name: str


@dataclass
class Member:
    id: int
    handle: str


# ============================================================================
# VIEWS
# ============================================================================


class OrganizationView:
    attributes = ["id", "name", "plan"]

    def render(self, organization: Organization) -> dict:
        return {"id": str(organization.id), "name": organization.name, "plan": organization.plan.value}


class UserView:
    attributes = [
        "id",
        "email",
        "status",
        "inserted_at",
        ("organization", (OrganizationView, "show")),
        ("organization_id", (OrganizationView, "show", "workspace")),
    ]

    def render(self, user: User) -> dict:
        return {"id": str(user.id), "email": user.email}


class AdminUserView:
    attributes = ["id", "email", "balance"]

    def render(self, user: User) -> dict:
        return {"id": str(user.id), "email": user.email, "balance": user.balance}


class InvoiceView:
    attributes = ["number", "total", "note"]

    def render(self, invoices: List[Invoice]) -> dict:
        return {"data": [invoice.number for invoice in invoices]}


class HealthView:
    attributes = ["status"]

    def render(self, payload):
        return payload


class PayloadView:
    attributes = ["status"]

    def render(self, payload: dict) -> dict:
        return payload


class TeamView:
    def render(self, team: Team) -> dict:
        return {"name": team.name}


class MemberView:
    attributes = ["handle", ("team", (TeamView, "show"))]

    def render(self, member: Member) -> dict:
        return {"handle": member.handle}


TeamView.attributes = ["name", ("members", (MemberView, "index"))]


# ============================================================================
# CONTROLLERS
# ============================================================================


class Address(TypedDict):
    street: str
    zip_code: NotRequired[str]


class Profile(TypedDict):
    nickname: str
    address: Address


class CreateUserParams(TypedDict):
    email: str
    password: Encrypted
    role: Literal["admin", "member"]
    profile: NotRequired[Profile]


class UpdateUserParams(TypedDict, total=False):
    email: str
    status: Literal["active", "banned"]


class UserController:
    def index(self, request: Request) -> dict:
        return {}

    def show(self, request: Request, user_id: int) -> dict:
        """Fetch one user."""
        return {}

    def create(self, request: Request, params: CreateUserParams) -> dict:
        """
        Create a user.

        The email must be unique.
        """
        return {}

    def update(self, request: Request, params: UpdateUserParams) -> dict:
        return {}

    def _audit(self, params: CreateUserParams) -> None:
        pass


class OrderController:
    def create(self, request: Request, params: sample_schemas.CreateOrderParams) -> dict:
        return {}

    def update(self, request: Request, params: sample_schemas.UpdateOrderParams) -> dict:
        return {}
