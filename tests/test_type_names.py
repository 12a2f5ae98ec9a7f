"""
Unit tests for type name normalization

Tests:
- normalize_type: primitives, labels, enumerations, generics, fallbacks
- short_name / qualified_name helpers
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Literal, NotRequired, Optional, Union

import pytest

from schemadoc.typespec.nodes import ParameterizedPrimitive, Primitive, RemoteType
from schemadoc.typespec.type_names import (
    Cents,
    Encrypted,
    normalize_type,
    qualified_name,
    short_name,
    unique,
)

from sample_app import Plan, UserView


class Unhashable:
    __hash__ = None


# ============================================================================
# normalize_type
# ============================================================================


class TestNormalizeType:
    """Test display names of raw field types"""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (str, "string"),
            (int, "integer"),
            (bool, "boolean"),
            (bytes, "string"),
            (uuid.UUID, "string"),
            (datetime, "UTC Datetime with milliseconds"),
            (Encrypted, "encrypted string"),
            (Cents, "integer, in cents"),
            (dict, "map"),
            (Any, "any"),
        ],
    )
    def test_primitive_labels(self, raw, expected):
        """Test known primitives and domain wrappers"""
        assert normalize_type(raw) == expected

    def test_parameterized_primitive(self):
        """Test value sets are quoted and joined"""
        node = ParameterizedPrimitive("status", ("active", "banned"))

        assert normalize_type(node) == '"active" | "banned"'

    def test_literal_and_enum(self):
        """Test Literal and Enum render as value sets"""
        assert normalize_type(Literal["admin", "member"]) == '"admin" | "member"'
        assert normalize_type(Plan) == '"free" | "pro"'

    def test_contract_nodes(self):
        """Test primitive and remote nodes"""
        assert normalize_type(Primitive("binary")) == "string"
        assert normalize_type(RemoteType("app.money", "Amount")) == "app.money.Amount"

    def test_generics(self):
        """Test optional, union and list generics"""
        assert normalize_type(Optional[str]) == "string | null"
        assert normalize_type(Union[int, str, int]) == "integer | string"
        assert normalize_type(List[uuid.UUID]) == "list of string"
        assert normalize_type(Dict[str, int]) == "map"
        assert normalize_type(NotRequired[Cents]) == "integer, in cents"

    def test_runtime_labels(self):
        """Test labels given at call time win over the defaults"""
        assert normalize_type(bytes, {"binary": "base64 string"}) == "base64 string"

    def test_unknown_types_fall_back_to_name(self):
        """Test unrecognized types keep their own name"""
        assert normalize_type("geometry") == "geometry"
        assert normalize_type(UserView) == "UserView"

    def test_total(self):
        """Test odd inputs still give a non-empty string"""
        assert normalize_type(None) == "null"
        assert normalize_type("") == "''"
        assert normalize_type(Unhashable()) != ""


# ============================================================================
# NAME HELPERS
# ============================================================================


class TestNames:
    """Test short and qualified names"""

    def test_short_name(self):
        """Test short names of classes, strings and dispatch tables"""
        assert short_name(UserView) == "UserView"
        assert short_name("app.views.UserView") == "UserView"
        assert short_name({"_": UserView}) == "UserView"
        assert short_name(None) == ""

    def test_qualified_name(self):
        """Test dotted names"""
        assert qualified_name(UserView) == "sample_app.UserView"
        assert qualified_name(uuid) == "uuid"
        assert qualified_name("app.Thing") == "app.Thing"

    def test_unique_keeps_order(self):
        """Test duplicates are dropped, first occurrence kept"""
        assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
